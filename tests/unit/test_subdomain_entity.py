"""Unit tests for the SubdomainRecord entity."""

from subdomain_registry.domain.entities import RecordType, SubdomainRecord, SubdomainStatus


def _record() -> SubdomainRecord:
    return SubdomainRecord(
        name="blog",
        record_type=RecordType.A,
        target="1.2.3.4",
        owner_identity="10.0.0.1",
        provider_record_id="rec_1",
    )


def test_update_without_provider_id_keeps_it():
    record = _record()
    before = record.updated_at

    record.update(target="5.6.7.8", status=SubdomainStatus.PENDING)

    assert record.target == "5.6.7.8"
    assert record.status is SubdomainStatus.PENDING
    assert record.provider_record_id == "rec_1"
    assert record.updated_at >= before


def test_update_can_clear_provider_id():
    record = _record()

    record.update(provider_record_id=None)

    assert record.provider_record_id is None
    assert record.target == "1.2.3.4"
