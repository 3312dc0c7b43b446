"""Contract tests run against both SubdomainRepository backends."""

from pathlib import Path

import pytest
import pytest_asyncio

from subdomain_registry.application.interfaces import SubdomainRepository
from subdomain_registry.domain.entities import RecordType, SubdomainRecord, SubdomainStatus
from subdomain_registry.domain.exceptions import DuplicateEntityError
from subdomain_registry.infrastructure.database import (
    create_engine_from_url,
    create_session_factory,
    init_models,
)
from subdomain_registry.infrastructure.database.repositories import SQLAlchemySubdomainRepository
from subdomain_registry.infrastructure.memory import InMemorySubdomainRepository


def _record(name: str, owner: str = "10.0.0.1", **overrides) -> SubdomainRecord:
    fields = {
        "name": name,
        "record_type": RecordType.A,
        "target": "192.168.1.100",
        "owner_identity": owner,
    }
    fields.update(overrides)
    return SubdomainRecord(**fields)


@pytest_asyncio.fixture(params=["memory", "sql"])
async def repository(request, tmp_path: Path):
    if request.param == "memory":
        yield InMemorySubdomainRepository()
        return

    engine = create_engine_from_url(f"sqlite:///{tmp_path / 'subdomains.db'}")
    await init_models(engine)
    yield SQLAlchemySubdomainRepository(create_session_factory(engine))
    await engine.dispose()


@pytest.mark.asyncio
async def test_create_assigns_id_and_forces_initial_state(repository: SubdomainRepository):
    created = await repository.create(
        _record("blog", status=SubdomainStatus.ERROR, provider_record_id="stale")
    )

    assert created.id is not None
    assert created.status is SubdomainStatus.ACTIVE
    assert created.provider_record_id is None
    assert created.created_at.tzinfo is not None
    assert created.updated_at == created.created_at


@pytest.mark.asyncio
async def test_ids_increase_and_are_not_reused(repository: SubdomainRepository):
    first = await repository.create(_record("one"))
    second = await repository.create(_record("two"))
    assert second.id > first.id

    assert await repository.delete(second.id)
    third = await repository.create(_record("three"))
    assert third.id > second.id


@pytest.mark.asyncio
async def test_create_rejects_duplicate_name_across_owners(repository: SubdomainRepository):
    await repository.create(_record("blog", owner="10.0.0.1"))

    with pytest.raises(DuplicateEntityError):
        await repository.create(_record("blog", owner="10.0.0.2"))


@pytest.mark.asyncio
async def test_find_by_owner_and_count_are_owner_scoped(repository: SubdomainRepository):
    await repository.create(_record("a1", owner="10.0.0.1"))
    await repository.create(_record("b1", owner="10.0.0.2"))
    await repository.create(_record("a2", owner="10.0.0.1"))

    owned = await repository.find_by_owner("10.0.0.1")
    assert [r.name for r in owned] == ["a1", "a2"]
    assert await repository.count_by_owner("10.0.0.1") == 2
    assert await repository.count_by_owner("10.0.0.2") == 1
    assert await repository.count_by_owner("10.9.9.9") == 0
    assert await repository.find_by_owner("10.9.9.9") == []


@pytest.mark.asyncio
async def test_find_by_name(repository: SubdomainRepository):
    created = await repository.create(_record("blog"))

    found = await repository.find_by_name("blog")
    assert found is not None
    assert found.id == created.id
    assert await repository.find_by_name("missing") is None


@pytest.mark.asyncio
async def test_update_merges_mutable_fields(repository: SubdomainRepository):
    created = await repository.create(_record("blog"))

    updated = await repository.update(
        created.id,
        target="10.0.0.9",
        status=SubdomainStatus.PENDING,
        provider_record_id="rec_9",
    )

    assert updated is not None
    assert updated.target == "10.0.0.9"
    assert updated.status is SubdomainStatus.PENDING
    assert updated.provider_record_id == "rec_9"
    assert updated.name == "blog"
    assert updated.updated_at >= created.updated_at

    cleared = await repository.update(created.id, provider_record_id=None)
    assert cleared.provider_record_id is None
    assert cleared.target == "10.0.0.9"


@pytest.mark.asyncio
async def test_update_unknown_id_returns_none(repository: SubdomainRepository):
    assert await repository.update(999, target="10.0.0.9") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["name", "id", "record_type", "owner_identity", "created_at"])
async def test_update_refuses_immutable_fields(repository: SubdomainRepository, field: str):
    created = await repository.create(_record("blog"))

    with pytest.raises(ValueError):
        await repository.update(created.id, **{field: "changed"})

    unchanged = await repository.find_by_name("blog")
    assert unchanged is not None


@pytest.mark.asyncio
async def test_delete_is_safe_to_repeat(repository: SubdomainRepository):
    created = await repository.create(_record("blog"))

    assert await repository.delete(created.id) is True
    assert await repository.delete(created.id) is False
    assert await repository.find_by_name("blog") is None


@pytest.mark.asyncio
async def test_returned_records_do_not_alias_stored_state():
    repository = InMemorySubdomainRepository()
    created = await repository.create(_record("blog"))

    created.target = "6.6.6.6"
    fetched = await repository.find_by_name("blog")
    fetched.target = "7.7.7.7"

    stored = await repository.find_by_name("blog")
    assert stored.target == "192.168.1.100"


def test_backend_names():
    assert InMemorySubdomainRepository().backend_name == "memory"
    assert SQLAlchemySubdomainRepository(session_factory=None).backend_name == "sql"
