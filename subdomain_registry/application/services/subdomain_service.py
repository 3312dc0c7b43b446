"""Application service (use case) for the subdomain lifecycle.

Orchestrates name validation, quota and uniqueness checks, the record store
and the DNS provider. The store and the provider are called one after the
other, never inside a shared transaction, so the two can diverge:

* create keeps the local record even when the provider call fails
  (status ``pending``);
* delete removes the local record even when the remote delete fails, which
  can orphan a provider record;
* update replaces the remote record, and a failed re-create leaves the name
  without a remote record (status ``pending``).

Every public operation returns an OperationResult; business-rule failures and
unexpected errors are converted at the operation boundary.
"""

import logging
from collections.abc import Awaitable
from typing import Any

from pydantic import ValidationError

from subdomain_registry.application.interfaces import DNSProvider, SubdomainRepository
from subdomain_registry.application.schemas.subdomain import SubdomainCreate, first_error_message
from subdomain_registry.domain.entities import (
    AvailabilityReason,
    ErrorKind,
    OperationResult,
    RecordType,
    SubdomainRecord,
    SubdomainStatus,
)
from subdomain_registry.domain.exceptions import DuplicateEntityError, SubdomainOperationError
from subdomain_registry.domain.name_validator import (
    NameRejection,
    is_blocked,
    normalize_name,
    validate_record_target,
    validate_subdomain_name,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_SUBDOMAINS_PER_OWNER = 5


class SubdomainService:
    """Subdomain lifecycle use cases over the repository and DNS provider ports (DI)."""

    def __init__(
        self,
        repository: SubdomainRepository,
        dns_provider: DNSProvider,
        *,
        parent_domain: str | None,
        max_subdomains_per_owner: int = DEFAULT_MAX_SUBDOMAINS_PER_OWNER,
    ):
        self._repository = repository
        self._dns_provider = dns_provider
        self._parent_domain = (parent_domain or "").strip().strip(".") or None
        self._max_per_owner = max_subdomains_per_owner

    @property
    def storage_backend(self) -> str:
        return self._repository.backend_name

    def qualify(self, name: str) -> str | None:
        """Fully-qualified name under the parent domain, or None if unconfigured."""
        if self._parent_domain is None:
            return None
        return f"{name}.{self._parent_domain}"

    # ── Public operations ────────────────────────────────────────────

    async def list_subdomains(self, owner_identity: str) -> OperationResult:
        return await self._guarded(
            "Failed to fetch subdomains", self._list(owner_identity)
        )

    async def check_availability(self, name: Any) -> OperationResult:
        return await self._guarded(
            "Failed to check subdomain availability", self._check_availability(name)
        )

    async def create_subdomain(
        self,
        owner_identity: str,
        name: Any = None,
        record_type: Any = None,
        target: Any = None,
    ) -> OperationResult:
        payload = {
            key: value
            for key, value in (("name", name), ("type", record_type), ("target", target))
            if value is not None
        }
        return await self._guarded(
            "Failed to create subdomain", self._create(owner_identity, payload)
        )

    async def update_subdomain(
        self, owner_identity: str, record_id: Any, target: Any
    ) -> OperationResult:
        return await self._guarded(
            "Failed to update subdomain", self._update(owner_identity, record_id, target)
        )

    async def delete_subdomain(self, owner_identity: str, record_id: Any) -> OperationResult:
        return await self._guarded(
            "Failed to delete subdomain", self._delete(owner_identity, record_id)
        )

    # ── Operation bodies ─────────────────────────────────────────────

    async def _list(self, owner_identity: str) -> OperationResult:
        records = await self._repository.find_by_owner(owner_identity)
        return OperationResult.ok(
            f"Found {len(records)} subdomain(s)", data=records, count=len(records)
        )

    async def _check_availability(self, name: Any) -> OperationResult:
        if not isinstance(name, str) or not name.strip():
            raise SubdomainOperationError(ErrorKind.INVALID_INPUT, "Subdomain name is required")

        check = validate_subdomain_name(name)
        if check.rejection is NameRejection.BLOCKED:
            return OperationResult.ok(
                "This subdomain name is reserved",
                available=False,
                reason=AvailabilityReason.BLOCKED,
            )
        if check.rejection is NameRejection.INVALID_FORMAT:
            return OperationResult.ok(
                "Subdomain name may only contain lowercase letters, digits and hyphens",
                available=False,
                reason=AvailabilityReason.INVALID_FORMAT,
            )

        if await self._repository.find_by_name(check.name) is not None:
            return OperationResult.ok(
                "Subdomain already exists",
                available=False,
                reason=AvailabilityReason.ALREADY_EXISTS,
            )
        return OperationResult.ok("Subdomain is available", available=True)

    async def _create(self, owner_identity: str, payload: dict[str, Any]) -> OperationResult:
        # Quota first: it takes precedence over format errors.
        current = await self._repository.count_by_owner(owner_identity)
        if current >= self._max_per_owner:
            raise SubdomainOperationError(
                ErrorKind.RATE_LIMIT_EXCEEDED,
                f"Limit of {self._max_per_owner} subdomains per client reached",
            )

        try:
            data = SubdomainCreate.model_validate(payload)
        except ValidationError as exc:
            raise SubdomainOperationError(ErrorKind.VALIDATION_ERROR, first_error_message(exc))

        name = normalize_name(data.name)
        if is_blocked(name):
            raise SubdomainOperationError(
                ErrorKind.FORBIDDEN_SUBDOMAIN, "This subdomain name is reserved"
            )

        if await self._repository.find_by_name(name) is not None:
            raise SubdomainOperationError(ErrorKind.SUBDOMAIN_EXISTS, "Subdomain already exists")

        fqdn = self._require_fqdn(name)

        provider_record_id = await self._dns_provider.create_record(
            fqdn, data.type.value, data.target
        )

        try:
            record = await self._repository.create(
                SubdomainRecord(
                    name=name,
                    record_type=data.type,
                    target=data.target,
                    owner_identity=owner_identity,
                )
            )
        except DuplicateEntityError:
            # Lost a race for the name after the provider record was made.
            if provider_record_id:
                await self._discard_remote(provider_record_id, fqdn)
            raise SubdomainOperationError(ErrorKind.SUBDOMAIN_EXISTS, "Subdomain already exists")
        except Exception:
            # Nothing local references the new provider record.
            if provider_record_id:
                await self._discard_remote(provider_record_id, fqdn)
            raise

        if provider_record_id:
            stored = await self._repository.update(
                record.id,
                provider_record_id=provider_record_id,
                status=SubdomainStatus.ACTIVE,
            )
        else:
            logger.warning(
                "Subdomain %s stored without a DNS record (status pending)", fqdn
            )
            stored = await self._repository.update(record.id, status=SubdomainStatus.PENDING)

        if stored is None:
            # Deleted concurrently before its outcome could be recorded.
            logger.warning("Subdomain %s vanished before its DNS outcome was stored", fqdn)
            if provider_record_id:
                await self._discard_remote(provider_record_id, fqdn)
            raise SubdomainOperationError(ErrorKind.INTERNAL_ERROR, "Failed to create subdomain")

        logger.info(
            "Created subdomain %s (%s -> %s) for owner %s",
            fqdn, data.type.value, data.target, owner_identity,
        )
        return OperationResult.ok("Subdomain created", data=stored)

    async def _update(
        self, owner_identity: str, raw_id: Any, target: Any
    ) -> OperationResult:
        record = await self._find_owned(owner_identity, self._parse_id(raw_id))

        new_target = target.strip() if isinstance(target, str) else ""
        if not new_target:
            raise SubdomainOperationError(ErrorKind.MISSING_TARGET, "Target is required")
        problem = validate_record_target(record.record_type, new_target)
        if problem:
            raise SubdomainOperationError(ErrorKind.VALIDATION_ERROR, problem)

        if record.provider_record_id:
            fqdn = self._require_fqdn(record.name)
            new_provider_id = await self._replace_remote(record, fqdn, new_target)
            status = SubdomainStatus.ACTIVE if new_provider_id else SubdomainStatus.PENDING
            updated = await self._repository.update(
                record.id,
                target=new_target,
                provider_record_id=new_provider_id,
                status=status,
            )
        else:
            updated = await self._repository.update(record.id, target=new_target)

        if updated is None:
            raise SubdomainOperationError(ErrorKind.SUBDOMAIN_NOT_FOUND, "Subdomain not found")

        logger.info("Updated subdomain %s target -> %s", record.name, new_target)
        return OperationResult.ok("Subdomain updated", data=updated)

    async def _delete(self, owner_identity: str, raw_id: Any) -> OperationResult:
        record = await self._find_owned(owner_identity, self._parse_id(raw_id))

        if record.provider_record_id:
            await self._discard_remote(
                record.provider_record_id, self.qualify(record.name) or record.name
            )

        if not await self._repository.delete(record.id):
            raise SubdomainOperationError(ErrorKind.DELETE_FAILED, "Failed to delete subdomain")

        logger.info("Deleted subdomain %s for owner %s", record.name, owner_identity)
        return OperationResult.ok("Subdomain deleted")

    # ── Helpers ──────────────────────────────────────────────────────

    async def _guarded(
        self, failure_message: str, operation: Awaitable[OperationResult]
    ) -> OperationResult:
        try:
            return await operation
        except SubdomainOperationError as exc:
            logger.info("Rejected: %s", exc)
            return OperationResult.failure(exc.kind, exc.message)
        except Exception:
            logger.exception(failure_message)
            return OperationResult.failure(ErrorKind.INTERNAL_ERROR, failure_message)

    @staticmethod
    def _parse_id(raw_id: Any) -> int:
        """Strict integer id; surrounding whitespace is tolerated, trailing characters are not."""
        if isinstance(raw_id, bool):
            raise SubdomainOperationError(ErrorKind.INVALID_ID, "Invalid subdomain id")
        try:
            return int(raw_id)
        except (TypeError, ValueError):
            raise SubdomainOperationError(ErrorKind.INVALID_ID, "Invalid subdomain id")

    async def _find_owned(self, owner_identity: str, record_id: int) -> SubdomainRecord:
        """Owner-scoped lookup; another owner's id looks exactly like a missing one."""
        for record in await self._repository.find_by_owner(owner_identity):
            if record.id == record_id:
                return record
        raise SubdomainOperationError(ErrorKind.SUBDOMAIN_NOT_FOUND, "Subdomain not found")

    def _require_fqdn(self, name: str) -> str:
        fqdn = self.qualify(name)
        if fqdn is None:
            logger.error("Parent domain (CF_DOMAIN) is not configured")
            raise SubdomainOperationError(
                ErrorKind.MISSING_CONFIG, "Domain configuration not found"
            )
        return fqdn

    async def _replace_remote(
        self, record: SubdomainRecord, fqdn: str, new_target: str
    ) -> str | None:
        """Swap the provider record for one pointing at ``new_target``.

        Address records are created before the old one is deleted so the name
        keeps resolving; a CNAME cannot coexist with another CNAME, so it is
        deleted first. The old record is removed in both orders even when the
        new one could not be created.
        """
        old_id = record.provider_record_id
        record_type = record.record_type

        if record_type is RecordType.CNAME:
            await self._discard_remote(old_id, fqdn)
            new_id = await self._dns_provider.create_record(fqdn, record_type.value, new_target)
        else:
            new_id = await self._dns_provider.create_record(fqdn, record_type.value, new_target)
            await self._discard_remote(old_id, fqdn)

        if new_id is None:
            logger.warning(
                "DNS record for %s could not be re-created; %s left without a remote record",
                fqdn, record.name,
            )
        return new_id

    async def _discard_remote(self, provider_record_id: str | None, fqdn: str) -> None:
        """Best-effort remote delete; a failure is logged, never raised."""
        if not await self._dns_provider.delete_record(provider_record_id):
            logger.warning(
                "Could not delete DNS record %s for %s; provider record may be orphaned",
                provider_record_id, fqdn,
            )
