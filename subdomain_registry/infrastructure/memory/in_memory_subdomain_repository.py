"""Volatile SubdomainRepository; records live in a dict for the life of the process."""

import itertools
from dataclasses import replace
from datetime import datetime, timezone

from subdomain_registry.application.interfaces.subdomain_repository import (
    SubdomainRepository,
    check_mutable,
)
from subdomain_registry.domain.entities import SubdomainRecord, SubdomainStatus
from subdomain_registry.domain.exceptions import DuplicateEntityError


class InMemorySubdomainRepository(SubdomainRepository):
    """Implements the SubdomainRepository port with an in-process dict.

    Each check-then-write runs without an ``await`` in between, so it is atomic
    with respect to other coroutines on the same event loop. Records are copied
    on the way in and out; callers never hold a reference to stored state.
    """

    def __init__(self):
        self._records: dict[int, SubdomainRecord] = {}
        self._ids = itertools.count(1)

    @property
    def backend_name(self) -> str:
        return "memory"

    async def find_by_owner(self, owner_identity: str) -> list[SubdomainRecord]:
        return [
            replace(record)
            for record in self._records.values()
            if record.owner_identity == owner_identity
        ]

    async def find_by_name(self, name: str) -> SubdomainRecord | None:
        for record in self._records.values():
            if record.name == name:
                return replace(record)
        return None

    async def count_by_owner(self, owner_identity: str) -> int:
        return sum(
            1 for record in self._records.values() if record.owner_identity == owner_identity
        )

    async def create(self, record: SubdomainRecord) -> SubdomainRecord:
        if any(existing.name == record.name for existing in self._records.values()):
            raise DuplicateEntityError("Subdomain", "name", record.name)

        now = datetime.now(timezone.utc)
        stored = replace(
            record,
            id=next(self._ids),
            status=SubdomainStatus.ACTIVE,
            provider_record_id=None,
            created_at=now,
            updated_at=now,
        )
        self._records[stored.id] = stored
        return replace(stored)

    async def update(self, record_id: int, **changes) -> SubdomainRecord | None:
        check_mutable(changes)
        existing = self._records.get(record_id)
        if existing is None:
            return None

        updated = replace(existing)
        updated.update(**changes)
        self._records[record_id] = updated
        return replace(updated)

    async def delete(self, record_id: int) -> bool:
        return self._records.pop(record_id, None) is not None
