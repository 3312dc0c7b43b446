"""Abstract repository interface (port) for SubdomainRecord persistence."""

from abc import ABC, abstractmethod

from subdomain_registry.domain.entities import SubdomainRecord

# Fields the lifecycle service may change after creation.
MUTABLE_FIELDS = frozenset({"target", "status", "provider_record_id"})


class SubdomainRepository(ABC):
    """Port for subdomain persistence, implemented in the infrastructure layer.

    Every backend must behave identically: the lifecycle service never
    checks which one it was given.
    """

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Short backend label used in health reporting."""
        ...

    @abstractmethod
    async def find_by_owner(self, owner_identity: str) -> list[SubdomainRecord]:
        """Retrieve all records of one owner, in insertion order."""
        ...

    @abstractmethod
    async def find_by_name(self, name: str) -> SubdomainRecord | None:
        """Retrieve a record by its normalized name, across all owners."""
        ...

    @abstractmethod
    async def count_by_owner(self, owner_identity: str) -> int:
        """Count the records of one owner."""
        ...

    @abstractmethod
    async def create(self, record: SubdomainRecord) -> SubdomainRecord:
        """Persist a new record with a fresh id, status active and no provider id.

        Raises DuplicateEntityError if the name is already taken.
        """
        ...

    @abstractmethod
    async def update(self, record_id: int, **changes) -> SubdomainRecord | None:
        """Merge ``changes`` into a record. Returns None if the id is absent.

        Only MUTABLE_FIELDS may be changed; anything else raises ValueError.
        """
        ...

    @abstractmethod
    async def delete(self, record_id: int) -> bool:
        """Delete a record. Returns True if deleted, False if not found."""
        ...


def check_mutable(changes: dict) -> None:
    """Reject attempts to change immutable fields through ``update``."""
    forbidden = set(changes) - MUTABLE_FIELDS
    if forbidden:
        raise ValueError(f"Cannot update immutable fields: {', '.join(sorted(forbidden))}")
