"""Domain entity: a self-registered subdomain and its DNS record state."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

# Distinguishes "leave provider_record_id alone" from clearing it to None.
_UNSET: Any = object()


class RecordType(str, Enum):
    """DNS record types a subdomain may be registered with."""

    A = "A"
    CNAME = "CNAME"
    AAAA = "AAAA"


class SubdomainStatus(str, Enum):
    """Lifecycle states of a subdomain record.

    ``active`` means the DNS provider confirmed the record; ``pending`` means
    the record is only known locally because the provider call failed.
    """

    ACTIVE = "active"
    PENDING = "pending"
    INACTIVE = "inactive"
    ERROR = "error"


@dataclass
class SubdomainRecord:
    """A subdomain registered by one owner (identified by network address)."""

    name: str
    record_type: RecordType
    target: str
    owner_identity: str
    id: int | None = None
    status: SubdomainStatus = SubdomainStatus.ACTIVE
    provider_record_id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update(
        self,
        target: str | None = None,
        status: SubdomainStatus | None = None,
        provider_record_id: str | None = _UNSET,
    ) -> None:
        """Update mutable fields and refresh the updated_at timestamp."""
        if target is not None:
            self.target = target
        if status is not None:
            self.status = SubdomainStatus(status)
        if provider_record_id is not _UNSET:
            self.provider_record_id = provider_record_id
        self.updated_at = datetime.now(timezone.utc)
