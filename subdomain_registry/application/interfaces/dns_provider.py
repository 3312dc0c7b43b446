"""Abstract DNS provider interface (port).

Implementations are the only writers of remote DNS state. They make exactly
one attempt per call and report failure through their return value instead of
raising, so a provider outage degrades the service rather than breaking it.
"""

from abc import ABC, abstractmethod


class DNSProvider(ABC):
    """Port for an authoritative DNS provider."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Short identifier for logging (e.g. 'cloudflare')."""
        ...

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Whether credentials are present."""
        ...

    @abstractmethod
    async def create_record(
        self, fqdn: str, record_type: str, target: str
    ) -> str | None:
        """Create a DNS record. Returns the provider's record handle, or None on failure."""
        ...

    @abstractmethod
    async def delete_record(self, provider_record_id: str | None) -> bool:
        """Delete a DNS record. Returns True only on confirmed acknowledgment."""
        ...
