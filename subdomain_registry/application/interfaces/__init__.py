from .subdomain_repository import SubdomainRepository
from .dns_provider import DNSProvider

__all__ = [
    "SubdomainRepository",
    "DNSProvider",
]
