from .subdomain_service import SubdomainService

__all__ = [
    "SubdomainService",
]
