from .subdomain import SubdomainModel

__all__ = [
    "SubdomainModel",
]
