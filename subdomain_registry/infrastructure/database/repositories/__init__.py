from .subdomain_repository import SQLAlchemySubdomainRepository

__all__ = [
    "SQLAlchemySubdomainRepository",
]
