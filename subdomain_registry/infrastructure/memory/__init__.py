from .in_memory_subdomain_repository import InMemorySubdomainRepository

__all__ = ["InMemorySubdomainRepository"]
