from .subdomain import (
    OperationResponse,
    SubdomainCreate,
    SubdomainResponse,
    first_error_message,
)

__all__ = [
    "OperationResponse",
    "SubdomainCreate",
    "SubdomainResponse",
    "first_error_message",
]
