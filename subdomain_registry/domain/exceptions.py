"""Domain-specific exceptions (framework-independent)."""

from subdomain_registry.domain.entities.operation_result import ErrorKind


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class SubdomainOperationError(Exception):
    """Raised inside the lifecycle service for an expected business-rule failure.

    Converted to a failed OperationResult at the operation boundary; the
    message is shown to end users and must not carry internal detail.
    """

    def __init__(self, kind: ErrorKind, message: str):
        self.kind = kind
        self.message = message
        super().__init__(f"{kind.value}: {message}")


class DNSProviderError(Exception):
    """Raised when the DNS provider rejects a request.

    Provider-agnostic: ``errors`` carries the provider's error payload.
    """

    def __init__(self, provider: str, status_code: int, errors: object):
        self.provider = provider
        self.status_code = status_code
        self.errors = errors
        super().__init__(f"[{provider}] {status_code}: {errors}")
