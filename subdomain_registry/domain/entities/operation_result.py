"""Tagged outcome of a subdomain lifecycle operation, independent of any transport."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Machine-readable failure kinds surfaced to callers."""

    INVALID_INPUT = "INVALID_INPUT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    FORBIDDEN_SUBDOMAIN = "FORBIDDEN_SUBDOMAIN"
    SUBDOMAIN_EXISTS = "SUBDOMAIN_EXISTS"
    SUBDOMAIN_NOT_FOUND = "SUBDOMAIN_NOT_FOUND"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    MISSING_CONFIG = "MISSING_CONFIG"
    MISSING_DOMAIN_CONFIG = "MISSING_DOMAIN_CONFIG"
    MISSING_TARGET = "MISSING_TARGET"
    INVALID_ID = "INVALID_ID"
    DELETE_FAILED = "DELETE_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AvailabilityReason(str, Enum):
    """Why a name was reported as unavailable."""

    BLOCKED = "BLOCKED"
    INVALID_FORMAT = "INVALID_FORMAT"
    ALREADY_EXISTS = "ALREADY_EXISTS"


@dataclass
class OperationResult:
    """Success flag, human-readable message and, on failure, an error kind.

    ``data`` holds a SubdomainRecord or a list of them; ``count``, ``available``
    and ``reason`` are only set by the operations that produce them.
    """

    success: bool
    message: str
    error: ErrorKind | None = None
    data: Any = None
    count: int | None = None
    available: bool | None = None
    reason: AvailabilityReason | None = None

    @classmethod
    def ok(cls, message: str, **kwargs: Any) -> "OperationResult":
        return cls(success=True, message=message, **kwargs)

    @classmethod
    def failure(cls, error: ErrorKind, message: str) -> "OperationResult":
        return cls(success=False, message=message, error=error)
