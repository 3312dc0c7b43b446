"""Pydantic DTOs (Data Transfer Objects) for the subdomain feature."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator
from pydantic_core import PydanticCustomError

from subdomain_registry.domain.entities import RecordType, SubdomainStatus
from subdomain_registry.domain.name_validator import (
    MAX_LABEL_LENGTH,
    is_valid_format,
    validate_record_target,
)

# Error types whose message already names the offending field.
_SELF_DESCRIBING_ERRORS = frozenset({"subdomain_name", "record_target", "target_required"})


class SubdomainCreate(BaseModel):
    """Schema for registering a new subdomain."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str
    type: RecordType
    target: str

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("subdomain_name", "Name is required")
        if len(value) > MAX_LABEL_LENGTH:
            raise PydanticCustomError(
                "subdomain_name",
                "Name must be at most {max_length} characters",
                {"max_length": MAX_LABEL_LENGTH},
            )
        if not is_valid_format(value.lower()):
            raise PydanticCustomError(
                "subdomain_name",
                "Name may only contain letters, digits and hyphens "
                "and cannot start or end with a hyphen",
            )
        return value

    @field_validator("target")
    @classmethod
    def _check_target_present(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("target_required", "Target is required")
        return value

    @model_validator(mode="after")
    def _check_target_matches_type(self) -> "SubdomainCreate":
        problem = validate_record_target(self.type, self.target)
        if problem:
            raise PydanticCustomError("record_target", problem)
        return self


class SubdomainResponse(BaseModel):
    """External view of a subdomain record. The owner identity is never exposed."""

    id: int
    name: str
    fqdn: str | None = None
    type: RecordType
    target: str
    status: SubdomainStatus
    provider_record_id: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record: Any, fqdn: str | None = None) -> "SubdomainResponse":
        return cls(
            id=record.id,
            name=record.name,
            fqdn=fqdn,
            type=record.record_type,
            target=record.target,
            status=record.status,
            provider_record_id=record.provider_record_id,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class OperationResponse(BaseModel):
    """Envelope returned by every subdomain endpoint."""

    success: bool
    message: str
    error: str | None = None
    data: SubdomainResponse | list[SubdomainResponse] | None = None
    count: int | None = None
    available: bool | None = None
    reason: str | None = None


def first_error_message(exc: ValidationError) -> str:
    """Human-readable message for the first failing validation rule."""
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"])
    if error["type"] == "missing":
        return f"{field.capitalize()} is required"
    if error["type"] in _SELF_DESCRIBING_ERRORS or not field:
        return error["msg"]
    return f"{field.capitalize()}: {error['msg']}"
