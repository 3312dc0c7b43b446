"""Subdomain lifecycle endpoints.

Request bodies are taken as raw JSON objects and handed to the service, which
owns validation; the routes only derive the owner identity, map error kinds to
status codes and serialise the envelope.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from subdomain_registry.application.schemas.subdomain import (
    OperationResponse,
    SubdomainResponse,
)
from subdomain_registry.application.services import SubdomainService
from subdomain_registry.domain.entities import ErrorKind, OperationResult
from subdomain_registry.infrastructure.dependencies import (
    get_owner_identity,
    get_subdomain_service,
)

router = APIRouter(tags=["Subdomains"])

_STATUS_BY_ERROR: dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorKind.MISSING_TARGET: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_ID: status.HTTP_400_BAD_REQUEST,
    ErrorKind.FORBIDDEN_SUBDOMAIN: status.HTTP_403_FORBIDDEN,
    ErrorKind.SUBDOMAIN_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.SUBDOMAIN_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.RATE_LIMIT_EXCEEDED: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorKind.MISSING_CONFIG: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.MISSING_DOMAIN_CONFIG: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.DELETE_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _serialise(record: Any, service: SubdomainService) -> SubdomainResponse:
    return SubdomainResponse.from_record(record, fqdn=service.qualify(record.name))


def _respond(
    result: OperationResult,
    service: SubdomainService,
    success_status: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Render an OperationResult as the JSON envelope with a matching status code."""
    data = result.data
    if isinstance(data, list):
        data = [_serialise(record, service) for record in data]
    elif data is not None:
        data = _serialise(data, service)

    envelope = OperationResponse(
        success=result.success,
        message=result.message,
        error=result.error.value if result.error else None,
        data=data,
        count=result.count,
        available=result.available,
        reason=result.reason.value if result.reason else None,
    )
    body = {
        key: value
        for key, value in envelope.model_dump(mode="json").items()
        if value is not None
    }

    if result.success:
        status_code = success_status
    else:
        status_code = _STATUS_BY_ERROR.get(
            result.error, status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    return JSONResponse(status_code=status_code, content=body)


@router.get("/subdomains", response_model=OperationResponse)
async def list_subdomains(
    owner: str = Depends(get_owner_identity),
    service: SubdomainService = Depends(get_subdomain_service),
) -> JSONResponse:
    """List the subdomains registered by the calling client."""
    result = await service.list_subdomains(owner)
    return _respond(result, service)


@router.post("/check-availability", response_model=OperationResponse)
async def check_availability(
    payload: dict[str, Any] = Body(default={}),
    service: SubdomainService = Depends(get_subdomain_service),
) -> JSONResponse:
    """Report whether a name could be registered right now (advisory only)."""
    result = await service.check_availability(payload.get("name"))
    return _respond(result, service)


@router.post(
    "/subdomains",
    response_model=OperationResponse,
    status_code=status.HTTP_201_CREATED,
)
@router.post(
    "/create",
    response_model=OperationResponse,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def create_subdomain(
    payload: dict[str, Any] = Body(default={}),
    owner: str = Depends(get_owner_identity),
    service: SubdomainService = Depends(get_subdomain_service),
) -> JSONResponse:
    """Register a new subdomain and its DNS record."""
    result = await service.create_subdomain(
        owner,
        name=payload.get("name"),
        record_type=payload.get("type"),
        target=payload.get("target"),
    )
    return _respond(result, service, success_status=status.HTTP_201_CREATED)


@router.put("/subdomains/{record_id}", response_model=OperationResponse)
async def update_subdomain(
    record_id: str,
    payload: dict[str, Any] = Body(default={}),
    owner: str = Depends(get_owner_identity),
    service: SubdomainService = Depends(get_subdomain_service),
) -> JSONResponse:
    """Point an existing subdomain at a new target."""
    result = await service.update_subdomain(owner, record_id, payload.get("target"))
    return _respond(result, service)


@router.delete("/subdomains/{record_id}", response_model=OperationResponse)
async def delete_subdomain(
    record_id: str,
    owner: str = Depends(get_owner_identity),
    service: SubdomainService = Depends(get_subdomain_service),
) -> JSONResponse:
    """Remove a subdomain and, best effort, its DNS record."""
    result = await service.delete_subdomain(owner, record_id)
    return _respond(result, service)
