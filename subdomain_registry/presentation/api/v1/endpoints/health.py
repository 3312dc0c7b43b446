"""Health check endpoint."""

from fastapi import APIRouter, Request

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(request: Request) -> dict:
    """Returns the application health status and the active storage backend."""
    settings = request.app.state.settings
    service = getattr(request.app.state, "subdomain_service", None)
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "storage": service.storage_backend if service is not None else None,
    }
