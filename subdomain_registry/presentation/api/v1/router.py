"""V1 API router."""

from fastapi import APIRouter

from subdomain_registry.presentation.api.v1.endpoints.health import router as health_router
from subdomain_registry.presentation.api.v1.endpoints.subdomains import router as subdomains_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(subdomains_router)
