"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from subdomain_registry.application.services import SubdomainService
from subdomain_registry.config import Settings, get_settings
from subdomain_registry.infrastructure.dependencies import (
    build_subdomain_repository,
    build_subdomain_service,
)
from subdomain_registry.infrastructure.logging.log_config import setup_logging
from subdomain_registry.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: configure logging, pick the record store, wire the service."""
    settings: Settings = app.state.settings
    setup_logging(settings)

    engine = None
    if getattr(app.state, "subdomain_service", None) is None:
        repository, engine = await build_subdomain_repository(settings)
        app.state.subdomain_service = build_subdomain_service(settings, repository)

    logger.info(
        "Subdomain registry started (storage=%s, domain=%s)",
        app.state.subdomain_service.storage_backend,
        settings.cf_domain or "<unset>",
    )

    yield

    # Shutdown
    if engine is not None:
        await engine.dispose()


def create_app(
    settings: Settings | None = None,
    service: SubdomainService | None = None,
) -> FastAPI:
    """Factory function that builds and configures the FastAPI application.

    ``service`` replaces the one normally built at startup, which lets tests
    drive the routes without running the lifespan.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.subdomain_service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "subdomain_registry.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
