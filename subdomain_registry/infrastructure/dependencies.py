"""Wires infrastructure to the application layer.

The record store and the DNS provider are built once at startup and shared
by every request through ``app.state``; FastAPI dependencies only look them up.
"""

import logging

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine

from subdomain_registry.application.interfaces import DNSProvider, SubdomainRepository
from subdomain_registry.application.services import SubdomainService
from subdomain_registry.config import Settings
from subdomain_registry.infrastructure.cloudflare import CloudflareDNSProvider
from subdomain_registry.infrastructure.database import (
    create_engine_from_url,
    create_session_factory,
    init_models,
)
from subdomain_registry.infrastructure.database.repositories import SQLAlchemySubdomainRepository
from subdomain_registry.infrastructure.memory import InMemorySubdomainRepository

logger = logging.getLogger(__name__)

DEFAULT_OWNER_IDENTITY = "127.0.0.1"


async def build_subdomain_repository(
    settings: Settings,
) -> tuple[SubdomainRepository, AsyncEngine | None]:
    """Select the record store backend from configuration.

    Returns the repository and, for the durable backend, the engine the
    caller must dispose on shutdown.
    """
    database_url = settings.database_url.strip()
    if not database_url:
        logger.warning(
            "DATABASE_URL is not configured; using in-memory storage "
            "(subdomains will not persist between restarts)"
        )
        return InMemorySubdomainRepository(), None

    engine = create_engine_from_url(database_url, echo=(settings.log_level_sql.upper() == "DEBUG"))
    try:
        await init_models(engine)
    except Exception:
        logger.exception("Failed to prepare database tables; falling back to in-memory storage")
        await engine.dispose()
        return InMemorySubdomainRepository(), None

    logger.info("Using SQL storage for subdomains")
    return SQLAlchemySubdomainRepository(create_session_factory(engine)), engine


def build_dns_provider(settings: Settings) -> DNSProvider:
    provider = CloudflareDNSProvider(
        api_token=settings.cf_api_token,
        zone_id=settings.cf_zone_id,
        base_url=settings.cf_api_base_url,
        timeout=settings.cf_timeout,
    )
    if not provider.is_configured:
        logger.warning(
            "CF_API_TOKEN / CF_ZONE_ID are not configured; subdomains will be stored "
            "locally without DNS records"
        )
    return provider


def build_subdomain_service(
    settings: Settings,
    repository: SubdomainRepository,
    dns_provider: DNSProvider | None = None,
) -> SubdomainService:
    if not settings.cf_domain.strip():
        logger.warning("CF_DOMAIN is not configured; subdomain creation will fail")
    return SubdomainService(
        repository,
        dns_provider or build_dns_provider(settings),
        parent_domain=settings.cf_domain,
        max_subdomains_per_owner=settings.max_subdomains_per_owner,
    )


def get_subdomain_service(request: Request) -> SubdomainService:
    """FastAPI dependency: the process-wide SubdomainService."""
    return request.app.state.subdomain_service


def get_owner_identity(request: Request) -> str:
    """FastAPI dependency: the client address used as a (weak) owner identity."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = request.headers.get("x-real-ip", "").strip()
    if real_ip:
        return real_ip

    if request.client and request.client.host:
        return request.client.host
    return DEFAULT_OWNER_IDENTITY
