"""Unit tests for backend selection and request-scoped dependencies."""

import logging
from pathlib import Path

import pytest
from starlette.requests import Request

from subdomain_registry.config import Settings
from subdomain_registry.infrastructure.database.repositories import SQLAlchemySubdomainRepository
from subdomain_registry.infrastructure.dependencies import (
    build_dns_provider,
    build_subdomain_repository,
    build_subdomain_service,
    get_owner_identity,
)
from subdomain_registry.infrastructure.memory import InMemorySubdomainRepository


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def _request(headers: dict[str, str] | None = None, client: tuple[str, int] | None = None) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": client,
    }
    return Request(scope)


@pytest.mark.asyncio
async def test_empty_database_url_falls_back_to_memory_with_warning(caplog):
    with caplog.at_level(logging.WARNING):
        repository, engine = await build_subdomain_repository(_settings(database_url=""))

    assert isinstance(repository, InMemorySubdomainRepository)
    assert engine is None
    assert "in-memory storage" in caplog.text


@pytest.mark.asyncio
async def test_database_url_selects_sql_store(tmp_path: Path):
    url = f"sqlite:///{tmp_path / 'registry.db'}"
    repository, engine = await build_subdomain_repository(_settings(database_url=url))

    try:
        assert isinstance(repository, SQLAlchemySubdomainRepository)
        assert engine is not None
        assert await repository.count_by_owner("10.0.0.1") == 0
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_unusable_database_falls_back_to_memory(tmp_path: Path, caplog):
    url = f"sqlite:///{tmp_path / 'missing-dir' / 'registry.db'}"

    with caplog.at_level(logging.WARNING):
        repository, engine = await build_subdomain_repository(_settings(database_url=url))

    assert isinstance(repository, InMemorySubdomainRepository)
    assert engine is None
    assert "falling back to in-memory storage" in caplog.text


def test_unconfigured_provider_is_logged(caplog):
    with caplog.at_level(logging.WARNING):
        provider = build_dns_provider(_settings(cf_api_token="", cf_zone_id=""))

    assert not provider.is_configured
    assert "CF_API_TOKEN" in caplog.text


def test_service_uses_configured_domain_and_quota():
    settings = _settings(cf_domain="example.com", max_subdomains_per_owner=2)
    service = build_subdomain_service(settings, InMemorySubdomainRepository())

    assert service.qualify("blog") == "blog.example.com"
    assert service.storage_backend == "memory"


@pytest.mark.parametrize(
    "headers, client, expected",
    [
        ({"X-Forwarded-For": "203.0.113.7, 10.0.0.1"}, ("10.0.0.1", 1234), "203.0.113.7"),
        ({"X-Real-IP": "198.51.100.4"}, ("10.0.0.1", 1234), "198.51.100.4"),
        ({"X-Forwarded-For": " , 10.0.0.1", "X-Real-IP": "198.51.100.4"}, None, "198.51.100.4"),
        ({}, ("192.0.2.10", 5555), "192.0.2.10"),
        ({}, None, "127.0.0.1"),
    ],
)
def test_owner_identity_resolution_order(headers, client, expected):
    assert get_owner_identity(_request(headers, client)) == expected
