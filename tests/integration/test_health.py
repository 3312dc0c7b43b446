"""Tests for the health check endpoint."""

import pytest
from httpx import ASGITransport, AsyncClient

from subdomain_registry.application.services import SubdomainService
from subdomain_registry.config import Settings
from subdomain_registry.infrastructure.cloudflare import CloudflareDNSProvider
from subdomain_registry.infrastructure.memory import InMemorySubdomainRepository
from subdomain_registry.main import app, create_app


@pytest.mark.asyncio
async def test_health_check_returns_200():
    """Health endpoint should return 200 with status, version, and environment."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data
    assert "environment" in data


@pytest.mark.asyncio
async def test_health_check_reports_storage_backend():
    service = SubdomainService(
        InMemorySubdomainRepository(),
        CloudflareDNSProvider(api_token="", zone_id=""),
        parent_domain="example.com",
    )
    test_app = create_app(Settings(_env_file=None, app_env="test"), service=service)

    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/health")

    data = response.json()
    assert data["environment"] == "test"
    assert data["storage"] == "memory"
