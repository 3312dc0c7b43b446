"""Cloudflare DNS client implementing the DNSProvider interface.

Talks to the Cloudflare v4 API (https://api.cloudflare.com/client/v4) using
httpx. Records are always created unproxied (DNS only). Every call makes a
single attempt; failures are logged with the provider's error payload and
reported through the return value. The API token is never logged.
"""

import logging
from typing import Any

import httpx

from subdomain_registry.application.interfaces.dns_provider import DNSProvider
from subdomain_registry.domain.exceptions import DNSProviderError

logger = logging.getLogger(__name__)

# TTL 1 means "automatic" on Cloudflare.
AUTO_TTL = 1


class CloudflareDNSProvider(DNSProvider):
    """Infrastructure adapter: manages DNS records in one Cloudflare zone."""

    def __init__(
        self,
        api_token: str,
        zone_id: str,
        base_url: str = "https://api.cloudflare.com/client/v4",
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._api_token = (api_token or "").strip()
        self._zone_id = (zone_id or "").strip()
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http_client = http_client

    @property
    def provider_name(self) -> str:
        return "cloudflare"

    @property
    def is_configured(self) -> bool:
        return bool(self._api_token and self._zone_id)

    def _get_headers(self) -> dict[str, str]:
        """Standard headers for Cloudflare requests."""
        return {
            "Authorization": f"Bearer {self._api_token}",
            "Content-Type": "application/json",
        }

    def _records_url(self, provider_record_id: str | None = None) -> str:
        url = f"{self._base_url}/zones/{self._zone_id}/dns_records"
        if provider_record_id:
            url = f"{url}/{provider_record_id}"
        return url

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def create_record(
        self, fqdn: str, record_type: str, target: str
    ) -> str | None:
        if not self.is_configured:
            logger.error("Cloudflare credentials not configured; skipping DNS record for %s", fqdn)
            return None

        payload = {
            "type": record_type,
            "name": fqdn,
            "content": target,
            "ttl": AUTO_TTL,
            "proxied": False,
        }
        try:
            data = await self._send("POST", self._records_url(), json=payload)
        except DNSProviderError as exc:
            logger.error(
                "Cloudflare rejected DNS record %s (%s -> %s): status=%s errors=%s",
                fqdn, record_type, target, exc.status_code, exc.errors,
            )
            return None
        except httpx.HTTPError as exc:
            logger.error("Cloudflare request failed creating %s: %s", fqdn, exc)
            return None

        result = data.get("result")
        record_id = result.get("id") if isinstance(result, dict) else None
        if not isinstance(record_id, str) or not record_id:
            logger.error("Cloudflare response for %s carried no record id: %s", fqdn, data)
            return None

        logger.info("Created Cloudflare %s record %s -> %s (id=%s)", record_type, fqdn, target, record_id)
        return record_id

    async def delete_record(self, provider_record_id: str | None) -> bool:
        if not self.is_configured:
            logger.error("Cloudflare credentials not configured; cannot delete DNS record")
            return False
        if not provider_record_id:
            return False

        try:
            await self._send("DELETE", self._records_url(provider_record_id))
        except DNSProviderError as exc:
            logger.error(
                "Cloudflare rejected delete of record %s: status=%s errors=%s",
                provider_record_id, exc.status_code, exc.errors,
            )
            return False
        except httpx.HTTPError as exc:
            logger.error("Cloudflare request failed deleting %s: %s", provider_record_id, exc)
            return False

        logger.info("Deleted Cloudflare record %s", provider_record_id)
        return True

    async def _send(
        self, method: str, url: str, *, json: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Issue one request and return the parsed body; raise on a provider error."""
        client = await self._get_client()
        should_close = self._http_client is None

        try:
            response = await client.request(
                method, url, headers=self._get_headers(), json=json
            )
            try:
                data = response.json()
            except ValueError:
                raise DNSProviderError(
                    self.provider_name, response.status_code, response.text[:500]
                )

            if not isinstance(data, dict) or not data.get("success"):
                errors = data.get("errors") if isinstance(data, dict) else data
                raise DNSProviderError(self.provider_name, response.status_code, errors)
            return data

        finally:
            if should_close:
                await client.aclose()
