from .cloudflare_dns_provider import CloudflareDNSProvider

__all__ = ["CloudflareDNSProvider"]
