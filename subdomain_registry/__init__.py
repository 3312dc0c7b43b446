"""Subdomain Registry: self-service DNS subdomains under a shared parent domain."""

__version__ = "0.1.0"
