from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_PROJECT_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _PROJECT_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Subdomain Registry API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Persistent store; empty selects the in-memory backend
    database_url: str = ""

    # Cloudflare configuration
    cf_domain: str = ""
    cf_api_token: str = ""
    cf_zone_id: str = ""
    cf_api_base_url: str = "https://api.cloudflare.com/client/v4"
    cf_timeout: float = 30.0

    # Per-owner quota (owner = client network address)
    max_subdomains_per_owner: int = 5

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine SQL queries
    log_level_http: str = "WARNING"          # httpx / httpcore outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_dns_provider: str = "INFO"     # Cloudflare gateway
    log_level_lifecycle: str = "INFO"        # SubdomainService

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance, reads .env once."""
    return Settings()
