"""Unit tests for application settings configuration."""

from pathlib import Path

from subdomain_registry.config import Settings


def test_settings_uses_project_env_file_independent_of_cwd():
    """Settings should always include the project-root .env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_project_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_project_env in normalized
    assert str(Path(".env")) in normalized


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("CF_DOMAIN", "example.net")
    monkeypatch.setenv("MAX_SUBDOMAINS_PER_OWNER", "7")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./subdomains.db")

    settings = Settings(_env_file=None)

    assert settings.cf_domain == "example.net"
    assert settings.max_subdomains_per_owner == 7
    assert settings.database_url == "sqlite:///./subdomains.db"


def test_settings_defaults_select_memory_store_and_default_quota(monkeypatch):
    for name in ("DATABASE_URL", "MAX_SUBDOMAINS_PER_OWNER", "CF_API_BASE_URL"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.database_url == ""
    assert settings.max_subdomains_per_owner == 5
    assert settings.cf_api_base_url == "https://api.cloudflare.com/client/v4"
