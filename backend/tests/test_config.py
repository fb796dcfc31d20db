"""Settings tests: env-driven configuration."""

import tomllib
from pathlib import Path

from fieldguard.config import Settings
from fieldguard.core.domain_types import Locale


def test_postgres_url_is_rewritten_for_asyncpg():
    settings = Settings(database_url="postgresql://u:p@db:5432/app")
    assert settings.database_url == "postgresql+asyncpg://u:p@db:5432/app"


def test_other_urls_untouched():
    settings = Settings(database_url="sqlite+aiosqlite:///:memory:")
    assert settings.database_url == "sqlite+aiosqlite:///:memory:"


def test_locale_from_env(monkeypatch):
    monkeypatch.setenv("VALIDATION_LOCALE", "en")
    assert Settings().validation_locale is Locale.EN


def test_defaults(monkeypatch):
    monkeypatch.delenv("VALIDATION_LOCALE", raising=False)
    monkeypatch.delenv("LOG_FORMAT", raising=False)
    settings = Settings()
    assert settings.validation_locale is Locale.FA
    assert settings.log_format == "json"


def test_default_driver_ships_as_an_extra():
    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    project = tomllib.loads(pyproject.read_text())["project"]

    assert Settings.model_fields["database_url"].default.startswith("sqlite+aiosqlite")
    assert any(dep.startswith("aiosqlite") for dep in project["optional-dependencies"]["sqlite"])
