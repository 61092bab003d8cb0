"""
Unit Tests for Startup Security Checks.
"""

import pytest

from sitekit.backend.core.config import get_app_config, get_settings
from sitekit.backend.gateway.security.startup_checks import (
    StartupSecurityError,
    production_problems,
    run_startup_checks,
    secret_problems,
)


@pytest.fixture
def production(monkeypatch):
    app_config = get_app_config()
    monkeypatch.setattr(app_config.application, "environment", "production")
    return app_config


class TestSecretProblems:
    def test_long_secret_passes(self):
        assert secret_problems(get_app_config(), get_settings()) == []

    def test_short_secret_reported(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET", "short")
        get_settings.cache_clear()

        assert secret_problems(get_app_config(), get_settings()) == ["JWT_SECRET is 5 chars, minimum is 32"]


class TestProductionProblems:
    def test_ignored_outside_production(self):
        assert production_problems(get_app_config(), get_settings()) == []

    def test_development_defaults_rejected_in_production(self, production):
        problems = production_problems(production, get_settings())

        assert "debug is true in production environment" in problems
        assert "docs_enabled is true in production environment" in problems
        assert "session.secure is false in production environment" in problems
        assert "WEBSITE_API_KEY is empty in production environment" in problems
        assert any(p.startswith("CORS origins contain localhost") for p in problems)

    def test_hardened_production_passes(self, production, monkeypatch):
        monkeypatch.setattr(production.application, "debug", False)
        monkeypatch.setattr(production.application, "docs_enabled", False)
        monkeypatch.setattr(production.application.cors, "origins", ["https://shop.example.com"])
        monkeypatch.setattr(production.security.session, "secure", True)
        monkeypatch.setenv("WEBSITE_API_KEY", "site-key")
        get_settings.cache_clear()

        assert production_problems(production, get_settings()) == []


class TestRunStartupChecks:
    def test_passes_with_development_config(self):
        run_startup_checks()

    def test_blocks_startup_listing_every_problem(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET", "short")
        get_settings.cache_clear()
        monkeypatch.setattr(get_app_config().application, "environment", "production")

        with pytest.raises(StartupSecurityError) as exc_info:
            run_startup_checks()

        message = str(exc_info.value)
        assert message.startswith("Startup blocked: 6 security check(s) failed:")
        assert "  - JWT_SECRET is 5 chars, minimum is 32" in message
