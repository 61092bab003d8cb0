"""
Unit Tests for Configuration Management.

Black box tests against the public interface of config.py.
Tests run against the real project files (YAML configs).
Failure scenarios use tmp_path to create controlled filesystems.
No mocking: the config loader is the system under test.
"""

import pytest

from sitekit.backend.core.config import (
    SETTINGS_FILES,
    AppConfig,
    Settings,
    find_project_root,
    get_app_config,
    get_database_url,
    get_settings,
    load_yaml_config,
)
from sitekit.backend.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    FeaturesSchema,
    LoggingSchema,
    SecuritySchema,
    TelegramSchema,
    UploadsSchema,
)

CONFIG_FILES = [filename for filename, _ in SETTINGS_FILES.values()]


@pytest.fixture(autouse=True)
def _clear_config_cache():
    """Clear lru_cache between tests so each test gets a fresh load."""
    get_settings.cache_clear()
    get_app_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()


def _write_settings(root, files: dict[str, str]) -> None:
    (root / ".project_root").touch()
    settings_dir = root / "config" / "settings"
    settings_dir.mkdir(parents=True)
    for name, text in files.items():
        (settings_dir / name).write_text(text)


# =============================================================================
# find_project_root
# =============================================================================


class TestFindProjectRoot:
    """Tests for .project_root marker discovery."""

    def test_finds_root_from_project_directory(self):
        root = find_project_root()
        assert root.is_dir()
        assert (root / ".project_root").exists()

    def test_config_directory_exists_at_root(self):
        root = find_project_root()
        assert (root / "config" / "settings").is_dir()
        assert (root / "config" / ".env.example").is_file()

    def test_finds_root_from_subdirectory(self, tmp_path, monkeypatch):
        (tmp_path / ".project_root").touch()
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        assert find_project_root() == tmp_path

    def test_raises_when_no_marker_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(RuntimeError, match="Project root not found"):
            find_project_root()


# =============================================================================
# load_yaml_config
# =============================================================================


class TestLoadYamlConfig:
    """Tests for YAML file loading from config/settings/."""

    def test_loads_application_yaml_as_dict(self):
        data = load_yaml_config("application.yaml")
        assert data["api_prefix"] == "/api/v1"
        assert data["default_site"] == "default"

    @pytest.mark.parametrize("filename", CONFIG_FILES)
    def test_loads_every_config_file(self, filename):
        data = load_yaml_config(filename)
        assert isinstance(data, dict)
        assert len(data) > 0

    def test_raises_for_nonexistent_file(self):
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            load_yaml_config("does_not_exist.yaml")

    def test_returns_empty_dict_for_empty_yaml(self, tmp_path, monkeypatch):
        """An empty YAML file should return {} rather than None."""
        _write_settings(tmp_path, {"empty.yaml": ""})
        monkeypatch.chdir(tmp_path)

        assert load_yaml_config("empty.yaml") == {}


# =============================================================================
# Settings (secrets from the environment / config/.env)
# =============================================================================


class TestSettings:
    """Tests for secret loading."""

    def test_environment_provides_secrets(self, monkeypatch):
        monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123:abc")
        monkeypatch.setenv("WEBSITE_API_KEY", "site-key")

        settings = get_settings()

        assert isinstance(settings, Settings)
        assert settings.telegram_bot_token == "123:abc"
        assert settings.website_api_key == "site-key"
        assert len(settings.jwt_secret) >= 32

    def test_optional_secrets_default_to_empty(self, monkeypatch):
        monkeypatch.delenv("TELEGRAM_PERSONAL_CHAT_ID", raising=False)

        settings = Settings(_env_file=None, jwt_secret="x" * 32)

        assert settings.telegram_personal_chat_id == ""
        assert settings.admin_default_password == ""

    def test_jwt_secret_is_required(self, monkeypatch):
        from pydantic import ValidationError as PydanticValidationError

        monkeypatch.delenv("JWT_SECRET", raising=False)
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None)


# =============================================================================
# AppConfig (validated YAML)
# =============================================================================


class TestAppConfig:
    """Tests for validated YAML configuration loading."""

    @pytest.mark.parametrize(
        ("section", "schema"),
        [
            ("application", ApplicationSchema),
            ("database", DatabaseSchema),
            ("logging", LoggingSchema),
            ("features", FeaturesSchema),
            ("security", SecuritySchema),
            ("telegram", TelegramSchema),
            ("uploads", UploadsSchema),
        ],
    )
    def test_sections_return_typed_schemas(self, section, schema):
        assert isinstance(getattr(AppConfig(), section), schema)

    def test_security_rate_limits(self):
        limits = AppConfig().security.rate_limiting
        assert (limits.login.max_requests, limits.login.window_seconds) == (5, 900)
        assert (limits.leads.max_requests, limits.leads.window_seconds) == (3, 60)
        assert AppConfig().security.session.cookie_name == "sky.sid"

    def test_lead_sites(self):
        sites = AppConfig().telegram.lead_sites
        assert (sites.default, sites.spec, sites.configurator) == ("mattress", "babylon", "mybusiness")

    def test_uploads_limits(self):
        uploads = AppConfig().uploads
        assert uploads.max_file_size_bytes == 5 * 1024 * 1024
        assert "webp" in uploads.allowed_extensions

    def test_rejects_yaml_with_missing_required_fields(self, tmp_path, monkeypatch):
        """A YAML file missing required fields should fail Pydantic validation."""
        _write_settings(tmp_path, {name: "{}" for name in CONFIG_FILES} | {"application.yaml": "name: 'Incomplete'"})
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ValueError, match="Invalid configuration in application.yaml"):
            AppConfig()

    def test_rejects_yaml_with_unknown_fields(self):
        """extra='forbid' on schemas should reject unknown YAML keys."""
        from pydantic import ValidationError as PydanticValidationError

        data = load_yaml_config("uploads.yaml")
        data["unknown_field"] = "oops"
        with pytest.raises(PydanticValidationError, match="Extra inputs are not permitted"):
            UploadsSchema(**data)


# =============================================================================
# Cached accessors
# =============================================================================


class TestCachedAccessors:
    def test_settings_cached(self):
        assert get_settings() is get_settings()

    def test_app_config_cached(self):
        assert get_app_config() is get_app_config()


# =============================================================================
# URL builders
# =============================================================================


class TestGetDatabaseUrl:
    """Tests for database URL construction."""

    def test_relative_path_resolved_against_root(self):
        url = get_database_url()
        expected = find_project_root() / get_app_config().database.path
        assert url == f"sqlite+aiosqlite:///{expected}"

    def test_creates_parent_directory(self, tmp_path, monkeypatch):
        db_path = tmp_path / "nested" / "store.db"
        config = get_app_config()
        monkeypatch.setattr(config.database, "path", str(db_path))

        url = get_database_url()

        assert url == f"sqlite+aiosqlite:///{db_path}"
        assert db_path.parent.is_dir()
