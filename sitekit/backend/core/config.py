"""
Configuration.

Two sources, nothing hardcoded:

    config/.env              secrets only (or the process environment):
                             JWT_SECRET, ADMIN_DEFAULT_PASSWORD,
                             TELEGRAM_BOT_TOKEN, TELEGRAM_CHAT_ID,
                             TELEGRAM_PERSONAL_CHAT_ID, WEBSITE_API_KEY
    config/settings/*.yaml   everything else, one file per AppConfig section

Both are located through the `.project_root` marker, so scripts work
from any subdirectory of the checkout.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from sitekit.backend.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    FeaturesSchema,
    LoggingSchema,
    SecuritySchema,
    TelegramSchema,
    UploadsSchema,
)

# AppConfig attribute -> (YAML file, schema), loaded in this order
SETTINGS_FILES: dict[str, tuple[str, type[BaseModel]]] = {
    "application": ("application.yaml", ApplicationSchema),
    "database": ("database.yaml", DatabaseSchema),
    "logging": ("logging.yaml", LoggingSchema),
    "features": ("features.yaml", FeaturesSchema),
    "security": ("security.yaml", SecuritySchema),
    "telegram": ("telegram.yaml", TelegramSchema),
    "uploads": ("uploads.yaml", UploadsSchema),
}


def find_project_root() -> Path:
    """Walk up from the working directory to the `.project_root` marker."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Raw contents of config/settings/<filename>; an empty file gives {}."""
    config_path = find_project_root() / "config" / "settings" / filename
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Secrets. Only JWT_SECRET is mandatory; the integrations degrade without the rest."""

    jwt_secret: str
    admin_default_password: str = ""
    telegram_bot_token: str = ""
    telegram_chat_id: str = ""
    telegram_personal_chat_id: str = ""
    website_api_key: str = ""

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class AppConfig:
    """
    Every YAML settings file, validated against its schema at load time.

    A missing key, a wrong type or an unknown key fails here with the file
    name in the message instead of surfacing later as an AttributeError.
    """

    application: ApplicationSchema
    database: DatabaseSchema
    logging: LoggingSchema
    features: FeaturesSchema
    security: SecuritySchema
    telegram: TelegramSchema
    uploads: UploadsSchema

    def __init__(self) -> None:
        for section, (filename, schema) in SETTINGS_FILES.items():
            try:
                value = schema(**load_yaml_config(filename))
            except ValidationError as e:
                raise ValueError(f"Invalid configuration in {filename}:\n{e}") from e
            setattr(self, section, value)


@lru_cache
def get_settings() -> Settings:
    return Settings(_env_file=str(find_project_root() / "config" / ".env"))


@lru_cache
def get_app_config() -> AppConfig:
    return AppConfig()


def get_database_url() -> str:
    """
    aiosqlite URL for database.yaml's `path`.

    A relative path is taken from the project root. The parent directory is
    created so that the first connection can create the database file.
    """
    db_path = Path(get_app_config().database.path)
    if not db_path.is_absolute():
        db_path = find_project_root() / db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite+aiosqlite:///{db_path}"
