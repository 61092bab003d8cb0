"""
Configuration Schemas.

Pydantic models defining the expected structure of each YAML config file.
Used by AppConfig to validate configuration at load time. If a YAML file
has missing keys, wrong types, or unknown fields, a clear ValidationError
is raised at startup instead of a cryptic KeyError deep in application code.

Each top-level class corresponds to one file in config/settings/:
    ApplicationSchema  → application.yaml
    DatabaseSchema     → database.yaml
    LoggingSchema      → logging.yaml
    FeaturesSchema     → features.yaml
    SecuritySchema     → security.yaml
    TelegramSchema     → telegram.yaml
    UploadsSchema      → uploads.yaml
"""

from pydantic import BaseModel, ConfigDict


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# application.yaml
# =============================================================================


class ServerSchema(_StrictBase):
    host: str
    port: int


class CorsSchema(_StrictBase):
    origins: list[str]


class TimeoutsSchema(_StrictBase):
    database: int


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    environment: str
    debug: bool
    api_prefix: str
    docs_enabled: bool
    default_site: str
    server: ServerSchema
    cors: CorsSchema
    timeouts: TimeoutsSchema


# =============================================================================
# database.yaml
# =============================================================================


class DatabaseSchema(_StrictBase):
    path: str
    echo: bool


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int
    backup_count: int


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: str
    format: str
    handlers: HandlersSchema


# =============================================================================
# features.yaml
# =============================================================================


class FeaturesSchema(_StrictBase):
    auth_rate_limit_enabled: bool
    api_rate_limit_enabled: bool
    api_detailed_errors: bool
    demo_data_enabled: bool
    security_startup_checks_enabled: bool


# =============================================================================
# security.yaml
# =============================================================================


class SessionSchema(_StrictBase):
    cookie_name: str
    max_age_hours: int
    secure: bool
    algorithm: str
    audience: str


class PasswordPolicySchema(_StrictBase):
    min_length: int


class WindowLimitSchema(_StrictBase):
    max_requests: int
    window_seconds: int


class RateLimitingSchema(_StrictBase):
    trust_forwarded_for: bool
    sweep_interval_seconds: int
    api: WindowLimitSchema
    login: WindowLimitSchema
    password_change: WindowLimitSchema
    leads: WindowLimitSchema


class SecretsValidationSchema(_StrictBase):
    jwt_secret_min_length: int


class SecuritySchema(_StrictBase):
    session: SessionSchema
    passwords: PasswordPolicySchema
    rate_limiting: RateLimitingSchema
    secrets_validation: SecretsValidationSchema


# =============================================================================
# telegram.yaml
# =============================================================================


class TelegramRetrySchema(_StrictBase):
    max_attempts: int
    backoff_multiplier: int
    backoff_max: int


class TelegramCircuitBreakerSchema(_StrictBase):
    fail_max: int
    timeout_duration: int


class LeadSitesSchema(_StrictBase):
    default: str
    spec: str
    configurator: str


class TelegramSchema(_StrictBase):
    api_base_url: str
    parse_mode: str
    timezone: str
    timeout_seconds: int
    retry: TelegramRetrySchema
    circuit_breaker: TelegramCircuitBreakerSchema
    lead_sites: LeadSitesSchema


# =============================================================================
# uploads.yaml
# =============================================================================


class UploadsSchema(_StrictBase):
    directory: str
    url_prefix: str
    max_file_size_bytes: int
    allowed_extensions: list[str]
