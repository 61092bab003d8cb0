"""
Startup Security Checks.

Run from the application lifespan before the first request is served.
Every failed check is collected, logged and reported together, and the
process refuses to start. Missing Telegram secrets only produce a warning
because each site can carry its own bot in site settings.
"""

from sitekit.backend.core.config import AppConfig, Settings, get_app_config, get_settings
from sitekit.backend.core.logging import get_logger

logger = get_logger(__name__)


class StartupSecurityError(RuntimeError):
    """The configuration is unsafe to serve traffic with."""


def secret_problems(app_config: AppConfig, settings: Settings) -> list[str]:
    minimum = app_config.security.secrets_validation.jwt_secret_min_length
    actual = len(settings.jwt_secret)
    if actual < minimum:
        return [f"JWT_SECRET is {actual} chars, minimum is {minimum}"]
    return []


def production_problems(app_config: AppConfig, settings: Settings) -> list[str]:
    """Settings that are fine on a laptop and dangerous on a public host."""
    if app_config.application.environment != "production":
        return []

    application = app_config.application
    features = app_config.features
    flags = {
        "debug": application.debug,
        "api_detailed_errors": features.api_detailed_errors,
        "docs_enabled": application.docs_enabled,
        "demo_data_enabled": features.demo_data_enabled,
    }
    problems = [f"{flag} is true in production environment" for flag, enabled in flags.items() if enabled]

    if not app_config.security.session.secure:
        problems.append("session.secure is false in production environment")

    localhost = [origin for origin in application.cors.origins if "localhost" in origin]
    if localhost:
        problems.append(f"CORS origins contain localhost in production: {localhost}")

    if not settings.website_api_key:
        problems.append("WEBSITE_API_KEY is empty in production environment")

    return problems


def run_startup_checks() -> None:
    """
    Raises:
        StartupSecurityError: Listing every failed check
    """
    app_config = get_app_config()
    settings = get_settings()

    problems = secret_problems(app_config, settings) + production_problems(app_config, settings)
    if problems:
        for problem in problems:
            logger.error("Startup security check failed", extra={"check": problem})
        listing = "\n".join(f"  - {problem}" for problem in problems)
        raise StartupSecurityError(f"Startup blocked: {len(problems)} security check(s) failed:\n{listing}")

    if not (settings.telegram_bot_token and settings.telegram_chat_id):
        logger.warning(
            "Telegram lead forwarding has no global bot token or chat id",
            extra={"hint": "per-site settings can still provide them"},
        )

    logger.info("Startup security checks passed", extra={"environment": app_config.application.environment})
