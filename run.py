#!/usr/bin/env python3
"""
Sitekit entry script.

    python run.py                                    # info
    python run.py --action server --reload -v
    python run.py --action health
    python run.py --action config
    python run.py --action test --test-type unit --coverage

Maintenance commands (tables, demo data, accounts) live in cli.py.
"""

import asyncio
import subprocess
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from sitekit.backend.core.logging import get_logger, setup_logging

ACTIONS = ("server", "health", "config", "test", "info")

logger = get_logger(__name__)


def validate_project_root() -> Path:
    if not (PROJECT_ROOT / ".project_root").exists():
        click.secho("Error: .project_root not found. Run from project root.", fg="red", err=True)
        sys.exit(1)
    return PROJECT_ROOT


def run_server(host: str | None, port: int | None, reload: bool, **_: Any) -> None:
    """Start uvicorn in a child process."""
    from sitekit.backend.core.config import get_app_config

    server = get_app_config().application.server
    host = host or server.host
    port = port or server.port

    cmd = [sys.executable, "-m", "uvicorn", "sitekit.backend.main:app", "--host", host, "--port", str(port)]
    if reload:
        cmd.append("--reload")

    logger.info("Starting server", extra={"host": host, "port": port, "reload": reload})
    click.echo(f"Starting server at http://{host}:{port}")
    click.echo("Press Ctrl+C to stop\n")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server exited with an error", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


def _check_config() -> tuple[bool, str]:
    from sitekit.backend.core.config import get_app_config

    return True, f"App: {get_app_config().application.name}"


def _check_secrets() -> tuple[bool, str]:
    from sitekit.backend.core.config import get_settings

    return True, "JWT_SECRET set" if get_settings().jwt_secret else "JWT_SECRET empty"


def _check_app() -> tuple[bool, str]:
    from sitekit.backend.main import create_app

    return True, f"{len(create_app().routes)} routes"


def _check_database() -> tuple[bool, str | None]:
    from sitekit.backend.api.health import check_database
    from sitekit.backend.core.database import dispose_engine

    async def probe() -> dict[str, Any]:
        try:
            return await check_database()
        finally:
            await dispose_engine()

    result = asyncio.run(probe())
    return result["status"] == "healthy", result.get("error")


HEALTH_CHECKS: list[tuple[str, Callable[[], tuple[bool, str | None]]]] = [
    ("YAML configuration", _check_config),
    ("Secrets (config/.env)", _check_secrets),
    ("FastAPI application", _check_app),
    ("Database", _check_database),
]


def check_health(**_: Any) -> None:
    """Load the configuration, build the app and reach the database."""
    click.echo("Checking application health...\n")

    results = []
    for name, check in HEALTH_CHECKS:
        try:
            passed, detail = check()
        except (ImportError, OSError, ValueError, RuntimeError) as e:
            passed, detail = False, str(e)
        logger.debug("Health check", extra={"check": name, "passed": passed})
        results.append((name, passed, detail))

    click.echo("Health Check Results:")
    click.echo("-" * 50)
    for name, passed, detail in results:
        status = click.style("✓ PASS", fg="green") if passed else click.style("✗ FAIL", fg="red")
        click.echo(f"  {status}  {name}" + (f" ({detail})" if detail else ""))
    click.echo("-" * 50)

    if all(passed for _, passed, _ in results):
        click.secho("\nAll checks passed!", fg="green")
        return

    click.secho("\nSome checks failed. See details above.", fg="yellow")
    click.echo("Note: secrets are read from config/.env (see config/.env.example).")
    sys.exit(1)


def _echo_tree(data: dict[str, Any], indent: int = 2) -> None:
    for key, value in data.items():
        if isinstance(value, dict):
            click.echo(f"{' ' * indent}{key}:")
            _echo_tree(value, indent + 2)
        else:
            click.echo(f"{' ' * indent}{key}: {value}")


def show_config(**_: Any) -> None:
    """Print every YAML settings file as loaded and validated."""
    from sitekit.backend.core.config import get_app_config

    titles = {
        "application": "Application",
        "database": "Database",
        "logging": "Logging",
        "features": "Feature Flags",
        "security": "Security",
        "telegram": "Telegram",
        "uploads": "Uploads",
    }
    try:
        app_config = get_app_config()
    except (OSError, ValueError) as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.secho(f"Error loading configuration: {e}", fg="red")
        sys.exit(1)

    click.echo("Application Configuration:\n")
    for section, title in titles.items():
        click.echo(f"{title} Settings (from YAML):")
        click.echo("-" * 40)
        _echo_tree(getattr(app_config, section).model_dump())
        click.echo()


def run_tests(test_type: str, coverage: bool, **_: Any) -> None:
    """Run pytest on tests/, tests/unit or tests/integration."""
    target = {"unit": "tests/unit", "integration": "tests/integration"}.get(test_type, "tests/")
    cmd = [sys.executable, "-m", "pytest", target, "-v"]
    if coverage:
        cmd += ["--cov=sitekit", "--cov-report=term-missing"]

    logger.info("Running tests", extra={"type": test_type, "coverage": coverage})
    click.echo(f"Running: {' '.join(cmd)}\n")
    sys.exit(subprocess.run(cmd).returncode)


def show_info(**_: Any) -> None:
    from sitekit.backend.core.config import get_app_config

    application = get_app_config().application
    click.echo(application.name)
    click.echo("=" * 40)
    click.echo(f"Version: {application.version}")
    click.echo(f"Description: {application.description}")
    click.echo(
        """
Available Actions:
  --action server   Start the server
  --action health   Check configuration, app and database
  --action config   Display configuration
  --action test     Run test suite
  --action info     Show this information

Logging Options:
  --verbose, -v     Enable INFO level logging
  --debug, -d       Enable DEBUG level logging

Examples:
  python run.py --action server --reload --verbose
  python run.py --action health --debug
  python run.py --action test --test-type unit --coverage"""
    )


ACTION_HANDLERS: dict[str, Callable[..., None]] = {
    "server": run_server,
    "health": check_health,
    "config": show_config,
    "test": run_tests,
    "info": show_info,
}


@click.command()
@click.option("--action", type=click.Choice(ACTIONS), default="info", help="Action to perform.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output (INFO level logging).")
@click.option("--debug", "-d", is_flag=True, help="Enable debug output (DEBUG level logging).")
@click.option("--host", default=None, help="Server host (server action).")
@click.option("--port", default=None, type=int, help="Server port (server action).")
@click.option("--reload", is_flag=True, help="Reload on code changes (server action).")
@click.option(
    "--test-type",
    type=click.Choice(["all", "unit", "integration"]),
    default="all",
    help="Which tests to run (test action).",
)
@click.option("--coverage", is_flag=True, help="Measure coverage (test action).")
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    test_type: str,
    coverage: bool,
) -> None:
    """
    Sitekit admin panel entry point.

    Start the server, check health, print the configuration or run tests.
    """
    validate_project_root()

    log_level = "DEBUG" if debug else "INFO" if verbose else "WARNING"
    setup_logging(level=log_level, format_type="console")
    logger.debug("Running action", extra={"action": action, "log_level": log_level})

    ACTION_HANDLERS[action](
        host=host,
        port=port,
        reload=reload,
        test_type=test_type,
        coverage=coverage,
    )


if __name__ == "__main__":
    main()
