"""
Logging Setup.

structlog on top of the standard logging module, configured from
config/settings/logging.yaml. Modules get their logger from
get_logger(__name__) and never build handlers of their own.

JSON records in logs/system.jsonl carry timestamp, level, logger, event,
func_name and lineno, plus whatever the request middleware bound to the
context (request_id, frontend, method, path).

Usage:
    setup_logging()                  # values from logging.yaml
    setup_logging(level="DEBUG")     # explicit arguments win

    logger = get_logger(__name__)
    logger.info("Order stored", extra={"site": site, "order_id": order.id})

    # Outside a request, say where the record came from
    log_with_source(logger, "cli", "info", "Password reset", username="admin")
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, TypeVar

import structlog
from structlog.typing import Processor

from sitekit.backend.core.config import find_project_root, get_app_config
from sitekit.backend.core.config_schema import FileHandlerSchema

T = TypeVar("T")

LOG_SOURCES = frozenset({"web", "cli", "telegram", "api", "internal", "unknown"})

# Chatty at INFO
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "httpx")


def _resolve_log_path(configured_path: str) -> Path:
    """Log file paths in logging.yaml are relative to the project root."""
    return find_project_root() / configured_path


def _pick(override: T | None, configured: T) -> T:
    return configured if override is None else override


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]


def _file_handler(file_config: FileHandlerSchema, formatter: logging.Formatter) -> RotatingFileHandler:
    log_path = _resolve_log_path(file_config.path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=file_config.max_bytes,
        backupCount=file_config.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure structlog and replace the root logger's handlers.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        format_type: 'console' (coloured) or 'json' for the console handler;
            the file handler always writes JSON
        enable_console: Log to stdout
        enable_file_logging: Log to the rotating JSONL file

    Arguments left as None take their value from logging.yaml.
    """
    config = get_app_config().logging
    processors = _shared_processors()

    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=processors,
    )
    console_formatter = json_formatter
    if _pick(format_type, config.format) == "console":
        console_formatter = structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=True),
            foreign_pre_chain=processors,
        )

    root = logging.getLogger()
    root.setLevel(getattr(logging, _pick(level, config.level).upper()))
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    if _pick(enable_console, config.handlers.console.enabled):
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(console_formatter)
        root.addHandler(stream_handler)

    if _pick(enable_file_logging, config.handlers.file.enabled):
        root.addHandler(_file_handler(config.handlers.file, json_formatter))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Return the structlog logger for a module (pass __name__)."""
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log with an explicit `source` field.

    Records emitted inside an HTTP request get their context from the
    middleware; CLI commands and startup code use this instead. Sources
    outside LOG_SOURCES are recorded as "unknown".

    Raises:
        AttributeError: If level is not a logger method
    """
    log_method = getattr(logger, level.lower())
    log_method(message, source=source if source in LOG_SOURCES else "unknown", **kwargs)
