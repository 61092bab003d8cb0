"""
HTTP Middleware.

RequestContextMiddleware gives every request an id, a frontend label and
a timing header, and binds them to the structlog context so every record
logged while serving the request carries them.

ApiRateLimitMiddleware applies the general `api` limiter to the API
paths. It runs outside the exception handlers, so a rejected request is
rendered here in the ErrorResponse format.

Headers read:
    X-Request-ID     propagated when sent, otherwise a new uuid4
    X-Frontend-ID    web, admin, cli, telegram, api or internal

Headers written:
    X-Request-ID, X-Response-Time ("12ms"), X-RateLimit-Remaining
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from sitekit.backend.core.exception_handlers import build_error_response
from sitekit.backend.core.logging import get_logger

logger = get_logger(__name__)

KNOWN_FRONTENDS = frozenset({"web", "admin", "cli", "telegram", "api", "internal"})


def _frontend(request: Request) -> str:
    frontend = request.headers.get("X-Frontend-ID", "").lower()
    return frontend if frontend in KNOWN_FRONTENDS else "unknown"


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Exposes request.state.request_id and request.state.frontend to handlers."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        frontend = _frontend(request)
        request.state.request_id = request_id
        request.state.frontend = frontend

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            frontend=frontend,
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        logger.debug(
            "Request started",
            extra={
                "client_host": request.client.host if request.client else None,
                "user_agent": request.headers.get("User-Agent"),
            },
        )
        try:
            response = await call_next(request)
        except Exception as exc:
            # The exception handlers render the response
            logger.error(
                "Request failed with exception",
                extra={"duration_ms": _elapsed_ms(started), "error_type": type(exc).__name__},
            )
            raise
        else:
            duration_ms = _elapsed_ms(started)
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"
            logger.debug(
                "Request completed",
                extra={"status_code": response.status_code, "duration_ms": duration_ms},
            )
            return response
        finally:
            structlog.contextvars.clear_contextvars()


class ApiRateLimitMiddleware(BaseHTTPMiddleware):
    """Counts every request whose path starts with `path_prefix` against the `api` limiter."""

    def __init__(self, app: ASGIApp, path_prefix: str = "/api/") -> None:
        super().__init__(app)
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        registry = request.app.state.rate_limiters
        result = registry.get("api").check(registry.client_key(request))
        if not result.allowed:
            logger.warning("API rate limit exceeded", extra={"path": request.url.path})
            return build_error_response(
                429,
                "RATE_LIMITED",
                "Too many requests. Please try again later.",
                request_id=getattr(request.state, "request_id", None),
                headers={"Retry-After": str(result.retry_after_seconds)},
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Remaining"] = str(result.remaining)
        return response
