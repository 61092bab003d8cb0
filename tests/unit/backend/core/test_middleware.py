"""
Unit Tests for Request Middleware.

Runs the middleware on a minimal Starlette app through httpx's ASGI
transport, so headers and request.state are exercised for real.
"""

import pytest
import structlog
from httpx import ASGITransport, AsyncClient
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from sitekit.backend.core.config_schema import RateLimitingSchema
from sitekit.backend.core.middleware import ApiRateLimitMiddleware, RequestContextMiddleware
from sitekit.backend.gateway.security.rate_limiter import RateLimiterRegistry


async def echo_context(request: Request) -> JSONResponse:
    return JSONResponse(
        {
            "request_id": request.state.request_id,
            "frontend": request.state.frontend,
            "bound": structlog.contextvars.get_contextvars(),
        }
    )


async def crash(request: Request) -> JSONResponse:
    raise RuntimeError("boom")


def build_app(api_limit: int = 100) -> Starlette:
    app = Starlette(
        routes=[
            Route("/api/v1/echo", echo_context),
            Route("/uploads/echo", echo_context),
            Route("/api/v1/crash", crash),
        ]
    )
    app.add_middleware(ApiRateLimitMiddleware, path_prefix="/api/")
    app.add_middleware(RequestContextMiddleware)
    app.state.rate_limiters = RateLimiterRegistry(
        RateLimitingSchema(
            trust_forwarded_for=False,
            sweep_interval_seconds=300,
            api={"max_requests": api_limit, "window_seconds": 900},
            login={"max_requests": 5, "window_seconds": 900},
            password_change={"max_requests": 3, "window_seconds": 3600},
            leads={"max_requests": 3, "window_seconds": 60},
        )
    )
    return app


def client_for(app: Starlette) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


class TestRequestContextMiddleware:
    @pytest.mark.asyncio
    async def test_generates_request_id(self):
        async with client_for(build_app()) as client:
            response = await client.get("/api/v1/echo")

        body = response.json()
        assert len(body["request_id"]) == 36
        assert response.headers["x-request-id"] == body["request_id"]
        assert response.headers["x-response-time"].endswith("ms")

    @pytest.mark.asyncio
    async def test_propagates_request_id(self):
        async with client_for(build_app()) as client:
            response = await client.get("/api/v1/echo", headers={"X-Request-ID": "req-42"})

        assert response.json()["request_id"] == "req-42"
        assert response.headers["x-request-id"] == "req-42"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("header", "frontend"),
        [("admin", "admin"), ("WEB", "web"), ("telegram", "telegram"), ("fridge", "unknown"), (None, "unknown")],
    )
    async def test_frontend_identifier(self, header, frontend):
        headers = {"X-Frontend-ID": header} if header else {}
        async with client_for(build_app()) as client:
            response = await client.get("/api/v1/echo", headers=headers)

        assert response.json()["frontend"] == frontend

    @pytest.mark.asyncio
    async def test_binds_structlog_context(self):
        async with client_for(build_app()) as client:
            response = await client.get("/api/v1/echo", headers={"X-Request-ID": "req-7"})

        bound = response.json()["bound"]
        assert bound["request_id"] == "req-7"
        assert bound["method"] == "GET"
        assert bound["path"] == "/api/v1/echo"

    @pytest.mark.asyncio
    async def test_reraises_exceptions(self):
        async with client_for(build_app()) as client:
            with pytest.raises(RuntimeError, match="boom"):
                await client.get("/api/v1/crash")


class TestApiRateLimitMiddleware:
    @pytest.mark.asyncio
    async def test_remaining_header(self):
        async with client_for(build_app(api_limit=5)) as client:
            response = await client.get("/api/v1/echo")

        assert response.headers["x-ratelimit-remaining"] == "4"

    @pytest.mark.asyncio
    async def test_rejects_over_limit_with_envelope(self):
        async with client_for(build_app(api_limit=2)) as client:
            for _ in range(2):
                assert (await client.get("/api/v1/echo")).status_code == 200
            response = await client.get("/api/v1/echo", headers={"X-Request-ID": "req-9"})

        body = response.json()
        assert response.status_code == 429
        assert int(response.headers["retry-after"]) > 0
        assert body["success"] is False
        assert body["error"]["code"] == "RATE_LIMITED"
        assert body["metadata"]["request_id"] == "req-9"

    @pytest.mark.asyncio
    async def test_paths_outside_prefix_not_limited(self):
        async with client_for(build_app(api_limit=1)) as client:
            for _ in range(3):
                response = await client.get("/uploads/echo")

        assert response.status_code == 200
        assert "x-ratelimit-remaining" not in response.headers
