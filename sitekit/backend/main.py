"""
Application factory for the Sitekit backend.

    uvicorn sitekit.backend.main:app

`app` is resolved lazily through the module __getattr__, so importing this
module does not read the YAML configuration.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from sitekit.backend.api import health
from sitekit.backend.api.v1 import router as api_v1_router
from sitekit.backend.core.config import get_app_config
from sitekit.backend.core.database import dispose_engine, get_session_factory, init_db
from sitekit.backend.core.exception_handlers import register_exception_handlers
from sitekit.backend.core.logging import get_logger, setup_logging
from sitekit.backend.core.middleware import ApiRateLimitMiddleware, RequestContextMiddleware
from sitekit.backend.gateway.security.rate_limiter import create_rate_limiters
from sitekit.backend.gateway.security.startup_checks import run_startup_checks
from sitekit.backend.services.auth import AuthService
from sitekit.backend.services.demo import DemoDataService
from sitekit.backend.services.storage import resolve_upload_root

logger = get_logger(__name__)

_app: FastAPI | None = None


async def bootstrap_database() -> None:
    """Tables first, then the default admin, then demo rows if the flag is on."""
    app_config = get_app_config()
    await init_db()

    async with get_session_factory()() as session:
        await AuthService(session).ensure_default_admin()
        if app_config.features.demo_data_enabled:
            await DemoDataService(session).seed(app_config.application.default_site)
        await session.commit()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    app_config = get_app_config()
    setup_logging(level=app_config.logging.level)

    if app_config.features.security_startup_checks_enabled:
        run_startup_checks()

    await bootstrap_database()
    logger.info(
        "Application starting",
        extra={"app_name": app_config.application.name, "env": app_config.application.environment},
    )
    try:
        yield
    finally:
        await dispose_engine()
        logger.info("Application shutting down")


def _add_middleware(app: FastAPI) -> None:
    app_config = get_app_config()
    application = app_config.application

    # Starlette runs the last added middleware outermost; the limiter must see the request id
    if app_config.features.api_rate_limit_enabled:
        app.add_middleware(ApiRateLimitMiddleware, path_prefix=f"{application.api_prefix}/")
    app.add_middleware(RequestContextMiddleware)

    if application.cors.origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=application.cors.origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )


def _mount_uploads(app: FastAPI) -> None:
    uploads = get_app_config().uploads
    root = resolve_upload_root(uploads)
    root.mkdir(parents=True, exist_ok=True)
    app.mount(uploads.url_prefix, StaticFiles(directory=root), name="uploads")


def create_app() -> FastAPI:
    application = get_app_config().application
    docs = application.docs_enabled

    app = FastAPI(
        title=application.name,
        description=application.description,
        version=application.version,
        docs_url="/docs" if docs else None,
        redoc_url="/redoc" if docs else None,
        lifespan=lifespan,
    )
    app.state.rate_limiters = create_rate_limiters()

    _add_middleware(app)
    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_v1_router, prefix=application.api_prefix)
    _mount_uploads(app)

    return app


def get_app() -> FastAPI:
    """The process-wide application, built on first access."""
    global _app
    if _app is None:
        _app = create_app()
    return _app


def __getattr__(name: str) -> FastAPI:
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
