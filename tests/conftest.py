"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Test Database Configuration:
    Every test gets a fresh in-memory SQLite database with foreign keys
    enforced, the same way the application engine is configured.

Secrets:
    The real config/.env is never relied on. Secrets are set through the
    process environment, which takes precedence over the dotenv file.
"""

from collections.abc import AsyncGenerator, Generator

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from sitekit.backend.core.config import get_settings
from sitekit.backend.core.database import _enable_sqlite_foreign_keys
from sitekit.backend.gateway.adapters.telegram import get_telegram_breaker
from sitekit.backend.models import Base

TEST_JWT_SECRET = "test-secret-key-that-is-long-enough-for-testing"

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Secrets that must not leak in from a developer's config/.env
_BLANK_SECRETS = (
    "ADMIN_DEFAULT_PASSWORD",
    "TELEGRAM_BOT_TOKEN",
    "TELEGRAM_CHAT_ID",
    "TELEGRAM_PERSONAL_CHAT_ID",
    "WEBSITE_API_KEY",
)


# =============================================================================
# Secrets
# =============================================================================


@pytest.fixture(autouse=True)
def _test_secrets(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Known secrets for every test, with fresh cached settings."""
    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    for name in _BLANK_SECRETS:
        monkeypatch.setenv(name, "")
    get_settings.cache_clear()
    get_telegram_breaker.cache_clear()
    yield
    get_settings.cache_clear()
    get_telegram_breaker.cache_clear()


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Create an in-memory database with every table.

    StaticPool keeps the single connection alive so all sessions in a
    test see the same database.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(
    db_session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a database session for a single test.

    Usage:
        async def test_create_order(db_session: AsyncSession):
            order = await OrderService(db_session).create_order("default", data)
            assert order.id is not None
    """
    async with db_session_factory() as session:
        yield session
        await session.rollback()


# =============================================================================
# Utility Fixtures
# =============================================================================


@pytest.fixture
def anyio_backend() -> str:
    """Specify the async backend for anyio."""
    return "asyncio"
