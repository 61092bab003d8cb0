"""
Integration Test Fixtures.

Fixtures for integration tests - the real application over an in-memory
database. These fixtures build on the root conftest.py database fixtures.

Outbound integrations are replaced at the dependency seam:
    - uploads are written under pytest's tmp_path
    - Telegram messages are recorded in `telegram_outbox` instead of sent
"""

from collections.abc import AsyncGenerator, Callable
from dataclasses import dataclass
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sitekit.backend.core.config import get_settings
from sitekit.backend.core.database import get_db_session
from sitekit.backend.core.security import (
    ROLE_ACCOUNTANT,
    ROLE_ADMIN,
    create_session_token,
    hash_password,
)
from sitekit.backend.gateway.adapters.base import ChannelAdapter, OutboundMessage
from sitekit.backend.gateway.adapters.telegram import get_telegram_factory
from sitekit.backend.main import create_app
from sitekit.backend.models.user import User
from sitekit.backend.services.storage import UploadStorage, get_upload_storage

TEST_BOT_TOKEN = "123456:test-token"
TEST_CHAT_ID = "-1001"
TEST_PASSWORD = "secret-pass"

# 1x1 transparent GIF
PIXEL_GIF = (
    b"GIF89a\x01\x00\x01\x00\x80\x00\x00\x00\x00\x00\xff\xff\xff!\xf9\x04\x01"
    b"\x00\x00\x00\x00,\x00\x00\x00\x00\x01\x00\x01\x00\x00\x02\x02D\x01\x00;"
)


# =============================================================================
# Telegram Fake
# =============================================================================


@dataclass
class SentMessage:
    bot_token: str
    chat_id: str
    text: str


class RecordingTelegramAdapter(ChannelAdapter):
    """Channel adapter that records messages instead of calling Telegram."""

    def __init__(self, bot_token: str, outbox: list[SentMessage]) -> None:
        self.bot_token = bot_token
        self.outbox = outbox

    @property
    def channel_name(self) -> str:
        return "telegram"

    @property
    def max_message_length(self) -> int:
        return 4096

    async def deliver(self, message: OutboundMessage) -> None:
        self.outbox.append(SentMessage(self.bot_token, message.chat_id, message.text))


@pytest.fixture
def telegram_outbox() -> list[SentMessage]:
    """Messages the application tried to send to Telegram."""
    return []


@pytest.fixture
def telegram_factory(
    telegram_outbox: list[SentMessage],
) -> Callable[[str], ChannelAdapter]:
    return lambda bot_token: RecordingTelegramAdapter(bot_token, telegram_outbox)


@pytest.fixture
def telegram_configured(monkeypatch: pytest.MonkeyPatch) -> str:
    """
    Provide TELEGRAM_BOT_TOKEN / TELEGRAM_CHAT_ID through the environment.

    Returns:
        The configured chat id
    """
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", TEST_BOT_TOKEN)
    monkeypatch.setenv("TELEGRAM_CHAT_ID", TEST_CHAT_ID)
    get_settings.cache_clear()
    return TEST_CHAT_ID


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def image_file() -> tuple[str, bytes, str]:
    """Multipart file tuple for a tiny valid image."""
    return ("photo.gif", PIXEL_GIF, "image/gif")


@pytest.fixture
def upload_storage(tmp_path: Any) -> UploadStorage:
    return UploadStorage(root=tmp_path / "uploads")


@pytest.fixture
def app(
    db_session_factory: async_sessionmaker[AsyncSession],
    upload_storage: UploadStorage,
    telegram_factory: Callable[[str], ChannelAdapter],
) -> FastAPI:
    """
    The application with its outbound dependencies overridden.

    Each request gets its own session that commits on success, exactly
    like get_db_session, but bound to the in-memory test engine.
    """
    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with db_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application = create_app()
    application.dependency_overrides[get_db_session] = override_get_db_session
    application.dependency_overrides[get_upload_storage] = lambda: upload_storage
    application.dependency_overrides[get_telegram_factory] = lambda: telegram_factory
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client for the application.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# =============================================================================
# Authentication Fixtures
# =============================================================================


async def create_user(
    session_factory: async_sessionmaker[AsyncSession],
    username: str,
    role: str,
    password: str = TEST_PASSWORD,
) -> User:
    async with session_factory() as session:
        user = User(username=username, password_hash=hash_password(password), role=role)
        session.add(user)
        await session.commit()
        return user


def bearer(user: User) -> dict[str, str]:
    token = create_session_token(user.id, user.username, user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def admin_user(db_session_factory: async_sessionmaker[AsyncSession]) -> User:
    return await create_user(db_session_factory, "admin", ROLE_ADMIN)


@pytest.fixture
async def accountant_user(db_session_factory: async_sessionmaker[AsyncSession]) -> User:
    return await create_user(db_session_factory, "accountant", ROLE_ACCOUNTANT)


@pytest.fixture
def admin_headers(admin_user: User) -> dict[str, str]:
    """
    Authorization headers for an admin session.

    Usage:
        async def test_list_users(client: AsyncClient, admin_headers: dict):
            response = await client.get("/api/v1/users", headers=admin_headers)
            assert response.status_code == 200
    """
    return bearer(admin_user)


@pytest.fixture
def accountant_headers(accountant_user: User) -> dict[str, str]:
    return bearer(accountant_user)


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_success(response: Any, expected_status: int = 200) -> Any:
        """
        Assert API response is successful.

        Returns:
            The `data` member of the envelope
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        body = response.json()
        assert body.get("success") is True, f"Response not successful: {body}"
        return body["data"]

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_code: str | None = None,
        expected_message: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is an error.

        Returns:
            The `error` member of the envelope
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        body = response.json()
        assert body.get("success") is False, f"Response should be error: {body}"
        error = body.get("error")
        assert error is not None, f"Missing error details: {body}"

        if expected_code:
            assert error["code"] == expected_code, (
                f"Expected error code {expected_code}, got {error['code']}"
            )
        if expected_message:
            assert error["message"] == expected_message, (
                f"Expected message {expected_message!r}, got {error['message']!r}"
            )
        return error

    @staticmethod
    def assert_validation_error(
        response: Any,
        field: str | None = None,
    ) -> dict[str, Any]:
        """Assert API response is a request validation error (422)."""
        error = ApiAssertions.assert_error(response, 422, "VAL_REQUEST_INVALID")

        if field:
            errors = (error.get("details") or {}).get("validation_errors", [])
            fields = [e.get("field", "") for e in errors]
            assert any(field in f for f in fields), (
                f"Expected validation error for field '{field}', "
                f"got errors for: {fields}"
            )
        return error


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()
