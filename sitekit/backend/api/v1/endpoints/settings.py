"""
Site Settings API Endpoints.

Key/value settings per site (admin only) and the Telegram test/send
actions that use them.
"""

from typing import Any

from fastapi import APIRouter, Request

from sitekit.backend.core.dependencies import AdminUser, DbSession, RequestId, Telegram
from sitekit.backend.core.exceptions import ValidationError
from sitekit.backend.gateway.security.rate_limiter import enforce_rate_limit
from sitekit.backend.schemas.base import ApiResponse, MessageResponse
from sitekit.backend.schemas.site import SettingsUpdate, TelegramMessageRequest
from sitekit.backend.services.site import SiteService
from sitekit.backend.services.telegram import TelegramNotifier

router = APIRouter()

TEST_MESSAGE = "Test message from Admin Panel"


@router.get("/{site}", response_model=ApiResponse[dict[str, Any]], summary="Get site settings")
async def get_settings(
    site: str,
    admin: AdminUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[dict[str, Any]]:
    return ApiResponse(data=await SiteService(db).get_settings(site))


@router.put("/{site}", response_model=ApiResponse[dict[str, Any]], summary="Update site settings")
async def update_settings(
    site: str,
    data: SettingsUpdate,
    admin: AdminUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[dict[str, Any]]:
    return ApiResponse(data=await SiteService(db).update_settings(site, data.root))


@router.post(
    "/{site}/test-telegram",
    response_model=ApiResponse[MessageResponse],
    summary="Send a Telegram test message",
)
async def test_telegram(
    site: str,
    admin: AdminUser,
    db: DbSession,
    telegram: Telegram,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await TelegramNotifier(db, telegram).send(site, TEST_MESSAGE)
    return ApiResponse(data=MessageResponse(message="Test message sent successfully"))


@router.post(
    "/{site}/send-telegram",
    response_model=ApiResponse[MessageResponse],
    summary="Send a message to the site's Telegram chat",
    description="Public endpoint used by website widgets. Shares the leads rate limit.",
)
async def send_telegram(
    site: str,
    data: TelegramMessageRequest,
    request: Request,
    db: DbSession,
    telegram: Telegram,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    enforce_rate_limit(request, "leads")
    if not data.message.strip():
        raise ValidationError("Message is required")
    await TelegramNotifier(db, telegram).send(site, data.message)
    return ApiResponse(data=MessageResponse(message="Message sent"))
