"""
FastAPI Dependencies.

Shared dependencies for request handling: database session, request id,
session authentication, role checks, cart sessions and the outbound
integrations endpoints hand to services.
"""

import uuid
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.core.config import get_app_config
from sitekit.backend.core.database import get_db_session
from sitekit.backend.core.exceptions import AuthenticationError, AuthorizationError
from sitekit.backend.core.logging import get_logger
from sitekit.backend.core.security import ROLE_ADMIN, decode_session_token
from sitekit.backend.core.utils import random_hex
from sitekit.backend.gateway.adapters.telegram import TelegramFactory, get_telegram_factory
from sitekit.backend.services.storage import UploadStorage, get_upload_storage

logger = get_logger(__name__)

CART_COOKIE_NAME = "cart_session"
CART_COOKIE_MAX_AGE = 30 * 24 * 3600

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]


async def get_request_id(x_request_id: str | None = Header(None)) -> str:
    """
    Extract or generate request ID from headers.

    Used for request tracing and correlation.
    """
    return x_request_id or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]


@dataclass
class SessionUser:
    """Identity carried by the session token."""

    id: int
    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


def get_session_token(request: Request) -> str | None:
    """Session token from the session cookie or an `Authorization: Bearer` header."""
    cookie_name = get_app_config().security.session.cookie_name
    token = request.cookies.get(cookie_name)
    if token:
        return token
    authorization = request.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


def get_optional_user(request: Request) -> SessionUser | None:
    """Current user if a valid session is present, otherwise None."""
    token = get_session_token(request)
    if not token:
        return None
    try:
        payload = decode_session_token(token)
    except AuthenticationError:
        return None
    return SessionUser(
        id=int(payload["sub"]),
        username=payload.get("username", ""),
        role=payload.get("role", ""),
    )


async def require_auth(
    user: Annotated[SessionUser | None, Depends(get_optional_user)],
) -> SessionUser:
    """
    Require a logged-in user (any role).

    Raises:
        AuthenticationError: If no valid session is present
    """
    if user is None:
        raise AuthenticationError("Authentication required")
    return user


CurrentUser = Annotated[SessionUser, Depends(require_auth)]


async def require_admin(user: CurrentUser) -> SessionUser:
    """
    Require the admin role.

    Raises:
        AuthenticationError: If no valid session is present
        AuthorizationError: If the user is not an admin
    """
    if not user.is_admin:
        logger.warning(
            "Admin access denied",
            extra={"user_id": user.id, "role": user.role},
        )
        raise AuthorizationError("Access denied. Admin only.")
    return user


AdminUser = Annotated[SessionUser, Depends(require_admin)]


async def get_cart_session(
    request: Request,
    response: Response,
    x_cart_session: str | None = Header(None),
) -> str:
    """
    Anonymous cart session id from the cookie or X-Cart-Session header.

    A new id is issued (and set as a cookie) when neither is present.
    """
    session_id = request.cookies.get(CART_COOKIE_NAME) or x_cart_session
    if session_id:
        return session_id

    session_id = random_hex(16)
    response.set_cookie(
        CART_COOKIE_NAME,
        session_id,
        max_age=CART_COOKIE_MAX_AGE,
        httponly=True,
        samesite="lax",
    )
    return session_id


CartSession = Annotated[str, Depends(get_cart_session)]

Storage = Annotated[UploadStorage, Depends(get_upload_storage)]

Telegram = Annotated[TelegramFactory, Depends(get_telegram_factory)]
