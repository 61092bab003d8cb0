"""
Security Utilities.

Password hashing and the signed session token carried in the admin cookie.
"""

import secrets
from datetime import timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from sitekit.backend.core.config import get_app_config, get_settings
from sitekit.backend.core.exceptions import AuthenticationError
from sitekit.backend.core.logging import get_logger
from sitekit.backend.core.utils import utc_now

logger = get_logger(__name__)

ROLE_ADMIN = "admin"
ROLE_ACCOUNTANT = "accountant"
VALID_ROLES = frozenset({ROLE_ADMIN, ROLE_ACCOUNTANT})


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    password_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return bcrypt.checkpw(
        plain_password.encode("utf-8"),
        hashed_password.encode("utf-8"),
    )


def generate_password() -> str:
    """Random password for bootstrap accounts (16 hex characters)."""
    return secrets.token_hex(8)


def create_session_token(
    user_id: int,
    username: str,
    role: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create the signed session token stored in the session cookie.

    Args:
        user_id: Authenticated user id
        username: Username, echoed back by /auth/status
        role: User role (admin or accountant)
        expires_delta: Optional custom lifetime

    Returns:
        Encoded JWT
    """
    settings = get_settings()
    session_config = get_app_config().security.session

    if expires_delta is None:
        expires_delta = timedelta(hours=session_config.max_age_hours)

    payload = {
        "sub": str(user_id),
        "username": username,
        "role": role,
        "exp": utc_now() + expires_delta,
        "aud": session_config.audience,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=session_config.algorithm)


def decode_session_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a session token.

    Args:
        token: JWT string from the cookie or Authorization header

    Returns:
        Decoded token payload

    Raises:
        AuthenticationError: If token is invalid or expired
    """
    settings = get_settings()
    session_config = get_app_config().security.session
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[session_config.algorithm],
            audience=session_config.audience,
        )
    except JWTError as e:
        logger.warning("Session token decode failed", extra={"error": str(e)})
        raise AuthenticationError("Invalid or expired session")
