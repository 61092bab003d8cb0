"""
Auth Service.

Credential checks, password changes and the default admin bootstrap.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.core.config import get_app_config, get_settings
from sitekit.backend.core.exceptions import AuthenticationError, ValidationError
from sitekit.backend.core.security import (
    ROLE_ACCOUNTANT,
    ROLE_ADMIN,
    create_session_token,
    generate_password,
    hash_password,
    verify_password,
)
from sitekit.backend.models.user import User
from sitekit.backend.repositories.user import UserRepository
from sitekit.backend.services.base import BaseService

DEFAULT_ADMIN_USERNAME = "admin"


def redirect_for_role(role: str) -> str:
    """Landing page after login; accountants start on the products tab."""
    if role == ROLE_ACCOUNTANT:
        return "/admin/dashboard#products"
    return "/admin/dashboard"


class AuthService(BaseService):
    """Login, password change and admin bootstrap."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = UserRepository(session)

    async def authenticate(self, username: str, password: str) -> tuple[User, str]:
        """
        Verify credentials and issue a session token.

        Returns:
            Tuple of (user, session token)

        Raises:
            ValidationError: If username or password is missing
            AuthenticationError: If the credentials are wrong
        """
        self._validate_required(
            {"username": username, "password": password},
            ["username", "password"],
        )

        user = await self.repo.get_by_username(username.strip())
        if user is None or not verify_password(password, user.password_hash):
            self._log_operation("Login failed", username=username)
            raise AuthenticationError("Invalid credentials")

        token = create_session_token(user.id, user.username, user.role)
        self._log_operation("Login succeeded", user_id=user.id, role=user.role)
        return user, token

    async def change_password(
        self,
        user_id: int,
        current_password: str,
        new_password: str,
    ) -> None:
        """
        Change the caller's own password.

        Raises:
            ValidationError: If fields are missing or the new password is too short
            AuthenticationError: If the current password is wrong
        """
        self._validate_required(
            {"current_password": current_password, "new_password": new_password},
            ["current_password", "new_password"],
        )
        min_length = get_app_config().security.passwords.min_length
        if len(new_password) < min_length:
            raise ValidationError(f"Password must be at least {min_length} characters")

        user = await self.repo.get_by_id(user_id)
        if not verify_password(current_password, user.password_hash):
            raise AuthenticationError("Current password is incorrect")

        await self._execute_db_operation(
            "change_password",
            self.repo.update_instance(user, password_hash=hash_password(new_password)),
        )
        self._log_operation("Password changed", user_id=user_id)

    async def ensure_default_admin(self) -> User | None:
        """
        Create the `admin` account on first start.

        Uses ADMIN_DEFAULT_PASSWORD when set; otherwise a random password is
        generated and logged once.

        Returns:
            The created user, or None if it already existed
        """
        if await self.repo.get_by_username(DEFAULT_ADMIN_USERNAME) is not None:
            return None

        password = get_settings().admin_default_password
        generated = not password
        if generated:
            password = generate_password()

        user = await self._execute_db_operation(
            "create_default_admin",
            self.repo.create(
                username=DEFAULT_ADMIN_USERNAME,
                password_hash=hash_password(password),
                role=ROLE_ADMIN,
            ),
        )

        if generated:
            self._logger.warning(
                "Default admin created with generated password, change it after first login",
                extra={"username": DEFAULT_ADMIN_USERNAME, "password": password},
            )
        else:
            self._log_operation("Default admin created", username=DEFAULT_ADMIN_USERNAME)
        return user
