"""
User Service.

Admin-only account management.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.core.config import get_app_config
from sitekit.backend.core.exceptions import ConflictError, ValidationError
from sitekit.backend.core.security import ROLE_ACCOUNTANT, VALID_ROLES, hash_password
from sitekit.backend.models.user import User
from sitekit.backend.repositories.user import UserRepository
from sitekit.backend.schemas.user import UserCreate
from sitekit.backend.services.base import BaseService


class UserService(BaseService):
    """
    Service for admin panel accounts.

    Admins cannot change their own role or delete themselves, so a panel
    always keeps at least the account that is doing the editing.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = UserRepository(session)

    def _check_password(self, password: str) -> None:
        min_length = get_app_config().security.passwords.min_length
        if len(password) < min_length:
            raise ValidationError(f"Password must be at least {min_length} characters")

    async def list_users(self) -> list[User]:
        return await self.repo.list_all()

    async def get_user(self, user_id: int) -> User:
        return await self.repo.get_by_id(user_id)

    async def create_user(self, data: UserCreate) -> User:
        """
        Create an account. Unknown roles fall back to accountant.

        Raises:
            ValidationError: If username/password are missing or too short
            ConflictError: If the username is taken
        """
        self._validate_required(
            {"username": data.username, "password": data.password},
            ["username", "password"],
        )
        self._check_password(data.password)

        username = data.username.strip()
        if await self.repo.get_by_username(username) is not None:
            raise ConflictError("Username already exists")

        role = data.role if data.role in VALID_ROLES else ROLE_ACCOUNTANT
        self._log_operation("Creating user", username=username, role=role)
        return await self._execute_db_operation(
            "create_user",
            self.repo.create(
                username=username,
                password_hash=hash_password(data.password),
                role=role,
            ),
        )

    async def update_role(self, user_id: int, role: str, acting_user_id: int) -> User:
        if user_id == acting_user_id:
            raise ValidationError("Cannot change your own role")
        if role not in VALID_ROLES:
            raise ValidationError("Invalid role")

        user = await self.repo.get_by_id(user_id)
        self._log_operation("Updating user role", user_id=user_id, role=role)
        return await self.repo.update_instance(user, role=role)

    async def set_password(self, user_id: int, password: str) -> None:
        self._validate_required({"password": password}, ["password"])
        self._check_password(password)
        user = await self.repo.get_by_id(user_id)
        await self.repo.update_instance(user, password_hash=hash_password(password))
        self._log_operation("User password reset", user_id=user_id)

    async def delete_user(self, user_id: int, acting_user_id: int) -> None:
        if user_id == acting_user_id:
            raise ValidationError("Cannot delete yourself")
        self._log_operation("Deleting user", user_id=user_id)
        await self._execute_db_operation("delete_user", self.repo.delete(user_id))
