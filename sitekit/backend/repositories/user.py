"""
User Repository.
"""

from sqlalchemy import select

from sitekit.backend.models.user import User
from sitekit.backend.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User
    not_found_message = "User not found"

    async def get_by_username(self, username: str) -> User | None:
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def list_all(self) -> list[User]:
        return await self.find(order_by=[User.id])
