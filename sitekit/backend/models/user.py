"""
User Model.

Admin panel accounts. Roles are `admin` (full access) and `accountant`
(content and orders, no destructive or user-management operations).
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from sitekit.backend.models.base import Base, CreatedAtMixin, IdMixin


class User(IdMixin, CreatedAtMixin, Base):
    """Admin panel user."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        nullable=False,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(32), default="admin", nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username!r}, role={self.role!r})>"
