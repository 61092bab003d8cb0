"""
Order Model.

Leads captured from storefront forms: rental requests, cart orders,
configurator submissions.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from sitekit.backend.models.base import Base, CreatedAtMixin, IdMixin, SiteMixin

ORDER_STATUSES = ("new", "in_progress", "completed")


class Order(IdMixin, SiteMixin, CreatedAtMixin, Base):
    """Captured lead / order request."""

    __tablename__ = "orders"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(64), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    rental_period: Mapped[str | None] = mapped_column(String(255), nullable=True)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    page: Mapped[str | None] = mapped_column(String(512), nullable=True)
    product_key: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)
    status: Mapped[str] = mapped_column(String(32), default="new", nullable=False, index=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, site={self.site!r}, status={self.status!r})>"
