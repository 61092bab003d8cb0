"""
Category Model.

Storefront product categories, partitioned by site, with names in the
four storefront languages.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from sitekit.backend.models.base import Base, IdMixin, SiteMixin, SortableMixin


class Category(IdMixin, SiteMixin, SortableMixin, Base):
    """Product category."""

    __tablename__ = "categories"

    key: Mapped[str] = mapped_column(String(64), nullable=False)
    name_pl: Mapped[str | None] = mapped_column(String(255), nullable=True)
    name_en: Mapped[str] = mapped_column(String(255), nullable=False)
    name_de: Mapped[str | None] = mapped_column(String(255), nullable=True)
    name_ru: Mapped[str | None] = mapped_column(String(255), nullable=True)
    icon: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, site={self.site!r}, key={self.key!r})>"
