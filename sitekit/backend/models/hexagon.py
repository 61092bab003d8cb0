"""
Hexagon Model.

Feature tiles shown in the storefront's hexagon grid.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from sitekit.backend.models.base import (
    Base,
    CreatedAtMixin,
    IdMixin,
    SiteMixin,
    SortableMixin,
)


class Hexagon(IdMixin, SiteMixin, SortableMixin, CreatedAtMixin, Base):
    """Hexagon tile."""

    __tablename__ = "hexagons"

    key: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    name_pl: Mapped[str | None] = mapped_column(String(255), nullable=True)
    name_en: Mapped[str] = mapped_column(String(255), nullable=False)
    name_de: Mapped[str | None] = mapped_column(String(255), nullable=True)
    name_ru: Mapped[str | None] = mapped_column(String(255), nullable=True)
    icon_number: Mapped[int] = mapped_column(default=1, nullable=False)
