"""
Portfolio Models.

Showcase projects per site with translations (en, ru) and image galleries.
"""

from sqlalchemy import JSON, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sitekit.backend.models.base import (
    Base,
    CreatedAtMixin,
    IdMixin,
    SiteMixin,
    SortableMixin,
)

PORTFOLIO_LANGUAGES = ("en", "ru")


class PortfolioProject(IdMixin, SiteMixin, SortableMixin, CreatedAtMixin, Base):
    """Portfolio project."""

    __tablename__ = "portfolio_projects"

    project_key: Mapped[str] = mapped_column(String(128), nullable=False)
    cover_image: Mapped[str | None] = mapped_column(String(255), nullable=True)
    project_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    category: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    technologies: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    translations: Mapped[list["PortfolioTranslation"]] = relationship(
        back_populates="project",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    images: Mapped[list["PortfolioImage"]] = relationship(
        back_populates="project",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="(PortfolioImage.sort_order, PortfolioImage.id)",
    )


class PortfolioTranslation(IdMixin, Base):
    __tablename__ = "portfolio_translations"
    __table_args__ = (UniqueConstraint("project_id", "lang"),)

    project_id: Mapped[int] = mapped_column(
        ForeignKey("portfolio_projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    lang: Mapped[str] = mapped_column(String(8), nullable=False)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    subtitle: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    project: Mapped[PortfolioProject] = relationship(back_populates="translations")


class PortfolioImage(IdMixin, CreatedAtMixin, Base):
    __tablename__ = "portfolio_images"

    project_id: Mapped[int] = mapped_column(
        ForeignKey("portfolio_projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    image_path: Mapped[str] = mapped_column(String(255), nullable=False)
    caption: Mapped[str | None] = mapped_column(String(512), nullable=True)
    sort_order: Mapped[int] = mapped_column(default=0, nullable=False)

    project: Mapped[PortfolioProject] = relationship(back_populates="images")
