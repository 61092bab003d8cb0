"""
Product Models.

Storefront products with per-language translations.
"""

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sitekit.backend.models.base import (
    Base,
    CreatedAtMixin,
    IdMixin,
    SiteMixin,
    SortableMixin,
)
from sitekit.backend.models.category import Category

PRODUCT_LANGUAGES = ("en", "de", "ru")


class Product(IdMixin, SiteMixin, SortableMixin, CreatedAtMixin, Base):
    """
    Storefront product.

    Price is free text ("from 120 PLN / day") as entered by editors.
    """

    __tablename__ = "products"

    category_id: Mapped[int | None] = mapped_column(
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    product_key: Mapped[str] = mapped_column(String(128), nullable=False)
    image: Mapped[str | None] = mapped_column(String(255), nullable=True)
    price: Mapped[str | None] = mapped_column(String(128), nullable=True)
    subcategory_type: Mapped[str | None] = mapped_column(String(64), nullable=True)

    category: Mapped[Category | None] = relationship(lazy="selectin")
    translations: Mapped[list["ProductTranslation"]] = relationship(
        back_populates="product",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, key={self.product_key!r})>"


class ProductTranslation(IdMixin, Base):
    """Localized product copy for one language."""

    __tablename__ = "product_translations"
    __table_args__ = (UniqueConstraint("product_id", "lang"),)

    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    )
    lang: Mapped[str] = mapped_column(String(8), nullable=False)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    subtitle: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    advantages: Mapped[str | None] = mapped_column(Text, nullable=True)
    specs: Mapped[str | None] = mapped_column(Text, nullable=True)

    product: Mapped[Product] = relationship(back_populates="translations")
