"""
Catalog Models.

E-commerce catalog products (priced, stocked, SKU-addressed) and their images.
"""

from sqlalchemy import ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sitekit.backend.models.base import Base, IdMixin, SortableMixin, TimestampMixin


class CatalogProduct(IdMixin, SortableMixin, TimestampMixin, Base):
    """Catalog product."""

    __tablename__ = "catalog_products"

    sku: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    sale_price: Mapped[float | None] = mapped_column(
        Numeric(12, 2, asdecimal=False),
        nullable=True,
    )
    currency: Mapped[str] = mapped_column(String(8), default="PLN", nullable=False)
    stock: Mapped[int] = mapped_column(default=0, nullable=False)
    category: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)
    brand: Mapped[str | None] = mapped_column(String(128), nullable=True)
    weight: Mapped[float | None] = mapped_column(nullable=True)
    dimensions: Mapped[str | None] = mapped_column(String(128), nullable=True)
    featured: Mapped[bool] = mapped_column(default=False, nullable=False)

    images: Mapped[list["CatalogImage"]] = relationship(
        back_populates="product",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="(CatalogImage.is_primary.desc(), CatalogImage.sort_order, CatalogImage.id)",
    )

    def __repr__(self) -> str:
        return f"<CatalogProduct(id={self.id}, sku={self.sku!r})>"


class CatalogImage(IdMixin, Base):
    """Image attached to a catalog product."""

    __tablename__ = "catalog_images"

    product_id: Mapped[int] = mapped_column(
        ForeignKey("catalog_products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    image_path: Mapped[str] = mapped_column(String(255), nullable=False)
    is_primary: Mapped[bool] = mapped_column(default=False, nullable=False)
    sort_order: Mapped[int] = mapped_column(default=0, nullable=False)

    product: Mapped[CatalogProduct] = relationship(back_populates="images")
