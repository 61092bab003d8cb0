"""
Cart and Checkout Models.

Anonymous shopping carts keyed by a cart session id, and the checkout
orders they turn into.
"""

from sqlalchemy import ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sitekit.backend.models.base import Base, CreatedAtMixin, IdMixin

CHECKOUT_STATUSES = ("new", "processing", "shipped", "completed", "cancelled")


class CartItem(IdMixin, CreatedAtMixin, Base):
    """A product line in an anonymous cart."""

    __tablename__ = "cart_items"

    session_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    product_id: Mapped[int] = mapped_column(
        ForeignKey("catalog_products.id", ondelete="CASCADE"),
        nullable=False,
    )
    product_name: Mapped[str] = mapped_column(String(255), nullable=False)
    product_price: Mapped[float] = mapped_column(
        Numeric(12, 2, asdecimal=False),
        nullable=False,
    )
    quantity: Mapped[int] = mapped_column(default=1, nullable=False)


class CheckoutOrder(IdMixin, CreatedAtMixin, Base):
    """Order placed from a cart."""

    __tablename__ = "checkout_orders"

    order_number: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    client_name: Mapped[str] = mapped_column(String(255), nullable=False)
    client_phone: Mapped[str] = mapped_column(String(64), nullable=False)
    client_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    client_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    total: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    status: Mapped[str] = mapped_column(String(32), default="new", nullable=False, index=True)

    items: Mapped[list["CheckoutOrderItem"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class CheckoutOrderItem(IdMixin, Base):
    """Snapshot of a cart line at checkout time."""

    __tablename__ = "checkout_order_items"

    order_id: Mapped[int] = mapped_column(
        ForeignKey("checkout_orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id: Mapped[int | None] = mapped_column(nullable=True)
    product_name: Mapped[str] = mapped_column(String(255), nullable=False)
    product_price: Mapped[float] = mapped_column(
        Numeric(12, 2, asdecimal=False),
        nullable=False,
    )
    quantity: Mapped[int] = mapped_column(nullable=False)

    order: Mapped[CheckoutOrder] = relationship(back_populates="items")
