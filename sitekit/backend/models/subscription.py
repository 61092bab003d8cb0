"""
Subscription Models.

Recurring plans, client subscriptions and their recorded payments.
"""

from datetime import date, datetime

from sqlalchemy import JSON, Date, DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sitekit.backend.models.base import Base, CreatedAtMixin, IdMixin

PLAN_INTERVALS = ("week", "month", "year")
SUBSCRIPTION_STATUSES = ("active", "paused", "cancelled", "expired")
PAYMENT_STATUSES = ("pending", "completed", "failed", "refunded")


class SubscriptionPlan(IdMixin, CreatedAtMixin, Base):
    """Recurring plan."""

    __tablename__ = "subscription_plans"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    currency: Mapped[str] = mapped_column(String(8), default="PLN", nullable=False)
    interval: Mapped[str] = mapped_column(String(8), default="month", nullable=False)
    interval_count: Mapped[int] = mapped_column(default=1, nullable=False)
    features: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    active: Mapped[bool] = mapped_column(default=True, nullable=False)
    sort_order: Mapped[int] = mapped_column(default=0, nullable=False)


class Subscription(IdMixin, CreatedAtMixin, Base):
    """A client's subscription to a plan."""

    __tablename__ = "subscriptions"

    plan_id: Mapped[int] = mapped_column(
        ForeignKey("subscription_plans.id"),
        nullable=False,
        index=True,
    )
    client_name: Mapped[str] = mapped_column(String(255), nullable=False)
    client_email: Mapped[str] = mapped_column(String(255), nullable=False)
    client_phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    status: Mapped[str] = mapped_column(String(16), default="active", nullable=False, index=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    next_billing_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    cancelled_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    plan: Mapped[SubscriptionPlan] = relationship(lazy="selectin")
    payments: Mapped[list["SubscriptionPayment"]] = relationship(
        back_populates="subscription",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="SubscriptionPayment.id.desc()",
    )


class SubscriptionPayment(IdMixin, CreatedAtMixin, Base):
    """Payment recorded against a subscription."""

    __tablename__ = "subscription_payments"

    subscription_id: Mapped[int] = mapped_column(
        ForeignKey("subscriptions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    amount: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    currency: Mapped[str] = mapped_column(String(8), default="PLN", nullable=False)
    status: Mapped[str] = mapped_column(String(16), default="pending", nullable=False)
    payment_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    subscription: Mapped[Subscription] = relationship(back_populates="payments")
