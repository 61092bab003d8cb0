"""
Newsletter Models.

Subscribers with one-click unsubscribe tokens, and campaign records.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from sitekit.backend.core.utils import random_hex, utc_now
from sitekit.backend.models.base import Base, CreatedAtMixin, IdMixin

SUBSCRIBER_STATUSES = ("active", "unsubscribed")


class Subscriber(IdMixin, Base):
    """Newsletter subscriber."""

    __tablename__ = "newsletter_subscribers"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    status: Mapped[str] = mapped_column(String(16), default="active", nullable=False, index=True)
    unsubscribe_token: Mapped[str] = mapped_column(
        String(32),
        unique=True,
        default=random_hex,
        nullable=False,
    )
    subscribed_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now, nullable=False)
    unsubscribed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)


class Campaign(IdMixin, CreatedAtMixin, Base):
    """Newsletter campaign record (delivery happens outside this service)."""

    __tablename__ = "newsletter_campaigns"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    subject: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(16), default="draft", nullable=False)
    sent_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    recipient_count: Mapped[int] = mapped_column(default=0, nullable=False)
