"""
Booking Models.

Bookable services and client appointments.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sitekit.backend.models.base import Base, CreatedAtMixin, IdMixin

BOOKING_STATUSES = ("pending", "confirmed", "completed", "cancelled")


class BookingService(IdMixin, CreatedAtMixin, Base):
    """A service clients can book."""

    __tablename__ = "services"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    duration_minutes: Mapped[int] = mapped_column(default=60, nullable=False)
    price: Mapped[float] = mapped_column(
        Numeric(12, 2, asdecimal=False),
        default=0,
        nullable=False,
    )
    active: Mapped[bool] = mapped_column(default=True, nullable=False)


class Booking(IdMixin, CreatedAtMixin, Base):
    """Client appointment for a service at a local date and time."""

    __tablename__ = "bookings"

    service_id: Mapped[int] = mapped_column(
        ForeignKey("services.id"),
        nullable=False,
        index=True,
    )
    starts_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    client_name: Mapped[str] = mapped_column(String(255), nullable=False)
    client_phone: Mapped[str] = mapped_column(String(64), nullable=False)
    client_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(String(32), default="pending", nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    service: Mapped[BookingService] = relationship(lazy="selectin")
