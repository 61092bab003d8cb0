"""
Booking Repositories.
"""

from datetime import date, datetime, time, timedelta

from sitekit.backend.models.booking import Booking, BookingService
from sitekit.backend.repositories.base import BaseRepository


def _day_bounds(day: date) -> tuple[datetime, datetime]:
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


class BookingServiceRepository(BaseRepository[BookingService]):
    model = BookingService
    not_found_message = "Service not found"

    async def list_services(self, active_only: bool = False) -> list[BookingService]:
        where = [BookingService.active.is_(True)] if active_only else []
        return await self.find(*where, order_by=[BookingService.name, BookingService.id])


class BookingRepository(BaseRepository[Booking]):
    model = Booking
    not_found_message = "Booking not found"

    async def list_bookings(
        self,
        status: str | None = None,
        day: date | None = None,
        service_id: int | None = None,
    ) -> list[Booking]:
        where = []
        if status:
            where.append(Booking.status == status)
        if day:
            start, end = _day_bounds(day)
            where += [Booking.starts_at >= start, Booking.starts_at < end]
        if service_id:
            where.append(Booking.service_id == service_id)
        return await self.find(*where, order_by=[Booking.starts_at.desc(), Booking.id.desc()])

    async def booked_times(self, service_id: int, day: date) -> set[datetime]:
        """Start times of non-cancelled bookings for a service on a day."""
        start, end = _day_bounds(day)
        bookings = await self.find(
            Booking.service_id == service_id,
            Booking.starts_at >= start,
            Booking.starts_at < end,
            Booking.status != "cancelled",
        )
        return {booking.starts_at for booking in bookings}

    async def is_taken(self, service_id: int, starts_at: datetime) -> bool:
        existing = await self.find_one(
            Booking.service_id == service_id,
            Booking.starts_at == starts_at,
            Booking.status != "cancelled",
        )
        return existing is not None
