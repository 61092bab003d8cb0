"""
Booking Service.

Availability is a fixed working day from 09:00 to 18:00 split into
consecutive slots of the service's duration; a slot is free when no
non-cancelled booking starts at that time.
"""

from datetime import date, datetime, time, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.core.exceptions import ConflictError, ValidationError
from sitekit.backend.models.booking import BOOKING_STATUSES, Booking, BookingService
from sitekit.backend.repositories.booking import BookingRepository, BookingServiceRepository
from sitekit.backend.schemas.booking import (
    Availability,
    BookingCreate,
    ServiceCreate,
    ServiceUpdate,
    TimeSlot,
)
from sitekit.backend.services.base import BaseService

DAY_START = time(9, 0)
DAY_END = time(18, 0)
SLOT_FORMAT = "%Y-%m-%dT%H:%M"


def day_slots(day: date, duration_minutes: int) -> list[datetime]:
    """Slot start times; the last slot ends no later than DAY_END."""
    step = timedelta(minutes=duration_minutes)
    start = datetime.combine(day, DAY_START)
    close = datetime.combine(day, DAY_END)
    slots = []
    while start + step <= close:
        slots.append(start)
        start += step
    return slots


class BookingsService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.services = BookingServiceRepository(session)
        self.bookings = BookingRepository(session)

    # Services

    async def list_services(self, active_only: bool = False) -> list[BookingService]:
        return await self.services.list_services(active_only)

    async def create_service(self, data: ServiceCreate) -> BookingService:
        if not data.name.strip():
            raise ValidationError("Name is required")
        service = await self.services.create(**data.model_dump())
        self._log_operation("Booking service created", service_id=service.id)
        return service

    async def update_service(self, service_id: int, data: ServiceUpdate) -> BookingService:
        changes = self._changes(data, self.services.model)
        return await self._execute_db_operation("update_service", self.services.update(service_id, **changes))

    async def delete_service(self, service_id: int) -> None:
        """
        Delete a service.

        Raises:
            ConflictError: If bookings still reference it
        """
        service = await self.services.get_by_id(service_id)
        if await self.bookings.count(Booking.service_id == service_id):
            raise ConflictError("Service has bookings; deactivate it instead")
        await self.session.delete(service)
        await self.session.flush()

    # Bookings

    async def availability(self, service_id: int, day: date) -> Availability:
        service = await self.services.get_by_id(service_id)
        booked = await self.bookings.booked_times(service_id, day)
        slots = [
            TimeSlot(datetime=slot.strftime(SLOT_FORMAT), available=slot not in booked)
            for slot in day_slots(day, service.duration_minutes)
        ]
        return Availability(date=day.isoformat(), service_id=service_id, slots=slots)

    async def create_booking(self, data: BookingCreate) -> Booking:
        """
        Book a slot.

        Raises:
            ValidationError: If a required field is missing or the service is inactive
            NotFoundError: If the service does not exist
            ConflictError: If the slot is already booked
        """
        self._validate_required(
            {
                "service_id": data.service_id,
                "datetime": data.starts_at,
                "client_name": data.client_name,
                "client_phone": data.client_phone,
            },
            ["service_id", "datetime", "client_name", "client_phone"],
            message="Required: service_id, datetime, client_name, client_phone",
        )
        service = await self.services.get_by_id(data.service_id)
        if not service.active:
            raise ValidationError("Service is not available")

        starts_at = data.starts_at.replace(tzinfo=None, second=0, microsecond=0)
        if await self.bookings.is_taken(service.id, starts_at):
            raise ConflictError("Time slot already booked")

        booking = await self.bookings.create(
            service_id=service.id,
            starts_at=starts_at,
            client_name=data.client_name.strip(),
            client_phone=data.client_phone.strip(),
            client_email=data.client_email or None,
            notes=data.notes or None,
            status="pending",
        )
        self._log_operation("Booking created", booking_id=booking.id, service_id=service.id)
        return booking

    async def list_bookings(
        self,
        status: str | None = None,
        day: date | None = None,
        service_id: int | None = None,
    ) -> list[Booking]:
        return await self.bookings.list_bookings(status, day, service_id)

    async def update_status(self, booking_id: int, status: str) -> Booking:
        self._validate_choice(
            status,
            BOOKING_STATUSES,
            f"Status must be one of: {', '.join(BOOKING_STATUSES)}",
        )
        return await self.bookings.update(booking_id, status=status)
