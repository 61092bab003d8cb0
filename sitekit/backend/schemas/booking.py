"""
Booking Schemas.

Appointment times are local wall-clock times without a timezone, as
produced by the availability endpoint (`YYYY-MM-DDTHH:MM`).
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from sitekit.backend.models.booking import Booking


class ServiceCreate(BaseModel):
    name: str = Field(default="", max_length=255)
    description: str | None = None
    duration_minutes: int = Field(default=60, ge=5, le=600)
    price: float = Field(default=0, ge=0)
    active: bool = True


class ServiceUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    duration_minutes: int | None = Field(default=None, ge=5, le=600)
    price: float | None = Field(default=None, ge=0)
    active: bool | None = None


class ServiceResponse(BaseModel):
    id: int
    name: str
    description: str | None
    duration_minutes: int
    price: float
    active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TimeSlot(BaseModel):
    datetime: str
    available: bool


class Availability(BaseModel):
    date: str
    service_id: int
    slots: list[TimeSlot]


class BookingCreate(BaseModel):
    """Required fields are checked by the service and reported as 400."""

    service_id: int | None = None
    starts_at: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("datetime", "starts_at"),
    )
    client_name: str = Field(default="", max_length=255)
    client_phone: str = Field(default="", max_length=64)
    client_email: str | None = Field(default=None, max_length=255)
    notes: str | None = Field(default=None, max_length=2000)


class BookingResponse(BaseModel):
    id: int
    service_id: int
    service_name: str | None = None
    starts_at: datetime
    client_name: str
    client_phone: str
    client_email: str | None
    status: str
    notes: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_model(cls, booking: Booking) -> "BookingResponse":
        response = cls.model_validate(booking)
        response.service_name = booking.service.name if booking.service else None
        return response


class BookingStatusUpdate(BaseModel):
    status: str = ""
