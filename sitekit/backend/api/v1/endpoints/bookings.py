"""
Bookings API Endpoints.
"""

from datetime import date

from fastapi import APIRouter, Query

from sitekit.backend.core.dependencies import CurrentUser, DbSession, RequestId
from sitekit.backend.schemas.base import ApiResponse, MessageResponse
from sitekit.backend.schemas.booking import (
    Availability,
    BookingCreate,
    BookingResponse,
    BookingStatusUpdate,
    ServiceCreate,
    ServiceResponse,
    ServiceUpdate,
)
from sitekit.backend.services.booking import BookingsService

router = APIRouter()


@router.get("/services", response_model=ApiResponse[list[ServiceResponse]], summary="Active services")
async def list_active_services(
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[ServiceResponse]]:
    services = await BookingsService(db).list_services(active_only=True)
    return ApiResponse(data=[ServiceResponse.model_validate(s) for s in services])


@router.get(
    "/availability/{service_id}/{day}",
    response_model=ApiResponse[Availability],
    summary="Free and taken slots for a day",
)
async def get_availability(
    service_id: int,
    day: date,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[Availability]:
    return ApiResponse(data=await BookingsService(db).availability(service_id, day))


@router.post("", response_model=ApiResponse[BookingResponse], status_code=201, summary="Book a slot")
async def create_booking(
    data: BookingCreate,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[BookingResponse]:
    booking = await BookingsService(db).create_booking(data)
    return ApiResponse(data=BookingResponse.from_model(booking))


@router.get("/admin", response_model=ApiResponse[list[BookingResponse]], summary="List bookings")
async def admin_list_bookings(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
    status: str | None = Query(default=None),
    day: date | None = Query(default=None, alias="date"),
    service_id: int | None = Query(default=None),
) -> ApiResponse[list[BookingResponse]]:
    bookings = await BookingsService(db).list_bookings(status, day, service_id)
    return ApiResponse(data=[BookingResponse.from_model(b) for b in bookings])


@router.get(
    "/admin/services",
    response_model=ApiResponse[list[ServiceResponse]],
    summary="List all services",
)
async def admin_list_services(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[ServiceResponse]]:
    services = await BookingsService(db).list_services()
    return ApiResponse(data=[ServiceResponse.model_validate(s) for s in services])


@router.post(
    "/admin/services",
    response_model=ApiResponse[ServiceResponse],
    status_code=201,
    summary="Create a service",
)
async def admin_create_service(
    data: ServiceCreate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[ServiceResponse]:
    service = await BookingsService(db).create_service(data)
    return ApiResponse(data=ServiceResponse.model_validate(service))


@router.put(
    "/admin/services/{service_id}",
    response_model=ApiResponse[ServiceResponse],
    summary="Update a service",
)
async def admin_update_service(
    service_id: int,
    data: ServiceUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[ServiceResponse]:
    service = await BookingsService(db).update_service(service_id, data)
    return ApiResponse(data=ServiceResponse.model_validate(service))


@router.delete(
    "/admin/services/{service_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Delete a service",
)
async def admin_delete_service(
    service_id: int,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await BookingsService(db).delete_service(service_id)
    return ApiResponse(data=MessageResponse(message="Service deleted"))


@router.patch(
    "/admin/{booking_id}/status",
    response_model=ApiResponse[BookingResponse],
    summary="Change booking status",
)
async def admin_update_booking_status(
    booking_id: int,
    data: BookingStatusUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[BookingResponse]:
    booking = await BookingsService(db).update_status(booking_id, data.status)
    return ApiResponse(data=BookingResponse.from_model(booking))
