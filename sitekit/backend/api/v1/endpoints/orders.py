"""
Orders API Endpoints.

Per-site lead orders. Creating an order is public (website forms);
everything else needs a session and deleting needs the admin role.
"""

from datetime import date

from fastapi import APIRouter, Query

from sitekit.backend.core.dependencies import AdminUser, CurrentUser, DbSession, RequestId
from sitekit.backend.schemas.base import ApiResponse, MessageResponse
from sitekit.backend.schemas.order import (
    DailyCount,
    OrderCreate,
    OrderNotesUpdate,
    OrderResponse,
    OrderStats,
    OrderStatusUpdate,
    PopularProduct,
)
from sitekit.backend.services.order import OrderService

router = APIRouter()


@router.get(
    "/{site}",
    response_model=ApiResponse[list[OrderResponse]],
    summary="List orders",
    description="Newest first. `date_to` includes the whole day; status `all` disables the filter.",
)
async def list_orders(
    site: str,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
    status: str | None = Query(default=None),
    date_from: date | None = Query(default=None),
    date_to: date | None = Query(default=None),
) -> ApiResponse[list[OrderResponse]]:
    orders = await OrderService(db).list_orders(site, status, date_from, date_to)
    return ApiResponse(data=[OrderResponse.model_validate(o) for o in orders])


@router.get("/{site}/stats", response_model=ApiResponse[OrderStats], summary="Order counts by status")
async def order_stats(
    site: str,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[OrderStats]:
    return ApiResponse(data=await OrderService(db).get_stats(site))


@router.get(
    "/{site}/stats/chart",
    response_model=ApiResponse[list[DailyCount]],
    summary="Orders per day, last 7 days",
)
async def order_chart(
    site: str,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[DailyCount]]:
    return ApiResponse(data=await OrderService(db).get_chart(site))


@router.get(
    "/{site}/stats/popular",
    response_model=ApiResponse[list[PopularProduct]],
    summary="Top 5 ordered products",
)
async def popular_products(
    site: str,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[PopularProduct]]:
    return ApiResponse(data=await OrderService(db).get_popular(site))


@router.get("/{site}/{order_id}", response_model=ApiResponse[OrderResponse], summary="Get an order")
async def get_order(
    site: str,
    order_id: int,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[OrderResponse]:
    order = await OrderService(db).get_order(site, order_id)
    return ApiResponse(data=OrderResponse.model_validate(order))


@router.post(
    "/{site}",
    response_model=ApiResponse[OrderResponse],
    status_code=201,
    summary="Create an order",
    description="Public endpoint used by website forms.",
)
async def create_order(
    site: str,
    data: OrderCreate,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[OrderResponse]:
    order = await OrderService(db).create_order(site, data)
    return ApiResponse(data=OrderResponse.model_validate(order))


@router.patch(
    "/{site}/{order_id}/status",
    response_model=ApiResponse[OrderResponse],
    summary="Change order status",
)
async def update_order_status(
    site: str,
    order_id: int,
    data: OrderStatusUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[OrderResponse]:
    order = await OrderService(db).update_status(site, order_id, data.status)
    return ApiResponse(data=OrderResponse.model_validate(order))


@router.patch(
    "/{site}/{order_id}/notes",
    response_model=ApiResponse[OrderResponse],
    summary="Update order notes",
)
async def update_order_notes(
    site: str,
    order_id: int,
    data: OrderNotesUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[OrderResponse]:
    order = await OrderService(db).update_notes(site, order_id, data.notes)
    return ApiResponse(data=OrderResponse.model_validate(order))


@router.delete(
    "/{site}/{order_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Delete an order",
)
async def delete_order(
    site: str,
    order_id: int,
    admin: AdminUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await OrderService(db).delete_order(site, order_id)
    return ApiResponse(data=MessageResponse(message="Order deleted"))
