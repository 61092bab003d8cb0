"""
Cart and Checkout API Endpoints.

The cart is identified by the `cart_session` cookie or the
`X-Cart-Session` header; a new id is issued as a cookie when neither
is present.
"""

from fastapi import APIRouter, Query

from sitekit.backend.core.dependencies import CartSession, CurrentUser, DbSession, RequestId
from sitekit.backend.schemas.base import ApiResponse, MessageResponse
from sitekit.backend.schemas.cart import (
    CartAddRequest,
    CartCountResponse,
    CartItemResponse,
    CartQuantityUpdate,
    CartResponse,
    CheckoutOrderDetail,
    CheckoutOrderResponse,
    CheckoutRequest,
    CheckoutResult,
    CheckoutStats,
    CheckoutStatusUpdate,
    OrderTrackingResponse,
)
from sitekit.backend.services.cart import CartService, cart_total

router = APIRouter()


@router.get("", response_model=ApiResponse[CartResponse], summary="Current cart")
async def get_cart(
    cart_session: CartSession,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[CartResponse]:
    items = await CartService(db).get_cart(cart_session)
    return ApiResponse(
        data=CartResponse(
            items=[CartItemResponse.model_validate(i) for i in items],
            total=cart_total(items),
            count=len(items),
        )
    )


@router.post(
    "",
    response_model=ApiResponse[CartCountResponse],
    status_code=201,
    summary="Add a product to the cart",
)
async def add_to_cart(
    data: CartAddRequest,
    cart_session: CartSession,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[CartCountResponse]:
    count = await CartService(db).add_item(cart_session, data.product_id, data.quantity)
    return ApiResponse(data=CartCountResponse(message="Added to cart", count=count))


@router.delete("", response_model=ApiResponse[MessageResponse], summary="Empty the cart")
async def clear_cart(
    cart_session: CartSession,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await CartService(db).clear(cart_session)
    return ApiResponse(data=MessageResponse(message="Cart cleared"))


@router.post(
    "/checkout",
    response_model=ApiResponse[CheckoutResult],
    status_code=201,
    summary="Place an order from the cart",
)
async def checkout(
    data: CheckoutRequest,
    cart_session: CartSession,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[CheckoutResult]:
    order = await CartService(db).checkout(cart_session, data)
    return ApiResponse(data=CheckoutResult(order_number=order.order_number, total=order.total))


@router.get(
    "/order/{order_number}",
    response_model=ApiResponse[OrderTrackingResponse],
    summary="Track an order",
)
async def track_order(
    order_number: str,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[OrderTrackingResponse]:
    order = await CartService(db).track(order_number)
    return ApiResponse(data=OrderTrackingResponse.model_validate(order))


@router.get(
    "/admin/orders",
    response_model=ApiResponse[list[CheckoutOrderResponse]],
    summary="List checkout orders",
)
async def admin_list_orders(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
    status: str | None = Query(default=None),
) -> ApiResponse[list[CheckoutOrderResponse]]:
    orders = await CartService(db).list_orders(status)
    return ApiResponse(data=[CheckoutOrderResponse.model_validate(o) for o in orders])


@router.get("/admin/stats", response_model=ApiResponse[CheckoutStats], summary="Checkout statistics")
async def admin_stats(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[CheckoutStats]:
    return ApiResponse(data=await CartService(db).stats())


@router.get(
    "/admin/orders/{order_id}",
    response_model=ApiResponse[CheckoutOrderDetail],
    summary="Get an order with its items",
)
async def admin_get_order(
    order_id: int,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[CheckoutOrderDetail]:
    order = await CartService(db).get_order(order_id)
    return ApiResponse(data=CheckoutOrderDetail.model_validate(order))


@router.patch(
    "/admin/orders/{order_id}/status",
    response_model=ApiResponse[CheckoutOrderResponse],
    summary="Change order status",
)
async def admin_update_status(
    order_id: int,
    data: CheckoutStatusUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[CheckoutOrderResponse]:
    order = await CartService(db).update_status(order_id, data.status)
    return ApiResponse(data=CheckoutOrderResponse.model_validate(order))


@router.delete(
    "/admin/orders/{order_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Delete an order",
)
async def admin_delete_order(
    order_id: int,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await CartService(db).delete_order(order_id)
    return ApiResponse(data=MessageResponse(message="Order deleted"))


@router.put(
    "/{item_id}",
    response_model=ApiResponse[CartItemResponse],
    summary="Change a cart line's quantity",
)
async def update_cart_item(
    item_id: int,
    data: CartQuantityUpdate,
    cart_session: CartSession,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[CartItemResponse]:
    item = await CartService(db).update_quantity(cart_session, item_id, data.quantity)
    return ApiResponse(data=CartItemResponse.model_validate(item))


@router.delete(
    "/{item_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Remove a cart line",
)
async def remove_cart_item(
    item_id: int,
    cart_session: CartSession,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await CartService(db).remove_item(cart_session, item_id)
    return ApiResponse(data=MessageResponse(message="Item removed"))
