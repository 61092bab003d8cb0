"""
Subscriptions API Endpoints.
"""

from fastapi import APIRouter, Query

from sitekit.backend.core.dependencies import CurrentUser, DbSession, RequestId
from sitekit.backend.schemas.base import ApiResponse, MessageResponse
from sitekit.backend.schemas.subscription import (
    PaymentCreate,
    PaymentResponse,
    PlanCreate,
    PlanResponse,
    PlanUpdate,
    SubscribeRequest,
    SubscribeResult,
    SubscriptionResponse,
    SubscriptionStats,
    SubscriptionStatusUpdate,
)
from sitekit.backend.services.subscription import SubscriptionService

router = APIRouter()


@router.get("/plans", response_model=ApiResponse[list[PlanResponse]], summary="Active plans")
async def active_plans(
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[PlanResponse]]:
    plans = await SubscriptionService(db).active_plans()
    return ApiResponse(data=[PlanResponse.model_validate(p) for p in plans])


@router.post(
    "/subscribe",
    response_model=ApiResponse[SubscribeResult],
    status_code=201,
    summary="Subscribe to a plan",
)
async def subscribe(
    data: SubscribeRequest,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[SubscribeResult]:
    subscription = await SubscriptionService(db).subscribe(data)
    return ApiResponse(
        data=SubscribeResult(
            subscription_id=subscription.id,
            plan=subscription.plan.name,
            next_billing=subscription.next_billing_date,
        )
    )


@router.get("", response_model=ApiResponse[list[SubscriptionResponse]], summary="All subscriptions")
async def list_subscriptions(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
    status: str | None = Query(default=None),
) -> ApiResponse[list[SubscriptionResponse]]:
    subscriptions = await SubscriptionService(db).list_subscriptions(status)
    return ApiResponse(data=[SubscriptionResponse.from_model(s) for s in subscriptions])


@router.get("/stats", response_model=ApiResponse[SubscriptionStats], summary="Subscription stats")
async def subscription_stats(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[SubscriptionStats]:
    return ApiResponse(data=await SubscriptionService(db).stats())


@router.patch(
    "/{subscription_id}/status",
    response_model=ApiResponse[SubscriptionResponse],
    summary="Change subscription status",
)
async def update_subscription_status(
    subscription_id: int,
    data: SubscriptionStatusUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[SubscriptionResponse]:
    subscription = await SubscriptionService(db).update_status(subscription_id, data.status)
    return ApiResponse(data=SubscriptionResponse.from_model(subscription))


@router.post(
    "/{subscription_id}/payments",
    response_model=ApiResponse[PaymentResponse],
    status_code=201,
    summary="Record a payment",
    description="A completed payment moves next_billing_date forward by one interval.",
)
async def record_payment(
    subscription_id: int,
    data: PaymentCreate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[PaymentResponse]:
    payment = await SubscriptionService(db).record_payment(subscription_id, data)
    return ApiResponse(data=PaymentResponse.model_validate(payment))


@router.get("/admin/plans", response_model=ApiResponse[list[PlanResponse]], summary="All plans")
async def list_plans(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[PlanResponse]]:
    plans = await SubscriptionService(db).list_plans()
    return ApiResponse(data=[PlanResponse.model_validate(p) for p in plans])


@router.post(
    "/admin/plans",
    response_model=ApiResponse[PlanResponse],
    status_code=201,
    summary="Create a plan",
)
async def create_plan(
    data: PlanCreate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[PlanResponse]:
    plan = await SubscriptionService(db).create_plan(data)
    return ApiResponse(data=PlanResponse.model_validate(plan))


@router.put("/admin/plans/{plan_id}", response_model=ApiResponse[PlanResponse], summary="Update a plan")
async def update_plan(
    plan_id: int,
    data: PlanUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[PlanResponse]:
    plan = await SubscriptionService(db).update_plan(plan_id, data)
    return ApiResponse(data=PlanResponse.model_validate(plan))


@router.delete(
    "/admin/plans/{plan_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Delete a plan",
)
async def delete_plan(
    plan_id: int,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await SubscriptionService(db).delete_plan(plan_id)
    return ApiResponse(data=MessageResponse(message="Plan deleted"))
