"""
Reviews API Endpoints.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from sitekit.backend.core.dependencies import CurrentUser, DbSession, RequestId
from sitekit.backend.core.pagination import (
    PaginationParams,
    create_paginated_response,
    get_pagination_params,
)
from sitekit.backend.schemas.base import ApiResponse, MessageResponse, PaginatedResponse
from sitekit.backend.schemas.review import (
    PublicReviewResponse,
    ReviewCreate,
    ReviewResponse,
    ReviewStats,
    ReviewStatusUpdate,
)
from sitekit.backend.services.review import ReviewService

router = APIRouter()


@router.get("", response_model=PaginatedResponse[PublicReviewResponse], summary="Approved reviews")
async def list_reviews(
    db: DbSession,
    request_id: RequestId,
    pagination: PaginationParams = Depends(get_pagination_params),
) -> dict[str, Any]:
    reviews, total = await ReviewService(db).list_approved(pagination.limit, pagination.offset)
    return create_paginated_response(
        items=reviews,
        item_schema=PublicReviewResponse,
        total=total,
        limit=pagination.limit,
        offset=pagination.offset,
        request_id=request_id,
    )


@router.get("/stats", response_model=ApiResponse[ReviewStats], summary="Rating stats")
async def review_stats(
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[ReviewStats]:
    return ApiResponse(data=await ReviewService(db).stats())


@router.post(
    "",
    response_model=ApiResponse[MessageResponse],
    status_code=201,
    summary="Submit a review",
    description="New reviews are pending until approved.",
)
async def submit_review(
    data: ReviewCreate,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await ReviewService(db).submit(data)
    return ApiResponse(data=MessageResponse(message="Review submitted for moderation"))


@router.get("/admin/all", response_model=ApiResponse[list[ReviewResponse]], summary="All reviews")
async def admin_list_reviews(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
    status: str | None = Query(default=None),
) -> ApiResponse[list[ReviewResponse]]:
    reviews = await ReviewService(db).list_all(status)
    return ApiResponse(data=[ReviewResponse.model_validate(r) for r in reviews])


@router.patch(
    "/admin/{review_id}/status",
    response_model=ApiResponse[ReviewResponse],
    summary="Moderate a review",
)
async def update_review_status(
    review_id: int,
    data: ReviewStatusUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[ReviewResponse]:
    review = await ReviewService(db).update_status(review_id, data.status)
    return ApiResponse(data=ReviewResponse.model_validate(review))


@router.delete("/admin/{review_id}", response_model=ApiResponse[MessageResponse], summary="Delete a review")
async def delete_review(
    review_id: int,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await ReviewService(db).delete(review_id)
    return ApiResponse(data=MessageResponse(message="Review deleted"))
