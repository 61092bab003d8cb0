"""
FAQ API Endpoints.
"""

from fastapi import APIRouter, Query

from sitekit.backend.core.dependencies import CurrentUser, DbSession, RequestId
from sitekit.backend.schemas.base import ApiResponse, MessageResponse
from sitekit.backend.schemas.faq import (
    FaqCategoryCreate,
    FaqCategoryResponse,
    FaqCategoryUpdate,
    FaqGroup,
    FaqItemCreate,
    FaqItemResponse,
    FaqItemUpdate,
)
from sitekit.backend.services.faq import FaqService

router = APIRouter()


@router.get("", response_model=ApiResponse[list[FaqGroup]], summary="Visible FAQ grouped by category")
async def get_faq(
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[FaqGroup]]:
    return ApiResponse(data=await FaqService(db).grouped())


@router.get("/categories", response_model=ApiResponse[list[FaqCategoryResponse]], summary="FAQ categories")
async def list_categories(
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[FaqCategoryResponse]]:
    categories = await FaqService(db).list_categories()
    return ApiResponse(data=[FaqCategoryResponse.model_validate(c) for c in categories])


@router.get("/admin/items", response_model=ApiResponse[list[FaqItemResponse]], summary="All FAQ items")
async def admin_list_items(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
    category_id: int | None = Query(default=None),
) -> ApiResponse[list[FaqItemResponse]]:
    items = await FaqService(db).list_items(category_id)
    return ApiResponse(data=[FaqItemResponse.model_validate(i) for i in items])


@router.post(
    "/admin/items",
    response_model=ApiResponse[FaqItemResponse],
    status_code=201,
    summary="Create a FAQ item",
)
async def admin_create_item(
    data: FaqItemCreate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[FaqItemResponse]:
    item = await FaqService(db).create_item(data)
    return ApiResponse(data=FaqItemResponse.model_validate(item))


@router.put("/admin/items/{item_id}", response_model=ApiResponse[FaqItemResponse], summary="Update a FAQ item")
async def admin_update_item(
    item_id: int,
    data: FaqItemUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[FaqItemResponse]:
    item = await FaqService(db).update_item(item_id, data)
    return ApiResponse(data=FaqItemResponse.model_validate(item))


@router.delete("/admin/items/{item_id}", response_model=ApiResponse[MessageResponse], summary="Delete a FAQ item")
async def admin_delete_item(
    item_id: int,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await FaqService(db).delete_item(item_id)
    return ApiResponse(data=MessageResponse(message="FAQ item deleted"))


@router.get(
    "/admin/categories",
    response_model=ApiResponse[list[FaqCategoryResponse]],
    summary="All FAQ categories",
)
async def admin_list_categories(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[FaqCategoryResponse]]:
    categories = await FaqService(db).list_categories()
    return ApiResponse(data=[FaqCategoryResponse.model_validate(c) for c in categories])


@router.post(
    "/admin/categories",
    response_model=ApiResponse[FaqCategoryResponse],
    status_code=201,
    summary="Create a FAQ category",
)
async def admin_create_category(
    data: FaqCategoryCreate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[FaqCategoryResponse]:
    category = await FaqService(db).create_category(data)
    return ApiResponse(data=FaqCategoryResponse.model_validate(category))


@router.put(
    "/admin/categories/{category_id}",
    response_model=ApiResponse[FaqCategoryResponse],
    summary="Update a FAQ category",
)
async def admin_update_category(
    category_id: int,
    data: FaqCategoryUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[FaqCategoryResponse]:
    category = await FaqService(db).update_category(category_id, data)
    return ApiResponse(data=FaqCategoryResponse.model_validate(category))


@router.delete(
    "/admin/categories/{category_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Delete a FAQ category",
    description="Items in the category become uncategorised.",
)
async def admin_delete_category(
    category_id: int,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await FaqService(db).delete_category(category_id)
    return ApiResponse(data=MessageResponse(message="Category deleted"))
