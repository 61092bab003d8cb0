"""
Categories API Endpoints.

Per-site storefront categories. Any logged-in user can edit;
deleting requires the admin role.
"""

from fastapi import APIRouter

from sitekit.backend.core.dependencies import AdminUser, CurrentUser, DbSession, RequestId
from sitekit.backend.schemas.base import (
    ApiResponse,
    MessageResponse,
    ReorderRequest,
    VisibilityUpdate,
)
from sitekit.backend.schemas.category import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
)
from sitekit.backend.services.category import CategoryService

router = APIRouter()


@router.get(
    "/{site}",
    response_model=ApiResponse[list[CategoryResponse]],
    summary="List categories",
    description="All categories of a site ordered by sort_order, then id.",
)
async def list_categories(
    site: str,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[CategoryResponse]]:
    categories = await CategoryService(db).list_categories(site)
    return ApiResponse(data=[CategoryResponse.model_validate(c) for c in categories])


@router.get(
    "/{site}/{category_id}",
    response_model=ApiResponse[CategoryResponse],
    summary="Get a category",
)
async def get_category(
    site: str,
    category_id: int,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[CategoryResponse]:
    category = await CategoryService(db).get_category(site, category_id)
    return ApiResponse(data=CategoryResponse.model_validate(category))


@router.post(
    "/{site}",
    response_model=ApiResponse[CategoryResponse],
    status_code=201,
    summary="Create a category",
)
async def create_category(
    site: str,
    data: CategoryCreate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[CategoryResponse]:
    category = await CategoryService(db).create_category(site, data)
    return ApiResponse(data=CategoryResponse.model_validate(category))


@router.post(
    "/{site}/reorder",
    response_model=ApiResponse[MessageResponse],
    summary="Reorder categories",
    description="Accepts a list of ids or a list of {id, sort_order} objects.",
)
async def reorder_categories(
    site: str,
    data: ReorderRequest,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await CategoryService(db).reorder(site, data.to_pairs())
    return ApiResponse(data=MessageResponse(message="Order updated"))


@router.put(
    "/{site}/{category_id}",
    response_model=ApiResponse[CategoryResponse],
    summary="Update a category",
)
async def update_category(
    site: str,
    category_id: int,
    data: CategoryUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[CategoryResponse]:
    category = await CategoryService(db).update_category(site, category_id, data)
    return ApiResponse(data=CategoryResponse.model_validate(category))


@router.patch(
    "/{site}/{category_id}/visibility",
    response_model=ApiResponse[CategoryResponse],
    summary="Show or hide a category",
)
async def set_category_visibility(
    site: str,
    category_id: int,
    data: VisibilityUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[CategoryResponse]:
    category = await CategoryService(db).set_visibility(site, category_id, data.visible)
    return ApiResponse(data=CategoryResponse.model_validate(category))


@router.delete(
    "/{site}/{category_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Delete a category",
)
async def delete_category(
    site: str,
    category_id: int,
    admin: AdminUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await CategoryService(db).delete_category(site, category_id)
    return ApiResponse(data=MessageResponse(message="Category deleted"))
