"""
Catalog API Endpoints.

Public browsing under `/products` and `/categories`; management under
`/admin/...` for logged-in users.
"""

from typing import Any

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from sitekit.backend.core.dependencies import CurrentUser, DbSession, RequestId, Storage
from sitekit.backend.core.pagination import (
    PaginationParams,
    create_paginated_response,
    get_pagination_params,
)
from sitekit.backend.schemas.base import ApiResponse, MessageResponse, PaginatedResponse
from sitekit.backend.schemas.catalog import (
    CatalogCategoryCount,
    CatalogImageResponse,
    CatalogProductCreate,
    CatalogProductResponse,
    CatalogProductUpdate,
    StockUpdate,
)
from sitekit.backend.services.catalog import CatalogService

router = APIRouter()


@router.get(
    "/products",
    response_model=PaginatedResponse[CatalogProductResponse],
    summary="Browse visible products",
    description="Sort is one of price_asc, price_desc, name or newest; "
    "the default is the manual order, newest first within it.",
)
async def list_catalog_products(
    db: DbSession,
    request_id: RequestId,
    pagination: PaginationParams = Depends(get_pagination_params),
    category: str | None = Query(default=None),
    search: str | None = Query(default=None, max_length=100),
    sort: str | None = Query(default=None),
) -> dict[str, Any]:
    products, total = await CatalogService(db).search(
        category=category,
        search=search,
        sort=sort,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    return create_paginated_response(
        items=products,
        item_schema=CatalogProductResponse,
        total=total,
        limit=pagination.limit,
        offset=pagination.offset,
        request_id=request_id,
    )


@router.get(
    "/products/{product_id}",
    response_model=ApiResponse[CatalogProductResponse],
    summary="Get a visible product",
)
async def get_catalog_product(
    product_id: int,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[CatalogProductResponse]:
    product = await CatalogService(db).get_visible(product_id)
    return ApiResponse(data=CatalogProductResponse.model_validate(product))


@router.get(
    "/categories",
    response_model=ApiResponse[list[CatalogCategoryCount]],
    summary="Categories with visible product counts",
)
async def list_catalog_categories(
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[CatalogCategoryCount]]:
    return ApiResponse(data=await CatalogService(db).categories())


@router.get(
    "/admin/products",
    response_model=ApiResponse[list[CatalogProductResponse]],
    summary="List all products, including hidden",
)
async def admin_list_products(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[CatalogProductResponse]]:
    products = await CatalogService(db).list_all()
    return ApiResponse(data=[CatalogProductResponse.model_validate(p) for p in products])


@router.post(
    "/admin/products",
    response_model=ApiResponse[CatalogProductResponse],
    status_code=201,
    summary="Create a product",
)
async def admin_create_product(
    data: CatalogProductCreate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[CatalogProductResponse]:
    product = await CatalogService(db).create_product(data)
    return ApiResponse(data=CatalogProductResponse.model_validate(product))


@router.put(
    "/admin/products/{product_id}",
    response_model=ApiResponse[CatalogProductResponse],
    summary="Update a product",
)
async def admin_update_product(
    product_id: int,
    data: CatalogProductUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[CatalogProductResponse]:
    product = await CatalogService(db).update_product(product_id, data)
    return ApiResponse(data=CatalogProductResponse.model_validate(product))


@router.patch(
    "/admin/products/{product_id}/stock",
    response_model=ApiResponse[CatalogProductResponse],
    summary="Set stock level",
)
async def admin_update_stock(
    product_id: int,
    data: StockUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[CatalogProductResponse]:
    product = await CatalogService(db).update_stock(product_id, data.stock)
    return ApiResponse(data=CatalogProductResponse.model_validate(product))


@router.delete(
    "/admin/products/{product_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Delete a product",
)
async def admin_delete_product(
    product_id: int,
    user: CurrentUser,
    db: DbSession,
    storage: Storage,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await CatalogService(db, storage).delete_product(product_id)
    return ApiResponse(data=MessageResponse(message="Product deleted"))


@router.post(
    "/admin/products/{product_id}/images",
    response_model=ApiResponse[CatalogImageResponse],
    status_code=201,
    summary="Upload a product image",
)
async def admin_upload_image(
    product_id: int,
    user: CurrentUser,
    db: DbSession,
    storage: Storage,
    request_id: RequestId,
    is_primary: bool = Form(False),
    sort_order: int = Form(0),
    image: UploadFile | None = File(None),
) -> ApiResponse[CatalogImageResponse]:
    created = await CatalogService(db, storage).add_image(product_id, image, is_primary, sort_order)
    return ApiResponse(data=CatalogImageResponse.model_validate(created))


@router.delete(
    "/admin/images/{image_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Delete a product image",
)
async def admin_delete_image(
    image_id: int,
    user: CurrentUser,
    db: DbSession,
    storage: Storage,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await CatalogService(db, storage).delete_image(image_id)
    return ApiResponse(data=MessageResponse(message="Image deleted"))
