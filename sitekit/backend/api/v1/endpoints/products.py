"""
Products API Endpoints.

Per-site storefront products. Create and update take multipart forms
with an optional `image` file and a `translations` JSON field.
"""

from fastapi import APIRouter, File, Form, Query, UploadFile

from sitekit.backend.core.dependencies import (
    AdminUser,
    CurrentUser,
    DbSession,
    RequestId,
    Storage,
)
from sitekit.backend.schemas.base import (
    ApiResponse,
    MessageResponse,
    ReorderRequest,
    VisibilityUpdate,
)
from sitekit.backend.schemas.product import (
    BatchCategoryRequest,
    BatchDeleteRequest,
    BatchResult,
    BatchVisibilityRequest,
    ProductResponse,
)
from sitekit.backend.services.product import ProductForm, ProductService

router = APIRouter()


@router.get(
    "/{site}",
    response_model=ApiResponse[list[ProductResponse]],
    summary="List products",
)
async def list_products(
    site: str,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
    category_id: int | None = Query(default=None, description="Filter by category id"),
) -> ApiResponse[list[ProductResponse]]:
    products = await ProductService(db).list_products(site, category_id=category_id)
    return ApiResponse(data=[ProductResponse.from_model(p) for p in products])


@router.get(
    "/{site}/{product_id}",
    response_model=ApiResponse[ProductResponse],
    summary="Get a product",
)
async def get_product(
    site: str,
    product_id: int,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[ProductResponse]:
    product = await ProductService(db).get_product(site, product_id)
    return ApiResponse(data=ProductResponse.from_model(product))


@router.post(
    "/{site}",
    response_model=ApiResponse[ProductResponse],
    status_code=201,
    summary="Create a product",
)
async def create_product(
    site: str,
    user: CurrentUser,
    db: DbSession,
    storage: Storage,
    request_id: RequestId,
    product_key: str = Form(""),
    category_id: int | None = Form(None),
    price: str | None = Form(None),
    subcategory_type: str | None = Form(None),
    visible: bool = Form(True),
    translations: str | None = Form(None),
    image: UploadFile | None = File(None),
) -> ApiResponse[ProductResponse]:
    form = ProductForm(
        product_key=product_key,
        category_id=category_id,
        price=price,
        subcategory_type=subcategory_type,
        visible=visible,
        translations=translations,
    )
    product = await ProductService(db, storage).create_product(site, form, image)
    return ApiResponse(data=ProductResponse.from_model(product))


@router.put(
    "/{site}/{product_id}",
    response_model=ApiResponse[ProductResponse],
    summary="Update a product",
    description="Replaces the product fields; a new image replaces and deletes the old one.",
)
async def update_product(
    site: str,
    product_id: int,
    user: CurrentUser,
    db: DbSession,
    storage: Storage,
    request_id: RequestId,
    product_key: str = Form(""),
    category_id: int | None = Form(None),
    price: str | None = Form(None),
    subcategory_type: str | None = Form(None),
    visible: bool = Form(True),
    translations: str | None = Form(None),
    image: UploadFile | None = File(None),
) -> ApiResponse[ProductResponse]:
    form = ProductForm(
        product_key=product_key,
        category_id=category_id,
        price=price,
        subcategory_type=subcategory_type,
        visible=visible,
        translations=translations,
    )
    product = await ProductService(db, storage).update_product(site, product_id, form, image)
    return ApiResponse(data=ProductResponse.from_model(product))


@router.patch(
    "/{site}/{product_id}/visibility",
    response_model=ApiResponse[ProductResponse],
    summary="Show or hide a product",
)
async def set_product_visibility(
    site: str,
    product_id: int,
    data: VisibilityUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[ProductResponse]:
    product = await ProductService(db).set_visibility(site, product_id, data.visible)
    return ApiResponse(data=ProductResponse.from_model(product))


@router.post(
    "/{site}/batch/visibility",
    response_model=ApiResponse[BatchResult],
    summary="Show or hide several products",
)
async def batch_visibility(
    site: str,
    data: BatchVisibilityRequest,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[BatchResult]:
    updated = await ProductService(db).batch_visibility(site, data.ids, data.visible)
    return ApiResponse(data=BatchResult(updated=updated))


@router.post(
    "/{site}/batch/category",
    response_model=ApiResponse[BatchResult],
    summary="Move several products to a category",
)
async def batch_category(
    site: str,
    data: BatchCategoryRequest,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[BatchResult]:
    updated = await ProductService(db).batch_category(site, data.ids, data.category_id)
    return ApiResponse(data=BatchResult(updated=updated))


@router.post(
    "/{site}/batch/delete",
    response_model=ApiResponse[BatchResult],
    summary="Delete several products",
)
async def batch_delete(
    site: str,
    data: BatchDeleteRequest,
    admin: AdminUser,
    db: DbSession,
    storage: Storage,
    request_id: RequestId,
) -> ApiResponse[BatchResult]:
    deleted = await ProductService(db, storage).batch_delete(site, data.ids)
    return ApiResponse(data=BatchResult(deleted=deleted))


@router.post(
    "/{site}/reorder",
    response_model=ApiResponse[MessageResponse],
    summary="Reorder products",
)
async def reorder_products(
    site: str,
    data: ReorderRequest,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await ProductService(db).reorder(site, data.to_pairs())
    return ApiResponse(data=MessageResponse(message="Order updated"))


@router.delete(
    "/{site}/{product_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Delete a product",
)
async def delete_product(
    site: str,
    product_id: int,
    admin: AdminUser,
    db: DbSession,
    storage: Storage,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await ProductService(db, storage).delete_product(site, product_id)
    return ApiResponse(data=MessageResponse(message="Product deleted"))
