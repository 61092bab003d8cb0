"""
Public API Endpoints.

Unauthenticated reads used by the site widgets, and the public order form.
"""

from typing import Any

from fastapi import APIRouter, Query

from sitekit.backend.core.dependencies import DbSession, RequestId, Telegram
from sitekit.backend.schemas.base import ApiResponse
from sitekit.backend.schemas.category import CategoryResponse
from sitekit.backend.schemas.hexagon import HexagonResponse
from sitekit.backend.schemas.order import OrderCreate, PublicOrderResult
from sitekit.backend.schemas.portfolio import PortfolioProjectResponse
from sitekit.backend.schemas.product import ProductResponse
from sitekit.backend.schemas.site import ContactResponse
from sitekit.backend.services.category import CategoryService
from sitekit.backend.services.hexagon import HexagonService
from sitekit.backend.services.leads import LeadService
from sitekit.backend.services.order import OrderService
from sitekit.backend.services.portfolio import PortfolioService
from sitekit.backend.services.product import ProductService
from sitekit.backend.services.site import SiteService

router = APIRouter()


@router.get(
    "/contacts/{site}",
    response_model=ApiResponse[ContactResponse | dict[str, Any]],
    summary="Site contacts",
    description="Returns an empty object when the site has no contacts yet.",
)
async def public_contacts(
    site: str,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[ContactResponse | dict[str, Any]]:
    contact = await SiteService(db).find_contact(site)
    if contact is None:
        return ApiResponse(data={})
    return ApiResponse(data=ContactResponse.model_validate(contact))


@router.get(
    "/categories/{site}",
    response_model=ApiResponse[list[CategoryResponse]],
    summary="Visible categories",
)
async def public_categories(
    site: str,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[CategoryResponse]]:
    categories = await CategoryService(db).list_categories(site, visible_only=True)
    return ApiResponse(data=[CategoryResponse.model_validate(c) for c in categories])


@router.get(
    "/hexagons/{site}/active",
    response_model=ApiResponse[list[HexagonResponse]],
    summary="Visible hexagons",
)
async def public_hexagons(
    site: str,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[HexagonResponse]]:
    hexagons = await HexagonService(db).list_hexagons(site, visible_only=True)
    return ApiResponse(data=[HexagonResponse.model_validate(h) for h in hexagons])


@router.get(
    "/products/{site}",
    response_model=ApiResponse[list[ProductResponse]],
    summary="Visible products",
)
async def public_products(
    site: str,
    db: DbSession,
    request_id: RequestId,
    category: str | None = Query(default=None, description="Category key"),
    category_id: int | None = Query(default=None),
) -> ApiResponse[list[ProductResponse]]:
    products = await ProductService(db).list_products(
        site,
        category_id=category_id,
        category_key=category,
        visible_only=True,
    )
    return ApiResponse(data=[ProductResponse.from_model(p) for p in products])


@router.get(
    "/portfolio/{site}",
    response_model=ApiResponse[list[PortfolioProjectResponse]],
    summary="Visible portfolio projects",
)
async def public_portfolio(
    site: str,
    db: DbSession,
    request_id: RequestId,
    category: str | None = Query(default=None),
) -> ApiResponse[list[PortfolioProjectResponse]]:
    projects = await PortfolioService(db).list_projects(site, category=category, visible_only=True)
    return ApiResponse(data=[PortfolioProjectResponse.from_model(p) for p in projects])


@router.post(
    "/orders/{site}",
    response_model=ApiResponse[PublicOrderResult],
    summary="Submit an order",
    description="Stores the order and notifies the site's Telegram chat when one is configured.",
)
async def public_order(
    site: str,
    data: OrderCreate,
    db: DbSession,
    telegram: Telegram,
    request_id: RequestId,
) -> ApiResponse[PublicOrderResult]:
    order = await OrderService(db).create_order(site, data)
    notified = await LeadService(db, telegram).notify_site_order(order)
    return ApiResponse(data=PublicOrderResult(order_id=order.id, notified=notified))
