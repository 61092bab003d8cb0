"""
Lead Capture API Endpoints.

Website forms forward submissions to Telegram through these routes.
Every route checks the website API key (header `X-API-Key` or body
`apiKey`) and the `leads` rate limit.
"""

from fastapi import APIRouter, Header, Request

from sitekit.backend.core.dependencies import DbSession, RequestId, Telegram
from sitekit.backend.gateway.security.rate_limiter import enforce_rate_limit
from sitekit.backend.schemas.base import ApiResponse
from sitekit.backend.schemas.lead import (
    CartOrderLead,
    ContactLead,
    LeadResult,
    OrderLead,
    SpecContactLead,
    SpecRequestLead,
)
from sitekit.backend.services.leads import LeadService, verify_api_key

router = APIRouter()


def _guard(request: Request, header_key: str | None, body_key: str | None) -> None:
    verify_api_key(header_key or body_key)
    enforce_rate_limit(request, "leads")


@router.post(
    "/order",
    response_model=ApiResponse[LeadResult],
    summary="Forward a product or cart order",
)
async def order_lead(
    request: Request,
    data: OrderLead,
    db: DbSession,
    telegram: Telegram,
    request_id: RequestId,
    x_api_key: str | None = Header(default=None),
) -> ApiResponse[LeadResult]:
    _guard(request, x_api_key, data.api_key)
    await LeadService(db, telegram).submit_order(data)
    return ApiResponse(data=LeadResult(message="Order sent successfully"))


@router.post(
    "/cart-order",
    response_model=ApiResponse[LeadResult],
    summary="Forward a cart order",
)
async def cart_order_lead(
    request: Request,
    data: CartOrderLead,
    db: DbSession,
    telegram: Telegram,
    request_id: RequestId,
    x_api_key: str | None = Header(default=None),
) -> ApiResponse[LeadResult]:
    _guard(request, x_api_key, data.api_key)
    await LeadService(db, telegram).submit_cart_order(data)
    return ApiResponse(data=LeadResult(message="Order sent successfully"))


@router.post(
    "/contact",
    response_model=ApiResponse[LeadResult],
    summary="Forward a contact form message",
)
async def contact_lead(
    request: Request,
    data: ContactLead,
    db: DbSession,
    telegram: Telegram,
    request_id: RequestId,
    x_api_key: str | None = Header(default=None),
) -> ApiResponse[LeadResult]:
    _guard(request, x_api_key, data.api_key)
    await LeadService(db, telegram).submit_contact(data)
    return ApiResponse(data=LeadResult())


@router.post(
    "/spec-request",
    response_model=ApiResponse[LeadResult],
    summary="Forward an equipment rental request",
)
async def spec_request_lead(
    request: Request,
    data: SpecRequestLead,
    db: DbSession,
    telegram: Telegram,
    request_id: RequestId,
    x_api_key: str | None = Header(default=None),
) -> ApiResponse[LeadResult]:
    _guard(request, x_api_key, data.api_key)
    await LeadService(db, telegram).submit_spec_request(data)
    return ApiResponse(data=LeadResult())


@router.post(
    "/spec-contact",
    response_model=ApiResponse[LeadResult],
    summary="Forward an equipment contact form message",
)
async def spec_contact_lead(
    request: Request,
    data: SpecContactLead,
    db: DbSession,
    telegram: Telegram,
    request_id: RequestId,
    x_api_key: str | None = Header(default=None),
) -> ApiResponse[LeadResult]:
    _guard(request, x_api_key, data.api_key)
    await LeadService(db, telegram).submit_spec_contact(data)
    return ApiResponse(data=LeadResult())
