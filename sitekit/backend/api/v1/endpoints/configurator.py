"""
Site Configurator API Endpoints.
"""

from fastapi import APIRouter, Request

from sitekit.backend.core.dependencies import DbSession, RequestId, Telegram
from sitekit.backend.gateway.security.rate_limiter import enforce_rate_limit
from sitekit.backend.schemas.base import ApiResponse
from sitekit.backend.schemas.configurator import (
    ConfigurationRequest,
    QuoteResponse,
    SubmitResponse,
)
from sitekit.backend.services.configurator import ConfiguratorService

router = APIRouter()


@router.post(
    "/quote",
    response_model=ApiResponse[QuoteResponse],
    summary="Price a configuration",
)
async def quote_configuration(
    data: ConfigurationRequest,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[QuoteResponse]:
    breakdown = ConfiguratorService(db).quote(data)
    return ApiResponse(data=QuoteResponse(currency=data.currency, breakdown=breakdown))


@router.post(
    "/submit",
    response_model=ApiResponse[SubmitResponse],
    summary="Send a configuration to the team",
)
async def submit_configuration(
    request: Request,
    data: ConfigurationRequest,
    db: DbSession,
    telegram: Telegram,
    request_id: RequestId,
) -> ApiResponse[SubmitResponse]:
    enforce_rate_limit(request, "leads")
    total = await ConfiguratorService(db, telegram).submit(data)
    return ApiResponse(data=SubmitResponse(message="Configuration sent successfully", total=total))
