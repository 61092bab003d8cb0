"""
Newsletter API Endpoints.

The unsubscribe link is opened from an email client, so it answers with
a small HTML page instead of the JSON envelope.
"""

from fastapi import APIRouter, Query, Response
from fastapi.responses import HTMLResponse

from sitekit.backend.core.dependencies import CurrentUser, DbSession, RequestId
from sitekit.backend.schemas.base import ApiResponse, MessageResponse
from sitekit.backend.schemas.newsletter import (
    CampaignCreate,
    CampaignResponse,
    CampaignSent,
    CampaignUpdate,
    NewsletterStats,
    SubscribeRequest,
    SubscriberResponse,
)
from sitekit.backend.services.newsletter import NewsletterService

router = APIRouter()

UNSUBSCRIBED_PAGE = (
    '<html><body style="font-family:sans-serif;text-align:center;padding:60px">'
    "<h2>Unsubscribed</h2><p>You have been successfully unsubscribed.</p>"
    "</body></html>"
)
INVALID_LINK_PAGE = "<html><body><h2>Invalid unsubscribe link</h2></body></html>"


@router.post(
    "/subscribe",
    response_model=ApiResponse[MessageResponse],
    status_code=201,
    summary="Subscribe to the newsletter",
    description="Returns 201 for a new address and 200 for a known one.",
)
async def subscribe(
    data: SubscribeRequest,
    response: Response,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    created = await NewsletterService(db).subscribe(data.email)
    if not created:
        response.status_code = 200
    return ApiResponse(data=MessageResponse(message="Subscribed successfully"))


@router.get(
    "/unsubscribe/{token}",
    response_class=HTMLResponse,
    summary="Unsubscribe by token",
)
async def unsubscribe(token: str, db: DbSession) -> HTMLResponse:
    if not await NewsletterService(db).unsubscribe(token):
        return HTMLResponse(INVALID_LINK_PAGE, status_code=404)
    return HTMLResponse(UNSUBSCRIBED_PAGE)


@router.get(
    "/admin/subscribers",
    response_model=ApiResponse[list[SubscriberResponse]],
    summary="List subscribers",
)
async def list_subscribers(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
    status: str | None = Query(default=None),
) -> ApiResponse[list[SubscriberResponse]]:
    subscribers = await NewsletterService(db).list_subscribers(status)
    return ApiResponse(data=[SubscriberResponse.model_validate(s) for s in subscribers])


@router.get(
    "/admin/subscribers/export",
    summary="Export active subscribers as CSV",
    response_class=Response,
)
async def export_subscribers(user: CurrentUser, db: DbSession) -> Response:
    content = await NewsletterService(db).export_csv()
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="subscribers.csv"'},
    )


@router.delete(
    "/admin/subscribers/{subscriber_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Delete a subscriber",
)
async def delete_subscriber(
    subscriber_id: int,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await NewsletterService(db).delete_subscriber(subscriber_id)
    return ApiResponse(data=MessageResponse(message="Subscriber deleted"))


@router.get(
    "/admin/campaigns",
    response_model=ApiResponse[list[CampaignResponse]],
    summary="List campaigns",
)
async def list_campaigns(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[CampaignResponse]]:
    campaigns = await NewsletterService(db).list_campaigns()
    return ApiResponse(data=[CampaignResponse.model_validate(c) for c in campaigns])


@router.post(
    "/admin/campaigns",
    response_model=ApiResponse[CampaignResponse],
    status_code=201,
    summary="Create a campaign",
)
async def create_campaign(
    data: CampaignCreate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[CampaignResponse]:
    campaign = await NewsletterService(db).create_campaign(data)
    return ApiResponse(data=CampaignResponse.model_validate(campaign))


@router.put(
    "/admin/campaigns/{campaign_id}",
    response_model=ApiResponse[CampaignResponse],
    summary="Update a campaign",
)
async def update_campaign(
    campaign_id: int,
    data: CampaignUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[CampaignResponse]:
    campaign = await NewsletterService(db).update_campaign(campaign_id, data)
    return ApiResponse(data=CampaignResponse.model_validate(campaign))


@router.patch(
    "/admin/campaigns/{campaign_id}/send",
    response_model=ApiResponse[CampaignSent],
    summary="Mark a campaign as sent",
)
async def send_campaign(
    campaign_id: int,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[CampaignSent]:
    recipients = await NewsletterService(db).mark_sent(campaign_id)
    return ApiResponse(data=CampaignSent(recipients=recipients))


@router.delete(
    "/admin/campaigns/{campaign_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Delete a campaign",
)
async def delete_campaign(
    campaign_id: int,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await NewsletterService(db).delete_campaign(campaign_id)
    return ApiResponse(data=MessageResponse(message="Campaign deleted"))


@router.get("/admin/stats", response_model=ApiResponse[NewsletterStats], summary="Subscriber stats")
async def newsletter_stats(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NewsletterStats]:
    return ApiResponse(data=await NewsletterService(db).stats())
