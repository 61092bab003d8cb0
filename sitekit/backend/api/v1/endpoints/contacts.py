"""
Contacts API Endpoints.

Per-site contact cards, admin only. The public read lives in public.py.
"""

from fastapi import APIRouter

from sitekit.backend.core.dependencies import AdminUser, DbSession, RequestId
from sitekit.backend.schemas.base import ApiResponse
from sitekit.backend.schemas.site import ContactResponse, ContactUpdate
from sitekit.backend.services.site import SiteService

router = APIRouter()


@router.get("", response_model=ApiResponse[list[ContactResponse]], summary="List all contacts")
async def list_contacts(
    admin: AdminUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[ContactResponse]]:
    contacts = await SiteService(db).list_contacts()
    return ApiResponse(data=[ContactResponse.model_validate(c) for c in contacts])


@router.get("/{site}", response_model=ApiResponse[ContactResponse], summary="Get site contacts")
async def get_contacts(
    site: str,
    admin: AdminUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[ContactResponse]:
    contact = await SiteService(db).get_contact(site)
    return ApiResponse(data=ContactResponse.model_validate(contact))


@router.put("/{site}", response_model=ApiResponse[ContactResponse], summary="Save site contacts")
async def save_contacts(
    site: str,
    data: ContactUpdate,
    admin: AdminUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[ContactResponse]:
    contact = await SiteService(db).upsert_contact(site, data)
    return ApiResponse(data=ContactResponse.model_validate(contact))
