"""
Hexagons API Endpoints.

Per-site hexagon tiles. Any logged-in user can edit;
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
from sitekit.backend.schemas.hexagon import (
    HexagonCreate,
    HexagonResponse,
    HexagonUpdate,
)
from sitekit.backend.services.hexagon import HexagonService

router = APIRouter()


@router.get(
    "/{site}",
    response_model=ApiResponse[list[HexagonResponse]],
    summary="List hexagons",
    description="All hexagons of a site ordered by sort_order, then id.",
)
async def list_hexagons(
    site: str,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[HexagonResponse]]:
    hexagons = await HexagonService(db).list_hexagons(site)
    return ApiResponse(data=[HexagonResponse.model_validate(c) for c in hexagons])


@router.get(
    "/{site}/{hexagon_id}",
    response_model=ApiResponse[HexagonResponse],
    summary="Get a hexagon",
)
async def get_hexagon(
    site: str,
    hexagon_id: int,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[HexagonResponse]:
    hexagon = await HexagonService(db).get_hexagon(site, hexagon_id)
    return ApiResponse(data=HexagonResponse.model_validate(hexagon))


@router.post(
    "/{site}",
    response_model=ApiResponse[HexagonResponse],
    status_code=201,
    summary="Create a hexagon",
)
async def create_hexagon(
    site: str,
    data: HexagonCreate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[HexagonResponse]:
    hexagon = await HexagonService(db).create_hexagon(site, data)
    return ApiResponse(data=HexagonResponse.model_validate(hexagon))


@router.post(
    "/{site}/reorder",
    response_model=ApiResponse[MessageResponse],
    summary="Reorder hexagons",
    description="Accepts a list of ids or a list of {id, sort_order} objects.",
)
async def reorder_hexagons(
    site: str,
    data: ReorderRequest,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await HexagonService(db).reorder(site, data.to_pairs())
    return ApiResponse(data=MessageResponse(message="Order updated"))


@router.put(
    "/{site}/{hexagon_id}",
    response_model=ApiResponse[HexagonResponse],
    summary="Update a hexagon",
)
async def update_hexagon(
    site: str,
    hexagon_id: int,
    data: HexagonUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[HexagonResponse]:
    hexagon = await HexagonService(db).update_hexagon(site, hexagon_id, data)
    return ApiResponse(data=HexagonResponse.model_validate(hexagon))


@router.patch(
    "/{site}/{hexagon_id}/visibility",
    response_model=ApiResponse[HexagonResponse],
    summary="Show or hide a hexagon",
)
async def set_hexagon_visibility(
    site: str,
    hexagon_id: int,
    data: VisibilityUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[HexagonResponse]:
    hexagon = await HexagonService(db).set_visibility(site, hexagon_id, data.visible)
    return ApiResponse(data=HexagonResponse.model_validate(hexagon))


@router.delete(
    "/{site}/{hexagon_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Delete a hexagon",
)
async def delete_hexagon(
    site: str,
    hexagon_id: int,
    admin: AdminUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await HexagonService(db).delete_hexagon(site, hexagon_id)
    return ApiResponse(data=MessageResponse(message="Hexagon deleted"))
