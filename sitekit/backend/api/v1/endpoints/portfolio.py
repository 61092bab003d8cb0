"""
Portfolio API Endpoints.

`/{site}/projects` routes are public and only return visible projects;
the rest require a logged-in user.
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
from sitekit.backend.schemas.portfolio import PortfolioImageResponse, PortfolioProjectResponse
from sitekit.backend.services.portfolio import PortfolioForm, PortfolioService

router = APIRouter()


@router.get(
    "/{site}/projects",
    response_model=ApiResponse[list[PortfolioProjectResponse]],
    summary="List visible projects",
)
async def list_public_projects(
    site: str,
    db: DbSession,
    request_id: RequestId,
    category: str | None = Query(default=None),
) -> ApiResponse[list[PortfolioProjectResponse]]:
    projects = await PortfolioService(db).list_projects(site, category=category, visible_only=True)
    return ApiResponse(data=[PortfolioProjectResponse.from_model(p) for p in projects])


@router.get(
    "/{site}/projects/{project_id}",
    response_model=ApiResponse[PortfolioProjectResponse],
    summary="Get a visible project",
)
async def get_public_project(
    site: str,
    project_id: int,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[PortfolioProjectResponse]:
    project = await PortfolioService(db).get_project(site, project_id, visible_only=True)
    return ApiResponse(data=PortfolioProjectResponse.from_model(project))


@router.get(
    "/{site}",
    response_model=ApiResponse[list[PortfolioProjectResponse]],
    summary="List all projects",
)
async def list_projects(
    site: str,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[PortfolioProjectResponse]]:
    projects = await PortfolioService(db).list_projects(site)
    return ApiResponse(data=[PortfolioProjectResponse.from_model(p) for p in projects])


@router.post(
    "/{site}",
    response_model=ApiResponse[PortfolioProjectResponse],
    status_code=201,
    summary="Create a project",
)
async def create_project(
    site: str,
    user: CurrentUser,
    db: DbSession,
    storage: Storage,
    request_id: RequestId,
    project_key: str = Form(""),
    project_url: str | None = Form(None),
    category: str | None = Form(None),
    technologies: str | None = Form(None),
    visible: bool = Form(True),
    translations: str | None = Form(None),
    cover_image: UploadFile | None = File(None),
) -> ApiResponse[PortfolioProjectResponse]:
    form = PortfolioForm(
        project_key=project_key,
        project_url=project_url,
        category=category,
        technologies=technologies,
        visible=visible,
        translations=translations,
    )
    project = await PortfolioService(db, storage).create_project(site, form, cover_image)
    return ApiResponse(data=PortfolioProjectResponse.from_model(project))


@router.post(
    "/{site}/reorder",
    response_model=ApiResponse[MessageResponse],
    summary="Reorder projects",
)
async def reorder_projects(
    site: str,
    data: ReorderRequest,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await PortfolioService(db).reorder(site, data.to_pairs())
    return ApiResponse(data=MessageResponse(message="Order updated"))


@router.put(
    "/{site}/{project_id}",
    response_model=ApiResponse[PortfolioProjectResponse],
    summary="Update a project",
)
async def update_project(
    site: str,
    project_id: int,
    user: CurrentUser,
    db: DbSession,
    storage: Storage,
    request_id: RequestId,
    project_key: str = Form(""),
    project_url: str | None = Form(None),
    category: str | None = Form(None),
    technologies: str | None = Form(None),
    visible: bool = Form(True),
    translations: str | None = Form(None),
    cover_image: UploadFile | None = File(None),
) -> ApiResponse[PortfolioProjectResponse]:
    form = PortfolioForm(
        project_key=project_key,
        project_url=project_url,
        category=category,
        technologies=technologies,
        visible=visible,
        translations=translations,
    )
    project = await PortfolioService(db, storage).update_project(site, project_id, form, cover_image)
    return ApiResponse(data=PortfolioProjectResponse.from_model(project))


@router.patch(
    "/{site}/{project_id}/visibility",
    response_model=ApiResponse[PortfolioProjectResponse],
    summary="Show or hide a project",
)
async def set_project_visibility(
    site: str,
    project_id: int,
    data: VisibilityUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[PortfolioProjectResponse]:
    project = await PortfolioService(db).set_visibility(site, project_id, data.visible)
    return ApiResponse(data=PortfolioProjectResponse.from_model(project))


@router.delete(
    "/{site}/{project_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Delete a project",
)
async def delete_project(
    site: str,
    project_id: int,
    admin: AdminUser,
    db: DbSession,
    storage: Storage,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await PortfolioService(db, storage).delete_project(site, project_id)
    return ApiResponse(data=MessageResponse(message="Project deleted"))


@router.post(
    "/{site}/{project_id}/images",
    response_model=ApiResponse[PortfolioImageResponse],
    status_code=201,
    summary="Add a gallery image to a project",
)
async def add_project_image(
    site: str,
    project_id: int,
    user: CurrentUser,
    db: DbSession,
    storage: Storage,
    request_id: RequestId,
    caption: str | None = Form(None),
    sort_order: int = Form(0),
    image: UploadFile | None = File(None),
) -> ApiResponse[PortfolioImageResponse]:
    created = await PortfolioService(db, storage).add_image(site, project_id, image, caption, sort_order)
    return ApiResponse(data=PortfolioImageResponse.model_validate(created))


@router.delete(
    "/{site}/{project_id}/images/{image_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Delete a project image",
)
async def delete_project_image(
    site: str,
    project_id: int,
    image_id: int,
    user: CurrentUser,
    db: DbSession,
    storage: Storage,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await PortfolioService(db, storage).delete_image(site, project_id, image_id)
    return ApiResponse(data=MessageResponse(message="Image deleted"))
