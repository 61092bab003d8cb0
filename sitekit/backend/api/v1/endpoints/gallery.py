"""
Gallery API Endpoints.
"""

from fastapi import APIRouter, File, Form, UploadFile

from sitekit.backend.core.dependencies import CurrentUser, DbSession, RequestId, Storage
from sitekit.backend.schemas.base import ApiResponse, MessageResponse
from sitekit.backend.schemas.gallery import (
    AlbumCreate,
    AlbumPhotos,
    AlbumResponse,
    AlbumUpdate,
    PhotoReorderRequest,
    PhotoResponse,
    PhotoUpdate,
)
from sitekit.backend.services.gallery import GalleryService

router = APIRouter()


@router.get("/albums", response_model=ApiResponse[list[AlbumResponse]], summary="Visible albums")
async def visible_albums(
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[AlbumResponse]]:
    albums = await GalleryService(db).visible_albums()
    return ApiResponse(data=[AlbumResponse.from_model(a, cover_fallback=True) for a in albums])


@router.get(
    "/albums/{album_id}/photos",
    response_model=ApiResponse[AlbumPhotos],
    summary="Photos of a visible album",
)
async def album_photos(
    album_id: int,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[AlbumPhotos]:
    album = await GalleryService(db).visible_album(album_id)
    return ApiResponse(
        data=AlbumPhotos(
            album=AlbumResponse.from_model(album, cover_fallback=True),
            photos=[PhotoResponse.model_validate(p) for p in album.photos],
        )
    )


@router.get("/admin/albums", response_model=ApiResponse[list[AlbumResponse]], summary="All albums")
async def admin_list_albums(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[AlbumResponse]]:
    albums = await GalleryService(db).list_albums()
    return ApiResponse(data=[AlbumResponse.from_model(a) for a in albums])


@router.post(
    "/admin/albums",
    response_model=ApiResponse[AlbumResponse],
    status_code=201,
    summary="Create an album",
)
async def admin_create_album(
    data: AlbumCreate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[AlbumResponse]:
    album = await GalleryService(db).create_album(data)
    return ApiResponse(data=AlbumResponse.from_model(album))


@router.put("/admin/albums/{album_id}", response_model=ApiResponse[AlbumResponse], summary="Update an album")
async def admin_update_album(
    album_id: int,
    data: AlbumUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[AlbumResponse]:
    album = await GalleryService(db).update_album(album_id, data)
    return ApiResponse(data=AlbumResponse.from_model(album))


@router.delete(
    "/admin/albums/{album_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Delete an album",
    description="Also deletes the album's photos and their files.",
)
async def admin_delete_album(
    album_id: int,
    user: CurrentUser,
    db: DbSession,
    storage: Storage,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await GalleryService(db, storage).delete_album(album_id)
    return ApiResponse(data=MessageResponse(message="Album deleted"))


@router.post(
    "/admin/albums/{album_id}/photos",
    response_model=ApiResponse[PhotoResponse],
    status_code=201,
    summary="Upload a photo",
)
async def admin_upload_photo(
    album_id: int,
    user: CurrentUser,
    db: DbSession,
    storage: Storage,
    request_id: RequestId,
    caption: str | None = Form(None),
    sort_order: int = Form(0),
    image: UploadFile | None = File(None),
) -> ApiResponse[PhotoResponse]:
    photo = await GalleryService(db, storage).add_photo(album_id, image, caption, sort_order)
    return ApiResponse(data=PhotoResponse.model_validate(photo))


@router.put(
    "/admin/albums/{album_id}/reorder",
    response_model=ApiResponse[MessageResponse],
    summary="Reorder photos",
    description="`photo_ids` in display order; each photo's sort_order becomes its position.",
)
async def admin_reorder_photos(
    album_id: int,
    data: PhotoReorderRequest,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await GalleryService(db).reorder_photos(album_id, data.photo_ids)
    return ApiResponse(data=MessageResponse(message="Photos reordered"))


@router.put("/admin/photos/{photo_id}", response_model=ApiResponse[PhotoResponse], summary="Update a photo")
async def admin_update_photo(
    photo_id: int,
    data: PhotoUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[PhotoResponse]:
    photo = await GalleryService(db).update_photo(photo_id, data)
    return ApiResponse(data=PhotoResponse.model_validate(photo))


@router.delete(
    "/admin/photos/{photo_id}",
    response_model=ApiResponse[MessageResponse],
    summary="Delete a photo",
)
async def admin_delete_photo(
    photo_id: int,
    user: CurrentUser,
    db: DbSession,
    storage: Storage,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    await GalleryService(db, storage).delete_photo(photo_id)
    return ApiResponse(data=MessageResponse(message="Photo deleted"))
