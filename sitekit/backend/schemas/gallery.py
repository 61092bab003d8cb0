"""
Gallery Schemas.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from sitekit.backend.models.gallery import GalleryAlbum


class AlbumCreate(BaseModel):
    name: str = ""
    description: str | None = None
    cover_image: str | None = None
    visible: bool = True
    sort_order: int = 0


class AlbumUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    cover_image: str | None = None
    visible: bool | None = None
    sort_order: int | None = None


class PhotoResponse(BaseModel):
    id: int
    album_id: int
    image_path: str
    caption: str | None
    sort_order: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PhotoUpdate(BaseModel):
    caption: str | None = None
    sort_order: int | None = None


class AlbumResponse(BaseModel):
    id: int
    name: str
    description: str | None
    cover_image: str | None
    visible: bool
    sort_order: int
    photo_count: int = 0
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_model(cls, album: GalleryAlbum, cover_fallback: bool = False) -> "AlbumResponse":
        """Album with its photo count; optionally use the first photo as cover."""
        response = cls.model_validate(album)
        response.photo_count = len(album.photos)
        if cover_fallback and not response.cover_image and album.photos:
            response.cover_image = album.photos[0].image_path
        return response


class AlbumPhotos(BaseModel):
    album: AlbumResponse
    photos: list[PhotoResponse]


class PhotoReorderRequest(BaseModel):
    photo_ids: Any = None
