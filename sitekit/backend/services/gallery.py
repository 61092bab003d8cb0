"""
Gallery Service.
"""

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.core.exceptions import ValidationError
from sitekit.backend.models.gallery import GalleryAlbum, GalleryPhoto
from sitekit.backend.repositories.gallery import AlbumRepository, PhotoRepository
from sitekit.backend.schemas.gallery import AlbumCreate, AlbumUpdate, PhotoUpdate
from sitekit.backend.services.base import BaseService
from sitekit.backend.services.storage import UploadStorage

UPLOAD_SUBDIR = "gallery"


class GalleryService(BaseService):
    def __init__(self, session: AsyncSession, storage: UploadStorage | None = None) -> None:
        super().__init__(session)
        self.albums = AlbumRepository(session)
        self.photos = PhotoRepository(session)
        self.storage = storage

    async def visible_albums(self) -> list[GalleryAlbum]:
        return await self.albums.list_albums(visible_only=True)

    async def visible_album(self, album_id: int) -> GalleryAlbum:
        return await self.albums.get_visible(album_id)

    async def list_albums(self) -> list[GalleryAlbum]:
        return await self.albums.list_albums()

    async def create_album(self, data: AlbumCreate) -> GalleryAlbum:
        if not data.name.strip():
            raise ValidationError("Name is required")
        return await self.albums.create(**{**data.model_dump(), "name": data.name.strip()})

    async def update_album(self, album_id: int, data: AlbumUpdate) -> GalleryAlbum:
        changes = self._changes(data, self.albums.model)
        return await self._execute_db_operation("update_album", self.albums.update(album_id, **changes))

    async def delete_album(self, album_id: int) -> None:
        """Delete an album with its photos and their files."""
        album = await self.albums.get_by_id(album_id)
        files = [photo.image_path for photo in album.photos]
        await self.session.delete(album)
        await self.session.flush()
        if self.storage:
            self.storage.delete_after_commit(self.session, files)
        self._log_operation("Album deleted", album_id=album_id, files=len(files))

    async def add_photo(
        self,
        album_id: int,
        image: UploadFile | None,
        caption: str | None = None,
        sort_order: int = 0,
    ) -> GalleryPhoto:
        if image is None or not image.filename:
            raise ValidationError("No image uploaded")
        album = await self.albums.get_by_id(album_id)
        path = await self.storage.save(image, UPLOAD_SUBDIR, "photo")
        self.storage.delete_on_rollback(self.session, path)
        photo = await self.photos.create(
            album_id=album.id,
            image_path=path,
            caption=caption or "",
            sort_order=sort_order,
        )
        await self.session.refresh(album)
        return photo

    async def update_photo(self, photo_id: int, data: PhotoUpdate) -> GalleryPhoto:
        changes = self._changes(data, self.photos.model)
        return await self._execute_db_operation("update_photo", self.photos.update(photo_id, **changes))

    async def delete_photo(self, photo_id: int) -> None:
        photo = await self.photos.delete(photo_id)
        if self.storage:
            self.storage.delete_after_commit(self.session, [photo.image_path])

    async def reorder_photos(self, album_id: int, photo_ids: object) -> int:
        if not isinstance(photo_ids, list):
            raise ValidationError("photo_ids must be an array")
        ids: list[int] = []
        for value in photo_ids:
            if isinstance(value, bool) or not isinstance(value, (int, str)) or not str(value).isdigit():
                raise ValidationError("photo_ids must contain photo ids")
            ids.append(int(value))
        album = await self.albums.get_by_id(album_id)
        updated = await self.photos.reorder_album(album.id, ids)
        await self.session.refresh(album)
        return updated
