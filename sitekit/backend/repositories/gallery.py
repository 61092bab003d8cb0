"""
Gallery Repositories.
"""

from sqlalchemy import update

from sitekit.backend.models.gallery import GalleryAlbum, GalleryPhoto
from sitekit.backend.repositories.base import BaseRepository, SortableRepository


class AlbumRepository(SortableRepository[GalleryAlbum]):
    model = GalleryAlbum
    not_found_message = "Album not found"

    async def list_albums(self, visible_only: bool = False) -> list[GalleryAlbum]:
        where = [GalleryAlbum.visible.is_(True)] if visible_only else []
        return await self.find(*where, order_by=[GalleryAlbum.sort_order, GalleryAlbum.id])

    async def get_visible(self, album_id: int) -> GalleryAlbum:
        album = await self.find_one(GalleryAlbum.id == album_id, GalleryAlbum.visible.is_(True))
        if album is None:
            raise self.not_found_error()
        return album


class PhotoRepository(BaseRepository[GalleryPhoto]):
    model = GalleryPhoto
    not_found_message = "Photo not found"

    async def reorder_album(self, album_id: int, photo_ids: list[int]) -> int:
        """Set each photo's sort_order to its position; ids from other albums are skipped."""
        updated = 0
        for index, photo_id in enumerate(photo_ids):
            result = await self.session.execute(
                update(GalleryPhoto)
                .where(GalleryPhoto.id == photo_id, GalleryPhoto.album_id == album_id)
                .values(sort_order=index)
                .execution_options(synchronize_session="fetch")
            )
            updated += result.rowcount or 0
        await self.session.flush()
        return updated
