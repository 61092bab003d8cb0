"""
Gallery Models.
"""

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sitekit.backend.models.base import Base, CreatedAtMixin, IdMixin, SortableMixin


class GalleryAlbum(IdMixin, SortableMixin, CreatedAtMixin, Base):
    __tablename__ = "gallery_albums"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    cover_image: Mapped[str | None] = mapped_column(String(255), nullable=True)

    photos: Mapped[list["GalleryPhoto"]] = relationship(
        back_populates="album",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="(GalleryPhoto.sort_order, GalleryPhoto.id)",
    )


class GalleryPhoto(IdMixin, CreatedAtMixin, Base):
    __tablename__ = "gallery_photos"

    album_id: Mapped[int] = mapped_column(
        ForeignKey("gallery_albums.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    image_path: Mapped[str] = mapped_column(String(255), nullable=False)
    caption: Mapped[str | None] = mapped_column(String(512), nullable=True)
    sort_order: Mapped[int] = mapped_column(default=0, nullable=False)

    album: Mapped[GalleryAlbum] = relationship(back_populates="photos")
