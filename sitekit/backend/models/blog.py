"""
Blog Models.

Posts, tags and the many-to-many link between them.
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sitekit.backend.models.base import Base, IdMixin, TimestampMixin

POST_STATUSES = ("draft", "published")

blog_post_tags = Table(
    "blog_post_tags",
    Base.metadata,
    Column("post_id", ForeignKey("blog_posts.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", ForeignKey("blog_tags.id", ondelete="CASCADE"), primary_key=True),
)


class BlogTag(IdMixin, Base):
    """Blog tag."""

    __tablename__ = "blog_tags"

    name: Mapped[str] = mapped_column(String(64), nullable=False)
    slug: Mapped[str] = mapped_column(String(96), unique=True, nullable=False)


class BlogPost(IdMixin, TimestampMixin, Base):
    """Blog post."""

    __tablename__ = "blog_posts"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(300), unique=True, nullable=False, index=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    excerpt: Mapped[str | None] = mapped_column(Text, nullable=True)
    cover_image: Mapped[str | None] = mapped_column(String(255), nullable=True)
    author: Mapped[str] = mapped_column(String(128), default="Admin", nullable=False)
    status: Mapped[str] = mapped_column(String(16), default="draft", nullable=False, index=True)
    published_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    tags: Mapped[list[BlogTag]] = relationship(
        secondary=blog_post_tags,
        lazy="selectin",
        order_by=BlogTag.name,
    )
