"""
Blog Schemas.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TagResponse(BaseModel):
    id: int
    name: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class TagWithCount(TagResponse):
    post_count: int = 0


class TagCreate(BaseModel):
    name: str = Field(default="", max_length=64)


class PostCreate(BaseModel):
    title: str = Field(default="", max_length=255)
    slug: str | None = Field(default=None, max_length=300)
    content: str | None = None
    excerpt: str | None = None
    cover_image: str | None = Field(default=None, max_length=255)
    author: str | None = Field(default=None, max_length=128)
    status: str | None = None


class PostUpdate(BaseModel):
    """Partial update; only fields present in the body are changed."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = Field(default=None, min_length=1, max_length=300)
    content: str | None = None
    excerpt: str | None = None
    cover_image: str | None = Field(default=None, max_length=255)
    author: str | None = Field(default=None, max_length=128)
    status: str | None = None


class PostStatusUpdate(BaseModel):
    status: str = ""


class PostTagsUpdate(BaseModel):
    """`tag_ids` is checked by the service so a non-array reports as 400."""

    tag_ids: Any = None


class PostResponse(BaseModel):
    id: int
    title: str
    slug: str
    content: str | None
    excerpt: str | None
    cover_image: str | None
    author: str
    status: str
    published_at: datetime | None
    created_at: datetime
    updated_at: datetime
    tags: list[TagResponse] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
