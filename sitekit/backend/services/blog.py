"""
Blog Service.

Slugs are generated from titles; a slug already in use gets a
`-<unix ms>` suffix. Publishing stamps `published_at` once and
unpublishing keeps it.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.core.exceptions import ConflictError, ValidationError
from sitekit.backend.core.utils import slugify, unix_ms, utc_now
from sitekit.backend.models.blog import POST_STATUSES, BlogPost, BlogTag
from sitekit.backend.repositories.blog import BlogPostRepository, BlogTagRepository
from sitekit.backend.schemas.blog import PostCreate, PostUpdate, TagCreate, TagWithCount
from sitekit.backend.services.base import BaseService

DEFAULT_AUTHOR = "Admin"


class BlogService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.posts = BlogPostRepository(session)
        self.tags = BlogTagRepository(session)

    async def _unique_slug(self, text: str, exclude_id: int | None = None) -> str:
        slug = slugify(text) or "post"
        if await self.posts.slug_taken(slug, exclude_id):
            slug = f"{slug}-{unix_ms()}"
        return slug

    def _check_status(self, status: str) -> None:
        self._validate_choice(status, POST_STATUSES, "Status must be draft or published")

    @staticmethod
    def _apply_status(post: BlogPost, status: str) -> None:
        post.status = status
        if status == "published" and post.published_at is None:
            post.published_at = utc_now()

    # Public

    async def list_published(
        self,
        tag: str | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[BlogPost], int]:
        return await self.posts.list_published(tag, limit, offset)

    async def get_published(self, slug: str) -> BlogPost:
        return await self.posts.get_published(slug)

    async def tags_with_counts(self) -> list[TagWithCount]:
        return [
            TagWithCount(id=tag.id, name=tag.name, slug=tag.slug, post_count=count)
            for tag, count in await self.tags.with_post_counts()
        ]

    # Posts

    async def list_posts(self) -> list[BlogPost]:
        return await self.posts.list_all()

    async def get_post(self, post_id: int) -> BlogPost:
        return await self.posts.get_by_id(post_id)

    async def create_post(self, data: PostCreate) -> BlogPost:
        if not data.title.strip():
            raise ValidationError("Title is required")
        status = data.status or "draft"
        self._check_status(status)

        post = BlogPost(
            title=data.title.strip(),
            slug=await self._unique_slug(data.slug or data.title),
            content=data.content or "",
            excerpt=data.excerpt or "",
            cover_image=data.cover_image or None,
            author=data.author or DEFAULT_AUTHOR,
            tags=[],
        )
        self._apply_status(post, status)
        self.session.add(post)
        await self._execute_db_operation(
            "create_post",
            self.session.flush(),
            conflict_message="Slug already exists",
        )
        await self.session.refresh(post)
        self._log_operation("Blog post created", post_id=post.id, slug=post.slug)
        return post

    async def update_post(self, post_id: int, data: PostUpdate) -> BlogPost:
        post = await self.posts.get_by_id(post_id)
        changes: dict[str, Any] = self._changes(data, self.posts.model)

        status = changes.pop("status", None)
        if status is not None:
            self._check_status(status)
            self._apply_status(post, status)

        if "slug" in changes:
            slug = slugify(changes["slug"])
            if not slug:
                raise ValidationError("Slug cannot be empty")
            if await self.posts.slug_taken(slug, exclude_id=post.id):
                raise ConflictError("Slug already exists")
            changes["slug"] = slug

        return await self._execute_db_operation(
            "update_post",
            self.posts.update_instance(post, **changes),
            conflict_message="Slug already exists",
        )

    async def set_status(self, post_id: int, status: str) -> BlogPost:
        self._check_status(status)
        post = await self.posts.get_by_id(post_id)
        self._apply_status(post, status)
        return await self.posts.update_instance(post)

    async def set_tags(self, post_id: int, tag_ids: object) -> BlogPost:
        """
        Replace a post's tags.

        Raises:
            ValidationError: If tag_ids is not a list of known tag ids
        """
        if not isinstance(tag_ids, list) or not all(
            isinstance(i, int) and not isinstance(i, bool) for i in tag_ids
        ):
            raise ValidationError("tag_ids must be an array")
        post = await self.posts.get_by_id(post_id)
        tags = await self.tags.get_many(list(set(tag_ids)))
        if len(tags) != len(set(tag_ids)):
            raise ValidationError("Unknown tag id")
        post.tags = tags
        await self.session.flush()
        await self.session.refresh(post)
        return post

    async def delete_post(self, post_id: int) -> None:
        await self.posts.delete(post_id)

    # Tags

    async def list_tags(self) -> list[BlogTag]:
        return await self.tags.list_all()

    async def create_tag(self, data: TagCreate) -> BlogTag:
        name = data.name.strip()
        if not name:
            raise ValidationError("Name is required")
        slug = slugify(name) or f"tag-{unix_ms()}"
        return await self._execute_db_operation(
            "create_tag",
            self.tags.create(name=name, slug=slug),
            conflict_message="Tag already exists",
        )

    async def update_tag(self, tag_id: int, data: TagCreate) -> BlogTag:
        name = data.name.strip()
        if not name:
            raise ValidationError("Name is required")
        tag = await self.tags.get_by_id(tag_id)
        return await self._execute_db_operation(
            "update_tag",
            self.tags.update_instance(tag, name=name, slug=slugify(name) or tag.slug),
            conflict_message="Tag already exists",
        )

    async def delete_tag(self, tag_id: int) -> None:
        await self.tags.delete(tag_id)
