"""
Blog Repositories.
"""

from sqlalchemy import ColumnElement, and_, func, select

from sitekit.backend.models.blog import BlogPost, BlogTag, blog_post_tags
from sitekit.backend.repositories.base import BaseRepository


class BlogPostRepository(BaseRepository[BlogPost]):
    model = BlogPost
    not_found_message = "Post not found"

    def _published(self, tag_slug: str | None) -> list[ColumnElement[bool]]:
        where = [BlogPost.status == "published"]
        if tag_slug:
            where.append(BlogPost.tags.any(BlogTag.slug == tag_slug))
        return where

    async def list_published(
        self,
        tag_slug: str | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[BlogPost], int]:
        where = self._published(tag_slug)
        posts = await self.find(
            *where,
            order_by=[BlogPost.published_at.desc(), BlogPost.id.desc()],
            limit=limit,
            offset=offset,
        )
        return posts, await self.count(*where)

    async def get_published(self, slug: str) -> BlogPost:
        post = await self.find_one(BlogPost.slug == slug, BlogPost.status == "published")
        if post is None:
            raise self.not_found_error()
        return post

    async def list_all(self) -> list[BlogPost]:
        return await self.find(order_by=[BlogPost.created_at.desc(), BlogPost.id.desc()])

    async def slug_taken(self, slug: str, exclude_id: int | None = None) -> bool:
        where = [BlogPost.slug == slug]
        if exclude_id is not None:
            where.append(BlogPost.id != exclude_id)
        return await self.count(*where) > 0


class BlogTagRepository(BaseRepository[BlogTag]):
    model = BlogTag
    not_found_message = "Tag not found"

    async def list_all(self) -> list[BlogTag]:
        return await self.find(order_by=[BlogTag.name])

    async def get_many(self, ids: list[int]) -> list[BlogTag]:
        if not ids:
            return []
        return await self.find(BlogTag.id.in_(ids), order_by=[BlogTag.name])

    async def with_post_counts(self) -> list[tuple[BlogTag, int]]:
        """Every tag with the number of published posts carrying it."""
        result = await self.session.execute(
            select(BlogTag, func.count(BlogPost.id))
            .outerjoin(blog_post_tags, blog_post_tags.c.tag_id == BlogTag.id)
            .outerjoin(
                BlogPost,
                and_(BlogPost.id == blog_post_tags.c.post_id, BlogPost.status == "published"),
            )
            .group_by(BlogTag.id)
            .order_by(BlogTag.name)
        )
        return [(tag, count) for tag, count in result.all()]
