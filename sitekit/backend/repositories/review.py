"""
Review Repository.
"""

from sqlalchemy import func, select

from sitekit.backend.models.review import Review
from sitekit.backend.repositories.base import BaseRepository


class ReviewRepository(BaseRepository[Review]):
    model = Review
    not_found_message = "Review not found"

    async def list_reviews(
        self,
        status: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Review]:
        where = [Review.status == status] if status else []
        return await self.find(
            *where,
            order_by=[Review.created_at.desc(), Review.id.desc()],
            limit=limit,
            offset=offset,
        )

    async def rating_distribution(self) -> dict[int, int]:
        """Approved review count per rating value."""
        result = await self.session.execute(
            select(Review.rating, func.count())
            .where(Review.status == "approved")
            .group_by(Review.rating)
        )
        return {rating: count for rating, count in result.all()}
