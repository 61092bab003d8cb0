"""
Review Service.

Submitted reviews wait in `pending` until an admin approves them; only
approved reviews are listed publicly or counted in the stats.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.core.exceptions import ValidationError
from sitekit.backend.models.review import REVIEW_STATUSES, Review
from sitekit.backend.repositories.review import ReviewRepository
from sitekit.backend.schemas.review import ReviewCreate, ReviewStats
from sitekit.backend.services.base import BaseService

RATINGS = range(1, 6)


class ReviewService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = ReviewRepository(session)

    async def list_approved(self, limit: int, offset: int) -> tuple[list[Review], int]:
        reviews = await self.repo.list_reviews("approved", limit, offset)
        total = await self.repo.count(Review.status == "approved")
        return reviews, total

    async def stats(self) -> ReviewStats:
        counts = await self.repo.rating_distribution()
        distribution = {rating: counts.get(rating, 0) for rating in RATINGS}
        total = sum(distribution.values())
        weighted = sum(rating * count for rating, count in distribution.items())
        return ReviewStats(
            total=total,
            average_rating=round(weighted / total, 1) if total else 0,
            distribution=distribution,
        )

    async def submit(self, data: ReviewCreate) -> Review:
        self._validate_required(
            data.model_dump(),
            ["author_name", "content", "rating"],
            message="Required: author_name, content, rating",
        )
        if data.rating not in RATINGS:
            raise ValidationError("Rating must be between 1 and 5")
        review = await self.repo.create(
            author_name=data.author_name.strip(),
            author_email=data.author_email or None,
            rating=data.rating,
            title=data.title or None,
            content=data.content.strip(),
        )
        self._log_operation("Review submitted", review_id=review.id, rating=review.rating)
        return review

    async def list_all(self, status: str | None = None) -> list[Review]:
        return await self.repo.list_reviews(status)

    async def update_status(self, review_id: int, status: str) -> Review:
        self._validate_choice(status, REVIEW_STATUSES, f"Status must be: {', '.join(REVIEW_STATUSES)}")
        return await self.repo.update(review_id, status=status)

    async def delete(self, review_id: int) -> None:
        await self.repo.delete(review_id)
