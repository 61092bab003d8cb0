"""
Newsletter Repositories.
"""

from datetime import datetime

from sqlalchemy import func, select

from sitekit.backend.models.newsletter import Campaign, Subscriber
from sitekit.backend.repositories.base import BaseRepository


class SubscriberRepository(BaseRepository[Subscriber]):
    model = Subscriber
    not_found_message = "Subscriber not found"

    async def get_by_email(self, email: str) -> Subscriber | None:
        return await self.find_one(Subscriber.email == email)

    async def get_by_token(self, token: str) -> Subscriber | None:
        return await self.find_one(Subscriber.unsubscribe_token == token)

    async def list_subscribers(self, status: str | None = None) -> list[Subscriber]:
        where = [Subscriber.status == status] if status else []
        return await self.find(
            *where,
            order_by=[Subscriber.subscribed_at.desc(), Subscriber.id.desc()],
        )

    async def count_by_status(self) -> dict[str, int]:
        result = await self.session.execute(
            select(Subscriber.status, func.count()).group_by(Subscriber.status)
        )
        return {status: count for status, count in result.all()}

    async def count_active_since(self, since: datetime) -> int:
        return await self.count(
            Subscriber.status == "active",
            Subscriber.subscribed_at >= since,
        )


class CampaignRepository(BaseRepository[Campaign]):
    model = Campaign
    not_found_message = "Campaign not found"

    async def list_recent(self) -> list[Campaign]:
        return await self.find(order_by=[Campaign.created_at.desc(), Campaign.id.desc()])
