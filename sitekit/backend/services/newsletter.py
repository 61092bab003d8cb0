"""
Newsletter Service.

Subscribing never reveals whether an address was already on the list:
existing addresses get the same message, and unsubscribed ones are
reactivated with a fresh token.
"""

import csv
import io

from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.core.exceptions import ValidationError
from sitekit.backend.core.utils import random_hex, utc_now
from sitekit.backend.models.newsletter import SUBSCRIBER_STATUSES, Campaign, Subscriber
from sitekit.backend.repositories.newsletter import CampaignRepository, SubscriberRepository
from sitekit.backend.schemas.newsletter import CampaignCreate, CampaignUpdate, NewsletterStats
from sitekit.backend.services.base import BaseService

EXPORT_COLUMNS = ("email", "subscribed_at", "status")


class NewsletterService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.subscribers = SubscriberRepository(session)
        self.campaigns = CampaignRepository(session)

    async def subscribe(self, email: str) -> bool:
        """
        Add or reactivate a subscriber.

        Returns:
            True when a new subscriber row was created
        """
        email = email.strip()
        if not email or "@" not in email:
            raise ValidationError("Valid email is required")

        existing = await self.subscribers.get_by_email(email)
        if existing is not None:
            if existing.status == "unsubscribed":
                await self.subscribers.update_instance(
                    existing,
                    status="active",
                    unsubscribe_token=random_hex(),
                    unsubscribed_at=None,
                    subscribed_at=utc_now(),
                )
                self._log_operation("Subscriber reactivated", subscriber_id=existing.id)
            return False

        subscriber = await self._execute_db_operation(
            "subscribe",
            self.subscribers.create(email=email),
            conflict_message="Already subscribed",
        )
        self._log_operation("Subscriber added", subscriber_id=subscriber.id)
        return True

    async def unsubscribe(self, token: str) -> bool:
        """Unsubscribe by token. Returns False for an unknown token."""
        subscriber = await self.subscribers.get_by_token(token)
        if subscriber is None:
            return False
        await self.subscribers.update_instance(
            subscriber,
            status="unsubscribed",
            unsubscribed_at=utc_now(),
        )
        self._log_operation("Subscriber unsubscribed", subscriber_id=subscriber.id)
        return True

    async def list_subscribers(self, status: str | None = None) -> list[Subscriber]:
        if status:
            self._validate_choice(status, SUBSCRIBER_STATUSES, "Invalid status")
        return await self.subscribers.list_subscribers(status)

    async def export_csv(self) -> str:
        """Active subscribers as CSV text."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(EXPORT_COLUMNS)
        for subscriber in await self.subscribers.list_subscribers("active"):
            writer.writerow(
                (subscriber.email, subscriber.subscribed_at.isoformat(sep=" "), subscriber.status)
            )
        return buffer.getvalue()

    async def delete_subscriber(self, subscriber_id: int) -> None:
        await self.subscribers.delete(subscriber_id)

    async def stats(self) -> NewsletterStats:
        counts = await self.subscribers.count_by_status()
        month_start = utc_now().replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        return NewsletterStats(
            active=counts.get("active", 0),
            unsubscribed=counts.get("unsubscribed", 0),
            new_this_month=await self.subscribers.count_active_since(month_start),
        )

    # Campaigns

    async def list_campaigns(self) -> list[Campaign]:
        return await self.campaigns.list_recent()

    async def create_campaign(self, data: CampaignCreate) -> Campaign:
        if not data.name.strip():
            raise ValidationError("Name is required")
        return await self.campaigns.create(
            name=data.name.strip(),
            subject=data.subject or "",
            description=data.description or "",
        )

    async def update_campaign(self, campaign_id: int, data: CampaignUpdate) -> Campaign:
        changes = self._changes(data, self.campaigns.model)
        return await self._execute_db_operation("update_campaign", self.campaigns.update(campaign_id, **changes))

    async def mark_sent(self, campaign_id: int) -> int:
        """Mark a campaign sent to the current active subscribers."""
        campaign = await self.campaigns.get_by_id(campaign_id)
        recipients = (await self.subscribers.count_by_status()).get("active", 0)
        await self.campaigns.update_instance(
            campaign,
            status="sent",
            sent_at=utc_now(),
            recipient_count=recipients,
        )
        self._log_operation("Campaign sent", campaign_id=campaign_id, recipients=recipients)
        return recipients

    async def delete_campaign(self, campaign_id: int) -> None:
        await self.campaigns.delete(campaign_id)
