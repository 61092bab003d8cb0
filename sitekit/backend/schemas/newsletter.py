"""
Newsletter Schemas.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SubscribeRequest(BaseModel):
    email: str = ""


class SubscriberResponse(BaseModel):
    id: int
    email: str
    status: str
    subscribed_at: datetime
    unsubscribed_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class CampaignCreate(BaseModel):
    name: str = ""
    subject: str | None = None
    description: str | None = None


class CampaignUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    subject: str | None = None
    description: str | None = None


class CampaignResponse(BaseModel):
    id: int
    name: str
    subject: str | None
    description: str | None
    status: str
    sent_at: datetime | None
    recipient_count: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CampaignSent(BaseModel):
    message: str = "Campaign marked as sent"
    recipients: int


class NewsletterStats(BaseModel):
    active: int
    unsubscribed: int
    new_this_month: int
