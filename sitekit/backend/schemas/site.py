"""
Site Settings and Contacts Schemas.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, RootModel


class ContactUpdate(BaseModel):
    phone: str = Field(default="", max_length=64)
    email: str = Field(default="", max_length=255)
    address: str | None = Field(default=None, max_length=255)
    address_line2: str | None = Field(default=None, max_length=255)
    nip: str | None = Field(default=None, max_length=32)
    telegram: str | None = Field(default=None, max_length=128)
    contact_person: str | None = Field(default=None, max_length=255)


class ContactResponse(BaseModel):
    id: int
    site: str
    phone: str | None
    email: str | None
    address: str | None
    address_line2: str | None
    nip: str | None
    telegram: str | None
    contact_person: str | None
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SettingsUpdate(RootModel[dict[str, Any]]):
    """Flat mapping of setting name (without the site prefix) to value."""


class TelegramMessageRequest(BaseModel):
    message: str = ""
