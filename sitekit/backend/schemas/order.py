"""
Order Schemas.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class OrderCreate(BaseModel):
    """Public order form. Missing name/phone are reported as 400."""

    name: str = Field(default="", max_length=255)
    phone: str = Field(default="", max_length=64)
    email: str | None = Field(default=None, max_length=255)
    rental_period: str | None = Field(default=None, max_length=255)
    comment: str | None = Field(default=None, max_length=5000)
    page: str | None = Field(default=None, max_length=512)
    product_key: str | None = Field(default=None, max_length=128)


class OrderResponse(BaseModel):
    id: int
    site: str
    name: str
    phone: str
    email: str | None
    rental_period: str | None
    comment: str | None
    page: str | None
    product_key: str | None
    status: str
    notes: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderStatusUpdate(BaseModel):
    status: str = ""


class OrderNotesUpdate(BaseModel):
    notes: str | None = None


class OrderStats(BaseModel):
    total: int
    new: int
    in_progress: int
    completed: int


class DailyCount(BaseModel):
    date: str
    count: int


class PopularProduct(BaseModel):
    product_key: str
    count: int


class PublicOrderResult(BaseModel):
    order_id: int
    notified: bool
