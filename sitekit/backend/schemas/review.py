"""
Review Schemas.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ReviewCreate(BaseModel):
    author_name: str = ""
    author_email: str | None = None
    rating: int | None = None
    title: str | None = None
    content: str = ""


class ReviewStatusUpdate(BaseModel):
    status: str


class PublicReviewResponse(BaseModel):
    id: int
    author_name: str
    rating: int
    title: str | None
    content: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReviewResponse(PublicReviewResponse):
    author_email: str | None
    status: str


class ReviewStats(BaseModel):
    total: int
    average_rating: float
    distribution: dict[int, int]
