"""
FAQ Schemas.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class FaqCategoryCreate(BaseModel):
    name: str = Field(default="", max_length=255)
    sort_order: int = 0


class FaqCategoryUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    sort_order: int | None = None


class FaqCategoryResponse(BaseModel):
    id: int
    name: str
    sort_order: int

    model_config = ConfigDict(from_attributes=True)


class FaqItemCreate(BaseModel):
    category_id: int | None = None
    question: str = ""
    answer: str = ""
    sort_order: int = 0
    visible: bool = True


class FaqItemUpdate(BaseModel):
    category_id: int | None = None
    question: str | None = Field(default=None, min_length=1)
    answer: str | None = Field(default=None, min_length=1)
    sort_order: int | None = None
    visible: bool | None = None


class FaqItemResponse(BaseModel):
    id: int
    category_id: int | None
    question: str
    answer: str
    sort_order: int
    visible: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FaqGroupCategory(BaseModel):
    id: int | None
    name: str


class FaqGroup(BaseModel):
    category: FaqGroupCategory
    items: list[FaqItemResponse]
