"""
Category Schemas.
"""

from pydantic import BaseModel, ConfigDict, Field


class CategoryCreate(BaseModel):
    key: str = Field(default="", max_length=64, examples=["excavators"])
    name_pl: str | None = Field(default=None, max_length=255)
    name_en: str = Field(default="", max_length=255, examples=["Excavators"])
    name_de: str | None = Field(default=None, max_length=255)
    name_ru: str | None = Field(default=None, max_length=255)
    icon: str | None = Field(default=None, max_length=255)
    visible: bool = True


class CategoryUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    key: str | None = Field(default=None, max_length=64)
    name_pl: str | None = Field(default=None, max_length=255)
    name_en: str | None = Field(default=None, max_length=255)
    name_de: str | None = Field(default=None, max_length=255)
    name_ru: str | None = Field(default=None, max_length=255)
    icon: str | None = Field(default=None, max_length=255)
    visible: bool | None = None
    sort_order: int | None = None


class CategoryResponse(BaseModel):
    id: int
    site: str
    key: str
    name_pl: str | None
    name_en: str
    name_de: str | None
    name_ru: str | None
    icon: str | None
    visible: bool
    sort_order: int

    model_config = ConfigDict(from_attributes=True)
