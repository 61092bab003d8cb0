"""
Hexagon Schemas.
"""

from pydantic import BaseModel, ConfigDict, Field


class HexagonCreate(BaseModel):
    key: str = Field(default="", max_length=64)
    name_pl: str | None = Field(default=None, max_length=255)
    name_en: str = Field(default="", max_length=255)
    name_de: str | None = Field(default=None, max_length=255)
    name_ru: str | None = Field(default=None, max_length=255)
    icon_number: int = Field(default=1, ge=0)
    visible: bool = True


class HexagonUpdate(BaseModel):
    key: str | None = Field(default=None, max_length=64)
    name_pl: str | None = Field(default=None, max_length=255)
    name_en: str | None = Field(default=None, max_length=255)
    name_de: str | None = Field(default=None, max_length=255)
    name_ru: str | None = Field(default=None, max_length=255)
    icon_number: int | None = Field(default=None, ge=0)
    visible: bool | None = None
    sort_order: int | None = None


class HexagonResponse(BaseModel):
    id: int
    site: str
    key: str
    name_pl: str | None
    name_en: str
    name_de: str | None
    name_ru: str | None
    icon_number: int
    visible: bool
    sort_order: int

    model_config = ConfigDict(from_attributes=True)
