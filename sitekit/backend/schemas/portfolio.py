"""
Portfolio Schemas.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from sitekit.backend.models.portfolio import PortfolioProject


class PortfolioTranslationData(BaseModel):
    title: str | None = None
    subtitle: str | None = None
    description: str | None = None


class PortfolioImageResponse(BaseModel):
    id: int
    project_id: int
    image_path: str
    caption: str | None
    sort_order: int

    model_config = ConfigDict(from_attributes=True)


class PortfolioProjectResponse(BaseModel):
    id: int
    site: str
    project_key: str
    cover_image: str | None
    project_url: str | None
    category: str | None
    technologies: list[str]
    visible: bool
    sort_order: int
    created_at: datetime
    translations: dict[str, PortfolioTranslationData] = Field(default_factory=dict)
    images: list[PortfolioImageResponse] = Field(default_factory=list)

    @classmethod
    def from_model(cls, project: PortfolioProject) -> "PortfolioProjectResponse":
        return cls(
            id=project.id,
            site=project.site,
            project_key=project.project_key,
            cover_image=project.cover_image,
            project_url=project.project_url,
            category=project.category,
            technologies=list(project.technologies or []),
            visible=project.visible,
            sort_order=project.sort_order,
            created_at=project.created_at,
            translations={
                t.lang: PortfolioTranslationData(
                    title=t.title,
                    subtitle=t.subtitle,
                    description=t.description,
                )
                for t in project.translations
            },
            images=[PortfolioImageResponse.model_validate(i) for i in project.images],
        )
