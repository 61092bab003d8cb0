"""
Portfolio Service.

Per-site showcase projects with en/ru translations, a cover image and
an image gallery.
"""

import json
from dataclasses import dataclass
from typing import Any

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.core.exceptions import ValidationError
from sitekit.backend.models.portfolio import (
    PORTFOLIO_LANGUAGES,
    PortfolioImage,
    PortfolioProject,
    PortfolioTranslation,
)
from sitekit.backend.repositories.portfolio import (
    PortfolioImageRepository,
    PortfolioProjectRepository,
)
from sitekit.backend.services.base import BaseService
from sitekit.backend.services.storage import UploadStorage

UPLOAD_SUBDIR = "portfolio"
TRANSLATION_FIELDS = ("title", "subtitle", "description")


@dataclass
class PortfolioForm:
    project_key: str = ""
    project_url: str | None = None
    category: str | None = None
    technologies: str | None = None
    visible: bool = True
    translations: str | None = None


def _parse_json(raw: str | None, expected: type, message: str) -> Any:
    if raw is None or raw == "":
        return expected()
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationError(message) from e
    if not isinstance(value, expected):
        raise ValidationError(message)
    return value


def parse_technologies(raw: str | None) -> list[str]:
    """JSON array of technology names."""
    values = _parse_json(raw, list, "Technologies must be a JSON array")
    return [str(value) for value in values]


class PortfolioService(BaseService):
    def __init__(self, session: AsyncSession, storage: UploadStorage | None = None) -> None:
        super().__init__(session)
        self.repo = PortfolioProjectRepository(session)
        self.images = PortfolioImageRepository(session)
        self.storage = storage

    async def list_projects(
        self,
        site: str,
        category: str | None = None,
        visible_only: bool = False,
    ) -> list[PortfolioProject]:
        return await self.repo.list_for_site(site, category=category, visible_only=visible_only)

    async def get_project(
        self,
        site: str,
        project_id: int,
        visible_only: bool = False,
    ) -> PortfolioProject:
        return await self.repo.get_for_site(site, project_id, visible_only=visible_only)

    def _apply_translations(self, project: PortfolioProject, raw: str | None) -> None:
        translations = _parse_json(raw, dict, "Translations must be an object keyed by language")
        existing = {t.lang: t for t in project.translations}
        for lang in PORTFOLIO_LANGUAGES:
            values = translations.get(lang)
            if not isinstance(values, dict):
                continue
            fields = {name: values.get(name) or "" for name in TRANSLATION_FIELDS}
            if lang in existing:
                for name, value in fields.items():
                    setattr(existing[lang], name, value)
            else:
                project.translations.append(PortfolioTranslation(lang=lang, **fields))

    async def create_project(
        self,
        site: str,
        form: PortfolioForm,
        cover_image: UploadFile | None = None,
    ) -> PortfolioProject:
        self._validate_required({"project_key": form.project_key}, ["project_key"], "Project key is required")
        technologies = parse_technologies(form.technologies)

        project = PortfolioProject(
            site=site,
            project_key=form.project_key.strip(),
            project_url=form.project_url or "",
            category=form.category or "",
            technologies=technologies,
            visible=form.visible,
            sort_order=await self.repo.next_sort_order(PortfolioProject.site == site),
            translations=[],
            images=[],
        )
        self._apply_translations(project, form.translations)

        if cover_image is not None and cover_image.filename:
            project.cover_image = await self.storage.save(cover_image, UPLOAD_SUBDIR, "project")
            self.storage.delete_on_rollback(self.session, project.cover_image)

        self.session.add(project)
        await self._execute_db_operation("create_project", self.session.flush())
        await self.session.refresh(project)
        self._log_operation("Portfolio project created", site=site, project_id=project.id)
        return project

    async def update_project(
        self,
        site: str,
        project_id: int,
        form: PortfolioForm,
        cover_image: UploadFile | None = None,
    ) -> PortfolioProject:
        project = await self.repo.get_for_site(site, project_id)
        self._validate_required({"project_key": form.project_key}, ["project_key"], "Project key is required")
        technologies = parse_technologies(form.technologies)
        self._apply_translations(project, form.translations)

        old_cover = None
        if cover_image is not None and cover_image.filename:
            old_cover = project.cover_image
            project.cover_image = await self.storage.save(cover_image, UPLOAD_SUBDIR, "project")
            self.storage.delete_on_rollback(self.session, project.cover_image)

        project.project_key = form.project_key.strip()
        project.project_url = form.project_url or ""
        project.category = form.category or ""
        project.technologies = technologies
        project.visible = form.visible

        await self._execute_db_operation("update_project", self.session.flush())
        await self.session.refresh(project)
        self.storage.delete_after_commit(self.session, [old_cover])
        return project

    async def set_visibility(self, site: str, project_id: int, visible: bool) -> PortfolioProject:
        project = await self.repo.get_for_site(site, project_id)
        return await self.repo.update_instance(project, visible=visible)

    async def reorder(self, site: str, pairs: list[tuple[int, int]]) -> int:
        return await self.repo.reorder(pairs, PortfolioProject.site == site)

    async def delete_project(self, site: str, project_id: int) -> None:
        """Delete a project with its translations, images and files."""
        project = await self.repo.get_for_site(site, project_id)
        files = [project.cover_image] + [image.image_path for image in project.images]
        await self.session.delete(project)
        await self.session.flush()
        self.storage.delete_after_commit(self.session, files)
        self._log_operation("Portfolio project deleted", site=site, project_id=project_id)

    async def add_image(
        self,
        site: str,
        project_id: int,
        image: UploadFile | None,
        caption: str | None = None,
        sort_order: int = 0,
    ) -> PortfolioImage:
        if image is None or not image.filename:
            raise ValidationError("No image uploaded")
        project = await self.repo.get_for_site(site, project_id)
        path = await self.storage.save(image, UPLOAD_SUBDIR, "image")
        self.storage.delete_on_rollback(self.session, path)
        return await self.images.create(
            project_id=project.id,
            image_path=path,
            caption=caption or "",
            sort_order=sort_order,
        )

    async def delete_image(self, site: str, project_id: int, image_id: int) -> None:
        await self.repo.get_for_site(site, project_id)
        image = await self.images.find_one(
            PortfolioImage.id == image_id,
            PortfolioImage.project_id == project_id,
        )
        if image is None:
            raise self.images.not_found_error()
        path = image.image_path
        await self.session.delete(image)
        await self.session.flush()
        self.storage.delete_after_commit(self.session, [path])
