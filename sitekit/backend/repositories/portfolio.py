"""
Portfolio Repositories.
"""

from sitekit.backend.models.portfolio import PortfolioImage, PortfolioProject
from sitekit.backend.repositories.base import BaseRepository, SortableRepository


class PortfolioProjectRepository(SortableRepository[PortfolioProject]):
    model = PortfolioProject
    not_found_message = "Project not found"

    async def list_for_site(
        self,
        site: str,
        category: str | None = None,
        visible_only: bool = False,
    ) -> list[PortfolioProject]:
        where = [PortfolioProject.site == site]
        if category:
            where.append(PortfolioProject.category == category)
        if visible_only:
            where.append(PortfolioProject.visible.is_(True))
        return await self.find(*where, order_by=[PortfolioProject.sort_order, PortfolioProject.id])

    async def get_for_site(
        self,
        site: str,
        project_id: int,
        visible_only: bool = False,
    ) -> PortfolioProject:
        where = [PortfolioProject.site == site, PortfolioProject.id == project_id]
        if visible_only:
            where.append(PortfolioProject.visible.is_(True))
        project = await self.find_one(*where)
        if project is None:
            raise self.not_found_error()
        return project


class PortfolioImageRepository(BaseRepository[PortfolioImage]):
    model = PortfolioImage
    not_found_message = "Image not found"
