"""
Category Service.

Per-site storefront categories: CRUD, visibility and manual ordering.
Every mutation is scoped to the site in the path, so an id from another
tenant is reported as not found.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.models.category import Category
from sitekit.backend.repositories.category import CategoryRepository
from sitekit.backend.schemas.category import CategoryCreate, CategoryUpdate
from sitekit.backend.services.base import BaseService


class CategoryService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = CategoryRepository(session)

    async def list_categories(self, site: str, visible_only: bool = False) -> list[Category]:
        return await self.repo.list_for_site(site, visible_only=visible_only)

    async def get_category(self, site: str, category_id: int) -> Category:
        return await self.repo.get_for_site(site, category_id)

    async def create_category(self, site: str, data: CategoryCreate) -> Category:
        """New categories are appended after the current last one."""
        self._validate_required(
            data.model_dump(),
            ["key", "name_en"],
            message="Key and name_en are required",
        )
        sort_order = await self.repo.next_sort_order(Category.site == site)
        self._log_operation("Creating category", site=site, key=data.key)
        return await self._execute_db_operation(
            "create_category",
            self.repo.create(site=site, sort_order=sort_order, **data.model_dump()),
        )

    async def update_category(
        self,
        site: str,
        category_id: int,
        data: CategoryUpdate,
    ) -> Category:
        category = await self.repo.get_for_site(site, category_id)
        update_data = self._changes(data, self.repo.model)
        for field in ("key", "name_en"):
            if field in update_data:
                self._validate_required(update_data, [field], message="Key and name_en are required")

        if not update_data:
            return category

        self._log_operation("Updating category", category_id=category_id, fields=list(update_data))
        return await self._execute_db_operation(
            "update_category",
            self.repo.update_instance(category, **update_data),
        )

    async def set_visibility(self, site: str, category_id: int, visible: bool) -> Category:
        category = await self.repo.get_for_site(site, category_id)
        return await self.repo.update_instance(category, visible=visible)

    async def reorder(self, site: str, pairs: list[tuple[int, int]]) -> int:
        self._log_operation("Reordering categories", site=site, count=len(pairs))
        return await self.repo.reorder(pairs, Category.site == site)

    async def delete_category(self, site: str, category_id: int) -> None:
        category = await self.repo.get_for_site(site, category_id)
        self._log_operation("Deleting category", site=site, category_id=category_id)
        await self.session.delete(category)
        await self.session.flush()
