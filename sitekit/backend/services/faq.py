"""
FAQ Service.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.core.exceptions import ValidationError
from sitekit.backend.models.faq import FaqCategory, FaqItem
from sitekit.backend.repositories.faq import FaqCategoryRepository, FaqItemRepository
from sitekit.backend.schemas.faq import (
    FaqCategoryCreate,
    FaqCategoryUpdate,
    FaqGroup,
    FaqGroupCategory,
    FaqItemCreate,
    FaqItemResponse,
    FaqItemUpdate,
)
from sitekit.backend.services.base import BaseService

UNCATEGORISED_GROUP = "General"


class FaqService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.categories = FaqCategoryRepository(session)
        self.items = FaqItemRepository(session)

    async def grouped(self) -> list[FaqGroup]:
        """
        Visible items grouped by category in category order.

        Items without a category form a trailing "General" group; groups
        without visible items are left out.
        """
        categories = await self.categories.list_ordered()
        items = await self.items.list_items(visible_only=True)

        by_category: dict[int | None, list[FaqItemResponse]] = {}
        for item in items:
            by_category.setdefault(item.category_id, []).append(FaqItemResponse.model_validate(item))

        groups = [
            FaqGroup(category=FaqGroupCategory(id=c.id, name=c.name), items=by_category[c.id])
            for c in categories
            if by_category.get(c.id)
        ]
        if by_category.get(None):
            groups.append(
                FaqGroup(
                    category=FaqGroupCategory(id=None, name=UNCATEGORISED_GROUP),
                    items=by_category[None],
                )
            )
        return groups

    async def _check_category(self, category_id: int | None) -> None:
        if category_id is not None and not await self.categories.exists(category_id):
            raise ValidationError("Category not found")

    # Categories

    async def list_categories(self) -> list[FaqCategory]:
        return await self.categories.list_ordered()

    async def create_category(self, data: FaqCategoryCreate) -> FaqCategory:
        if not data.name.strip():
            raise ValidationError("Name is required")
        return await self.categories.create(name=data.name.strip(), sort_order=data.sort_order)

    async def update_category(self, category_id: int, data: FaqCategoryUpdate) -> FaqCategory:
        changes = self._changes(data, self.categories.model)
        return await self._execute_db_operation("update_faq_category", self.categories.update(category_id, **changes))

    async def delete_category(self, category_id: int) -> None:
        """Delete a category; its items become uncategorised."""
        category = await self.categories.get_by_id(category_id)
        await self.items.detach_category(category.id)
        await self.session.delete(category)
        await self.session.flush()
        self._log_operation("FAQ category deleted", category_id=category_id)

    # Items

    async def list_items(self, category_id: int | None = None) -> list[FaqItem]:
        return await self.items.list_items(category_id=category_id)

    async def create_item(self, data: FaqItemCreate) -> FaqItem:
        self._validate_required(
            {"question": data.question, "answer": data.answer},
            ["question", "answer"],
            message="Question and answer are required",
        )
        await self._check_category(data.category_id)
        return await self.items.create(**data.model_dump())

    async def update_item(self, item_id: int, data: FaqItemUpdate) -> FaqItem:
        changes = self._changes(data, self.items.model)
        if "category_id" in changes:
            await self._check_category(changes["category_id"])
        return await self._execute_db_operation("update_faq_item", self.items.update(item_id, **changes))

    async def delete_item(self, item_id: int) -> None:
        await self.items.delete(item_id)
