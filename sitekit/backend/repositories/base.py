"""
Base Repository.

Base class for all repositories with common CRUD operations.
"""

from collections.abc import Iterable
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.core.exceptions import NotFoundError
from sitekit.backend.core.logging import get_logger
from sitekit.backend.models.base import Base

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common CRUD operations.

    Subclasses should set the model class:

        class OrderRepository(BaseRepository[Order]):
            model = Order

    `not_found_message` is the text of the NotFoundError raised by
    get_by_id, so endpoints can report "Category not found" and the like.
    """

    model: type[ModelType]
    not_found_message: str | None = None

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def not_found_error(self) -> NotFoundError:
        return NotFoundError(self.not_found_message or f"{self.model.__name__} not found")

    async def get_by_id(self, id: int) -> ModelType:
        """
        Get a single record by ID.

        Raises:
            NotFoundError: If record not found
        """
        instance = await self.get_by_id_or_none(id)
        if instance is None:
            raise self.not_found_error()
        return instance

    async def get_by_id_or_none(self, id: int) -> ModelType | None:
        """Get a single record by ID, returning None if not found."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def find(
        self,
        *where: ColumnElement[bool],
        order_by: Iterable[Any] = (),
        limit: int | None = None,
        offset: int = 0,
    ) -> list[ModelType]:
        """Filtered, ordered select. Every filter clause is ANDed."""
        stmt = select(self.model).where(*where).order_by(*order_by)
        if limit is not None:
            stmt = stmt.limit(limit).offset(offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_one(self, *where: ColumnElement[bool]) -> ModelType | None:
        """First record matching all filters, or None."""
        result = await self.session.execute(select(self.model).where(*where).limit(1))
        return result.scalars().first()

    async def count(self, *where: ColumnElement[bool]) -> int:
        """Count records matching all filters."""
        result = await self.session.execute(
            select(func.count()).select_from(self.model).where(*where)
        )
        return result.scalar_one()

    async def create(self, **kwargs: Any) -> ModelType:
        """Create a new record."""
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, id: int, **kwargs: Any) -> ModelType:
        """
        Update an existing record.

        Raises:
            NotFoundError: If record not found
        """
        instance = await self.get_by_id(id)
        return await self.update_instance(instance, **kwargs)

    async def update_instance(self, instance: ModelType, **kwargs: Any) -> ModelType:
        """Apply attribute changes to an already loaded record."""
        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, id: int) -> ModelType:
        """
        Delete a record by ID and return the deleted instance.

        Raises:
            NotFoundError: If record not found
        """
        instance = await self.get_by_id(id)
        await self.session.delete(instance)
        await self.session.flush()
        return instance

    async def exists(self, id: int) -> bool:
        """Check if a record exists by ID."""
        result = await self.session.execute(
            select(self.model.id).where(self.model.id == id)
        )
        return result.scalar_one_or_none() is not None


class SortableRepository(BaseRepository[ModelType]):
    """
    Repository for models with `sort_order` and `visible` columns.

    `scope` filters (usually the site) keep ordering operations from
    touching rows that belong to another tenant.
    """

    async def next_sort_order(self, *scope: ColumnElement[bool]) -> int:
        """max(sort_order) + 1 within the scope, 0 for an empty scope."""
        result = await self.session.execute(
            select(func.max(self.model.sort_order)).where(*scope)
        )
        current = result.scalar_one_or_none()
        return 0 if current is None else current + 1

    async def reorder(
        self,
        pairs: Iterable[tuple[int, int]],
        *scope: ColumnElement[bool],
    ) -> int:
        """
        Set sort_order for each (id, sort_order) pair within the scope.

        Returns:
            Number of rows updated
        """
        updated = 0
        for row_id, sort_order in pairs:
            result = await self.session.execute(
                update(self.model)
                .where(self.model.id == row_id, *scope)
                .values(sort_order=sort_order)
                .execution_options(synchronize_session="fetch")
            )
            updated += result.rowcount or 0
        await self.session.flush()
        return updated

    async def set_visibility(self, id: int, visible: bool) -> ModelType:
        return await self.update(id, visible=visible)
