"""
Service Layer Base.

Endpoints talk to services, services talk to repositories. A service owns
the business rules of its resource and turns SQLAlchemy failures into the
application errors the API layer knows how to render.

    class OrderService(BaseService):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(session)
            self.repo = OrderRepository(session)

        async def update_status(self, order_id: int, status: str) -> Order:
            self._validate_choice(status, ORDER_STATUSES, "Invalid status")
            return await self.repo.update(order_id, status=status)
"""

from collections.abc import Awaitable, Iterable
from typing import Any, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sitekit.backend.core.exceptions import ConflictError, DatabaseError, ValidationError
from sitekit.backend.core.logging import get_logger
from sitekit.backend.models.base import Base

T = TypeVar("T")

UNIQUE_VIOLATION_MARKERS = ("unique", "duplicate")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class BaseService:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._logger = get_logger(type(self).__module__)

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def _execute_db_operation(
        self,
        operation: str,
        coro: Awaitable[T],
        conflict_message: str = "Resource already exists",
    ) -> T:
        """
        Await `coro`, mapping storage failures.

        Raises:
            ConflictError: A unique constraint rejected the write
            DatabaseError: Any other constraint or driver failure
        """
        try:
            return await coro
        except IntegrityError as e:
            self._logger.warning("Database integrity error", extra={"operation": operation, "error": str(e)})
            reason = str(e).lower()
            if any(marker in reason for marker in UNIQUE_VIOLATION_MARKERS):
                raise ConflictError(conflict_message) from e
            raise DatabaseError(f"Database constraint violation: {operation}") from e
        except SQLAlchemyError as e:
            self._logger.error("Database error", extra={"operation": operation, "error": str(e)})
            raise DatabaseError(f"Database operation failed: {operation}") from e

    def _validate_required(
        self,
        fields: dict[str, Any],
        field_names: list[str],
        message: str | None = None,
    ) -> None:
        """None and whitespace-only strings count as missing; 0 and False do not."""
        missing = [name for name in field_names if _is_blank(fields.get(name))]
        if missing:
            raise ValidationError(
                message or f"{', '.join(missing)} required",
                details={"missing_fields": missing},
            )

    def _validate_choice(
        self,
        value: Any,
        allowed: Iterable[Any],
        message: str = "Invalid value",
    ) -> None:
        choices = list(allowed)
        if value not in choices:
            raise ValidationError(message, details={"allowed": choices})

    def _log_operation(self, operation: str, **context: Any) -> None:
        self._logger.info(operation, extra={"service": type(self).__name__, **context})

    def _changes(self, data: BaseModel, model: type[Base]) -> dict[str, Any]:
        """
        Fields present in a partial update body.

        Raises:
            ValidationError: If the body sets a NOT NULL column to null
        """
        changes = data.model_dump(exclude_unset=True)
        columns = model.__table__.columns
        nulls = [
            name
            for name, value in changes.items()
            if value is None and name in columns and not columns[name].nullable
        ]
        if nulls:
            raise ValidationError(f"{', '.join(nulls)} cannot be null", details={"null_fields": nulls})
        return changes
