"""
Base Schemas.

Standard API response schemas shared by every endpoint.
"""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from sitekit.backend.core.exceptions import ValidationError
from sitekit.backend.core.utils import utc_now

DataT = TypeVar("DataT")


class ResponseMetadata(BaseModel):
    """Metadata included in all API responses."""

    timestamp: datetime = Field(default_factory=utc_now)
    request_id: str | None = None


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str
    message: str
    details: dict[str, Any] | None = None


class ApiResponse(BaseModel, Generic[DataT]):
    """
    Standard API response envelope.

    All API responses use this structure for consistency.
    """

    success: bool = True
    data: DataT | None = None
    error: ErrorDetail | None = None
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)

    model_config = ConfigDict(from_attributes=True)


class ErrorResponse(BaseModel):
    """Standard error response."""

    success: bool = False
    data: None = None
    error: ErrorDetail
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)


class PaginationInfo(BaseModel):
    """Pagination metadata."""

    total: int
    limit: int
    offset: int = 0
    has_more: bool = False


class PaginatedResponse(BaseModel, Generic[DataT]):
    """Paginated list response."""

    success: bool = True
    data: list[DataT]
    error: None = None
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)
    pagination: PaginationInfo


class MessageResponse(BaseModel):
    """Simple acknowledgement payload."""

    message: str


class VisibilityUpdate(BaseModel):
    """Body for PATCH .../visibility endpoints."""

    visible: bool


class ReorderItem(BaseModel):
    id: int
    sort_order: int


class ReorderRequest(BaseModel):
    """
    Body for reorder endpoints.

    `order` is either a list of ids (position becomes sort_order) or a
    list of {id, sort_order} objects.
    """

    order: Any = None

    def to_pairs(self) -> list[tuple[int, int]]:
        """Normalise both accepted shapes into (id, sort_order) pairs."""
        if not isinstance(self.order, list):
            raise ValidationError("Order must be an array")

        pairs: list[tuple[int, int]] = []
        for index, entry in enumerate(self.order):
            if isinstance(entry, dict):
                try:
                    item = ReorderItem.model_validate(entry)
                except PydanticValidationError as e:
                    raise ValidationError(
                        "Invalid order entry",
                        details={"index": index},
                    ) from e
                pairs.append((item.id, item.sort_order))
            elif isinstance(entry, int) and not isinstance(entry, bool):
                pairs.append((entry, index))
            elif isinstance(entry, str) and entry.isdigit():
                pairs.append((int(entry), index))
            else:
                raise ValidationError(
                    "Order entries must be ids or {id, sort_order} objects",
                    details={"index": index},
                )
        return pairs
