"""
Offset Pagination.

Public list endpoints take `limit` (1..100, default 20) and `offset`
query parameters and answer with a PaginatedResponse whose
`pagination.has_more` tells the widget whether to offer another page.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from fastapi import Query
from pydantic import BaseModel

from sitekit.backend.schemas.base import PaginatedResponse, PaginationInfo, ResponseMetadata

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PaginationParams:
    limit: int
    offset: int


def get_pagination_params(
    limit: int = Query(
        default=DEFAULT_PAGE_SIZE,
        ge=1,
        le=MAX_PAGE_SIZE,
        description="Page size",
    ),
    offset: int = Query(default=0, ge=0, description="Items to skip"),
) -> PaginationParams:
    """Dependency: `pagination: PaginationParams = Depends(get_pagination_params)`."""
    return PaginationParams(limit=limit, offset=offset)


def create_paginated_response(
    items: Sequence[Any],
    item_schema: type[BaseModel],
    total: int,
    limit: int = DEFAULT_PAGE_SIZE,
    offset: int = 0,
    request_id: str | None = None,
) -> dict[str, Any]:
    """
    Serialise one page of ORM rows (or dicts) through `item_schema`.

    Fields the schema does not declare are dropped, so rows can be passed
    as they come from the repository.
    """
    page = PaginatedResponse(
        data=[item_schema.model_validate(item).model_dump(mode="json") for item in items],
        pagination=PaginationInfo(
            total=total,
            limit=limit,
            offset=offset,
            has_more=offset + len(items) < total,
        ),
        metadata=ResponseMetadata(request_id=request_id),
    )
    return page.model_dump(mode="json")
