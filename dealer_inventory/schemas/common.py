"""Shared list-query parameters and paged response schema."""

from typing import Annotated, Any, Generic, TypeVar

from fastapi import Query
from pydantic import BaseModel, Field

from dealer_inventory.core.constants import DEFAULT_LIMIT, DEFAULT_PAGE
from dealer_inventory.domain.value_objects.query import ListQuery

T = TypeVar("T")


def list_query_params(
    page: Annotated[int, Query(ge=1, description="1-based page number")] = DEFAULT_PAGE,
    limit: Annotated[int, Query(ge=1, description="Rows per page")] = DEFAULT_LIMIT,
    sort: Annotated[
        str | None, Query(max_length=64, description="field:ASC or field:DESC")
    ] = None,
    filter: Annotated[
        str | None, Query(max_length=200, description="Case-insensitive text search")
    ] = None,
    include_deleted: Annotated[
        bool, Query(alias="includeDeleted", description="Include soft-deleted rows")
    ] = False,
) -> ListQuery:
    """Validated list parameters as a ListQuery (page/limit range-checked here)."""
    return ListQuery(
        page=page,
        limit=limit,
        sort=sort,
        filter=filter or None,
        include_deleted=include_deleted,
    )


class PageResponse(BaseModel, Generic[T]):
    """One page of rows plus the total row count."""

    rows: list[T]
    total_count: int = Field(..., ge=0)
    page: int
    limit: int

    @classmethod
    def from_page(cls, page: Any) -> "PageResponse[T]":
        return cls.model_validate(page.to_dict())
