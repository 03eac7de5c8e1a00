"""Page of list-query results, as stored in the cache.

Rows are JSON-compatible dicts so a page round-trips through either cache
tier unchanged.
"""

from dataclasses import dataclass, field
from typing import Any

from pydantic_core import to_jsonable_python


@dataclass(frozen=True)
class Page:
    """One page of rows plus the total row count for the query."""

    rows: list[dict[str, Any]] = field(default_factory=list)
    total_count: int = 0
    page: int = 1
    limit: int = 10

    @classmethod
    def from_results(cls, results: list[Any], total_count: int, page: int, limit: int) -> "Page":
        """Build a page from DTO dataclasses (Decimal, datetime, Enum made JSON-safe)."""
        return cls(
            rows=[to_jsonable_python(r) for r in results],
            total_count=total_count,
            page=page,
            limit=limit,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "rows": self.rows,
            "total_count": self.total_count,
            "page": self.page,
            "limit": self.limit,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Page":
        return cls(
            rows=list(data.get("rows", [])),
            total_count=int(data.get("total_count", 0)),
            page=int(data.get("page", 1)),
            limit=int(data.get("limit", 10)),
        )
