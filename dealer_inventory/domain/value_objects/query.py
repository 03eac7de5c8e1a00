"""List-query value objects: predicate algebra, sort, and query plan.

Predicates form a small tagged-variant algebra (FieldOp, And, Or). The
query planner produces them; only the persistence query compiler lowers
them to SQL, so no untyped key/operator maps cross layer boundaries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from dealer_inventory.core.constants import DEFAULT_LIMIT, DEFAULT_PAGE, DEFAULT_SORT_FIELD
from dealer_inventory.domain.enums import SortDirection


class Operator(str, Enum):
    """Comparison operators supported by FieldOp."""

    EQ = "eq"
    NE = "ne"
    CONTAINS_CI = "contains_ci"  # case-insensitive substring (ILIKE '%v%')
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"


@dataclass(frozen=True)
class FieldOp:
    """Leaf predicate: `field <op> value`."""

    field: str
    op: Operator
    value: Any = None


@dataclass(frozen=True)
class And:
    """Conjunction of predicates. An empty And is always true."""

    terms: tuple[Predicate, ...]


@dataclass(frozen=True)
class Or:
    """Disjunction of predicates. An empty Or is always false."""

    terms: tuple[Predicate, ...]


Predicate = FieldOp | And | Or


def eq(field_name: str, value: Any) -> FieldOp:
    return FieldOp(field_name, Operator.EQ, value)


def ne(field_name: str, value: Any) -> FieldOp:
    return FieldOp(field_name, Operator.NE, value)


def contains_ci(field_name: str, value: str) -> FieldOp:
    return FieldOp(field_name, Operator.CONTAINS_CI, value)


def is_null(field_name: str) -> FieldOp:
    return FieldOp(field_name, Operator.IS_NULL)


def all_of(*terms: Predicate | None) -> And:
    """Build an And from terms, dropping None and flattening nested Ands."""
    flat: list[Predicate] = []
    for term in terms:
        if term is None:
            continue
        if isinstance(term, And):
            flat.extend(term.terms)
        else:
            flat.append(term)
    return And(tuple(flat))


def any_of(*terms: Predicate) -> Or:
    return Or(tuple(terms))


def predicate_fields(predicate: Predicate) -> set[str]:
    """Return every field name referenced by a predicate tree."""
    if isinstance(predicate, FieldOp):
        return {predicate.field}
    names: set[str] = set()
    for term in predicate.terms:
        names |= predicate_fields(term)
    return names


@dataclass(frozen=True)
class SortSpec:
    """One ORDER BY term."""

    field: str
    direction: SortDirection


DEFAULT_ORDER: tuple[SortSpec, ...] = (SortSpec(DEFAULT_SORT_FIELD, SortDirection.DESC),)


@dataclass(frozen=True)
class ListQuery:
    """Caller-supplied list parameters after HTTP-level validation.

    page and limit are already >= 1 here; the planner does not re-check them.
    """

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort: str | None = None
    filter: str | None = None
    include_deleted: bool = False

    def cache_params(self) -> dict[str, Any]:
        """Return every parameter (defaults applied) for cache key derivation."""
        return {
            "page": self.page,
            "limit": self.limit,
            "sort": self.sort,
            "filter": self.filter,
            "include_deleted": self.include_deleted,
        }


@dataclass(frozen=True)
class QueryConfig:
    """Per-entity whitelist of sortable and searchable fields.

    sort_aliases maps public names (e.g. 'createdAt') to column names;
    the alias target must itself be sortable.
    """

    sortable_fields: frozenset[str]
    searchable_fields: frozenset[str] = frozenset()
    sort_aliases: dict[str, str] = field(default_factory=dict)
    tenant_field: str = "dealership_id"
    deleted_field: str | None = "deleted_at"


@dataclass(frozen=True)
class QueryPlan:
    """Validated, tenant-scoped plan for one list query. Never persisted."""

    tenant_id: str
    base: And
    search: Or | None
    order: tuple[SortSpec, ...]
    page: int
    limit: int
    offset: int
    include_deleted: bool
    deleted_field: str | None = "deleted_at"

    @property
    def where(self) -> And:
        """Full predicate: base (tenant scope and narrowing) AND search."""
        return all_of(self.base, self.search)
