"""Domain value objects: list-query predicates, sort and plan."""

from dealer_inventory.domain.value_objects.query import (
    DEFAULT_ORDER,
    And,
    FieldOp,
    ListQuery,
    Operator,
    Or,
    Predicate,
    QueryConfig,
    QueryPlan,
    SortSpec,
)

__all__ = [
    "DEFAULT_ORDER",
    "And",
    "FieldOp",
    "ListQuery",
    "Operator",
    "Or",
    "Predicate",
    "QueryConfig",
    "QueryPlan",
    "SortSpec",
]
