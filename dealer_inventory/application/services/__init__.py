"""Application services: query planning and the sale exclusivity guard."""

from dealer_inventory.application.services.exclusivity_guard import ExclusivityGuard
from dealer_inventory.application.services.query_planner import (
    build_search,
    parse_sort,
    plan_query,
)

__all__ = [
    "ExclusivityGuard",
    "build_search",
    "parse_sort",
    "plan_query",
]
