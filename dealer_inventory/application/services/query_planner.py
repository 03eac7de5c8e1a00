"""Query planner: untrusted list parameters to a tenant-scoped QueryPlan.

Pure and deterministic (no I/O). Sort fields are checked against the
entity whitelist so callers cannot sort by arbitrary columns, and search
only touches the configured text fields.
"""

from __future__ import annotations

from dealer_inventory.domain.enums import SortDirection
from dealer_inventory.domain.exceptions import InvalidQueryException
from dealer_inventory.domain.value_objects.query import (
    DEFAULT_ORDER,
    And,
    ListQuery,
    Or,
    Predicate,
    QueryConfig,
    QueryPlan,
    SortSpec,
    all_of,
    any_of,
    contains_ci,
    eq,
)

SORT_SEP = ":"


def parse_sort(sort: str | None, config: QueryConfig) -> tuple[SortSpec, ...]:
    """Parse 'field:direction' into an order tuple; default is (created_at, DESC).

    Raises:
        InvalidQueryException: 'bad format' for any shape other than exactly
            field:ASC|DESC (case-insensitive direction), 'field not sortable'
            when the field is outside the whitelist.
    """
    if sort is None:
        return DEFAULT_ORDER
    parts = sort.split(SORT_SEP)
    if len(parts) != 2 or not parts[0]:
        raise InvalidQueryException("bad format", value=sort)
    raw_field, raw_direction = parts
    field_name = config.sort_aliases.get(raw_field, raw_field)
    if field_name not in config.sortable_fields:
        raise InvalidQueryException("field not sortable", value=sort)
    try:
        direction = SortDirection(raw_direction.upper())
    except ValueError:
        raise InvalidQueryException("bad format", value=sort) from None
    return (SortSpec(field_name, direction),)


def build_search(filter_text: str | None, config: QueryConfig) -> Or | None:
    """OR of case-insensitive substring matches over the searchable fields.

    Returns None when there is no filter or nothing is searchable.
    """
    if not filter_text or not config.searchable_fields:
        return None
    return any_of(
        *(contains_ci(name, filter_text) for name in sorted(config.searchable_fields))
    )


def plan_query(
    tenant_id: str,
    params: ListQuery,
    config: QueryConfig,
    base: Predicate | None = None,
) -> QueryPlan:
    """Build a validated QueryPlan for one list request.

    Args:
        tenant_id: Caller's tenant; always ANDed into the predicate.
        params: Page/limit (already >= 1), sort, filter, include_deleted.
        config: Entity whitelist (sortable, searchable, aliases).
        base: Optional caller narrowing (e.g. one vehicle's sale records).

    Returns:
        QueryPlan with offset = (page - 1) * limit.

    Raises:
        InvalidQueryException: On malformed or non-whitelisted sort.
    """
    order = parse_sort(params.sort, config)
    scoped: And = all_of(eq(config.tenant_field, tenant_id), base)
    return QueryPlan(
        tenant_id=tenant_id,
        base=scoped,
        search=build_search(params.filter, config),
        order=order,
        page=params.page,
        limit=params.limit,
        offset=(params.page - 1) * params.limit,
        include_deleted=params.include_deleted,
        deleted_field=config.deleted_field,
    )
