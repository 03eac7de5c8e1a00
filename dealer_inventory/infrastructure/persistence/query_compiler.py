"""Lower domain predicates and query plans to SQLAlchemy.

The only place where FieldOp/And/Or become SQL. Field names are resolved
against the mapped model's columns; an unknown field is a programming
error (the planner only emits whitelisted names), not a client error.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, and_, false, func, inspect as sa_inspect, or_, select, true
from sqlalchemy.sql.elements import ColumnElement

from dealer_inventory.domain.enums import SortDirection
from dealer_inventory.domain.value_objects.query import (
    And,
    FieldOp,
    Operator,
    Or,
    Predicate,
    QueryPlan,
)

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Escape LIKE metacharacters so the value matches literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def _column(model: type[Any], name: str) -> Any:
    columns = sa_inspect(model).columns
    if name not in columns:
        raise ValueError(f"{model.__name__} has no column {name!r}")
    return getattr(model, name)


def compile_predicate(model: type[Any], predicate: Predicate) -> ColumnElement[bool]:
    """Translate a predicate tree into a SQLAlchemy boolean expression."""
    if isinstance(predicate, FieldOp):
        col = _column(model, predicate.field)
        match predicate.op:
            case Operator.EQ:
                return col == predicate.value
            case Operator.NE:
                return col != predicate.value
            case Operator.CONTAINS_CI:
                return col.ilike(f"%{escape_like(str(predicate.value))}%", escape=LIKE_ESCAPE)
            case Operator.IS_NULL:
                return col.is_(None)
            case Operator.IS_NOT_NULL:
                return col.is_not(None)
        raise ValueError(f"Unsupported operator: {predicate.op!r}")
    if isinstance(predicate, And):
        if not predicate.terms:
            return true()
        return and_(*(compile_predicate(model, t) for t in predicate.terms))
    if isinstance(predicate, Or):
        if not predicate.terms:
            return false()
        return or_(*(compile_predicate(model, t) for t in predicate.terms))
    raise TypeError(f"Not a predicate: {predicate!r}")


def plan_filter(model: type[Any], plan: QueryPlan) -> ColumnElement[bool]:
    """WHERE clause for a plan: predicate plus tombstone exclusion unless include_deleted."""
    clause = compile_predicate(model, plan.where)
    if plan.deleted_field and not plan.include_deleted:
        clause = and_(clause, _column(model, plan.deleted_field).is_(None))
    return clause


def build_page_query(model: type[Any], plan: QueryPlan) -> Select[Any]:
    """SELECT for one page: filter, ORDER BY, OFFSET, LIMIT.

    The primary key is appended as a tie-breaker so pages are stable.
    """
    order_by = []
    for spec in plan.order:
        col = _column(model, spec.field)
        order_by.append(col.asc() if spec.direction is SortDirection.ASC else col.desc())
    order_by.append(_column(model, "id").asc())
    return (
        select(model)
        .where(plan_filter(model, plan))
        .order_by(*order_by)
        .offset(plan.offset)
        .limit(plan.limit)
    )


def build_count_query(model: type[Any], plan: QueryPlan) -> Select[Any]:
    """SELECT COUNT(*) over the plan's filter (pagination ignored)."""
    return select(func.count()).select_from(model).where(plan_filter(model, plan))
