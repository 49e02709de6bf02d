"""SQLAlchemy adapter – lower the predicate AST into SQLAlchemy column expressions."""
from __future__ import annotations

import enum
from typing import Any, Callable

from sqlalchemy import String, and_, cast, false, func, or_
from sqlalchemy.orm import RelationshipProperty, aliased

from mp_query.application.operators import FilterOperator
from mp_query.application.predicates import AllOf, AnyOf, Comparison, OrderKey, Predicate, Unsatisfiable
from mp_query.config import QuerySettings
from mp_query.config.settings import PatternMatch
from mp_query.kernel.coercion import coerce

_ORDERING: dict[FilterOperator, Callable[[Any, Any], Any]] = {
    FilterOperator.GREATER_THAN: lambda col, v: col > v,
    FilterOperator.LESS_THAN: lambda col, v: col < v,
    FilterOperator.GREATER_THAN_OR_EQUALS: lambda col, v: col >= v,
    FilterOperator.LESS_THAN_OR_EQUALS: lambda col, v: col <= v,
}


def escape_like(value: str, escape: str = "\\") -> str:
    """Escape ``%``, ``_`` and the escape character itself for a LIKE pattern."""
    return value.replace(escape, escape + escape).replace("%", escape + "%").replace("_", escape + "_")


def like_pattern_match(column: Any, value: str, case_sensitive: bool) -> Any:
    """Default substring matcher: ``LIKE`` / ``ILIKE '%value%'`` with escaping."""
    pattern = f"%{escape_like(value)}%"
    if case_sensitive:
        return column.like(pattern, escape="\\")
    return column.ilike(pattern, escape="\\")


def _python_type(column: Any) -> type | None:
    try:
        return column.type.python_type
    except (AttributeError, NotImplementedError):
        return None


def _relationship(attr: Any) -> RelationshipProperty | None:
    prop = getattr(attr, "property", None)
    return prop if isinstance(prop, RelationshipProperty) else None


def _contains(column: Any, value: str, case_sensitive: bool, settings: QuerySettings) -> Any:
    if _python_type(column) is not str:
        column = cast(column, String)
    matcher: PatternMatch | None = settings.pattern_match
    if matcher is None and settings.use_pattern_match:
        matcher = like_pattern_match
    if matcher is not None:
        return matcher(column, value, case_sensitive)
    if case_sensitive:
        return column.contains(value, autoescape=True)
    return func.lower(column).contains(value.lower(), autoescape=True)


def _leaf(column: Any, node: Comparison, settings: QuerySettings) -> Any:
    op = node.operator
    match op:
        case FilterOperator.IS_NULL:
            return column.is_(None)
        case FilterOperator.IS_NOT_NULL:
            return column.is_not(None)
    if node.value is None:
        if node.typed and op is FilterOperator.EQUALS:
            return column.is_(None)
        if node.typed and op is FilterOperator.NOT_EQUALS:
            return column.is_not(None)
        return false()

    if op in (FilterOperator.CONTAINS, FilterOperator.NOT_CONTAINS):
        needle = str(node.value.value) if isinstance(node.value, enum.Enum) else str(node.value)
        condition = _contains(column, needle, node.case_sensitive, settings)
        return condition if op is FilterOperator.CONTAINS else ~condition

    target = _python_type(column)
    value = node.value if node.typed else coerce(node.value, target).unwrap_or(None)
    if value is None:
        return false()
    if target is str and isinstance(value, str) and not node.case_sensitive:
        column, value = func.lower(column), value.lower()
    match op:
        case FilterOperator.EQUALS:
            return column == value
        case FilterOperator.NOT_EQUALS:
            return column != value
    return _ORDERING[op](column, value)


def lower_comparison(entity: Any, node: Comparison, settings: QuerySettings) -> Any:
    """Lower one leaf; nested paths go through ``relationship.has()``."""
    head, _, rest = node.path.partition(".")
    attr = getattr(entity, head)
    if rest:
        rel = _relationship(attr)
        if rel is None:
            return false()
        nested = Comparison(rest, node.operator, node.value, node.case_sensitive, node.typed)
        return attr.has(lower_comparison(rel.mapper.class_, nested, settings))
    return _leaf(attr, node, settings)


def lower_predicate(entity: Any, predicate: Predicate, settings: QuerySettings) -> Any:
    """Lower a predicate tree into a boolean SQL expression over *entity*."""
    match predicate:
        case Comparison():
            return lower_comparison(entity, predicate, settings)
        case AnyOf(terms=terms):
            return or_(*(lower_predicate(entity, term, settings) for term in terms))
        case AllOf(terms=terms):
            return and_(*(lower_predicate(entity, term, settings) for term in terms))
        case Unsatisfiable():
            return false()
    raise TypeError(f"Unsupported predicate node: {type(predicate).__name__}")


def order_column(statement: Any, entity: Any, key: OrderKey) -> tuple[Any, Any]:
    """Return ``(statement, column)`` for *key*, outer-joining relationships on the way."""
    *parents, leaf = key.path.split(".")
    current = entity
    for part in parents:
        attr = getattr(current, part)
        rel = _relationship(attr)
        if rel is None:
            raise TypeError(f"{part!r} is not a relationship")
        target = aliased(rel.mapper.class_)
        statement = statement.outerjoin(target, attr.of_type(target))
        current = target
    column = getattr(current, leaf)
    return statement, (column.desc() if key.descending else column.asc())


__all__ = ["escape_like", "like_pattern_match", "lower_comparison", "lower_predicate", "order_column"]
