"""In-memory interpreter of the predicate AST.

Semantics follow SQL three-valued logic as seen from a ``WHERE`` clause:
a ``None`` field satisfies only ``null``; an absent intermediate path
segment satisfies nothing; an unparseable comparison value satisfies
nothing.
"""
from __future__ import annotations

import enum
import operator
from typing import Any, Callable, Iterable

from mp_query.application.operators import FilterOperator
from mp_query.application.predicates import AllOf, AnyOf, Comparison, OrderKey, Predicate, Unsatisfiable
from mp_query.kernel.coercion import coerce
from mp_query.kernel.fields import MISSING, read_path

_ORDERING: dict[FilterOperator, Callable[[Any, Any], bool]] = {
    FilterOperator.GREATER_THAN: operator.gt,
    FilterOperator.LESS_THAN: operator.lt,
    FilterOperator.GREATER_THAN_OR_EQUALS: operator.ge,
    FilterOperator.LESS_THAN_OR_EQUALS: operator.le,
}


def _text(value: Any) -> str:
    if isinstance(value, enum.Enum):
        return str(value.value)
    return str(value)


def _fold(left: Any, right: Any, case_sensitive: bool) -> tuple[Any, Any]:
    if not case_sensitive and isinstance(left, str) and isinstance(right, str):
        return left.casefold(), right.casefold()
    return left, right


def _compare(node: Comparison, item: Any) -> bool:
    value = read_path(item, node.path)
    if value is MISSING:
        return False
    op = node.operator
    match op:
        case FilterOperator.IS_NULL:
            return value is None
        case FilterOperator.IS_NOT_NULL:
            return value is not None
    if node.typed and node.value is None and op in (FilterOperator.EQUALS, FilterOperator.NOT_EQUALS):
        return (value is None) == (op is FilterOperator.EQUALS)
    if value is None or node.value is None:
        return False

    if op in (FilterOperator.CONTAINS, FilterOperator.NOT_CONTAINS):
        haystack, needle = _fold(_text(value), _text(node.value), node.case_sensitive)
        return (needle in haystack) == (op is FilterOperator.CONTAINS)

    expected = node.value if node.typed else coerce(node.value, type(value)).unwrap_or(MISSING)
    if expected is MISSING:
        return False
    left, right = _fold(value, expected, node.case_sensitive)
    match op:
        case FilterOperator.EQUALS:
            return left == right
        case FilterOperator.NOT_EQUALS:
            return left != right
    try:
        return _ORDERING[op](left, right)
    except TypeError:
        return False


def evaluate(predicate: Predicate, item: Any) -> bool:
    """Return whether *item* satisfies *predicate*."""
    match predicate:
        case Comparison():
            return _compare(predicate, item)
        case AnyOf(terms=terms):
            return any(evaluate(term, item) for term in terms)
        case AllOf(terms=terms):
            return all(evaluate(term, item) for term in terms)
        case Unsatisfiable():
            return False
    raise TypeError(f"Unsupported predicate node: {type(predicate).__name__}")


def _sort_value(item: Any, path: str) -> Any:
    value = read_path(item, path)
    if value is MISSING:
        return None
    if isinstance(value, enum.Enum):
        return value.value
    return value


def _sort_key(path: str) -> Callable[[Any], tuple[bool, Any]]:
    def key(item: Any) -> tuple[bool, Any]:
        value = _sort_value(item, path)
        if value is None:
            return (False, 0)
        return (True, value)

    return key


def _fallback_sort_key(path: str) -> Callable[[Any], tuple[bool, str, str]]:
    # Values that do not order against each other group by type, then text.
    def key(item: Any) -> tuple[bool, str, str]:
        value = _sort_value(item, path)
        if value is None:
            return (False, "", "")
        return (True, type(value).__name__, str(value))

    return key


def sort_items(items: Iterable[Any], keys: list[OrderKey]) -> list[Any]:
    """Stable multi-key sort; ``None`` (or unreachable) values order first.

    Enum members order by their ``value``, as a database column would.
    """
    out = list(items)
    for key in reversed(keys):
        try:
            out = sorted(out, key=_sort_key(key.path), reverse=key.descending)
        except TypeError:
            out = sorted(out, key=_fallback_sort_key(key.path), reverse=key.descending)
    return out


__all__ = ["evaluate", "sort_items"]
