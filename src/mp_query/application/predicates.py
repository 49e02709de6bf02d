"""Predicate AST – backend-neutral description of compiled filters and orderings.

Filters compile into a small tagged-variant tree; each backend ships its own
interpreter (:mod:`mp_query.adapters.memory` evaluates it over Python objects,
:mod:`mp_query.adapters.sqlalchemy` lowers it into SQL expressions).

Example::

    price = Comparison("price", FilterOperator.GREATER_THAN, "10")
    name = Comparison("name", FilterOperator.CONTAINS, "lap")
    tree = price & (name | Comparison("description", FilterOperator.CONTAINS, "lap"))
"""

from __future__ import annotations

import dataclasses
from typing import Any, Iterable

from mp_query.application.operators import FilterOperator


class Predicate:
    """Base of the predicate tree – provides the ``&`` / ``|`` combinators."""

    __slots__ = ()

    def and_(self, other: "Predicate") -> "Predicate":
        return all_of((self, other))

    def or_(self, other: "Predicate") -> "Predicate":
        return any_of((self, other))

    def __and__(self, other: "Predicate") -> "Predicate":
        return all_of((self, other))

    def __or__(self, other: "Predicate") -> "Predicate":
        return any_of((self, other))


@dataclasses.dataclass(frozen=True, slots=True)
class Comparison(Predicate):
    """Leaf test of one resolved field path.

    ``value`` is the raw wire string unless ``typed`` is set, in which case a
    mapper transformer already converted it and backends compare it as-is.
    """

    path: str
    operator: FilterOperator
    value: Any = None
    case_sensitive: bool = False
    typed: bool = False


@dataclasses.dataclass(frozen=True, slots=True)
class AnyOf(Predicate):
    """Disjunction: satisfied when any term is."""

    terms: tuple[Predicate, ...]


@dataclasses.dataclass(frozen=True, slots=True)
class AllOf(Predicate):
    """Conjunction: satisfied when every term is."""

    terms: tuple[Predicate, ...]


@dataclasses.dataclass(frozen=True, slots=True)
class Unsatisfiable(Predicate):
    """Never satisfied (e.g. a value transformer rejected the input)."""


@dataclasses.dataclass(frozen=True, slots=True)
class OrderKey:
    """One resolved ordering key."""

    path: str
    descending: bool = False


def _flatten(kind: type[AnyOf] | type[AllOf], terms: Iterable[Predicate]) -> tuple[Predicate, ...]:
    out: list[Predicate] = []
    for term in terms:
        if isinstance(term, kind):
            out.extend(term.terms)
        else:
            out.append(term)
    return tuple(out)


def any_of(terms: Iterable[Predicate]) -> Predicate:
    """OR-combine *terms*; a single term is returned unchanged."""
    flat = _flatten(AnyOf, terms)
    if not flat:
        return Unsatisfiable()
    return flat[0] if len(flat) == 1 else AnyOf(flat)


def all_of(terms: Iterable[Predicate]) -> Predicate:
    """AND-combine *terms*; a single term is returned unchanged."""
    flat = _flatten(AllOf, terms)
    if not flat:
        raise ValueError("all_of() needs at least one term")
    return flat[0] if len(flat) == 1 else AllOf(flat)


__all__ = [
    "AllOf",
    "AnyOf",
    "Comparison",
    "OrderKey",
    "Predicate",
    "Unsatisfiable",
    "all_of",
    "any_of",
]
