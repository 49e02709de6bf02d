"""Application queryable – the sequence abstraction the engine composes over."""
from __future__ import annotations

from typing import Any, Iterator, Protocol, Self, TypeVar, runtime_checkable

from mp_query.application.predicates import OrderKey, Predicate

T = TypeVar("T", covariant=True)


@runtime_checkable
class Queryable(Protocol[T]):
    """Filterable, orderable, pageable sequence of ``element_type`` items.

    Implementations are immutable: every composing operation returns a new
    queryable and leaves the receiver untouched. Nothing executes until
    :meth:`count` or iteration.
    """

    @property
    def element_type(self) -> Any: ...

    def where(self, predicate: Predicate) -> Self: ...

    def order_by(self, key: OrderKey) -> Self: ...

    def then_by(self, key: OrderKey) -> Self: ...

    def skip(self, count: int) -> Self: ...

    def take(self, count: int) -> Self: ...

    def count(self) -> int: ...

    def __iter__(self) -> Iterator[T]: ...


__all__ = ["Queryable"]
