"""In-memory adapter – InMemoryQueryable over a Python sequence."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, Iterable, Iterator, TypeVar

from mp_query.adapters.memory.evaluate import evaluate, sort_items
from mp_query.application.predicates import OrderKey, Predicate
from mp_query.kernel.fields import describe_mappings

T = TypeVar("T")

_Op = tuple[str, Any]


class InMemoryQueryable(Generic[T]):
    """Lazy, immutable queryable over a list of objects or mappings.

    Operations are recorded and replayed on iteration, so the source list is
    never mutated and every derived queryable stays independent.

    ``element_type`` defaults to the class of the first item; for mapping
    records it is a field description built from their keys.
    """

    def __init__(
        self,
        items: Iterable[T],
        element_type: Any = None,
        _ops: tuple[_Op, ...] = (),
    ) -> None:
        self._items: list[T] = items if isinstance(items, list) else list(items)
        self._element_type = element_type if element_type is not None else self._infer_type(self._items)
        self._ops = _ops

    @staticmethod
    def _infer_type(items: list[Any]) -> Any:
        if not items:
            return None
        if all(isinstance(item, Mapping) for item in items):
            return describe_mappings(items)
        return type(items[0])

    @property
    def element_type(self) -> Any:
        return self._element_type

    def _derive(self, op: _Op) -> "InMemoryQueryable[T]":
        return InMemoryQueryable(self._items, self._element_type, (*self._ops, op))

    def where(self, predicate: Predicate) -> "InMemoryQueryable[T]":
        return self._derive(("where", predicate))

    def order_by(self, key: OrderKey) -> "InMemoryQueryable[T]":
        return self._derive(("order", (key,)))

    def then_by(self, key: OrderKey) -> "InMemoryQueryable[T]":
        if self._ops and self._ops[-1][0] == "order":
            keys = (*self._ops[-1][1], key)
            return InMemoryQueryable(self._items, self._element_type, (*self._ops[:-1], ("order", keys)))
        return self.order_by(key)

    def skip(self, count: int) -> "InMemoryQueryable[T]":
        return self._derive(("skip", max(count, 0)))

    def take(self, count: int) -> "InMemoryQueryable[T]":
        return self._derive(("take", max(count, 0)))

    def _run(self) -> list[T]:
        out = self._items
        for kind, arg in self._ops:
            match kind:
                case "where":
                    out = [item for item in out if evaluate(arg, item)]
                case "order":
                    out = sort_items(out, list(arg))
                case "skip":
                    out = out[arg:]
                case "take":
                    out = out[:arg]
        return list(out)

    def count(self) -> int:
        return len(self._run())

    def to_list(self) -> list[T]:
        return self._run()

    def __iter__(self) -> Iterator[T]:
        return iter(self._run())

    def __repr__(self) -> str:
        return f"InMemoryQueryable(items={len(self._items)}, ops={[kind for kind, _ in self._ops]})"


__all__ = ["InMemoryQueryable"]
