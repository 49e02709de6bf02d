"""Filter operators and sort orders with their wire codes."""
from __future__ import annotations

from enum import Enum

from mp_query.kernel.errors import ParseError


def _normalise(value: str) -> str:
    return value.strip().replace("_", "").replace("-", "").lower()


class FilterOperator(str, Enum):
    """Comparison kind of a filter; the value is the wire code."""

    EQUALS = "eq"
    NOT_EQUALS = "neq"
    GREATER_THAN = "gt"
    LESS_THAN = "lt"
    GREATER_THAN_OR_EQUALS = "gte"
    LESS_THAN_OR_EQUALS = "lte"
    CONTAINS = "contains"
    NOT_CONTAINS = "ncontains"
    IS_NULL = "null"
    IS_NOT_NULL = "notnull"

    @property
    def code(self) -> str:
        return self.value

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @property
    def is_ordering(self) -> bool:
        """``gt``/``lt``/``gte``/``lte``."""
        return self in _ORDERING

    @property
    def needs_value(self) -> bool:
        return self not in (FilterOperator.IS_NULL, FilterOperator.IS_NOT_NULL)

    @classmethod
    def parse(cls, value: str) -> "FilterOperator":
        """Parse a wire code (``gte``) or member name (``GreaterThanOrEquals``)."""
        try:
            return _FILTER_LOOKUP[_normalise(value)]
        except (KeyError, AttributeError):
            raise ParseError(f"Unknown filter operator {value!r}", key="op") from None

    def __str__(self) -> str:
        return self.value


_SYMBOLS = {
    FilterOperator.EQUALS: "==",
    FilterOperator.NOT_EQUALS: "!=",
    FilterOperator.GREATER_THAN: ">",
    FilterOperator.LESS_THAN: "<",
    FilterOperator.GREATER_THAN_OR_EQUALS: ">=",
    FilterOperator.LESS_THAN_OR_EQUALS: "<=",
    FilterOperator.CONTAINS: "contains",
    FilterOperator.NOT_CONTAINS: "not contains",
    FilterOperator.IS_NULL: "is null",
    FilterOperator.IS_NOT_NULL: "is not null",
}

_ORDERING = frozenset(
    {
        FilterOperator.GREATER_THAN,
        FilterOperator.LESS_THAN,
        FilterOperator.GREATER_THAN_OR_EQUALS,
        FilterOperator.LESS_THAN_OR_EQUALS,
    }
)

_FILTER_LOOKUP: dict[str, FilterOperator] = {
    **{op.value: op for op in FilterOperator},
    **{_normalise(op.name): op for op in FilterOperator},
}


class SortOrder(str, Enum):
    """Direction of one ordering key; the value is the wire code."""

    ASCENDING = "asc"
    DESCENDING = "desc"

    @property
    def code(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "SortOrder":
        """Parse ``asc``/``desc`` or ``Ascending``/``Descending``."""
        try:
            return _SORT_LOOKUP[_normalise(value)]
        except (KeyError, AttributeError):
            raise ParseError(f"Unknown sort order {value!r}", key="ord") from None

    def __str__(self) -> str:
        return self.value


_SORT_LOOKUP: dict[str, SortOrder] = {
    "asc": SortOrder.ASCENDING,
    "ascending": SortOrder.ASCENDING,
    "desc": SortOrder.DESCENDING,
    "descending": SortOrder.DESCENDING,
}


__all__ = ["FilterOperator", "SortOrder"]
