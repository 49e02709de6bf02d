"""Application restrictions – allow/block policy for filterable and sortable fields."""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from mp_query.application.filter import Filter


class _Policy:
    __slots__ = ("allowed", "blocked")

    def __init__(self) -> None:
        self.allowed: set[str] = set()
        self.blocked: set[str] = set()

    def permits(self, names: Iterable[str]) -> bool:
        folded = {n.casefold() for n in names if n}
        if not folded:
            return False
        if folded & self.blocked:
            return False
        return not self.allowed or bool(folded & self.allowed)


class FieldRestrictions:
    """Allow/block sets for filtering and sorting, configured fluently.

    A field is permitted when none of its names is blocked and, if an
    allow-set is configured, at least one of them is in it.  Block always
    wins and names compare case-insensitively.

    Filters and sortings check the raw wire name on its own first, before
    any resolution, and only then the raw name together with the resolved
    entity path.  An allow-set must therefore list the names clients send:
    allowing only an entity path that a mapper renames drops the field.
    Blocking either name is enough to reject it.

    Example::

        restrictions = (
            FieldRestrictions()
            .allow_filtering("name", "category")
            .block_sorting("secret")
        )
    """

    def __init__(self) -> None:
        self._filtering = _Policy()
        self._sorting = _Policy()

    def allow_filtering(self, *fields: str) -> "FieldRestrictions":
        self._filtering.allowed.update(f.casefold() for f in fields)
        return self

    def block_filtering(self, *fields: str) -> "FieldRestrictions":
        self._filtering.blocked.update(f.casefold() for f in fields)
        return self

    def allow_sorting(self, *fields: str) -> "FieldRestrictions":
        self._sorting.allowed.update(f.casefold() for f in fields)
        return self

    def block_sorting(self, *fields: str) -> "FieldRestrictions":
        self._sorting.blocked.update(f.casefold() for f in fields)
        return self

    def is_filter_field_allowed(self, field: str, *aliases: str) -> bool:
        """Check *field* together with its other names (e.g. the resolved path)."""
        return self._filtering.permits((field, *aliases))

    def is_sort_field_allowed(self, field: str, *aliases: str) -> bool:
        return self._sorting.permits((field, *aliases))

    def allowed_filter_fields(self, filter: "Filter") -> list[str]:
        """Raw field names of *filter* that survive the filtering policy."""
        return [f for f in filter.fields if self.is_filter_field_allowed(f)]

    def __repr__(self) -> str:
        return (
            "FieldRestrictions("
            f"filter_allow={sorted(self._filtering.allowed)}, filter_block={sorted(self._filtering.blocked)}, "
            f"sort_allow={sorted(self._sorting.allowed)}, sort_block={sorted(self._sorting.blocked)})"
        )


__all__ = ["FieldRestrictions"]
