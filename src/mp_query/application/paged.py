"""Application paged results – PagedList and the PagedQuery count/page pair."""
from __future__ import annotations

import dataclasses
import math
from typing import Any, Callable, Generic, Iterator, TypeVar

from mp_query.application.paging import STARTING_PAGE, Paging
from mp_query.application.queryable import Queryable

T = TypeVar("T")


@dataclasses.dataclass
class PagedList(Generic[T]):
    """One materialised page of results with computed navigation properties."""

    items: list[T]
    total_count: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0 or self.total_count <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > STARTING_PAGE

    def map(self, fn: Callable[[T], Any]) -> "PagedList[Any]":
        """Return a new :class:`PagedList` with each item transformed by *fn*."""
        return PagedList(
            items=[fn(item) for item in self.items],
            total_count=self.total_count,
            page=self.page,
            page_size=self.page_size,
        )

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @classmethod
    def single_page(cls, items: list[T]) -> "PagedList[T]":
        return cls(items=items, total_count=len(items), page=STARTING_PAGE, page_size=len(items))


@dataclasses.dataclass(frozen=True)
class PagedQuery(Generic[T]):
    """The ``(count_query, paged_query)`` pair produced by a search, plus its paging.

    Nothing is executed until :meth:`to_paged_list` (or iteration).
    """

    count_query: Queryable[T]
    paged_query: Queryable[T]
    paging: Paging | None = None

    def __iter__(self) -> Iterator[T]:
        return iter(self.paged_query)

    def to_paged_list(self) -> PagedList[T]:
        items = list(self.paged_query)
        if self.paging is None:
            return PagedList.single_page(items)
        return PagedList(
            items=items,
            total_count=self.count_query.count(),
            page=self.paging.page,
            page_size=self.paging.page_size,
        )

    async def to_paged_list_async(self, session: Any) -> PagedList[T]:
        """Materialise through an async session (queries must offer ``all_async``/``count_async``)."""
        items = await self.paged_query.all_async(session)  # type: ignore[attr-defined]
        if self.paging is None:
            return PagedList.single_page(items)
        total = await self.count_query.count_async(session)  # type: ignore[attr-defined]
        return PagedList(items=items, total_count=total, page=self.paging.page, page_size=self.paging.page_size)


__all__ = ["PagedList", "PagedQuery"]
