"""Unit tests for PagedList and PagedQuery."""

from __future__ import annotations

import asyncio

from mp_query.adapters.memory import InMemoryQueryable
from mp_query.application.paged import PagedList, PagedQuery
from mp_query.application.paging import Paging


class TestPagedList:
    def test_navigation(self) -> None:
        page = PagedList(items=[4, 5, 6], total_count=10, page=2, page_size=3)
        assert page.total_pages == 4
        assert page.has_next
        assert page.has_previous

    def test_last_page(self) -> None:
        page = PagedList(items=[10], total_count=10, page=4, page_size=3)
        assert not page.has_next

    def test_empty(self) -> None:
        page = PagedList(items=[], total_count=0, page=1, page_size=10)
        assert page.total_pages == 0
        assert not page.has_next
        assert not page.has_previous

    def test_zero_page_size(self) -> None:
        assert PagedList(items=[], total_count=5, page=1, page_size=0).total_pages == 0

    def test_map(self) -> None:
        page = PagedList(items=[1, 2], total_count=7, page=1, page_size=2).map(str)
        assert page.items == ["1", "2"]
        assert page.total_count == 7

    def test_sequence_protocol(self) -> None:
        page = PagedList(items=["a", "b"], total_count=2, page=1, page_size=2)
        assert list(page) == ["a", "b"]
        assert len(page) == 2

    def test_single_page(self) -> None:
        page = PagedList.single_page([1, 2, 3])
        assert (page.total_count, page.page, page.page_size) == (3, 1, 3)
        assert page.total_pages == 1


class TestPagedQuery:
    def test_to_paged_list(self) -> None:
        source = InMemoryQueryable(list(range(7)))
        paging = Paging.from_page_size(2, 3)
        result = PagedQuery(source, paging.apply(source), paging).to_paged_list()
        assert result.items == [3, 4, 5]
        assert result.total_count == 7
        assert result.page == 2
        assert result.total_pages == 3

    def test_without_paging(self) -> None:
        source = InMemoryQueryable(["x", "y"])
        result = PagedQuery(source, source).to_paged_list()
        assert result.items == ["x", "y"]
        assert result.total_count == 2

    def test_iterates_paged_query(self) -> None:
        source = InMemoryQueryable([1, 2, 3])
        assert list(PagedQuery(source, source.take(1))) == [1]

    def test_async_materialisation(self) -> None:
        class AsyncSource:
            def __init__(self, items: list[int]) -> None:
                self.items = items

            async def all_async(self, session: object) -> list[int]:
                return self.items[:2]

            async def count_async(self, session: object) -> int:
                return len(self.items)

        source = AsyncSource([1, 2, 3, 4, 5])
        query = PagedQuery(source, source, Paging.from_page_size(1, 2))  # type: ignore[arg-type]
        result = asyncio.run(query.to_paged_list_async(session=None))
        assert result.items == [1, 2]
        assert result.total_count == 5
        assert result.total_pages == 3
