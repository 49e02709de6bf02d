"""Application paging – skip/take value object with 1-based page arithmetic."""
from __future__ import annotations

import dataclasses
from typing import Mapping, TypeVar

from mp_query.application.queryable import Queryable
from mp_query.kernel.errors import InvalidArgumentError, ParseError

Q = TypeVar("Q", bound=Queryable)

STARTING_PAGE = 1


def _parse_int(data: Mapping[str, str], key: str) -> int:
    try:
        return int(str(data[key]).strip())
    except ValueError:
        raise ParseError(f"{key!r} must be an integer, got {data[key]!r}", key=key) from None


@dataclasses.dataclass(frozen=True, slots=True)
class Paging:
    """Skip/take window over a query.

    Pages are numbered from :data:`STARTING_PAGE` (1): page 3 of size 10
    skips 20 items.
    """

    skip: int = 0
    take: int = 0

    def __post_init__(self) -> None:
        if self.skip < 0:
            raise InvalidArgumentError("skip must be >= 0", argument="skip")
        if self.take < 0:
            raise InvalidArgumentError("take must be >= 0", argument="take")

    @classmethod
    def from_page_size(cls, page: int, page_size: int) -> "Paging":
        if page < STARTING_PAGE:
            raise InvalidArgumentError(f"page must be >= {STARTING_PAGE}", argument="page")
        if page_size < 1:
            raise InvalidArgumentError("page_size must be >= 1", argument="page_size")
        return cls(skip=(page - STARTING_PAGE) * page_size, take=page_size)

    @classmethod
    def from_skip_take(cls, skip: int, take: int) -> "Paging":
        return cls(skip=skip, take=take)

    @property
    def page(self) -> int:
        if self.take == 0:
            return STARTING_PAGE
        return self.skip // self.take + STARTING_PAGE

    @property
    def page_size(self) -> int:
        return self.take

    def __add__(self, pages: int) -> "Paging":
        if not isinstance(pages, int):
            return NotImplemented
        return Paging(skip=self.skip + self.take * pages, take=self.take)

    def __sub__(self, pages: int) -> "Paging":
        if not isinstance(pages, int):
            return NotImplemented
        return Paging(skip=self.skip - self.take * pages, take=self.take)

    def apply(self, query: Q) -> Q:
        return query.skip(self.skip).take(self.take)

    def to_dict(self) -> dict[str, str]:
        return {"skip": str(self.skip), "take": str(self.take)}

    @classmethod
    def from_dict(cls, data: Mapping[str, str]) -> "Paging | None":
        """Parse ``{"skip", "take"}``; ``None`` when either key is absent."""
        if "skip" not in data or "take" not in data:
            return None
        return cls.from_skip_take(_parse_int(data, "skip"), _parse_int(data, "take"))

    def __str__(self) -> str:
        return f"Page {self.page} - Page size: {self.page_size}"


__all__ = ["STARTING_PAGE", "Paging"]
