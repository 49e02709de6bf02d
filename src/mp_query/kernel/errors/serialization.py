"""Serialization errors – malformed wire dictionaries."""

from __future__ import annotations

from typing import Any

from mp_query.kernel.errors.base import BaseError


class ParseError(BaseError, ValueError):
    """A serialized search dictionary does not honour its shape contract.

    ``key`` names the offending (or missing) dictionary key.
    """

    default_code = "parse_error"

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, key=key, **kwargs)
        self.key = key


__all__ = ["ParseError"]
