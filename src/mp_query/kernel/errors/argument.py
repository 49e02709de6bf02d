"""Programmer errors – invalid construction arguments."""

from __future__ import annotations

from typing import Any

from mp_query.kernel.errors.base import BaseError


class InvalidArgumentError(BaseError, ValueError):
    """A value object was constructed with arguments outside its domain.

    Raised for programmer mistakes (negative skip, empty filter field list,
    custom mapping to a non-existent entity field), never for untrusted
    request content.
    """

    default_code = "invalid_argument"

    def __init__(
        self,
        message: str,
        *,
        argument: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, argument=argument, **kwargs)
        self.argument = argument


__all__ = ["InvalidArgumentError"]
