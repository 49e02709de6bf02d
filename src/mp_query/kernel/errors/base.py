"""Root error class for the mp-query error hierarchy."""

from __future__ import annotations

from typing import Any


class BaseError(Exception):
    """Root of every error mp-query raises on purpose.

    Untrusted request content never produces one of these (unknown fields are
    dropped instead); they signal malformed wire dictionaries, programmer
    mistakes and bad settings.  Keyword context becomes ``detail`` and names
    the offending input, e.g. ``ParseError(..., key="op")`` or
    ``InvalidArgumentError(..., argument="skip")``.  ``to_dict()`` is the body
    the FastAPI exception mapper sends back.

    Args:
        message: Human-readable description.
        code: Machine-readable slug (defaults to ``default_code``).
        cause: Lower-level exception being translated; stored as ``__cause__``.
        **detail: Context about the rejected input.  ``None`` values are dropped.
    """

    default_code: str = "query_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        cause: BaseException | None = None,
        **detail: Any,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = {k: v for k, v in detail.items() if v is not None}
        if cause is not None:
            self.__cause__ = cause

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__

    def __str__(self) -> str:
        if not self.detail:
            return self.message
        context = ", ".join(f"{k}={v!r}" for k, v in self.detail.items())
        return f"{self.message} ({context})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialise for logs and HTTP bodies; the cause is reported by type only."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": dict(self.detail),
        }
        if self.__cause__ is not None:
            payload["cause"] = type(self.__cause__).__name__
        return payload


__all__ = ["BaseError"]
