"""FastAPI adapter – QueryExceptionMapper."""
from __future__ import annotations

from typing import Any, Callable

from mp_query.adapters.fastapi.deps import _require_fastapi
from mp_query.kernel.errors import BaseError, InvalidArgumentError, ParseError
from mp_query.observability.logging import get_logger

_log = get_logger(__name__)


class QueryExceptionMapper:
    """Register query-parameter error → HTTP 400 mappings on a FastAPI app.

    Error body schema::

        {"code": "parse_error", "message": "...", "detail": {"key": "op"}}

    Mappings
    --------
    ``ParseError``           → 400
    ``InvalidArgumentError`` → 400 (e.g. ``skip=-1`` on the wire)
    """

    def __init__(self, status_code: int = 400) -> None:
        _require_fastapi()
        self._map: list[tuple[type[BaseError], int]] = [
            (ParseError, status_code),
            (InvalidArgumentError, status_code),
        ]

    def register(self, app: Any) -> None:
        """Register the error handlers on a ``FastAPI`` or ``Starlette`` app."""
        from fastapi.responses import JSONResponse  # type: ignore[import-untyped]

        def make_handler(code: int) -> Callable[[Any, Any], Any]:
            def handler(request: Any, exc: BaseError) -> Any:
                _log.info("query.rejected", path=request.url.path, code=exc.code)
                return JSONResponse(status_code=code, content=exc.to_dict())

            return handler

        for exc_type, status in self._map:
            app.add_exception_handler(exc_type, make_handler(status))


__all__ = ["QueryExceptionMapper"]
