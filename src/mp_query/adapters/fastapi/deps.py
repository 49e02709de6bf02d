"""FastAPI adapter – request → SearchParameters dependencies.

Usage::

    product_search = search_parameters_dep(mapper=product_mapper)

    @app.get("/products")
    def list_products(params: SearchParameters = Depends(product_search)):
        return params.to_paged_query(SqlAlchemyQueryable(Product, session)).to_paged_list()
"""

from typing import TYPE_CHECKING, Any, Callable

from mp_query.application.builder import SearchOptionsBuilder
from mp_query.application.search import SearchParameters
from mp_query.config import QuerySettings

if TYPE_CHECKING:
    from mp_query.application.mapping import FieldMapper


def _require_fastapi() -> None:
    try:
        import fastapi  # noqa: F401
    except ImportError as exc:
        raise ImportError("Install 'mp-query[fastapi]' to use the FastAPI adapter") from exc


def query_dict(request: Any) -> dict[str, str]:
    """Flatten the request query string (last value wins for repeated keys)."""
    return {key: value for key, value in request.query_params.items()}


def search_parameters_dep(mapper: "FieldMapper | None" = None) -> Callable[..., Any]:
    """Return a dependency parsing the request query string into :class:`SearchParameters`.

    Parsed filters and sortings carry *mapper*.  Malformed input raises
    :class:`~mp_query.kernel.errors.ParseError` (400 with
    :class:`~mp_query.adapters.fastapi.QueryExceptionMapper`).
    """
    _require_fastapi()
    from fastapi import Request  # type: ignore[import-untyped]

    async def search_parameters(request: Request) -> SearchParameters:
        return SearchParameters.from_dict(query_dict(request), mapper)

    return search_parameters


def search_options_dep(settings: QuerySettings | None = None) -> Callable[..., Any]:
    """Return a dependency yielding a :class:`SearchOptionsBuilder` over the request query string."""
    _require_fastapi()
    from fastapi import Request  # type: ignore[import-untyped]

    async def search_options(request: Request) -> SearchOptionsBuilder:
        return SearchOptionsBuilder(query_dict(request), settings)

    return search_options


__all__ = ["query_dict", "search_options_dep", "search_parameters_dep"]
