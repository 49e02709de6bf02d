"""FastAPI adapter – request dependencies and query error mapping."""
from mp_query.adapters.fastapi.deps import query_dict, search_options_dep, search_parameters_dep
from mp_query.adapters.fastapi.exception_mapper import QueryExceptionMapper

__all__ = [
    "QueryExceptionMapper",
    "query_dict",
    "search_options_dep",
    "search_parameters_dep",
]
