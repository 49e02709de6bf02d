"""
mp_query – dynamic filtering, sorting and paging over queryable sources.

Import path convention::

    from mp_query.application import Filter, FilterOperator, SearchParameters
    from mp_query.application import FieldMapper, FieldRestrictions
    from mp_query.adapters.memory import InMemoryQueryable
    from mp_query.adapters.sqlalchemy import SqlAlchemyQueryable
    from mp_query.adapters.fastapi import search_parameters_dep
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
