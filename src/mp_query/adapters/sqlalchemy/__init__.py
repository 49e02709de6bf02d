"""SQLAlchemy adapter – lowers the predicate AST onto 2.x ``Select`` statements."""
from mp_query.adapters.sqlalchemy.lowering import (
    escape_like,
    like_pattern_match,
    lower_comparison,
    lower_predicate,
    order_column,
)
from mp_query.adapters.sqlalchemy.queryable import SqlAlchemyQueryable

__all__ = [
    "SqlAlchemyQueryable",
    "escape_like",
    "like_pattern_match",
    "lower_comparison",
    "lower_predicate",
    "order_column",
]
