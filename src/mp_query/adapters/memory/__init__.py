"""In-memory adapter – evaluates the predicate AST over Python sequences."""
from mp_query.adapters.memory.evaluate import evaluate, sort_items
from mp_query.adapters.memory.queryable import InMemoryQueryable

__all__ = ["InMemoryQueryable", "evaluate", "sort_items"]
