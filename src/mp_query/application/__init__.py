"""Application – the filter/sort/paging engine (backend-agnostic)."""

from mp_query.application.builder import SearchOptionsBuilder
from mp_query.application.filter import Filter
from mp_query.application.mapping import FieldMapper, MappingModel, ValueTransformer
from mp_query.application.operators import FilterOperator, SortOrder
from mp_query.application.paged import PagedList, PagedQuery
from mp_query.application.paging import STARTING_PAGE, Paging
from mp_query.application.predicates import (
    AllOf,
    AnyOf,
    Comparison,
    OrderKey,
    Predicate,
    Unsatisfiable,
    all_of,
    any_of,
)
from mp_query.application.queryable import Queryable
from mp_query.application.querystring import merge_list, split_list
from mp_query.application.resolver import (
    DefaultFieldNameResolver,
    FieldResolution,
    PassThroughFieldNameResolver,
)
from mp_query.application.restrictions import FieldRestrictions
from mp_query.application.search import SearchParameters, distinct_sortings
from mp_query.application.sorting import Sorting

__all__ = [
    "AllOf",
    "AnyOf",
    "Comparison",
    "DefaultFieldNameResolver",
    "FieldMapper",
    "FieldResolution",
    "FieldRestrictions",
    "Filter",
    "FilterOperator",
    "MappingModel",
    "OrderKey",
    "PagedList",
    "PagedQuery",
    "Paging",
    "PassThroughFieldNameResolver",
    "Predicate",
    "Queryable",
    "STARTING_PAGE",
    "SearchOptionsBuilder",
    "SearchParameters",
    "Sorting",
    "SortOrder",
    "Unsatisfiable",
    "ValueTransformer",
    "all_of",
    "any_of",
    "distinct_sortings",
    "merge_list",
    "split_list",
]
