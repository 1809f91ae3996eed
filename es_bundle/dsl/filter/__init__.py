"""Filters for the query DSL."""

from es_bundle.dsl.filter.abstract_filter import AbstractFilter
from es_bundle.dsl.filter.filters import (
    BoolFilter,
    ExistsFilter,
    IdsFilter,
    MissingFilter,
    NestedFilter,
    PrefixFilter,
    QueryFilter,
    RangeFilter,
    TermFilter,
    TermsFilter,
)

__all__ = [
    "AbstractFilter",
    "BoolFilter",
    "ExistsFilter",
    "IdsFilter",
    "MissingFilter",
    "NestedFilter",
    "PrefixFilter",
    "QueryFilter",
    "RangeFilter",
    "TermFilter",
    "TermsFilter",
]
