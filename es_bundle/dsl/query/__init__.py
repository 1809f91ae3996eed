"""Queries for the query DSL."""

from es_bundle.dsl.query.compound import ConstantScoreQuery, NestedQuery
from es_bundle.dsl.query.filtered_query import FilteredQuery
from es_bundle.dsl.query.full_text import MatchQuery, MultiMatchQuery, QueryStringQuery
from es_bundle.dsl.query.query import Query
from es_bundle.dsl.query.term_level import (
    FuzzyQuery,
    IdsQuery,
    MatchAllQuery,
    PrefixQuery,
    RangeQuery,
    TermQuery,
    TermsQuery,
    WildcardQuery,
)

__all__ = [
    "ConstantScoreQuery",
    "FilteredQuery",
    "FuzzyQuery",
    "IdsQuery",
    "MatchAllQuery",
    "MatchQuery",
    "MultiMatchQuery",
    "NestedQuery",
    "PrefixQuery",
    "Query",
    "QueryStringQuery",
    "RangeQuery",
    "TermQuery",
    "TermsQuery",
    "WildcardQuery",
]
