"""Aggregations for the query DSL."""

from es_bundle.dsl.aggregation.aggregations import (
    AbstractAggregation,
    AvgAggregation,
    CardinalityAggregation,
    DateHistogramAggregation,
    FilterAggregation,
    GlobalAggregation,
    MaxAggregation,
    MinAggregation,
    NestedAggregation,
    RangeAggregation,
    StatsAggregation,
    SumAggregation,
    TermsAggregation,
    TopHitsAggregation,
    ValueCountAggregation,
)

__all__ = [
    "AbstractAggregation",
    "AvgAggregation",
    "CardinalityAggregation",
    "DateHistogramAggregation",
    "FilterAggregation",
    "GlobalAggregation",
    "MaxAggregation",
    "MinAggregation",
    "NestedAggregation",
    "RangeAggregation",
    "StatsAggregation",
    "SumAggregation",
    "TermsAggregation",
    "TopHitsAggregation",
    "ValueCountAggregation",
]
