import pytest

from es_bundle.dsl.aggregation import (
    AvgAggregation,
    CardinalityAggregation,
    DateHistogramAggregation,
    FilterAggregation,
    GlobalAggregation,
    NestedAggregation,
    RangeAggregation,
    TermsAggregation,
    TopHitsAggregation,
)
from es_bundle.dsl.filter import TermFilter
from es_bundle.dsl.sort import Sort


def test_terms_with_sub_aggregation():
    aggregation = TermsAggregation("colors", "color", {"size": 5})
    aggregation.add_aggregation(AvgAggregation("avg_price", "price"))

    assert aggregation.get_name() == "colors"
    assert aggregation.to_dict() == {
        "terms": {"field": "color", "size": 5},
        "aggregations": {"avg_price": {"avg": {"field": "price"}}},
    }


def test_metric_aggregation_rejects_children():
    with pytest.raises(ValueError):
        CardinalityAggregation("unique", "sku").add_aggregation(AvgAggregation("x", "price"))


def test_range_aggregation():
    aggregation = RangeAggregation("prices", "price", keyed=True)
    aggregation.add_range(to=10, key="cheap").add_range(from_=10)

    assert aggregation.to_dict() == {
        "range": {
            "field": "price",
            "ranges": [{"to": 10, "key": "cheap"}, {"from": 10}],
            "keyed": True,
        }
    }


def test_date_histogram_aggregation():
    monthly = DateHistogramAggregation("per_month", "created_at", "month")
    fixed = DateHistogramAggregation("per_90m", "created_at", "90m", {"min_doc_count": 1})

    assert monthly.to_dict() == {
        "date_histogram": {"field": "created_at", "calendar_interval": "month"}
    }
    assert fixed.to_dict() == {
        "date_histogram": {"field": "created_at", "fixed_interval": "90m", "min_doc_count": 1}
    }


def test_filter_aggregation():
    aggregation = FilterAggregation("red", TermFilter("color", "red"))
    aggregation.add_aggregation(AvgAggregation("avg_price", "price"))

    assert aggregation.to_dict() == {
        "filter": {"term": {"color": "red"}},
        "aggregations": {"avg_price": {"avg": {"field": "price"}}},
    }


def test_nested_and_global_aggregations():
    nested = NestedAggregation("variants", "variants")
    nested.add_aggregation(TermsAggregation("sizes", "variants.size"))
    global_ = GlobalAggregation("all")

    assert nested.to_dict() == {
        "nested": {"path": "variants"},
        "aggregations": {"sizes": {"terms": {"field": "variants.size"}}},
    }
    assert global_.to_dict() == {"global": {}}


def test_top_hits_aggregation():
    aggregation = TopHitsAggregation("top", size=3, sort=Sort("price", "desc"))

    assert aggregation.to_dict() == {"top_hits": {"size": 3, "sort": [{"price": {"order": "desc"}}]}}
