import pytest

from es_bundle.dsl.bool import Bool
from es_bundle.dsl.filter import (
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
from es_bundle.dsl.query import MatchQuery


@pytest.mark.parametrize(
    "filter_, expected",
    [
        (TermFilter("color", "red"), {"term": {"color": "red"}}),
        (TermFilter("color", "red", {"_cache": False}), {"term": {"color": "red", "_cache": False}}),
        (TermsFilter("color", ("red", "blue")), {"terms": {"color": ["red", "blue"]}}),
        (RangeFilter("price", gt=1, lte=5), {"range": {"price": {"gt": 1, "lte": 5}}}),
        (ExistsFilter("sku"), {"exists": {"field": "sku"}}),
        (MissingFilter("sku"), {"bool": {"must_not": [{"exists": {"field": "sku"}}]}}),
        (IdsFilter(["1"]), {"ids": {"values": ["1"]}}),
        (PrefixFilter("sku", "AB"), {"prefix": {"sku": "AB"}}),
    ],
)
def test_leaf_filters(filter_, expected):
    assert filter_.to_clause() == expected


def test_range_filter_rejects_unknown_bound():
    with pytest.raises(ValueError):
        RangeFilter("price", from_=1)


def test_nested_filter():
    filter_ = NestedFilter("variants", TermFilter("variants.color", "red"))

    assert filter_.to_clause() == {
        "nested": {"path": "variants", "filter": {"term": {"variants.color": "red"}}}
    }


def test_query_filter():
    filter_ = QueryFilter(MatchQuery("title", "red shoes"))

    assert filter_.to_clause() == {"query": {"match": {"title": {"query": "red shoes"}}}}


def test_bool_filter():
    filter_ = BoolFilter()
    filter_.add_to_bool(TermFilter("color", "red"))
    filter_.add_to_bool(TermFilter("color", "blue"), Bool.SHOULD)

    assert filter_.to_clause() == {
        "bool": {
            "must": [{"term": {"color": "red"}}],
            "should": [{"term": {"color": "blue"}}],
        }
    }
