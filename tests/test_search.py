import pytest

from es_bundle.dsl.aggregation import TermsAggregation
from es_bundle.dsl.bool import Bool
from es_bundle.dsl.filter import RangeFilter, TermFilter
from es_bundle.dsl.highlight import Highlight
from es_bundle.dsl.query import MatchQuery
from es_bundle.dsl.search import Search
from es_bundle.dsl.sort import Sort, Sorts


def test_empty_search():
    assert Search().to_dict() == {}


def test_query_only():
    search = Search().add_query(MatchQuery("title", "shoes"))

    assert search.to_dict() == {"query": {"match": {"title": {"query": "shoes"}}}}


def test_filters_render_bool_filter_context():
    search = (
        Search()
        .add_query(MatchQuery("title", "shoes"))
        .add_filter(TermFilter("color", "red"))
    )

    assert search.to_dict() == {
        "query": {
            "bool": {
                "must": [{"match": {"title": {"query": "shoes"}}}],
                "filter": [{"term": {"color": "red"}}],
            }
        }
    }


def test_filters_without_query():
    search = Search().add_filter(TermFilter("color", "red")).add_filter(RangeFilter("price", lt=5), Bool.MUST_NOT)

    assert search.to_dict() == {
        "query": {
            "bool": {
                "filter": [{"term": {"color": "red"}}],
                "must_not": [{"range": {"price": {"lt": 5}}}],
            }
        }
    }


def test_should_filters_are_grouped():
    search = (
        Search()
        .add_filter(TermFilter("color", "red"), Bool.SHOULD)
        .add_filter(TermFilter("color", "blue"), Bool.SHOULD)
    )

    assert search.to_dict() == {
        "query": {
            "bool": {
                "filter": [
                    {"bool": {"should": [{"term": {"color": "red"}}, {"term": {"color": "blue"}}]}}
                ]
            }
        }
    }


def test_legacy_filtered_query():
    search = (
        Search(filtered_query=True)
        .add_query(MatchQuery("title", "shoes"))
        .add_filter(TermFilter("color", "red"))
        .add_filter(RangeFilter("price", lt=5), Bool.MUST_NOT)
    )

    assert search.to_dict() == {
        "query": {
            "filtered": {
                "filter": {
                    "bool": {
                        "must": [{"term": {"color": "red"}}],
                        "must_not": [{"range": {"price": {"lt": 5}}}],
                    }
                },
                "query": {"match": {"title": {"query": "shoes"}}},
            }
        }
    }


def test_full_request_body():
    search = (
        Search()
        .add_query(MatchQuery("title", "shoes"))
        .add_post_filter(TermFilter("color", "red"))
        .add_aggregation(TermsAggregation("colors", "color"))
        .add_sort(Sort("price", "desc"))
        .add_sort(Sort("_score"))
        .set_highlight(Highlight().add_field("title", number_of_fragments=0).set_tags(["<b>"], ["</b>"]))
        .set_size(10)
        .set_from(20)
        .set_source(["title", "price"])
        .set_min_score(0.5)
        .set_explain(True)
        .set_timeout("2s")
    )

    assert search.to_dict() == {
        "query": {"match": {"title": {"query": "shoes"}}},
        "post_filter": {"term": {"color": "red"}},
        "aggregations": {"colors": {"terms": {"field": "color"}}},
        "sort": [{"price": {"order": "desc"}}, {"_score": {"order": "asc"}}],
        "highlight": {
            "fields": {"title": {"number_of_fragments": 0}},
            "pre_tags": ["<b>"],
            "post_tags": ["</b>"],
        },
        "size": 10,
        "from": 20,
        "_source": ["title", "price"],
        "min_score": 0.5,
        "explain": True,
        "timeout": "2s",
    }


def test_stored_fields():
    assert Search().set_fields(["title"]).to_dict() == {"stored_fields": ["title"]}


def test_uri_params_stay_out_of_body():
    search = (
        Search()
        .set_scroll("5m")
        .set_search_type("dfs_query_then_fetch")
        .set_preference("_local")
        .set_routing("user1")
    )

    assert search.to_dict() == {}
    assert search.get_scroll() == "5m"
    assert search.get_uri_params() == {
        "scroll": "5m",
        "search_type": "dfs_query_then_fetch",
        "preference": "_local",
        "routing": "user1",
    }


def test_get_aggregations_returns_copy():
    search = Search().add_aggregation(TermsAggregation("colors", "color"))

    search.get_aggregations().clear()

    assert list(search.get_aggregations()) == ["colors"]


def test_sort_validates_order():
    with pytest.raises(ValueError):
        Sort("price", "up")
    assert Sort("price", "DESC").order == "desc"


def test_sorts():
    sorts = Sorts()
    assert sorts.is_relevant() is False

    sorts.add_sort(Sort("price", parameters={"missing": "_last"}))

    assert sorts.to_dict() == [{"price": {"order": "asc", "missing": "_last"}}]
