"""
Search request builder.

Assembles queries, filters, aggregations, sorting and paging into the
request body, and keeps URI parameters (``scroll``, ``search_type`` ...)
apart since they are not part of the body.
"""

from typing import Any, Dict, List, Optional, Union

from es_bundle.dsl.aggregation.aggregations import AbstractAggregation
from es_bundle.dsl.bool import Bool
from es_bundle.dsl.builder import BuilderInterface
from es_bundle.dsl.filter.filters import BoolFilter
from es_bundle.dsl.highlight import Highlight
from es_bundle.dsl.query.filtered_query import FilteredQuery
from es_bundle.dsl.query.query import Query
from es_bundle.dsl.sort import Sort, Sorts


class Search:
    """
    Fluent builder for a search request.

    Filters render in the filter context of a ``bool`` query. Pass
    ``filtered_query=True`` to get the legacy ``{"filtered": ...}`` form
    instead, for engines older than 5.0.

    Example:
        search = (
            Search()
            .add_query(MatchQuery("title", "red shoes"))
            .add_filter(TermFilter("color", "red"))
            .add_sort(Sort("price", "desc"))
            .set_size(20)
        )
        client.search(index="products", body=search.to_dict(), **search.get_uri_params())
    """

    def __init__(self, filtered_query: bool = False):
        self._filtered_query = filtered_query
        self._query = Query()
        self._filtered = FilteredQuery()
        self._post_filter: Optional[BoolFilter] = None
        self._aggregations: Dict[str, AbstractAggregation] = {}
        self._sorts = Sorts()
        self._highlight: Optional[Highlight] = None
        self._size: Optional[int] = None
        self._from: Optional[int] = None
        self._source: Optional[Union[bool, List[str]]] = None
        self._fields: Optional[List[str]] = None
        self._min_score: Optional[float] = None
        self._explain: Optional[bool] = None
        self._timeout: Optional[str] = None
        self._uri_params: Dict[str, Any] = {}

    def add_query(self, query: BuilderInterface, bool_type: str = Bool.MUST, parameters: Optional[Dict[str, Any]] = None) -> "Search":
        self._query.add_query(query, bool_type, parameters)
        return self

    def add_filter(self, filter_: BuilderInterface, bool_type: str = Bool.MUST) -> "Search":
        self._filtered.add_filter(filter_, bool_type)
        return self

    def add_post_filter(self, filter_: BuilderInterface, bool_type: str = Bool.MUST) -> "Search":
        """Filter applied to hits after aggregations are computed."""
        if self._post_filter is None:
            self._post_filter = BoolFilter()
        self._post_filter.add(filter_, bool_type)
        return self

    def add_aggregation(self, aggregation: AbstractAggregation) -> "Search":
        self._aggregations[aggregation.get_name()] = aggregation
        return self

    def add_sort(self, sort: Sort) -> "Search":
        self._sorts.add_sort(sort)
        return self

    def set_highlight(self, highlight: Highlight) -> "Search":
        self._highlight = highlight
        return self

    def set_size(self, size: Optional[int]) -> "Search":
        self._size = size
        return self

    def set_from(self, from_: Optional[int]) -> "Search":
        self._from = from_
        return self

    def set_source(self, source: Union[bool, List[str]]) -> "Search":
        self._source = source
        return self

    def set_fields(self, fields: List[str]) -> "Search":
        self._fields = list(fields)
        return self

    def set_min_score(self, min_score: float) -> "Search":
        self._min_score = min_score
        return self

    def set_explain(self, explain: bool) -> "Search":
        self._explain = explain
        return self

    def set_timeout(self, timeout: str) -> "Search":
        self._timeout = timeout
        return self

    def set_scroll(self, duration: str = "1m") -> "Search":
        self._uri_params["scroll"] = duration
        return self

    def get_scroll(self) -> Optional[str]:
        return self._uri_params.get("scroll")

    def set_search_type(self, search_type: str) -> "Search":
        self._uri_params["search_type"] = search_type
        return self

    def set_preference(self, preference: str) -> "Search":
        self._uri_params["preference"] = preference
        return self

    def set_routing(self, routing: str) -> "Search":
        self._uri_params["routing"] = routing
        return self

    def get_uri_params(self) -> Dict[str, Any]:
        return dict(self._uri_params)

    def get_query(self) -> Query:
        return self._query

    def get_aggregations(self) -> Dict[str, AbstractAggregation]:
        return dict(self._aggregations)

    def _query_to_dict(self) -> Optional[Dict[str, Any]]:
        if self._filtered.has_filters():
            if self._filtered_query:
                return self._filtered_query_to_dict()
            return self._bool_query_to_dict()
        if self._query.has_queries():
            return self._query.to_dict()
        return None

    def _filtered_query_to_dict(self) -> Dict[str, Any]:
        filtered = FilteredQuery(self._query if self._query.has_queries() else None)
        for bool_type in Bool.BOOL_TYPES:
            for filter_ in self._filtered.get_filters(bool_type):
                filtered.add_filter(filter_, bool_type)
        return filtered.to_clause()

    def _bool_query_to_dict(self) -> Dict[str, Any]:
        bool_query = Bool()
        if self._query.has_queries():
            bool_query.add(self._query, Bool.MUST)

        for bool_type in (Bool.MUST, Bool.FILTER):
            for filter_ in self._filtered.get_filters(bool_type):
                bool_query.add(filter_, Bool.FILTER)
        for filter_ in self._filtered.get_filters(Bool.MUST_NOT):
            bool_query.add(filter_, Bool.MUST_NOT)

        should = self._filtered.get_filters(Bool.SHOULD)
        if should:
            # at least one should filter has to match
            group = BoolFilter()
            for filter_ in should:
                group.add(filter_, Bool.SHOULD)
            bool_query.add(group, Bool.FILTER)

        return bool_query.to_clause()

    def to_dict(self) -> Dict[str, Any]:
        """Render the request body."""
        output: Dict[str, Any] = {}

        query = self._query_to_dict()
        if query is not None:
            output["query"] = query

        if self._post_filter is not None:
            output["post_filter"] = self._post_filter.collapse()

        if self._aggregations:
            output["aggregations"] = {
                name: aggregation.to_dict() for name, aggregation in self._aggregations.items()
            }

        if self._sorts.is_relevant():
            output["sort"] = self._sorts.to_dict()

        if self._highlight is not None:
            output["highlight"] = self._highlight.to_dict()

        optional = {
            "size": self._size,
            "from": self._from,
            "_source": self._source,
            "stored_fields": self._fields,
            "min_score": self._min_score,
            "explain": self._explain,
            "timeout": self._timeout,
        }
        output.update({key: value for key, value in optional.items() if value is not None})

        return output
