"""
Filtered query.
"""

from typing import Any, Dict, Optional

from es_bundle.dsl.builder import BuilderInterface
from es_bundle.dsl.filter.abstract_filter import AbstractFilter
from es_bundle.dsl.query.query import Query


class FilteredQuery(AbstractFilter):
    """
    Query restricted by a set of filters.

    Filters are added through :meth:`add_filter`; the scored part is the
    query passed in or built up via :meth:`get_query`.
    """

    def __init__(self, query: Optional[BuilderInterface] = None):
        super().__init__()
        self._query = query

    def get_query(self) -> BuilderInterface:
        """Return the query used inside the filtered area, creating it if unset."""
        if self._query is None:
            self._query = Query()
        return self._query

    def set_query(self, query: BuilderInterface) -> None:
        self._query = query

    def has_query(self) -> bool:
        return self._query is not None

    def get_type(self) -> str:
        return "filtered"

    def to_dict(self) -> Dict[str, Any]:
        output: Dict[str, Any] = {"filter": super().to_dict()}

        if self._query is not None:
            output["query"] = self._query.to_clause()

        return output
