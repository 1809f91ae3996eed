"""
Repository: read access to the documents of one or more types.
"""

import copy
import logging
from typing import Any, Dict, Iterator, List, Optional, TYPE_CHECKING

from elasticsearch import NotFoundError

from es_bundle.core.exceptions import UnknownDocumentTypeError
from es_bundle.dsl.filter.filters import TermFilter, TermsFilter
from es_bundle.dsl.search import Search
from es_bundle.dsl.sort import Sort
from es_bundle.orm.result import (
    RESULT_TYPES,
    RESULTS_ARRAY,
    RESULTS_OBJECT,
    RESULTS_RAW,
    DocumentIterator,
)

if TYPE_CHECKING:
    from es_bundle.orm.manager import Manager

logger = logging.getLogger(__name__)


class Repository:
    """
    Queries documents of the given types through a manager's connection.

    Every search is restricted to the repository's types with a filter on the
    connection's type field.
    """

    def __init__(self, manager: "Manager", types: List[str]):
        collector = manager.get_metadata_collector()
        for doc_type in types:
            if collector.get_metadata(doc_type) is None:
                raise UnknownDocumentTypeError(doc_type)
        self._manager = manager
        self._types = list(types)

    def get_types(self) -> List[str]:
        return list(self._types)

    def get_manager(self) -> "Manager":
        return self._manager

    def find(self, doc_id: str) -> Optional[Any]:
        """
        Fetch a document by id.

        Returns:
            The document, or None when it does not exist or has another type
        """
        try:
            hit = self._connection().get(doc_id)
        except NotFoundError:
            return None

        if not hit.get("found", True):
            return None
        if self._get_hit_type(hit) not in self._types:
            logger.debug("Document %s is not one of %s", doc_id, self._types)
            return None
        return self._convert_hit(hit)

    def find_by(
        self,
        criteria: Dict[str, Any],
        order_by: Optional[Dict[str, str]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        result_type: str = RESULTS_OBJECT,
    ) -> Any:
        """
        Find documents matching exact field values.

        Args:
            criteria: Field -> value; a list value matches any of its items
            order_by: Field -> ``asc`` / ``desc``
            limit: Maximum number of documents
            offset: Number of documents to skip
            result_type: ``object``, ``array`` or ``raw``

        Returns:
            Results in the requested form
        """
        search = Search()
        for field, value in criteria.items():
            if isinstance(value, (list, tuple, set)):
                search.add_filter(TermsFilter(field, list(value)))
            else:
                search.add_filter(TermFilter(field, value))

        for field, order in (order_by or {}).items():
            search.add_sort(Sort(field, order))

        search.set_size(limit)
        search.set_from(offset)

        return self.execute(search, result_type)

    def find_one_by(self, criteria: Dict[str, Any], order_by: Optional[Dict[str, str]] = None) -> Optional[Any]:
        return self.find_by(criteria, order_by=order_by, limit=1).first()

    def execute(self, search: Search, result_type: str = RESULTS_OBJECT) -> Any:
        """
        Run a search restricted to the repository's types.

        Args:
            search: Search to run; it is not modified
            result_type: ``object``, ``array`` or ``raw``
        """
        if result_type not in RESULT_TYPES:
            raise ValueError(f"Unknown result type {result_type!r}")

        search = self._restrict(search)
        response = self._connection().search(search.to_dict(), search.get_uri_params())
        return self._parse_result(response, result_type)

    def scan(self, search: Search, scroll: str = "1m", result_type: str = RESULTS_OBJECT) -> Iterator[Any]:
        """
        Iterate over every matching document using scroll requests.

        Yields documents (``object``), source dicts (``array``) or whole
        response pages (``raw``).
        """
        if result_type not in RESULT_TYPES:
            raise ValueError(f"Unknown result type {result_type!r}")

        search = self._restrict(search)
        params = search.get_uri_params()
        params.pop("scroll", None)
        pages = self._connection().scan(search.to_dict(), scroll, params)

        try:
            for response in pages:
                if result_type == RESULTS_RAW:
                    yield response
                else:
                    yield from self._parse_result(response, result_type)
        finally:
            pages.close()

    def count(self, search: Optional[Search] = None) -> int:
        body = self._restrict(search or Search()).to_dict()
        return self._connection().count({"query": body["query"]})

    def remove(self, doc_id: str) -> Dict[str, Any]:
        """Delete a document immediately."""
        self._manager.check_writable("remove")
        return self._connection().delete(doc_id)

    def create_document(self, **data: Any) -> Any:
        """Instantiate the repository's document class."""
        if len(self._types) != 1:
            raise ValueError("create_document needs a repository of a single type")
        document_class = self._manager.get_metadata_collector().get_document_class(self._types[0])
        return document_class(**data)

    def _connection(self):
        return self._manager.get_connection()

    def _restrict(self, search: Search) -> Search:
        search = copy.deepcopy(search)
        type_field = self._connection().get_type_field()
        if len(self._types) == 1:
            search.add_filter(TermFilter(type_field, self._types[0]))
        else:
            search.add_filter(TermsFilter(type_field, self._types))
        return search

    def _get_hit_type(self, hit: Dict[str, Any]) -> Optional[str]:
        return hit.get("_source", {}).get(self._connection().get_type_field())

    def _convert_hit(self, hit: Dict[str, Any]) -> Any:
        collector = self._manager.get_metadata_collector()
        document_class = collector.get_document_class(self._get_hit_type(hit) or self._types[0])
        if document_class is None:
            document_class = collector.get_document_class(self._types[0])

        type_field = self._connection().get_type_field()
        hit = dict(hit)
        for section in ("_source", "fields"):
            if type_field in (hit.get(section) or {}):
                hit[section] = {key: value for key, value in hit[section].items() if key != type_field}
        return self._manager.get_converter().convert_to_document(hit, document_class)

    def _parse_result(self, response: Dict[str, Any], result_type: str) -> Any:
        if result_type == RESULTS_RAW:
            return response

        if result_type == RESULTS_ARRAY:
            type_field = self._connection().get_type_field()
            return [
                {key: value for key, value in hit.get("_source", {}).items() if key != type_field}
                for hit in response.get("hits", {}).get("hits", [])
            ]

        return DocumentIterator(response, self._convert_hit)
