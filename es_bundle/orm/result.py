"""
Search result wrappers.
"""

from typing import Any, Callable, Dict, Iterator, List, Optional

from es_bundle.core.models import SearchResultInfo

RESULTS_OBJECT = "object"
RESULTS_ARRAY = "array"
RESULTS_RAW = "raw"

RESULT_TYPES = (RESULTS_OBJECT, RESULTS_ARRAY, RESULTS_RAW)


class DocumentIterator:
    """
    Documents of one search response page.

    Hits are converted on first access. ``len()`` is the number of hits in
    this page; ``total`` is the number of matching documents.
    """

    def __init__(self, response: Dict[str, Any], convert: Callable[[Dict[str, Any]], Any]):
        self._hits: List[Dict[str, Any]] = response.get("hits", {}).get("hits", [])
        self._convert = convert
        self._documents: Optional[List[Any]] = None
        self.info = SearchResultInfo.from_response(response)

    @property
    def total(self) -> int:
        return self.info.total

    @property
    def aggregations(self) -> Dict[str, Any]:
        return self.info.aggregations

    @property
    def scroll_id(self) -> Optional[str]:
        return self.info.scroll_id

    def count(self) -> int:
        return self.total

    def first(self) -> Optional[Any]:
        documents = self._get_documents()
        return documents[0] if documents else None

    def _get_documents(self) -> List[Any]:
        if self._documents is None:
            self._documents = [self._convert(hit) for hit in self._hits]
        return self._documents

    def __iter__(self) -> Iterator[Any]:
        return iter(self._get_documents())

    def __len__(self) -> int:
        return len(self._hits)

    def __getitem__(self, index: int) -> Any:
        return self._get_documents()[index]
