"""
Client surface the bundle relies on.

These protocols describe the subset of the ``elasticsearch`` client API that
the connection delegates to. Anything implementing them (the real client or a
test double) can back a :class:`es_bundle.client.Connection`.
"""

from typing import Any, Dict, List, Protocol


class IIndicesClient(Protocol):
    """Index namespace of the search client (``client.indices``)."""

    def create(self, **kwargs: Any) -> Any:
        ...

    def delete(self, **kwargs: Any) -> Any:
        ...

    def exists(self, **kwargs: Any) -> Any:
        ...

    def flush(self, **kwargs: Any) -> Any:
        ...

    def refresh(self, **kwargs: Any) -> Any:
        ...

    def get_mapping(self, **kwargs: Any) -> Any:
        ...

    def put_mapping(self, **kwargs: Any) -> Any:
        ...

    def open(self, **kwargs: Any) -> Any:
        ...

    def close(self, **kwargs: Any) -> Any:
        ...

    def clear_cache(self, **kwargs: Any) -> Any:
        ...


class ISearchClient(Protocol):
    """
    Search client the connection forwards to.

    Only keyword arguments are used so the same calls work across client
    releases.
    """

    indices: IIndicesClient
    cluster: Any

    def bulk(self, **kwargs: Any) -> Dict[str, Any]:
        """
        Send a batch of operations.

        Args:
            body: List of action headers and sources.

        Returns:
            Bulk response with per-item results.
        """
        ...

    def search(self, **kwargs: Any) -> Dict[str, Any]:
        ...

    def scroll(self, **kwargs: Any) -> Dict[str, Any]:
        ...

    def get(self, **kwargs: Any) -> Dict[str, Any]:
        ...

    def count(self, **kwargs: Any) -> Dict[str, Any]:
        ...

    def delete(self, **kwargs: Any) -> Dict[str, Any]:
        ...

    def clear_scroll(self, **kwargs: Any) -> Any:
        ...


class IDocumentConverter(Protocol):
    """Converts between raw hits and entity objects."""

    def convert_to_document(self, hit: Dict[str, Any], document_class: type) -> Any:
        ...

    def convert_to_dict(self, document: Any) -> Dict[str, Any]:
        ...

    def convert_hits(self, hits: List[Dict[str, Any]], document_class: type) -> List[Any]:
        ...
