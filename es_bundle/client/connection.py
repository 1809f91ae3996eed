"""
Connection to a single index.

Keeps the index name, settings and per-type mappings, queues bulk operations
and forwards everything else to the wrapped ``elasticsearch`` client.
"""

import copy
import logging
from typing import Any, Dict, Iterator, List, Optional

from elasticsearch import NotFoundError

from es_bundle.core.exceptions import UnknownBulkOperationError, UnknownDocumentTypeError
from es_bundle.core.interfaces import ISearchClient
from es_bundle.core.models import BulkOperation
from es_bundle.mapping.builder import merge_properties

logger = logging.getLogger(__name__)


DEFAULT_TYPE_FIELD = "doc_type"


class Connection:
    """
    Index-level wrapper around the search client.

    Several document types can share the index: their mappings are merged
    into one and every stored document carries its type in ``type_field``.

    Args:
        client: Search client (``elasticsearch.Elasticsearch`` or compatible)
        config: ``{"index": name, "body": {"settings": {...}, "mappings": {type: mapping}}}``,
            optionally with ``"type_field"``
    """

    def __init__(self, client: ISearchClient, config: Dict[str, Any]):
        self._client = client
        self._config: Dict[str, Any] = copy.deepcopy(config)
        self._bulk_queries: List[Dict[str, Any]] = []
        self._bulk_params: Dict[str, Any] = {}

    def get_client(self) -> ISearchClient:
        return self._client

    def get_index_name(self) -> Optional[str]:
        return self._config.get("index")

    def set_index_name(self, index_name: str) -> None:
        self._config["index"] = index_name

    def get_type_field(self) -> str:
        return self._config.get("type_field", DEFAULT_TYPE_FIELD)

    def get_settings(self) -> Dict[str, Any]:
        return copy.deepcopy(self._body().get("settings", {}))

    def get_config(self) -> Dict[str, Any]:
        return copy.deepcopy(self._config)

    # Mapping bookkeeping

    def get_mapping(self, doc_type: str) -> Optional[Dict[str, Any]]:
        """Return the mapping registered for a type, or None."""
        return self._body().get("mappings", {}).get(doc_type)

    def get_mappings(self) -> Dict[str, Dict[str, Any]]:
        return copy.deepcopy(self._body().get("mappings", {}))

    def get_types(self) -> List[str]:
        return list(self._body().get("mappings", {}))

    def set_mapping(self, doc_type: str, mapping: Dict[str, Any]) -> None:
        self._body(create=True).setdefault("mappings", {})[doc_type] = copy.deepcopy(mapping)

    def force_mapping(self, mappings: Dict[str, Dict[str, Any]]) -> None:
        """Replace all registered mappings."""
        self._body(create=True)["mappings"] = copy.deepcopy(mappings)

    def set_multiple_mapping(self, mappings: Dict[str, Dict[str, Any]], clean_up: bool = False) -> None:
        """
        Register several mappings at once.

        Args:
            mappings: Type name -> mapping
            clean_up: Drop mappings of types not present in ``mappings``
        """
        if clean_up:
            self.force_mapping(mappings)
            return
        for doc_type, mapping in mappings.items():
            self.set_mapping(doc_type, mapping)

    def update_settings(self, settings: Dict[str, Any], force: bool = False) -> None:
        """
        Update the connection config.

        Args:
            settings: Config in the same shape as the constructor's
            force: Replace the whole config instead of merging into it
        """
        if force:
            self._config = copy.deepcopy(settings)
        else:
            _deep_merge(self._config, copy.deepcopy(settings))

    def get_index_mapping(self, types: Optional[List[str]] = None) -> Dict[str, Any]:
        """
        Merge the mappings of ``types`` (all types by default) into one index mapping.

        Raises:
            UnknownDocumentTypeError: A requested type has no mapping
            MappingError: Two types define the same field differently
        """
        mappings = self._body().get("mappings", {})
        types = list(mappings) if types is None else types

        merged: Dict[str, Any] = {}
        properties: Dict[str, Any] = {}
        owners: Dict[str, str] = {}
        for doc_type in types:
            if doc_type not in mappings:
                raise UnknownDocumentTypeError(doc_type)
            mapping = mappings[doc_type]
            for key, value in mapping.items():
                if key != "properties":
                    merged.setdefault(key, copy.deepcopy(value))
            merge_properties(properties, mapping.get("properties", {}), ("", doc_type), owners)

        if not types:
            return merged

        properties[self.get_type_field()] = {"type": "keyword"}
        merged["properties"] = properties
        return merged

    # Index lifecycle

    def create_index(self, no_mapping: bool = False) -> Any:
        """
        Create the index with the configured settings and merged mappings.

        Args:
            no_mapping: Create the index without sending mappings
        """
        body = {key: copy.deepcopy(value) for key, value in self._body().items() if key != "mappings"}
        if not no_mapping and self.get_types():
            body["mappings"] = self.get_index_mapping()

        logger.info("Creating index %s", self.get_index_name())
        return self._client.indices.create(index=self.get_index_name(), body=body)

    def drop_index(self) -> Any:
        logger.info("Dropping index %s", self.get_index_name())
        return self._client.indices.delete(index=self.get_index_name())

    def drop_and_create_index(self, no_mapping: bool = False) -> Any:
        try:
            self.drop_index()
        except NotFoundError:
            logger.info("Index %s did not exist", self.get_index_name())
        return self.create_index(no_mapping=no_mapping)

    def index_exists(self) -> bool:
        return bool(self._client.indices.exists(index=self.get_index_name()))

    def is_open(self) -> bool:
        state = _unwrap(self._client.cluster.state(metric="metadata", index=self.get_index_name()))
        indices = state["metadata"]["indices"]
        return indices.get(self.get_index_name(), {}).get("state") == "open"

    def open(self) -> Any:
        return self._client.indices.open(index=self.get_index_name())

    def close(self) -> Any:
        return self._client.indices.close(index=self.get_index_name())

    def clear_cache(self) -> Any:
        return self._client.indices.clear_cache(index=self.get_index_name())

    def get_mapping_from_index(self) -> Dict[str, Any]:
        """Return the mapping currently stored in the index."""
        response = _unwrap(self._client.indices.get_mapping(index=self.get_index_name()))
        # keyed by the concrete index name, which differs when addressing an alias
        index_mapping = response.get(self.get_index_name()) or next(iter(response.values()), {})
        return index_mapping.get("mappings", {})

    def update_mapping(self, types: Optional[List[str]] = None) -> bool:
        """
        Put the configured mapping when it differs from the index's.

        Args:
            types: Types to update, all registered types by default

        Returns:
            True when a mapping update was sent
        """
        desired = self.get_index_mapping(types)
        if not desired:
            return False

        current = self.get_mapping_from_index().get("properties", {})
        wanted = desired.get("properties", {})
        if all(current.get(name) == definition for name, definition in wanted.items()):
            logger.info("Mapping of %s is up to date", self.get_index_name())
            return False

        logger.info("Updating mapping of %s", self.get_index_name())
        self._client.indices.put_mapping(index=self.get_index_name(), body=desired)
        return True

    # Documents

    def bulk(self, operation: str, doc_type: str, query: Dict[str, Any]) -> None:
        """
        Queue a bulk operation until :meth:`commit`.

        Args:
            operation: ``index``, ``create``, ``update`` or ``delete``
            doc_type: Document type
            query: Document body; ``_id`` and ``_routing`` keys become action metadata

        Raises:
            UnknownBulkOperationError: Operation name is not supported
            UnknownDocumentTypeError: Mappings are registered but none for ``doc_type``
        """
        if operation not in BulkOperation.values():
            raise UnknownBulkOperationError(operation)
        types = self.get_types()
        if types and doc_type not in types:
            raise UnknownDocumentTypeError(doc_type)

        source = dict(query)
        header: Dict[str, Any] = {"_index": self.get_index_name()}
        for meta in ("_id", "_routing"):
            if meta in source:
                header[meta] = source.pop(meta)

        self._bulk_queries.append({operation: header})

        if operation in (BulkOperation.INDEX.value, BulkOperation.CREATE.value):
            source[self.get_type_field()] = doc_type
            self._bulk_queries.append(source)
        elif operation == BulkOperation.UPDATE.value:
            self._bulk_queries.append(source if "doc" in source or "script" in source else {"doc": source})

        logger.debug("Queued %s of %s %s", operation, doc_type, header.get("_id", ""))

    def set_bulk_params(self, params: Dict[str, Any]) -> None:
        """Set parameters sent with every bulk request (``refresh``, ``timeout`` ...)."""
        self._bulk_params = dict(params)

    def get_bulk_queries(self) -> List[Dict[str, Any]]:
        return list(self._bulk_queries)

    def commit(self) -> Optional[Dict[str, Any]]:
        """
        Send queued operations and flush the index.

        The flush runs even when nothing was queued.

        Returns:
            Bulk response, or None when nothing was queued
        """
        response = None
        if self._bulk_queries:
            response = _unwrap(self._client.bulk(body=self._bulk_queries, **self._bulk_params))
            self._bulk_queries = []
        else:
            logger.debug("No bulk operations queued on %s", self.get_index_name())
        self.flush()

        if response and response.get("errors"):
            failed = [
                item for item in response.get("items", [])
                if next(iter(item.values()), {}).get("error")
            ]
            logger.warning("Bulk request to %s had %d failed items", self.get_index_name(), len(failed))
        return response

    def search(self, body: Dict[str, Any], params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        logger.debug("Search on %s: %s", self.get_index_name(), body)
        return _unwrap(self._client.search(index=self.get_index_name(), body=body, **(params or {})))

    def count(self, body: Optional[Dict[str, Any]] = None) -> int:
        if body:
            response = self._client.count(index=self.get_index_name(), body=body)
        else:
            response = self._client.count(index=self.get_index_name())
        return _unwrap(response)["count"]

    def get(self, doc_id: str) -> Dict[str, Any]:
        return _unwrap(self._client.get(index=self.get_index_name(), id=doc_id))

    def delete(self, doc_id: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Delete a single document right away, bypassing the bulk queue."""
        return _unwrap(self._client.delete(index=self.get_index_name(), id=doc_id, **(params or {})))

    def scroll(self, scroll_id: str, scroll_duration: str = "5m") -> Dict[str, Any]:
        return _unwrap(self._client.scroll(scroll_id=scroll_id, scroll=scroll_duration))

    def clear_scroll(self, scroll_id: str) -> Any:
        return self._client.clear_scroll(scroll_id=scroll_id)

    def scan(
        self, body: Dict[str, Any], scroll_duration: str = "5m", params: Optional[Dict[str, Any]] = None
    ) -> Iterator[Dict[str, Any]]:
        """
        Yield every non-empty page of a scrolled search.

        The scroll context is cleared once the pages run out or the consumer
        stops iterating.
        """
        response = self.search(body, {**(params or {}), "scroll": scroll_duration})
        scroll_id = response.get("_scroll_id")

        try:
            while response.get("hits", {}).get("hits"):
                yield response
                if scroll_id is None:
                    break
                response = self.scroll(scroll_id, scroll_duration)
                scroll_id = response.get("_scroll_id", scroll_id)
        finally:
            if scroll_id is not None:
                self.clear_scroll(scroll_id)

    def flush(self, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._client.indices.flush(index=self.get_index_name(), **(params or {}))

    def refresh(self, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._client.indices.refresh(index=self.get_index_name(), **(params or {}))

    def _body(self, create: bool = False) -> Dict[str, Any]:
        if create:
            return self._config.setdefault("body", {})
        return self._config.get("body") or {}


def _deep_merge(target: Dict[str, Any], source: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _deep_merge(target[key], value)
        else:
            target[key] = value
    return target


def _unwrap(response: Any) -> Any:
    # elasticsearch 8 wraps bodies in ObjectApiResponse
    return getattr(response, "body", response)
