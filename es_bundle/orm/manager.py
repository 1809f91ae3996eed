"""
Document manager.

Binds a connection to the document classes it stores and exposes the write
side (persist / remove / commit) plus repositories for reads.
"""

import logging
from typing import Any, List, Optional, Union

from es_bundle.client.connection import Connection
from es_bundle.core.exceptions import MappingError, ReadOnlyManagerError
from es_bundle.core.interfaces import IDocumentConverter
from es_bundle.mapping.converter import Converter
from es_bundle.mapping.metadata_collector import MetadataCollector
from es_bundle.orm.repository import Repository

logger = logging.getLogger(__name__)


class Manager:
    """
    Entry point for working with documents of one connection.

    The mappings collected for the manager's document classes are registered
    on the connection when the manager is created.

    Args:
        name: Manager name, as configured
        connection: Connection to the index
        metadata_collector: Metadata of the document classes handled by the manager
        converter: Hit / document converter
        readonly: Reject every write operation
    """

    def __init__(
        self,
        name: str,
        connection: Connection,
        metadata_collector: MetadataCollector,
        converter: Optional[IDocumentConverter] = None,
        readonly: bool = False,
    ):
        self.name = name
        self._connection = connection
        self._metadata_collector = metadata_collector
        self._converter = converter or Converter()
        self._readonly = readonly

        connection.set_multiple_mapping(metadata_collector.get_mappings())

    def get_name(self) -> str:
        return self.name

    def get_connection(self) -> Connection:
        return self._connection

    def get_metadata_collector(self) -> MetadataCollector:
        return self._metadata_collector

    def get_converter(self) -> IDocumentConverter:
        return self._converter

    def is_readonly(self) -> bool:
        return self._readonly

    def check_writable(self, operation: str) -> None:
        if self._readonly:
            raise ReadOnlyManagerError(f"Manager {self.name!r} is read-only, cannot {operation}")

    def get_repository(self, types: Union[str, type, List[Union[str, type]]]) -> Repository:
        """
        Return a repository for one or more document types.

        Args:
            types: Type name, Document class, or a list of either

        Raises:
            UnknownDocumentTypeError: A type is not handled by this manager
        """
        if not isinstance(types, list):
            types = [types]
        return Repository(self, [self._resolve_type(doc_type) for doc_type in types])

    def persist(self, document: Any) -> None:
        """Queue a document for indexing; sent on :meth:`commit`."""
        self.check_writable("persist")
        body = self._converter.convert_to_dict(document)
        if document.id is not None:
            body["_id"] = document.id
        self._connection.bulk("index", self._get_document_type(document), body)

    def remove(self, document: Any) -> None:
        """Queue a document for deletion; sent on :meth:`commit`."""
        self.check_writable("remove")
        if document.id is None:
            raise ValueError("Cannot remove a document without an id")
        self._connection.bulk("delete", self._get_document_type(document), {"_id": document.id})

    def commit(self) -> Optional[dict]:
        self.check_writable("commit")
        logger.debug("Committing manager %s", self.name)
        return self._connection.commit()

    def flush(self) -> Any:
        return self._connection.flush()

    def refresh(self) -> Any:
        return self._connection.refresh()

    def _resolve_type(self, doc_type: Union[str, type]) -> str:
        if isinstance(doc_type, str):
            return doc_type
        resolved = self._metadata_collector.get_type(doc_type)
        if resolved is None:
            raise MappingError(f"{doc_type!r} is not handled by manager {self.name!r}")
        return resolved

    def _get_document_type(self, document: Any) -> str:
        doc_type = self._metadata_collector.get_type(document)
        if doc_type is None:
            raise MappingError(
                f"{type(document).__qualname__} is not handled by manager {self.name!r}"
            )
        return doc_type
