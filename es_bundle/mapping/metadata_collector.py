"""
Document metadata collection.

Discovers Document classes from module paths and keeps their mapping
metadata keyed by document type.
"""

import importlib
import inspect
import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from es_bundle.core.exceptions import MappingError
from es_bundle.core.models import DocumentMetadata
from es_bundle.mapping.builder import MappingBuilder
from es_bundle.mapping.document import Document

logger = logging.getLogger(__name__)


class MetadataCollector:
    """
    Collects mapping metadata for a set of document classes.

    Entries in ``mappings`` are either Document classes, dotted paths to a
    Document class, or module paths; modules are scanned for the Document
    subclasses they define.
    """

    def __init__(
        self,
        mappings: Optional[Iterable[Union[str, type]]] = None,
        builder: Optional[MappingBuilder] = None,
    ):
        self.builder = builder or MappingBuilder()
        self._metadata: Dict[str, DocumentMetadata] = {}
        for entry in mappings or []:
            for document_class in self._resolve(entry):
                self.register(document_class)

    def register(self, document_class: type) -> DocumentMetadata:
        """
        Build and store metadata for a document class.

        Raises:
            MappingError: Another class already uses the same type name
        """
        doc_type = document_class.get_type() if self._is_document(document_class) else None
        if doc_type is None:
            raise MappingError(f"{document_class!r} is not a Document subclass")

        existing = self._metadata.get(doc_type)
        if existing is not None:
            if existing.document_class is document_class:
                return existing
            raise MappingError(
                f"Type {doc_type!r} is defined by both {existing.document_class.__qualname__} "
                f"and {document_class.__qualname__}"
            )

        metadata = DocumentMetadata(
            type=doc_type,
            document_class=document_class,
            properties=self.builder.build(document_class)["properties"],
            aliases=self.builder.get_aliases(document_class),
        )
        self._metadata[doc_type] = metadata
        logger.debug("Registered document type %s (%s)", doc_type, document_class.__qualname__)
        return metadata

    def get_types(self) -> List[str]:
        return list(self._metadata)

    def get_mappings(self) -> Dict[str, Dict[str, Any]]:
        """Return ``{type: {"properties": ...}}`` for every registered type."""
        return {doc_type: metadata.get_mapping() for doc_type, metadata in self._metadata.items()}

    def get_metadata(self, doc_type: str) -> Optional[DocumentMetadata]:
        return self._metadata.get(doc_type)

    def get_document_class(self, doc_type: str) -> Optional[type]:
        metadata = self._metadata.get(doc_type)
        return metadata.document_class if metadata else None

    def get_type(self, document: Any) -> Optional[str]:
        """Return the registered type of a document class or instance."""
        document_class = document if inspect.isclass(document) else type(document)
        for doc_type, metadata in self._metadata.items():
            if metadata.document_class is document_class:
                return doc_type
        return None

    @staticmethod
    def _is_document(candidate: Any) -> bool:
        return inspect.isclass(candidate) and issubclass(candidate, Document) and candidate is not Document

    def _resolve(self, entry: Union[str, type]) -> List[type]:
        if not isinstance(entry, str):
            return [entry]

        try:
            module = importlib.import_module(entry)
        except ImportError:
            module_path, _, attribute = entry.rpartition(".")
            if not module_path:
                raise MappingError(f"Cannot import mapping source {entry!r}")
            try:
                document_class = getattr(importlib.import_module(module_path), attribute)
            except (ImportError, AttributeError) as e:
                raise MappingError(f"Cannot import mapping source {entry!r}: {e}") from e
            return [document_class]

        return [
            member
            for _, member in inspect.getmembers(module, self._is_document)
            if member.__module__ == module.__name__
        ]
