"""Core interfaces, models and exceptions for the bundle."""

from es_bundle.core.exceptions import (
    BundleError,
    ConfigurationError,
    MappingError,
    ReadOnlyManagerError,
    UnknownBulkOperationError,
    UnknownDocumentTypeError,
)
from es_bundle.core.interfaces import (
    IDocumentConverter,
    IIndicesClient,
    ISearchClient,
)
from es_bundle.core.models import (
    BulkOperation,
    DocumentMetadata,
    SearchResultInfo,
)

__all__ = [
    "BundleError",
    "ConfigurationError",
    "MappingError",
    "ReadOnlyManagerError",
    "UnknownBulkOperationError",
    "UnknownDocumentTypeError",
    "IDocumentConverter",
    "IIndicesClient",
    "ISearchClient",
    "BulkOperation",
    "DocumentMetadata",
    "SearchResultInfo",
]
