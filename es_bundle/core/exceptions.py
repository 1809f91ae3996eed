"""
Exceptions raised by the bundle.

Errors coming from the wrapped client are not translated; these cover only
what the bundle itself validates.
"""


class BundleError(Exception):
    """Base class for all bundle errors."""


class UnknownBulkOperationError(BundleError, ValueError):
    """Bulk operation name is not supported."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Wrong bulk operation selected: {operation!r}")


class UnknownDocumentTypeError(BundleError, ValueError):
    """Type has no mapping registered on the connection."""

    def __init__(self, doc_type: str):
        self.doc_type = doc_type
        super().__init__(f"Unknown document type: {doc_type!r}")


class MappingError(BundleError):
    """Entity class cannot be translated into an index mapping."""


class ReadOnlyManagerError(BundleError):
    """Write operation attempted through a read-only manager."""


class ConfigurationError(BundleError):
    """Invalid or incomplete bundle configuration."""
