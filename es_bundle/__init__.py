"""
Elasticsearch bundle.

Maps pydantic document classes to index mappings, builds search requests
with a fluent DSL and manages documents through per-index connections.
"""

from es_bundle.client.connection import Connection
from es_bundle.config import BundleConfig, load_config
from es_bundle.container import Container
from es_bundle.dsl.search import Search
from es_bundle.mapping.document import Document, Nested, Object, Property
from es_bundle.orm.manager import Manager
from es_bundle.orm.repository import Repository

__version__ = "1.0.0"

__all__ = [
    "BundleConfig",
    "Connection",
    "Container",
    "Document",
    "Manager",
    "Nested",
    "Object",
    "Property",
    "Repository",
    "Search",
    "load_config",
]
