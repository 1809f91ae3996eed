"""Entity to index mapping translation."""

from es_bundle.mapping.builder import MappingBuilder, merge_properties
from es_bundle.mapping.converter import Converter
from es_bundle.mapping.document import Document, Nested, Object, Property
from es_bundle.mapping.metadata_collector import MetadataCollector
from es_bundle.mapping.type_mappings import TypeMapper

__all__ = [
    "Converter",
    "Document",
    "MappingBuilder",
    "MetadataCollector",
    "Nested",
    "Object",
    "Property",
    "TypeMapper",
    "merge_properties",
]
