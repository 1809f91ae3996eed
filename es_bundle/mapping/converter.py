"""
Conversion between raw hits and Document objects.
"""

from typing import Any, Dict, List

from es_bundle.mapping.type_mappings import TypeMapper


class Converter:
    """Turns search hits into documents and documents into stored bodies."""

    def convert_to_document(self, hit: Dict[str, Any], document_class: type) -> Any:
        """
        Build a document from a raw hit.

        Args:
            hit: Hit as returned by the engine (``_id``, ``_score``, ``_source``)
            document_class: Document class to instantiate

        Returns:
            Document with ``id`` and ``score`` filled from the hit metadata
        """
        source = hit.get("_source")
        if source is None:
            # stored_fields come back as lists of values
            source = {
                name: self._stored_value(document_class, name, values)
                for name, values in hit.get("fields", {}).items()
            }

        document = document_class.model_validate(source)
        document.id = hit.get("_id")
        document.score = hit.get("_score")
        return document

    def convert_hits(self, hits: List[Dict[str, Any]], document_class: type) -> List[Any]:
        return [self.convert_to_document(hit, document_class) for hit in hits]

    def convert_to_dict(self, document: Any) -> Dict[str, Any]:
        """Return the body to store, keyed by stored field names."""
        return document.model_dump(mode="json", by_alias=True, exclude_none=True)

    @staticmethod
    def _stored_value(document_class: type, name: str, values: Any) -> Any:
        if not isinstance(values, list) or len(values) != 1:
            return values
        for field_name, field in document_class.model_fields.items():
            if name in (field_name, field.alias):
                if TypeMapper.split_sequence(field.annotation)[1]:
                    return values
                break
        return values[0]
