"""
Mapping builder.

Translates Document classes into index mappings.
"""

import copy
from typing import Any, Dict, Optional, Tuple

from pydantic.fields import FieldInfo

from es_bundle.core.exceptions import MappingError
from es_bundle.mapping.document import Document, Property
from es_bundle.mapping.type_mappings import TypeMapper


class MappingBuilder:
    """
    Builds ``properties`` mappings from pydantic models.

    Nested pydantic models become ``object`` fields, lists of models become
    ``nested`` fields; a :class:`Property` on the field overrides either.
    """

    def build(self, document_class: type) -> Dict[str, Any]:
        """
        Build the mapping of a document class.

        Args:
            document_class: Document subclass

        Returns:
            Mapping in the ``{"properties": {...}}`` form

        Raises:
            MappingError: The class is not a Document or a field cannot be mapped
        """
        if not (isinstance(document_class, type) and issubclass(document_class, Document)):
            raise MappingError(f"{document_class!r} is not a Document subclass")
        return {"properties": self.build_properties(document_class)}

    def build_properties(self, model: type) -> Dict[str, Any]:
        properties: Dict[str, Any] = {}
        for name, field_info in model.model_fields.items():
            if field_info.exclude:
                continue
            stored_name = field_info.alias or name
            properties[stored_name] = self._build_field(model, name, field_info)
        return properties

    def get_aliases(self, model: type) -> Dict[str, str]:
        """Return attribute name -> stored field name for aliased fields."""
        return {
            name: field_info.alias
            for name, field_info in model.model_fields.items()
            if field_info.alias and field_info.alias != name
        }

    def _build_field(self, model: type, name: str, field_info: FieldInfo) -> Dict[str, Any]:
        prop = self._get_property(field_info)
        mapping = prop.to_mapping() if prop else {}

        item_type, is_sequence = TypeMapper.split_sequence(field_info.annotation)

        if TypeMapper.is_model(item_type):
            mapping.setdefault("type", "nested" if is_sequence else "object")
            if mapping["type"] not in ("object", "nested"):
                raise MappingError(
                    f"{model.__name__}.{name}: model fields must map to object or nested, "
                    f"got {mapping['type']!r}"
                )
            mapping["properties"] = self.build_properties(item_type)
            return self._order(mapping)

        if "type" not in mapping:
            es_type = TypeMapper.get_es_type(item_type)
            if es_type is None:
                raise MappingError(
                    f"{model.__name__}.{name}: cannot infer mapping type from {item_type!r}, "
                    "set it with Property(type=...)"
                )
            mapping["type"] = es_type

        return self._order(mapping)

    @staticmethod
    def _get_property(field_info: FieldInfo) -> Optional[Property]:
        for meta in field_info.metadata:
            if isinstance(meta, Property):
                return meta
        return None

    @staticmethod
    def _order(mapping: Dict[str, Any]) -> Dict[str, Any]:
        # type first keeps generated mappings readable when dumped
        return {"type": mapping["type"], **{k: v for k, v in mapping.items() if k != "type"}}


def merge_properties(
    target: Dict[str, Any],
    source: Dict[str, Any],
    context: Tuple[str, str] = ("", ""),
    owners: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """
    Merge ``source`` properties into ``target`` in place.

    Object and nested fields are merged recursively; any other field defined
    differently on both sides is a conflict.

    Args:
        target: Properties merged so far
        source: Properties to add
        context: (type of ``target``, type of ``source``), named in conflict errors
        owners: Field name -> type that first defined it; filled in as fields
            are added and used instead of ``context[0]`` in conflict errors

    Raises:
        MappingError: Conflicting field definitions
    """
    merging = context[1]
    for field_name, definition in source.items():
        owner = context[0] if owners is None else owners.setdefault(field_name, merging)
        existing = target.get(field_name)
        if existing is None:
            target[field_name] = copy.deepcopy(definition)
            continue
        if existing == definition:
            continue
        if (
            existing.get("type") == definition.get("type")
            and "properties" in existing
            and "properties" in definition
        ):
            merge_properties(existing["properties"], definition["properties"], (owner, merging))
            continue
        raise MappingError(
            f"Field {field_name!r} is mapped differently"
            + (f" by {owner!r} and {merging!r}" if owner else "")
        )
    return target
