"""
Entity base class and field mapping metadata.

Entities are pydantic models. Mapping options for a field go into
``typing.Annotated``::

    class Product(Document):
        doc_type: ClassVar[str] = "product"

        title: Annotated[str, Property(analyzer="english", fields={"raw": {"type": "keyword"}})]
        sku: Annotated[str, Property(type="keyword")]
        price: float = 0.0
        variants: List[Variant] = []
"""

import re
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


@dataclass
class Property:
    """
    Mapping options for a single field.

    ``type`` is inferred from the annotation when omitted. Anything not
    covered by a named argument goes into ``options`` and is copied to the
    mapping verbatim.
    """

    type: Optional[str] = None
    index: Optional[Any] = None
    analyzer: Optional[str] = None
    search_analyzer: Optional[str] = None
    fields: Optional[Dict[str, Any]] = None
    options: Dict[str, Any] = field(default_factory=dict)

    def to_mapping(self) -> Dict[str, Any]:
        mapping: Dict[str, Any] = {}
        for name in ("type", "index", "analyzer", "search_analyzer", "fields"):
            value = getattr(self, name)
            if value is not None:
                mapping[name] = value
        mapping.update(self.options)
        return mapping


def Object(**options: Any) -> Property:
    """Store a model field as an ``object``."""
    return Property(type="object", options=options)


def Nested(**options: Any) -> Property:
    """Store a model field as ``nested`` so its items are queried independently."""
    return Property(type="nested", options=options)


def _snake_case(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


class Document(BaseModel):
    """
    Base class for entities stored in an index.

    ``id`` and ``score`` carry hit metadata and are never written to the
    document body.
    """

    model_config = ConfigDict(populate_by_name=True)

    doc_type: ClassVar[Optional[str]] = None

    id: Optional[str] = Field(default=None, exclude=True)
    score: Optional[float] = Field(default=None, exclude=True)

    @classmethod
    def get_type(cls) -> str:
        """Return the document type name, derived from the class name if not set."""
        return cls.doc_type or _snake_case(cls.__name__)
