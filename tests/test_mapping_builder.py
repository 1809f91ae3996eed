from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, ClassVar, Dict, List, Literal, Optional, Set
from uuid import UUID

import pytest
from pydantic import BaseModel

from es_bundle.core.exceptions import MappingError
from es_bundle.mapping.builder import MappingBuilder, merge_properties
from es_bundle.mapping.document import Document, Nested, Object, Property
from es_bundle.mapping.type_mappings import TypeMapper
from sample_documents import ContentPage, Product


class Status(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


def test_product_mapping():
    mapping = MappingBuilder().build(Product)

    assert mapping == {
        "properties": {
            "title": {"type": "text", "analyzer": "english", "fields": {"raw": {"type": "keyword"}}},
            "sku": {"type": "keyword"},
            "price": {"type": "float"},
            "in_stock": {"type": "boolean"},
            "created_at": {"type": "date"},
            "category": {
                "type": "object",
                "properties": {"name": {"type": "text"}, "path": {"type": "text"}},
            },
            "variants": {
                "type": "nested",
                "properties": {
                    "color": {"type": "keyword"},
                    "size": {"type": "text"},
                    "stock": {"type": "integer"},
                },
            },
            "desc": {"type": "text"},
        }
    }


def test_hit_metadata_is_not_mapped():
    properties = MappingBuilder().build(ContentPage)["properties"]

    assert "id" not in properties
    assert "score" not in properties


def test_type_name():
    assert Product.get_type() == "product"
    assert ContentPage.get_type() == "content_page"


def test_aliases():
    assert MappingBuilder().get_aliases(Product) == {"description": "desc"}


def test_scalar_types():
    class Everything(Document):
        doc_type: ClassVar[str] = "everything"

        amount: Decimal
        day: date
        uid: UUID
        status: Status
        kind: Literal["a", "b"]
        extra: Dict[str, Any] = {}
        labels: Set[str] = set()
        counts: Optional[List[int]] = None

    properties = MappingBuilder().build(Everything)["properties"]

    assert properties == {
        "amount": {"type": "double"},
        "day": {"type": "date"},
        "uid": {"type": "keyword"},
        "status": {"type": "keyword"},
        "kind": {"type": "keyword"},
        "extra": {"type": "object"},
        "labels": {"type": "text"},
        "counts": {"type": "integer"},
    }


def test_object_and_nested_overrides():
    class Tag(BaseModel):
        name: str

    class Tagged(Document):
        tags: Annotated[List[Tag], Object(enabled=False)]
        main_tag: Annotated[Tag, Nested(include_in_parent=True)]

    properties = MappingBuilder().build(Tagged)["properties"]

    assert properties["tags"] == {
        "type": "object",
        "enabled": False,
        "properties": {"name": {"type": "text"}},
    }
    assert properties["main_tag"]["type"] == "nested"
    assert properties["main_tag"]["include_in_parent"] is True


def test_property_options_are_copied():
    class Page(Document):
        body: Annotated[str, Property(index=False, options={"copy_to": "all_text"})]

    assert MappingBuilder().build(Page)["properties"]["body"] == {
        "type": "text",
        "index": False,
        "copy_to": "all_text",
    }


def test_model_field_with_scalar_type_is_rejected():
    class Tag(BaseModel):
        name: str

    class Broken(Document):
        tag: Annotated[Tag, Property(type="keyword")]

    with pytest.raises(MappingError):
        MappingBuilder().build(Broken)


def test_unknown_type_is_rejected():
    class Blob:
        pass

    class Broken(Document):
        model_config = {"arbitrary_types_allowed": True}

        blob: Blob

    with pytest.raises(MappingError):
        MappingBuilder().build(Broken)


def test_build_rejects_non_documents():
    with pytest.raises(MappingError):
        MappingBuilder().build(dict)


def test_merge_properties():
    target = {"title": {"type": "text"}, "meta": {"type": "object", "properties": {"a": {"type": "keyword"}}}}
    source = {"slug": {"type": "keyword"}, "meta": {"type": "object", "properties": {"b": {"type": "long"}}}}

    merge_properties(target, source)

    assert target == {
        "title": {"type": "text"},
        "slug": {"type": "keyword"},
        "meta": {"type": "object", "properties": {"a": {"type": "keyword"}, "b": {"type": "long"}}},
    }
    target["slug"]["type"] = "text"
    assert source["slug"] == {"type": "keyword"}


def test_merge_properties_conflict():
    with pytest.raises(MappingError):
        merge_properties({"code": {"type": "keyword"}}, {"code": {"type": "long"}}, ("a", "b"))


def test_type_mapper_helpers():
    assert TypeMapper.unwrap_optional(Optional[int]) is int
    assert TypeMapper.unwrap_optional(int | None) is int
    assert TypeMapper.split_sequence(List[str]) == (str, True)
    assert TypeMapper.split_sequence(str) == (str, False)
    assert TypeMapper.get_es_type(bool) == "boolean"
    assert TypeMapper.get_es_type(object) is None
