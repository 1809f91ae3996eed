from typing import ClassVar

import pytest

from es_bundle.core.exceptions import MappingError
from es_bundle.mapping.document import Document
from es_bundle.mapping.metadata_collector import MetadataCollector
from sample_documents import ContentPage, Product


def test_register_classes(collector):
    assert collector.get_types() == ["product", "content_page"]
    assert collector.get_document_class("product") is Product
    assert collector.get_metadata("missing") is None
    assert collector.get_document_class("missing") is None


def test_get_mappings(collector):
    mappings = collector.get_mappings()

    assert set(mappings) == {"product", "content_page"}
    assert mappings["content_page"]["properties"]["slug"] == {"type": "keyword"}


def test_get_type_of_class_and_instance(collector):
    page = ContentPage(title="About", slug="about")

    assert collector.get_type(ContentPage) == "content_page"
    assert collector.get_type(page) == "content_page"
    assert collector.get_type(dict) is None


def test_metadata_keeps_aliases(collector):
    assert collector.get_metadata("product").aliases == {"description": "desc"}


def test_scan_module():
    collector = MetadataCollector(["fixture_documents.blog"])

    assert collector.get_types() == ["blog_post"]
    assert collector.get_mappings()["blog_post"]["properties"]["comments"]["type"] == "nested"
    assert collector.get_mappings()["blog_post"]["properties"]["tags"] == {"type": "keyword"}


def test_dotted_class_path():
    collector = MetadataCollector(["sample_documents.Product"])

    assert collector.get_types() == ["product"]


def test_unknown_source():
    with pytest.raises(MappingError):
        MetadataCollector(["no_such_module.Thing"])


def test_register_twice_is_idempotent():
    collector = MetadataCollector([Product, Product])

    assert collector.get_types() == ["product"]


def test_duplicate_type_name():
    class OtherProduct(Document):
        doc_type: ClassVar[str] = "product"

        name: str

    with pytest.raises(MappingError):
        MetadataCollector([Product, OtherProduct])


def test_register_rejects_non_documents():
    with pytest.raises(MappingError):
        MetadataCollector().register(dict)
