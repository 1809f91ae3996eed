from unittest.mock import MagicMock

import pytest
from elasticsearch import NotFoundError

from es_bundle.client.connection import Connection
from es_bundle.mapping.metadata_collector import MetadataCollector
from es_bundle.orm.manager import Manager
from sample_documents import ContentPage, Product


def make_not_found() -> NotFoundError:
    return NotFoundError("not_found", MagicMock(status=404), {"found": False})


def make_response(hits, total=None, scroll_id=None, aggregations=None):
    response = {
        "took": 3,
        "timed_out": False,
        "hits": {
            "total": {"value": len(hits) if total is None else total, "relation": "eq"},
            "max_score": 1.0 if hits else None,
            "hits": hits,
        },
    }
    if scroll_id is not None:
        response["_scroll_id"] = scroll_id
    if aggregations is not None:
        response["aggregations"] = aggregations
    return response


@pytest.fixture
def client() -> MagicMock:
    client = MagicMock()
    client.bulk.return_value = {"took": 1, "errors": False, "items": []}
    return client


@pytest.fixture
def collector() -> MetadataCollector:
    return MetadataCollector([Product, ContentPage])


@pytest.fixture
def connection(client: MagicMock) -> Connection:
    return Connection(client, {"index": "acme", "body": {"settings": {"number_of_shards": 1}}})


@pytest.fixture
def manager(connection: Connection, collector: MetadataCollector) -> Manager:
    return Manager("default", connection, collector)
