from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from es_bundle.api import create_app
from es_bundle.config import BundleConfig
from es_bundle.container import Container
from conftest import make_not_found, make_response


@pytest.fixture
def es_client():
    return MagicMock()


@pytest.fixture
def api(es_client):
    config = BundleConfig.from_dict(
        {
            "connections": {"default": {"index_name": "acme"}},
            "managers": {"default": {"mappings": ["sample_documents"]}},
        }
    )
    container = Container(config, client_factory=lambda hosts, **options: es_client)
    return TestClient(create_app(container))


def test_health(api):
    response = api.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "managers": ["default"]}


def test_get_document(api, es_client):
    es_client.get.return_value = {
        "_id": "p1",
        "found": True,
        "_source": {"title": "Shoe", "sku": "S-1", "doc_type": "product"},
    }

    response = api.get("/default/product/p1")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == "p1"
    assert data["sku"] == "S-1"
    assert "doc_type" not in data


def test_get_missing_document(api, es_client):
    es_client.get.side_effect = make_not_found()

    assert api.get("/default/product/nope").status_code == 404


def test_unknown_manager_or_type(api):
    assert api.get("/other/product/p1").status_code == 404
    assert api.get("/default/category/p1").status_code == 404
    assert api.post("/default/category/_search", json={}).status_code == 404


def test_search(api, es_client):
    es_client.search.return_value = make_response(
        [{"_id": "p1", "_score": 2.0, "_source": {"title": "Shoe", "sku": "S-1", "doc_type": "product"}}],
        total=30,
    )

    response = api.post(
        "/default/product/_search",
        json={"criteria": {"sku": "S-1"}, "order_by": {"price": "desc"}, "limit": 1},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 30
    assert data["documents"][0]["id"] == "p1"
    assert data["documents"][0]["score"] == 2.0
    body = es_client.search.call_args.kwargs["body"]
    assert body["size"] == 1
    assert body["sort"] == [{"price": {"order": "desc"}}]


def test_search_bad_order(api):
    response = api.post("/default/product/_search", json={"order_by": {"price": "sideways"}})

    assert response.status_code == 400


def test_search_validates_limit(api):
    assert api.post("/default/product/_search", json={"limit": -1}).status_code == 422
