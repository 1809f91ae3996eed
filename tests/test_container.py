import logging
from unittest.mock import MagicMock

import pytest

from es_bundle.config import BundleConfig
from es_bundle.container import Container
from es_bundle.core.exceptions import ConfigurationError


@pytest.fixture
def bundle_config():
    return BundleConfig.from_dict(
        {
            "connections": {
                "default": {"index_name": "acme", "hosts": ["http://es:9200"], "client": {"request_timeout": 5}},
                "archive": {"index_name": "acme_archive"},
            },
            "managers": {
                "default": {"mappings": ["sample_documents"]},
                "archive": {"connection": "archive", "readonly": True, "debug": True},
            },
        }
    )


@pytest.fixture
def factory():
    return MagicMock(side_effect=lambda hosts, **options: MagicMock(name=f"client:{hosts[0]}"))


def test_get_manager(bundle_config, factory):
    container = Container(bundle_config, client_factory=factory)

    manager = container.get_manager()

    assert manager.get_name() == "default"
    assert manager.get_connection().get_index_name() == "acme"
    assert sorted(manager.get_connection().get_types()) == ["content_page", "product"]
    factory.assert_called_once_with(["http://es:9200"], request_timeout=5)


def test_services_are_cached(bundle_config, factory):
    container = Container(bundle_config, client_factory=factory)

    assert container.get_manager() is container.get_manager()
    assert container.get_connection() is container.get_manager().get_connection()
    assert container.get_client() is container.get_connection().get_client()
    assert factory.call_count == 1


def test_readonly_debug_manager(bundle_config, factory):
    container = Container(bundle_config, client_factory=factory)

    manager = container.get_manager("archive")

    assert manager.is_readonly() is True
    assert manager.get_connection().get_index_name() == "acme_archive"
    assert logging.getLogger("elasticsearch").level == logging.DEBUG


def test_unknown_manager(bundle_config, factory):
    container = Container(bundle_config, client_factory=factory)

    with pytest.raises(ConfigurationError):
        container.get_manager("nope")
    with pytest.raises(ConfigurationError):
        container.get_connection("nope")


def test_manager_names(bundle_config, factory):
    assert Container(bundle_config, client_factory=factory).manager_names() == ["default", "archive"]


def test_default_client_factory(bundle_config, monkeypatch):
    created = MagicMock()
    monkeypatch.setattr("es_bundle.container.Elasticsearch", created)

    Container(bundle_config).get_client()

    created.assert_called_once_with(hosts=["http://es:9200"], request_timeout=5)
