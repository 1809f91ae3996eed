"""
Service container.

Builds clients, connections and managers from a :class:`BundleConfig` on
first use and keeps them for the lifetime of the container.
"""

import logging
from typing import Dict, List, Optional

from elasticsearch import Elasticsearch

from es_bundle.client.connection import Connection
from es_bundle.config import BundleConfig, load_config
from es_bundle.core.exceptions import ConfigurationError
from es_bundle.mapping.converter import Converter
from es_bundle.mapping.metadata_collector import MetadataCollector
from es_bundle.orm.manager import Manager

logger = logging.getLogger(__name__)

DEBUG_LOGGERS = ("elasticsearch", "elastic_transport")


class Container:
    """
    Lazily wires the bundle's services.

    Args:
        config: Bundle configuration, loaded with :func:`load_config` when omitted
        client_factory: Callable building a client from ``hosts`` and extra options;
            defaults to ``elasticsearch.Elasticsearch``
    """

    def __init__(self, config: Optional[BundleConfig] = None, client_factory=None):
        self.config = config or load_config()
        self._client_factory = client_factory or self._create_client
        self._clients: Dict[str, Elasticsearch] = {}
        self._connections: Dict[str, Connection] = {}
        self._managers: Dict[str, Manager] = {}
        self._converter = Converter()

    @staticmethod
    def _create_client(hosts: List[str], **options) -> Elasticsearch:
        return Elasticsearch(hosts=hosts, **options)

    def manager_names(self) -> List[str]:
        return list(self.config.managers)

    def get_client(self, name: str = "default") -> Elasticsearch:
        if name not in self._clients:
            connection_config = self._get_connection_config(name)
            self._clients[name] = self._client_factory(
                connection_config.hosts, **connection_config.client
            )
        return self._clients[name]

    def get_connection(self, name: str = "default") -> Connection:
        if name not in self._connections:
            connection_config = self._get_connection_config(name)
            self._connections[name] = Connection(
                self.get_client(name), connection_config.to_connection_config()
            )
        return self._connections[name]

    def get_manager(self, name: str = "default") -> Manager:
        """
        Return the manager with the given name.

        Raises:
            ConfigurationError: No such manager is configured
        """
        if name in self._managers:
            return self._managers[name]

        manager_config = self.config.managers.get(name)
        if manager_config is None:
            raise ConfigurationError(f"Manager {name!r} is not configured")

        if manager_config.debug:
            for logger_name in DEBUG_LOGGERS:
                logging.getLogger(logger_name).setLevel(logging.DEBUG)

        manager = Manager(
            name,
            self.get_connection(manager_config.connection),
            MetadataCollector(manager_config.mappings),
            converter=self._converter,
            readonly=manager_config.readonly,
        )
        logger.debug("Created manager %s on connection %s", name, manager_config.connection)
        self._managers[name] = manager
        return manager

    def _get_connection_config(self, name: str):
        connection_config = self.config.connections.get(name)
        if connection_config is None:
            raise ConfigurationError(f"Connection {name!r} is not configured")
        return connection_config
