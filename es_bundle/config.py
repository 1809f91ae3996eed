"""
Bundle configuration.

Example ``es_bundle.yaml``::

    connections:
      default:
        hosts: ["http://127.0.0.1:9200"]
        index_name: acme
        settings:
          number_of_shards: 1
          number_of_replicas: 0
    managers:
      default:
        connection: default
        mappings:
          - acme.documents

Environment variables (a ``.env`` file is honoured):
  - ES_BUNDLE_CONFIG: path of the YAML file
  - ES_HOST: overrides the hosts of every connection
  - ES_INDEX: index name of the default connection when no file is used
"""

import logging
import os
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, model_validator

from es_bundle.client.connection import DEFAULT_TYPE_FIELD
from es_bundle.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_HOST = "http://127.0.0.1:9200"
DEFAULT_INDEX = "es_bundle"


class ConnectionConfig(BaseModel):
    """Connection to a single index."""

    hosts: List[str] = Field(default_factory=lambda: [DEFAULT_HOST])
    index_name: str
    settings: Dict[str, Any] = Field(default_factory=dict)
    analysis: Dict[str, Any] = Field(default_factory=dict)
    type_field: str = DEFAULT_TYPE_FIELD
    client: Dict[str, Any] = Field(default_factory=dict, description="Extra Elasticsearch client options")

    def to_connection_config(self) -> Dict[str, Any]:
        """Return the config dict expected by :class:`es_bundle.client.Connection`."""
        settings = dict(self.settings)
        if self.analysis:
            settings["analysis"] = self.analysis
        body: Dict[str, Any] = {}
        if settings:
            body["settings"] = settings
        return {"index": self.index_name, "body": body, "type_field": self.type_field}


class ManagerConfig(BaseModel):
    connection: str = "default"
    debug: bool = False
    readonly: bool = False
    mappings: List[str] = Field(default_factory=list)


class BundleConfig(BaseModel):
    connections: Dict[str, ConnectionConfig] = Field(default_factory=dict)
    managers: Dict[str, ManagerConfig] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_references(self) -> "BundleConfig":
        for name, manager in self.managers.items():
            if manager.connection not in self.connections:
                raise ValueError(
                    f"Manager {name!r} uses undefined connection {manager.connection!r}"
                )
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BundleConfig":
        try:
            return cls.model_validate(data or {})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid bundle configuration: {e}") from e


def load_config(path: Optional[str] = None, **overrides: Any) -> BundleConfig:
    """
    Load the bundle configuration.

    Resolution order (later wins):
      1. YAML file (``path`` or ``ES_BUNDLE_CONFIG``), or a single default
         connection and manager built from ``ES_INDEX`` when there is none
      2. ``ES_HOST`` for the hosts of every connection
      3. Keyword overrides for top-level keys (``connections``, ``managers``)

    Raises:
        ConfigurationError: File is missing or invalid
    """
    load_dotenv()

    path = path or os.getenv("ES_BUNDLE_CONFIG")
    if path:
        if not os.path.exists(path):
            raise ConfigurationError(f"Config file not found: {path}")
        with open(path, "r") as file:
            data = yaml.safe_load(file) or {}
        logger.debug("Loaded bundle config from %s", path)
    else:
        data = {
            "connections": {"default": {"index_name": os.getenv("ES_INDEX", DEFAULT_INDEX)}},
            "managers": {"default": {"connection": "default"}},
        }

    if not isinstance(data, dict):
        raise ConfigurationError("Bundle configuration must be a mapping")

    host = os.getenv("ES_HOST")
    if host:
        for connection in data.get("connections", {}).values():
            connection["hosts"] = [h.strip() for h in host.split(",") if h.strip()]

    for key, value in overrides.items():
        if key not in BundleConfig.model_fields:
            raise ConfigurationError(f"Unknown config key: {key!r}")
        data[key] = value

    return BundleConfig.from_dict(data)
