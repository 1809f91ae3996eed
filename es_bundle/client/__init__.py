"""Connection wrapper around the search client."""

from es_bundle.client.connection import Connection

__all__ = ["Connection"]
