"""
Base building blocks for the query DSL.

Every DSL object knows its engine type name and can render its body as a
plain dictionary. Containers wrap a child as ``{child.get_type(): child.to_dict()}``.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class BuilderInterface(ABC):
    """Object that serializes into a part of a search request."""

    @abstractmethod
    def get_type(self) -> str:
        """Return the engine name of this clause (e.g. ``term``, ``bool``)."""

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Return the clause body."""

    def to_clause(self) -> Dict[str, Any]:
        """Return the body keyed by the clause type."""
        return {self.get_type(): self.to_dict()}


class ParametersMixin:
    """Holds optional clause parameters (``boost``, ``analyzer`` ...)."""

    _parameters: Dict[str, Any]

    def _init_parameters(self, parameters: Dict[str, Any] = None) -> None:
        self._parameters = dict(parameters or {})

    def has_parameter(self, name: str) -> bool:
        return name in self._parameters

    def get_parameter(self, name: str, default: Any = None) -> Any:
        return self._parameters.get(name, default)

    def add_parameter(self, name: str, value: Any) -> None:
        self._parameters[name] = value

    def remove_parameter(self, name: str) -> None:
        self._parameters.pop(name, None)

    def get_parameters(self) -> Dict[str, Any]:
        return dict(self._parameters)

    def set_parameters(self, parameters: Dict[str, Any]) -> None:
        self._parameters = dict(parameters)

    def process_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Merge parameters into ``data``; parameters win on key clashes."""
        return {**data, **self._parameters}
