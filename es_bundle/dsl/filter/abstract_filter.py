"""
Base for builders that carry a set of filters.
"""

from typing import Any, Dict, List

from es_bundle.dsl.bool import Bool
from es_bundle.dsl.builder import BuilderInterface


class AbstractFilter(BuilderInterface):
    """Holds filters in a bool and renders them as one filter clause."""

    def __init__(self):
        self._filters = Bool()

    def add_filter(self, filter_: BuilderInterface, bool_type: str = Bool.MUST) -> "AbstractFilter":
        self._filters.add(filter_, bool_type)
        return self

    def has_filters(self) -> bool:
        return not self._filters.is_empty()

    def get_filters(self, bool_type: str = None) -> List[BuilderInterface]:
        return self._filters.get_clauses(bool_type)

    def set_filter_parameters(self, parameters: Dict[str, Any]) -> None:
        for name, value in parameters.items():
            self._filters.add_parameter(name, value)

    def to_dict(self) -> Dict[str, Any]:
        return self._filters.collapse()
