"""
Container query.
"""

from typing import Any, Dict, Optional

from es_bundle.dsl.bool import Bool
from es_bundle.dsl.builder import BuilderInterface


class Query(BuilderInterface):
    """
    Collects queries into a bool query.

    ``to_dict()`` returns a complete clause rather than a bare body, so a
    container holding a single ``must`` query renders as that query.
    """

    def __init__(self):
        self._bool_query = Bool()

    def add_query(
        self,
        query: BuilderInterface,
        bool_type: str = Bool.MUST,
        parameters: Optional[Dict[str, Any]] = None,
    ) -> "Query":
        """
        Add a query to the container.

        Args:
            query: Query to add
            bool_type: Bool section to place it in
            parameters: Bool parameters to merge (``minimum_should_match``, ``boost``)

        Returns:
            The container, for chaining
        """
        self._bool_query.add(query, bool_type)
        if parameters:
            self.set_bool_parameters(parameters)
        return self

    def has_queries(self) -> bool:
        return not self._bool_query.is_empty()

    def get_bool_query(self) -> Bool:
        return self._bool_query

    def set_bool_parameters(self, parameters: Dict[str, Any]) -> None:
        for name, value in parameters.items():
            self._bool_query.add_parameter(name, value)

    def get_type(self) -> str:
        return "bool"

    def to_dict(self) -> Dict[str, Any]:
        return self._bool_query.collapse()

    def to_clause(self) -> Dict[str, Any]:
        return self.to_dict()
