"""
Queries wrapping other queries or filters.
"""

from typing import Any, Dict, Optional

from es_bundle.dsl.builder import BuilderInterface, ParametersMixin


class ConstantScoreQuery(BuilderInterface, ParametersMixin):
    """Gives every document matching the inner filter the same score."""

    def __init__(self, filter_: BuilderInterface, parameters: Optional[Dict[str, Any]] = None):
        self.filter = filter_
        self._init_parameters(parameters)

    def get_type(self) -> str:
        return "constant_score"

    def to_dict(self) -> Dict[str, Any]:
        return self.process_dict({"filter": self.filter.to_clause()})


class NestedQuery(BuilderInterface, ParametersMixin):
    """Runs ``query`` against nested objects stored under ``path``."""

    def __init__(self, path: str, query: BuilderInterface, parameters: Optional[Dict[str, Any]] = None):
        self.path = path
        self.query = query
        self._init_parameters(parameters)

    def get_type(self) -> str:
        return "nested"

    def to_dict(self) -> Dict[str, Any]:
        return self.process_dict({"path": self.path, "query": self.query.to_clause()})
