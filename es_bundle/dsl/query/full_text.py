"""
Full text queries: analyzed before matching.
"""

from typing import Any, Dict, List, Optional

from es_bundle.dsl.builder import BuilderInterface, ParametersMixin


class MatchQuery(BuilderInterface, ParametersMixin):
    """
    Analyzed match on a single field.

    Args:
        field: Field to search
        query: Text to match
        parameters: Extra options (``operator``, ``fuzziness``, ``analyzer`` ...)
    """

    def __init__(self, field: str, query: Any, parameters: Optional[Dict[str, Any]] = None):
        self.field = field
        self.query = query
        self._init_parameters(parameters)

    def get_type(self) -> str:
        return "match"

    def to_dict(self) -> Dict[str, Any]:
        return {self.field: self.process_dict({"query": self.query})}


class MultiMatchQuery(BuilderInterface, ParametersMixin):
    def __init__(self, fields: List[str], query: Any, parameters: Optional[Dict[str, Any]] = None):
        self.fields = list(fields)
        self.query = query
        self._init_parameters(parameters)

    def get_type(self) -> str:
        return "multi_match"

    def to_dict(self) -> Dict[str, Any]:
        return self.process_dict({"query": self.query, "fields": self.fields})


class QueryStringQuery(BuilderInterface, ParametersMixin):
    """Lucene query string syntax."""

    def __init__(self, query: str, parameters: Optional[Dict[str, Any]] = None):
        self.query = query
        self._init_parameters(parameters)

    def get_type(self) -> str:
        return "query_string"

    def to_dict(self) -> Dict[str, Any]:
        return self.process_dict({"query": self.query})
