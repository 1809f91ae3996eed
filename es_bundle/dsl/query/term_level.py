"""
Term level queries: exact values, not analyzed.
"""

from typing import Any, Dict, List, Optional

from es_bundle.dsl.builder import BuilderInterface, ParametersMixin


class MatchAllQuery(BuilderInterface, ParametersMixin):
    def __init__(self, parameters: Optional[Dict[str, Any]] = None):
        self._init_parameters(parameters)

    def get_type(self) -> str:
        return "match_all"

    def to_dict(self) -> Dict[str, Any]:
        return self.process_dict({})


class TermQuery(BuilderInterface, ParametersMixin):
    def __init__(self, field: str, value: Any, parameters: Optional[Dict[str, Any]] = None):
        self.field = field
        self.value = value
        self._init_parameters(parameters)

    def get_type(self) -> str:
        return "term"

    def to_dict(self) -> Dict[str, Any]:
        # Short form unless there are options to carry
        if not self.get_parameters():
            return {self.field: self.value}
        return {self.field: self.process_dict({"value": self.value})}


class TermsQuery(BuilderInterface, ParametersMixin):
    def __init__(self, field: str, values: List[Any], parameters: Optional[Dict[str, Any]] = None):
        self.field = field
        self.values = list(values)
        self._init_parameters(parameters)

    def get_type(self) -> str:
        return "terms"

    def to_dict(self) -> Dict[str, Any]:
        return self.process_dict({self.field: self.values})


class RangeQuery(BuilderInterface, ParametersMixin):
    """
    Range over a field.

    Bounds are passed as keywords: ``RangeQuery("price", gte=10, lt=20)``.
    """

    BOUNDS = ("gt", "gte", "lt", "lte")

    def __init__(self, field: str, parameters: Optional[Dict[str, Any]] = None, **ranges: Any):
        unknown = set(ranges) - set(self.BOUNDS)
        if unknown:
            raise ValueError(f"Unknown range bounds: {', '.join(sorted(unknown))}")
        self.field = field
        self.ranges = ranges
        self._init_parameters(parameters)

    def get_type(self) -> str:
        return "range"

    def to_dict(self) -> Dict[str, Any]:
        return {self.field: self.process_dict(dict(self.ranges))}


class PrefixQuery(BuilderInterface, ParametersMixin):
    def __init__(self, field: str, value: str, parameters: Optional[Dict[str, Any]] = None):
        self.field = field
        self.value = value
        self._init_parameters(parameters)

    def get_type(self) -> str:
        return "prefix"

    def to_dict(self) -> Dict[str, Any]:
        return {self.field: self.process_dict({"value": self.value})}


class WildcardQuery(BuilderInterface, ParametersMixin):
    def __init__(self, field: str, value: str, parameters: Optional[Dict[str, Any]] = None):
        self.field = field
        self.value = value
        self._init_parameters(parameters)

    def get_type(self) -> str:
        return "wildcard"

    def to_dict(self) -> Dict[str, Any]:
        return {self.field: self.process_dict({"value": self.value})}


class FuzzyQuery(BuilderInterface, ParametersMixin):
    def __init__(self, field: str, value: str, parameters: Optional[Dict[str, Any]] = None):
        self.field = field
        self.value = value
        self._init_parameters(parameters)

    def get_type(self) -> str:
        return "fuzzy"

    def to_dict(self) -> Dict[str, Any]:
        return {self.field: self.process_dict({"value": self.value})}


class IdsQuery(BuilderInterface, ParametersMixin):
    def __init__(self, values: List[str], parameters: Optional[Dict[str, Any]] = None):
        self.values = list(values)
        self._init_parameters(parameters)

    def get_type(self) -> str:
        return "ids"

    def to_dict(self) -> Dict[str, Any]:
        return self.process_dict({"values": self.values})
