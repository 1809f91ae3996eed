"""
Leaf filters.

Filters render in the filter context of the engine: they decide whether a
document matches and do not contribute to scoring.
"""

from typing import Any, Dict, List, Optional

from es_bundle.dsl.bool import Bool
from es_bundle.dsl.builder import BuilderInterface, ParametersMixin


class TermFilter(BuilderInterface, ParametersMixin):
    """Exact value match on a field."""

    def __init__(self, field: str, value: Any, parameters: Optional[Dict[str, Any]] = None):
        self.field = field
        self.value = value
        self._init_parameters(parameters)

    def get_type(self) -> str:
        return "term"

    def to_dict(self) -> Dict[str, Any]:
        return self.process_dict({self.field: self.value})


class TermsFilter(BuilderInterface, ParametersMixin):
    """Match any of the given values."""

    def __init__(self, field: str, values: List[Any], parameters: Optional[Dict[str, Any]] = None):
        self.field = field
        self.values = list(values)
        self._init_parameters(parameters)

    def get_type(self) -> str:
        return "terms"

    def to_dict(self) -> Dict[str, Any]:
        return self.process_dict({self.field: self.values})


class RangeFilter(BuilderInterface, ParametersMixin):
    """Bounded range on a field (``gt``, ``gte``, ``lt``, ``lte``)."""

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
        return self.process_dict({self.field: self.ranges})


class ExistsFilter(BuilderInterface):
    def __init__(self, field: str):
        self.field = field

    def get_type(self) -> str:
        return "exists"

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.field}


class MissingFilter(BuilderInterface, ParametersMixin):
    """
    Documents where the field has no value.

    Renders as a ``bool`` excluding an ``exists`` clause on the field.
    """

    def __init__(self, field: str, parameters: Optional[Dict[str, Any]] = None):
        self.field = field
        self._init_parameters(parameters)

    def get_type(self) -> str:
        return "missing"

    def to_dict(self) -> Dict[str, Any]:
        return self.process_dict({"field": self.field})

    def to_clause(self) -> Dict[str, Any]:
        return {"bool": {"must_not": [{"exists": self.to_dict()}]}}


class IdsFilter(BuilderInterface, ParametersMixin):
    def __init__(self, values: List[str], parameters: Optional[Dict[str, Any]] = None):
        self.values = list(values)
        self._init_parameters(parameters)

    def get_type(self) -> str:
        return "ids"

    def to_dict(self) -> Dict[str, Any]:
        return self.process_dict({"values": self.values})


class PrefixFilter(BuilderInterface, ParametersMixin):
    def __init__(self, field: str, value: str, parameters: Optional[Dict[str, Any]] = None):
        self.field = field
        self.value = value
        self._init_parameters(parameters)

    def get_type(self) -> str:
        return "prefix"

    def to_dict(self) -> Dict[str, Any]:
        return self.process_dict({self.field: self.value})


class NestedFilter(BuilderInterface, ParametersMixin):
    """Applies a filter to nested objects under ``path``."""

    def __init__(self, path: str, filter_: BuilderInterface, parameters: Optional[Dict[str, Any]] = None):
        self.path = path
        self.filter = filter_
        self._init_parameters(parameters)

    def get_type(self) -> str:
        return "nested"

    def to_dict(self) -> Dict[str, Any]:
        return self.process_dict({"path": self.path, "filter": self.filter.to_clause()})


class QueryFilter(BuilderInterface, ParametersMixin):
    """Wraps a query so it can be used where a filter is expected."""

    def __init__(self, query: BuilderInterface, parameters: Optional[Dict[str, Any]] = None):
        self.query = query
        self._init_parameters(parameters)

    def get_type(self) -> str:
        return "query"

    def to_dict(self) -> Dict[str, Any]:
        return self.process_dict(self.query.to_clause())


class BoolFilter(Bool):
    """Standalone bool filter for nesting filter groups."""

    def add_to_bool(self, filter_: BuilderInterface, bool_type: str = Bool.MUST) -> "BoolFilter":
        self.add(filter_, bool_type)
        return self
