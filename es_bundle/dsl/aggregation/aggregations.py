"""
Aggregations.

Bucketing aggregations may carry child aggregations; metric aggregations
compute a value over a field.
"""

from typing import Any, Dict, List, Optional, Union

from es_bundle.dsl.builder import BuilderInterface, ParametersMixin
from es_bundle.dsl.sort import Sort, Sorts


class AbstractAggregation(BuilderInterface, ParametersMixin):
    """
    Named aggregation.

    Args:
        name: Key under which the result is returned
        field: Field to aggregate on, if the aggregation uses one
        parameters: Extra aggregation options
    """

    SUPPORTS_NESTING = True

    def __init__(self, name: str, field: Optional[str] = None, parameters: Optional[Dict[str, Any]] = None):
        self.name = name
        self.field = field
        self._aggregations: Dict[str, "AbstractAggregation"] = {}
        self._init_parameters(parameters)

    def get_name(self) -> str:
        return self.name

    def add_aggregation(self, aggregation: "AbstractAggregation") -> "AbstractAggregation":
        if not self.SUPPORTS_NESTING:
            raise ValueError(f"{self.get_type()!r} aggregation does not support sub-aggregations")
        self._aggregations[aggregation.get_name()] = aggregation
        return self

    def get_aggregations(self) -> List["AbstractAggregation"]:
        return list(self._aggregations.values())

    def get_body(self) -> Dict[str, Any]:
        """Return the aggregation body without the type key."""
        body: Dict[str, Any] = {}
        if self.field is not None:
            body["field"] = self.field
        return self.process_dict(body)

    def to_dict(self) -> Dict[str, Any]:
        output: Dict[str, Any] = {self.get_type(): self.get_body()}
        if self._aggregations:
            output["aggregations"] = {
                name: aggregation.to_dict() for name, aggregation in self._aggregations.items()
            }
        return output


class _MetricAggregation(AbstractAggregation):
    SUPPORTS_NESTING = False


class TermsAggregation(AbstractAggregation):
    def get_type(self) -> str:
        return "terms"


class RangeAggregation(AbstractAggregation):
    def __init__(
        self,
        name: str,
        field: str,
        ranges: Optional[List[Dict[str, Any]]] = None,
        keyed: bool = False,
        parameters: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(name, field, parameters)
        self.ranges = list(ranges or [])
        self.keyed = keyed

    def add_range(self, from_: Any = None, to: Any = None, key: Optional[str] = None) -> "RangeAggregation":
        range_: Dict[str, Any] = {}
        if from_ is not None:
            range_["from"] = from_
        if to is not None:
            range_["to"] = to
        if key is not None:
            range_["key"] = key
        self.ranges.append(range_)
        return self

    def get_type(self) -> str:
        return "range"

    def get_body(self) -> Dict[str, Any]:
        body = super().get_body()
        body["ranges"] = self.ranges
        if self.keyed:
            body["keyed"] = True
        return body


class DateHistogramAggregation(AbstractAggregation):
    """
    Buckets documents by date.

    Calendar units (``month``, ``1d`` ...) render as ``calendar_interval``,
    any other interval (``30m``, ``7d`` ...) as ``fixed_interval``.
    """

    CALENDAR_INTERVALS = (
        "minute", "1m", "hour", "1h", "day", "1d", "week", "1w",
        "month", "1M", "quarter", "1q", "year", "1y",
    )

    def __init__(self, name: str, field: str, interval: str, parameters: Optional[Dict[str, Any]] = None):
        super().__init__(name, field, parameters)
        self.interval = interval

    def get_type(self) -> str:
        return "date_histogram"

    def get_body(self) -> Dict[str, Any]:
        key = "calendar_interval" if self.interval in self.CALENDAR_INTERVALS else "fixed_interval"
        return {**super().get_body(), key: self.interval}


class FilterAggregation(AbstractAggregation):
    """Single bucket of documents matching a filter."""

    def __init__(self, name: str, filter_: BuilderInterface):
        super().__init__(name)
        self.filter = filter_

    def get_type(self) -> str:
        return "filter"

    def get_body(self) -> Dict[str, Any]:
        return self.filter.to_clause()


class NestedAggregation(AbstractAggregation):
    def __init__(self, name: str, path: str):
        super().__init__(name)
        self.path = path

    def get_type(self) -> str:
        return "nested"

    def get_body(self) -> Dict[str, Any]:
        return {"path": self.path}


class GlobalAggregation(AbstractAggregation):
    def __init__(self, name: str):
        super().__init__(name)

    def get_type(self) -> str:
        return "global"

    def get_body(self) -> Dict[str, Any]:
        return {}


class AvgAggregation(_MetricAggregation):
    def get_type(self) -> str:
        return "avg"


class SumAggregation(_MetricAggregation):
    def get_type(self) -> str:
        return "sum"


class MinAggregation(_MetricAggregation):
    def get_type(self) -> str:
        return "min"


class MaxAggregation(_MetricAggregation):
    def get_type(self) -> str:
        return "max"


class StatsAggregation(_MetricAggregation):
    def get_type(self) -> str:
        return "stats"


class ValueCountAggregation(_MetricAggregation):
    def get_type(self) -> str:
        return "value_count"


class CardinalityAggregation(_MetricAggregation):
    def get_type(self) -> str:
        return "cardinality"


class TopHitsAggregation(_MetricAggregation):
    """Top matching documents per bucket."""

    def __init__(
        self,
        name: str,
        size: Optional[int] = None,
        from_: Optional[int] = None,
        sort: Optional[Union[Sort, Sorts]] = None,
        parameters: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(name, parameters=parameters)
        self.size = size
        self.from_ = from_
        self.sort = sort

    def get_type(self) -> str:
        return "top_hits"

    def get_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {}
        if self.size is not None:
            body["size"] = self.size
        if self.from_ is not None:
            body["from"] = self.from_
        if self.sort is not None:
            body["sort"] = self.sort.to_dict() if isinstance(self.sort, Sorts) else [self.sort.to_clause()]
        return self.process_dict(body)
