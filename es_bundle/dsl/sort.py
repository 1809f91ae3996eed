"""
Sorting.
"""

from typing import Any, Dict, List, Optional

from es_bundle.dsl.builder import BuilderInterface, ParametersMixin


class Sort(BuilderInterface, ParametersMixin):
    """
    Sort on a single field.

    Args:
        field: Field name, or ``_score`` / ``_doc``
        order: ``asc`` or ``desc``
        parameters: Extra options (``mode``, ``missing``, ``nested_path`` ...)
    """

    ORDER_ASC = "asc"
    ORDER_DESC = "desc"

    def __init__(self, field: str, order: str = ORDER_ASC, parameters: Optional[Dict[str, Any]] = None):
        order = order.lower()
        if order not in (self.ORDER_ASC, self.ORDER_DESC):
            raise ValueError(f"Sort order must be 'asc' or 'desc', got {order!r}")
        self.field = field
        self.order = order
        self._init_parameters(parameters)

    def get_type(self) -> str:
        return self.field

    def to_dict(self) -> Dict[str, Any]:
        return self.process_dict({"order": self.order})


class Sorts(BuilderInterface):
    """Ordered collection of sorts; later sorts break ties of earlier ones."""

    def __init__(self):
        self._sorts: List[Sort] = []

    def add_sort(self, sort: Sort) -> "Sorts":
        self._sorts.append(sort)
        return self

    def is_relevant(self) -> bool:
        return bool(self._sorts)

    def get_type(self) -> str:
        return "sort"

    def to_dict(self) -> List[Dict[str, Any]]:  # type: ignore[override]
        return [sort.to_clause() for sort in self._sorts]
