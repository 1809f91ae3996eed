"""
Bool clause shared by the query and filter containers.
"""

from typing import Any, Dict, List, Optional

from es_bundle.dsl.builder import BuilderInterface, ParametersMixin


class Bool(BuilderInterface, ParametersMixin):
    """
    Groups clauses under ``must``, ``must_not`` and ``should``.

    Used both for queries and for filters; the container decides how an
    irrelevant bool (a single ``must`` clause) collapses.
    """

    MUST = "must"
    MUST_NOT = "must_not"
    SHOULD = "should"
    FILTER = "filter"

    BOOL_TYPES = (MUST, MUST_NOT, SHOULD, FILTER)

    def __init__(self, parameters: Optional[Dict[str, Any]] = None):
        self._clauses: Dict[str, List[BuilderInterface]] = {}
        self._init_parameters(parameters)

    def add(self, builder: BuilderInterface, bool_type: str = MUST) -> "Bool":
        """
        Add a clause.

        Args:
            builder: Query or filter to add
            bool_type: One of ``must``, ``must_not``, ``should``, ``filter``

        Returns:
            The bool itself, for chaining

        Raises:
            ValueError: Unknown bool type
        """
        if bool_type not in self.BOOL_TYPES:
            raise ValueError(
                f"Bool type {bool_type!r} is not supported, "
                f"expected one of {', '.join(self.BOOL_TYPES)}"
            )
        self._clauses.setdefault(bool_type, []).append(builder)
        return self

    def get_clauses(self, bool_type: Optional[str] = None) -> List[BuilderInterface]:
        if bool_type is not None:
            return list(self._clauses.get(bool_type, []))
        return [clause for clauses in self._clauses.values() for clause in clauses]

    def is_empty(self) -> bool:
        return not any(self._clauses.values())

    def is_relevant(self) -> bool:
        """Return False when the bool only wraps a single ``must`` clause."""
        if self._parameters:
            return True
        if set(self._clauses) != {self.MUST}:
            return not self.is_empty()
        return len(self._clauses[self.MUST]) > 1

    def get_type(self) -> str:
        return "bool"

    def to_dict(self) -> Dict[str, Any]:
        output: Dict[str, Any] = {}
        for bool_type, clauses in self._clauses.items():
            output[bool_type] = [clause.to_clause() for clause in clauses]
        return self.process_dict(output)

    def collapse(self) -> Dict[str, Any]:
        """
        Render the bool as a complete clause, skipping the wrapper if possible.

        An empty bool matches everything; a bool with one ``must`` clause and no
        parameters renders as that clause alone.
        """
        if self.is_empty() and not self._parameters:
            return {"match_all": {}}
        if not self.is_relevant():
            return self._clauses[self.MUST][0].to_clause()
        return self.to_clause()
