"""
Shared data models for the bundle.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BulkOperation(str, Enum):
    """Operations accepted by the bulk queue."""

    INDEX = "index"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    @classmethod
    def values(cls) -> List[str]:
        return [op.value for op in cls]


class DocumentMetadata(BaseModel):
    """Mapping metadata collected for a single document class."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    type: str
    document_class: type
    properties: Dict[str, Any] = Field(default_factory=dict)
    aliases: Dict[str, str] = Field(default_factory=dict)  # attribute -> stored name

    def get_mapping(self) -> Dict[str, Any]:
        return {"properties": self.properties}


class SearchResultInfo(BaseModel):
    """Envelope fields of a search response, without the hits."""

    total: int = 0
    max_score: Optional[float] = None
    took: Optional[int] = None
    timed_out: bool = False
    scroll_id: Optional[str] = None
    aggregations: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_response(cls, response: Dict[str, Any]) -> "SearchResultInfo":
        hits = response.get("hits", {})
        total = hits.get("total", 0)
        # Engine versions differ: a plain integer or {"value": n, "relation": ...}
        if isinstance(total, dict):
            total = total.get("value", 0)
        return cls(
            total=total,
            max_score=hits.get("max_score"),
            took=response.get("took"),
            timed_out=response.get("timed_out", False),
            scroll_id=response.get("_scroll_id"),
            aggregations=response.get("aggregations", {}),
        )
