"""Manager and repositories."""

from es_bundle.orm.manager import Manager
from es_bundle.orm.repository import Repository
from es_bundle.orm.result import (
    RESULTS_ARRAY,
    RESULTS_OBJECT,
    RESULTS_RAW,
    DocumentIterator,
)

__all__ = [
    "Manager",
    "Repository",
    "DocumentIterator",
    "RESULTS_ARRAY",
    "RESULTS_OBJECT",
    "RESULTS_RAW",
]
