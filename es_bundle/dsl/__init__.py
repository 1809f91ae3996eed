"""
Query builder DSL.

Builders render to plain dictionaries in the engine's JSON query format.
"""

from es_bundle.dsl.bool import Bool
from es_bundle.dsl.builder import BuilderInterface, ParametersMixin
from es_bundle.dsl.highlight import Highlight
from es_bundle.dsl.search import Search
from es_bundle.dsl.sort import Sort, Sorts

__all__ = [
    "Bool",
    "BuilderInterface",
    "Highlight",
    "ParametersMixin",
    "Search",
    "Sort",
    "Sorts",
]
