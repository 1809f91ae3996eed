"""
Type mapping utilities for converting Python annotations to engine field types.
"""

import inspect
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from types import UnionType
from typing import Any, Dict, List, Literal, Optional, Tuple, Type, Union, get_args, get_origin
from uuid import UUID

from pydantic import BaseModel


class TypeMapper:
    """Maps Python types to Elasticsearch field types."""

    # Checked in order with issubclass: bool before int, datetime before date
    PYTHON_TYPE_MAP: Dict[Type, str] = {
        str: "text",
        bool: "boolean",
        int: "integer",
        float: "float",
        Decimal: "double",
        datetime: "date",
        date: "date",
        time: "keyword",
        UUID: "keyword",
        bytes: "binary",
        dict: "object",
    }

    SEQUENCE_ORIGINS = (list, List, set, frozenset, tuple, Tuple)

    @classmethod
    def unwrap_optional(cls, annotation: Any) -> Any:
        """Strip ``None`` from ``Optional[X]`` / ``X | None``."""
        origin = get_origin(annotation)
        if origin is Union or origin is UnionType:
            args = [arg for arg in get_args(annotation) if arg is not type(None)]
            if len(args) == 1:
                return args[0]
        return annotation

    @classmethod
    def split_sequence(cls, annotation: Any) -> Tuple[Any, bool]:
        """
        Split a sequence annotation into its item type.

        Args:
            annotation: Field annotation

        Returns:
            Tuple of (item type, whether the annotation was a sequence)
        """
        annotation = cls.unwrap_optional(annotation)
        origin = get_origin(annotation)
        if origin in cls.SEQUENCE_ORIGINS:
            args = [arg for arg in get_args(annotation) if arg is not Ellipsis]
            item = args[0] if args else Any
            return cls.unwrap_optional(item), True
        return annotation, False

    @staticmethod
    def is_model(annotation: Any) -> bool:
        return inspect.isclass(annotation) and issubclass(annotation, BaseModel)

    @classmethod
    def get_es_type(cls, annotation: Any) -> Optional[str]:
        """
        Get the Elasticsearch type for a scalar annotation.

        Args:
            annotation: Python type (already unwrapped from Optional / list)

        Returns:
            Engine type name, or None when it cannot be inferred
        """
        if get_origin(annotation) is Literal:
            return "keyword"
        if get_origin(annotation) in (dict, Dict):
            return "object"
        if inspect.isclass(annotation):
            if issubclass(annotation, Enum):
                return "keyword"
            for python_type, es_type in cls.PYTHON_TYPE_MAP.items():
                if issubclass(annotation, python_type):
                    return es_type
        return None
