"""
Result highlighting.
"""

from typing import Any, Dict, List, Optional

from es_bundle.dsl.builder import BuilderInterface, ParametersMixin


class Highlight(BuilderInterface, ParametersMixin):
    def __init__(self, parameters: Optional[Dict[str, Any]] = None):
        self._fields: Dict[str, Dict[str, Any]] = {}
        self._pre_tags: Optional[List[str]] = None
        self._post_tags: Optional[List[str]] = None
        self._init_parameters(parameters)

    def add_field(self, name: str, **params: Any) -> "Highlight":
        self._fields[name] = params
        return self

    def set_tags(self, pre_tags: List[str], post_tags: List[str]) -> "Highlight":
        self._pre_tags = list(pre_tags)
        self._post_tags = list(post_tags)
        return self

    def get_type(self) -> str:
        return "highlight"

    def to_dict(self) -> Dict[str, Any]:
        output: Dict[str, Any] = {"fields": {name: params for name, params in self._fields.items()}}
        if self._pre_tags is not None:
            output["pre_tags"] = self._pre_tags
            output["post_tags"] = self._post_tags
        return self.process_dict(output)
