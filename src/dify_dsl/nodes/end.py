""" End node: binds workflow outputs to upstream variables (workflow mode). """

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..core.fields import FieldSpec
from .base import BaseNode


@dataclass
class EndNode(BaseNode):
    title: str = "结束"
    outputs: List[Dict[str, Any]] = field(default_factory=list)

    node_type = "end"
    payload_fields = (
        FieldSpec("outputs", "outputs", list),
    )

    @classmethod
    def create(cls, id: str = "end") -> "EndNode":
        return cls(id)

    def add_output(self, variable: str, value_selector: List[str]) -> "EndNode":
        self.outputs.append({
            "variable": variable,
            "value_selector": list(value_selector),
        })
        return self
