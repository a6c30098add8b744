""" Code node: runs a Python or JavaScript snippet over upstream variables. """

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.fields import FieldSpec
from .base import BaseNode


@dataclass
class CodeNode(BaseNode):
    title: str = "代码执行"
    code_language: str = "python3"
    code: str = ""
    variables: List[Dict[str, Any]] = field(default_factory=list)
    outputs: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    node_type = "code"
    payload_fields = (
        FieldSpec("code_language", "code_language", str),
        FieldSpec("code", "code", str),
        FieldSpec("variables", "variables", list),
        FieldSpec("outputs", "outputs", dict),
    )

    @classmethod
    def create(cls, id: str = "code") -> "CodeNode":
        return cls(id)

    def add_variable(self, variable: str, value_selector: List[str]) -> "CodeNode":
        self.variables.append({
            "variable": variable,
            "value_selector": list(value_selector),
        })
        return self

    def add_output(self, name: str, type: str,
                   children: Optional[Dict[str, Any]] = None) -> "CodeNode":
        output: Dict[str, Any] = {"type": type}
        if children is not None:
            output["children"] = children
        self.outputs[name] = output
        return self
