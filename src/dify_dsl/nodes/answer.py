""" Answer node: streams a templated reply back to the user (chat modes). """

from dataclasses import dataclass, field
from typing import Any, Dict

from ..core.fields import FieldSpec
from .base import BaseNode


@dataclass
class AnswerNode(BaseNode):
    title: str = "直接回复"
    # Template placeholders like {{#llm.text#}} are kept as opaque text.
    answer: str = ""
    variables: Dict[str, Any] = field(default_factory=dict)

    node_type = "answer"
    payload_fields = (
        FieldSpec("answer", "answer", str),
        FieldSpec("variables", "variables", dict),
    )

    @classmethod
    def create(cls, id: str = "answer", answer: str = "") -> "AnswerNode":
        return cls(id, answer=answer)
