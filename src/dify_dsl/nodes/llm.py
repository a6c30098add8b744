""" LLM node: calls a chat/completion model with a prompt template. """

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.fields import FieldSpec, is_none
from .base import BaseNode


@dataclass
class LLMNode(BaseNode):
    title: str = "LLM"
    model: Dict[str, Any] = field(default_factory=dict)
    prompt_template: List[Dict[str, Any]] = field(default_factory=list)
    context: Optional[Dict[str, Any]] = None
    memory: Optional[Dict[str, Any]] = None
    vision: Optional[Dict[str, Any]] = None
    variables: Dict[str, Any] = field(default_factory=dict)
    structured_output_enabled: bool = False
    output_schema: Optional[Dict[str, Any]] = None

    node_type = "llm"
    payload_fields = (
        FieldSpec("model", "model", dict),
        FieldSpec("prompt_template", "prompt_template", list),
        FieldSpec("context", "context", dict, is_none),
        FieldSpec("memory", "memory", dict, is_none),
        FieldSpec("vision", "vision", dict, is_none),
        FieldSpec("variables", "variables", dict),
    )

    @classmethod
    def create(cls, id: str = "llm") -> "LLMNode":
        return cls(id)

    @classmethod
    def load_payload(cls, node_data: Dict[str, Any]) -> Dict[str, Any]:
        kwargs = super().load_payload(node_data)
        # Only a literal `true` turns structured output on; the schema is ignored otherwise.
        if node_data.get("structured_output_enabled") is True:
            schema = node_data.get("output_schema")
            if schema is None:
                schema = {}
            if isinstance(schema, dict):
                kwargs["structured_output_enabled"] = True
                kwargs["output_schema"] = copy.deepcopy(schema)
        return kwargs

    def node_data(self) -> Dict[str, Any]:
        data = super().node_data()
        if self.structured_output_enabled:
            data["structured_output_enabled"] = True
            if self.output_schema is not None:
                data["output_schema"] = copy.deepcopy(self.output_schema)
        return data

    def set_model(self, name: str, provider: str, mode: str = "chat",
                  completion_params: Optional[Dict[str, Any]] = None) -> None:
        self.model = {"mode": mode, "name": name, "provider": provider}
        if completion_params:
            self.model["completion_params"] = completion_params

    def add_prompt_message(self, role: str, text: str, edition_type: Optional[str] = None,
                           id: Optional[str] = None) -> "LLMNode":
        message = {"role": role, "text": text}
        if edition_type is not None:
            message["edition_type"] = edition_type
        if id is not None:
            message["id"] = id
        self.prompt_template.append(message)
        return self

    def set_system_prompt(self, prompt: str) -> None:
        """ Replace every system message with a single one at the front. """
        self.prompt_template = [m for m in self.prompt_template if m.get("role") != "system"]
        self.prompt_template.insert(0, {"role": "system", "text": prompt})

    def set_user_prompt(self, prompt: str) -> None:
        """ Replace every user message with a single one at the end. """
        self.prompt_template = [m for m in self.prompt_template if m.get("role") != "user"]
        self.prompt_template.append({"role": "user", "text": prompt})

    def enable_context(self, variable_selector: List[str]) -> "LLMNode":
        self.context = {"enabled": True, "variable_selector": list(variable_selector)}
        return self

    def disable_context(self) -> "LLMNode":
        self.context = {"enabled": False}
        return self

    def enable_vision(self, variable_selector: List[str], detail: str = "auto") -> "LLMNode":
        self.vision = {
            "enabled": True,
            "configs": {
                "detail": detail,
                "variable_selector": list(variable_selector),
            },
        }
        return self

    def disable_vision(self) -> "LLMNode":
        self.vision = {"enabled": False}
        return self

    def enable_structured_output(self, schema: Dict[str, Any]) -> "LLMNode":
        self.structured_output_enabled = True
        self.output_schema = schema
        return self

    def disable_structured_output(self) -> "LLMNode":
        self.structured_output_enabled = False
        self.output_schema = None
        return self
