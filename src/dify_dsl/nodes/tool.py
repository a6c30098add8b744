""" Tool node: calls a builtin, API or workflow tool from a provider. """

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from ..core.fields import FieldSpec, is_false, is_none
from .base import BaseNode


@dataclass
class ToolNode(BaseNode):
    title: str = "工具"
    provider_id: str = ""
    provider_name: str = ""
    provider_type: str = ""
    tool_name: str = ""
    tool_label: str = ""
    tool_description: str = ""
    tool_parameters: Dict[str, Any] = field(default_factory=dict)
    param_schemas: Union[Dict[str, Any], List[Any]] = field(default_factory=dict)
    tool_configurations: Dict[str, Any] = field(default_factory=dict)
    is_team_authorization: bool = False
    retry_config: Optional[Dict[str, Any]] = None

    node_type = "tool"
    payload_fields = (
        FieldSpec("provider_id", "provider_id", str),
        FieldSpec("provider_name", "provider_name", str),
        FieldSpec("provider_type", "provider_type", str),
        FieldSpec("tool_name", "tool_name", str),
        FieldSpec("tool_label", "tool_label", str),
        FieldSpec("tool_description", "tool_description", str),
        FieldSpec("tool_parameters", "tool_parameters", dict),
        FieldSpec("paramSchemas", "param_schemas", (dict, list)),
        FieldSpec("tool_configurations", "tool_configurations", dict),
        FieldSpec("is_team_authorization", "is_team_authorization", bool, is_false),
        FieldSpec("retry_config", "retry_config", dict, is_none),
    )

    def __post_init__(self):
        if self.tool_name and not self.tool_label:
            self.tool_label = self.tool_name

    @classmethod
    def create(cls, id: str = "tool") -> "ToolNode":
        return cls(id)

    @classmethod
    def load_payload(cls, node_data: Dict[str, Any]) -> Dict[str, Any]:
        kwargs = super().load_payload(node_data)
        legacy = node_data.get("param_schemas")
        if "param_schemas" not in kwargs and isinstance(legacy, (dict, list)):
            kwargs["param_schemas"] = copy.deepcopy(legacy)
        return kwargs

    def set_provider(self, id: str, name: str, type: str) -> None:
        self.provider_id = id
        self.provider_name = name
        self.provider_type = type

    def set_tool(self, name: str, label: str = "", description: str = "") -> None:
        self.tool_name = name
        self.tool_label = label or name
        self.tool_description = description

    def set_parameters(self, parameters: Dict[str, Any]) -> None:
        self.tool_parameters = parameters

    def add_parameter(self, name: str, value: Any) -> "ToolNode":
        self.tool_parameters[name] = {"type": "mixed", "value": value}
        return self

    def enable_retry(self, max_retries: int = 3, retry_interval: int = 1000) -> "ToolNode":
        self.retry_config = {
            "retry_enabled": True,
            "max_retries": max_retries,
            "retry_interval": retry_interval,
        }
        return self
