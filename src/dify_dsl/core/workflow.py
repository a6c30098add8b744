""" Workflow section of a document: the graph plus variables and feature flags. """

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .fields import FieldSpec, read_fields, write_fields
from .graph import Graph
from .variable import Variable, dump_variables, load_variables


@dataclass
class Workflow:
    graph: Graph = field(default_factory=Graph)
    environment_variables: List[Variable] = field(default_factory=list)
    conversation_variables: List[Variable] = field(default_factory=list)
    # Free-form: opening_statement, file_upload, speech_to_text, ...
    features: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_tree(cls, data: Dict[str, Any], graph: Optional[Graph] = None) -> "Workflow":
        """
        Read variables and features from ``data``. The graph is built by the
        parser (nodes need the registry) and handed in ready-made.
        """
        return cls(graph=graph if graph is not None else Graph(), **read_fields(data, _FIELDS))

    def to_tree(self) -> Dict[str, Any]:
        return write_fields({"graph": self.graph.to_tree()}, self, _FIELDS)

    def add_environment_variable(self, variable: Variable) -> "Workflow":
        self.environment_variables.append(variable)
        return self

    def add_conversation_variable(self, variable: Variable) -> "Workflow":
        self.conversation_variables.append(variable)
        return self

    def set_environment_variables(self, variables: List[Variable]) -> "Workflow":
        self.environment_variables = list(variables)
        return self

    def set_conversation_variables(self, variables: List[Variable]) -> "Workflow":
        self.conversation_variables = list(variables)
        return self

    def get_feature(self, name: str) -> Any:
        return self.features.get(name)

    def set_feature(self, name: str, value: Any) -> None:
        self.features[name] = copy.deepcopy(value)

    def remove_feature(self, name: str) -> "Workflow":
        self.features.pop(name, None)
        return self


_FIELDS = (
    FieldSpec("environment_variables", "environment_variables", list,
              load=load_variables, dump=dump_variables),
    FieldSpec("conversation_variables", "conversation_variables", list,
              load=load_variables, dump=dump_variables),
    FieldSpec("features", "features", dict),
)
