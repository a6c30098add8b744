""" Start node: declares the workflow's input variables. """

from dataclasses import dataclass, field
from typing import List, Optional

from ..core.fields import FieldSpec
from ..core.variable import Variable, dump_variables, load_variables
from .base import BaseNode


@dataclass
class StartNode(BaseNode):
    title: str = "开始"
    variables: List[Variable] = field(default_factory=list)

    node_type = "start"
    payload_fields = (
        FieldSpec("variables", "variables", list, load=load_variables, dump=dump_variables),
    )

    @classmethod
    def create(cls, id: str = "start") -> "StartNode":
        return cls(id)

    def add_variable(self, variable: Variable) -> "StartNode":
        self.variables.append(variable)
        return self

    def add_input(self, variable: str, type: str, required: bool = False,
                  label: Optional[str] = None) -> "StartNode":
        """ Shorthand for add_variable(); the label defaults to the variable name. """
        return self.add_variable(Variable(
            variable=variable,
            label=label if label is not None else variable,
            type=type,
            required=required,
        ))
