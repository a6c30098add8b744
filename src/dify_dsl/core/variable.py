""" Typed parameter declarations (start inputs, environment and conversation variables). """

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .fields import FieldSpec, is_none, never, read_fields, write_fields


@dataclass(frozen=True)
class Variable:
    variable: str = ""
    label: str = ""
    type: str = "text-input"
    required: bool = False
    description: Optional[str] = None
    default: Any = None
    max_length: Optional[int] = None
    options: Union[Dict[str, Any], List[Any]] = field(default_factory=dict)
    allowed_file_extensions: List[str] = field(default_factory=list)
    allowed_file_types: List[str] = field(default_factory=list)
    allowed_file_upload_methods: List[str] = field(default_factory=list)

    @classmethod
    def from_tree(cls, data: Dict[str, Any]) -> "Variable":
        return cls(**read_fields(data, _FIELDS))

    def to_tree(self) -> Dict[str, Any]:
        return write_fields({}, self, _FIELDS)


_FIELDS = (
    FieldSpec("variable", "variable", str, never),
    FieldSpec("label", "label", str, never),
    FieldSpec("type", "type", str, never),
    FieldSpec("required", "required", bool, never),
    FieldSpec("description", "description", str, is_none),
    FieldSpec("default", "default", (str, int, float, bool, list, dict), is_none),
    FieldSpec("max_length", "max_length", int, is_none),
    FieldSpec("options", "options", (dict, list)),
    FieldSpec("allowed_file_extensions", "allowed_file_extensions", list),
    FieldSpec("allowed_file_types", "allowed_file_types", list),
    FieldSpec("allowed_file_upload_methods", "allowed_file_upload_methods", list),
)


def load_variables(items: List[Any]) -> List[Variable]:
    """ Build Variables from a YAML list, skipping entries that are not mappings. """
    return [Variable.from_tree(item) for item in items if isinstance(item, dict)]


def dump_variables(variables: List[Variable]) -> List[Dict[str, Any]]:
    return [variable.to_tree() for variable in variables]
