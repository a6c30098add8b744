""" Directed connection between two node ids. """

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .fields import FieldSpec, equals, is_none, never, read_fields, write_fields


@dataclass
class Edge:
    source: str
    target: str
    id: str = ""
    type: str = "custom"
    source_handle: Optional[str] = None
    target_handle: Optional[str] = None
    selected: bool = False
    data: Dict[str, Any] = field(default_factory=dict)
    z_index: int = 0

    def __post_init__(self):
        if not self.id:
            self.id = f"{self.source}-{self.target}"

    @classmethod
    def create(cls, source: str, target: str, id: Optional[str] = None) -> "Edge":
        return cls(source=source, target=target, id=id or "")

    @classmethod
    def from_tree(cls, data: Dict[str, Any]) -> "Edge":
        kwargs = read_fields(data, _FIELDS)
        kwargs.setdefault("source", "")
        kwargs.setdefault("target", "")
        return cls(**kwargs)

    def to_tree(self) -> Dict[str, Any]:
        return write_fields({}, self, _FIELDS)


_FIELDS = (
    FieldSpec("id", "id", str, never),
    FieldSpec("type", "type", str, never),
    FieldSpec("source", "source", str, never),
    FieldSpec("target", "target", str, never),
    FieldSpec("selected", "selected", bool, never),
    FieldSpec("sourceHandle", "source_handle", str, is_none),
    FieldSpec("targetHandle", "target_handle", str, is_none),
    FieldSpec("data", "data", dict),
    FieldSpec("zIndex", "z_index", int, equals(0)),
)
