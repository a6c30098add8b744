""" Abstract node contract shared by every node kind in a workflow graph. """

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional, Tuple

from ..core.fields import (
    FieldSpec,
    equals,
    is_false,
    is_none,
    mapping,
    read_fields,
    string,
    write_fields,
)


@dataclass
class BaseNode(ABC):
    """ Abstract base class for all nodes.

    Subclasses set ``node_type`` (the ``data.type`` discriminator) and list
    their own ``data`` fields in ``payload_fields``. ``ui_type`` is the
    unrelated top-level ``type`` tag used by the editor, almost always "custom".
    """
    id: str
    title: str = ""
    description: str = ""
    ui_type: str = "custom"
    position: Dict[str, Any] = field(default_factory=lambda: {"x": 0, "y": 0})
    position_absolute: Optional[Dict[str, Any]] = None
    width: Optional[int] = None
    height: Optional[int] = None
    source_position: str = "right"
    target_position: str = "left"
    selected: bool = False
    parent_id: Optional[str] = None
    extent: Optional[str] = None
    z_index: Optional[int] = None
    selectable: Optional[bool] = None
    draggable: Optional[bool] = None

    payload_fields: ClassVar[Tuple[FieldSpec, ...]] = ()

    @property
    @abstractmethod
    def node_type(self) -> str:
        """ Discriminator stored in ``data.type`` and used for registry dispatch. """

    @classmethod
    def from_tree(cls, data: Dict[str, Any]) -> "BaseNode":
        """
        Build a node from one entry of ``workflow.graph.nodes``.
        """
        node_data = mapping(data, "data")
        kwargs = read_fields(data, _COMMON_FIELDS)
        if isinstance(data.get("type"), str):
            kwargs["ui_type"] = data["type"]
        if isinstance(data.get("position"), dict):
            kwargs["position"] = copy.deepcopy(data["position"])
        kwargs.update(cls.load_payload(node_data))
        if isinstance(node_data.get("title"), str):
            kwargs["title"] = node_data["title"]
        if isinstance(node_data.get("desc"), str):
            kwargs["description"] = node_data["desc"]
        return cls(id=string(data, "id"), **kwargs)

    @classmethod
    def load_payload(cls, node_data: Dict[str, Any]) -> Dict[str, Any]:
        return read_fields(node_data, cls.payload_fields)

    def node_data(self) -> Dict[str, Any]:
        data = {
            "type": self.node_type,
            "title": self.title,
            "desc": self.description,
            "selected": self.selected,
        }
        return write_fields(data, self, self.payload_fields)

    def to_tree(self) -> Dict[str, Any]:
        tree = {
            "id": self.id,
            "type": self.ui_type,
            "position": copy.deepcopy(self.position),
            "data": self.node_data(),
        }
        return write_fields(tree, self, _COMMON_FIELDS)

    def set_position(self, x: int, y: int) -> None:
        self.position = {"x": x, "y": y}


_COMMON_FIELDS = (
    FieldSpec("positionAbsolute", "position_absolute", dict, is_none),
    FieldSpec("width", "width", (int, float), is_none),
    FieldSpec("height", "height", (int, float), is_none),
    FieldSpec("parentId", "parent_id", str, is_none),
    FieldSpec("extent", "extent", str, is_none),
    FieldSpec("zIndex", "z_index", int, is_none),
    FieldSpec("selectable", "selectable", bool, is_none),
    FieldSpec("draggable", "draggable", bool, is_none),
    FieldSpec("sourcePosition", "source_position", str, equals("right")),
    FieldSpec("targetPosition", "target_position", str, equals("left")),
    FieldSpec("selected", "selected", bool, is_false),
)
