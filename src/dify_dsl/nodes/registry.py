""" Registry mapping the ``data.type`` discriminator to a node class. """
import inspect
import logging
from typing import Any, Callable, Dict, List, Optional, Type

from ..errors import ParseError
from .answer import AnswerNode
from .base import BaseNode
from .code import CodeNode
from .end import EndNode
from .llm import LLMNode
from .start import StartNode
from .tool import ToolNode

logger = logging.getLogger(__name__)

NodeFactory = Callable[[Dict[str, Any]], BaseNode]

_NODE_TYPES: Dict[str, Type[BaseNode]] = {
    "start": StartNode,
    "end": EndNode,
    "answer": AnswerNode,
    "llm": LLMNode,
    "tool": ToolNode,
    "code": CodeNode,
}


def create_from_tree(data: Dict[str, Any]) -> BaseNode:
    """
    Build the node described by one ``workflow.graph.nodes`` entry.
    """
    node_data = data.get("data")
    node_type = ""
    if isinstance(node_data, dict) and isinstance(node_data.get("type"), str):
        node_type = node_data["type"]

    cls = _NODE_TYPES.get(node_type)
    if not cls:
        raise ParseError(f"Unsupported node type: {node_type}")

    return cls.from_tree(data)


def register_node_type(node_type: str, cls: Optional[Type[BaseNode]] = None):
    """Register (or override) the class built for ``node_type``.

    Can be called directly or used as a class decorator::

        @register_node_type("http-request")
        class HttpRequestNode(BaseNode):
            node_type = "http-request"
    """
    def _wrap(node_cls):
        # Abstract classes (BaseNode itself, subclasses without node_type) cannot be built.
        if not (isinstance(node_cls, type) and issubclass(node_cls, BaseNode)) or inspect.isabstract(node_cls):
            name = getattr(node_cls, "__name__", repr(node_cls))
            raise ParseError(f"Class {name} must extend BaseNode")
        if node_type in _NODE_TYPES:
            logger.debug("Overriding node type %r: %s -> %s",
                         node_type, _NODE_TYPES[node_type].__name__, node_cls.__name__)
        _NODE_TYPES[node_type] = node_cls
        return node_cls

    if cls is None:
        return _wrap
    return _wrap(cls)


def unregister_node_type(node_type: str) -> None:
    """ Remove ``node_type``; unknown types are ignored. """
    _NODE_TYPES.pop(node_type, None)


def get_supported_types() -> List[str]:
    return list(_NODE_TYPES)


def is_type_supported(node_type: str) -> bool:
    return node_type in _NODE_TYPES
