""" Fluent construction of App documents without going through YAML. """
import copy
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

from ..core.app import DEFAULT_ICON, DEFAULT_ICON_BACKGROUND, App
from ..core.graph import Graph
from ..core.variable import Variable
from ..core.workflow import Workflow
from ..nodes.answer import AnswerNode
from ..nodes.base import BaseNode
from ..nodes.code import CodeNode
from ..nodes.end import EndNode
from ..nodes.llm import LLMNode
from ..nodes.start import StartNode
from ..nodes.tool import ToolNode

logger = logging.getLogger(__name__)

N = TypeVar("N", bound=BaseNode)

LAYOUT_ORIGIN = (80, 280)
LAYOUT_STEP_X = 300


def _auto_position(index: int) -> Dict[str, int]:
    """
    Very simple layout: put nodes in a horizontal row, left to right.
    """
    x, y = LAYOUT_ORIGIN
    return {"x": x + index * LAYOUT_STEP_X, "y": y}


class WorkflowBuilder:
    """
    Accumulates app metadata and graph pieces; ``build()`` hands out an
    independent App.

        app = (WorkflowBuilder()
               .set_name("Summarizer")
               .add_start_node(lambda n: n.add_input("text", "paragraph", required=True))
               .add_llm_node("llm1", lambda n: n.set_user_prompt("{{#start.text#}}"))
               .add_end_node()
               .build())

    Every ``add_*_node`` except the start node is connected from the node
    added just before it.
    """

    def __init__(self):
        self.name = ""
        self.description = ""
        self.mode = "workflow"
        self.icon = DEFAULT_ICON
        self.icon_background = DEFAULT_ICON_BACKGROUND
        self.graph = Graph()
        self.environment_variables: List[Variable] = []
        self.conversation_variables: List[Variable] = []
        self.features: Dict[str, Any] = {}
        self.dependencies: Dict[str, Any] = {}
        self.model_config: Optional[Dict[str, Any]] = None
        self._last_node_id: Optional[str] = None
        self._counters: Dict[str, int] = {}

    @classmethod
    def create(cls) -> "WorkflowBuilder":
        return cls()

    # -- app metadata --------------------------------------------------------

    def set_name(self, name: str) -> "WorkflowBuilder":
        self.name = name
        return self

    def set_description(self, description: str) -> "WorkflowBuilder":
        self.description = description
        return self

    def set_mode(self, mode: str) -> "WorkflowBuilder":
        self.mode = mode
        return self

    def set_icon(self, icon: str, background: str = DEFAULT_ICON_BACKGROUND) -> "WorkflowBuilder":
        self.icon = icon
        self.icon_background = background
        return self

    def set_model_config(self, config: Optional[Dict[str, Any]]) -> "WorkflowBuilder":
        self.model_config = config
        return self

    def add_dependency(self, key: str, dependency: Dict[str, Any]) -> "WorkflowBuilder":
        self.dependencies[key] = dependency
        return self

    # -- workflow section ----------------------------------------------------

    def add_environment_variable(self, name: str, type: str = "string",
                                 default: Any = None) -> "WorkflowBuilder":
        self.environment_variables.append(Variable(variable=name, label=name, type=type, default=default))
        return self

    def add_conversation_variable(self, name: str, type: str = "string",
                                  default: Any = None) -> "WorkflowBuilder":
        self.conversation_variables.append(Variable(variable=name, label=name, type=type, default=default))
        return self

    def enable_file_upload(self, allowed_types: Iterable[str] = ("image",),
                           number_limits: int = 5) -> "WorkflowBuilder":
        self.features["file_upload"] = {
            "enabled": True,
            "allowed_file_types": list(allowed_types),
            "number_limits": number_limits,
        }
        return self

    def set_opening_statement(self, statement: str) -> "WorkflowBuilder":
        self.features["opening_statement"] = statement
        return self

    # -- nodes ---------------------------------------------------------------

    def add_start_node(self, configure: Optional[Callable[[StartNode], Any]] = None) -> "WorkflowBuilder":
        node = self._prepare(StartNode.create("start"), configure)
        self._place(node, connect=False)
        return self

    def add_llm_node(self, id: Optional[str] = None,
                     configure: Optional[Callable[[LLMNode], Any]] = None) -> "WorkflowBuilder":
        node = self._prepare(LLMNode.create(id or self._next_id("llm")), configure)
        self._place(node)
        return self

    def add_tool_node(self, id: Optional[str] = None,
                      configure: Optional[Callable[[ToolNode], Any]] = None) -> "WorkflowBuilder":
        node = self._prepare(ToolNode.create(id or self._next_id("tool")), configure)
        self._place(node)
        return self

    def add_code_node(self, id: Optional[str] = None,
                      configure: Optional[Callable[[CodeNode], Any]] = None) -> "WorkflowBuilder":
        node = self._prepare(CodeNode.create(id or self._next_id("code")), configure)
        self._place(node)
        return self

    def add_answer_node(self, id: Optional[str] = None,
                        configure: Optional[Callable[[AnswerNode], Any]] = None) -> "WorkflowBuilder":
        node = self._prepare(AnswerNode.create(id or self._next_id("answer")), configure)
        self._place(node)
        return self

    def add_end_node(self, configure: Optional[Callable[[EndNode], Any]] = None) -> "WorkflowBuilder":
        node = self._prepare(EndNode.create("end"), configure)
        self._place(node)
        return self

    def add_custom_node(self, node: BaseNode) -> "WorkflowBuilder":
        """ Add a ready-made node (any registered type) and chain it like the others. """
        self._place(node)
        return self

    def connect_nodes(self, source_id: str, target_id: str) -> "WorkflowBuilder":
        self.graph.connect_nodes(source_id, target_id)
        return self

    def build(self) -> App:
        workflow = Workflow(
            graph=self.graph,
            environment_variables=self.environment_variables,
            conversation_variables=self.conversation_variables,
            features=self.features,
        )
        app = App(
            name=self.name,
            description=self.description,
            mode=self.mode,
            workflow=workflow,
            icon=self.icon,
            icon_background=self.icon_background,
            dependencies=self.dependencies,
            model_config=self.model_config,
        )
        logger.debug("Built app %r with %d nodes, %d edges",
                     self.name, len(self.graph.nodes), len(self.graph.edges))
        return copy.deepcopy(app)

    # -- internals -----------------------------------------------------------

    def _prepare(self, node: N, configure: Optional[Callable[[N], Any]]) -> N:
        node.set_position(**_auto_position(len(self.graph.nodes)))
        if configure is not None:
            configure(node)
        return node

    def _next_id(self, node_type: str) -> str:
        existing = self.graph.nodes_by_id
        while True:
            self._counters[node_type] = self._counters.get(node_type, 0) + 1
            candidate = f"{node_type}_{self._counters[node_type]}"
            if candidate not in existing:
                return candidate

    def _place(self, node: BaseNode, connect: bool = True) -> None:
        self.graph.add_node(node)
        if connect and self._last_node_id is not None:
            self.graph.connect_nodes(self._last_node_id, node.id)
        self._last_node_id = node.id
