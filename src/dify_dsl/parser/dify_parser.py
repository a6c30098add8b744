""" Load Dify DSL documents from YAML text, files or already-parsed trees. """
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from ..core.app import App
from ..core.edge import Edge
from ..core.fields import mapping
from ..core.graph import Graph
from ..core.workflow import Workflow
from ..errors import ParseError
from ..nodes.base import BaseNode
from ..nodes.registry import NodeFactory, create_from_tree
from .schema import validate_envelope

logger = logging.getLogger(__name__)


def _entry_id(entry: Dict[str, Any]) -> str:
    entry_id = entry.get("id")
    return entry_id if isinstance(entry_id, str) else "unknown"


def _list(data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key)
    return value if isinstance(value, list) else []


class DifyParser:
    """
    Deserializer for Dify DSL documents.

    Every failure is a ParseError and aborts the whole load; no partial App
    is ever returned. Graph integrity is not checked here, call
    ``app.workflow.graph.validate()`` for that.
    """

    def __init__(self, node_factory: NodeFactory = create_from_tree):
        self.node_factory = node_factory

    def parse_file(self, path: Union[str, Path]) -> App:
        path = Path(path)
        if not path.is_file():
            raise ParseError(f"File not found: {path}")
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(f"Failed to read file: {path}") from e
        logger.debug("Loaded %d bytes from %s", len(text), path)
        return self.parse(text)

    def parse(self, yaml_text: str) -> App:
        """
        Parse YAML text into an App.
        """
        try:
            data = yaml.safe_load(yaml_text)
        except yaml.YAMLError as e:
            raise ParseError(f"Failed to parse YAML: {e}") from e

        if not isinstance(data, dict):
            raise ParseError("Parsed YAML must be a mapping")
        return self.parse_from_tree(data)

    def parse_from_tree(self, data: Dict[str, Any]) -> App:
        """
        Build an App from a generic tree (e.g. the result of yaml.safe_load or json.load).
        """
        if not isinstance(data, dict):
            raise ParseError("Parsed YAML must be a mapping")

        envelope = validate_envelope(data)
        workflow = self._parse_workflow(envelope.workflow)
        app = App.from_tree(data, workflow=workflow)
        logger.debug("Parsed app %r (mode=%s, version=%s): %d nodes, %d edges",
                     app.name, app.mode, app.version,
                     len(workflow.graph.nodes), len(workflow.graph.edges))
        return app

    def _parse_workflow(self, data: Dict[str, Any]) -> Workflow:
        graph_data = mapping(data, "graph")
        graph = Graph(
            nodes=self._parse_nodes(_list(graph_data, "nodes")),
            edges=self._parse_edges(_list(graph_data, "edges")),
        )
        return Workflow.from_tree(data, graph=graph)

    def _parse_nodes(self, entries: List[Any]) -> List[BaseNode]:
        nodes = []
        for entry in entries:
            if not isinstance(entry, dict):
                raise ParseError(f"Failed to parse node: expected map, got {type(entry).__name__}")
            try:
                nodes.append(self.node_factory(entry))
            except Exception as e:
                raise ParseError(f"Failed to parse node {_entry_id(entry)}: {e}") from e
        return nodes

    def _parse_edges(self, entries: List[Any]) -> List[Edge]:
        edges = []
        for entry in entries:
            if not isinstance(entry, dict):
                raise ParseError(f"Failed to parse edge: expected map, got {type(entry).__name__}")
            try:
                edges.append(Edge.from_tree(entry))
            except Exception as e:
                raise ParseError(f"Failed to parse edge {_entry_id(entry)}: {e}") from e
        return edges


def load_app(yaml_text: str) -> App:
    """ Parse YAML text with the default node registry. """
    return DifyParser().parse(yaml_text)
