""" Node/edge container of a workflow, indexed by id. """

from collections import deque
from typing import Any, Dict, Iterable, List, Optional, TYPE_CHECKING

from .edge import Edge

if TYPE_CHECKING:
    from ..nodes.base import BaseNode


class Graph:
    """
    Owns the nodes and edges of one workflow.

    Both collections are dicts keyed by id: adding an item whose id is already
    present replaces it in place. Integrity (start/end presence, dangling edge
    ends) is only checked by validate(), never on mutation.
    """

    def __init__(self, nodes: Iterable["BaseNode"] = (), edges: Iterable[Edge] = ()):
        self._nodes: Dict[str, "BaseNode"] = {}
        self._edges: Dict[str, Edge] = {}
        for node in nodes:
            self.add_node(node)
        for edge in edges:
            self.add_edge(edge)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return self._nodes == other._nodes and self._edges == other._edges

    def __repr__(self) -> str:
        return f"Graph(nodes={list(self._nodes)}, edges={list(self._edges)})"

    @property
    def nodes(self) -> List["BaseNode"]:
        return list(self._nodes.values())

    @property
    def edges(self) -> List[Edge]:
        return list(self._edges.values())

    @property
    def nodes_by_id(self) -> Dict[str, "BaseNode"]:
        return dict(self._nodes)

    @property
    def edges_by_id(self) -> Dict[str, Edge]:
        return dict(self._edges)

    def add_node(self, node: "BaseNode") -> "Graph":
        self._nodes[node.id] = node
        return self

    def add_edge(self, edge: Edge) -> "Graph":
        self._edges[edge.id] = edge
        return self

    def remove_node(self, node_id: str) -> "Graph":
        """ Remove a node together with every edge touching it. """
        self._nodes.pop(node_id, None)
        self._edges = {
            edge_id: edge for edge_id, edge in self._edges.items()
            if edge.source != node_id and edge.target != node_id
        }
        return self

    def remove_edge(self, edge_id: str) -> "Graph":
        self._edges.pop(edge_id, None)
        return self

    def get_node(self, node_id: str) -> Optional["BaseNode"]:
        return self._nodes.get(node_id)

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        return self._edges.get(edge_id)

    def connect_nodes(self, source_id: str, target_id: str) -> "Graph":
        return self.add_edge(Edge.create(source_id, target_id))

    def get_incoming_edges(self, node_id: str) -> List[Edge]:
        return [edge for edge in self._edges.values() if edge.target == node_id]

    def get_outgoing_edges(self, node_id: str) -> List[Edge]:
        return [edge for edge in self._edges.values() if edge.source == node_id]

    def get_start_nodes(self) -> List["BaseNode"]:
        return [node for node in self._nodes.values() if node.node_type == "start"]

    def get_end_nodes(self) -> List["BaseNode"]:
        return [node for node in self._nodes.values() if node.node_type in ("end", "answer")]

    def validate(self) -> List[str]:
        """
        Return one message per integrity problem (empty list when the graph is sound).
        """
        errors = []
        if not self.get_start_nodes():
            errors.append("Graph must have at least one start node")
        if not self.get_end_nodes():
            errors.append("Graph must have at least one end or answer node")

        for edge in self._edges.values():
            if edge.source not in self._nodes:
                errors.append(f"Edge {edge.id} references non-existent source node {edge.source}")
            if edge.target not in self._nodes:
                errors.append(f"Edge {edge.id} references non-existent target node {edge.target}")
        return errors

    def topological_order(self) -> List[str]:
        """
        Node ids in dependency order (Kahn). Edges with a missing end are ignored.
        """
        indegree = {node_id: 0 for node_id in self._nodes}
        adjacency: Dict[str, List[str]] = {node_id: [] for node_id in self._nodes}
        for edge in self._edges.values():
            if edge.source not in self._nodes or edge.target not in self._nodes:
                continue
            adjacency[edge.source].append(edge.target)
            indegree[edge.target] += 1

        queue = deque(node_id for node_id, deg in indegree.items() if deg == 0)
        order = []
        while queue:
            current = queue.popleft()
            order.append(current)
            for neighbor in adjacency[current]:
                indegree[neighbor] -= 1
                if indegree[neighbor] == 0:
                    queue.append(neighbor)

        if len(order) != len(self._nodes):
            raise ValueError("Cycle detected in workflow graph")
        return order

    def to_tree(self) -> Dict[str, Any]:
        return {
            "nodes": [node.to_tree() for node in self._nodes.values()],
            "edges": [edge.to_tree() for edge in self._edges.values()],
        }
