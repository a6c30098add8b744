"""Tests for Graph (node/edge container and integrity checks)."""

import pytest

from dify_dsl.core.edge import Edge
from dify_dsl.core.graph import Graph
from dify_dsl.nodes.answer import AnswerNode
from dify_dsl.nodes.end import EndNode
from dify_dsl.nodes.llm import LLMNode
from dify_dsl.nodes.start import StartNode


def _chain():
    graph = Graph([StartNode.create(), LLMNode.create("llm"), EndNode.create()])
    graph.connect_nodes("start", "llm").connect_nodes("llm", "end")
    return graph


def test_add_node_replaces_by_id():
    """Adding a node with an existing id keeps one node, the newest."""
    graph = Graph()
    graph.add_node(LLMNode.create("llm"))
    replacement = LLMNode.create("llm")
    replacement.title = "Replacement"

    graph.add_node(replacement)

    assert len(graph.nodes) == 1
    assert graph.get_node("llm").title == "Replacement"


def test_add_edge_replaces_by_id():
    """Adding an edge with an existing id keeps one edge, the newest."""
    graph = Graph()
    graph.add_edge(Edge.create("a", "b", id="e1"))
    graph.add_edge(Edge.create("a", "c", id="e1"))

    assert len(graph.edges) == 1
    assert graph.get_edge("e1").target == "c"


def test_replacing_keeps_insertion_position():
    """A replaced node keeps its original slot in the node order."""
    graph = Graph([StartNode.create(), LLMNode.create("llm"), EndNode.create()])

    graph.add_node(LLMNode.create("start"))

    assert [node.id for node in graph.nodes] == ["start", "llm", "end"]
    assert isinstance(graph.nodes[0], LLMNode)


def test_remove_node_cascades_to_edges():
    """Removing a node drops every edge touching it and no others."""
    graph = _chain()
    graph.add_node(AnswerNode.create())
    graph.connect_nodes("start", "answer")

    graph.remove_node("llm")

    assert graph.get_node("llm") is None
    assert [edge.id for edge in graph.edges] == ["start-answer"]


def test_remove_missing_items_is_noop():
    """Removing unknown ids leaves the graph unchanged."""
    graph = _chain()

    graph.remove_node("nope").remove_edge("nope")

    assert len(graph.nodes) == 3
    assert len(graph.edges) == 2


def test_remove_edge():
    """remove_edge() drops only the named edge."""
    graph = _chain()

    graph.remove_edge("start-llm")

    assert [edge.id for edge in graph.edges] == ["llm-end"]


def test_connect_nodes_uses_default_edge_id():
    """connect_nodes() creates '{source}-{target}' edges."""
    graph = _chain()

    assert graph.get_edge("start-llm").source == "start"
    assert graph.get_edge("llm-end").target == "end"


def test_incoming_and_outgoing_edges():
    """Edges are looked up by their endpoints."""
    graph = _chain()

    assert [edge.id for edge in graph.get_incoming_edges("llm")] == ["start-llm"]
    assert [edge.id for edge in graph.get_outgoing_edges("llm")] == ["llm-end"]
    assert graph.get_incoming_edges("start") == []


def test_edge_lookups_keep_insertion_order():
    """Several matching edges come back in the order they were added."""
    graph = Graph([StartNode.create(), LLMNode.create("a"), LLMNode.create("b"), EndNode.create()])
    graph.connect_nodes("b", "end")
    graph.connect_nodes("start", "a")
    graph.connect_nodes("a", "end")
    graph.connect_nodes("start", "b")

    assert [edge.id for edge in graph.get_incoming_edges("end")] == ["b-end", "a-end"]
    assert [edge.id for edge in graph.get_outgoing_edges("start")] == ["start-a", "start-b"]


def test_start_and_end_nodes():
    """Answer nodes count as terminal nodes along with end nodes."""
    graph = _chain()
    graph.add_node(AnswerNode.create())

    assert [node.id for node in graph.get_start_nodes()] == ["start"]
    assert [node.id for node in graph.get_end_nodes()] == ["end", "answer"]


def test_validate_sound_graph():
    """A connected start -> end graph has no problems."""
    assert _chain().validate() == []


def test_validate_empty_graph():
    """An empty graph misses both a start and a terminal node."""
    assert Graph().validate() == [
        "Graph must have at least one start node",
        "Graph must have at least one end or answer node",
    ]


def test_validate_answer_satisfies_terminal_requirement():
    """A chat-style graph ending in an answer node is valid."""
    graph = Graph([StartNode.create(), AnswerNode.create()])

    assert graph.validate() == []


def test_validate_dangling_edges():
    """Every dangling edge end is reported with the edge and node ids."""
    graph = _chain()
    graph.add_edge(Edge.create("ghost", "llm", id="e-src"))
    graph.add_edge(Edge.create("llm", "phantom", id="e-tgt"))
    graph.add_edge(Edge.create("x", "y", id="e-both"))

    assert graph.validate() == [
        "Edge e-src references non-existent source node ghost",
        "Edge e-tgt references non-existent target node phantom",
        "Edge e-both references non-existent source node x",
        "Edge e-both references non-existent target node y",
    ]


def test_validate_reports_node_problems_before_edges():
    """Missing start/end messages come first, then edges in insertion order."""
    graph = Graph([LLMNode.create("llm")])
    graph.add_edge(Edge.create("llm", "gone", id="e2"))
    graph.add_edge(Edge.create("lost", "llm", id="e1"))

    assert graph.validate() == [
        "Graph must have at least one start node",
        "Graph must have at least one end or answer node",
        "Edge e2 references non-existent target node gone",
        "Edge e1 references non-existent source node lost",
    ]


def test_mutation_never_validates():
    """Edges may reference nodes that are added later."""
    graph = Graph()
    graph.connect_nodes("start", "end")
    graph.add_node(StartNode.create()).add_node(EndNode.create())

    assert graph.validate() == []


def test_topological_order():
    """Nodes come out in dependency order."""
    graph = Graph([EndNode.create(), LLMNode.create("llm"), StartNode.create()])
    graph.connect_nodes("start", "llm").connect_nodes("llm", "end")

    assert graph.topological_order() == ["start", "llm", "end"]


def test_topological_order_ignores_dangling_edges():
    """Edges to unknown nodes do not block ordering."""
    graph = _chain()
    graph.connect_nodes("llm", "ghost")

    assert graph.topological_order() == ["start", "llm", "end"]


def test_topological_order_detects_cycle():
    """A cycle raises ValueError."""
    graph = _chain()
    graph.connect_nodes("end", "llm")

    with pytest.raises(ValueError, match="Cycle detected in workflow graph"):
        graph.topological_order()


def test_to_tree():
    """to_tree() lists nodes then edges, in insertion order."""
    tree = _chain().to_tree()

    assert [node["id"] for node in tree["nodes"]] == ["start", "llm", "end"]
    assert [edge["id"] for edge in tree["edges"]] == ["start-llm", "llm-end"]


def test_graph_equality():
    """Graphs with the same nodes and edges compare equal."""
    assert _chain() == _chain()
    assert _chain() != Graph()


def test_index_views_are_copies():
    """Mutating the returned dict does not touch the graph."""
    graph = _chain()

    graph.nodes_by_id.pop("start")
    graph.edges_by_id.clear()

    assert graph.get_node("start") is not None
    assert len(graph.edges) == 2
