import pytest

from wgraph.exceptions import DuplicateNodeError, UnknownNodeError
from wgraph.graph.observers import EdgeState
from wgraph.graph.weighted_graph import INF, Edge, WeightedGraph
from wgraph.graph.weights import FlowWeight


def test_init_defaults():
    g = WeightedGraph()

    assert g.digraph is True
    assert len(g) == 0
    assert WeightedGraph(directed=False).digraph is False


def test_add_node():
    g = WeightedGraph()
    g.add_node("A")

    assert "A" in g
    assert g.distance("A") == INF
    assert g.parent("A") is None


def test_add_node_duplicate():
    g = WeightedGraph()
    g.add_node("A")

    with pytest.raises(DuplicateNodeError):
        g.add_node("A")
    with pytest.raises(ValueError):
        g.add_node("A")


def test_add_nodes_chains():
    g = WeightedGraph().add_nodes(1, 2, 3)

    assert list(g) == [1, 2, 3]


def test_remove_node_detaches_arcs():
    g = WeightedGraph()
    g.add_nodes("A", "B", "C")
    g.add_edge("A", "B", 1)
    g.add_edge("B", "C", 2)
    g.add_edge("C", "A", 3)

    g.remove_node("B")

    assert "B" not in g
    assert [(e.source, e.target) for e in g.iter_edges()] == [("C", "A")]
    assert "B" not in g.succ["A"]
    assert "B" not in g.pred["C"]


def test_remove_node_unknown():
    g = WeightedGraph()

    with pytest.raises(UnknownNodeError):
        g.remove_node("A")


def test_remove_nodes():
    g = WeightedGraph().add_nodes("A", "B", "C")
    g.add_edge("A", "C")

    g.remove_nodes("A", "B")

    assert list(g) == ["C"]
    assert g.number_of_edges() == 0


def test_add_edge_returns_edge():
    g = WeightedGraph().add_nodes("A", "B")

    edge = g.add_edge("A", "B", 5)

    assert isinstance(edge, Edge)
    assert (edge.source, edge.target, edge.weight) == ("A", "B", 5)
    assert edge.state == EdgeState.DEFAULT
    assert g.edge("A", "B") == edge


def test_add_edge_default_weight():
    g = WeightedGraph().add_nodes("A", "B")

    assert g.add_edge("A", "B").weight == 1


def test_add_edge_requires_nodes():
    g = WeightedGraph()
    g.add_node("A")

    with pytest.raises(UnknownNodeError):
        g.add_edge("A", "B")
    with pytest.raises(UnknownNodeError):
        g.add_edge("B", "A")
    assert "B" not in g


def test_add_edge_updates_existing():
    g = WeightedGraph().add_nodes("A", "B")
    first = g.add_edge("A", "B", 5)

    second = g.add_edge("A", "B", 7)

    assert g.number_of_edges() == 1
    assert first.weight == 7
    assert second == first


def test_directed_edge_is_one_way():
    g = WeightedGraph().add_nodes("A", "B")
    g.add_edge("A", "B", 5)

    assert g.edge("B", "A") is None


def test_undirected_mirror_shares_cell():
    g = WeightedGraph(directed=False).add_nodes("A", "B")

    g.add_edge("A", "B", 5)
    forward = g.edge("A", "B")
    backward = g.edge("B", "A")

    assert forward.cell is backward.cell
    backward.weight = 9
    assert forward.weight == 9
    g.add_edge("B", "A", 3)
    assert forward.weight == 3
    assert g.number_of_edges() == 2
    assert len(g.unique_edges()) == 1


def test_undirected_highlight_in_lock_step():
    g = WeightedGraph(directed=False).add_nodes("A", "B")
    g.add_edge("A", "B", 5)

    g.highlight("B", "A", EdgeState.SELECTED)

    assert g.edge("A", "B").state == EdgeState.SELECTED


def test_remove_edge():
    g = WeightedGraph().add_nodes("A", "B")
    g.add_edge("A", "B")

    g.remove_edge("A", "B")

    assert g.edge("A", "B") is None


def test_remove_missing_edge_is_noop():
    g = WeightedGraph().add_nodes("A", "B")

    g.remove_edge("A", "B")

    assert g.number_of_edges() == 0


def test_remove_edge_unknown_node():
    g = WeightedGraph().add_nodes("A")

    with pytest.raises(UnknownNodeError):
        g.remove_edge("A", "B")


def test_remove_undirected_leg_keeps_mirror():
    g = WeightedGraph(directed=False).add_nodes("A", "B")
    g.add_edge("A", "B")

    g.remove_edge("A", "B")

    assert g.edge("A", "B") is None
    assert g.edge("B", "A") is not None


def test_out_arcs_and_iter_edges():
    g = WeightedGraph().add_nodes("A", "B", "C")
    g.add_edge("A", "B", 1)
    g.add_edge("A", "C", 2)
    g.add_edge("B", "C", 3)

    assert [e.target for e in g.out_arcs("A")] == ["B", "C"]
    assert [(e.source, e.target, e.weight) for e in g.iter_edges()] == [
        ("A", "B", 1),
        ("A", "C", 2),
        ("B", "C", 3),
    ]


def test_highlight_unknown_edge():
    g = WeightedGraph().add_nodes("A", "B")

    with pytest.raises(UnknownNodeError):
        g.highlight("A", "B", EdgeState.SELECTED)


def test_distance_unknown_node():
    g = WeightedGraph()

    with pytest.raises(UnknownNodeError):
        g.distance("A")
    with pytest.raises(UnknownNodeError):
        g.parent("A")


def test_copy_is_deep():
    g = WeightedGraph(directed=False).add_nodes("A", "B")
    g.add_edge("A", "B", FlowWeight(0, 5))
    calls = []
    g.observers.subscribe_edge_state(lambda *args: calls.append(args))

    clone = g.copy()
    clone.edge("A", "B").weight.flow = 3
    clone.highlight("A", "B", EdgeState.FLOW)

    assert isinstance(clone, WeightedGraph)
    assert clone.digraph is False
    assert g.edge("A", "B").weight == FlowWeight(0, 5)
    assert g.edge("A", "B").state == EdgeState.DEFAULT
    assert clone.edge("A", "B").cell is clone.edge("B", "A").cell
    assert calls == []
    assert len(clone.observers) == 0


def test_copy_keeps_scratch():
    g = WeightedGraph().add_nodes("A", "B")
    g.add_edge("A", "B", 2)
    g.dijkstra("A")

    clone = g.copy()

    assert clone.distance("B") == 2
    assert clone.parent("B") == "A"


def test_edge_repr_and_hash():
    g = WeightedGraph().add_nodes("A", "B")
    edge = g.add_edge("A", "B", 4)

    assert repr(edge) == "Edge('A' -> 'B', weight=4)"
    assert {edge, g.edge("A", "B")} == {edge}
