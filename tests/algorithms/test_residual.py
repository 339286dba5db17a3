from wgraph.algorithms.residual import (
    CostResidualTracker,
    ResidualTracker,
    SplitNode,
    bottleneck,
)
from wgraph.graph.weighted_graph import WeightedGraph
from wgraph.graph.weights import FlowWeight, flow_available


def _capacity(weight):
    return weight.capacity


def _graph():
    g = WeightedGraph().add_nodes("A", "B", "C")
    g.add_edge("A", "B", FlowWeight(0, 3))
    g.add_edge("B", "C", FlowWeight(2, 2))
    return g


def test_detach_exhausted_and_restore():
    g = _graph()
    tracker = ResidualTracker(g, flow_available)

    tracker.detach_exhausted()

    assert not g.has_edge("B", "C")
    assert tracker.weight("B", "C") == FlowWeight(2, 2)
    tracker.restore()
    assert g.has_edge("B", "C")
    assert tracker.detached == {}


def test_sync_detaches_and_reattaches():
    g = _graph()
    tracker = ResidualTracker(g, flow_available)

    tracker.weight("A", "B").flow = 3
    tracker.sync("A", "B")
    assert not g.has_edge("A", "B")

    tracker.weight("A", "B").flow = 1
    tracker.sync("A", "B")
    assert g.has_edge("A", "B")


def test_reverse_creates_then_reuses():
    g = _graph()
    tracker = ResidualTracker(g, flow_available)

    assert tracker.reverse("A", "B", FlowWeight(-1, 0)) is None
    assert g.edge("B", "A").weight == FlowWeight(-1, 0)
    assert not tracker.is_original("B", "A")
    assert tracker.reverse("A", "B", FlowWeight(-5, 0)) == FlowWeight(-1, 0)

    tracker.restore()

    assert not g.has_edge("B", "A")
    assert tracker.created == set()


def test_reverse_uses_existing_arc():
    g = _graph()
    g.add_edge("C", "B", FlowWeight(0, 4))
    tracker = ResidualTracker(g, flow_available)

    assert tracker.reverse("B", "C", FlowWeight(-1, 0)) is g.edge("C", "B").weight
    assert tracker.is_original("C", "B")


def test_restore_skips_removed_nodes():
    g = _graph()
    tracker = ResidualTracker(g, flow_available)
    tracker.detach_exhausted()

    g.remove_node("C")
    tracker.restore()

    assert list(g) == ["A", "B"]


def test_bottleneck():
    g = _graph()
    g.add_edge("B", "C", FlowWeight(0, 2))
    tracker = ResidualTracker(g, flow_available)

    assert bottleneck(tracker, ["A", "B", "C"]) == 2
    assert bottleneck(tracker, ["A"]) is None


def test_restore_keeps_adjacency_order():
    g = WeightedGraph().add_nodes("A", "B", "C", "D")
    g.add_edge("A", "B", FlowWeight(0, 1))
    g.add_edge("A", "C", FlowWeight(0, 1))
    g.add_edge("A", "D", FlowWeight(0, 1))
    tracker = ResidualTracker(g, flow_available)

    tracker.weight("A", "B").flow = 1
    tracker.sync("A", "B")
    tracker.weight("A", "B").flow = 0
    tracker.sync("A", "B")
    assert list(g.successors("A")) == ["C", "D", "B"]

    tracker.restore()

    assert list(g.successors("A")) == ["B", "C", "D"]


class TestCostResidualTracker:
    def test_push_creates_direct_partner(self):
        g = _graph()
        tracker = CostResidualTracker(g, _capacity, 100)

        tracker.push(("B", "C"), 2)

        assert not g.has_edge("B", "C")
        assert g.edge("C", "B").weight == FlowWeight(-2, 2)
        assert tracker.pair[("B", "C")] == ("C", "B")
        assert tracker.pair[("C", "B")] == ("B", "C")

        tracker.push(("C", "B"), 1)

        assert tracker.weight("B", "C") == FlowWeight(2, 1)
        assert g.edge("C", "B").weight == FlowWeight(-2, 1)

    def test_push_splits_occupied_slot(self):
        g = _graph()
        g.add_edge("C", "B", FlowWeight(5, 1))
        tracker = CostResidualTracker(g, _capacity, 100)

        tracker.push(("B", "C"), 1)

        (split,) = tracker.splits
        assert isinstance(split, SplitNode)
        assert g.edge("C", "B").weight == FlowWeight(5, 1)
        assert g.edge("C", split).weight == FlowWeight(-2, 1)
        assert g.edge(split, "B").weight == FlowWeight(0, 100)
        assert tracker.pair[("B", "C")] == ("C", split)
        assert tracker.cost_arcs(["A", "C", split, "B"]) == [("A", "C"), ("C", split)]

    def test_restore_removes_split_nodes(self):
        g = _graph()
        g.add_edge("C", "B", FlowWeight(5, 1))
        tracker = CostResidualTracker(g, _capacity, 100)
        tracker.push(("B", "C"), 2)

        tracker.restore()

        assert list(g) == ["A", "B", "C"]
        assert {(e.source, e.target) for e in g.iter_edges()} == {
            ("A", "B"),
            ("B", "C"),
            ("C", "B"),
        }
        assert g.edge("B", "C").weight == FlowWeight(2, 0)
        assert tracker.pair == {}
