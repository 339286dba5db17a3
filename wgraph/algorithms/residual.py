"""Residual-graph bookkeeping shared by the flow algorithms.

Flow algorithms run on the live graph: arcs whose residual capacity drops to
zero are detached from the adjacency so path searches cannot use them, and
reverse arcs are created on demand. `ResidualTracker` remembers both kinds of
change, plus the adjacency order of every node, so the original structure can
be restored when the run ends.
"""

from __future__ import annotations

from typing import Callable, Dict, Hashable, List, Optional, Set, Tuple

from wgraph.graph.observers import EdgeState
from wgraph.graph.weighted_graph import AttrDict, NodeID, WeightedGraph
from wgraph.graph.weights import FlowWeight

Arc = Tuple[NodeID, NodeID]

#: Residual capacity of a FlowWeight under a given algorithm's reading.
ResidualFunc = Callable[[FlowWeight], int]


def bottleneck(tracker: ResidualTracker, walk: List[NodeID]) -> Optional[int]:
    """Smallest residual capacity along `walk`, or None for a single node."""
    if len(walk) < 2:
        return None
    return min(
        tracker.residual(tracker.weight(u, v)) for u, v in zip(walk, walk[1:])
    )


def _reorder(adjacency: Dict[Hashable, AttrDict], order: List[Hashable]) -> None:
    """Rearrange `adjacency` in place: keys listed in `order` first, in that order."""
    known = set(order)
    ranked = [n for n in order if n in adjacency]
    ranked.extend(n for n in adjacency if n not in known)
    items = [(n, adjacency[n]) for n in ranked]
    adjacency.clear()
    adjacency.update(items)


class ResidualTracker:
    """Detach/restore bookkeeping for one flow run on `graph`.

    Attributes:
        graph: The graph being mutated.
        residual: Maps an arc weight to its residual capacity.
        detached: Arcs currently removed from the adjacency, with their cells.
        created: Reverse arcs added by this run.
    """

    def __init__(self, graph: WeightedGraph, residual: ResidualFunc) -> None:
        self.graph = graph
        self.residual = residual
        self.detached: Dict[Arc, AttrDict] = {}
        self.created: Set[Arc] = set()
        # Detaching and reattaching moves arcs to the end of the adjacency
        self._order = {
            n: (list(graph._succ[n]), list(graph._pred[n])) for n in graph
        }

    def cell(self, u: NodeID, v: NodeID) -> Optional[AttrDict]:
        """Cell of arc u -> v, attached or detached."""
        cell = self.graph._succ[u].get(v)
        if cell is None:
            cell = self.detached.get((u, v))
        return cell

    def weight(self, u: NodeID, v: NodeID) -> FlowWeight:
        return self.cell(u, v)["weight"]  # type: ignore[index]

    def is_original(self, u: NodeID, v: NodeID) -> bool:
        return (u, v) not in self.created

    def detach_exhausted(self) -> None:
        """Detach every arc that has no residual capacity to begin with."""
        for edge in list(self.graph.iter_edges()):
            if self.residual(edge.weight) <= 0:
                self.detached[(edge.source, edge.target)] = self.graph.detach(
                    edge.source, edge.target
                )

    def sync(self, u: NodeID, v: NodeID) -> None:
        """Detach u -> v if exhausted, reattach it if it regained capacity."""
        arc = (u, v)
        if arc in self.detached:
            cell = self.detached[arc]
            if self.residual(cell["weight"]) > 0:
                self.graph.attach_cell(u, v, self.detached.pop(arc))
        elif self.residual(self.graph._succ[u][v]["weight"]) <= 0:
            self.detached[arc] = self.graph.detach(u, v)

    def reverse(
        self, u: NodeID, v: NodeID, initial: FlowWeight
    ) -> Optional[FlowWeight]:
        """Return the weight of v -> u, creating the arc with `initial` if missing.

        Returns None when the arc was just created (its weight already holds
        the pushed amount).
        """
        cell = self.cell(v, u)
        if cell is not None:
            return cell["weight"]
        self.graph.attach_cell(v, u, {"weight": initial, "state": EdgeState.DEFAULT})
        self.created.add((v, u))
        return None

    def restore(self) -> None:
        """Reattach detached arcs, drop the arcs this run created and put every
        adjacency back in its original order.

        Arcs whose endpoints are no longer registered are forgotten.
        """
        graph = self.graph
        for (u, v), cell in self.detached.items():
            if u in graph and v in graph:
                graph.attach_cell(u, v, cell)
        self.detached.clear()
        for u, v in self.created:
            if graph.has_edge(u, v):
                graph.detach(u, v)
        self.created.clear()
        for node, (succ_order, pred_order) in self._order.items():
            if node in graph:
                _reorder(graph._succ[node], succ_order)
                _reorder(graph._pred[node], pred_order)


class SplitNode:
    """Temporary node carrying the residual arc of `head` -> `tail` while the
    slot `tail` -> `head` is taken by an original arc. Equal only to itself."""

    __slots__ = ("tail", "head")

    def __init__(self, tail: NodeID, head: NodeID) -> None:
        self.tail = tail
        self.head = head

    def __repr__(self) -> str:
        return f"<{self.tail}~{self.head}>"


class CostResidualTracker(ResidualTracker):
    """Residual bookkeeping with one paired reverse arc per arc (min-cost flow).

    Every arc u -> v carrying flow gets its own residual partner v -> u with
    the negated cost; pushing moves capacity from an arc to its partner. If
    the slot v -> u already holds an original arc, the partner is routed
    through a `SplitNode`: v -> split carries cost and capacity, split -> u is
    free and unbounded. Arcs are identified by their cost-carrying leg.

    Attributes:
        pair: Cost leg of each arc's residual partner, in both directions.
        splits: Split nodes added by this run.
    """

    def __init__(
        self, graph: WeightedGraph, residual: ResidualFunc, unlimited: int
    ) -> None:
        super().__init__(graph, residual)
        self.unlimited = unlimited
        self.pair: Dict[Arc, Arc] = {}
        self.splits: List[SplitNode] = []

    @staticmethod
    def cost_arcs(walk: List[NodeID]) -> List[Arc]:
        """Cost legs of a graph walk; the free split -> head legs are skipped."""
        return [
            (u, v) for u, v in zip(walk, walk[1:]) if not isinstance(u, SplitNode)
        ]

    def push(self, arc: Arc, amount: int) -> None:
        """Move `amount` units of residual capacity from `arc` to its partner."""
        weight = self.weight(*arc)
        weight.capacity -= amount
        self.sync(*arc)

        partner = self.pair.get(arc)
        if partner is None:
            self._add_partner(arc, FlowWeight(-weight.flow, amount))
        else:
            self.weight(*partner).capacity += amount
            self.sync(*partner)

    def _add_partner(self, arc: Arc, weight: FlowWeight) -> None:
        u, v = arc
        graph = self.graph
        if self.cell(v, u) is None:
            partner: Arc = (v, u)
            graph.attach_cell(v, u, {"weight": weight, "state": EdgeState.DEFAULT})
        else:
            split = SplitNode(v, u)
            graph.add_node(split)
            self.splits.append(split)
            partner = (v, split)
            graph.attach_cell(v, split, {"weight": weight, "state": EdgeState.DEFAULT})
            graph.attach_cell(
                split,
                u,
                {"weight": FlowWeight(0, self.unlimited), "state": EdgeState.DEFAULT},
            )
        self.created.add(partner)
        self.pair[arc] = partner
        self.pair[partner] = arc

    def restore(self) -> None:
        for split in self.splits:
            if split in self.graph:
                self.graph.remove_node(split)
        self.splits.clear()
        self.pair.clear()
        super().restore()
