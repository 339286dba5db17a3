"""Strict weighted graph with per-node scratch state and observable edges.

`WeightedGraph` extends `networkx.DiGraph` to enforce explicit node
management, a single arc per ordered node pair, and shared attribute cells for
the mirrored legs of undirected edges. Per-node algorithm scratch state
(``distance`` and ``parent``) lives in the networkx node data dict, so node
identity is always the immutable user value.
"""

from __future__ import annotations

import math
from pickle import dumps, loads
from typing import Any, Dict, Hashable, Iterator, List, Mapping, Optional

import networkx as nx

from wgraph.exceptions import DuplicateNodeError, UnknownNodeError
from wgraph.graph.observers import EdgeState, GraphObservers
from wgraph.graph.weights import WeightConverter, identity_weight

NodeID = Hashable
AttrDict = Dict[str, Any]

#: Distance sentinel of nodes not (yet) reached by an algorithm.
INF = math.inf


class Edge:
    """View of one directed arc and its attribute cell.

    The cell is shared with the mirrored leg on undirected graphs, so writing
    `weight` through either leg updates both. Highlight state is read-only
    here; use `WeightedGraph.highlight` so observers are notified.
    """

    __slots__ = ("source", "target", "_cell")

    def __init__(self, source: NodeID, target: NodeID, cell: AttrDict) -> None:
        self.source = source
        self.target = target
        self._cell = cell

    @property
    def weight(self) -> Any:
        return self._cell["weight"]

    @weight.setter
    def weight(self, value: Any) -> None:
        self._cell["weight"] = value

    @property
    def state(self) -> EdgeState:
        return self._cell["state"]

    @property
    def cell(self) -> AttrDict:
        """The underlying attribute dict (shared by mirrored legs)."""
        return self._cell

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return (
            self.source == other.source
            and self.target == other.target
            and self._cell is other._cell
        )

    def __hash__(self) -> int:
        return hash((self.source, self.target))

    def __repr__(self) -> str:
        return f"Edge({self.source!r} -> {self.target!r}, weight={self.weight})"


class WeightedGraph(nx.DiGraph):
    """A directed or undirected weighted graph with strict node management.

    This class enforces:
      - No automatic creation of missing nodes when adding an edge.
      - No duplicate nodes (raises DuplicateNodeError).
      - At most one arc per ordered pair; re-adding updates the weight.
      - Undirected graphs store two mirrored arcs sharing one attribute cell.

    Arc cells hold ``weight`` (any type, converted by algorithms through a
    `WeightConverter`) and ``state`` (an `EdgeState`). Node data dicts hold
    the scratch fields ``distance`` and ``parent``.

    Inherits from:
        networkx.DiGraph
    """

    def __init__(self, directed: bool = True, **attr: Any) -> None:
        """Initialize an empty graph.

        Args:
            directed: If False, every `add_edge` also maintains the mirrored arc.
            **attr: Graph attributes forwarded to networkx.
        """
        super().__init__(None, **attr)
        self._digraph = bool(directed)
        self.observers = GraphObservers()

    @property
    def digraph(self) -> bool:
        """Whether edges are one-way. Fixed at construction."""
        return self._digraph

    def __getstate__(self) -> Dict[str, Any]:
        state = self.__dict__.copy()
        # Callbacks belong to the live presentation layer, not to copies
        state["observers"] = GraphObservers()
        return state

    def copy(self, as_view: bool = False) -> WeightedGraph:
        """Return a deep copy sharing nothing with this graph.

        Weights, scratch fields and highlight states are copied; mirrored legs
        of the copy share their own cells. Observers are not copied.

        Args:
            as_view: If True, return a networkx read-only view instead.
        """
        if as_view:
            return super().copy(as_view=True)  # type: ignore[return-value]
        return loads(dumps(self))

    #
    # Node management
    #
    def add_node(self, node_for_adding: NodeID, **attr: Any) -> None:
        """Register a node with fresh scratch state.

        Raises:
            DuplicateNodeError: If an equal node is already registered.
        """
        if node_for_adding in self:
            raise DuplicateNodeError(
                f"Node '{node_for_adding}' already exists in this graph."
            )
        super().add_node(node_for_adding, **attr)
        self._node[node_for_adding].update(distance=INF, parent=None)

    def add_nodes(self, *nodes: NodeID) -> WeightedGraph:
        for node in nodes:
            self.add_node(node)
        return self

    def remove_node(self, n: NodeID) -> None:
        """Deregister a node and detach every arc incident to it.

        Raises:
            UnknownNodeError: If the node is not registered.
        """
        self._require_node(n)
        super().remove_node(n)

    def remove_nodes(self, *nodes: NodeID) -> WeightedGraph:
        for node in nodes:
            self.remove_node(node)
        return self

    def _require_node(self, n: NodeID) -> None:
        if n not in self._node:
            raise UnknownNodeError(f"Node '{n}' does not exist.")

    #
    # Edge management
    #
    def add_edge(  # pyright: ignore[reportIncompatibleMethodOverride]
        self, u_for_edge: NodeID, v_for_edge: NodeID, weight: Any = 1
    ) -> Edge:
        """Add or update the arc u -> v (and v -> u on undirected graphs).

        Re-adding an existing pair only replaces its weight. On undirected
        graphs both legs share one cell, so weight and state stay in lock-step.

        Args:
            u_for_edge: Source node. Must be registered.
            v_for_edge: Target node. Must be registered.
            weight: Edge weight of any type.

        Returns:
            Edge: The forward arc.

        Raises:
            UnknownNodeError: If either endpoint is not registered.
        """
        u, v = u_for_edge, v_for_edge
        if u not in self._node:
            raise UnknownNodeError(f"Source node '{u}' does not exist.")
        if v not in self._node:
            raise UnknownNodeError(f"Target node '{v}' does not exist.")

        cell = self._succ[u].get(v)
        if cell is None and not self._digraph:
            cell = self._succ[v].get(u)
        if cell is None:
            cell = {"weight": weight, "state": EdgeState.DEFAULT}
        else:
            cell["weight"] = weight

        self.attach_cell(u, v, cell)
        if not self._digraph:
            self.attach_cell(v, u, cell)
        return Edge(u, v, cell)

    new_edge = add_edge

    def attach_cell(self, u: NodeID, v: NodeID, cell: AttrDict) -> None:
        """Place `cell` as the attribute dict of arc u -> v.

        Low-level hook used by the flow algorithms to detach and restore
        saturated arcs without losing their weight objects.
        """
        super().add_edge(u, v)
        self._succ[u][v] = cell
        self._pred[v][u] = cell

    def detach(self, u: NodeID, v: NodeID) -> AttrDict:
        """Remove arc u -> v from the adjacency and return its cell."""
        cell = self._succ[u][v]
        super().remove_edge(u, v)
        return cell

    def remove_edge(self, u: NodeID, v: NodeID) -> None:
        """Detach the arc u -> v from both endpoints.

        Removing an arc that does not exist between two registered nodes is
        a no-op. The mirrored leg of an undirected edge is left in place.

        Raises:
            UnknownNodeError: If either node is not registered.
        """
        self._require_node(u)
        self._require_node(v)
        if v in self._succ[u]:
            super().remove_edge(u, v)

    #
    # Queries
    #
    def edge(self, u: NodeID, v: NodeID) -> Optional[Edge]:
        """Return the arc u -> v, or None if there is none."""
        nbrs = self._succ.get(u)
        if nbrs is None or v not in nbrs:
            return None
        return Edge(u, v, nbrs[v])

    def iter_edges(self) -> Iterator[Edge]:
        """Iterate over every directed arc, mirrored legs included."""
        for u, nbrs in self._succ.items():
            for v, cell in nbrs.items():
                yield Edge(u, v, cell)

    def out_arcs(self, u: NodeID) -> List[Edge]:
        return [Edge(u, v, cell) for v, cell in self._succ[u].items()]

    def unique_edges(self) -> List[Edge]:
        """Return every edge once: mirrored legs sharing a cell count once."""
        seen = set()
        result = []
        for edge in self.iter_edges():
            if id(edge.cell) in seen:
                continue
            seen.add(id(edge.cell))
            result.append(edge)
        return result

    def distance(self, n: NodeID) -> float:
        """Scratch distance left by the last algorithm run (INF if unreached)."""
        self._require_node(n)
        return self._node[n]["distance"]

    def parent(self, n: NodeID) -> Optional[NodeID]:
        """Scratch predecessor left by the last algorithm run."""
        self._require_node(n)
        return self._node[n]["parent"]

    def distances(self) -> Dict[NodeID, float]:
        return {n: data["distance"] for n, data in self._node.items()}

    #
    # Observation
    #
    def highlight(self, u: NodeID, v: NodeID, state: EdgeState) -> None:
        """Set the state of arc u -> v and notify edge-state observers.

        Observers are called once per leg sharing the cell, and only when the
        state actually changes.

        Raises:
            UnknownNodeError: If there is no arc u -> v.
        """
        cell = self._succ.get(u, {}).get(v)
        if cell is None:
            raise UnknownNodeError(f"No edge from '{u}' to '{v}'.")
        old = cell["state"]
        if old == state:
            return
        cell["state"] = state
        self.observers.notify_edge_state(Edge(u, v, cell), old, state)
        if u != v and self._succ[v].get(u) is cell:
            self.observers.notify_edge_state(Edge(v, u, cell), old, state)

    def focus(self, n: NodeID) -> None:
        """Announce that an algorithm is working on node `n`."""
        self.observers.notify_node_focus(n)

    #
    # Algorithms
    #
    def bfs(self, root: NodeID) -> List[NodeID]:
        from wgraph.algorithms.bfs import bfs

        return bfs(self, root)

    def dijkstra(
        self, root: NodeID, converter: WeightConverter = identity_weight
    ) -> Dict[NodeID, float]:
        from wgraph.algorithms.spf import dijkstra

        return dijkstra(self, root, converter)

    def bellman_ford(
        self, root: NodeID, converter: WeightConverter = identity_weight
    ) -> bool:
        from wgraph.algorithms.spf import bellman_ford

        return bellman_ford(self, root, converter)

    def kruskal(self, converter: WeightConverter = identity_weight) -> float:
        from wgraph.algorithms.mst import kruskal

        return kruskal(self, converter)

    def prim(self, root: NodeID, converter: WeightConverter = identity_weight) -> float:
        from wgraph.algorithms.mst import prim

        return prim(self, root, converter)

    def ford_fulkerson(self, src: NodeID, dst: NodeID) -> int:
        from wgraph.algorithms.max_flow import ford_fulkerson

        return ford_fulkerson(self, src, dst)

    def edmonds_karp(self, src: NodeID, dst: NodeID) -> int:
        from wgraph.algorithms.max_flow import edmonds_karp

        return edmonds_karp(self, src, dst)

    def min_cost_flow(
        self, excess: Mapping[NodeID, int], deficit: Mapping[NodeID, int]
    ) -> int:
        from wgraph.algorithms.min_cost_flow import min_cost_flow

        return min_cost_flow(self, excess, deficit)
