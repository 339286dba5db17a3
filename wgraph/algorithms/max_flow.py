"""Maximum flow via augmenting paths: Ford-Fulkerson and Edmonds-Karp.

Both algorithms run on the live graph, whose arcs must all carry
`FlowWeight`s. Each round searches a source -> sink path over arcs with
residual capacity, pushes the path bottleneck along it and updates the
reverse arcs. Saturated arcs are detached from the adjacency while the run is
in progress and reattached at the end, together with the removal of the
reverse arcs the run created, so only ``flow`` values change.

After the last round a BFS from the source over the residual graph splits the
nodes into the min-cut sides S (reached) and T (not reached).
"""

from __future__ import annotations

from typing import Any, Callable, FrozenSet, List, Literal, Tuple, Union, overload

from wgraph.algorithms.base import (
    INF,
    require_digraph,
    require_flow_weights,
    require_node,
    reset_scratch,
    walk_to,
)
from wgraph.algorithms.bfs import bfs
from wgraph.algorithms.residual import ResidualTracker, bottleneck
from wgraph.algorithms.spf import dijkstra
from wgraph.algorithms.types import FlowSummary
from wgraph.config import ENGINE_CONFIG
from wgraph.graph.observers import EdgeState
from wgraph.graph.weighted_graph import NodeID, WeightedGraph
from wgraph.graph.weights import FlowWeight, flow_available, zero_weight
from wgraph.logging import get_logger

logger = get_logger(__name__)

#: Labels nodes reachable from a root with finite distance and parent links.
PathSearch = Callable[[WeightedGraph, NodeID], Any]


def _relaxation_search(graph: WeightedGraph, root: NodeID) -> None:
    # Dijkstra over all-zero weights: reaches everything reachable,
    # in registration order rather than by path length.
    dijkstra(graph, root, zero_weight)


# @overload gives static callers the exact return type for each flag value:
# int, or Tuple[int, FlowSummary] when return_summary=True.
@overload
def ford_fulkerson(
    graph: WeightedGraph,
    src_node: NodeID,
    dst_node: NodeID,
    *,
    return_summary: Literal[False] = False,
) -> int: ...


@overload
def ford_fulkerson(
    graph: WeightedGraph,
    src_node: NodeID,
    dst_node: NodeID,
    *,
    return_summary: Literal[True],
) -> Tuple[int, FlowSummary]: ...


def ford_fulkerson(
    graph: WeightedGraph,
    src_node: NodeID,
    dst_node: NodeID,
    *,
    return_summary: bool = False,
) -> Union[int, Tuple[int, FlowSummary]]:
    """Max flow with arbitrary augmenting paths.

    Paths come from a zero-weight relaxation search, so their order is not
    tied to path length. Termination is guaranteed for integer capacities.

    Args:
        graph: Directed graph whose arcs all carry FlowWeight.
        src_node: Flow source.
        dst_node: Flow sink.
        return_summary: Also return a FlowSummary with the min-cut.

    Returns:
        Union[int, Tuple[int, FlowSummary]]: The max flow, or the flow and
        its summary.

    Raises:
        UnknownNodeError: If either endpoint is not registered.
        InvalidOperationError: If the graph is undirected.
        WeightTypeError: If an arc weight is not a FlowWeight.
    """
    return _calc_max_flow(
        graph,
        src_node,
        dst_node,
        _relaxation_search,
        "Ford-Fulkerson",
        return_summary,
    )


@overload
def edmonds_karp(
    graph: WeightedGraph,
    src_node: NodeID,
    dst_node: NodeID,
    *,
    return_summary: Literal[False] = False,
) -> int: ...


@overload
def edmonds_karp(
    graph: WeightedGraph,
    src_node: NodeID,
    dst_node: NodeID,
    *,
    return_summary: Literal[True],
) -> Tuple[int, FlowSummary]: ...


def edmonds_karp(
    graph: WeightedGraph,
    src_node: NodeID,
    dst_node: NodeID,
    *,
    return_summary: bool = False,
) -> Union[int, Tuple[int, FlowSummary]]:
    """Max flow with BFS augmenting paths (fewest arcs first), O(V E^2).

    Same contract as `ford_fulkerson`.
    """
    return _calc_max_flow(
        graph, src_node, dst_node, bfs, "Edmonds-Karp", return_summary
    )


def _calc_max_flow(
    graph: WeightedGraph,
    src_node: NodeID,
    dst_node: NodeID,
    search: PathSearch,
    name: str,
    return_summary: bool,
) -> Union[int, Tuple[int, FlowSummary]]:
    reset_scratch(graph)
    require_node(graph, src_node)
    require_node(graph, dst_node)
    require_digraph(graph, name)
    require_flow_weights(graph)

    # Degenerate case (s == t): conservation forces the only feasible flow to 0.
    if src_node == dst_node:
        total = 0
        reachable = frozenset([src_node])
    else:
        tracker = ResidualTracker(graph, flow_available)
        total = 0
        try:
            tracker.detach_exhausted()
            iteration = 0
            while True:
                search(graph, src_node)
                if graph.nodes[dst_node]["distance"] == INF:
                    break
                walk = walk_to(graph, dst_node)
                amount = bottleneck(tracker, walk)
                _augment(tracker, walk, amount)
                total += amount
                iteration += 1
                logger.debug(
                    "%s iteration %d: +%d along %s", name, iteration, amount, walk
                )

            bfs(graph, src_node)
            reachable = frozenset(
                n for n, data in graph.nodes.items() if data["distance"] != INF
            )
        finally:
            tracker.restore()

    summary = _summarize(graph, total, reachable)
    if ENGINE_CONFIG.log_min_cut:
        logger.debug(
            "%s min-cut: NS = {%s}, NT = {%s}",
            name,
            ", ".join(map(str, summary.reachable)),
            ", ".join(map(str, summary.unreachable)),
        )
    logger.debug("%s from %r to %r: max flow %d", name, src_node, dst_node, total)

    if return_summary:
        return total, summary
    return total


def _augment(tracker: ResidualTracker, walk: List[NodeID], amount: int) -> None:
    """Push `amount` along `walk`; all-or-nothing since it cannot fail."""
    for u, v in zip(walk, walk[1:]):
        tracker.weight(u, v).flow += amount
        tracker.sync(u, v)
        backward = tracker.reverse(u, v, FlowWeight(-amount, 0))
        if backward is not None:
            backward.flow -= amount
            tracker.sync(v, u)


def _summarize(
    graph: WeightedGraph, total: int, reachable: FrozenSet[NodeID]
) -> FlowSummary:
    """Highlight the final flow and collect the min-cut."""
    edge_flow = {}
    residual_cap = {}
    min_cut = []
    cut_capacity = 0
    for edge in graph.iter_edges():
        weight: FlowWeight = edge.weight
        arc = (edge.source, edge.target)
        residual_cap[arc] = weight.available
        # Antiparallel arcs hold the net flow with opposite signs
        if weight.flow > 0:
            edge_flow[arc] = weight.flow
            state = EdgeState.SATURATED if weight.available <= 0 else EdgeState.FLOW
            graph.highlight(edge.source, edge.target, state)
        if edge.source in reachable and edge.target not in reachable:
            min_cut.append(arc)
            cut_capacity += weight.capacity

    return FlowSummary(
        total_flow=total,
        edge_flow=edge_flow,
        residual_cap=residual_cap,
        reachable=reachable,
        unreachable=frozenset(n for n in graph if n not in reachable),
        min_cut=min_cut,
        cut_capacity=cut_capacity,
    )
