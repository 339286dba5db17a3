"""Single-source shortest paths: Dijkstra and Bellman-Ford.

Both label nodes in place (``distance``/``parent`` scratch fields) through the
shared `relax` primitive, and mark the arcs of the resulting shortest-path
tree as SELECTED.
"""

from __future__ import annotations

from typing import Dict

from wgraph.algorithms.base import INF, Cost, relax, require_node, reset_scratch
from wgraph.exceptions import NegativeCycleError
from wgraph.graph.weighted_graph import NodeID, WeightedGraph
from wgraph.graph.weights import WeightConverter, identity_weight
from wgraph.logging import get_logger

logger = get_logger(__name__)


def dijkstra(
    graph: WeightedGraph,
    root: NodeID,
    converter: WeightConverter = identity_weight,
) -> Dict[NodeID, Cost]:
    """Dijkstra's algorithm from `root`.

    The caller guarantees that no converted weight is negative; this is not
    checked. Each round extracts an unvisited node of minimal distance with a
    linear scan (on ties the earliest registered node wins) and relaxes its
    outgoing arcs.

    Args:
        graph: Graph to label.
        root: Source node.
        converter: Maps an edge weight to a number.

    Returns:
        Dict[NodeID, Cost]: Distance of every node reachable from `root`.

    Raises:
        UnknownNodeError: If `root` is not registered.
    """
    reset_scratch(graph)
    require_node(graph, root)

    nodes = graph.nodes
    nodes[root]["distance"] = 0
    remaining = list(nodes)
    while remaining:
        node = min(remaining, key=lambda n: nodes[n]["distance"])
        remaining.remove(node)
        if nodes[node]["distance"] == INF:
            # Everything left is unreachable
            break
        graph.focus(node)
        for neighbor in list(graph._succ[node]):
            relax(graph, node, neighbor, converter)

    return {n: d["distance"] for n, d in nodes.items() if d["distance"] != INF}


def bellman_ford(
    graph: WeightedGraph,
    root: NodeID,
    converter: WeightConverter = identity_weight,
    *,
    raise_on_negative_cycle: bool = False,
) -> bool:
    """Bellman-Ford from `root`; tolerates negative weights.

    Runs ``|V|`` relaxation passes over every arc, then verifies that no arc
    can still be relaxed. An arc that can means a negative-weight cycle is
    reachable from `root`.

    Args:
        graph: Graph to label.
        root: Source node.
        converter: Maps an edge weight to a number.
        raise_on_negative_cycle: Raise instead of returning False.

    Returns:
        bool: True if no negative cycle is reachable from `root`.

    Raises:
        UnknownNodeError: If `root` is not registered.
        NegativeCycleError: If a negative cycle is found and
            `raise_on_negative_cycle` is set.
    """
    reset_scratch(graph)
    require_node(graph, root)

    nodes = graph.nodes
    succ = graph._succ
    nodes[root]["distance"] = 0
    for _ in range(len(nodes)):
        changed = False
        for u, nbrs in succ.items():
            for v in nbrs:
                changed |= relax(graph, u, v, converter)
        if not changed:
            break

    for u, nbrs in succ.items():
        u_distance = nodes[u]["distance"]
        for v, cell in nbrs.items():
            if nodes[v]["distance"] > u_distance + converter(cell["weight"]):
                logger.debug("Negative cycle through arc %r -> %r", u, v)
                if raise_on_negative_cycle:
                    raise NegativeCycleError(
                        f"Negative cycle reachable from '{root}' through "
                        f"'{u}' -> '{v}'."
                    )
                return False
    return True
