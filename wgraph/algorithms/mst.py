"""Minimum spanning trees: Kruskal and Prim.

Both return the total converted weight of the tree and mark its arcs as
SELECTED. Since the legs of an undirected edge share one cell, highlighting
either leg highlights the edge.
"""

from __future__ import annotations

from typing import List

from networkx.utils import UnionFind

from wgraph.algorithms.base import require_node, reset_scratch
from wgraph.exceptions import InvalidOperationError
from wgraph.graph.observers import EdgeState
from wgraph.graph.weighted_graph import Edge, NodeID, WeightedGraph
from wgraph.graph.weights import WeightConverter, identity_weight
from wgraph.logging import get_logger

logger = get_logger(__name__)


def kruskal(
    graph: WeightedGraph, converter: WeightConverter = identity_weight
) -> float:
    """Kruskal's algorithm on an undirected graph.

    Each undirected edge is considered once, in ascending converted weight
    (stable for ties), and kept when its endpoints lie in different
    components. Stops after ``|V| - 1`` edges. On a disconnected graph the
    result is a minimum spanning forest.

    Args:
        graph: Undirected graph.
        converter: Maps an edge weight to a number.

    Returns:
        float: Total weight of the selected edges.

    Raises:
        InvalidOperationError: If the graph is directed.
    """
    reset_scratch(graph)
    if graph.digraph:
        raise InvalidOperationError(
            "Kruskal algorithm can be applied only to undirected graphs."
        )

    candidates = sorted(graph.unique_edges(), key=lambda e: converter(e.weight))
    components = UnionFind(graph.nodes)
    tree: List[Edge] = []
    target_size = len(graph) - 1

    for edge in candidates:
        if len(tree) >= target_size:
            break
        if components[edge.source] != components[edge.target]:
            components.union(edge.source, edge.target)
            tree.append(edge)

    total = 0.0
    for edge in tree:
        graph.highlight(edge.source, edge.target, EdgeState.SELECTED)
        total += converter(edge.weight)
    return total


def prim(
    graph: WeightedGraph,
    root: NodeID,
    converter: WeightConverter = identity_weight,
) -> float:
    """Prim's algorithm grown from `root`.

    Keeps a vertex set S, seeded with `root`, and repeatedly adds the
    cheapest arc leaving S (first found on ties) until ``|V| - 1`` arcs are
    chosen. Tree nodes end with ``distance == 0`` and ``parent`` set to the
    node that attached them.

    If the graph is disconnected the search stops when no arc leaves S; the
    weight of the tree spanning `root`'s component is returned.

    Args:
        graph: Graph to span.
        root: Node the tree grows from.
        converter: Maps an edge weight to a number.

    Returns:
        float: Total weight of the tree.

    Raises:
        InvalidOperationError: If the graph has no nodes.
        UnknownNodeError: If `root` is not registered.
    """
    reset_scratch(graph)
    if len(graph) == 0:
        raise InvalidOperationError(
            "Prim algorithm cannot be applied to a graph with 0 nodes."
        )
    require_node(graph, root)

    nodes = graph.nodes
    succ = graph._succ
    in_tree = [root]
    nodes[root]["distance"] = 0
    tree: List[Edge] = []

    while len(tree) < len(graph) - 1:
        best = None
        best_weight = 0.0
        for u in in_tree:
            for v, cell in succ[u].items():
                if nodes[v]["distance"] == 0:
                    continue
                weight = converter(cell["weight"])
                if best is None or weight < best_weight:
                    best = Edge(u, v, cell)
                    best_weight = weight

        if best is None:
            logger.warning(
                "Prim stopped after %d of %d edges: graph is not connected from %r",
                len(tree),
                len(graph) - 1,
                root,
            )
            break

        tree.append(best)
        nodes[best.target]["distance"] = 0
        nodes[best.target]["parent"] = best.source
        in_tree.append(best.target)
        graph.focus(best.target)

    total = 0.0
    for edge in tree:
        graph.highlight(edge.source, edge.target, EdgeState.SELECTED)
        total += converter(edge.weight)
    return total
