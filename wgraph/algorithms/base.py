"""Shared primitives for the graph algorithms.

Every algorithm entry point begins with `reset_scratch`, before any
validation, so a failed call never leaks state into the next one.
"""

from __future__ import annotations

from typing import List, Union

from wgraph.exceptions import InvalidOperationError, UnknownNodeError
from wgraph.graph.observers import EdgeState
from wgraph.graph.weighted_graph import INF, NodeID, WeightedGraph
from wgraph.graph.weights import WeightConverter, require_flow_weight

#: Represents a numeric distance or cost.
Cost = Union[int, float]

__all__ = [
    "Cost",
    "INF",
    "reset_scratch",
    "relax",
    "walk_to",
    "require_node",
    "require_digraph",
    "require_flow_weights",
]


def reset_scratch(graph: WeightedGraph, clear_highlight: bool = True) -> None:
    """Set every distance to INF, every parent to None and clear edge states."""
    for data in graph.nodes.values():
        data["distance"] = INF
        data["parent"] = None
    if clear_highlight:
        for edge in graph.iter_edges():
            if edge.state != EdgeState.DEFAULT:
                graph.highlight(edge.source, edge.target, EdgeState.DEFAULT)


def relax(
    graph: WeightedGraph,
    u: NodeID,
    v: NodeID,
    converter: WeightConverter,
) -> bool:
    """Relax arc u -> v.

    If going through `u` shortens the best known distance of `v`, update
    ``distance[v]`` and ``parent[v]``, mark u -> v as SELECTED and demote the
    arc into the replaced parent.

    Returns:
        bool: True if `v` was updated.
    """
    nodes = graph.nodes
    u_data = nodes[u]
    v_data = nodes[v]
    new_distance = u_data["distance"] + converter(graph._succ[u][v]["weight"])
    if not v_data["distance"] > new_distance:
        return False

    old_parent = v_data["parent"]
    if old_parent is not None and graph.has_edge(old_parent, v):
        graph.highlight(old_parent, v, EdgeState.DEFAULT)
    graph.highlight(u, v, EdgeState.SELECTED)
    v_data["distance"] = new_distance
    v_data["parent"] = u
    return True


def walk_to(graph: WeightedGraph, end: NodeID) -> List[NodeID]:
    """Rebuild the root -> `end` walk by following parent back-references.

    A node that was never reached yields the single-element walk ``[end]``.
    """
    walk = [end]
    parent = graph.nodes[end]["parent"]
    while parent is not None:
        walk.append(parent)
        parent = graph.nodes[parent]["parent"]
    walk.reverse()
    return walk


def require_node(graph: WeightedGraph, node: NodeID) -> None:
    if node not in graph:
        raise UnknownNodeError(f"Node '{node}' does not exist.")


def require_digraph(graph: WeightedGraph, algorithm: str) -> None:
    if not graph.digraph:
        raise InvalidOperationError(
            f"{algorithm} can be applied only to directed graphs."
        )


def require_flow_weights(graph: WeightedGraph) -> None:
    """Fail fast unless every arc carries a FlowWeight.

    Raises:
        WeightTypeError: On the first arc with another weight type.
    """
    for edge in graph.iter_edges():
        require_flow_weight(edge.weight)
