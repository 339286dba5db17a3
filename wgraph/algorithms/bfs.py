from __future__ import annotations

from collections import deque
from typing import List

from wgraph.algorithms.base import INF, require_node, reset_scratch
from wgraph.graph.weighted_graph import NodeID, WeightedGraph


def bfs(graph: WeightedGraph, root: NodeID) -> List[NodeID]:
    """Breadth-first search from `root`.

    Every reachable node ends with ``distance == 0`` and ``parent`` set to the
    node that discovered it; unreachable nodes keep ``distance == INF``. Since
    the frontier is FIFO, following parents gives a fewest-arcs path.

    Args:
        graph: Graph to traverse.
        root: Start node.

    Returns:
        Nodes in visit order, root first.

    Raises:
        UnknownNodeError: If `root` is not registered.
    """
    reset_scratch(graph)
    require_node(graph, root)

    nodes = graph.nodes
    succ = graph._succ
    nodes[root]["distance"] = 0
    queue = deque([root])
    order = []
    while queue:
        node = queue.popleft()
        order.append(node)
        graph.focus(node)
        for neighbor in succ[node]:
            neighbor_data = nodes[neighbor]
            if neighbor_data["distance"] == INF:
                neighbor_data["distance"] = 0
                neighbor_data["parent"] = node
                queue.append(neighbor)
    return order
