"""wgraph: a weighted-graph engine.

wgraph keeps a mutable weighted graph and runs traversal, shortest-path,
spanning-tree, maximum-flow and minimum-cost-flow algorithms on it in place.
Results are left in per-node scratch fields (``distance``, ``parent``) and
edge highlight states, and returned where the algorithm has a natural value.

Primary API:
    WeightedGraph - the graph; also dispatches every algorithm as a method
    FlowWeight - flow/capacity weight for the flow algorithms
    EdgeState - highlight states reported to edge-state observers

Example:
    from wgraph import FlowWeight, WeightedGraph, edmonds_karp

    g = WeightedGraph(directed=True)
    g.add_nodes("s", "a", "t")
    g.add_edge("s", "a", FlowWeight(0, 4))
    g.add_edge("a", "t", FlowWeight(0, 3))

    flow, summary = edmonds_karp(g, "s", "t", return_summary=True)
    # flow == 3, summary.min_cut == [("a", "t")]
"""

from __future__ import annotations

from wgraph import logging
from wgraph._version import __version__
from wgraph.algorithms.bfs import bfs
from wgraph.algorithms.max_flow import edmonds_karp, ford_fulkerson
from wgraph.algorithms.min_cost_flow import min_cost_flow
from wgraph.algorithms.mst import kruskal, prim
from wgraph.algorithms.spf import bellman_ford, dijkstra
from wgraph.algorithms.types import CostFlowSummary, FlowSummary
from wgraph.config import ENGINE_CONFIG, EngineConfig
from wgraph.exceptions import (
    DuplicateNodeError,
    GraphError,
    ImbalanceError,
    InvalidOperationError,
    NegativeCycleError,
    UnknownNodeError,
    UnreachableError,
    WeightTypeError,
)
from wgraph.graph.observers import EdgeState, GraphObservers
from wgraph.graph.weighted_graph import INF, Edge, WeightedGraph
from wgraph.graph.weights import (
    FlowWeight,
    WeightConverter,
    flow_available,
    flow_cost,
    identity_weight,
    zero_weight,
)

__all__ = [
    # Version
    "__version__",
    # Graph
    "WeightedGraph",
    "Edge",
    "EdgeState",
    "GraphObservers",
    "INF",
    # Weights
    "FlowWeight",
    "WeightConverter",
    "identity_weight",
    "zero_weight",
    "flow_cost",
    "flow_available",
    # Algorithms
    "bfs",
    "dijkstra",
    "bellman_ford",
    "kruskal",
    "prim",
    "ford_fulkerson",
    "edmonds_karp",
    "min_cost_flow",
    # Results
    "FlowSummary",
    "CostFlowSummary",
    # Errors
    "GraphError",
    "DuplicateNodeError",
    "UnknownNodeError",
    "InvalidOperationError",
    "WeightTypeError",
    "ImbalanceError",
    "NegativeCycleError",
    "UnreachableError",
    # Configuration
    "EngineConfig",
    "ENGINE_CONFIG",
    "logging",
]
