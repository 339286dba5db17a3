"""Minimum-cost flow balancing supply and demand (successive shortest paths).

Arcs carry `FlowWeight`s reinterpreted as ``flow`` = per-unit cost and
``capacity`` = remaining capacity. A temporary super-source feeds every supply
node, which turns the multi-source problem into repeated single-source
Bellman-Ford searches. Each round ships as much as possible along the
cheapest path from the super-source to the closest demand node, then updates
residual arcs: the forward capacity shrinks and its paired reverse arc (cost
negated) gains the same amount.

Every arc has its own reverse arc. When an antiparallel original arc occupies
the reverse slot, the reverse arc is routed through a temporary split node
(see `CostResidualTracker`), so original arcs never stand in for residuals.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Literal, Mapping, Tuple, Union, overload

from wgraph.algorithms.base import (
    INF,
    require_digraph,
    require_flow_weights,
    require_node,
    reset_scratch,
    walk_to,
)
from wgraph.algorithms.residual import (
    Arc,
    CostResidualTracker,
    SplitNode,
    bottleneck,
)
from wgraph.algorithms.spf import bellman_ford
from wgraph.algorithms.types import CostFlowSummary
from wgraph.config import ENGINE_CONFIG
from wgraph.exceptions import ImbalanceError, UnreachableError
from wgraph.graph.observers import EdgeState
from wgraph.graph.weighted_graph import NodeID, WeightedGraph
from wgraph.graph.weights import FlowWeight, flow_cost
from wgraph.logging import get_logger

logger = get_logger(__name__)


class SuperSource:
    """Temporary node feeding all supply nodes; equal only to itself."""

    __slots__ = ("label",)

    def __init__(self, label: str) -> None:
        self.label = label

    def __repr__(self) -> str:
        return self.label


def _remaining_capacity(weight: FlowWeight) -> int:
    return weight.capacity


# @overload gives static callers the exact return type for each flag value.
@overload
def min_cost_flow(
    graph: WeightedGraph,
    excess: Mapping[NodeID, int],
    deficit: Mapping[NodeID, int],
    *,
    return_summary: Literal[False] = False,
) -> int: ...


@overload
def min_cost_flow(
    graph: WeightedGraph,
    excess: Mapping[NodeID, int],
    deficit: Mapping[NodeID, int],
    *,
    return_summary: Literal[True],
) -> Tuple[int, CostFlowSummary]: ...


def min_cost_flow(
    graph: WeightedGraph,
    excess: Mapping[NodeID, int],
    deficit: Mapping[NodeID, int],
    *,
    return_summary: bool = False,
) -> Union[int, Tuple[int, CostFlowSummary]]:
    """Ship all supply to all demand at minimum total cost.

    The input mappings are copied, never modified. When the call returns (or
    raises) the super-source is gone and every original arc is back in the
    adjacency; only the ``capacity`` values reflect the shipped flow.

    Args:
        graph: Directed graph whose arcs carry FlowWeight(cost, capacity).
        excess: Supply per node, positive amounts.
        deficit: Demand per node, negative amounts.
        return_summary: Also return a CostFlowSummary.

    Returns:
        Union[int, Tuple[int, CostFlowSummary]]: Total cost, or cost and summary.

    Raises:
        UnknownNodeError: If a supply or demand node is not registered.
        ImbalanceError: If ``sum(excess) != -sum(deficit)`` or an amount has
            the wrong sign.
        InvalidOperationError: If the graph is undirected.
        WeightTypeError: If an arc weight is not a FlowWeight.
        NegativeCycleError: If the residual graph has a negative-cost cycle.
        UnreachableError: If remaining supply cannot reach remaining demand.
    """
    reset_scratch(graph)
    for node in (*excess, *deficit):
        require_node(graph, node)
    _check_balances(excess, deficit)
    require_digraph(graph, "Min-cost flow")
    require_flow_weights(graph)

    supply = {n: amount for n, amount in excess.items() if amount}
    demand = {n: amount for n, amount in deficit.items() if amount}
    source = SuperSource(ENGINE_CONFIG.super_source_label)
    tracker = CostResidualTracker(
        graph, _remaining_capacity, ENGINE_CONFIG.unlimited_capacity
    )
    shipped: Dict[Arc, int] = defaultdict(int)
    total_cost = 0
    iterations = 0

    try:
        tracker.detach_exhausted()
        graph.add_node(source)
        for node, amount in supply.items():
            capacity = ENGINE_CONFIG.super_source_capacity(amount)
            graph.add_edge(source, node, FlowWeight(0, capacity))

        while supply:
            bellman_ford(graph, source, flow_cost, raise_on_negative_cycle=True)

            end = min(demand, key=lambda n: graph.nodes[n]["distance"])
            if graph.nodes[end]["distance"] == INF:
                raise UnreachableError(
                    f"No admissible flow: demand at '{end}' cannot be reached "
                    f"from the remaining supply {sorted(map(str, supply))}."
                )

            walk = walk_to(graph, end)
            first = walk[1]
            arcs = tracker.cost_arcs(walk)
            amount = min(bottleneck(tracker, walk), supply[first], -demand[end])
            path_cost = sum(tracker.weight(u, v).flow for u, v in arcs)
            total_cost += amount * path_cost
            _push(tracker, arcs, amount, shipped)
            iterations += 1

            supply[first] -= amount
            if not supply[first]:
                del supply[first]
                tracker.detached.pop((source, first), None)
                graph.remove_edge(source, first)
            demand[end] += amount
            if not demand[end]:
                del demand[end]

            logger.debug(
                "Min-cost flow iteration %d: %d unit(s) at cost %d along %s; "
                "balances %s",
                iterations,
                amount,
                path_cost,
                walk[1:],
                _balances(graph, source, supply, demand),
            )
    finally:
        tracker.restore()
        if source in graph:
            graph.remove_node(source)
        reset_scratch(graph)

    edge_flow = _highlight_shipped(graph, shipped)
    logger.debug(
        "Min-cost flow finished: cost %d in %d iteration(s)", total_cost, iterations
    )

    if return_summary:
        return total_cost, CostFlowSummary(total_cost, edge_flow, iterations)
    return total_cost


def _check_balances(
    excess: Mapping[NodeID, int], deficit: Mapping[NodeID, int]
) -> None:
    negative_supply = [n for n, amount in excess.items() if amount < 0]
    if negative_supply:
        raise ImbalanceError(f"Excess amounts must be positive: {negative_supply}.")
    positive_demand = [n for n, amount in deficit.items() if amount > 0]
    if positive_demand:
        raise ImbalanceError(f"Deficit amounts must be negative: {positive_demand}.")

    total_excess = sum(excess.values())
    total_deficit = sum(deficit.values())
    if total_excess != -total_deficit:
        raise ImbalanceError(
            f"Excess total {total_excess} does not balance deficit total "
            f"{total_deficit}."
        )


def _push(
    tracker: CostResidualTracker,
    arcs: List[Arc],
    amount: int,
    shipped: Dict[Arc, int],
) -> None:
    for arc in arcs:
        if tracker.is_original(*arc):
            shipped[arc] += amount
        else:
            # Pushing over a reverse arc cancels flow on its original
            shipped[tracker.pair[arc]] -= amount
        tracker.push(arc, amount)


def _balances(
    graph: WeightedGraph,
    source: SuperSource,
    supply: Mapping[NodeID, int],
    demand: Mapping[NodeID, int],
) -> List[int]:
    return [
        supply.get(n, demand.get(n, 0))
        for n in graph
        if n is not source and not isinstance(n, SplitNode)
    ]


def _highlight_shipped(
    graph: WeightedGraph, shipped: Mapping[Arc, int]
) -> Dict[Arc, int]:
    edge_flow = {}
    for (u, v), amount in shipped.items():
        if amount == 0 or not graph.has_edge(u, v):
            continue
        edge_flow[(u, v)] = amount
        weight: FlowWeight = graph.edge(u, v).weight  # type: ignore[union-attr]
        if amount > 0:
            state = EdgeState.SATURATED if weight.capacity <= 0 else EdgeState.FLOW
            graph.highlight(u, v, state)
    return edge_flow
