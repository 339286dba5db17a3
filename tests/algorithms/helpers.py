"""Random graph builders returning a WeightedGraph and its networkx twin.

networkx serves as the reference implementation in the cross-check tests.
"""

from __future__ import annotations

import random
from itertools import combinations
from typing import Dict, Tuple

import networkx as nx
from networkx.utils import UnionFind

from wgraph.graph.weighted_graph import WeightedGraph
from wgraph.graph.weights import FlowWeight


def random_weighted(
    seed: int,
    n: int = 7,
    p: float = 0.4,
    low: int = 1,
    high: int = 9,
    directed: bool = True,
) -> Tuple[WeightedGraph, nx.Graph]:
    """Random integer-weighted graph on nodes ``0..n-1``, no self-loops."""
    rng = random.Random(seed)
    g = WeightedGraph(directed=directed)
    ref = nx.DiGraph() if directed else nx.Graph()
    g.add_nodes(*range(n))
    ref.add_nodes_from(range(n))
    pairs = (
        [(u, v) for u in range(n) for v in range(n) if u != v]
        if directed
        else list(combinations(range(n), 2))
    )
    for u, v in pairs:
        if rng.random() < p:
            weight = rng.randint(low, high)
            g.add_edge(u, v, weight)
            ref.add_edge(u, v, weight=weight)
    return g, ref


def random_connected_undirected(
    seed: int, n: int = 7, extra: int = 5, high: int = 9
) -> Tuple[WeightedGraph, nx.Graph]:
    """Random connected undirected graph: a random spanning chain plus extras."""
    rng = random.Random(seed)
    g = WeightedGraph(directed=False)
    ref = nx.Graph()
    g.add_nodes(*range(n))
    ref.add_nodes_from(range(n))

    order = list(range(n))
    rng.shuffle(order)
    pairs = list(zip(order, order[1:]))
    others = [pair for pair in combinations(range(n), 2) if pair not in pairs]
    others = [(u, v) for u, v in others if (v, u) not in pairs]
    pairs.extend(rng.sample(others, min(extra, len(others))))

    for u, v in pairs:
        weight = rng.randint(1, high)
        g.add_edge(u, v, weight)
        ref.add_edge(u, v, weight=weight)
    return g, ref


def random_flow_network(
    seed: int, n: int = 7, p: float = 0.35, high: int = 10
) -> Tuple[WeightedGraph, nx.DiGraph]:
    """Random capacitated digraph (antiparallel arcs allowed), source 0, sink n-1."""
    rng = random.Random(seed)
    g = WeightedGraph(directed=True)
    ref = nx.DiGraph()
    g.add_nodes(*range(n))
    ref.add_nodes_from(range(n))
    for u in range(n):
        for v in range(n):
            if u != v and rng.random() < p:
                capacity = rng.randint(1, high)
                g.add_edge(u, v, FlowWeight(0, capacity))
                ref.add_edge(u, v, capacity=capacity)
    return g, ref


def random_cost_network(
    seed: int, n: int = 8, p: float = 0.45, cyclic: bool = False
) -> Tuple[WeightedGraph, nx.DiGraph, Dict[int, int], Dict[int, int]]:
    """Random cost network with balanced supply and demand.

    By default arcs only go from lower to higher node numbers. With
    ``cyclic`` any ordered pair may be joined, so cycles and antiparallel
    arcs appear; costs stay non-negative either way. Nodes ``0, 1`` supply,
    the last two nodes demand.

    Returns:
        Tuple of the graph, its networkx twin (``demand``/``weight``/
        ``capacity`` attributes), the excess map and the deficit map.
    """
    rng = random.Random(seed)
    g = WeightedGraph(directed=True)
    ref = nx.DiGraph()
    g.add_nodes(*range(n))
    ref.add_nodes_from(range(n), demand=0)
    pairs = (
        [(u, v) for u in range(n) for v in range(n) if u != v]
        if cyclic
        else list(combinations(range(n), 2))
    )
    for u, v in pairs:
        if rng.random() < p:
            cost = rng.randint(0, 9)
            capacity = rng.randint(1, 6)
            g.add_edge(u, v, FlowWeight(cost, capacity))
            ref.add_edge(u, v, weight=cost, capacity=capacity)

    excess = {0: rng.randint(1, 4), 1: rng.randint(1, 4)}
    total = sum(excess.values())
    first = rng.randint(1, total - 1)
    deficit = {n - 2: -first, n - 1: -(total - first)}
    for node, amount in {**excess, **deficit}.items():
        ref.nodes[node]["demand"] = -amount
    return g, ref, excess, deficit


def brute_force_mst_weight(ref: nx.Graph) -> float:
    """Smallest total weight over every spanning tree of a small graph."""
    n = ref.number_of_nodes()
    edges = list(ref.edges(data="weight"))
    best = None
    for subset in combinations(edges, n - 1):
        components = UnionFind(ref.nodes)
        acyclic = True
        for u, v, _ in subset:
            if components[u] == components[v]:
                acyclic = False
                break
            components.union(u, v)
        if acyclic:
            total = sum(w for _, _, w in subset)
            if best is None or total < best:
                best = total
    return best
