"""Graph algorithms operating in place on a `WeightedGraph`.

Traversal (`bfs`), shortest paths (`spf`), spanning trees (`mst`), maximum
flow (`max_flow`) and minimum-cost flow (`min_cost_flow`).
"""
