"""Graph primitives.

This package provides the strict weighted graph type `WeightedGraph`, its
`Edge` view, the `FlowWeight` record with the stock weight converters, and
the observation hooks used by presentation layers.
"""
