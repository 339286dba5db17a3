"""Error taxonomy for graph construction and algorithm failures.

Every error derives from `GraphError` and from the builtin exception that
best describes it, so callers may catch either the package base class or the
familiar builtin (``ValueError``, ``TypeError``, ``RuntimeError``).
"""

from __future__ import annotations


class GraphError(Exception):
    """Base class for all wgraph errors."""


class DuplicateNodeError(GraphError, ValueError):
    """A node equal to one already registered was added."""


class UnknownNodeError(GraphError, ValueError):
    """A node referenced by an operation is not registered in the graph."""


class InvalidOperationError(GraphError, RuntimeError):
    """The operation is not valid for this graph's kind or current content."""


class WeightTypeError(GraphError, TypeError):
    """A flow algorithm met an edge weight that is not a FlowWeight."""


class ImbalanceError(GraphError, ValueError):
    """Supply and demand of a min-cost flow problem do not cancel."""


class NegativeCycleError(GraphError, RuntimeError):
    """A cycle of negative total weight is reachable from the search root."""


class UnreachableError(GraphError, RuntimeError):
    """No path connects the remaining supply to the remaining demand."""
