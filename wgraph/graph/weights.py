"""Edge weight types and weight converters.

Algorithms stay agnostic of the concrete weight type: numeric algorithms take
a `WeightConverter` that maps a weight to a number, while flow algorithms
require `FlowWeight` records.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from wgraph.exceptions import WeightTypeError

#: Maps an arbitrary edge weight to the number an algorithm works with.
WeightConverter = Callable[[Any], float]


@dataclass
class FlowWeight:
    """Mutable flow/capacity pair carried by flow-network edges.

    For max-flow, ``flow`` is the current flow (negative on residual arcs) and
    ``capacity`` the arc capacity. Min-cost flow reuses the record with
    ``flow`` as the per-unit cost and ``capacity`` as the remaining capacity.

    Attributes:
        flow: Current flow, or per-unit cost in min-cost flow.
        capacity: Capacity, or remaining capacity in min-cost flow.
    """

    flow: int = 0
    capacity: int = 0

    @property
    def available(self) -> int:
        """Residual capacity left before saturation."""
        return self.capacity - self.flow

    def __str__(self) -> str:
        return f"[{self.flow},{self.capacity}]"


def identity_weight(weight: Any) -> float:
    """Use a numeric weight as-is."""
    return float(weight)


def zero_weight(weight: Any) -> float:
    return 0.0


def flow_cost(weight: FlowWeight) -> float:
    """Per-unit cost of a min-cost-flow arc."""
    return weight.flow


def flow_available(weight: FlowWeight) -> float:
    return weight.available


def require_flow_weight(weight: Any) -> FlowWeight:
    """Return `weight` unchanged if it is a FlowWeight.

    Raises:
        WeightTypeError: If `weight` is of any other type.
    """
    if not isinstance(weight, FlowWeight):
        raise WeightTypeError(
            f"Edge weight {weight!r} is a {type(weight).__name__}, not a FlowWeight."
        )
    return weight


__all__ = [
    "FlowWeight",
    "WeightConverter",
    "identity_weight",
    "zero_weight",
    "flow_cost",
    "flow_available",
    "require_flow_weight",
]
