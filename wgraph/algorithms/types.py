"""Result containers for the flow algorithms."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Hashable, List, Tuple

# Arc identifier: (source_node, target_node)
Arc = Tuple[Hashable, Hashable]


@dataclass(frozen=True)
class FlowSummary:
    """Summary of a max-flow computation.

    Attributes:
        total_flow: Maximum flow value achieved.
        edge_flow: Final ``flow`` of every arc carrying positive flow. Of an
            antiparallel pair only the arc in the net direction is listed;
            its partner ends with negative flow and is neither listed nor
            highlighted.
        residual_cap: Final ``available`` capacity of every arc.
        reachable: Source side S of the min-cut (reachable in the residual graph).
        unreachable: Sink side T of the min-cut.
        min_cut: Arcs crossing from S to T.
        cut_capacity: Summed capacity of the `min_cut` arcs.
    """

    total_flow: int
    edge_flow: Dict[Arc, int]
    residual_cap: Dict[Arc, int]
    reachable: FrozenSet[Hashable]
    unreachable: FrozenSet[Hashable]
    min_cut: List[Arc]
    cut_capacity: int


@dataclass(frozen=True)
class CostFlowSummary:
    """Summary of a min-cost flow computation.

    Attributes:
        total_cost: Summed cost of all shipped units.
        edge_flow: Net units shipped over each arc (arcs with none omitted).
        iterations: Number of augmenting paths used.
    """

    total_cost: int
    edge_flow: Dict[Arc, int]
    iterations: int
