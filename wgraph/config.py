"""Configuration for wgraph algorithms."""

import sys
from dataclasses import dataclass


@dataclass
class EngineConfig:
    """Tunables for the flow algorithms."""

    # Label shown for the temporary super-source node of min-cost flow
    super_source_label: str = "[SOURCE]"

    # If True, each super-source arc carries exactly its node's excess;
    # otherwise it carries `unlimited_capacity`.
    bounded_super_source: bool = True

    # Capacity used for "unbounded" arcs
    unlimited_capacity: int = sys.maxsize

    # Emit the S/T partition of every max-flow run at DEBUG level
    log_min_cut: bool = True

    def super_source_capacity(self, excess: int) -> int:
        """Capacity of the super-source arc feeding a node with `excess` supply."""
        if self.bounded_super_source:
            return excess
        return self.unlimited_capacity


# Global configuration instance
ENGINE_CONFIG = EngineConfig()
