"""Observation hooks for presentation layers.

A graph exposes exactly two notification channels: edge-state changes and
node-focus changes. Callbacks run synchronously inside algorithm loops and
must not mutate the graph they observe.
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Any, Callable, Hashable, List

if TYPE_CHECKING:
    from wgraph.graph.weighted_graph import Edge


class EdgeState(IntEnum):
    """Highlight state of an edge as set by the algorithms."""

    #: Untouched by the last algorithm run.
    DEFAULT = 0
    #: Part of a shortest-path tree or spanning tree.
    SELECTED = 1
    #: Carries positive flow with capacity to spare.
    FLOW = 2
    #: Carries flow up to its capacity.
    SATURATED = 3


EdgeStateCallback = Callable[["Edge", EdgeState, EdgeState], Any]
NodeFocusCallback = Callable[[Hashable], Any]


class GraphObservers:
    """Registry of edge-state and node-focus callbacks for one graph.

    Edge-state callbacks receive ``(edge, old_state, new_state)``; node-focus
    callbacks receive the focused node. Exceptions raised by a callback
    propagate to whoever triggered the notification.
    """

    def __init__(self) -> None:
        self._edge_state: List[EdgeStateCallback] = []
        self._node_focus: List[NodeFocusCallback] = []

    def __len__(self) -> int:
        return len(self._edge_state) + len(self._node_focus)

    def subscribe_edge_state(self, callback: EdgeStateCallback) -> EdgeStateCallback:
        """Register `callback`; returns it so this can be used as a decorator."""
        self._edge_state.append(callback)
        return callback

    def unsubscribe_edge_state(self, callback: EdgeStateCallback) -> None:
        self._edge_state.remove(callback)

    def subscribe_node_focus(self, callback: NodeFocusCallback) -> NodeFocusCallback:
        """Register `callback`; returns it so this can be used as a decorator."""
        self._node_focus.append(callback)
        return callback

    def unsubscribe_node_focus(self, callback: NodeFocusCallback) -> None:
        self._node_focus.remove(callback)

    def notify_edge_state(self, edge: Edge, old: EdgeState, new: EdgeState) -> None:
        for callback in tuple(self._edge_state):
            callback(edge, old, new)

    def notify_node_focus(self, node: Hashable) -> None:
        for callback in tuple(self._node_focus):
            callback(node)
