"""
Node interaction under an explicit toolbar mode.

The toolbar mode decides what a drag or click on a node means. It is
passed in by whoever wires user input to the engine instead of being read
from ambient UI state.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from relnet.core.models.graph import SimulationNode
from relnet.core.models.person import Pin
from relnet.utils.logging import get_logger

logger = get_logger("graph.interaction")


class ToolbarMode(str, Enum):
    """Toolbar actions available on the network canvas."""
    VIEW = "VIEW"
    SELECT = "SELECT"
    MOVE = "MOVE"
    CREATE = "CREATE"
    LINK = "LINK"
    RESIZE = "RESIZE"
    DELETE = "DELETE"


ClickKind = Literal["focus", "select", "link_pending", "link", "delete", "none"]

_DRAG_MODES = frozenset({ToolbarMode.MOVE, ToolbarMode.SELECT})


@dataclass(frozen=True)
class ClickAction:
    """What the caller should do in response to a node click."""

    kind: ClickKind
    node_ids: tuple[str, ...] = ()


class NodeInteraction:
    """Translates drag/click gestures into engine-level actions.

    Usage:
        interaction = NodeInteraction(ToolbarMode.MOVE)
        pin = interaction.on_node_drag_end(node)
        if pin is not None:
            persist_pin(node.id, pin)
    """

    def __init__(self, mode: ToolbarMode = ToolbarMode.VIEW):
        self.mode = mode
        self._link_source: str | None = None

    def set_mode(self, mode: ToolbarMode) -> None:
        if mode != self.mode:
            self._link_source = None
        self.mode = mode

    @property
    def link_source(self) -> str | None:
        return self._link_source

    def can_drag(self) -> bool:
        return self.mode in _DRAG_MODES

    def on_node_drag_end(self, node: SimulationNode) -> Pin | None:
        """Fix a dragged node where it was dropped.

        Returns:
            The pin to persist, or None if dragging is disabled in this mode
        """
        if not self.can_drag() or node.x is None or node.y is None:
            return None
        node.fx = node.x
        node.fy = node.y
        return Pin(x=node.x, y=node.y)

    def on_node_click(self, node: SimulationNode) -> ClickAction:
        if self.mode is ToolbarMode.VIEW:
            return ClickAction("focus", (node.id,))
        if self.mode is ToolbarMode.SELECT:
            return ClickAction("select", (node.id,))
        if self.mode is ToolbarMode.DELETE:
            return ClickAction("delete", (node.id,))
        if self.mode is ToolbarMode.LINK:
            return self._link_click(node)
        return ClickAction("none")

    def _link_click(self, node: SimulationNode) -> ClickAction:
        if self._link_source is None:
            self._link_source = node.id
            return ClickAction("link_pending", (node.id,))
        if self._link_source == node.id:
            # Clicking the pending source again cancels the link
            self._link_source = None
            return ClickAction("none")

        source, self._link_source = self._link_source, None
        logger.debug(f"Link requested {source} <-> {node.id}")
        return ClickAction("link", (source, node.id))
