"""
Rendering surface seam.

The physics/rendering component owns node positions and exposes a mutable
get/set handle on the graph data. :class:`InMemorySurface` stands in for it
in tests and the CLI, and :class:`PinReasserter` works around surfaces that
reset fixed positions whenever they receive new graph data.
"""

from __future__ import annotations

import asyncio
import math
from typing import Protocol, runtime_checkable

from relnet.core.models.graph import GraphData
from relnet.domain.graph.reconciler import apply_pins
from relnet.utils.logging import get_logger

logger = get_logger("graph.surface")

# Initial placement used by d3-force for nodes without a position
_INITIAL_RADIUS = 10.0
_INITIAL_ANGLE = math.pi * (3.0 - math.sqrt(5.0))


@runtime_checkable
class RenderingSurface(Protocol):
    """What the engine needs from the visualization component."""

    def get_graph_data(self) -> GraphData | None: ...

    def set_graph_data(self, data: GraphData) -> None: ...

    def get_bounding_size(self) -> tuple[float, float]: ...

    def set_size(self, width: float, height: float) -> None: ...

    def center_on(self, x: float, y: float, duration_ms: int) -> None: ...


class InMemorySurface:
    """Headless rendering surface.

    Places unpositioned nodes on a phyllotaxis spiral around the origin,
    the way d3-force seeds a simulation, and records center requests.

    Args:
        width: Viewport width
        height: Viewport height
        resets_fixed_positions: Clear ``fx``/``fy`` on every
            :meth:`set_graph_data`, like force-graph does when it restarts
            its simulation
    """

    def __init__(
        self,
        width: float = 800.0,
        height: float = 600.0,
        resets_fixed_positions: bool = False,
    ):
        self.width = width
        self.height = height
        self.resets_fixed_positions = resets_fixed_positions
        self.center_calls: list[tuple[float, float, int]] = []
        self.set_count = 0
        self._graph_data: GraphData | None = None

    def get_graph_data(self) -> GraphData | None:
        return self._graph_data

    def set_graph_data(self, data: GraphData) -> None:
        for i, node in enumerate(data.nodes):
            if self.resets_fixed_positions:
                node.fx = None
                node.fy = None
            if node.x is None or node.y is None:
                radius = _INITIAL_RADIUS * math.sqrt(0.5 + i)
                angle = i * _INITIAL_ANGLE
                node.x = radius * math.cos(angle)
                node.y = radius * math.sin(angle)
            if node.vx is None:
                node.vx = 0.0
            if node.vy is None:
                node.vy = 0.0
        self._graph_data = data
        self.set_count += 1

    def get_bounding_size(self) -> tuple[float, float]:
        return (self.width, self.height)

    def set_size(self, width: float, height: float) -> None:
        self.width = width
        self.height = height

    def center_on(self, x: float, y: float, duration_ms: int) -> None:
        self.center_calls.append((x, y, duration_ms))


class PinReasserter:
    """Re-applies pins once the surface has settled after new graph data.

    The graph data is read from the surface when the timer fires, never
    captured at scheduling time, so the reassertion always targets the data
    the surface most recently received.
    """

    def __init__(self, surface: RenderingSurface, delay_ms: int = 300):
        self.surface = surface
        self.delay_ms = delay_ms
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self) -> None:
        """Schedule one reassertion, replacing any pending one.

        Without a running event loop the reassertion happens immediately.
        """
        self.cancel()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.reassert()
            return
        self._handle = loop.call_later(self.delay_ms / 1000.0, self._fire)

    def cancel(self) -> None:
        """Drop a pending reassertion (e.g. the active network changed)."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            logger.debug("Cancelled pending pin reassertion")

    def reassert(self) -> list[str]:
        """Apply pins to the surface's current graph data now."""
        data = self.surface.get_graph_data()
        if data is None:
            return []
        pinned = apply_pins(data.nodes)
        if pinned:
            logger.debug(f"Reasserted {len(pinned)} pin(s)")
        return pinned

    def _fire(self) -> None:
        self._handle = None
        self.reassert()
