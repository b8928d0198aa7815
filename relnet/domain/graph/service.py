"""Graph Sync Service for relnet.

Listens for entity-list and network changes on the event bus, reconciles
the simulation graph held by the rendering surface and publishes the
result together with the current visibility map.
"""

from __future__ import annotations

from typing import Sequence

from relnet.app.config import GraphConfig, PathConfig
from relnet.core import events
from relnet.core.event_bus import EventBus, EventPayload
from relnet.core.models.graph import GraphData
from relnet.core.models.person import Group, Network, Person
from relnet.domain.graph.reconciler import GraphReconciler, ReconcileResult
from relnet.domain.graph.surface import PinReasserter, RenderingSurface
from relnet.domain.groups.visibility import VisibilityIndex
from relnet.domain.paths.finder import Path, find_paths
from relnet.utils.logging import get_logger, log_operation

logger = get_logger("graph.service")


class GraphSyncService:
    """Keeps one network view's graph data in step with its entity list."""

    def __init__(
        self,
        event_bus: EventBus,
        surface: RenderingSurface | None = None,
        graph_config: GraphConfig | None = None,
        path_config: PathConfig | None = None,
    ):
        self.event_bus = event_bus
        self.graph_config = graph_config or GraphConfig()
        self.path_config = path_config or PathConfig()
        self.reconciler = GraphReconciler(self.graph_config.reconcile_strategy)
        self.visibility = VisibilityIndex()

        self.network_id: str | None = None
        self.people: list[Person] = []
        self.groups: list[Group] = []

        self._surface: RenderingSurface | None = None
        self._pins: PinReasserter | None = None
        self._known_ids: set[str] = set()
        if surface is not None:
            self.attach_surface(surface)

    async def start(self) -> None:
        """Subscribe to entity-list, network and path request events."""
        await self.event_bus.subscribe(events.TOPIC_NETWORK_CHANGED, self.handle_network_changed)
        await self.event_bus.subscribe(events.TOPIC_PEOPLE_CHANGED, self.handle_people_changed)
        await self.event_bus.subscribe(events.TOPIC_PATHS_REQUESTED, self.handle_paths_requested)

    # ------------------------------------------------------------------
    # Surface
    # ------------------------------------------------------------------

    @property
    def surface(self) -> RenderingSurface | None:
        return self._surface

    def attach_surface(self, surface: RenderingSurface) -> None:
        """Attach the rendering surface and build its graph for the current people.

        Graph data already on the surface is adopted when every node in it
        belongs to the current people; anything else is left over from
        another network and is replaced wholesale.
        """
        if self._pins is not None:
            self._pins.cancel()
        self._surface = surface
        self._pins = PinReasserter(surface, self.graph_config.pin_settle_delay_ms)

        current = surface.get_graph_data()
        held = set(current.node_ids()) if current is not None else set()
        if held and held <= {p.id for p in self.people}:
            self._known_ids = held
        else:
            if held:
                logger.debug(f"Discarding {len(held)} stale node(s) held by the attached surface")
                surface.set_graph_data(GraphData.empty())
            self._known_ids = set()
        if self.people:
            self.sync(self.people)

    def detach_surface(self) -> None:
        if self._pins is not None:
            self._pins.cancel()
        self._surface = None
        self._pins = None
        self._known_ids = set()

    @property
    def pin_reassertion_pending(self) -> bool:
        return self._pins is not None and self._pins.pending

    def resize(self, width: float, height: float) -> None:
        """Resize the surface and recenter on the origin."""
        if self._surface is None:
            return
        self._surface.set_size(width, height)
        self._surface.center_on(0.0, 0.0, self.graph_config.center_duration_ms)

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    def switch_network(self, network: Network) -> ReconcileResult | None:
        """Replace the graph data wholesale for a different network."""
        if self._pins is not None:
            self._pins.cancel()

        self.network_id = network.id
        self.people = list(network.people)
        self.groups = list(network.groups)
        self.visibility.reset()
        self._known_ids = set()

        if self._surface is None:
            logger.debug(f"No surface attached; deferring graph build for '{network.id}'")
            return None

        self._surface.set_graph_data(GraphData.empty())
        log_operation(logger, "Switched network", {"network_id": network.id, "people": len(self.people)})
        return self.sync(self.people)

    def sync(self, people: Sequence[Person]) -> ReconcileResult | None:
        """Reconcile the surface's current graph data with ``people``.

        Returns:
            The reconcile result, or None when no surface is attached
        """
        self.people = list(people)
        if self._surface is None or self._pins is None:
            logger.debug("No surface attached; skipping reconciliation")
            return None

        # Always the data the surface holds now, not an earlier reference
        previous = self._surface.get_graph_data()
        result = self.reconciler.reconcile(previous, self.people, self._known_ids)
        self._known_ids = result.ids

        self._surface.set_graph_data(result.graph_data)
        if result.recenter:
            self._surface.center_on(0.0, 0.0, self.graph_config.center_duration_ms)
        if result.pinned:
            self._pins.schedule()
        return result

    def visibility_map(self) -> dict[str, bool]:
        return self.visibility.visibility_map(self.people, self.groups)

    async def toggle_group(self, group_id: str, show: bool | None = None) -> bool:
        """Bulk-toggle a group and publish the new visibility map."""
        state = self.visibility.toggle_group(group_id, self.people, self.groups, show=show)
        await self._publish_visibility()
        return state

    async def toggle_node(self, person_id: str, show: bool | None = None) -> bool:
        """Directly toggle one node and publish the new visibility map."""
        if show is None:
            state = self.visibility.toggle_node(person_id, self.people, self.groups)
        else:
            self.visibility.set_node_visibility(person_id, show)
            state = show
        await self._publish_visibility()
        return state

    def paths(self, from_id: str, to_id: str, max_depth: int | None = None) -> list[Path]:
        depth = max_depth if max_depth is not None else self.path_config.default_max_depth
        return find_paths(self.people, from_id, to_id, depth)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    async def handle_network_changed(self, payload: EventPayload) -> None:
        network = payload.get("network")
        if not isinstance(network, Network):
            logger.warning("network.changed event without a network; ignoring")
            return
        result = self.switch_network(network)
        await self._publish_graph_updated(result)

    async def handle_people_changed(self, payload: EventPayload) -> None:
        network_id = payload.get("network_id")
        if self.network_id is not None and network_id != self.network_id:
            logger.debug(f"Ignoring people for inactive network '{network_id}'")
            return
        result = self.sync(payload.get("people", []))
        await self._publish_graph_updated(result)

    async def handle_paths_requested(self, payload: EventPayload) -> None:
        from_id = payload.get("from_id", "")
        to_id = payload.get("to_id", "")
        found = self.paths(from_id, to_id, payload.get("max_depth"))
        await self.event_bus.publish(
            events.TOPIC_PATHS_FOUND,
            events.create_paths_found_event(from_id, to_id, found),
        )

    async def _publish_visibility(self) -> None:
        await self.event_bus.publish(
            events.TOPIC_VISIBILITY_CHANGED,
            events.create_visibility_changed_event(self.network_id or "", self.visibility_map()),
        )

    async def _publish_graph_updated(self, result: ReconcileResult | None) -> None:
        if result is None:
            return
        await self.event_bus.publish(
            events.TOPIC_GRAPH_UPDATED,
            events.create_graph_updated_event(
                network_id=self.network_id or "",
                node_count=len(result.graph_data.nodes),
                link_count=len(result.graph_data.links),
                visibility=self.visibility_map(),
            ),
        )
