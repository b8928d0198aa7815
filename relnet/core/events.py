"""Canonical event definitions for relnet."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from .event_bus import EventPayload

# Event Topics
TOPIC_PEOPLE_CHANGED = "people.changed"
TOPIC_NETWORK_CHANGED = "network.changed"
TOPIC_GRAPH_UPDATED = "graph.updated"
TOPIC_VISIBILITY_CHANGED = "visibility.changed"
TOPIC_PATHS_REQUESTED = "paths.requested"
TOPIC_PATHS_FOUND = "paths.found"


def create_people_changed_event(network_id: str, people: Sequence[Any]) -> EventPayload:
    """Create an event carrying the new authoritative entity list."""
    return {
        "network_id": network_id,
        "people": list(people),
    }


def create_network_changed_event(network: Any) -> EventPayload:
    """Create an event signalling that the active network was switched."""
    return {
        "network_id": getattr(network, "id", None),
        "network": network,
    }


def create_graph_updated_event(
    network_id: str,
    node_count: int,
    link_count: int,
    visibility: Dict[str, bool],
) -> EventPayload:
    """Create a graph updated event (emitted after each reconciliation)."""
    return {
        "network_id": network_id,
        "node_count": node_count,
        "link_count": link_count,
        "visibility": visibility,
    }


def create_visibility_changed_event(network_id: str, visibility: Dict[str, bool]) -> EventPayload:
    """Create a visibility changed event."""
    return {
        "network_id": network_id,
        "visibility": visibility,
    }


def create_paths_requested_event(
    from_id: str,
    to_id: str,
    max_depth: int | None = None,
) -> EventPayload:
    """Create a path request event."""
    return {
        "from_id": from_id,
        "to_id": to_id,
        "max_depth": max_depth,
    }


def create_paths_found_event(from_id: str, to_id: str, paths: List[Any]) -> EventPayload:
    """Create a path result event."""
    return {
        "from_id": from_id,
        "to_id": to_id,
        "paths": paths,
    }
