"""relnet - relationship network graph engine."""

from .core.event_bus import EventBus
from .core.models import GraphData, Group, Link, Network, Person, SimulationNode

__version__ = "0.4.0"

__all__ = [
    "EventBus",
    "GraphData",
    "Group",
    "Link",
    "Network",
    "Person",
    "SimulationNode",
]
