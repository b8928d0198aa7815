"""
Core Models - Person, Group, Network and simulation graph structures.
"""

from relnet.core.models.person import (
    DOMAIN_FIELDS,
    Group,
    Network,
    Person,
    Pin,
    Scale,
    Vector2,
    people_by_id,
)
from relnet.core.models.graph import GraphData, Link, SimulationNode

__all__ = [
    "DOMAIN_FIELDS",
    "Group",
    "Network",
    "Person",
    "Pin",
    "Scale",
    "Vector2",
    "people_by_id",
    "GraphData",
    "Link",
    "SimulationNode",
]
