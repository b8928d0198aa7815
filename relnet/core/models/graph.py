"""
Simulation graph models for relnet.

These are the structures exchanged with the rendering surface. Nodes are
mutable and compared by identity: the surface keeps references to them and
writes positions and velocities into them between reconciliation passes.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Optional

from relnet.core.models.person import DOMAIN_FIELDS, Person, Pin, ReasonPair, Scale, Vector2


@dataclass(frozen=True)
class Link:
    """Directed link derived from one relationship entry."""

    source: str
    target: str


@dataclass(eq=False)
class SimulationNode:
    """Runtime, position-bearing representation of a Person.

    Domain fields mirror :class:`Person`. ``x``/``y``/``vx``/``vy`` belong to
    the physics simulation, ``fx``/``fy`` fix the node in place, and the
    ``neighbors``/``links`` caches exist only for highlight rendering.
    """

    id: str
    name: str = ""
    relationships: dict[str, ReasonPair] = field(default_factory=dict)
    thumbnail_url: Optional[str] = None
    is_group: bool = False
    is_background: bool = False
    pin: Optional[Pin] = None
    scale: Scale = field(default_factory=lambda: Vector2(x=1.0, y=1.0))
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    hide_name_tag: bool = False

    # Simulation-owned
    x: Optional[float] = None
    y: Optional[float] = None
    vx: Optional[float] = None
    vy: Optional[float] = None
    fx: Optional[float] = None
    fy: Optional[float] = None

    neighbors: list["SimulationNode"] = field(default_factory=list, repr=False)
    links: list[Link] = field(default_factory=list, repr=False)

    @classmethod
    def from_person(cls, person: Person) -> "SimulationNode":
        """Create a fresh node with no position from a person record."""
        return cls(id=person.id, **domain_values(person))

    def differs_from(self, person: Person) -> bool:
        """Whether any reconciled field differs from ``person`` (structurally)."""
        return any(
            getattr(self, name) != getattr(person, name) for name in DOMAIN_FIELDS
        )

    def merged_with(self, person: Person) -> "SimulationNode":
        """Shallow merge: domain fields from ``person``, everything else kept.

        Clearing a pin on the person also releases the fixed position.
        """
        merged = dataclasses.replace(self, **domain_values(person))
        if self.pin is not None and person.pin is None:
            merged.fx = None
            merged.fy = None
        return merged

    def apply_pin(self) -> bool:
        """Write the pin into the fixed-position fields. Returns True if pinned."""
        if self.pin is None:
            return False
        self.fx = self.pin.x
        self.fy = self.pin.y
        return True

    @property
    def is_fixed(self) -> bool:
        return self.fx is not None and self.fy is not None

    @property
    def position(self) -> tuple[float, float] | None:
        if self.x is None or self.y is None:
            return None
        return (self.x, self.y)


@dataclass
class GraphData:
    """``{nodes, links}`` unit handed to the rendering surface."""

    nodes: list[SimulationNode] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "GraphData":
        return cls()

    def node_ids(self) -> list[str]:
        return [n.id for n in self.nodes]

    def get_node(self, node_id: str) -> SimulationNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None


def domain_values(person: Person) -> dict[str, Any]:
    """Extract the reconciled fields of a person as node keyword arguments."""
    values = {name: getattr(person, name) for name in DOMAIN_FIELDS}
    # Nodes must not share the person's mutable map
    values["relationships"] = dict(person.relationships)
    return values
