"""
Person, Group and Network models for relnet.

A Person is the node-bearing entity of a network. Relationships are stored
on each Person as an ordered mapping ``other_id -> (reason_from_this,
reason_from_other)``; the write path keeps the two sides mirrored, but
readers treat every entry as an independent directed edge.

Groups come in two shapes:
- a Person with ``is_group=True`` whose members are the people it shares
  relationship entries with
- a separate :class:`Group` aggregate with an explicit ``member_ids`` list

Use :func:`relnet.domain.groups.membership.members_of` rather than
inspecting either shape directly.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ============================================================================
# Value Objects
# ============================================================================


class Vector2(BaseModel):
    """Immutable planar vector used for pins and node scale."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


Pin = Vector2
Scale = Vector2

# Reason pair: (this person in relation to the other, other in relation to this)
ReasonPair = tuple[str, str]


# ============================================================================
# Person Model
# ============================================================================


class Person(BaseModel):
    """A person (or group node) in a relationship network.

    Attributes:
        id: Stable unique identifier
        name: Display name
        relationships: Ordered map of partner id to reason pair
        thumbnail_url: Optional profile picture reference
        is_group: Node represents a group of people
        is_background: Node is drawn behind the others
        pin: Fixed position set by the user, or None
        scale: Node scale factors
        background_color: Node fill color
        text_color: Node label color
        hide_name_tag: Suppress the name label
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(description="Unique person ID")
    name: str = Field(default="", description="Display name")
    relationships: dict[str, ReasonPair] = Field(
        default_factory=dict,
        description="Partner id -> (reason from this, reason from partner)",
    )
    thumbnail_url: Optional[str] = Field(default=None)
    is_group: bool = False
    is_background: bool = False
    pin: Optional[Pin] = None
    scale: Scale = Field(default_factory=lambda: Vector2(x=1.0, y=1.0))
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    hide_name_tag: bool = False

    def __str__(self) -> str:
        kind = "Group" if self.is_group else "Person"
        return f"{kind}({self.name or self.id})"

    def __repr__(self) -> str:
        return f"<Person id={self.id} name={self.name!r} relationships={len(self.relationships)}>"

    def reason_to(self, other_id: str) -> str | None:
        """Reason describing this person in relation to ``other_id``."""
        pair = self.relationships.get(other_id)
        return pair[0] if pair else None

    def reason_from(self, other_id: str) -> str | None:
        """Reason describing ``other_id`` in relation to this person."""
        pair = self.relationships.get(other_id)
        return pair[1] if pair else None


# Fields the reconciler compares when deciding whether a node needs refreshing
DOMAIN_FIELDS: tuple[str, ...] = (
    "relationships",
    "thumbnail_url",
    "name",
    "pin",
    "scale",
    "is_background",
    "is_group",
    "background_color",
    "text_color",
    "hide_name_tag",
)


# ============================================================================
# Group Aggregate
# ============================================================================


class Group(BaseModel):
    """Group stored separately from people, with an explicit member list."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    name: str = ""
    member_ids: list[str] = Field(default_factory=list)
    background_color: Optional[str] = None
    text_color: Optional[str] = None


# ============================================================================
# Network
# ============================================================================


class Network(BaseModel):
    """Authoritative snapshot of one relationship network."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    name: str = ""
    people: list[Person] = Field(default_factory=list)
    groups: list[Group] = Field(default_factory=list)

    @property
    def person_ids(self) -> list[str]:
        return [p.id for p in self.people]

    def get_person(self, person_id: str) -> Person | None:
        return people_by_id(self.people).get(person_id)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def people_by_id(people: Iterable[Person]) -> dict[str, Person]:
    """Index people by id, keeping the first record when ids repeat."""
    index: dict[str, Person] = {}
    for person in people:
        index.setdefault(person.id, person)
    return index
