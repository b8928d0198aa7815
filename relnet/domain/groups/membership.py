"""
Group membership queries.

Membership is always derived from the entity list; nothing here is
persisted. Both group shapes are supported:

- group nodes (``Person.is_group``), where anyone sharing a relationship
  entry with the group node, in either direction, is a member
- :class:`Group` aggregates with explicit ``member_ids``

Aggregates take precedence when an id names both.
"""

from __future__ import annotations

from typing import Sequence

from relnet.core.models.person import Group, Person, people_by_id


def group_ids(people: Sequence[Person], groups: Sequence[Group] | None = None) -> list[str]:
    """Ids of every group, aggregates first, each listed once, in order."""
    ids: list[str] = []
    for group in groups or ():
        if group.id not in ids:
            ids.append(group.id)
    for person in people:
        if person.is_group and person.id not in ids:
            ids.append(person.id)
    return ids


def members_of(
    group_id: str,
    people: Sequence[Person],
    groups: Sequence[Group] | None = None,
) -> set[str]:
    """Ids of the people belonging to ``group_id``.

    Only ids present in ``people`` are returned and a group never contains
    itself. Unknown group ids yield an empty set.
    """
    index = people_by_id(people)

    for group in groups or ():
        if group.id == group_id:
            return {m for m in group.member_ids if m in index and m != group_id}

    group_node = index.get(group_id)
    if group_node is None or not group_node.is_group:
        return set()

    members = {other for other in group_node.relationships if other in index}
    members.update(p.id for p in index.values() if group_id in p.relationships)
    members.discard(group_id)
    return members


def membership_index(
    people: Sequence[Person],
    groups: Sequence[Group] | None = None,
) -> dict[str, list[str]]:
    """Map every person id to the ids of the groups it belongs to."""
    index: dict[str, list[str]] = {p.id: [] for p in people}
    for gid in group_ids(people, groups):
        members = members_of(gid, people, groups)
        for person in people:
            if person.id in members and gid not in index[person.id]:
                index[person.id].append(gid)
    return index


def groups_of(
    person_id: str,
    people: Sequence[Person],
    groups: Sequence[Group] | None = None,
) -> list[str]:
    """Ids of the groups ``person_id`` belongs to, in group order."""
    return membership_index(people, groups).get(person_id, [])
