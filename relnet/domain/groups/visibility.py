"""
Visibility Index for relnet.

Decides which nodes are drawn given group-level and node-level show/hide
toggles. Visibility is a presentation flag only: nodes are never removed
from the reconciled graph data, so their simulation positions survive a
group being hidden and shown again.

Resolution order for one person:
1. an explicit per-node flag wins
2. otherwise a group member is visible if any of its groups is showing
3. otherwise (no groups) it follows ``show_nodes_without_groups``;
   group nodes themselves are always visible by default
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Literal, Mapping, Sequence

from relnet.core.models.person import Group, Person, people_by_id
from relnet.domain.groups.membership import group_ids, members_of, membership_index
from relnet.utils.logging import get_logger

logger = get_logger("groups.visibility")

ALL_GROUPS: Literal["all"] = "all"


def compute_visibility(
    people: Sequence[Person],
    group_filter: Mapping[str, bool],
    node_filter: Mapping[str, bool],
    groups: Sequence[Group] | None = None,
    show_nodes_without_groups: bool = True,
) -> set[str]:
    """Compute the set of visible person ids.

    Args:
        people: Authoritative entity list
        group_filter: group id -> showing; missing groups are showing
        node_filter: person id -> explicit visibility
        groups: Optional group aggregates
        show_nodes_without_groups: Visibility of people in no group

    Returns:
        Ids of visible people
    """
    memberships = membership_index(people, groups)
    visible: set[str] = set()

    for person in people:
        explicit = node_filter.get(person.id)
        if explicit is not None:
            shown = explicit
        elif memberships.get(person.id):
            shown = any(group_filter.get(gid, True) for gid in memberships[person.id])
        elif person.is_group:
            shown = True
        else:
            shown = show_nodes_without_groups

        if shown:
            visible.add(person.id)

    return visible


@dataclass
class VisibilityLists:
    """Members of one group (or everyone) split by visibility."""

    all: list[Person] = field(default_factory=list)
    visible: list[Person] = field(default_factory=list)
    hidden: list[Person] = field(default_factory=list)


def _by_name(person: Person) -> str:
    return person.name.lower()


class VisibilityIndex:
    """Mutable filter state for one network view.

    Group toggles are bulk operations over the group's members. A member
    whose flag was set directly after the group's previous toggle, and
    which points the other way, keeps its own state (last writer wins per
    node).
    """

    def __init__(self, show_nodes_without_groups: bool = True):
        self.group_filter: dict[str, bool] = {}
        self.node_filter: dict[str, bool] = {}
        self.show_nodes_without_groups = show_nodes_without_groups
        self._clock = itertools.count(1)
        self._group_stamps: dict[str, int] = {}
        self._direct_stamps: dict[str, int] = {}

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_group_showing(self, group_id: str) -> bool:
        return self.group_filter.get(group_id, True)

    def visible_ids(
        self,
        people: Sequence[Person],
        groups: Sequence[Group] | None = None,
    ) -> set[str]:
        return compute_visibility(
            people,
            self.group_filter,
            self.node_filter,
            groups,
            self.show_nodes_without_groups,
        )

    def is_visible(
        self,
        person_id: str,
        people: Sequence[Person],
        groups: Sequence[Group] | None = None,
    ) -> bool:
        return person_id in self.visible_ids(people, groups)

    def visibility_map(
        self,
        people: Sequence[Person],
        groups: Sequence[Group] | None = None,
    ) -> dict[str, bool]:
        """id -> visible, consumed by the rendering surface."""
        visible = self.visible_ids(people, groups)
        return {pid: pid in visible for pid in people_by_id(people)}

    def visibility_lists(
        self,
        group_id: str,
        people: Sequence[Person],
        groups: Sequence[Group] | None = None,
    ) -> VisibilityLists:
        """Members of ``group_id`` (or everyone for ``"all"``) sorted by name."""
        index = people_by_id(people)
        if group_id == ALL_GROUPS:
            members = list(index.values())
        else:
            member_ids = members_of(group_id, people, groups)
            members = [p for p in index.values() if p.id in member_ids]

        visible = self.visible_ids(people, groups)
        lists = VisibilityLists(all=sorted(members, key=_by_name))
        for person in lists.all:
            (lists.visible if person.id in visible else lists.hidden).append(person)
        return lists

    def active_groups_by_person(
        self,
        people: Sequence[Person],
        groups: Sequence[Group] | None = None,
    ) -> dict[str, list[str]]:
        """Per person, the showing groups it belongs to."""
        return {
            pid: [gid for gid in gids if self.is_group_showing(gid)]
            for pid, gids in membership_index(people, groups).items()
        }

    # ------------------------------------------------------------------
    # Toggles
    # ------------------------------------------------------------------

    def set_node_visibility(self, person_id: str, show: bool) -> None:
        """Direct per-node toggle."""
        self.node_filter[person_id] = show
        self._direct_stamps[person_id] = next(self._clock)

    def toggle_node(
        self,
        person_id: str,
        people: Sequence[Person],
        groups: Sequence[Group] | None = None,
    ) -> bool:
        """Flip a node's effective visibility. Returns the new state."""
        show = not self.is_visible(person_id, people, groups)
        self.set_node_visibility(person_id, show)
        return show

    def toggle_group(
        self,
        group_id: str,
        people: Sequence[Person],
        groups: Sequence[Group] | None = None,
        show: bool | None = None,
    ) -> bool:
        """Show or hide a group and bulk-apply the state to its members.

        Args:
            group_id: Group to toggle
            people: Authoritative entity list
            groups: Optional group aggregates
            show: Target state; flips the current state when None

        Returns:
            The group's new state
        """
        if show is None:
            show = not self.is_group_showing(group_id)

        previous_stamp = self._group_stamps.get(group_id, 0)
        stamp = next(self._clock)
        kept: list[str] = []

        for member in sorted(members_of(group_id, people, groups)):
            direct = self._direct_stamps.get(member, 0)
            if direct > previous_stamp and self.node_filter.get(member) != show:
                kept.append(member)
                continue
            self.node_filter[member] = show

        self.group_filter[group_id] = show
        self._group_stamps[group_id] = stamp

        if kept:
            logger.debug(f"Group '{group_id}' toggle kept direct state for {kept}")
        return show

    def toggle_all_groups(
        self,
        people: Sequence[Person],
        groups: Sequence[Group] | None = None,
        show: bool | None = None,
    ) -> bool:
        """Show or hide every group. Flips based on whether all are showing."""
        ids = group_ids(people, groups)
        if show is None:
            show = not all(self.is_group_showing(gid) for gid in ids)
        for gid in ids:
            self.toggle_group(gid, people, groups, show=show)
        return show

    def toggle_all_nodes(
        self,
        group_id: str,
        people: Sequence[Person],
        groups: Sequence[Group] | None = None,
        show: bool | None = None,
    ) -> bool:
        """Directly set every member of ``group_id`` (or everyone for ``"all"``)."""
        lists = self.visibility_lists(group_id, people, groups)
        if show is None:
            show = len(lists.visible) < len(lists.all)
        for person in lists.all:
            self.set_node_visibility(person.id, show)
        return show

    def reset(self) -> None:
        """Forget every toggle (used when switching networks)."""
        self.group_filter.clear()
        self.node_filter.clear()
        self._group_stamps.clear()
        self._direct_stamps.clear()
