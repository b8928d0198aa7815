"""
Relationship path finder.

Answers "how is X related to Y" by enumerating every simple chain of
relationship entries between two people, up to a hop limit. Each hop
carries the directional reason string of the entry it traversed.

The relationship map is treated as a directed edge list: an entry
``A.relationships[B]`` lets the search step from A to B even if B has no
entry for A.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

import networkx as nx

from relnet.core.models.person import Person, people_by_id
from relnet.utils.logging import get_logger

logger = get_logger("paths.finder")


class Hop(NamedTuple):
    """One traversed relationship entry."""

    from_id: str
    to_id: str
    reason: str


Path = tuple[Hop, ...]


def build_relationship_graph(people: Sequence[Person]) -> nx.DiGraph:
    """Build a directed graph of relationship entries.

    Adjacency follows relationship-key order so traversals are
    deterministic. Entries pointing at unknown ids and self-entries are
    dropped.
    """
    index = people_by_id(people)
    graph = nx.DiGraph()
    for person in index.values():
        graph.add_node(person.id, name=person.name)

    for person in index.values():
        for other_id, pair in person.relationships.items():
            if other_id == person.id or other_id not in index:
                continue
            graph.add_edge(person.id, other_id, reason=pair[0])

    return graph


def find_paths(
    people: Sequence[Person],
    from_id: str,
    to_id: str,
    max_depth: int,
) -> list[Path]:
    """Every simple relationship path from ``from_id`` to ``to_id``.

    Depth-first, bounded by ``max_depth`` hops, never revisiting a node
    already on the current path. Paths are returned in discovery order,
    which follows each person's relationship-key order.

    Args:
        people: Authoritative entity list
        from_id: Start person id
        to_id: Target person id
        max_depth: Maximum number of hops per path

    Returns:
        List of paths; empty for self-queries, unknown ids or no route
    """
    if from_id == to_id or max_depth < 1:
        return []

    graph = build_relationship_graph(people)
    if from_id not in graph or to_id not in graph:
        return []

    paths: list[Path] = []
    hops: list[Hop] = []
    on_path = {from_id}
    # One adjacency iterator per node on the current path
    stack = [(from_id, iter(graph.adj[from_id].items()))]

    while stack:
        node_id, neighbors = stack[-1]
        step = next(neighbors, None)
        if step is None:
            stack.pop()
            if hops:
                hops.pop()
                on_path.discard(node_id)
            continue

        next_id, edge = step
        if next_id in on_path:
            continue
        hop = Hop(node_id, next_id, edge["reason"])
        if next_id == to_id:
            paths.append((*hops, hop))
        elif len(hops) + 1 < max_depth:
            hops.append(hop)
            on_path.add(next_id)
            stack.append((next_id, iter(graph.adj[next_id].items())))

    logger.debug(f"Found {len(paths)} path(s) {from_id} -> {to_id} (max_depth={max_depth})")
    return paths


def shortest_paths(people: Sequence[Person], from_id: str, to_id: str) -> list[Path]:
    """All shortest relationship paths from ``from_id`` to ``to_id``."""
    if from_id == to_id:
        return []

    graph = build_relationship_graph(people)
    if from_id not in graph or to_id not in graph:
        return []

    try:
        node_paths = list(nx.all_shortest_paths(graph, from_id, to_id))
    except nx.NetworkXNoPath:
        return []

    return [
        tuple(
            Hop(a, b, graph.edges[a, b]["reason"])
            for a, b in zip(node_path, node_path[1:])
        )
        for node_path in node_paths
    ]


def degrees_of_separation(people: Sequence[Person], from_id: str, to_id: str) -> int | None:
    """Hop count of the shortest path, 0 for self, None when unreachable."""
    if from_id == to_id:
        return 0 if from_id in people_by_id(people) else None
    found = shortest_paths(people, from_id, to_id)
    return len(found[0]) if found else None


def describe_path(path: Path, people: Sequence[Person]) -> str:
    """Render a path as a sentence, e.g.

    ``"Alice is sibling of Bob, who is parent of Carol"``
    """
    if not path:
        return ""

    index = people_by_id(people)

    def name(person_id: str) -> str:
        person = index.get(person_id)
        return person.name if person and person.name else person_id

    def clause(hop: Hop) -> str:
        if hop.reason:
            return f"is {hop.reason} of {name(hop.to_id)}"
        return f"is connected to {name(hop.to_id)}"

    parts = [f"{name(path[0].from_id)} {clause(path[0])}"]
    parts.extend(f"who {clause(hop)}" for hop in path[1:])
    return ", ".join(parts)
