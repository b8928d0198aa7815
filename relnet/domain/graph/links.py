"""
Link derivation and neighbor caches.

Links are never persisted: every reconciliation pass expands the people's
relationship maps into directed links and rebuilds the per-node highlight
caches from scratch.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from relnet.core.models.graph import Link, SimulationNode
from relnet.core.models.person import Person
from relnet.utils.logging import get_logger

logger = get_logger("graph.links")


def derive_links(nodes: Sequence[SimulationNode], people: Iterable[Person]) -> list[Link]:
    """Expand relationship entries into directed links.

    One link is emitted per relationship entry whose owner and partner are
    both present in ``nodes``. A reciprocal relationship therefore yields two
    links (A->B and B->A); they are intentionally kept so the surface can
    animate flow both ways along one edge.

    Args:
        nodes: Current simulation nodes
        people: Authoritative entity list, in order

    Returns:
        Links in person order, then relationship-key order
    """
    present = {node.id for node in nodes}
    links: list[Link] = []
    seen_owners: set[str] = set()

    for person in people:
        if person.id not in present or person.id in seen_owners:
            continue
        seen_owners.add(person.id)
        for other_id in person.relationships:
            if other_id in present:
                links.append(Link(source=person.id, target=other_id))

    return links


def annotate_neighbors(nodes: Sequence[SimulationNode], links: Iterable[Link]) -> None:
    """Rebuild every node's ``neighbors`` and ``links`` caches in place."""
    by_id: dict[str, SimulationNode] = {}
    for node in nodes:
        node.neighbors = []
        node.links = []
        by_id.setdefault(node.id, node)

    for link in links:
        source = by_id.get(link.source)
        target = by_id.get(link.target)
        if source is None or target is None:
            logger.debug(f"Dropping dangling link {link.source} -> {link.target}")
            continue
        if source is target:
            source.links.append(link)
            continue

        source.neighbors.append(target)
        target.neighbors.append(source)
        source.links.append(link)
        target.links.append(link)


def highlight_set(node: SimulationNode) -> tuple[set[str], list[Link]]:
    """Node ids and links to highlight while ``node`` is hovered."""
    node_ids = {node.id}
    node_ids.update(neighbor.id for neighbor in node.neighbors)
    return node_ids, list(node.links)
