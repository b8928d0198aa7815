"""
Graph Reconciler for relnet.

Keeps the simulation-owned graph data in step with the authoritative
entity list without discarding positions, velocities or pins.

Two classification strategies are supported:

- ``"cardinality"`` compares the length of the entity list with the size of
  the known-id set. More people means additions, fewer means deletions, and
  an equal count means a field-level update. A delete and an add landing in
  the same snapshot are therefore seen as an update and the new person is
  not added until the next growth.
- ``"symmetric"`` (default) classifies by the symmetric difference of ids,
  so additions, deletions and field updates can all happen in one pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Literal, Sequence

from relnet.core.models.graph import GraphData, SimulationNode
from relnet.core.models.person import Person, people_by_id
from relnet.domain.graph.links import annotate_neighbors, derive_links
from relnet.utils.logging import get_logger

logger = get_logger("graph.reconciler")

Strategy = Literal["symmetric", "cardinality"]


@dataclass
class ReconcileResult:
    """Outcome of one reconciliation pass."""

    graph_data: GraphData
    ids: set[str]
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    # Known ids with no matching person (inconsistent snapshot)
    skipped: list[str] = field(default_factory=list)
    pinned: list[str] = field(default_factory=list)
    # Graph went from empty to populated; the view should be recentered
    recenter: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed or self.updated)


def apply_pins(nodes: Iterable[SimulationNode]) -> list[str]:
    """Write every node's pin into its fixed-position fields.

    Returns:
        Ids of the pinned nodes
    """
    return [node.id for node in nodes if node.apply_pin()]


class GraphReconciler:
    """Converts an entity list plus previous graph data into new graph data.

    Usage:
        reconciler = GraphReconciler()
        result = reconciler.reconcile(surface.get_graph_data(), people, known_ids)
        surface.set_graph_data(result.graph_data)
        known_ids = result.ids
    """

    def __init__(self, strategy: Strategy = "symmetric"):
        if strategy not in ("symmetric", "cardinality"):
            raise ValueError(f"Unknown reconcile strategy: {strategy!r}")
        self.strategy = strategy

    def reconcile(
        self,
        previous: GraphData | None,
        people: Sequence[Person],
        existing_ids: Iterable[str],
    ) -> ReconcileResult:
        """Run one reconciliation pass.

        Args:
            previous: Graph data last handed to the surface, or None
            people: Authoritative, ordered entity list
            existing_ids: Ids the reconciler last knew about

        Returns:
            ReconcileResult holding the new graph data and id set
        """
        previous = previous if previous is not None else GraphData.empty()
        nodes = previous.nodes
        ids = set(existing_ids)
        index = people_by_id(people)
        was_empty = len(nodes) == 0

        result = ReconcileResult(graph_data=previous, ids=ids)

        if self.strategy == "cardinality":
            nodes = self._classify_by_count(nodes, people, index, result)
        else:
            nodes = self._classify_by_difference(nodes, people, index, result)

        links = derive_links(nodes, people)
        annotate_neighbors(nodes, links)
        result.pinned = apply_pins(nodes)
        result.graph_data = GraphData(nodes=nodes, links=links)
        result.recenter = was_empty and len(nodes) > 0

        if result.changed or result.skipped:
            logger.debug(
                f"Reconciled {len(nodes)} nodes, {len(links)} links "
                f"(+{len(result.added)} -{len(result.removed)} ~{len(result.updated)} "
                f"skipped={len(result.skipped)})"
            )
        return result

    # ------------------------------------------------------------------
    # Classification strategies
    # ------------------------------------------------------------------

    def _classify_by_count(
        self,
        nodes: list[SimulationNode],
        people: Sequence[Person],
        index: dict[str, Person],
        result: ReconcileResult,
    ) -> list[SimulationNode]:
        ids = result.ids
        if len(index) > len(ids):
            return self._add_people(nodes, people, result)
        if len(index) < len(ids):
            return self._remove_people(nodes, index, result)
        self._update_nodes(nodes, index, result)
        return nodes

    def _classify_by_difference(
        self,
        nodes: list[SimulationNode],
        people: Sequence[Person],
        index: dict[str, Person],
        result: ReconcileResult,
    ) -> list[SimulationNode]:
        if result.ids - index.keys():
            nodes = self._remove_people(nodes, index, result)
        # Surviving nodes are diffed before the new ones are appended
        self._update_nodes(nodes, index, result)
        if index.keys() - result.ids:
            nodes = self._add_people(nodes, people, result)
        return nodes

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _add_people(
        self,
        nodes: list[SimulationNode],
        people: Sequence[Person],
        result: ReconcileResult,
    ) -> list[SimulationNode]:
        ids = result.ids
        present = {node.id for node in nodes}
        new_nodes: list[SimulationNode] = []
        for person in people:
            if person.id in ids:
                continue
            ids.add(person.id)
            if person.id in present:
                continue
            new_nodes.append(SimulationNode.from_person(person))
            result.added.append(person.id)

        if not new_nodes:
            return nodes

        if not nodes:
            # A lone first node has no neighbors pulling it into frame
            first = new_nodes[0]
            first.x = 0.0
            first.y = 0.0

        return [*nodes, *new_nodes]

    def _remove_people(
        self,
        nodes: list[SimulationNode],
        index: dict[str, Person],
        result: ReconcileResult,
    ) -> list[SimulationNode]:
        ids = result.ids
        deleted = [node_id for node_id in ids if node_id not in index]
        if not deleted:
            return nodes

        for node_id in deleted:
            ids.discard(node_id)
        deleted_set = set(deleted)
        result.removed.extend(n.id for n in nodes if n.id in deleted_set)
        return [n for n in nodes if n.id not in deleted_set]

    def _update_nodes(
        self,
        nodes: list[SimulationNode],
        index: dict[str, Person],
        result: ReconcileResult,
    ) -> None:
        for position, node in enumerate(nodes):
            person = index.get(node.id)
            if person is None:
                logger.debug(f"No person record for node '{node.id}'; skipping")
                result.skipped.append(node.id)
                continue
            if node.differs_from(person):
                nodes[position] = node.merged_with(person)
                result.updated.append(node.id)


def reconcile(
    previous: GraphData | None,
    people: Sequence[Person],
    existing_ids: Iterable[str],
    strategy: Strategy = "symmetric",
) -> tuple[GraphData, set[str]]:
    """Functional form of :meth:`GraphReconciler.reconcile`.

    Returns:
        ``(new_graph_data, new_id_set)``
    """
    result = GraphReconciler(strategy).reconcile(previous, people, existing_ids)
    return result.graph_data, result.ids
