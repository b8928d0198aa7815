"""Graph Reconciler Tests.

Covers the add/remove/update classification, preservation of simulation
state, pins and the neighbor caches rebuilt on every pass.
"""

import unittest

from relnet.core.models.graph import GraphData, SimulationNode
from relnet.core.models.person import Vector2
from relnet.domain.graph.reconciler import GraphReconciler, reconcile
from relnet.domain.graph.surface import InMemorySurface, PinReasserter

from factories import connect, family, person, pinned, with_changes


def positions(data: GraphData) -> dict:
    return {n.id: (n.x, n.y, n.vx, n.vy) for n in data.nodes}


class ReconcilerTestBase(unittest.TestCase):
    strategy = "symmetric"

    def setUp(self) -> None:
        self.surface = InMemorySurface()
        self.reconciler = GraphReconciler(self.strategy)
        self.ids: set[str] = set()

    def sync(self, people):
        result = self.reconciler.reconcile(self.surface.get_graph_data(), people, self.ids)
        self.ids = result.ids
        self.surface.set_graph_data(result.graph_data)
        return result


class GraphReconcilerTest(ReconcilerTestBase):

    def test_first_node_is_centered_at_origin(self) -> None:
        result = self.reconciler.reconcile(None, [person("a")], set())

        node = result.graph_data.nodes[0]
        self.assertEqual((node.x, node.y), (0.0, 0.0))
        self.assertTrue(result.recenter)
        self.assertEqual(result.added, ["a"])

    def test_only_the_very_first_node_gets_a_position(self) -> None:
        result = self.reconciler.reconcile(None, family(), set())

        first, *rest = result.graph_data.nodes
        self.assertEqual((first.x, first.y), (0.0, 0.0))
        for node in rest:
            self.assertIsNone(node.x)
            self.assertIsNone(node.y)

    def test_growth_appends_unplaced_nodes_without_recentering(self) -> None:
        self.sync(family())
        result = self.sync([*family(), person("d")])

        self.assertEqual(result.added, ["d"])
        self.assertFalse(result.recenter)
        self.assertEqual(result.graph_data.node_ids(), ["a", "b", "c", "d"])
        self.assertIn("d", result.ids)

    def test_reconciling_same_list_twice_is_idempotent(self) -> None:
        first = self.sync(family())
        nodes = list(first.graph_data.nodes)
        before = positions(first.graph_data)

        second = self.sync(family())

        self.assertFalse(second.changed)
        self.assertIs(second.graph_data.nodes, first.graph_data.nodes)
        for old, new in zip(nodes, second.graph_data.nodes):
            self.assertIs(old, new)
        self.assertEqual(positions(second.graph_data), before)

    def test_node_count_matches_distinct_ids(self) -> None:
        a, b, c = family()
        duplicate = person("a", "Alice again")
        cases = [[], [a], [a, b], [a, b, c], [a, b, c, duplicate]]

        for people in cases:
            with self.subTest(count=len(people)):
                data, ids = reconcile(None, people, set(), strategy=self.strategy)
                self.assertEqual(len(data.nodes), len({p.id for p in people}))
                self.assertEqual(ids, {p.id for p in people})

    def test_add_then_remove_restores_prior_nodes(self) -> None:
        base = self.sync(family())
        original = list(base.graph_data.nodes)
        before = positions(base.graph_data)

        self.sync([*family(), person("d")])
        restored = self.sync(family())

        self.assertEqual(restored.removed, ["d"])
        self.assertEqual(restored.graph_data.node_ids(), ["a", "b", "c"])
        for old, new in zip(original, restored.graph_data.nodes):
            self.assertIs(old, new)
        self.assertEqual(positions(restored.graph_data), before)
        self.assertEqual(restored.ids, {"a", "b", "c"})

    def test_removed_node_drops_out_of_links_and_neighbors(self) -> None:
        self.sync(family())
        a, b, _ = family()
        del b.relationships["c"]

        result = self.sync([a, b])

        self.assertNotIn("c", result.graph_data.node_ids())
        self.assertTrue(all("c" not in (l.source, l.target) for l in result.graph_data.links))
        node_b = result.graph_data.get_node("b")
        self.assertEqual([n.id for n in node_b.neighbors], ["a", "a"])

    def test_changed_person_is_merged_in_place(self) -> None:
        first = self.sync(family())
        node_b = first.graph_data.get_node("b")
        node_b.x, node_b.y, node_b.vx, node_b.vy = 12.0, -4.0, 0.5, 0.25

        result = self.sync(with_changes(family(), "b", name="Robert"))

        self.assertEqual(result.updated, ["b"])
        merged = result.graph_data.nodes[1]
        self.assertIsNot(merged, node_b)
        self.assertEqual(merged.name, "Robert")
        self.assertEqual((merged.x, merged.y, merged.vx, merged.vy), (12.0, -4.0, 0.5, 0.25))
        self.assertIs(result.graph_data.nodes[0], first.graph_data.nodes[0])
        self.assertIs(result.graph_data.nodes[2], first.graph_data.nodes[2])

    def test_every_reconciled_field_triggers_an_update(self) -> None:
        changes = {
            "thumbnail_url": "https://example.org/b.png",
            "name": "Bobby",
            "pin": Vector2(x=1, y=2),
            "scale": Vector2(x=2, y=2),
            "is_background": True,
            "is_group": True,
            "background_color": "#222",
            "text_color": "#ddd",
            "hide_name_tag": True,
            "relationships": {"a": ("sibling", "sibling")},
        }
        for field_name, value in changes.items():
            with self.subTest(field=field_name):
                self.setUp()
                self.sync(family())
                result = self.sync(with_changes(family(), "b", **{field_name: value}))
                self.assertEqual(result.updated, ["b"])
                self.assertEqual(getattr(result.graph_data.get_node("b"), field_name), value)

    def test_relationships_compare_structurally(self) -> None:
        self.sync(family())
        rebuilt = family()
        # Same content, rebuilt containers and reversed key order
        rebuilt[1].relationships = dict(reversed(list(rebuilt[1].relationships.items())))

        result = self.sync(rebuilt)

        self.assertEqual(result.updated, [])

    def test_links_and_neighbors_rebuilt_every_pass(self) -> None:
        self.sync(family())
        a, b, c = family()
        del a.relationships["b"]
        del b.relationships["a"]

        result = self.sync([a, b, c])

        self.assertEqual(
            [(l.source, l.target) for l in result.graph_data.links],
            [("b", "c"), ("c", "b")],
        )
        self.assertEqual(result.graph_data.get_node("a").neighbors, [])
        self.assertEqual(result.graph_data.get_node("a").links, [])
        self.assertEqual(len(result.graph_data.get_node("b").links), 2)

    def test_pin_is_applied_to_fixed_position(self) -> None:
        result = self.sync([pinned("a", 5, 7), person("b")])

        node = result.graph_data.get_node("a")
        self.assertEqual((node.fx, node.fy), (5, 7))
        self.assertEqual(result.pinned, ["a"])

    def test_clearing_pin_releases_fixed_position(self) -> None:
        self.sync([pinned("a", 5, 7), person("b")])

        result = self.sync([person("a"), person("b")])

        node = result.graph_data.get_node("a")
        self.assertIsNone(node.fx)
        self.assertIsNone(node.fy)
        self.assertEqual(result.pinned, [])

    def test_pin_survives_surface_reset_after_unrelated_change(self) -> None:
        self.surface = InMemorySurface(resets_fixed_positions=True)
        reasserter = PinReasserter(self.surface, delay_ms=0)
        self.sync([pinned("a", 5, 7), person("b")])

        self.sync([pinned("a", 5, 7), person("b", "Bea")])
        node = self.surface.get_graph_data().get_node("a")
        self.assertIsNone(node.fx)

        # No running loop: reassertion happens straight away
        reasserter.schedule()

        self.assertEqual((node.fx, node.fy), (5, 7))

    def test_unknown_strategy_rejected(self) -> None:
        with self.assertRaises(ValueError):
            GraphReconciler("diff")  # type: ignore[arg-type]

    def test_previous_nodes_missing_from_id_set_are_not_duplicated(self) -> None:
        first = self.sync(family())

        result = self.reconciler.reconcile(first.graph_data, family(), set())

        self.assertEqual(result.graph_data.node_ids(), ["a", "b", "c"])


class SymmetricStrategyTest(ReconcilerTestBase):
    strategy = "symmetric"

    def test_same_count_swap_is_delete_plus_add(self) -> None:
        self.sync(family())
        a, b, _ = family()
        d = person("d")
        connect(b, d, "friend", "friend")

        result = self.sync([a, b, d])

        self.assertEqual(result.removed, ["c"])
        self.assertEqual(result.added, ["d"])
        self.assertEqual(result.graph_data.node_ids(), ["a", "b", "d"])
        self.assertEqual(result.ids, {"a", "b", "d"})

    def test_add_and_update_in_one_pass(self) -> None:
        self.sync(family())

        result = self.sync([*with_changes(family(), "a", name="Ally"), person("d")])

        self.assertEqual(result.updated, ["a"])
        self.assertEqual(result.added, ["d"])


class CardinalityStrategyTest(ReconcilerTestBase):
    strategy = "cardinality"

    def test_same_count_swap_is_treated_as_update(self) -> None:
        self.sync(family())
        a, b, _ = family()

        result = self.sync([a, b, person("d")])

        self.assertEqual(result.skipped, ["c"])
        self.assertEqual(result.added, [])
        self.assertEqual(result.removed, [])
        self.assertEqual(result.graph_data.node_ids(), ["a", "b", "c"])

    def test_growth_does_not_apply_field_updates(self) -> None:
        self.sync(family())

        result = self.sync([*with_changes(family(), "a", name="Ally"), person("d")])

        self.assertEqual(result.added, ["d"])
        self.assertEqual(result.updated, [])
        self.assertEqual(result.graph_data.get_node("a").name, "Alice")


class SimulationNodeTest(unittest.TestCase):

    def test_from_person_carries_id_and_domain_fields(self) -> None:
        bob = family()[1]

        node = SimulationNode.from_person(bob)

        self.assertEqual(node.id, "b")
        self.assertEqual(node.name, "Bob")
        self.assertEqual(node.relationships, bob.relationships)
        self.assertIsNone(node.x)
        self.assertIsNone(node.fx)

    def test_node_does_not_share_person_relationship_map(self) -> None:
        a, _, _ = family()
        node = SimulationNode.from_person(a)

        a.relationships["z"] = ("x", "y")

        self.assertNotIn("z", node.relationships)

    def test_nodes_compare_by_identity(self) -> None:
        a, _, _ = family()
        self.assertNotEqual(SimulationNode.from_person(a), SimulationNode.from_person(a))


if __name__ == "__main__":
    unittest.main()
