"""Link Deriver and neighbor cache tests."""

import unittest

from relnet.core.models.graph import Link, SimulationNode
from relnet.domain.graph.links import annotate_neighbors, derive_links, highlight_set

from factories import connect, family, person


def nodes_for(people):
    return [SimulationNode.from_person(p) for p in people]


class DeriveLinksTest(unittest.TestCase):

    def test_symmetric_relationship_yields_two_directed_links(self) -> None:
        a, b = person("a"), person("b")
        connect(a, b, "friend", "friend")

        links = derive_links(nodes_for([a, b]), [a, b])

        self.assertEqual(links, [Link("a", "b"), Link("b", "a")])

    def test_links_follow_person_then_key_order(self) -> None:
        people = family()

        links = derive_links(nodes_for(people), people)

        self.assertEqual(
            [(l.source, l.target) for l in links],
            [("a", "b"), ("b", "a"), ("b", "c"), ("c", "b")],
        )

    def test_asymmetric_entry_is_a_single_directed_link(self) -> None:
        a, b = person("a"), person("b")
        a.relationships["b"] = ("fan", "idol")

        links = derive_links(nodes_for([a, b]), [a, b])

        self.assertEqual(links, [Link("a", "b")])

    def test_entries_for_missing_nodes_are_skipped(self) -> None:
        a, b, c = family()

        links = derive_links(nodes_for([a, b]), [a, b, c])

        self.assertEqual(links, [Link("a", "b"), Link("b", "a")])

    def test_no_people_no_links(self) -> None:
        self.assertEqual(derive_links([], []), [])


class AnnotateNeighborsTest(unittest.TestCase):

    def test_neighbors_and_links_recorded_on_both_endpoints(self) -> None:
        a, b = person("a"), person("b")
        a.relationships["b"] = ("fan", "idol")
        nodes = nodes_for([a, b])
        links = derive_links(nodes, [a, b])

        annotate_neighbors(nodes, links)

        node_a, node_b = nodes
        self.assertEqual(node_a.neighbors, [node_b])
        self.assertEqual(node_b.neighbors, [node_a])
        self.assertEqual(node_a.links, links)
        self.assertEqual(node_b.links, links)

    def test_caches_are_reset_not_appended(self) -> None:
        people = family()
        nodes = nodes_for(people)
        links = derive_links(nodes, people)

        annotate_neighbors(nodes, links)
        annotate_neighbors(nodes, links)

        node_b = nodes[1]
        self.assertEqual(len(node_b.links), 4)
        self.assertEqual(sorted(n.id for n in node_b.neighbors), ["a", "a", "c", "c"])

    def test_stale_caches_cleared_when_links_vanish(self) -> None:
        people = family()
        nodes = nodes_for(people)
        annotate_neighbors(nodes, derive_links(nodes, people))

        annotate_neighbors(nodes, [])

        for node in nodes:
            self.assertEqual(node.neighbors, [])
            self.assertEqual(node.links, [])

    def test_dangling_links_ignored(self) -> None:
        nodes = nodes_for([person("a")])

        annotate_neighbors(nodes, [Link("a", "ghost")])

        self.assertEqual(nodes[0].neighbors, [])

    def test_highlight_set_includes_node_neighbors_and_links(self) -> None:
        people = family()
        nodes = nodes_for(people)
        links = derive_links(nodes, people)
        annotate_neighbors(nodes, links)

        ids, highlighted = highlight_set(nodes[0])

        self.assertEqual(ids, {"a", "b"})
        self.assertEqual(highlighted, [Link("a", "b"), Link("b", "a")])


if __name__ == "__main__":
    unittest.main()
