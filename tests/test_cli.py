"""CLI tests."""

import tempfile
import unittest
from pathlib import Path

from typer.testing import CliRunner

from relnet.app.cli import app

NETWORK_YAML = """\
id: family
name: Family
people:
  - id: alice
    name: Alice
    relationships:
      bob: [sibling, sibling]
      club: [member, group]
  - id: bob
    name: Bob
    relationships:
      alice: [sibling, sibling]
      carol: [parent, child]
    pin: {x: 1, y: 2}
  - id: carol
    name: Carol
    relationships:
      bob: [child, parent]
  - id: club
    name: Club
    isGroup: true
    relationships:
      alice: [group, member]
"""


class CliTest(unittest.TestCase):

    def setUp(self) -> None:
        self.runner = CliRunner()
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.network = self.tmp / "family.yaml"
        self.network.write_text(NETWORK_YAML, encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def invoke(self, *args: str):
        return self.runner.invoke(app, ["--log-level", "WARNING", *args])

    def test_paths(self) -> None:
        result = self.invoke("paths", str(self.network), "alice", "carol")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("path(s)", result.output)
        self.assertIn("sibling", result.output)

    def test_no_path(self) -> None:
        result = self.invoke("paths", str(self.network), "alice", "carol", "--max-depth", "1")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("No path from", result.output)

    def test_unknown_person_warned(self) -> None:
        result = self.invoke("paths", str(self.network), "alice", "zed")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Unknown person", result.output)

    def test_shortest(self) -> None:
        result = self.invoke("paths", str(self.network), "alice", "carol", "--shortest")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("1 path(s)", result.output)

    def test_graph(self) -> None:
        result = self.invoke("graph", str(self.network))

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Nodes:", result.output)
        self.assertIn("Pinned: 1", result.output)

    def test_visibility_hide_group(self) -> None:
        result = self.invoke("visibility", str(self.network), "--hide-group", "club")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("3/4 visible", result.output)

    def test_invalid_strategy_in_environment_exits_with_error(self) -> None:
        result = self.runner.invoke(
            app,
            ["graph", str(self.network)],
            env={"RELNET_RECONCILE_STRATEGY": "diff"},
        )

        self.assertEqual(result.exit_code, 1)
        self.assertIn("RELNET_RECONCILE_STRATEGY", result.output)

    def test_invalid_log_level_exits_with_error(self) -> None:
        result = self.runner.invoke(app, ["--log-level", "chatty", "graph", str(self.network)])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Error:", result.output)

    def test_log_file_receives_records(self) -> None:
        log_file = self.tmp / "logs" / "relnet.log"

        result = self.runner.invoke(
            app,
            ["--log-level", "INFO", "--log-file", str(log_file), "graph", str(self.network)],
        )

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("storage.loader: Loaded network 'family'", log_file.read_text(encoding="utf-8"))

    def test_missing_file_exits_with_error(self) -> None:
        result = self.invoke("graph", str(self.tmp / "absent.yaml"))

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Error:", result.output)


if __name__ == "__main__":
    unittest.main()
