import io
import json
import random
import unittest
from contextlib import redirect_stdout
from datetime import timedelta

from notedrill.app import explain
from notedrill.drills.item import Settings
from notedrill.policy.selector import select_challenge
from notedrill.srs.record import State

from .fakes import NOW, EchoRenderer, item


class ExplainTests(unittest.TestCase):
    def setUp(self) -> None:
        self.lines = []
        explain.set_sink(self.lines.append)

    def tearDown(self) -> None:
        explain.enable(False)
        explain.set_sink(None)

    def test_disabled_by_default(self) -> None:
        self.assertFalse(explain.enabled())
        explain.trace("select", {"tier": "review"})
        self.assertEqual(self.lines, [])

    def test_selection_is_traced(self) -> None:
        explain.enable(True)
        self.assertTrue(explain.enabled())
        due = item("C4", state=State.REVIEW, due=NOW - timedelta(hours=1))
        select_challenge([due], Settings(), now=NOW, rng=random.Random(0), renderer=EchoRenderer())
        select_lines = [line for line in self.lines if line.startswith("[EXPLAIN] select :: ")]
        self.assertEqual(len(select_lines), 1)
        payload = json.loads(select_lines[0].split(" :: ", 1)[1])
        self.assertEqual(payload, {"tier": "review", "id": "note-C4", "candidates": 1})

    def test_without_sink_lines_are_printed(self) -> None:
        explain.enable(True)
        explain.set_sink(None)
        out = io.StringIO()
        with redirect_stdout(out):
            explain.trace("graded", {"id": "note-A4"})
        self.assertEqual(out.getvalue(), '[EXPLAIN] graded :: {"id":"note-A4"}\n')


if __name__ == "__main__":
    unittest.main()
