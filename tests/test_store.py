import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from datetime import datetime, timedelta
from pathlib import Path

from notedrill.srs.record import FsrsScheduler, Grade, State, apply_grade
from notedrill.storage.schema import AttemptRow
from notedrill.storage.store import append_attempts, items_from_json, load_attempts, load_deck, save_deck

from .fakes import NOW, item


def attempt(target: str, correct: bool, difficulty: str) -> AttemptRow:
    return AttemptRow(
        session_id="s1",
        ts=NOW,
        item_id=f"note-{target}",
        target=target,
        guess=target if correct else "C0",
        correct=correct,
        difficulty=difficulty,
        elapsed_ms=1500,
        wrong_attempts=0,
    )


class DeckStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_round_trip_restores_datetimes(self) -> None:
        deck = [
            item("C4", state=State.REVIEW, due=NOW + timedelta(days=2), content="<xml/>"),
            item("C4", "E4", "G4"),
        ]
        path = self.dir / "deck.json"
        save_deck(path, deck)
        loaded = load_deck(path)
        self.assertEqual(loaded, deck)
        self.assertIsInstance(loaded[0].record.due, datetime)
        self.assertIsNotNone(loaded[0].record.due.tzinfo)

    def test_missing_file_is_empty_deck(self) -> None:
        self.assertEqual(load_deck(self.dir / "nope.json"), [])

    def test_naive_due_string_is_read_as_utc(self) -> None:
        raw = [
            {
                "id": "note-A4",
                "answer": [{"note": "A", "octave": 4}],
                "record": {"state": 2, "due": "2024-03-01T12:00:00"},
            }
        ]
        (loaded,) = items_from_json(raw)
        self.assertEqual(loaded.record.due, NOW)
        self.assertEqual(loaded.record.state, State.REVIEW)

    def test_corrupt_and_out_of_range_items_are_skipped(self) -> None:
        raw = [
            {"id": "note-C4", "answer": [{"note": "C", "octave": 4}], "record": {"state": 0, "due": NOW.isoformat()}},
            {"id": "note-C9", "answer": [{"note": "C", "octave": 9}], "record": {"state": 0, "due": NOW.isoformat()}},
            {"id": "note-X4", "answer": [{"note": "X", "octave": 4}], "record": {"state": 0, "due": NOW.isoformat()}},
            {"id": "broken", "answer": [], "record": {"state": 0, "due": NOW.isoformat()}},
        ]
        path = self.dir / "deck.json"
        path.write_text(json.dumps(raw), encoding="utf-8")
        out = io.StringIO()
        with redirect_stdout(out):
            loaded = load_deck(path)
        self.assertEqual([it.id for it in loaded], ["note-C4"])
        self.assertEqual(out.getvalue().count("WARNING"), 3)

    def test_non_dict_entry_is_skipped(self) -> None:
        raw = [None, item("C4").to_json()]
        out = io.StringIO()
        with redirect_stdout(out):
            loaded = items_from_json(raw)
        self.assertEqual([it.id for it in loaded], ["note-C4"])
        self.assertIn("WARNING: Skipping unreadable item '?'", out.getvalue())

    def test_truncated_deck_file_starts_empty(self) -> None:
        path = self.dir / "deck.json"
        path.write_text("[{", encoding="utf-8")
        out = io.StringIO()
        with redirect_stdout(out):
            loaded = load_deck(path)
        self.assertEqual(loaded, [])
        self.assertIn("not valid JSON", out.getvalue())

    def test_unreadable_scheduler_params_are_skipped(self) -> None:
        raw = [
            {
                "id": "note-D4",
                "answer": [{"note": "D", "octave": 4}],
                "record": {"state": 2, "due": NOW.isoformat(), "params": {"state": 2}},
            }
        ]
        out = io.StringIO()
        with redirect_stdout(out):
            loaded = items_from_json(raw)
        self.assertEqual(loaded, [])
        self.assertIn("note-D4", out.getvalue())

    def test_scheduled_record_survives_a_round_trip(self) -> None:
        scheduler = FsrsScheduler()
        graded = apply_grade(item("E4"), Grade.GOOD, scheduler, NOW)
        path = self.dir / "deck.json"
        save_deck(path, [graded])
        (loaded,) = load_deck(path)
        self.assertEqual(loaded.record.params, graded.record.params)
        again = scheduler.advance(loaded.record, Grade.GOOD, graded.record.due)
        self.assertGreater(again.due, graded.record.due)


class AttemptStoreTests(unittest.TestCase):
    def test_append_and_load(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            data_dir = Path(tmp) / "data"
            self.assertTrue(load_attempts(data_dir).empty)
            append_attempts([attempt("C4", True, "Easy")], data_dir)
            append_attempts([attempt("D4", False, "Again"), attempt("D4", True, "Good")], data_dir)
            df = load_attempts(data_dir)
            self.assertEqual(len(df), 3)
            self.assertEqual(list(df["target"]), ["C4", "D4", "D4"])
            self.assertEqual(int(df["correct"].sum()), 2)
            self.assertEqual(str(df["ts"].dt.tz), "UTC")

    def test_empty_append_writes_nothing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            append_attempts([], Path(tmp))
            self.assertFalse((Path(tmp) / "attempts.parquet").exists())


if __name__ == "__main__":
    unittest.main()
