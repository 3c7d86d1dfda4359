from __future__ import annotations

"""Session stats: running totals, per-note accuracy and difficulty breakdowns."""

from typing import Dict, Iterable, List, Sequence

import pandas as pd

from ..results.schema import HistoryEntry


DIFFICULTY_COLUMNS = ["easy", "good", "hard", "again"]


def new_session_stats() -> Dict:
    """Create a new, empty stats structure."""
    return {"total": 0, "correct": 0, "accuracy": 0.0, "per_note": {}}


def update_stats(stats: Dict, note_keys: Iterable[str], correct: bool) -> None:
    """Count one guess against the session and every note of its target."""
    stats["total"] = int(stats.get("total", 0)) + 1
    if correct:
        stats["correct"] = int(stats.get("correct", 0)) + 1
    stats["accuracy"] = 100.0 * stats["correct"] / stats["total"]
    per = stats.setdefault("per_note", {})
    for key in note_keys:
        bucket = per.setdefault(key, {"total": 0, "correct": 0})
        bucket["total"] += 1
        bucket["correct"] += 1 if correct else 0


def history_frame(history: Sequence[HistoryEntry]) -> pd.DataFrame:
    columns = ["item_id", "target", "guess", "correct", "difficulty", "elapsed_s", "wrong_attempts", "timestamp"]
    if not history:
        return pd.DataFrame({c: pd.Series(dtype="object") for c in columns})
    return pd.DataFrame([h.to_json() for h in history], columns=columns)


def difficulty_breakdown(history: Sequence[HistoryEntry]) -> pd.DataFrame:
    """Per target label: how many guesses fell in each difficulty bucket.

    Sorted by total guesses, most practised first.
    """
    df = history_frame(history)
    if df.empty:
        return pd.DataFrame(columns=["target"] + DIFFICULTY_COLUMNS + ["total"])
    level = df["difficulty"].str.lower().where(df["difficulty"].str.lower().isin(DIFFICULTY_COLUMNS), "again")
    counts = pd.crosstab(df["target"], level)
    counts = counts.reindex(columns=DIFFICULTY_COLUMNS, fill_value=0)
    counts["total"] = counts.sum(axis=1)
    counts = counts.sort_values("total", ascending=False, kind="stable")
    return counts.reset_index().rename_axis(None, axis=1)


def note_accuracy(df: pd.DataFrame) -> pd.DataFrame:
    """Accuracy per target from an attempts table (see storage.store.load_attempts)."""
    if df.empty:
        return pd.DataFrame(columns=["target", "asked", "correct", "acc"])
    grouped = df.groupby("target", observed=True).agg(asked=("correct", "size"), correct=("correct", "sum"))
    grouped["acc"] = (grouped["correct"].astype("float32") / grouped["asked"].astype("float32")).astype("float32")
    return grouped.sort_values("asked", ascending=False, kind="stable").reset_index()


def format_summary(stats: Dict) -> str:
    """Return a human-readable summary of stats."""
    total = int(stats.get("total", 0))
    correct = int(stats.get("correct", 0))
    lines = [f"Total: {correct}/{total} correct ({float(stats.get('accuracy', 0.0)):.0f}%)"]
    per = stats.get("per_note", {})
    for key in sorted(per.keys()):
        lines.append(f"{key}: {per[key].get('correct', 0)}/{per[key].get('total', 0)}")
    return "\n".join(lines)


def format_breakdown(table: pd.DataFrame) -> List[str]:
    lines = []
    for row in table.itertuples(index=False):
        lines.append(
            f"{row.target}: easy {row.easy}, good {row.good}, hard {row.hard}, again {row.again} (n={row.total})"
        )
    return lines
