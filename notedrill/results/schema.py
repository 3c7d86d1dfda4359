from __future__ import annotations

"""Per-guess history records kept by a practice session."""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict


@dataclass(frozen=True)
class HistoryEntry:
    item_id: str
    target: str
    guess: str
    correct: bool
    difficulty: str          # "Easy" | "Good" | "Hard" | "Again"
    elapsed_s: float
    wrong_attempts: int
    timestamp: datetime

    def to_json(self) -> Dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data
