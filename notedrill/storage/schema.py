from __future__ import annotations

"""Pydantic models for the stored deck and the Parquet attempt history."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal

import pandas as pd
from fsrs import Card
from pydantic import BaseModel, Field, field_validator

from ..drills.item import Item
from ..srs.record import ReviewRecord, State
from ..theory.keys import MAX_OCTAVE, MIN_OCTAVE, Note

# --- Constants ---

DIFFICULTIES = {"Easy", "Good", "Hard", "Again"}

DTYPES = {
    "session_id": "string",
    # timezone-aware UTC timestamps
    "ts": pd.DatetimeTZDtype(tz="UTC"),
    "item_id": "string",
    "target": "string",
    "guess": "string",
    "correct": "boolean",
    "difficulty": pd.CategoricalDtype(categories=sorted(DIFFICULTIES), ordered=False),
    "elapsed_ms": "UInt32",
    "wrong_attempts": "UInt16",
}


def _ensure_utc(v: datetime) -> datetime:
    if v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v.astimezone(timezone.utc)


# --- Pydantic models ---

class NoteModel(BaseModel):
    note: str = Field(pattern=r"^[A-G][#b]?$")
    octave: int

    def to_note(self) -> Note:
        return Note(self.note, self.octave)


class RecordModel(BaseModel):
    state: int = Field(ge=0, le=3)
    due: datetime
    params: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("due")
    @classmethod
    def _due_utc(cls, v: datetime) -> datetime:
        return _ensure_utc(v)

    @field_validator("params")
    @classmethod
    def _params_readable(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        # empty params mean the scheduler starts a fresh card
        if v:
            try:
                Card.from_dict(v)
            except (KeyError, TypeError, ValueError) as exc:
                raise ValueError(f"unreadable scheduler params: {exc!r}") from exc
        return v

    def to_record(self) -> ReviewRecord:
        return ReviewRecord(state=State(self.state), due=self.due, params=dict(self.params))


class ItemModel(BaseModel):
    id: str
    content: str = ""
    answer: List[NoteModel] = Field(min_length=1)
    record: RecordModel

    def to_item(self) -> Item:
        return Item(
            id=self.id,
            answer=tuple(n.to_note() for n in self.answer),
            content=self.content,
            record=self.record.to_record(),
        )

    def octaves_sane(self) -> bool:
        return all(MIN_OCTAVE <= n.octave <= MAX_OCTAVE for n in self.answer)


class AttemptRow(BaseModel):
    session_id: str
    ts: datetime
    item_id: str
    target: str
    guess: str
    correct: bool
    difficulty: Literal[tuple(DIFFICULTIES)]  # type: ignore[valid-type]
    elapsed_ms: int = Field(ge=0, le=4294967295)
    wrong_attempts: int = Field(ge=0, le=65535)

    @field_validator("ts")
    @classmethod
    def _ts_utc(cls, v: datetime) -> datetime:
        return _ensure_utc(v)
