from __future__ import annotations

"""Spaced-repetition record and the scheduler boundary.

Each drill item carries a ReviewRecord. Only ``state`` and ``due`` are read
here; ``params`` belongs to whichever scheduler advanced the record last.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import IntEnum
from typing import TYPE_CHECKING, Any, Dict, Optional, Protocol

from fsrs import Card, Rating, Scheduler as _FsrsEngine

from ..app.explain import trace as xtrace

if TYPE_CHECKING:
    from ..drills.item import Item


class State(IntEnum):
    NEW = 0
    LEARNING = 1
    REVIEW = 2
    RELEARNING = 3


class Grade(IntEnum):
    AGAIN = 1
    HARD = 2
    GOOD = 3
    EASY = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()


def utc(ts: datetime) -> datetime:
    """Return ``ts`` as an aware UTC datetime (naive values are taken as UTC)."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ReviewRecord:
    state: State
    due: datetime
    params: Dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> Dict[str, Any]:
        return {"state": int(self.state), "due": self.due.isoformat(), "params": dict(self.params)}


def new_record(now: Optional[datetime] = None) -> ReviewRecord:
    return ReviewRecord(state=State.NEW, due=utc(now or utcnow()))


def is_due(record: ReviewRecord, now: datetime) -> bool:
    """New records are never compared against the clock."""
    if record.state == State.NEW:
        return False
    return utc(record.due) <= utc(now)


class Scheduler(Protocol):
    def advance(self, record: ReviewRecord, grade: Grade, now: datetime) -> ReviewRecord: ...


class FsrsScheduler:
    """Delegates scheduling to the FSRS algorithm from the ``fsrs`` package."""

    def __init__(self, engine: Optional[_FsrsEngine] = None) -> None:
        self.engine = engine or _FsrsEngine()

    def advance(self, record: ReviewRecord, grade: Grade, now: datetime) -> ReviewRecord:
        card = Card.from_dict(record.params) if record.params else Card()
        card, _log = self.engine.review_card(card, Rating(int(grade)), review_datetime=utc(now))
        return ReviewRecord(state=State(card.state.value), due=utc(card.due), params=card.to_dict())


def apply_grade(item: "Item", grade: Grade, scheduler: Scheduler, now: datetime) -> "Item":
    """Return ``item`` with its record advanced by ``scheduler``."""
    updated = scheduler.advance(item.record, grade, utc(now))
    xtrace(
        "graded",
        {"id": item.id, "grade": grade.label, "state": updated.state.name, "due": updated.due.isoformat()},
    )
    return replace(item, record=updated)
