from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence, Tuple

from notedrill.drills.item import Item, item_id_for
from notedrill.srs.record import Grade, ReviewRecord, State
from notedrill.theory.keys import Note, parse_note

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


class FakeScheduler:
    """Moves every record to REVIEW, due one day after the review."""

    def __init__(self) -> None:
        self.calls: List[Tuple[ReviewRecord, Grade, datetime]] = []

    def advance(self, record: ReviewRecord, grade: Grade, now: datetime) -> ReviewRecord:
        self.calls.append((record, grade, now))
        reps = int(record.params.get("reps", 0)) + 1
        return ReviewRecord(state=State.REVIEW, due=now + timedelta(days=1), params={"reps": reps})


class EchoRenderer:
    def render(self, answer: Sequence[Note], staff: Optional[str] = None) -> str:
        return "|".join(n.label for n in answer)


def notes(*labels: str) -> Tuple[Note, ...]:
    return tuple(parse_note(label) for label in labels)


def item(*labels: str, state: State = State.NEW, due: datetime = NOW, content: str = "") -> Item:
    answer = notes(*labels)
    return Item(
        id=item_id_for(answer),
        answer=answer,
        content=content,
        record=ReviewRecord(state=state, due=due),
    )
