from __future__ import annotations

"""Practice session: turn-taking around the scheduler core.

Owns the item collection for the lifetime of one session, asks the selector
for challenges, judges guesses, and feeds grades back into the records.
Front-end agnostic; the CLI drives it, but any host can.
"""

import random
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Dict, List, Optional
from uuid import uuid4

from ..drills.item import Challenge, Item, Renderer, Settings
from ..policy.grading import AttemptTracker, Decision, judge
from ..policy.selector import select_challenge
from ..render.musicxml import MusicXmlRenderer
from ..results.schema import HistoryEntry
from ..srs.record import FsrsScheduler, Scheduler, apply_grade, utc, utcnow
from ..stats.stats import new_session_stats, update_stats
from ..storage.schema import AttemptRow
from .explain import trace as xtrace


@dataclass
class RuntimeState:
    session_id: str = field(default_factory=lambda: str(uuid4()))
    started_at: datetime = field(default_factory=utcnow)
    challenge: Optional[Challenge] = None
    dirty: bool = False


class PracticeSession:
    def __init__(
        self,
        items: List[Item],
        settings: Settings,
        *,
        scheduler: Optional[Scheduler] = None,
        renderer: Optional[Renderer] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.items: List[Item] = list(items)
        self.settings = settings
        self.scheduler = scheduler or FsrsScheduler()
        self.renderer = renderer or MusicXmlRenderer()
        self.rng = rng or random.Random()
        self.tracker = AttemptTracker()
        self.state = RuntimeState()
        self.stats: Dict = new_session_stats()
        self.history: List[HistoryEntry] = []

    @property
    def challenge(self) -> Optional[Challenge]:
        return self.state.challenge

    def find(self, item_id: str) -> Optional[Item]:
        return next((it for it in self.items if it.id == item_id), None)

    def _upsert(self, item: Item) -> None:
        for i, existing in enumerate(self.items):
            if existing.id == item.id:
                self.items[i] = item
                break
        else:
            self.items.append(item)
        self.state.dirty = True

    def pause(self, now: Optional[datetime] = None) -> None:
        self.tracker.pause(now)
        xtrace("paused", {"id": self.challenge.item.id if self.challenge else None})

    def resume(self, now: Optional[datetime] = None) -> None:
        self.tracker.resume(now)
        xtrace("resumed", {"elapsed_s": round(self.tracker.elapsed(now), 2)})

    def next_challenge(self, now: Optional[datetime] = None) -> Challenge:
        now = utc(now or utcnow())
        challenge = select_challenge(
            self.items, self.settings, now=now, rng=self.rng, renderer=self.renderer
        )
        # A minted item joins the deck; a colliding id keeps the stored record.
        if challenge.provenance == "new" and self.find(challenge.item.id) is None:
            self.items.append(challenge.item)
            self.state.dirty = True
        self.state.challenge = challenge
        self.tracker.reset(now)
        xtrace("challenge", {"id": challenge.item.id, "provenance": challenge.provenance})
        return challenge

    def submit(self, guesses: List[str], now: Optional[datetime] = None) -> Decision:
        """Judge one resolved guess against the active challenge."""
        now = utc(now or utcnow())
        challenge = self.state.challenge
        if challenge is None:
            challenge = self.next_challenge(now)
        if self.tracker.paused:
            self.resume(now)

        elapsed = self.tracker.elapsed(now)
        wrong_before = self.tracker.wrong_attempts
        decision = judge(challenge, guesses, self.tracker, now)

        update_stats(self.stats, [n.label for n in challenge.answer], decision.correct)
        self.history.append(
            HistoryEntry(
                item_id=challenge.item.id,
                target=challenge.item.label,
                guess=", ".join(g for g in guesses if g),
                correct=decision.correct,
                difficulty=decision.grade.label if decision.grade is not None else "Again",
                elapsed_s=elapsed,
                wrong_attempts=wrong_before,
                timestamp=now,
            )
        )

        if decision.grade is not None:
            # Grade the stored record for this id, not a freshly minted twin.
            stored = self.find(challenge.item.id) or challenge.item
            graded = apply_grade(replace(stored, content=challenge.item.content), decision.grade, self.scheduler, now)
            self._upsert(graded)
            self.next_challenge(now)
        return decision

    def reset_stats(self) -> None:
        self.stats = new_session_stats()
        self.history = []

    def attempt_rows(self) -> List[AttemptRow]:
        return [
            AttemptRow(
                session_id=self.state.session_id,
                ts=h.timestamp,
                item_id=h.item_id,
                target=h.target,
                guess=h.guess,
                correct=h.correct,
                difficulty=h.difficulty,
                elapsed_ms=int(round(h.elapsed_s * 1000)),
                wrong_attempts=h.wrong_attempts,
            )
            for h in self.history
        ]
