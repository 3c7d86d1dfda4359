from __future__ import annotations

"""Answer checking and performance grading.

A guess is correct when it names exactly the target's absolute pitches,
regardless of order, repeats or enharmonic spelling. Correct guesses are
graded from how long the learner took and how many wrong guesses came first.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Literal, Optional, Sequence, Set

from ..app.explain import trace as xtrace
from ..drills.item import Challenge
from ..srs.record import Grade, utc, utcnow
from ..theory.keys import Note, parse_note


WRONG_ATTEMPT_PENALTY_S = 5.0
EASY_BELOW = 2.0
GOOD_BELOW = 5.0
HARD_BELOW = 10.0


def answer_semitones(notes: Iterable[Note]) -> Set[int]:
    return {n.semitone for n in notes}


def guess_semitones(tokens: Iterable[str]) -> Set[int]:
    """Semitones of the parseable tokens; malformed tokens are dropped."""
    out: Set[int] = set()
    for token in tokens:
        note = parse_note(token)
        if note is not None:
            out.add(note.semitone)
    return out


def verify_answer(target: Sequence[Note], guesses: Sequence[str]) -> bool:
    return answer_semitones(target) == guess_semitones(guesses)


def practice_score(elapsed_seconds: float, wrong_attempts: int) -> float:
    return elapsed_seconds + WRONG_ATTEMPT_PENALTY_S * wrong_attempts


def grade_for(elapsed_seconds: float, wrong_attempts: int) -> Grade:
    score = practice_score(elapsed_seconds, wrong_attempts)
    if score < EASY_BELOW:
        return Grade.EASY
    if score < GOOD_BELOW:
        return Grade.GOOD
    if score < HARD_BELOW:
        return Grade.HARD
    return Grade.AGAIN


@dataclass
class AttemptTracker:
    """Clock and wrong-guess counter for the challenge currently on screen.

    Time spent paused is not counted.
    """

    started_at: datetime = field(default_factory=utcnow)
    wrong_attempts: int = 0
    paused_at: Optional[datetime] = None
    paused_s: float = 0.0

    def reset(self, now: Optional[datetime] = None) -> None:
        self.started_at = utc(now or utcnow())
        self.wrong_attempts = 0
        self.paused_at = None
        self.paused_s = 0.0

    @property
    def paused(self) -> bool:
        return self.paused_at is not None

    def pause(self, now: Optional[datetime] = None) -> None:
        if self.paused_at is None:
            self.paused_at = utc(now or utcnow())

    def resume(self, now: Optional[datetime] = None) -> None:
        if self.paused_at is None:
            return
        self.paused_s += max(0.0, (utc(now or utcnow()) - self.paused_at).total_seconds())
        self.paused_at = None

    def elapsed(self, now: Optional[datetime] = None) -> float:
        # a running pause stops the clock at the moment it began
        end = self.paused_at if self.paused_at is not None else utc(now or utcnow())
        return max(0.0, (end - utc(self.started_at)).total_seconds() - self.paused_s)

    def record_wrong(self) -> None:
        self.wrong_attempts += 1


@dataclass(frozen=True)
class Decision:
    action: Literal["next", "retry"]
    correct: bool
    grade: Optional[Grade] = None
    score: Optional[float] = None


def judge(
    challenge: Challenge,
    guesses: Sequence[str],
    tracker: AttemptTracker,
    now: Optional[datetime] = None,
) -> Decision:
    """Correct -> graded, move on; wrong -> count it and keep the same challenge."""
    if not verify_answer(challenge.answer, guesses):
        tracker.record_wrong()
        xtrace("guess", {"id": challenge.item.id, "correct": False, "wrong": tracker.wrong_attempts})
        return Decision(action="retry", correct=False)

    elapsed = tracker.elapsed(now)
    score = practice_score(elapsed, tracker.wrong_attempts)
    grade = grade_for(elapsed, tracker.wrong_attempts)
    xtrace(
        "guess",
        {"id": challenge.item.id, "correct": True, "score": round(score, 2), "grade": grade.label},
    )
    return Decision(action="next", correct=True, grade=grade, score=score)
