"""NoteDrill package initialization.

Re-exports the adaptive practice scheduler so hosts can simply
`import notedrill` and call `select_challenge`, `judge` and `apply_grade`.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .drills.item import Challenge, Item, Settings, make_item, refresh_content  # noqa: E402
from .policy.grading import AttemptTracker, Decision, grade_for, judge, verify_answer  # noqa: E402
from .policy.selector import is_item_valid, select_challenge  # noqa: E402
from .samplers.note_sampler import generate_chord, generate_note, sample_chord  # noqa: E402
from .srs.record import FsrsScheduler, Grade, ReviewRecord, Scheduler, State, apply_grade  # noqa: E402
from .theory.chords import identify_chord  # noqa: E402
from .theory.keys import Note, absolute_semitone, parse_note, semitone_class  # noqa: E402

__all__ = [
    "__version__",
    "AttemptTracker",
    "Challenge",
    "Decision",
    "FsrsScheduler",
    "Grade",
    "Item",
    "Note",
    "ReviewRecord",
    "Scheduler",
    "Settings",
    "State",
    "absolute_semitone",
    "apply_grade",
    "generate_chord",
    "generate_note",
    "grade_for",
    "identify_chord",
    "is_item_valid",
    "judge",
    "make_item",
    "parse_note",
    "refresh_content",
    "sample_chord",
    "select_challenge",
    "semitone_class",
    "verify_answer",
]
