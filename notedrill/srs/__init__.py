"""Spaced-repetition state for drill items."""

from .record import (  # noqa: F401
    FsrsScheduler,
    Grade,
    ReviewRecord,
    Scheduler,
    State,
    apply_grade,
    is_due,
    new_record,
)
