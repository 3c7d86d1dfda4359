from .selector import MAX_NOTE_ATTEMPTS, is_item_valid, select_challenge  # noqa: F401
from .grading import AttemptTracker, Decision, grade_for, judge, verify_answer  # noqa: F401
