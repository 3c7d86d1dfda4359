from .schema import DIFFICULTIES, DTYPES, AttemptRow, ItemModel, NoteModel, RecordModel
from .store import (
    append_attempts,
    items_from_json,
    load_attempts,
    load_deck,
    save_deck,
    validate_attempts,
)

__all__ = [
    "DIFFICULTIES",
    "DTYPES",
    "AttemptRow",
    "ItemModel",
    "NoteModel",
    "RecordModel",
    "append_attempts",
    "items_from_json",
    "load_attempts",
    "load_deck",
    "save_deck",
    "validate_attempts",
]
