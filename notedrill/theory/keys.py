from __future__ import annotations

"""Pitch utilities: note names, semitone arithmetic and parsing.

Absolute pitches are counted from C0 (C0 = 0, A0 = 9, C4 = 48, C8 = 96).
Enharmonic spellings share a semitone value but stay distinct for display.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional


PITCH_CLASS_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
FLAT_PITCH_CLASS_NAMES = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]
NATURAL_NOTES = ["C", "D", "E", "F", "G", "A", "B"]

_LETTER_TO_PC: Dict[str, int] = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}

# Hard piano range, independent of any practice settings.
INSTRUMENT_LOW = 9    # A0
INSTRUMENT_HIGH = 96  # C8
MIN_OCTAVE = 0
MAX_OCTAVE = 8

_NOTE_RE = re.compile(r"^([A-G][#b]?)(-?\d+)$")


def semitone_class(name: str) -> int:
    """Return the pitch class (0..11) of a note name such as 'C', 'F#' or 'Bb'."""
    pc = _LETTER_TO_PC[name[0]]
    if name.endswith("#"):
        pc += 1
    elif name.endswith("b") and len(name) > 1:
        pc -= 1
    return pc % 12


def absolute_semitone(name: str, octave: int) -> int:
    return octave * 12 + semitone_class(name)


@dataclass(frozen=True)
class Note:
    """An octave-qualified note, e.g. Note("C#", 4)."""

    name: str
    octave: int

    @property
    def letter(self) -> str:
        return self.name[0]

    @property
    def accidental(self) -> str:
        return self.name[1:]

    @property
    def is_natural(self) -> bool:
        return self.accidental == ""

    @property
    def pitch_class(self) -> int:
        return semitone_class(self.name)

    @property
    def semitone(self) -> int:
        return absolute_semitone(self.name, self.octave)

    @property
    def label(self) -> str:
        return f"{self.name}{self.octave}"

    def __str__(self) -> str:
        return self.label

    def to_json(self) -> Dict[str, Any]:
        return {"note": self.name, "octave": self.octave}

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Note":
        return cls(name=str(data["note"]), octave=int(data["octave"]))


def parse_note(text: str) -> Optional[Note]:
    """Parse 'C4', 'Db3' or 'G#5' into a Note; malformed input yields None."""
    if not isinstance(text, str):
        return None
    m = _NOTE_RE.match(text.strip())
    if not m:
        return None
    return Note(m.group(1), int(m.group(2)))


def note_from_semitone(value: int, prefer_flats: bool = False) -> Note:
    """Convert an absolute semitone back to a note, carrying whole octaves."""
    names = FLAT_PITCH_CLASS_NAMES if prefer_flats else PITCH_CLASS_NAMES
    octave, pc = divmod(value, 12)
    return Note(names[pc], octave)


def in_instrument_range(note: Note) -> bool:
    return INSTRUMENT_LOW <= note.semitone <= INSTRUMENT_HIGH
