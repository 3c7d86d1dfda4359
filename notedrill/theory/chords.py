from __future__ import annotations

"""Triad helpers: build chords from a root and name chords from their notes."""

from typing import Dict, List, Literal, Sequence, Tuple

from .keys import Note, note_from_semitone


ChordType = Literal["major", "minor", "diminished", "augmented"]

CHORD_QUALITIES: Tuple[str, ...] = ("major", "minor", "diminished", "augmented")

CHORD_INTERVALS: Dict[str, Tuple[int, ...]] = {
    "major": (0, 4, 7),
    "minor": (0, 3, 7),
    "diminished": (0, 3, 6),
    "augmented": (0, 4, 8),
}

QUALITY_SUFFIX: Dict[str, str] = {
    "major": "maj",
    "minor": "min",
    "diminished": "dim",
    "augmented": "aug",
}

_TEMPLATE_TO_QUALITY = {intervals: quality for quality, intervals in CHORD_INTERVALS.items()}


def build_chord(root: Note, quality: str, prefer_flats: bool = False) -> List[Note]:
    """Stack the quality's intervals on top of ``root``.

    Upper notes are respelled from their absolute semitone, so a third or
    fifth that crosses B->C lands in the next octave.
    """
    base = root.semitone
    return [note_from_semitone(base + step, prefer_flats) for step in CHORD_INTERVALS[quality]]


def sort_notes(notes: Sequence[Note]) -> List[Note]:
    return sorted(notes, key=lambda n: (n.semitone, n.name))


def chord_quality(notes: Sequence[Note]) -> str:
    """Return the quality whose template matches exactly, else 'chord'.

    The lowest note is always the root; inversions are not normalized.
    """
    ordered = sort_notes(notes)
    root = ordered[0].semitone
    offsets = tuple(n.semitone - root for n in ordered)
    return _TEMPLATE_TO_QUALITY.get(offsets, "chord")


def identify_chord(notes: Sequence[Note]) -> str:
    """Display label for a note set: 'A4' for one note, 'Cmaj4' for a C4 triad."""
    if not notes:
        return ""
    if len(notes) == 1:
        return notes[0].label
    root = sort_notes(notes)[0]
    quality = chord_quality(notes)
    suffix = QUALITY_SUFFIX.get(quality, "chord")
    return f"{root.name}{suffix}{root.octave}"
