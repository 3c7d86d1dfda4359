"""Pitch and chord theory used by the practice scheduler."""

from .keys import Note, parse_note, semitone_class, absolute_semitone  # noqa: F401
from .chords import CHORD_QUALITIES, build_chord, identify_chord  # noqa: F401
