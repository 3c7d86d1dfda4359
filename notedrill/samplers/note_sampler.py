from __future__ import annotations

"""Constrained random notes and triads.

Notes are drawn uniformly from every chromatic pitch in the allowed octave
band. Chords use bounded rejection sampling: a root that fits the band can
still push its third or fifth past the top octave or the piano's C8, so the
whole chord is re-validated before it is accepted.
"""

import random
from typing import List, Optional

from ..app.explain import trace as xtrace
from ..drills.item import Settings
from ..theory.chords import build_chord
from ..theory.keys import (
    FLAT_PITCH_CLASS_NAMES,
    INSTRUMENT_LOW,
    MAX_OCTAVE,
    PITCH_CLASS_NAMES,
    Note,
    in_instrument_range,
)
from ..util.randomness import Sampled, sample_with_fallback


MAX_CHORD_ATTEMPTS = 100
DEFAULT_CHORD_TYPES = ("major", "minor")


def note_allowed(note: Note, settings: Settings) -> bool:
    """Octave band and accidental check shared by generation and selection."""
    if note.octave < settings.min_octave or note.octave > settings.max_octave:
        return False
    if note.is_natural:
        return True
    if "#" in note.accidental and not settings.include_sharps:
        return False
    if "b" in note.accidental and not settings.include_flats:
        return False
    return True


def note_candidates(settings: Settings, hard_limit: Optional[Note] = None) -> List[Note]:
    names = FLAT_PITCH_CLASS_NAMES if settings.prefer_flats else PITCH_CLASS_NAMES
    out: List[Note] = []
    for octave in range(settings.min_octave, settings.max_octave + 1):
        for name in names:
            note = Note(name, octave)
            if not note.is_natural and not settings.allows_accidentals:
                continue
            if hard_limit is not None and note.semitone > hard_limit.semitone:
                continue
            if not in_instrument_range(note):
                continue
            out.append(note)
    return out


def generate_note(
    settings: Settings,
    rng: Optional[random.Random] = None,
    hard_limit: Optional[Note] = None,
) -> Note:
    """Pick a random note allowed by ``settings``.

    Over-constrained settings fall back to C in octave max(min_octave, 4).
    """
    rng = rng or random.Random()
    candidates = note_candidates(settings, hard_limit)
    if not candidates:
        fallback = Note("C", max(settings.min_octave, 4))
        xtrace("note_fallback", {"note": fallback.label})
        return fallback
    return rng.choice(candidates)


def _chord_fallback(settings: Settings) -> List[Note]:
    # C major in octave 8 would run past C8
    octave = min(max(1, settings.min_octave), MAX_OCTAVE - 1)
    return build_chord(Note("C", octave), "major")


def sample_chord(settings: Settings, rng: Optional[random.Random] = None) -> Sampled[List[Note]]:
    rng = rng or random.Random()
    allowed = tuple(settings.chord_types) or DEFAULT_CHORD_TYPES

    def draw() -> Optional[List[Note]]:
        root = generate_note(settings, rng)
        if root.octave == 0 and root.semitone < INSTRUMENT_LOW:
            return None
        quality = rng.choice(allowed)
        return build_chord(root, quality, settings.prefer_flats)

    def fits(notes: List[Note]) -> bool:
        return all(note_allowed(n, settings) and in_instrument_range(n) for n in notes)

    result = sample_with_fallback(draw, fits, MAX_CHORD_ATTEMPTS, lambda: _chord_fallback(settings))
    if result.is_fallback:
        xtrace("chord_fallback", {"notes": [n.label for n in result.value]})
    return result


def generate_chord(settings: Settings, rng: Optional[random.Random] = None) -> List[Note]:
    return sample_chord(settings, rng).value
