import unittest

from notedrill.theory.chords import build_chord, chord_quality, identify_chord
from notedrill.theory.keys import (
    INSTRUMENT_HIGH,
    INSTRUMENT_LOW,
    Note,
    absolute_semitone,
    in_instrument_range,
    note_from_semitone,
    parse_note,
    semitone_class,
)

from .fakes import notes


class PitchTests(unittest.TestCase):
    def test_semitone_class_naturals_and_accidentals(self) -> None:
        self.assertEqual(semitone_class("C"), 0)
        self.assertEqual(semitone_class("A"), 9)
        self.assertEqual(semitone_class("B"), 11)
        self.assertEqual(semitone_class("C#"), 1)
        self.assertEqual(semitone_class("Db"), 1)
        self.assertEqual(semitone_class("Cb"), 11)
        self.assertEqual(semitone_class("E#"), 5)

    def test_absolute_semitone(self) -> None:
        self.assertEqual(absolute_semitone("C", 4), 48)
        self.assertEqual(absolute_semitone("C#", 4), 49)
        self.assertEqual(absolute_semitone("Db", 4), 49)
        self.assertEqual(absolute_semitone("A", 0), INSTRUMENT_LOW)
        self.assertEqual(absolute_semitone("C", 8), INSTRUMENT_HIGH)

    def test_parse_note(self) -> None:
        self.assertEqual(parse_note("C#4"), Note("C#", 4))
        self.assertEqual(parse_note(" Bb2 "), Note("Bb", 2))
        self.assertEqual(parse_note("C-1"), Note("C", -1))
        for bad in ("", "C", "H4", "c4", "C##4", "4C", "Cx4", "C4.5"):
            self.assertIsNone(parse_note(bad), bad)

    def test_note_from_semitone_carries_octave(self) -> None:
        self.assertEqual(note_from_semitone(49), Note("C#", 4))
        self.assertEqual(note_from_semitone(49, prefer_flats=True), Note("Db", 4))
        self.assertEqual(note_from_semitone(60), Note("C", 5))

    def test_instrument_range(self) -> None:
        self.assertFalse(in_instrument_range(Note("G#", 0)))
        self.assertTrue(in_instrument_range(Note("A", 0)))
        self.assertTrue(in_instrument_range(Note("C", 8)))
        self.assertFalse(in_instrument_range(Note("C#", 8)))

    def test_note_json(self) -> None:
        n = Note("F#", 3)
        self.assertEqual(n.to_json(), {"note": "F#", "octave": 3})
        self.assertEqual(Note.from_json(n.to_json()), n)
        self.assertEqual(n.label, "F#3")


class ChordTests(unittest.TestCase):
    def test_identify_major(self) -> None:
        self.assertEqual(identify_chord(notes("C4", "E4", "G4")), "Cmaj4")

    def test_identify_diminished_with_flats(self) -> None:
        self.assertEqual(identify_chord(notes("C4", "Eb4", "Gb4")), "Cdim4")

    def test_identify_minor_and_augmented(self) -> None:
        self.assertEqual(identify_chord(notes("A3", "C4", "E4")), "Amin3")
        self.assertEqual(identify_chord(notes("C4", "E4", "G#4")), "Caug4")

    def test_identify_ignores_input_order(self) -> None:
        self.assertEqual(identify_chord(notes("G4", "C4", "E4")), "Cmaj4")

    def test_single_note_is_plain_label(self) -> None:
        self.assertEqual(identify_chord(notes("A4")), "A4")

    def test_empty_is_blank(self) -> None:
        self.assertEqual(identify_chord([]), "")

    def test_inversion_is_not_normalized(self) -> None:
        # first inversion of C major: lowest note is taken as the root
        self.assertEqual(identify_chord(notes("E4", "G4", "C5")), "Echord4")
        self.assertEqual(chord_quality(notes("E4", "G4", "C5")), "chord")

    def test_build_chord_crosses_octave(self) -> None:
        self.assertEqual(build_chord(Note("B", 4), "major"), list(notes("B4", "D#5", "F#5")))
        self.assertEqual(build_chord(Note("A", 4), "minor"), list(notes("A4", "C5", "E5")))
        self.assertEqual(build_chord(Note("Db", 4), "major", prefer_flats=True), list(notes("Db4", "F4", "Ab4")))

    def test_build_then_identify(self) -> None:
        for quality, suffix in (("major", "maj"), ("minor", "min"), ("diminished", "dim"), ("augmented", "aug")):
            self.assertEqual(identify_chord(build_chord(Note("D", 3), quality)), f"D{suffix}3")


if __name__ == "__main__":
    unittest.main()
