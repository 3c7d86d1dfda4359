import unittest

from notedrill.render.musicxml import MusicXmlRenderer

from .fakes import notes


class MusicXmlTests(unittest.TestCase):
    def setUp(self) -> None:
        self.renderer = MusicXmlRenderer()

    def test_natural_note_pitch(self) -> None:
        xml = self.renderer.render(notes("A4"))
        self.assertTrue(xml.startswith('<?xml version="1.0"'))
        self.assertIn("<step>A</step><alter>0</alter><octave>4</octave>", xml)
        self.assertNotIn("<accidental>", xml)
        self.assertIn("<staff>1</staff>", xml)
        self.assertIn("<rest/>", xml)

    def test_accidentals(self) -> None:
        sharp = self.renderer.render(notes("F#5"))
        self.assertIn("<step>F</step><alter>1</alter>", sharp)
        self.assertIn("<accidental>sharp</accidental>", sharp)
        flat = self.renderer.render(notes("Bb3"))
        self.assertIn("<step>B</step><alter>-1</alter>", flat)
        self.assertIn("<accidental>flat</accidental>", flat)

    def test_low_notes_go_on_bass_staff(self) -> None:
        xml = self.renderer.render(notes("E2"))
        note_part, rest_part = xml.split("<backup>")
        self.assertIn("<staff>2</staff>", note_part)
        self.assertIn("<staff>1</staff>", rest_part)

    def test_single_staff_clef(self) -> None:
        single = MusicXmlRenderer("single")
        self.assertIn("<clef><sign>F</sign><line>4</line></clef>", single.render(notes("C3")))
        self.assertIn("<clef><sign>G</sign><line>2</line></clef>", single.render(notes("C4")))
        self.assertNotIn("<staves>", single.render(notes("C4")))

    def test_staff_override_per_call(self) -> None:
        xml = self.renderer.render(notes("C4"), staff="single")
        self.assertNotIn("<staves>", xml)

    def test_chord_marks_stacked_notes(self) -> None:
        xml = self.renderer.render(notes("G4", "C4", "E4"))
        self.assertEqual(xml.count("<chord/>"), 2)
        self.assertIn("<!DOCTYPE score-partwise", xml)
        # lowest note is written first
        self.assertLess(xml.index("<step>C</step>"), xml.index("<step>E</step>"))
        self.assertLess(xml.index("<step>E</step>"), xml.index("<step>G</step>"))

    def test_rendering_is_deterministic(self) -> None:
        self.assertEqual(self.renderer.render(notes("C4", "E4", "G4")), self.renderer.render(notes("C4", "E4", "G4")))

    def test_bad_input(self) -> None:
        with self.assertRaises(ValueError):
            MusicXmlRenderer("tab")
        with self.assertRaises(ValueError):
            self.renderer.render([])


if __name__ == "__main__":
    unittest.main()
