from __future__ import annotations

"""MusicXML rendering of a single note or block chord in one whole-note measure."""

from typing import List, Optional, Sequence

from ..theory.chords import sort_notes
from ..theory.keys import Note


ALLOWED_STAFF_KINDS = {"single", "grand"}

_HEADER = '<?xml version="1.0" encoding="UTF-8"?>'
_DOCTYPE = (
    '<!DOCTYPE score-partwise PUBLIC "-//Recordare//DTD MusicXML 3.1 Partwise//EN" '
    '"http://www.musicxml.org/dtds/partwise.dtd">'
)


def _alter(note: Note) -> int:
    if note.accidental == "#":
        return 1
    if note.accidental == "b":
        return -1
    return 0


def _accidental_tag(note: Note) -> str:
    if note.accidental == "#":
        return "<accidental>sharp</accidental>"
    if note.accidental == "b":
        return "<accidental>flat</accidental>"
    return ""


def _note_xml(note: Note, *, chord: bool = False, voice: int = 1, staff: Optional[int] = None) -> str:
    lines = ["<note>"]
    if chord:
        lines.append("<chord/>")
    lines.append(
        f"<pitch><step>{note.letter}</step><alter>{_alter(note)}</alter><octave>{note.octave}</octave></pitch>"
    )
    lines.append("<duration>4</duration>")
    lines.append(f"<voice>{voice}</voice>")
    lines.append("<type>whole</type>")
    acc = _accidental_tag(note)
    if acc:
        lines.append(acc)
    if staff is not None:
        lines.append(f"<staff>{staff}</staff>")
    lines.append("</note>")
    return "\n".join(lines)


def _rest_xml(voice: int, staff: int) -> str:
    return "\n".join(
        [
            "<backup><duration>4</duration></backup>",
            "<note>",
            "<rest/>",
            "<duration>4</duration>",
            f"<voice>{voice}</voice>",
            "<type>whole</type>",
            f"<staff>{staff}</staff>",
            "</note>",
        ]
    )


def _attributes(grand: bool, clef_sign: str = "G", clef_line: int = 2) -> str:
    parts = [
        "<attributes>",
        "<divisions>1</divisions>",
        "<key><fifths>0</fifths></key>",
        "<time><beats>4</beats><beat-type>4</beat-type></time>",
    ]
    if grand:
        parts += [
            "<staves>2</staves>",
            '<clef number="1"><sign>G</sign><line>2</line></clef>',
            '<clef number="2"><sign>F</sign><line>4</line></clef>',
        ]
    else:
        parts.append(f"<clef><sign>{clef_sign}</sign><line>{clef_line}</line></clef>")
    parts.append("</attributes>")
    return "\n".join(parts)


def _score(body: List[str], with_doctype: bool) -> str:
    head = [_HEADER]
    if with_doctype:
        head.append(_DOCTYPE)
    return "\n".join(
        head
        + [
            '<score-partwise version="3.1">',
            '<part-list><score-part id="P1"><part-name>Music</part-name></score-part></part-list>',
            '<part id="P1">',
            '<measure number="1">',
        ]
        + body
        + ["</measure>", "</part>", "</score-partwise>"]
    )


class MusicXmlRenderer:
    """Render drill answers as MusicXML text.

    Notes below octave 4 go on the bass staff. On a grand staff the unused
    staff carries a whole rest.
    """

    def __init__(self, staff: str = "grand") -> None:
        if staff not in ALLOWED_STAFF_KINDS:
            raise ValueError(f"Unsupported staff kind: {staff}")
        self.staff = staff

    def render(self, answer: Sequence[Note], staff: Optional[str] = None) -> str:
        notes = list(answer)
        if not notes:
            raise ValueError("Cannot render an empty answer")
        if len(notes) == 1:
            return self.render_note(notes[0], staff or self.staff)
        return self.render_chord(notes)

    def render_note(self, note: Note, staff: str = "grand") -> str:
        if staff == "single":
            bass = note.octave < 4
            body = [_attributes(False, "F" if bass else "G", 4 if bass else 2), _note_xml(note)]
            return _score(body, with_doctype=False)
        preferred = 2 if note.octave < 4 else 1
        other = 1 if preferred == 2 else 2
        body = [
            _attributes(True),
            _note_xml(note, voice=preferred, staff=preferred),
            _rest_xml(voice=other, staff=other),
        ]
        return _score(body, with_doctype=False)

    def render_chord(self, notes: Sequence[Note]) -> str:
        # chords always use the grand staff, placed by the lowest note
        ordered = sort_notes(notes)
        preferred = 2 if ordered[0].octave < 4 else 1
        other = 1 if preferred == 2 else 2
        body = [_attributes(True)]
        body += [_note_xml(n, chord=i > 0, voice=preferred, staff=preferred) for i, n in enumerate(ordered)]
        body.append(_rest_xml(voice=other, staff=other))
        return _score(body, with_doctype=True)
