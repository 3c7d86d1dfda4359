from __future__ import annotations

"""Drill items, practice settings and challenges."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Literal, Optional, Protocol, Sequence, Tuple

from ..srs.record import ReviewRecord, new_record
from ..theory.chords import CHORD_QUALITIES, identify_chord, sort_notes
from ..theory.keys import Note


Provenance = Literal["new", "review", "learn"]
StaffKind = Literal["single", "grand"]


@dataclass(frozen=True)
class Settings:
    """Active constraint set, supplied by the host on every selection call."""

    min_octave: int = 2
    max_octave: int = 6
    include_sharps: bool = True
    include_flats: bool = True
    enable_single_notes: bool = True
    chord_types: Tuple[str, ...] = ()

    @property
    def allows_accidentals(self) -> bool:
        return self.include_sharps or self.include_flats

    @property
    def prefer_flats(self) -> bool:
        """Spell generated accidentals as flats only when sharps are disabled."""
        return self.include_flats and not self.include_sharps

    def to_json(self) -> Dict[str, Any]:
        return {
            "min_octave": self.min_octave,
            "max_octave": self.max_octave,
            "include_sharps": self.include_sharps,
            "include_flats": self.include_flats,
            "enable_single_notes": self.enable_single_notes,
            "chord_types": list(self.chord_types),
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Settings":
        return cls(
            min_octave=int(data.get("min_octave", 2)),
            max_octave=int(data.get("max_octave", 6)),
            include_sharps=bool(data.get("include_sharps", True)),
            include_flats=bool(data.get("include_flats", True)),
            enable_single_notes=bool(data.get("enable_single_notes", True)),
            chord_types=tuple(t for t in data.get("chord_types", ()) if t in CHORD_QUALITIES),
        )


class Renderer(Protocol):
    def render(self, answer: Sequence[Note], staff: Optional[StaffKind] = None) -> str: ...


def note_item_id(note: Note) -> str:
    return f"note-{note.label}"


def chord_item_id(notes: Sequence[Note]) -> str:
    return "chord-" + "-".join(n.label for n in sort_notes(notes))


def item_id_for(answer: Sequence[Note]) -> str:
    if len(answer) == 1:
        return note_item_id(answer[0])
    return chord_item_id(answer)


@dataclass(frozen=True)
class Item:
    id: str
    answer: Tuple[Note, ...]
    content: str = ""
    record: ReviewRecord = field(default_factory=new_record)

    @property
    def kind(self) -> str:
        if self.id.startswith("note-"):
            return "note"
        if self.id.startswith("chord-"):
            return "chord"
        return "other"

    @property
    def label(self) -> str:
        return identify_chord(self.answer)

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "answer": [n.to_json() for n in self.answer],
            "record": self.record.to_json(),
        }


def make_item(answer: Sequence[Note], renderer: Renderer, now: Optional[datetime] = None) -> Item:
    """Mint a brand-new item whose id and content derive from ``answer``."""
    notes = tuple(answer)
    return Item(id=item_id_for(notes), answer=notes, content=renderer.render(notes), record=new_record(now))


def refresh_content(item: Item, renderer: Renderer) -> Item:
    """Re-render content from the stored answer; stored content is not trusted."""
    return replace(item, content=renderer.render(item.answer))


@dataclass(frozen=True)
class Challenge:
    item: Item
    provenance: Provenance

    @property
    def answer(self) -> Tuple[Note, ...]:
        return self.item.answer
