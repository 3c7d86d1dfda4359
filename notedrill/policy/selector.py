from __future__ import annotations

"""Challenge selection: which item to present next.

Tiers, first non-empty wins:
  1. drop items the current settings cannot present
  2. the most overdue review item
  3. the oldest queued new item
  4. freshly generated material (reusing an existing item on id collision)
"""

import random
from datetime import datetime
from typing import List, Optional, Sequence

from ..app.explain import trace as xtrace
from ..drills.item import (
    Challenge,
    Item,
    Renderer,
    Settings,
    chord_item_id,
    make_item,
    note_item_id,
    refresh_content,
)
from ..render.musicxml import MusicXmlRenderer
from ..samplers.note_sampler import generate_chord, generate_note, note_allowed
from ..srs.record import State, is_due, utc, utcnow


MAX_NOTE_ATTEMPTS = 20


def is_item_valid(item: Item, settings: Settings) -> bool:
    if item.kind == "note" and (not settings.enable_single_notes or len(item.answer) != 1):
        return False
    if item.kind == "chord" and not settings.chord_types:
        return False
    return all(note_allowed(n, settings) for n in item.answer)


def _pick_kind(settings: Settings, rng: random.Random) -> str:
    if settings.enable_single_notes and settings.chord_types:
        return "chord" if rng.random() < 0.5 else "note"
    if settings.chord_types:
        return "chord"
    return "note"


def select_challenge(
    items: Sequence[Item],
    settings: Settings,
    *,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
    renderer: Optional[Renderer] = None,
) -> Challenge:
    """Choose the next challenge from ``items`` or generate a new one."""
    now = utc(now or utcnow())
    rng = rng or random.Random()
    renderer = renderer or MusicXmlRenderer()

    active = [it for it in items if is_item_valid(it, settings)]

    due = [it for it in active if it.record.state != State.NEW and is_due(it.record, now)]
    if due:
        selected = min(due, key=lambda it: utc(it.record.due))
        xtrace("select", {"tier": "review", "id": selected.id, "candidates": len(due)})
        return Challenge(refresh_content(selected, renderer), "review")

    queued = [it for it in active if it.record.state == State.NEW]
    if queued:
        xtrace("select", {"tier": "learn", "id": queued[0].id, "queued": len(queued)})
        return Challenge(refresh_content(queued[0], renderer), "learn")

    if _pick_kind(settings, rng) == "chord":
        return _generate_chord_challenge(items, settings, now, rng, renderer)
    return _generate_note_challenge(items, active, settings, now, rng, renderer)


def _generate_chord_challenge(
    items: Sequence[Item],
    settings: Settings,
    now: datetime,
    rng: random.Random,
    renderer: Renderer,
) -> Challenge:
    notes = generate_chord(settings, rng)
    cid = chord_item_id(notes)
    # look in every item, not only the valid ones, so ids never duplicate
    existing = next((it for it in items if it.id == cid), None)
    if existing is not None:
        xtrace("select", {"tier": "generated", "id": cid, "existing": True})
        return Challenge(refresh_content(existing, renderer), "review")
    xtrace("select", {"tier": "generated", "id": cid, "existing": False})
    return Challenge(make_item(notes, renderer, now), "new")


def _generate_note_challenge(
    items: Sequence[Item],
    active: List[Item],
    settings: Settings,
    now: datetime,
    rng: random.Random,
    renderer: Renderer,
) -> Challenge:
    known = {it.id for it in items}
    for _ in range(MAX_NOTE_ATTEMPTS):
        candidate = generate_note(settings, rng)
        if note_item_id(candidate) not in known:
            xtrace("select", {"tier": "generated", "id": note_item_id(candidate), "existing": False})
            return Challenge(make_item([candidate], renderer, now), "new")

    existing_notes = [it for it in active if it.kind == "note"]
    if existing_notes:
        selected = rng.choice(existing_notes)
        xtrace("select", {"tier": "review_ahead", "id": selected.id})
        return Challenge(refresh_content(selected, renderer), "review")

    # Nothing novel and nothing valid to revisit; the id may collide.
    fallback = generate_note(settings, rng)
    xtrace("select", {"tier": "last_resort", "id": note_item_id(fallback)})
    return Challenge(make_item([fallback], renderer, now), "new")
