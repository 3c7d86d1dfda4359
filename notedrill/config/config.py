from __future__ import annotations

"""Configuration loading and validation for NoteDrill.

This module loads YAML configuration, applies defaults, and validates
the practice settings so the scheduler only ever sees a sane constraint set.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import sys

import yaml

from ..app.presets import MODE_PRESETS, apply_preset
from ..drills.item import Settings
from ..render.musicxml import ALLOWED_STAFF_KINDS
from ..theory.chords import CHORD_QUALITIES
from ..theory.keys import MAX_OCTAVE, MIN_OCTAVE


ALLOWED_MODES = set(MODE_PRESETS) | {"custom"}


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        return _load_yaml(Path(path))
    return _load_yaml(Path(__file__).with_name("defaults.yml"))


def _clamp_octave(value: Any, default: int, name: str) -> int:
    try:
        octave = int(value)
    except (TypeError, ValueError):
        print(f"WARNING: Invalid {name} '{value}', using {default}.")
        return default
    if octave < MIN_OCTAVE or octave > MAX_OCTAVE:
        clamped = min(max(octave, MIN_OCTAVE), MAX_OCTAVE)
        print(f"WARNING: {name} {octave} is outside the piano range, using {clamped}.")
        return clamped
    return octave


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    cfg.setdefault("settings", {})
    cfg.setdefault("session", {})
    cfg.setdefault("render", {})

    settings = cfg["settings"]
    session = cfg["session"]
    render = cfg["render"]

    session.setdefault("mode", "c2-c6")
    session.setdefault("deck_path", "./notedrill_data/deck.json")
    session.setdefault("data_dir", "./notedrill_data")
    session.setdefault("seed", None)

    render.setdefault("staff", "grand")

    mode = session.get("mode")
    if mode not in ALLOWED_MODES:
        print(f"WARNING: Unsupported mode '{mode}', using 'c2-c6'.")
        session["mode"] = mode = "c2-c6"
    if mode != "custom":
        settings = apply_preset(settings, mode)

    settings.setdefault("min_octave", 2)
    settings.setdefault("max_octave", 6)
    settings.setdefault("include_sharps", True)
    settings.setdefault("include_flats", True)
    settings.setdefault("enable_single_notes", True)
    settings.setdefault("chord_types", [])

    lo = _clamp_octave(settings["min_octave"], 2, "min_octave")
    hi = _clamp_octave(settings["max_octave"], 6, "max_octave")
    if lo > hi:
        print(f"WARNING: min_octave {lo} is above max_octave {hi}, swapping.")
        lo, hi = hi, lo
    settings["min_octave"], settings["max_octave"] = lo, hi

    for flag in ("include_sharps", "include_flats", "enable_single_notes"):
        settings[flag] = bool(settings[flag])

    chord_types = []
    for t in settings.get("chord_types") or []:
        if t in CHORD_QUALITIES:
            chord_types.append(t)
        else:
            print(f"WARNING: Unsupported chord type '{t}', ignoring.")
    settings["chord_types"] = chord_types

    if not settings["enable_single_notes"] and not chord_types:
        print("WARNING: Neither single notes nor chords are enabled; single notes will be drilled.")

    staff = render.get("staff")
    if staff not in ALLOWED_STAFF_KINDS:
        print(f"WARNING: Unsupported staff '{staff}', using 'grand'.")
        render["staff"] = "grand"

    cfg["settings"] = settings
    return cfg


def settings_from_config(cfg: Dict[str, Any]) -> Settings:
    return Settings.from_json(cfg["settings"])
