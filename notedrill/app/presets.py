from __future__ import annotations

"""Practice mode presets.

A preset overrides part of the ``settings`` section of the config so a user
can switch between note reading and chord reading with one flag.
"""

MODE_PRESETS = {
    "c2-c6": {
        "min_octave": 2,
        "max_octave": 6,
        "enable_single_notes": True,
        "chord_types": [],
    },
    "chords": {
        "min_octave": 4,
        "max_octave": 5,
        "enable_single_notes": False,
        "chord_types": ["major", "minor"],
    },
}


def apply_preset(settings_cfg: dict, mode: str) -> dict:
    """Return a copy of ``settings_cfg`` with the named preset layered on top."""
    if mode not in MODE_PRESETS:
        raise ValueError(f"Unknown mode preset: {mode}")
    return {**settings_cfg, **MODE_PRESETS[mode]}
