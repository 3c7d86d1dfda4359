from __future__ import annotations

"""Explain mode: terse one-line traces of scheduler decisions.

Off by default; the CLI turns it on with ``--explain``. Lines go to stdout
unless a different sink is installed (tests capture them this way).
"""

import json
from typing import Any, Callable, Dict, Optional

_ENABLED = False
_SINK: Optional[Callable[[str], None]] = None


def enable(flag: bool = True) -> None:
    global _ENABLED
    _ENABLED = bool(flag)


def enabled() -> bool:
    return _ENABLED


def set_sink(sink: Optional[Callable[[str], None]]) -> None:
    """Route trace lines to ``sink``; None restores printing."""
    global _SINK
    _SINK = sink


def trace(event: str, payload: Dict[str, Any] | None = None) -> None:
    if not _ENABLED:
        return
    line = f"[EXPLAIN] {event} :: {json.dumps(payload or {}, separators=(',', ':'), default=str)}"
    if _SINK is not None:
        _SINK(line)
    else:
        print(line)
