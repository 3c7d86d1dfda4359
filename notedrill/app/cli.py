from __future__ import annotations

"""CLI for NoteDrill using PracticeSession."""

import argparse
import json
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .. import __version__
from ..config.config import load_config, settings_from_config, validate_config
from ..render.musicxml import MusicXmlRenderer
from ..stats.stats import difficulty_breakdown, format_breakdown, format_summary, note_accuracy
from ..storage.store import append_attempts, load_attempts, load_deck, save_deck
from ..util.randomness import make_rng, seed_if_needed
from . import explain
from .session_manager import PracticeSession


_SPLIT_RE = re.compile(r"[\s,]+")


def split_guess(line: str) -> List[str]:
    """'C4, E4 G4' -> ['C4', 'E4', 'G4']."""
    return [tok for tok in _SPLIT_RE.split(line.strip()) if tok]


def _resolve_config(path: Optional[str], mode: Optional[str]) -> Dict[str, Any]:
    cfg = load_config(path)
    if mode:
        cfg.setdefault("session", {})["mode"] = mode
    return validate_config(cfg)


def _run(args: argparse.Namespace) -> int:
    explain.enable(args.explain)
    seed_if_needed()
    cfg = _resolve_config(args.config, args.mode)
    session_cfg = cfg["session"]
    seed = args.seed if args.seed is not None else session_cfg.get("seed")

    deck_path = Path(session_cfg["deck_path"])
    items = load_deck(deck_path)
    session = PracticeSession(
        items,
        settings_from_config(cfg),
        renderer=MusicXmlRenderer(cfg["render"]["staff"]),
        rng=make_rng(seed),
    )
    print(
        f"Starting NoteDrill ({session_cfg['mode']}) with {len(items)} saved item(s). "
        "Enter 'p' to pause, 'q' to stop."
    )

    xml_out = Path(args.xml_out) if args.xml_out else None
    challenge = session.next_challenge()
    shown = None
    try:
        while True:
            if challenge is not shown:
                if xml_out is not None:
                    xml_out.write_text(challenge.item.content, encoding="utf-8")
                print(f"\n[{challenge.provenance}] {len(challenge.answer)} note(s) to name.")
                shown = challenge
            line = input("Notes (e.g. C4 E4 G4): ")
            command = line.strip().lower()
            if command in ("q", "quit", "exit"):
                break
            if command in ("p", "pause"):
                session.pause()
                input("Paused. Press Enter to resume.")
                session.resume()
                continue
            decision = session.submit(split_guess(line))
            if decision.correct:
                print(f"Correct! ({challenge.item.label}) -> {decision.grade.label}")
                save_deck(deck_path, session.items)
                challenge = session.challenge
            else:
                print("Not quite, try again.")
    except (EOFError, KeyboardInterrupt):
        print()

    if session.state.dirty:
        save_deck(deck_path, session.items)
    append_attempts(session.attempt_rows(), Path(session_cfg["data_dir"]))

    print("\nSession Summary:")
    print(format_summary(session.stats))
    for line in format_breakdown(difficulty_breakdown(session.history)):
        print(line)
    return 0


def _show_settings(args: argparse.Namespace) -> int:
    cfg = _resolve_config(args.config, args.mode)
    print(json.dumps({"settings": cfg["settings"], "session": cfg["session"], "render": cfg["render"]}, indent=2))
    return 0


def _stats(args: argparse.Namespace) -> int:
    cfg = _resolve_config(args.config, None)
    df = load_attempts(Path(cfg["session"]["data_dir"]))
    if df.empty:
        print("No attempts recorded yet.")
        return 0
    table = note_accuracy(df)
    for row in table.head(args.top).itertuples(index=False):
        print(f"{row.target}: {int(row.correct)}/{int(row.asked)} ({100.0 * float(row.acc):.0f}%)")
    return 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="notedrill")
    p.add_argument("--version", action="version", version=f"notedrill {__version__}")
    sub = p.add_subparsers(dest="cmd", required=True)

    rp = sub.add_parser("run", help="Start an interactive practice session")
    rp.add_argument("--config", default=None)
    rp.add_argument("--mode", default=None, help="Preset: c2-c6, chords or custom")
    rp.add_argument("--seed", type=int, default=None)
    rp.add_argument("--explain", action="store_true")
    rp.add_argument("--xml-out", dest="xml_out", default=None, help="Write each challenge's MusicXML here")
    rp.set_defaults(func=_run)

    sp = sub.add_parser("show-settings", help="Print the validated configuration")
    sp.add_argument("--config", default=None)
    sp.add_argument("--mode", default=None)
    sp.set_defaults(func=_show_settings)

    st = sub.add_parser("stats", help="Accuracy per target from saved attempts")
    st.add_argument("--config", default=None)
    st.add_argument("--top", type=int, default=20)
    st.set_defaults(func=_stats)

    args = p.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    sys.exit(main())
