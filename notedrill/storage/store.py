from __future__ import annotations

"""Deck persistence (JSON) and attempt history (Parquet).

The scheduler itself only handles in-memory items; this module turns them
into plain files and back. Loading always rebuilds ``due`` as an aware
datetime so review ordering compares timestamps, not strings.
"""

import json
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd
from pydantic import ValidationError

from ..drills.item import Item
from .schema import DTYPES, AttemptRow, ItemModel


ATTEMPTS_FILE = "attempts.parquet"


def _empty_df() -> pd.DataFrame:
    return pd.DataFrame({k: pd.Series(dtype=v) for k, v in DTYPES.items()})


def items_from_json(raw: List[Dict[str, Any]]) -> List[Item]:
    """Validate raw dicts into items, skipping corrupt or out-of-range entries."""
    items: List[Item] = []
    for entry in raw:
        try:
            model = ItemModel.model_validate(entry)
        except ValidationError as exc:
            item_id = entry.get("id", "?") if isinstance(entry, dict) else "?"
            print(f"WARNING: Skipping unreadable item {item_id!r}: {exc.error_count()} error(s)")
            continue
        if model.id.startswith("note-") and not model.octaves_sane():
            print(f"WARNING: Skipping out-of-range item {model.id!r}")
            continue
        items.append(model.to_item())
    return items


def load_deck(path: Path) -> List[Item]:
    p = Path(path)
    if not p.exists():
        return []
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        print(f"WARNING: Deck file {p} is not valid JSON ({exc.msg}, line {exc.lineno}); starting empty.")
        return []
    if not isinstance(data, list):
        print(f"WARNING: Deck file {p} is not a list of items; starting empty.")
        return []
    return items_from_json(data)


def save_deck(path: Path, items: List[Item]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_suffix(p.suffix + ".tmp")
    with tmp.open("w", encoding="utf-8") as f:
        json.dump([it.to_json() for it in items], f, indent=2)
    tmp.replace(p)


def _fix_dtypes(df: pd.DataFrame) -> pd.DataFrame:
    for col, dt in DTYPES.items():
        if col not in df.columns:
            df[col] = pd.Series(pd.NA, index=df.index)
        df[col] = df[col].astype(dt)
    return df[list(DTYPES.keys())]


def validate_attempts(rows: List[AttemptRow]) -> pd.DataFrame:
    if not isinstance(rows, list):
        raise TypeError("rows must be a list[AttemptRow]")
    parsed = [r if isinstance(r, AttemptRow) else AttemptRow.model_validate(r) for r in rows]
    if not parsed:
        return _empty_df()
    df = pd.DataFrame([r.model_dump() for r in parsed])
    return _fix_dtypes(df)


def append_attempts(rows: List[AttemptRow], data_dir: Path) -> None:
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    f = data_dir / ATTEMPTS_FILE
    df_new = validate_attempts(rows)
    if df_new.empty:
        return
    if f.exists():
        df_old = _fix_dtypes(pd.read_parquet(f, engine="pyarrow"))
        combined = pd.concat([df_old, df_new], ignore_index=True)
    else:
        combined = df_new
    combined = _fix_dtypes(combined)
    combined.to_parquet(f, engine="pyarrow", compression="zstd", index=False)


def load_attempts(data_dir: Path) -> pd.DataFrame:
    f = Path(data_dir) / ATTEMPTS_FILE
    if not f.exists():
        return _empty_df()
    return _fix_dtypes(pd.read_parquet(f, engine="pyarrow"))
