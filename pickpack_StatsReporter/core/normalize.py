# pickpack_StatsReporter/core/normalize.py
from __future__ import annotations
import math
import re
from typing import Any
import pandas as pd

_WEEK_RE = re.compile(r"(\d+)\.xlsx?$")
_NATURAL_RE = re.compile(r"(\d+)")


def to_number(val: Any, default: float = 0.0) -> float:
    """Parse a raw cell as a number; anything unparsable (None, NaN, '#DIV/0!', text) gives ``default``."""
    if val is None:
        return default
    if isinstance(val, bool):
        return float(val)
    if isinstance(val, (int, float)):
        return default if math.isnan(val) else float(val)
    if isinstance(val, str):
        s = val.strip()
        if not s:
            return default
        if "_" in s:        # float() accepts '1_000', spreadsheets don't
            return default
        try:
            out = float(s)
        except ValueError:
            return default
        return default if math.isnan(out) else out
    try:
        out = float(val)
    except (TypeError, ValueError):
        return default
    return default if math.isnan(out) else out


def day_fraction_to_hours(val: Any) -> float:
    return to_number(val) * 24


def cell_text(val: Any) -> str:
    """Stringify a cell for name columns; empty cells (None, NaN, '') become ''."""
    if val is None:
        return ""
    if isinstance(val, float):
        if math.isnan(val) or val == 0:
            return ""
        if val.is_integer():
            return str(int(val))
    if isinstance(val, (int, bool)) and not val:
        return ""
    return str(val).strip()


def week_from_name(file_name: str) -> str | None:
    m = _WEEK_RE.search(file_name or "")
    return m.group(1) if m else None


def natural_key(s: str) -> tuple:
    """Sort key that orders digit runs numerically ('2' < '10')."""
    parts = _NATURAL_RE.split(str(s))
    return tuple((0, int(p), "") if p.isdigit() else (1, 0, p) for p in parts if p != "")


def grid_from_frame(df: pd.DataFrame) -> list[list[Any]]:
    """Header-less frame (as read with ``header=None``) to a list of row lists, NaN -> None."""
    if df.empty:
        return []
    clean = df.astype(object).where(pd.notna(df), None)
    return [list(row) for row in clean.itertuples(index=False, name=None)]
