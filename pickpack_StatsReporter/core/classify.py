# pickpack_StatsReporter/core/classify.py
from __future__ import annotations
import logging
from typing import Iterable

from .model import EfficiencyTier, RecordKind

# ----- defaults -----
PICK_KEYWORDS: tuple[str, ...] = ("pick",)
PACK_KEYWORDS: tuple[str, ...] = ("pack",)

# business policy cutoffs, seconds per bin
LEVEL3_MAX_SECONDS: float = 25.5
LEVEL2_MAX_SECONDS: float = 35.0

_LOG = logging.getLogger(__name__)


def coerce_kind(value) -> RecordKind | None:
    """Map a declared kind ('pick', 'PACK', RecordKind.PICK, ...) to RecordKind; None if unrecognized."""
    if value is None:
        return None
    if isinstance(value, RecordKind):
        return value
    try:
        return RecordKind(str(value).strip().lower())
    except ValueError:
        return None


def infer_kind(file_name: str,
               declared=None,
               pick_keywords: Iterable[str] = PICK_KEYWORDS,
               pack_keywords: Iterable[str] = PACK_KEYWORDS) -> RecordKind | None:
    """
    Decide whether a file holds pick or pack rows.

    Order:
      0) An explicitly declared kind wins.
      1) Pick keywords in the file name (case-insensitive).
      2) Pack keywords in the file name.
      3) Else: None (caller treats the file as unrecognized)
    """
    kind = coerce_kind(declared)
    if kind is not None:
        _LOG.debug("%s: declared as %s", file_name, kind.value)
        return kind
    if declared is not None:
        _LOG.warning("%s: ignoring unknown declared kind %r", file_name, declared)

    name = (file_name or "").lower()
    for k in pick_keywords:
        if k and k.lower() in name:
            _LOG.debug("%s: pick by file name keyword '%s'", file_name, k)
            return RecordKind.PICK
    for k in pack_keywords:
        if k and k.lower() in name:
            _LOG.debug("%s: pack by file name keyword '%s'", file_name, k)
            return RecordKind.PACK
    return None


def classify_efficiency(avg_time_per_bin_s: float) -> EfficiencyTier:
    """
    Tier from average seconds per bin.
      0 (no bin data)  -> level2
      (0, 25.5]        -> level3
      (25.5, 35]       -> level2
      > 35             -> level1
    """
    if avg_time_per_bin_s <= 0:
        return EfficiencyTier.LEVEL2
    if avg_time_per_bin_s <= LEVEL3_MAX_SECONDS:
        return EfficiencyTier.LEVEL3
    if avg_time_per_bin_s > LEVEL2_MAX_SECONDS:
        return EfficiencyTier.LEVEL1
    return EfficiencyTier.LEVEL2
