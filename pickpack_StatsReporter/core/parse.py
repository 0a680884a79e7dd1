# pickpack_StatsReporter/core/parse.py
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Sequence
import logging

from .classify import PACK_KEYWORDS, PICK_KEYWORDS, infer_kind
from .model import PackRecord, PickRecord, Record, RecordKind
from .normalize import cell_text, day_fraction_to_hours, to_number, week_from_name

_LOG = logging.getLogger(__name__)

TOTALS_LABEL = "TOTALS"
FIRST_DATA_ROW = 2          # row 0 = title, row 1 = header
EMPLOYEE_COLUMN = {RecordKind.PICK: 0, RecordKind.PACK: 1}


@dataclass
class ParseCfg:
    pick_keywords: tuple[str, ...] = PICK_KEYWORDS
    pack_keywords: tuple[str, ...] = PACK_KEYWORDS
    declared_kinds: dict[str, str] = field(default_factory=dict)   # file name -> "pick" | "pack"


def _keywords(value, default: tuple[str, ...]) -> tuple[str, ...]:
    if isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
        lowered = tuple(str(k).lower() for k in value if str(k).strip())
        if lowered:
            return lowered
    return default


def prepare_parsing(global_cfg: dict | None) -> ParseCfg:
    """Read the ``parsing`` section from config; missing keys keep the defaults."""
    prs = (global_cfg or {}).get("parsing", {}) or {}
    declared = prs.get("declared_kinds") or {}
    if not isinstance(declared, dict):
        declared = {}
    return ParseCfg(
        pick_keywords=_keywords(prs.get("pick_keywords"), PICK_KEYWORDS),
        pack_keywords=_keywords(prs.get("pack_keywords"), PACK_KEYWORDS),
        declared_kinds={str(k): str(v) for k, v in declared.items()},
    )


def _cell(row: Sequence[Any], idx: int) -> Any:
    return row[idx] if idx < len(row) else None


def _pick_record(row: Sequence[Any], i: int, employee: str, file_name: str, week: str | None) -> PickRecord:
    c = lambda idx: to_number(_cell(row, idx))
    return PickRecord(
        id=f"{file_name}-{employee}-{i}",
        file_name=file_name,
        week=week,
        employee=employee,
        total_picks=c(1),
        avg_pick_time=c(2),
        total_items_picked=c(3),
        total_bins=c(4),
        avg_time_per_bin=c(5),
        avg_bins_per_pick=c(6),
        total_orders=c(7),
        avg_orders_per_pick=c(8),
        total_pick_time=day_fraction_to_hours(_cell(row, 9)),
        items_per_hour=c(10),
        bins_per_hour=c(11),
        avg_items_per_bin=c(12),
    )


def _pack_record(row: Sequence[Any], i: int, employee: str, file_name: str, week: str | None) -> PackRecord:
    c = lambda idx: to_number(_cell(row, idx))
    return PackRecord(
        id=f"{file_name}-{employee}-{i}",
        file_name=file_name,
        week=week,
        employee=employee,
        orders_per_hour=c(0),
        total_packs=c(2),
        total_items=c(3),
        total_time=day_fraction_to_hours(_cell(row, 4)),
        avg_pack_time=c(5),
        avg_items_per_pack=c(6),
    )


def parse_grid(grid: Sequence[Sequence[Any]], file_name: str,
               kind=None, cfg: ParseCfg | None = None) -> list[Record]:
    """
    Turn a decoded sheet (list of rows) into typed records.

    ``kind`` declares the file's kind explicitly; when omitted the config's
    ``declared_kinds`` entry for the file name is used, then the name keywords.
    Returns [] for grids without a data row or files of unknown kind.
    """
    cfg = cfg or ParseCfg()
    if grid is None or len(grid) < FIRST_DATA_ROW + 1:
        return []

    declared = kind if kind is not None else cfg.declared_kinds.get(Path(file_name).name)
    rec_kind = infer_kind(file_name, declared, cfg.pick_keywords, cfg.pack_keywords)
    if rec_kind is None:
        _LOG.warning("Could not determine file type for: %s", file_name)
        return []

    week = week_from_name(file_name)
    name_col = EMPLOYEE_COLUMN[rec_kind]
    build = _pick_record if rec_kind is RecordKind.PICK else _pack_record

    records: list[Record] = []
    skipped = 0
    for i in range(FIRST_DATA_ROW, len(grid)):
        row = grid[i]
        if not row:
            skipped += 1
            continue
        employee = cell_text(_cell(row, name_col))
        if not employee or employee == TOTALS_LABEL:
            skipped += 1
            continue
        records.append(build(row, i, employee, file_name, week))

    _LOG.debug("%s: %d %s rows parsed, %d skipped", file_name, len(records), rec_kind.value, skipped)
    return records
