# pickpack_StatsReporter/loaders/excel_loader.py
from __future__ import annotations
from pathlib import Path
from typing import Any
import io
import logging
import pandas as pd

from ..core.classify import infer_kind
from ..core.model import ParseError, Record, RecordKind
from ..core.normalize import grid_from_frame
from ..core.parse import ParseCfg, parse_grid, prepare_parsing

_LOG = logging.getLogger(__name__)

_ENGINES = {".xlsx": "openpyxl", ".xls": "xlrd"}


# ---------- decoding ----------
def _grid_from_excel_bytes(buff: bytes, suffix: str) -> list[list[Any]]:
    """First sheet as a raw grid: no header inference, NaN cells become None."""
    df = pd.read_excel(io.BytesIO(buff), sheet_name=0, header=None,
                       engine=_ENGINES.get(suffix.lower()))
    return grid_from_frame(df)


def read_grid(path: Path) -> list[list[Any]]:
    try:
        buff = path.read_bytes()
    except OSError as e:
        raise ParseError(f"Failed to read file: {e}") from e
    try:
        return _grid_from_excel_bytes(buff, path.suffix)
    except Exception as e:
        raise ParseError(f"Failed to process Excel file: {e}") from e


def infer_kind_from_path(path: Path, cfg: dict | None = None) -> RecordKind | None:
    """Public helper: the kind a file would be parsed as (declared in config, else by name)."""
    pcfg = prepare_parsing(cfg)
    return infer_kind(path.name, pcfg.declared_kinds.get(path.name),
                      pcfg.pick_keywords, pcfg.pack_keywords)


# ---------- public loader ----------
def load(path: Path, cfg: dict | None = None, kind=None,
         parse_cfg: ParseCfg | None = None) -> list[Record]:
    """
    Accepts: a .xlsx/.xls workbook (first sheet: title row, header row, data rows).
    Returns: list of Pick/Pack records. Raises ParseError when the workbook cannot be decoded.
    """
    grid = read_grid(path)
    records = parse_grid(grid, path.name, kind=kind, cfg=parse_cfg or prepare_parsing(cfg))
    _LOG.info("LOAD %s: %d records from %d rows", path.name, len(records), len(grid))
    return records
