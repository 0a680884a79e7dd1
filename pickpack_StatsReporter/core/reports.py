# pickpack_StatsReporter/core/reports.py
from __future__ import annotations
from dataclasses import asdict, fields
from enum import Enum
from pathlib import Path
from typing import Literal, Sequence
import numpy as np
import pandas as pd
from scipy.io import savemat

from .model import EmployeePerformance, PackRecord, PickRecord, Record, WeeklyTrend

ReportFormat = Literal["csv", "mat", "both"]

WEEK_SEPARATOR = ";"

EMPLOYEE_COLUMNS = [f.name for f in fields(EmployeePerformance)]
TREND_COLUMNS = [f.name for f in fields(WeeklyTrend)]
# pick columns first, then pack-only ones; 'id' is internal and never exported
RECORD_COLUMNS = [f.name for f in fields(PickRecord) if f.name != "id"] + [
    f.name for f in fields(PackRecord)
    if f.name not in {g.name for g in fields(PickRecord)}
]


def _plain(value):
    if isinstance(value, Enum):
        return value.value
    return value


def records_frame(records: Sequence[Record]) -> pd.DataFrame:
    rows = []
    for r in records:
        row = {k: _plain(v) for k, v in asdict(r).items() if k != "id"}
        rows.append(row)
    return pd.DataFrame(rows, columns=RECORD_COLUMNS)


def employees_frame(performances: Sequence[EmployeePerformance]) -> pd.DataFrame:
    rows = []
    for p in performances:
        row = {k: _plain(v) for k, v in asdict(p).items()}
        row["weeks"] = WEEK_SEPARATOR.join(p.weeks)
        rows.append(row)
    return pd.DataFrame(rows, columns=EMPLOYEE_COLUMNS)


def trends_frame(trends: Sequence[WeeklyTrend]) -> pd.DataFrame:
    return pd.DataFrame([asdict(t) for t in trends], columns=TREND_COLUMNS)


def to_delimited_text(df_out: pd.DataFrame, delimiter: str = ",") -> str:
    """Header row + one line per row; fields containing the delimiter are quoted."""
    return df_out.to_csv(index=False, sep=delimiter, lineterminator="\n")


def _write_csv(df_out: pd.DataFrame, out_csv: Path, title: str, delimiter: str = ",") -> None:
    out_csv.parent.mkdir(parents=True, exist_ok=True)
    df_out.to_csv(out_csv, index=False, sep=delimiter, encoding="utf-8")
    print(f"[OK] wrote report: {title} → {out_csv}")


def _to_mat_cellstr(seq: list) -> np.ndarray:
    """Make a MATLAB column cell array from a list of strings."""
    seq2 = [("" if s is None or (isinstance(s, float) and np.isnan(s)) else str(s)) for s in seq]
    arr = np.empty((len(seq2), 1), dtype=object)
    arr[:, 0] = seq2
    return arr


def _write_mat(df_out: pd.DataFrame, out_mat: Path, varname: str, title: str) -> None:
    """
    Save a MATLAB struct with fields matching the CSV columns.
    Numeric columns become double (Nx1, missing -> NaN), everything else a cell array (Nx1).
    """
    out_mat.parent.mkdir(parents=True, exist_ok=True)

    mat_struct = {}
    for col in df_out.columns:
        if pd.api.types.is_numeric_dtype(df_out[col]):
            mat_struct[col] = df_out[col].to_numpy(dtype=float).reshape(-1, 1)
        else:
            mat_struct[col] = _to_mat_cellstr(df_out[col].tolist())

    savemat(out_mat, {varname: mat_struct})
    print(f"[OK] wrote report: {title} → {out_mat}")


def write_report(df_out: pd.DataFrame,
                 out_base: Path,
                 title: str,
                 fmt: ReportFormat = "csv",
                 mat_variable: str = "report",
                 delimiter: str = ",") -> None:
    """
    Write report(s) in the requested format.
    - out_base is a *base path without extension* (e.g., .../employees)
    - fmt: "csv" | "mat" | "both"
    - mat_variable: MATLAB variable name of the struct
    """
    if df_out is None or df_out.empty:
        print(f"[INFO] {title}: nothing to write.")
        return
    if fmt in ("csv", "both"):
        _write_csv(df_out, out_base.with_suffix(".csv"), title, delimiter)
    if fmt in ("mat", "both"):
        _write_mat(df_out, out_base.with_suffix(".mat"), mat_variable, title)
