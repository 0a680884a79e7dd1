# pickpack_StatsReporter/core/filters.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Sequence

from .aggregate import avg_seconds_per_bin
from .classify import classify_efficiency
from .model import EfficiencyTier, EmployeePerformance, Record


@dataclass
class EmployeeFilter:
    search: str = ""              # employee name or week
    employee: str = ""
    efficiency: EfficiencyTier | None = None
    weeks: str = ""
    min_pick_time: float | None = None
    max_pick_time: float | None = None
    min_bins: float | None = None
    max_bins: float | None = None
    min_time_per_bin: float | None = None   # seconds
    max_time_per_bin: float | None = None


@dataclass
class PerformanceSummary:
    total_pick_time: float
    total_bins: float
    avg_time_per_bin: float
    efficiency: EfficiencyTier
    employee_count: int
    tier_counts: dict[EfficiencyTier, int] = field(default_factory=dict)


def _opt_float(val) -> float | None:
    if val is None or (isinstance(val, str) and not val.strip()):
        return None
    try:
        return float(val)
    except (TypeError, ValueError):
        return None


def _opt_tier(val) -> EfficiencyTier | None:
    if val is None or isinstance(val, EfficiencyTier):
        return val
    try:
        return EfficiencyTier(str(val).strip().lower())
    except ValueError:
        return None


def prepare_filters(global_cfg: dict | None) -> EmployeeFilter:
    """Read the ``filters`` section from config. Blank or invalid values disable that criterion."""
    flt = (global_cfg or {}).get("filters", {}) or {}
    return EmployeeFilter(
        search=str(flt.get("search") or ""),
        employee=str(flt.get("employee") or ""),
        efficiency=_opt_tier(flt.get("efficiency") or None),
        weeks=str(flt.get("weeks") or ""),
        min_pick_time=_opt_float(flt.get("min_pick_time")),
        max_pick_time=_opt_float(flt.get("max_pick_time")),
        min_bins=_opt_float(flt.get("min_bins")),
        max_bins=_opt_float(flt.get("max_bins")),
        min_time_per_bin=_opt_float(flt.get("min_time_per_bin")),
        max_time_per_bin=_opt_float(flt.get("max_time_per_bin")),
    )


def is_active(flt: EmployeeFilter) -> bool:
    return flt != EmployeeFilter()


def _in_range(value: float, lo: float | None, hi: float | None) -> bool:
    if lo is not None and value < lo:
        return False
    if hi is not None and value > hi:
        return False
    return True


def _matches(p: EmployeePerformance, flt: EmployeeFilter) -> bool:
    if flt.search:
        term = flt.search.lower()
        if term not in p.employee.lower() and not any(term in w for w in p.weeks):
            return False
    if flt.employee and flt.employee.lower() not in p.employee.lower():
        return False
    if flt.efficiency is not None and p.efficiency is not flt.efficiency:
        return False
    if flt.weeks:
        term = flt.weeks.lower()
        if not any(term in w.lower() for w in p.weeks):
            return False
    return (_in_range(p.total_pick_time, flt.min_pick_time, flt.max_pick_time)
            and _in_range(p.total_bins, flt.min_bins, flt.max_bins)
            and _in_range(p.avg_time_per_bin, flt.min_time_per_bin, flt.max_time_per_bin))


def apply_filters(performances: Iterable[EmployeePerformance], flt: EmployeeFilter) -> list[EmployeePerformance]:
    """Keep the employees matching every set criterion, in their original order."""
    return [p for p in performances if _matches(p, flt)]


def summarize(performances: Sequence[EmployeePerformance]) -> PerformanceSummary:
    total_pick_time = sum(p.total_pick_time for p in performances)
    total_bins = sum(p.total_bins for p in performances)
    avg_s = avg_seconds_per_bin(total_pick_time, total_bins)
    counts = {tier: 0 for tier in EfficiencyTier}
    for p in performances:
        counts[p.efficiency] += 1
    return PerformanceSummary(
        total_pick_time=total_pick_time,
        total_bins=total_bins,
        avg_time_per_bin=avg_s,
        efficiency=classify_efficiency(avg_s),
        employee_count=len(performances),
        tier_counts=counts,
    )


def unique_values(records: Iterable[Record], field_name: str) -> list[str]:
    vals = set()
    for r in records:
        v = getattr(r, field_name, None)
        if v is None:
            continue
        vals.add(str(v.value if isinstance(v, Enum) else v))
    return sorted(vals)
