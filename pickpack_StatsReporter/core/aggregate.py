# pickpack_StatsReporter/core/aggregate.py
from __future__ import annotations
from dataclasses import dataclass, field
import re
from typing import Iterable

from .classify import classify_efficiency
from .model import EmployeePerformance, PackRecord, PickRecord, Record, WeeklyTrend
from .normalize import natural_key

SECONDS_PER_HOUR = 3600.0


def avg_seconds_per_bin(total_pick_time_h: float, total_bins: float) -> float:
    """Seconds per bin from aggregated totals; 0 when there are no bins."""
    if total_bins > 0:
        return (total_pick_time_h * SECONDS_PER_HOUR) / total_bins
    return 0.0


@dataclass
class _EmployeeTotals:
    name: str
    pick_time: float = 0.0
    bins: float = 0.0
    packs: float = 0.0
    pack_time: float = 0.0
    weeks: set[str] = field(default_factory=set)


def _name_key(name: str, normalize: bool) -> str:
    if not normalize:
        return name
    return re.sub(r"\s+", " ", name).strip().upper()


def aggregate_employees(records: Iterable[Record], normalize_names: bool = False) -> list[EmployeePerformance]:
    """
    One EmployeePerformance per distinct employee name.

    Names are grouped by exact string unless ``normalize_names`` is set, in which
    case case and inner whitespace are ignored and the first spelling seen is kept.
    Sorted by tier (best first), then total bins descending.
    """
    totals: dict[str, _EmployeeTotals] = {}
    for r in records:
        key = _name_key(r.employee, normalize_names)
        t = totals.get(key)
        if t is None:
            t = totals[key] = _EmployeeTotals(name=r.employee)
        if r.week:
            t.weeks.add(r.week)
        if isinstance(r, PickRecord):
            t.pick_time += r.total_pick_time
            t.bins += r.total_bins
        elif isinstance(r, PackRecord):
            t.packs += r.total_packs
            t.pack_time += r.total_time

    out: list[EmployeePerformance] = []
    for t in totals.values():
        avg_s = avg_seconds_per_bin(t.pick_time, t.bins)
        out.append(EmployeePerformance(
            employee=t.name,
            total_pick_time=t.pick_time,
            total_bins=t.bins,
            avg_time_per_bin=avg_s,
            total_packs=t.packs if t.packs > 0 else None,
            total_pack_time=t.pack_time if t.pack_time > 0 else None,
            weeks=tuple(sorted(t.weeks, key=natural_key)),
            efficiency=classify_efficiency(avg_s),
        ))

    # sorted() is stable, ties keep grouping order
    return sorted(out, key=lambda p: (-p.efficiency.rank, -p.total_bins))


def _week_sort_key(week: str) -> tuple:
    m = re.match(r"\s*[+-]?\d+", week)
    if m:
        return (0, int(m.group(0)), week)
    return (1, 0, week)


def weekly_trends(records: Iterable[Record]) -> list[WeeklyTrend]:
    """Per-week pick totals; records without a week (and pack records) are ignored."""
    weeks: dict[str, list] = {}
    for r in records:
        if not isinstance(r, PickRecord) or not r.week:
            continue
        acc = weeks.setdefault(r.week, [0.0, 0.0, set()])
        acc[0] += r.total_pick_time
        acc[1] += r.total_bins
        acc[2].add(r.employee)

    out = [
        WeeklyTrend(
            week=week,
            total_pick_time=pick_time,
            total_bins=bins,
            avg_time_per_bin=avg_seconds_per_bin(pick_time, bins),
            employee_count=len(employees),
        )
        for week, (pick_time, bins, employees) in weeks.items()
    ]
    return sorted(out, key=lambda w: _week_sort_key(w.week))
