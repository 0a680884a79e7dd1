# pickpack_StatsReporter/core/pipeline.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path

from .aggregate import aggregate_employees, weekly_trends
from .filters import PerformanceSummary, apply_filters, is_active, prepare_filters, summarize
from .model import EmployeePerformance, Record, WeeklyTrend
from .plotting import save_tier_distribution_plot, save_weekly_trend_plot
from .reports import employees_frame, records_frame, trends_frame, write_report


@dataclass(frozen=True)
class PipelineResult:
    employees: list[EmployeePerformance]      # all employees
    filtered: list[EmployeePerformance]       # after the configured filters
    trends: list[WeeklyTrend]
    summary: PerformanceSummary               # of the filtered employees


def run_pipeline(records: list[Record], cfg: dict, out_root: Path) -> PipelineResult:
    normalize_names = bool((cfg.get("aggregation") or {}).get("normalize_names", False))
    flt = prepare_filters(cfg)

    employees = aggregate_employees(records, normalize_names=normalize_names)
    filtered = apply_filters(employees, flt) if is_active(flt) else list(employees)
    trends = weekly_trends(records)
    summary = summarize(filtered)

    # reports
    rep = cfg.get("reports", {}) or {}
    fmt = str(rep.get("format", "csv")).lower()
    mat_var = str(rep.get("mat_variable", "report"))
    delimiter = str(rep.get("delimiter", ","))

    out_root.mkdir(parents=True, exist_ok=True)
    write_report(records_frame(records), out_root / "records", "records",
                 fmt=fmt, mat_variable=f"{mat_var}_records", delimiter=delimiter)
    write_report(employees_frame(filtered), out_root / "employees", "employee performance",
                 fmt=fmt, mat_variable=f"{mat_var}_employees", delimiter=delimiter)
    write_report(trends_frame(trends), out_root / "weekly_trends", "weekly trends",
                 fmt=fmt, mat_variable=f"{mat_var}_weekly", delimiter=delimiter)

    # plots
    if bool((cfg.get("plots") or {}).get("enabled", True)):
        save_weekly_trend_plot(trends, out_root / "plots")
        save_tier_distribution_plot(filtered, out_root / "plots")

    if is_active(flt):
        print(f"[INFO] filters kept {len(filtered)} of {len(employees)} employee(s)")
    print(
        f"[summary] {summary.employee_count} employee(s), "
        f"{summary.total_pick_time:.1f} h pick time, {summary.total_bins:,.0f} bins, "
        f"{summary.avg_time_per_bin:.0f}s/bin ({summary.efficiency.value})"
    )
    return PipelineResult(employees=employees, filtered=filtered, trends=trends, summary=summary)
