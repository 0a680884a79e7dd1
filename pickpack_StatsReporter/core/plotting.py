# pickpack_StatsReporter/core/plotting.py
from __future__ import annotations
from pathlib import Path
from typing import Sequence
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .classify import LEVEL2_MAX_SECONDS, LEVEL3_MAX_SECONDS
from .model import EfficiencyTier, EmployeePerformance, WeeklyTrend

TIER_COLORS = {
    EfficiencyTier.LEVEL3: "#22c55e",
    EfficiencyTier.LEVEL2: "#f59e0b",
    EfficiencyTier.LEVEL1: "#ef4444",
}


def save_weekly_trend_plot(trends: Sequence[WeeklyTrend], out_dir: Path,
                           file_name: str = "weekly_avg_time_per_bin.png") -> Path | None:
    if not trends:
        print("[INFO] no weekly pick data; skipping weekly trend plot.")
        return None
    out_dir.mkdir(parents=True, exist_ok=True)

    weeks = [t.week for t in trends]
    avg_s = [t.avg_time_per_bin for t in trends]

    plt.figure(figsize=(11, 5))
    plt.plot(weeks, avg_s, marker="o", label="avg time per bin")
    plt.axhline(LEVEL3_MAX_SECONDS, color=TIER_COLORS[EfficiencyTier.LEVEL3], ls="--", lw=1,
                label=f"level3 ≤ {LEVEL3_MAX_SECONDS:g}s")
    plt.axhline(LEVEL2_MAX_SECONDS, color=TIER_COLORS[EfficiencyTier.LEVEL1], ls="--", lw=1,
                label=f"level1 > {LEVEL2_MAX_SECONDS:g}s")
    for x, y, t in zip(weeks, avg_s, trends):
        plt.annotate(f"{t.employee_count}", (x, y), fontsize=8, xytext=(4, 4), textcoords="offset points")
    plt.xlabel("Week")
    plt.ylabel("Avg time per bin [s]")
    plt.title("Pick — avg time per bin by week (labels: employees)")
    plt.grid(True, alpha=0.3)
    plt.legend(fontsize=8, frameon=False)
    plt.tight_layout()
    out_path = out_dir / file_name
    plt.savefig(out_path, dpi=160)
    plt.close()
    print(f"[OK] weekly trend: {len(trends)} week(s) → {out_path}")
    return out_path


def save_tier_distribution_plot(performances: Sequence[EmployeePerformance], out_dir: Path,
                                file_name: str = "efficiency_tiers.png") -> Path | None:
    if not performances:
        print("[INFO] no employees; skipping efficiency tier plot.")
        return None
    out_dir.mkdir(parents=True, exist_ok=True)

    tiers = [EfficiencyTier.LEVEL3, EfficiencyTier.LEVEL2, EfficiencyTier.LEVEL1]
    counts = [sum(1 for p in performances if p.efficiency is tier) for tier in tiers]

    plt.figure(figsize=(6, 4))
    plt.bar([t.value for t in tiers], counts, color=[TIER_COLORS[t] for t in tiers])
    plt.ylabel("Employees")
    plt.title("Efficiency tiers")
    plt.grid(True, axis="y", alpha=0.3)
    plt.tight_layout()
    out_path = out_dir / file_name
    plt.savefig(out_path, dpi=160)
    plt.close()
    print(f"[OK] efficiency tiers: {len(performances)} employee(s) → {out_path}")
    return out_path
