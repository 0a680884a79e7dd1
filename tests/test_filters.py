import unittest

from pickpack_StatsReporter.core.filters import (
    EmployeeFilter, apply_filters, is_active, prepare_filters, summarize, unique_values,
)
from pickpack_StatsReporter.core.model import EfficiencyTier, EmployeePerformance, PackRecord, PickRecord


def _perf(name, bins, pick_h, weeks, tier):
    avg = pick_h * 3600 / bins if bins else 0.0
    return EmployeePerformance(employee=name, total_pick_time=pick_h, total_bins=bins,
                               avg_time_per_bin=avg, total_packs=None, total_pack_time=None,
                               weeks=tuple(weeks), efficiency=tier)


PEOPLE = [
    _perf("ALU", 400, 2.0, ["17", "18"], EfficiencyTier.LEVEL3),      # 18 s/bin
    _perf("J.DOE", 100, 1.0, ["18"], EfficiencyTier.LEVEL1),          # 36 s/bin
    _perf("M.ALLEN", 200, 1.5, ["9"], EfficiencyTier.LEVEL2),         # 27 s/bin
]


class FilterTests(unittest.TestCase):
    def test_empty_filter_keeps_everything_in_order(self):
        self.assertEqual(PEOPLE, apply_filters(PEOPLE, EmployeeFilter()))
        self.assertFalse(is_active(EmployeeFilter()))

    def test_global_search_matches_name_or_week(self):
        self.assertEqual(["ALU", "M.ALLEN"], [p.employee for p in apply_filters(PEOPLE, EmployeeFilter(search="al"))])
        self.assertEqual(["M.ALLEN"], [p.employee for p in apply_filters(PEOPLE, EmployeeFilter(search="9"))])

    def test_employee_efficiency_and_week_criteria(self):
        self.assertEqual(["J.DOE"], [p.employee for p in apply_filters(PEOPLE, EmployeeFilter(employee="doe"))])
        self.assertEqual(["M.ALLEN"], [p.employee for p in apply_filters(
            PEOPLE, EmployeeFilter(efficiency=EfficiencyTier.LEVEL2))])
        self.assertEqual(["ALU", "J.DOE"], [p.employee for p in apply_filters(PEOPLE, EmployeeFilter(weeks="18"))])

    def test_ranges_are_inclusive(self):
        flt = EmployeeFilter(min_bins=100, max_bins=200)
        self.assertEqual(["J.DOE", "M.ALLEN"], [p.employee for p in apply_filters(PEOPLE, flt)])
        flt = EmployeeFilter(max_time_per_bin=27.0)
        self.assertEqual(["ALU", "M.ALLEN"], [p.employee for p in apply_filters(PEOPLE, flt)])
        flt = EmployeeFilter(min_pick_time=1.5)
        self.assertEqual(["ALU", "M.ALLEN"], [p.employee for p in apply_filters(PEOPLE, flt)])

    def test_prepare_filters_from_config(self):
        flt = prepare_filters({"filters": {"efficiency": "LEVEL3", "min_bins": "150", "max_bins": "",
                                           "employee": None, "min_time_per_bin": "abc"}})
        self.assertIs(EfficiencyTier.LEVEL3, flt.efficiency)
        self.assertEqual(150.0, flt.min_bins)
        self.assertIsNone(flt.max_bins)
        self.assertIsNone(flt.min_time_per_bin)
        self.assertEqual("", flt.employee)
        self.assertTrue(is_active(flt))
        self.assertFalse(is_active(prepare_filters({})))


class SummaryTests(unittest.TestCase):
    def test_summary_totals_and_tier_counts(self):
        s = summarize(PEOPLE)
        self.assertEqual(4.5, s.total_pick_time)
        self.assertEqual(700, s.total_bins)
        self.assertEqual(4.5 * 3600 / 700, s.avg_time_per_bin)
        self.assertIs(EfficiencyTier.LEVEL3, s.efficiency)
        self.assertEqual(3, s.employee_count)
        self.assertEqual({EfficiencyTier.LEVEL1: 1, EfficiencyTier.LEVEL2: 1, EfficiencyTier.LEVEL3: 1},
                         s.tier_counts)

    def test_empty_summary(self):
        s = summarize([])
        self.assertEqual(0, s.avg_time_per_bin)
        self.assertEqual(0, s.employee_count)

    def test_unique_values(self):
        records = [
            PickRecord(id="a", file_name="pick_18.xlsx", week="18", employee="B"),
            PickRecord(id="b", file_name="pick_17.xlsx", week="17", employee="A"),
            PackRecord(id="c", file_name="pack.xlsx", week=None, employee="A"),
        ]
        self.assertEqual(["17", "18"], unique_values(records, "week"))
        self.assertEqual(["A", "B"], unique_values(records, "employee"))
        self.assertEqual(["pack", "pick"], unique_values(records, "kind"))
