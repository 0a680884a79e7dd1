import unittest

from pickpack_StatsReporter.core.classify import classify_efficiency, infer_kind
from pickpack_StatsReporter.core.model import EfficiencyTier, PackRecord, PickRecord, RecordKind
from pickpack_StatsReporter.core.normalize import natural_key, to_number, week_from_name
from pickpack_StatsReporter.core.parse import parse_grid, prepare_parsing


TITLE = ["Pick Stats"]
PICK_HEADER = ["Employee", "Picks", "Avg Pick", "Items", "Bins", "Avg/Bin", "Bins/Pick",
               "Orders", "Orders/Pick", "Pick Time", "Items/h", "Bins/h", "Items/Bin"]
PACK_HEADER = ["Orders/h", "Employee", "Packs", "Items", "Time", "Avg Pack", "Items/Pack"]


def _pick_row(name, bins=100, day_fraction=0.0208333):
    return [name, 40, 12.5, 300, bins, 18.0, 2.5, 35, 0.9, day_fraction, 600, 200, 3.0]


def _pack_row(name, packs=80, day_fraction=0.25):
    return [42.0, name, packs, 240, day_fraction, 22.5, 3.0]


class ParseGridTests(unittest.TestCase):
    def test_short_grid_is_empty_regardless_of_name(self):
        self.assertEqual([], parse_grid([TITLE, PICK_HEADER], "pick_17.xlsx"))
        self.assertEqual([], parse_grid([TITLE], "pack_17.xlsx"))
        self.assertEqual([], parse_grid([], "report.xlsx"))

    def test_unknown_file_type_logs_and_returns_empty(self):
        grid = [TITLE, PICK_HEADER, _pick_row("J.DOE")]
        with self.assertLogs("pickpack_StatsReporter.core.parse", level="WARNING") as logs:
            self.assertEqual([], parse_grid(grid, "weekly_report_17.xlsx"))
        self.assertIn("weekly_report_17.xlsx", logs.output[0])

    def test_pick_rows_read_employee_from_first_column(self):
        grid = [TITLE, PICK_HEADER, _pick_row("J.DOE"), _pick_row("A.LU", bins=50)]
        recs = parse_grid(grid, "Pick_Stats_17.xlsx")
        self.assertEqual(["J.DOE", "A.LU"], [r.employee for r in recs])
        self.assertTrue(all(isinstance(r, PickRecord) for r in recs))
        self.assertEqual(RecordKind.PICK, recs[0].kind)
        self.assertEqual(100, recs[0].total_bins)
        self.assertEqual(40, recs[0].total_picks)
        self.assertEqual(3.0, recs[0].avg_items_per_bin)
        self.assertEqual("17", recs[0].week)

    def test_pack_rows_read_employee_from_second_column(self):
        grid = [["Pack Stats"], PACK_HEADER, _pack_row("B.SMITH"), ["C.NAME", None, 10, 10, 0.1, 1, 1]]
        recs = parse_grid(grid, "PACK_18.xls")
        self.assertEqual(1, len(recs))
        rec = recs[0]
        self.assertIsInstance(rec, PackRecord)
        self.assertEqual("B.SMITH", rec.employee)
        self.assertEqual(42.0, rec.orders_per_hour)
        self.assertEqual(80, rec.total_packs)
        self.assertEqual(0.25 * 24, rec.total_time)
        self.assertEqual("18", rec.week)

    def test_totals_empty_and_missing_rows_are_skipped(self):
        grid = [
            TITLE, PICK_HEADER,
            _pick_row("J.DOE"),
            [],
            None,
            [None, 1, 2, 3],
            ["   ", 1, 2, 3],
            _pick_row("TOTALS", bins=9999, day_fraction=3.0),
            _pick_row("  TOTALS  "),
        ]
        recs = parse_grid(grid, "pick_17.xlsx")
        self.assertEqual(["J.DOE"], [r.employee for r in recs])

    def test_totals_match_is_case_sensitive(self):
        grid = [TITLE, PICK_HEADER, _pick_row("Totals")]
        self.assertEqual(["Totals"], [r.employee for r in parse_grid(grid, "pick_1.xlsx")])

    def test_day_fraction_scaled_to_hours(self):
        raw = 0.0208333
        recs = parse_grid([TITLE, PICK_HEADER, _pick_row("J.DOE", day_fraction=raw)], "pick_17.xlsx")
        self.assertEqual(raw * 24, recs[0].total_pick_time)

    def test_malformed_numbers_become_zero(self):
        row = ["J.DOE", "abc", "#DIV/0!", None, " 12 ", float("nan"), "", "1,5", "7", "oops"]
        rec = parse_grid([TITLE, PICK_HEADER, row], "pick_17.xlsx")[0]
        self.assertEqual(0, rec.total_picks)
        self.assertEqual(0, rec.avg_pick_time)
        self.assertEqual(0, rec.total_items_picked)
        self.assertEqual(12, rec.total_bins)
        self.assertEqual(0, rec.avg_time_per_bin)
        self.assertEqual(0, rec.avg_bins_per_pick)
        self.assertEqual(0, rec.total_orders)
        self.assertEqual(7, rec.avg_orders_per_pick)
        self.assertEqual(0, rec.total_pick_time)
        self.assertEqual(0, rec.avg_items_per_bin)   # short row

    def test_ids_are_unique_for_repeated_names(self):
        grid = [TITLE, PICK_HEADER, _pick_row("J.DOE"), _pick_row("J.DOE")]
        recs = parse_grid(grid, "pick_17.xlsx")
        self.assertEqual(["pick_17.xlsx-J.DOE-2", "pick_17.xlsx-J.DOE-3"], [r.id for r in recs])

    def test_names_are_trimmed(self):
        recs = parse_grid([TITLE, PICK_HEADER, _pick_row("  J.DOE \t")], "pick_17.xlsx")
        self.assertEqual("J.DOE", recs[0].employee)

    def test_declared_kind_overrides_file_name(self):
        grid = [["Stats"], PACK_HEADER, _pack_row("B.SMITH")]
        recs = parse_grid(grid, "station_export_3.xlsx", kind="pack")
        self.assertEqual(1, len(recs))
        self.assertIsInstance(recs[0], PackRecord)

        cfg = prepare_parsing({"parsing": {"declared_kinds": {"pick_mislabeled.xlsx": "pack"}}})
        recs = parse_grid(grid, "pick_mislabeled.xlsx", cfg=cfg)
        self.assertIsInstance(recs[0], PackRecord)


class NormalizeTests(unittest.TestCase):
    def test_week_from_name(self):
        self.assertEqual("17", week_from_name("pick_17.xlsx"))
        self.assertEqual("18", week_from_name("Pack Stats 18.xls"))
        self.assertIsNone(week_from_name("pick.xlsx"))
        self.assertIsNone(week_from_name("pick_17.csv"))
        self.assertIsNone(week_from_name("pick_17.xlsx.bak"))

    def test_to_number(self):
        self.assertEqual(3.5, to_number("3.5"))
        self.assertEqual(0, to_number("1_000"))
        self.assertEqual(1, to_number(True))
        self.assertEqual(0, to_number(None))
        self.assertEqual(0, to_number(float("nan")))

    def test_natural_key_orders_digits_numerically(self):
        self.assertEqual(["2", "9", "10"], sorted(["10", "2", "9"], key=natural_key))


class KindInferenceTests(unittest.TestCase):
    def test_name_keywords_case_insensitive(self):
        self.assertIs(RecordKind.PICK, infer_kind("PICKSTATS_4.xlsx"))
        self.assertIs(RecordKind.PACK, infer_kind("Packing 4.xlsx"))
        self.assertIsNone(infer_kind("stats_4.xlsx"))

    def test_pick_wins_when_both_keywords_present(self):
        self.assertIs(RecordKind.PICK, infer_kind("pick_and_pack.xlsx"))

    def test_unknown_declared_kind_falls_back_to_name(self):
        with self.assertLogs("pickpack_StatsReporter.core.classify", level="WARNING"):
            self.assertIs(RecordKind.PACK, infer_kind("pack_2.xlsx", declared="ship"))

    def test_configured_keywords(self):
        cfg = prepare_parsing({"parsing": {"pick_keywords": ["kommission"], "pack_keywords": ["verpack"]}})
        grid = [TITLE, PICK_HEADER, _pick_row("J.DOE")]
        self.assertEqual(1, len(parse_grid(grid, "Kommission_5.xlsx", cfg=cfg)))
        self.assertEqual([], parse_grid(grid, "pick_5.xlsx", cfg=cfg))


class EfficiencyTests(unittest.TestCase):
    def test_boundaries(self):
        self.assertIs(EfficiencyTier.LEVEL2, classify_efficiency(0))
        self.assertIs(EfficiencyTier.LEVEL3, classify_efficiency(0.001))
        self.assertIs(EfficiencyTier.LEVEL3, classify_efficiency(25.5))
        self.assertIs(EfficiencyTier.LEVEL2, classify_efficiency(25.50001))
        self.assertIs(EfficiencyTier.LEVEL2, classify_efficiency(35))
        self.assertIs(EfficiencyTier.LEVEL1, classify_efficiency(35.00001))

    def test_rank_orders_tiers(self):
        ranks = [t.rank for t in (EfficiencyTier.LEVEL1, EfficiencyTier.LEVEL2, EfficiencyTier.LEVEL3)]
        self.assertEqual([1, 2, 3], ranks)
