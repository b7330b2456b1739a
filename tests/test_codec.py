"""
Tests for encoding and parsing period ids.
"""

import unittest

from lifeplan.models import Level
from lifeplan.periods import PeriodCoordinates, encode, level_of, parse_period_id, period_id


class TestPeriodIdEncoding(unittest.TestCase):

    def test_formats(self):
        self.assertEqual(period_id(Level.THIRTY_YEAR, 2026), "30y")
        self.assertEqual(period_id(Level.FIVE_YEAR, 2026, five_year_index=3), "5y-3")
        self.assertEqual(period_id(Level.YEAR, 2026), "y-2026")
        self.assertEqual(period_id(Level.QUARTER, 2026, quarter=2), "q-2026-2")
        self.assertEqual(period_id(Level.MONTH, 2026, month=5), "m-2026-05")
        self.assertEqual(period_id(Level.WEEK, 2026, week=5), "w-2026-05")
        self.assertEqual(period_id(Level.WEEK, 2026, month=5, week=2), "w-2026-05-2")
        self.assertEqual(period_id(Level.DAY, 2026, month=5, day=12), "d-2026-05-12")

    def test_missing_coordinates_default(self):
        self.assertEqual(period_id(Level.FIVE_YEAR, 2026), "5y-0")
        self.assertEqual(period_id(Level.QUARTER, 2030), "q-2030-1")
        self.assertEqual(period_id(Level.DAY, 2026), "d-2026-01-01")
        self.assertEqual(period_id(Level.YEAR, 2026, year=2031), "y-2031")

    def test_level_accepts_strings(self):
        self.assertEqual(period_id("MONTH", 2026, month=12), "m-2026-12")


class TestPeriodIdParsing(unittest.TestCase):

    def test_parse_month_week(self):
        coords = parse_period_id("w-2026-05-2")

        self.assertEqual(coords.level, Level.WEEK)
        self.assertEqual((coords.year, coords.month, coords.week), (2026, 5, 2))
        self.assertTrue(coords.is_month_week)

    def test_parse_iso_week(self):
        coords = parse_period_id("w-2026-05")

        self.assertEqual(coords, PeriodCoordinates(level=Level.WEEK, year=2026, week=5))
        self.assertFalse(coords.is_month_week)

    def test_round_trip(self):
        ids = [
            "30y", "5y-0", "5y-5", "y-2026", "q-2026-4", "m-2026-01", "m-2026-12",
            "w-2026-01", "w-2026-53", "w-2026-05-1", "w-2026-05-5", "d-2026-05-12",
            "d-2024-02-29",
        ]
        for pid in ids:
            with self.subTest(pid=pid):
                self.assertEqual(encode(parse_period_id(pid)), pid)

    def test_coordinates_round_trip(self):
        coords = PeriodCoordinates(level=Level.DAY, year=2026, month=1, day=6)
        self.assertEqual(parse_period_id(encode(coords)), coords)
        self.assertEqual(coords.as_date().isoformat(), "2026-01-06")

    def test_malformed_ids_fall_back_to_top_level(self):
        malformed = [
            "", "x-2026", "y-", "y-abc", "m-2026-13", "m-2026-00", "q-2026-5",
            "w-2026-54", "w-2026-05-7", "w-2025-53", "w-2026-02-6", "w-2026-05-6", "d-2026-02-30", "d-2025-02-29", "y-2026-01-01-01",
            "m-２０２６-05",
        ]
        for pid in malformed:
            with self.subTest(pid=pid):
                with self.assertLogs(level="WARNING"):
                    coords = parse_period_id(pid)
                self.assertEqual(coords.level, Level.THIRTY_YEAR)

    def test_level_of(self):
        self.assertEqual(level_of("d-2026-05-12"), Level.DAY)
        self.assertEqual(level_of("5y-1"), Level.FIVE_YEAR)
        self.assertEqual(level_of("30y"), Level.THIRTY_YEAR)


if __name__ == '__main__':
    unittest.main(verbosity=2)
