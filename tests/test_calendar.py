"""
Tests for ISO week arithmetic and the month-to-weeks decomposition.
"""

import unittest
from datetime import date, timedelta

from lifeplan.periods import (
    iso_week,
    iso_week_year,
    iso_weeks_in_year,
    monday_of_date,
    monday_of_iso_week,
    weeks_in_month,
)


class TestIsoWeeks(unittest.TestCase):
    """ISO-8601 week numbers."""

    def test_week_one_contains_first_thursday(self):
        # 2026-01-01 is a Thursday
        self.assertEqual(iso_week(date(2026, 1, 1)), 1)
        self.assertEqual(iso_week(date(2025, 12, 29)), 1)
        self.assertEqual(iso_week_year(date(2025, 12, 29)), 2026)

    def test_first_days_can_belong_to_previous_year(self):
        # 2027-01-01 is a Friday, still in the last week of 2026
        self.assertEqual(iso_week(date(2027, 1, 1)), 53)
        self.assertEqual(iso_week_year(date(2027, 1, 1)), 2026)

    def test_matches_standard_library(self):
        day = date(2020, 1, 1)
        while day < date(2029, 1, 1):
            year, week, _ = day.isocalendar()
            self.assertEqual(iso_week(day), week, day)
            self.assertEqual(iso_week_year(day), year, day)
            day += timedelta(days=3)

    def test_weeks_in_year(self):
        self.assertEqual(iso_weeks_in_year(2026), 53)
        self.assertEqual(iso_weeks_in_year(2025), 52)
        self.assertEqual(iso_weeks_in_year(2020), 53)

    def test_monday_of_iso_week(self):
        self.assertEqual(monday_of_iso_week(2026, 1), date(2025, 12, 29))
        self.assertEqual(monday_of_iso_week(2026, 5), date(2026, 1, 26))
        self.assertEqual(monday_of_iso_week(2026, 20), date(2026, 5, 11))

    def test_monday_of_date(self):
        self.assertEqual(monday_of_date(date(2026, 5, 12)), date(2026, 5, 11))
        self.assertEqual(monday_of_date(date(2026, 5, 11)), date(2026, 5, 11))
        self.assertEqual(monday_of_date(date(2026, 5, 17)), date(2026, 5, 11))


class TestWeeksInMonth(unittest.TestCase):
    """Monday-Sunday spans of a month."""

    def test_may_2026(self):
        spans = weeks_in_month(2026, 5)

        self.assertEqual(len(spans), 5)
        self.assertEqual(spans[0].start, date(2026, 4, 27))
        self.assertEqual(spans[1].start, date(2026, 5, 4))
        self.assertEqual(spans[-1].end, date(2026, 5, 31))
        self.assertTrue(all(span.target_month == 5 for span in spans))

    def test_four_and_six_week_months(self):
        # February 2021 starts on a Monday and ends on a Sunday
        self.assertEqual(len(weeks_in_month(2021, 2)), 4)
        # August 2021 starts on a Sunday and has 31 days
        self.assertEqual(len(weeks_in_month(2021, 8)), 6)

    def test_spans_cover_every_day_exactly_once(self):
        for year in (2024, 2025, 2026, 2027):
            for month in range(1, 13):
                spans = weeks_in_month(year, month)
                self.assertTrue(4 <= len(spans) <= 6)
                self.assertEqual([span.week_num for span in spans], list(range(1, len(spans) + 1)))

                for previous, current in zip(spans, spans[1:]):
                    self.assertEqual(current.start, previous.end + timedelta(days=1))

                day = date(year, month, 1)
                while day.month == month:
                    containing = [span for span in spans if span.contains(day)]
                    self.assertEqual(len(containing), 1, day)
                    day += timedelta(days=1)

                for span in spans:
                    self.assertEqual(span.start.weekday(), 0)
                    self.assertEqual((span.end - span.start).days, 6)
                    self.assertEqual(len(span.days()), 7)


if __name__ == '__main__':
    unittest.main(verbosity=2)
