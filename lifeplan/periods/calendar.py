"""
Calendar arithmetic for the period hierarchy.

ISO week numbering (Monday start, week 1 holds the first Thursday of the
year) and the decomposition of a month into full Monday-Sunday weeks.
"""

import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List


def _thursday_of_week(d: date) -> date:
    # isoweekday(): Monday=1 .. Sunday=7
    return d + timedelta(days=4 - d.isoweekday())


def iso_week(d: date) -> int:
    """
    Compute the ISO week number of a date.

    Args:
        d: The date

    Returns:
        Week number in 1..53
    """
    thursday = _thursday_of_week(d)
    year_start = date(thursday.year, 1, 1)
    return math.ceil(((thursday - year_start).days + 1) / 7)


def iso_week_year(d: date) -> int:
    """Return the ISO week-numbering year of a date (year of its Thursday)."""
    return _thursday_of_week(d).year


def monday_of_iso_week(year: int, week: int) -> date:
    """Return the Monday of the given ISO week. January 4th is always in week 1."""
    jan4 = date(year, 1, 4)
    first_monday = jan4 - timedelta(days=jan4.isoweekday() - 1)
    return first_monday + timedelta(weeks=week - 1)


def monday_of_date(d: date) -> date:
    """Return the Monday on or before a date."""
    return d - timedelta(days=d.isoweekday() - 1)


def iso_weeks_in_year(year: int) -> int:
    """Number of ISO weeks in a year (52 or 53). December 28th is always in the last week."""
    return iso_week(date(year, 12, 28))


def last_day_of_month(year: int, month: int) -> date:
    if month == 12:
        return date(year, 12, 31)
    return date(year, month + 1, 1) - timedelta(days=1)


@dataclass(frozen=True)
class WeekSpan:
    """
    One Monday-Sunday week of a month breakdown.

    ``start`` and ``end`` may fall in the neighbouring month; ``target_month``
    records which month the span was generated for.
    """
    week_num: int
    start: date
    end: date
    target_month: int

    def days(self) -> List[date]:
        return [self.start + timedelta(days=offset) for offset in range(7)]

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end


def weeks_in_month(year: int, month: int) -> List[WeekSpan]:
    """
    Decompose a month into consecutive full weeks.

    Starts at the Monday on or before the 1st and emits 7-day spans until a
    span's Sunday reaches or passes the last day of the month.

    Args:
        year: Calendar year
        month: Month 1..12

    Returns:
        4 to 6 contiguous WeekSpan objects numbered from 1
    """
    last_day = last_day_of_month(year, month)
    monday = monday_of_date(date(year, month, 1))

    weeks: List[WeekSpan] = []
    week_num = 1
    while True:
        sunday = monday + timedelta(days=6)
        weeks.append(WeekSpan(week_num=week_num, start=monday, end=sunday, target_month=month))
        if sunday >= last_day:
            break
        week_num += 1
        monday = monday + timedelta(days=7)

    return weeks
