"""
Period identifier codec.

Every period is addressed by a short string key:

    THIRTY_YEAR  30y
    FIVE_YEAR    5y-<index 0..5>
    YEAR         y-2026
    QUARTER      q-2026-1
    MONTH        m-2026-01
    WEEK         w-2026-05      (ISO week)
                 w-2026-05-2    (second week of the May breakdown)
    DAY          d-2026-05-12

Encoding and parsing are exact inverses for valid coordinates. Malformed ids
parse to the top level so callers always get a level back.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from ..models import Level
from .calendar import iso_weeks_in_year, weeks_in_month


THIRTY_YEAR_ID = "30y"

_NUMBER = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class PeriodCoordinates:
    """Level plus the date coordinates encoded in a period id."""
    level: Level
    five_year_index: Optional[int] = None
    year: Optional[int] = None
    quarter: Optional[int] = None
    month: Optional[int] = None
    week: Optional[int] = None
    day: Optional[int] = None

    @property
    def is_month_week(self) -> bool:
        """True for week ids of the month breakdown (``w-YYYY-MM-N``)."""
        return self.level == Level.WEEK and self.month is not None

    def as_date(self) -> Optional[date]:
        """Return the calendar date of a day period, None for other levels."""
        if self.level != Level.DAY:
            return None
        return date(self.year, self.month, self.day)


def period_id(
    level: Level,
    base_year: int,
    *,
    five_year_index: Optional[int] = None,
    year: Optional[int] = None,
    quarter: Optional[int] = None,
    month: Optional[int] = None,
    week: Optional[int] = None,
    day: Optional[int] = None,
) -> str:
    """
    Build the identifier of a period.

    Args:
        level: Hierarchy level
        base_year: Fallback year when ``year`` is omitted
        five_year_index: Bucket index for FIVE_YEAR ids
        year, quarter, month, week, day: Date coordinates; missing ones
            default to 1. A WEEK with ``month`` uses the month-week format.

    Returns:
        The period id string
    """
    level = Level(level)
    year = year or base_year

    if level == Level.THIRTY_YEAR:
        return THIRTY_YEAR_ID
    if level == Level.FIVE_YEAR:
        return f"5y-{five_year_index if five_year_index is not None else 0}"
    if level == Level.YEAR:
        return f"y-{year}"
    if level == Level.QUARTER:
        return f"q-{year}-{quarter or 1}"
    if level == Level.MONTH:
        return f"m-{year}-{month or 1:02d}"
    if level == Level.WEEK:
        if month is not None:
            return f"w-{year}-{month:02d}-{week or 1}"
        return f"w-{year}-{week or 1:02d}"
    return f"d-{year}-{month or 1:02d}-{day or 1:02d}"


def encode(coords: PeriodCoordinates) -> str:
    """Encode parsed coordinates back into an id."""
    return period_id(
        coords.level,
        coords.year or 0,
        five_year_index=coords.five_year_index,
        year=coords.year,
        quarter=coords.quarter,
        month=coords.month,
        week=coords.week,
        day=coords.day,
    )


def _numbers(parts: List[str]) -> Optional[List[int]]:
    if not all(_NUMBER.fullmatch(part) for part in parts):
        return None
    return [int(part) for part in parts]


def _month_week_count(year: int, month: int) -> int:
    try:
        return len(weeks_in_month(year, month))
    except OverflowError:
        # the last span of December 9999 runs past date.max
        return 0


def _parse(pid: str) -> Optional[PeriodCoordinates]:
    if pid == THIRTY_YEAR_ID:
        return PeriodCoordinates(level=Level.THIRTY_YEAR)

    prefix, *rest = pid.split("-")
    values = _numbers(rest)
    if not values:
        return None

    if values[0] < 1 or values[0] > 9999:
        # only the five-year bucket index may be zero
        if not (prefix == "5y" and values[0] == 0):
            return None

    if prefix == "5y" and len(values) == 1:
        return PeriodCoordinates(level=Level.FIVE_YEAR, five_year_index=values[0])

    if prefix == "y" and len(values) == 1:
        return PeriodCoordinates(level=Level.YEAR, year=values[0])

    if prefix == "q" and len(values) == 2:
        year, quarter = values
        if 1 <= quarter <= 4:
            return PeriodCoordinates(level=Level.QUARTER, year=year, quarter=quarter)

    elif prefix == "m" and len(values) == 2:
        year, month = values
        if 1 <= month <= 12:
            return PeriodCoordinates(level=Level.MONTH, year=year, month=month)

    elif prefix == "w" and len(values) == 2:
        year, week = values
        if 1 <= week <= iso_weeks_in_year(year):
            return PeriodCoordinates(level=Level.WEEK, year=year, week=week)

    elif prefix == "w" and len(values) == 3:
        year, month, week = values
        if 1 <= month <= 12 and 1 <= week <= _month_week_count(year, month):
            return PeriodCoordinates(level=Level.WEEK, year=year, month=month, week=week)

    elif prefix == "d" and len(values) == 3:
        year, month, day = values
        try:
            date(year, month, day)
        except ValueError:
            return None
        return PeriodCoordinates(level=Level.DAY, year=year, month=month, day=day)

    return None


def parse_period_id(pid: str) -> PeriodCoordinates:
    """
    Parse a period id into its coordinates.

    Unknown prefixes and malformed coordinates fall back to the top level
    instead of raising.

    Args:
        pid: The period id

    Returns:
        PeriodCoordinates, always with ``level`` set
    """
    coords = _parse(pid) if isinstance(pid, str) else None
    if coords is None:
        logging.warning(f"Unrecognized period id '{pid}', treating it as {Level.THIRTY_YEAR.value}")
        return PeriodCoordinates(level=Level.THIRTY_YEAR)
    return coords


def level_of(pid: str) -> Level:
    """Shortcut for ``parse_period_id(pid).level``."""
    return parse_period_id(pid).level
