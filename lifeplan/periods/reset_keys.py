"""
Reset-bucket keys for quota routines.

A routine declared at some level refreshes its quota once per bucket of that
level's cadence. The key identifies the bucket a period falls into; two
periods in the same bucket produce the same key.
"""

import math
from datetime import date
from typing import Optional, Union

from ..models import Level
from .calendar import iso_week, iso_week_year, monday_of_iso_week, weeks_in_month
from .codec import PeriodCoordinates, parse_period_id


def _week_monday(coords: PeriodCoordinates) -> Optional[date]:
    if coords.level == Level.DAY:
        return coords.as_date()
    if coords.level != Level.WEEK:
        return None
    if coords.is_month_week:
        spans = weeks_in_month(coords.year, coords.month)
        span = next((s for s in spans if s.week_num == coords.week), None)
        return span.start if span else None
    return monday_of_iso_week(coords.year, coords.week)


def _year_month(coords: PeriodCoordinates):
    """Year and month a period belongs to, or (None, None) above month level."""
    if coords.level in (Level.MONTH, Level.DAY):
        return coords.year, coords.month
    if coords.level == Level.WEEK:
        if coords.is_month_week:
            return coords.year, coords.month
        monday = monday_of_iso_week(coords.year, coords.week)
        return monday.year, monday.month
    return None, None


def reset_key(pid: str, source_level: Union[Level, str]) -> str:
    """
    Compute the reset bucket key of a period for a given routine cadence.

    Args:
        pid: Period id being entered
        source_level: Level the routine was declared at (its cadence)

    Returns:
        An opaque key; the period id itself when the period is coarser than
        the cadence
    """
    coords = parse_period_id(pid)
    cadence = Level(source_level)

    if cadence == Level.DAY:
        if coords.level == Level.DAY:
            return f"day-{coords.year}-{coords.month}-{coords.day}"
        return pid

    if cadence == Level.WEEK:
        monday = _week_monday(coords)
        if monday is None:
            return pid
        return f"week-{iso_week_year(monday)}-{iso_week(monday)}"

    if cadence == Level.MONTH:
        year, month = _year_month(coords)
        if year is None:
            return pid
        return f"month-{year}-{month}"

    if cadence == Level.QUARTER:
        if coords.level == Level.QUARTER:
            return f"quarter-{coords.year}-{coords.quarter}"
        year, month = _year_month(coords)
        if year is None:
            return pid
        return f"quarter-{year}-{math.ceil(month / 3)}"

    if cadence == Level.YEAR:
        if coords.year is None:
            return pid
        return f"year-{coords.year}"

    if cadence == Level.FIVE_YEAR:
        if coords.level != Level.FIVE_YEAR:
            return pid
        return f"5year-{coords.five_year_index}"

    return pid
