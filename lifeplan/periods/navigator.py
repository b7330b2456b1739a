"""
Hierarchy navigation over period ids.

Derives children, parent and previous/next sibling of any period id. All ids
are produced by the codec; ``base_year`` anchors the 30-year horizon.
"""

import logging
import math
from datetime import date, timedelta
from enum import Enum
from typing import List, Optional, Union

from ..models import Level
from .calendar import iso_week, iso_week_year, iso_weeks_in_year, monday_of_iso_week, weeks_in_month
from .codec import THIRTY_YEAR_ID, PeriodCoordinates, parse_period_id, period_id


FIVE_YEAR_BUCKETS = 6
MAX_FIVE_YEAR_INDEX = FIVE_YEAR_BUCKETS - 1


class Direction(str, Enum):
    PREV = "prev"
    NEXT = "next"


def clamp_five_year_index(index: Optional[int]) -> int:
    """Clamp a five-year bucket index into 0..5."""
    return max(0, min(MAX_FIVE_YEAR_INDEX, index or 0))


def _day_ids(days: List[date], base_year: int) -> List[str]:
    return [
        period_id(Level.DAY, base_year, year=d.year, month=d.month, day=d.day)
        for d in days
    ]


def _week_days(coords: PeriodCoordinates, base_year: int) -> List[date]:
    if coords.is_month_week:
        spans = weeks_in_month(coords.year, coords.month)
        span = next((s for s in spans if s.week_num == coords.week), None)
        return span.days() if span else []
    monday = monday_of_iso_week(coords.year or base_year, coords.week or 1)
    return [monday + timedelta(days=offset) for offset in range(7)]


def children_of(pid: str, base_year: int) -> List[str]:
    """
    List the child period ids of a period.

    Args:
        pid: Parent period id
        base_year: First year of the 30-year horizon

    Returns:
        Child ids in calendar order; empty for day periods
    """
    coords = parse_period_id(pid)
    level = coords.level

    if level == Level.THIRTY_YEAR:
        return [
            period_id(Level.FIVE_YEAR, base_year, five_year_index=index)
            for index in range(FIVE_YEAR_BUCKETS)
        ]

    if level == Level.FIVE_YEAR:
        start_year = base_year + clamp_five_year_index(coords.five_year_index) * 5
        return [period_id(Level.YEAR, base_year, year=start_year + offset) for offset in range(5)]

    if level == Level.YEAR:
        return [
            period_id(Level.QUARTER, base_year, year=coords.year, quarter=quarter)
            for quarter in range(1, 5)
        ]

    if level == Level.QUARTER:
        start_month = (coords.quarter - 1) * 3 + 1
        return [
            period_id(Level.MONTH, base_year, year=coords.year, month=start_month + offset)
            for offset in range(3)
        ]

    if level == Level.MONTH:
        return [
            period_id(Level.WEEK, base_year, year=coords.year, month=coords.month, week=span.week_num)
            for span in weeks_in_month(coords.year, coords.month)
        ]

    if level == Level.WEEK:
        return _day_ids(_week_days(coords, base_year), base_year)

    return []


def parent_of(pid: str, base_year: int) -> Optional[str]:
    """
    Find the parent period id.

    Args:
        pid: Child period id
        base_year: First year of the 30-year horizon

    Returns:
        The parent id, or None for the top level
    """
    coords = parse_period_id(pid)
    level = coords.level

    if level == Level.THIRTY_YEAR:
        return None

    if level == Level.FIVE_YEAR:
        return THIRTY_YEAR_ID

    if level == Level.YEAR:
        index = clamp_five_year_index(math.floor((coords.year - base_year) / 5))
        return period_id(Level.FIVE_YEAR, base_year, five_year_index=index)

    if level == Level.QUARTER:
        return period_id(Level.YEAR, base_year, year=coords.year)

    if level == Level.MONTH:
        return period_id(Level.QUARTER, base_year, year=coords.year, quarter=math.ceil(coords.month / 3))

    if level == Level.WEEK:
        if coords.is_month_week:
            return period_id(Level.MONTH, base_year, year=coords.year, month=coords.month)
        monday = monday_of_iso_week(coords.year, coords.week)
        return period_id(Level.MONTH, base_year, year=monday.year, month=monday.month)

    target = coords.as_date()
    for span in weeks_in_month(coords.year, coords.month):
        if span.contains(target):
            return period_id(Level.WEEK, base_year, year=coords.year, month=coords.month, week=span.week_num)
    # unreachable for real dates, the spans cover the whole month
    return period_id(Level.WEEK, base_year, year=coords.year, month=coords.month, week=1)


def _adjacent_month(year: int, month: int, delta: int):
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def adjacent_of(pid: str, direction: Union[Direction, str], base_year: int) -> Optional[str]:
    """
    Find the previous or next sibling at the same level.

    Args:
        pid: Period id
        direction: ``Direction.PREV``/``Direction.NEXT`` or "prev"/"next"
        base_year: First year of the 30-year horizon

    Returns:
        The sibling id, or None at the top level and past the five-year edges
    """
    try:
        direction = Direction(direction)
    except ValueError:
        logging.warning(f"Unknown direction '{direction}', expected prev or next")
        return None

    coords = parse_period_id(pid)
    delta = 1 if direction == Direction.NEXT else -1
    level = coords.level

    if level == Level.THIRTY_YEAR:
        return None

    if level == Level.FIVE_YEAR:
        index = (coords.five_year_index or 0) + delta
        if index < 0 or index > MAX_FIVE_YEAR_INDEX:
            return None
        return period_id(Level.FIVE_YEAR, base_year, five_year_index=index)

    if level == Level.YEAR:
        return period_id(Level.YEAR, base_year, year=coords.year + delta)

    if level == Level.QUARTER:
        index = coords.year * 4 + (coords.quarter - 1) + delta
        return period_id(Level.QUARTER, base_year, year=index // 4, quarter=index % 4 + 1)

    if level == Level.MONTH:
        year, month = _adjacent_month(coords.year, coords.month, delta)
        return period_id(Level.MONTH, base_year, year=year, month=month)

    if level == Level.WEEK:
        if coords.is_month_week:
            return _adjacent_month_week(coords, delta, base_year)
        week = coords.week + delta
        year = coords.year
        if week < 1:
            year -= 1
            week = iso_weeks_in_year(year)
        elif week > iso_weeks_in_year(year):
            year += 1
            week = 1
        return period_id(Level.WEEK, base_year, year=year, week=week)

    moved = coords.as_date() + timedelta(days=delta)
    return period_id(Level.DAY, base_year, year=moved.year, month=moved.month, day=moved.day)


def _adjacent_month_week(coords: PeriodCoordinates, delta: int, base_year: int) -> str:
    week_count = len(weeks_in_month(coords.year, coords.month))
    week = coords.week + delta
    year, month = coords.year, coords.month

    if week < 1:
        year, month = _adjacent_month(year, month, -1)
        week = len(weeks_in_month(year, month))
    elif week > week_count:
        year, month = _adjacent_month(year, month, 1)
        week = 1

    return period_id(Level.WEEK, base_year, year=year, month=month, week=week)


def period_for_date(level: Level, d: date, base_year: int) -> str:
    """
    Id of the period at ``level`` that contains a date.

    Weeks are returned in the ISO format.
    """
    level = Level(level)
    if level == Level.THIRTY_YEAR:
        return THIRTY_YEAR_ID
    if level == Level.FIVE_YEAR:
        index = clamp_five_year_index(math.floor((d.year - base_year) / 5))
        return period_id(Level.FIVE_YEAR, base_year, five_year_index=index)
    if level == Level.YEAR:
        return period_id(Level.YEAR, base_year, year=d.year)
    if level == Level.QUARTER:
        return period_id(Level.QUARTER, base_year, year=d.year, quarter=math.ceil(d.month / 3))
    if level == Level.MONTH:
        return period_id(Level.MONTH, base_year, year=d.year, month=d.month)
    if level == Level.WEEK:
        return period_id(Level.WEEK, base_year, year=iso_week_year(d), week=iso_week(d))
    return period_id(Level.DAY, base_year, year=d.year, month=d.month, day=d.day)
