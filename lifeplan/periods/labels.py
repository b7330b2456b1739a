"""
Display labels for child periods and time-slot identifiers.
"""

from datetime import timedelta
from typing import Optional, Tuple

from ..models import Level, TimeSlot
from .calendar import monday_of_iso_week, weeks_in_month
from .codec import parse_period_id
from .navigator import clamp_five_year_index


MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
WEEKDAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

TIME_SLOT_PREFIX = "ts-"


def _week_bounds(coords, base_year):
    if coords.is_month_week:
        spans = weeks_in_month(coords.year or base_year, coords.month)
        span = next((s for s in spans if s.week_num == coords.week), None)
        if span is None:
            return None
        return span.start, span.end
    monday = monday_of_iso_week(coords.year or base_year, coords.week or 1)
    return monday, monday + timedelta(days=6)


def slot_label(child_id: str, base_year: int) -> str:
    """
    Build the descriptive label of a child period slot.

    Args:
        child_id: Child period id
        base_year: First year of the 30-year horizon

    Returns:
        A human readable label such as "Q1 2026 (Jan-Mar)"
    """
    coords = parse_period_id(child_id)

    if coords.level == Level.FIVE_YEAR:
        start_year = base_year + clamp_five_year_index(coords.five_year_index) * 5
        return f"{start_year}-{start_year + 4}"
    if coords.level == Level.YEAR:
        return str(coords.year)
    if coords.level == Level.QUARTER:
        start_month = (coords.quarter - 1) * 3
        return f"Q{coords.quarter} {coords.year} ({MONTH_NAMES[start_month]}-{MONTH_NAMES[start_month + 2]})"
    if coords.level == Level.MONTH:
        return f"{MONTH_NAMES[coords.month - 1]} {coords.year}"
    if coords.level == Level.WEEK:
        bounds = _week_bounds(coords, base_year)
        if bounds is None:
            return f"Week {coords.week}"
        start, end = bounds
        return f"Week {coords.week} ({start.month}/{start.day}-{end.month}/{end.day})"
    if coords.level == Level.DAY:
        d = coords.as_date()
        return f"{MONTH_NAMES[d.month - 1]} {d.day} ({WEEKDAY_NAMES[d.weekday()]})"
    return child_id


def slot_label_short(child_id: str, base_year: int) -> str:
    """Compact variant of :func:`slot_label` for narrow cells."""
    coords = parse_period_id(child_id)

    if coords.level == Level.FIVE_YEAR:
        return f"{base_year + clamp_five_year_index(coords.five_year_index) * 5}~"
    if coords.level == Level.YEAR:
        return str(coords.year)
    if coords.level == Level.QUARTER:
        return f"Q{coords.quarter}"
    if coords.level == Level.MONTH:
        return MONTH_NAMES[coords.month - 1]
    if coords.level == Level.WEEK:
        bounds = _week_bounds(coords, base_year)
        if bounds is None:
            return f"W{coords.week}"
        return f"{bounds[0].month}/{bounds[0].day}~"
    if coords.level == Level.DAY:
        d = coords.as_date()
        return f"{d.day}({WEEKDAY_NAMES[d.weekday()]})"
    return child_id


def time_slot_id(pid: str, slot: TimeSlot) -> str:
    """Identifier of a time-of-day cell, e.g. ``ts-d-2026-01-06-morning_early``."""
    return f"{TIME_SLOT_PREFIX}{pid}-{TimeSlot(slot).value}"


def parse_time_slot_id(slot_id: str) -> Optional[Tuple[str, TimeSlot]]:
    """
    Split a time-slot cell id into its day period id and bucket.

    Returns:
        (period_id, TimeSlot), or None when the id is not a time-slot id
    """
    if not slot_id.startswith(TIME_SLOT_PREFIX):
        return None
    body = slot_id[len(TIME_SLOT_PREFIX):]
    pid, _, slot = body.rpartition("-")
    try:
        return pid, TimeSlot(slot)
    except ValueError:
        return None
