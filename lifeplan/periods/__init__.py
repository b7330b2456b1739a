"""Calendar math, period id codec and hierarchy navigation."""

from .calendar import (
    WeekSpan,
    iso_week,
    iso_week_year,
    iso_weeks_in_year,
    monday_of_date,
    monday_of_iso_week,
    weeks_in_month,
)
from .codec import (
    THIRTY_YEAR_ID,
    PeriodCoordinates,
    encode,
    level_of,
    parse_period_id,
    period_id,
)
from .navigator import Direction, adjacent_of, children_of, clamp_five_year_index, parent_of, period_for_date
from .reset_keys import reset_key
from .labels import parse_time_slot_id, slot_label, slot_label_short, time_slot_id

__all__ = [
    "WeekSpan",
    "iso_week",
    "iso_week_year",
    "iso_weeks_in_year",
    "monday_of_date",
    "monday_of_iso_week",
    "weeks_in_month",
    "THIRTY_YEAR_ID",
    "PeriodCoordinates",
    "encode",
    "level_of",
    "parse_period_id",
    "period_id",
    "Direction",
    "adjacent_of",
    "children_of",
    "clamp_five_year_index",
    "parent_of",
    "period_for_date",
    "reset_key",
    "parse_time_slot_id",
    "slot_label",
    "slot_label_short",
    "time_slot_id",
]
