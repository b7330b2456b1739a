"""Data models for lifeplan."""

from .plan import (
    Level,
    LEVELS,
    LEVEL_DEPTH,
    LEVEL_LABELS,
    CHILD_LEVEL,
    TimeSlot,
    TIME_SLOTS,
    TIME_SLOT_CONFIG,
    SourceType,
    Category,
    TodoCategory,
    Item,
    Memo,
    Period,
    create_empty_period,
    empty_time_slots,
)
from .records import Mood, DailyRecord, AnnualEventType, AnnualEvent
from .snapshot import PlanSnapshot

__all__ = [
    "Level",
    "LEVELS",
    "LEVEL_DEPTH",
    "LEVEL_LABELS",
    "CHILD_LEVEL",
    "TimeSlot",
    "TIME_SLOTS",
    "TIME_SLOT_CONFIG",
    "SourceType",
    "Category",
    "TodoCategory",
    "Item",
    "Memo",
    "Period",
    "create_empty_period",
    "empty_time_slots",
    "Mood",
    "DailyRecord",
    "AnnualEventType",
    "AnnualEvent",
    "PlanSnapshot",
]
