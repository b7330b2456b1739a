"""
Plan data models for lifeplan.

This module defines the period hierarchy levels, the day time-slot buckets and
the two core structures of the engine: the Item (a todo or routine) and the
Period (one node of the seven-level time hierarchy).
"""

from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class Level(str, Enum):
    """The seven nested time horizons, coarsest first."""
    THIRTY_YEAR = "THIRTY_YEAR"
    FIVE_YEAR = "FIVE_YEAR"
    YEAR = "YEAR"
    QUARTER = "QUARTER"
    MONTH = "MONTH"
    WEEK = "WEEK"
    DAY = "DAY"


LEVELS: List[Level] = list(Level)

LEVEL_DEPTH: Dict[Level, int] = {level: depth for depth, level in enumerate(LEVELS)}

CHILD_LEVEL: Dict[Level, Optional[Level]] = {
    Level.THIRTY_YEAR: Level.FIVE_YEAR,
    Level.FIVE_YEAR: Level.YEAR,
    Level.YEAR: Level.QUARTER,
    Level.QUARTER: Level.MONTH,
    Level.MONTH: Level.WEEK,
    Level.WEEK: Level.DAY,
    Level.DAY: None,
}

LEVEL_LABELS: Dict[Level, str] = {
    Level.THIRTY_YEAR: "30 years",
    Level.FIVE_YEAR: "5 years",
    Level.YEAR: "Year",
    Level.QUARTER: "Quarter",
    Level.MONTH: "Month",
    Level.WEEK: "Week",
    Level.DAY: "Day",
}


class TimeSlot(str, Enum):
    """Time-of-day buckets of a day period."""
    DAWN = "dawn"
    MORNING_EARLY = "morning_early"
    MORNING_LATE = "morning_late"
    AFTERNOON_EARLY = "afternoon_early"
    AFTERNOON_LATE = "afternoon_late"
    EVENING_EARLY = "evening_early"
    EVENING_LATE = "evening_late"
    ANYTIME = "anytime"


TIME_SLOTS: List[TimeSlot] = list(TimeSlot)

TIME_SLOT_CONFIG: Dict[TimeSlot, Dict[str, str]] = {
    TimeSlot.DAWN: {"label": "Dawn", "time_range": "0:00 ~ 6:00"},
    TimeSlot.MORNING_EARLY: {"label": "Morning 1", "time_range": "6:00 ~ 9:00"},
    TimeSlot.MORNING_LATE: {"label": "Morning 2", "time_range": "9:00 ~ 12:00"},
    TimeSlot.AFTERNOON_EARLY: {"label": "Afternoon 1", "time_range": "12:00 ~ 15:00"},
    TimeSlot.AFTERNOON_LATE: {"label": "Afternoon 2", "time_range": "15:00 ~ 18:00"},
    TimeSlot.EVENING_EARLY: {"label": "Evening 1", "time_range": "18:00 ~ 21:00"},
    TimeSlot.EVENING_LATE: {"label": "Evening 2", "time_range": "21:00 ~ 24:00"},
    TimeSlot.ANYTIME: {"label": "Anytime", "time_range": ""},
}


class SourceType(str, Enum):
    """Whether an item started life as a todo or a routine."""
    TODO = "todo"
    ROUTINE = "routine"


class Category(str, Enum):
    """Life-area category used by routines."""
    WORK = "work"
    HEALTH = "health"
    RELATIONSHIP = "relationship"
    FINANCE = "finance"
    GROWTH = "growth"
    UNCATEGORIZED = "uncategorized"


class TodoCategory(str, Enum):
    """Category used by todos."""
    PERSONAL = "personal"
    WORK = "work"
    OTHER = "other"


class Item(BaseModel):
    """
    A single commitment: a todo or a routine instance.

    Items stored inside periods are value copies. The canonical store in the
    engine holds the authoritative version of every field.
    """

    id: str = Field(
        ...,
        description="Opaque unique identifier, never reused"
    )

    content: str = Field(
        ...,
        description="Display text, possibly 'parent label: detail'"
    )

    is_completed: bool = Field(
        default=False,
        description="Completion flag; cached progress result for items with children"
    )

    color: Optional[str] = None
    category: Optional[Category] = None
    todo_category: Optional[TodoCategory] = None

    target_count: Optional[int] = Field(
        default=None,
        description="Quota of a routine per reset bucket"
    )

    current_count: Optional[int] = Field(
        default=None,
        description="Remaining quota, floored at zero"
    )

    sub_content: Optional[str] = Field(
        default=None,
        description="Detail appended to the parent label when the item was split"
    )

    parent_id: Optional[str] = Field(
        default=None,
        description="The item this one was split or propagated from"
    )

    child_ids: List[str] = Field(
        default_factory=list,
        description="Ordered ids this item was split into"
    )

    is_expanded: bool = False

    origin_period_id: Optional[str] = Field(
        default=None,
        description="Period the item was created in"
    )

    source_level: Optional[Level] = None
    source_type: Optional[SourceType] = None

    last_reset_date: Optional[str] = Field(
        default=None,
        description="Reset bucket key of the last quota refresh"
    )

    note: Optional[str] = None

    @property
    def has_quota(self) -> bool:
        """True for routines carrying a target count."""
        return self.target_count is not None


class Memo(BaseModel):
    """A memo line written at a specific period, shown to its descendants."""

    id: str
    content: str
    source_level: Level
    source_period_id: str


class Period(BaseModel):
    """
    One node of the time hierarchy.

    ``slots`` maps a child period id to the items assigned into that child;
    ``time_slots`` only exists on day periods.
    """

    id: str = Field(..., description="Period identifier, e.g. 'w-2026-05'")
    level: Level = Field(..., description="Hierarchy level of the period")

    goal: str = ""
    motto: str = ""
    memo: str = ""

    memos: List[str] = Field(
        default_factory=list,
        description="Legacy plain-text memos"
    )

    structured_memos: List[Memo] = Field(default_factory=list)

    todos: List[Item] = Field(default_factory=list)
    routines: List[Item] = Field(default_factory=list)

    slots: Dict[str, List[Item]] = Field(
        default_factory=dict,
        description="Child period id -> items assigned into that child"
    )

    time_slots: Optional[Dict[TimeSlot, List[Item]]] = Field(
        default=None,
        description="Time-of-day buckets, day periods only"
    )


def empty_time_slots() -> Dict[TimeSlot, List[Item]]:
    """Return a fresh mapping with every time-slot bucket empty."""
    return {slot: [] for slot in TIME_SLOTS}


def create_empty_period(period_id: str, level: Level) -> Period:
    """
    Create an empty period.

    Args:
        period_id: Identifier of the period
        level: Hierarchy level of the period

    Returns:
        A Period with empty lists; day periods get all time-slot buckets
    """
    period = Period(id=period_id, level=level)
    if level == Level.DAY:
        period.time_slots = empty_time_slots()
    return period
