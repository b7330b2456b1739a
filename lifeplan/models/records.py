"""
Journal records and annual events.

These live beside the period hierarchy and are carried in persistence
snapshots, but no propagation logic touches them.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class Mood(str, Enum):
    """Mood recorded for a day."""
    GREAT = "great"
    GOOD = "good"
    OKAY = "okay"
    BAD = "bad"
    TERRIBLE = "terrible"


class DailyRecord(BaseModel):
    """
    A journal entry attached to a period (usually a day).
    """

    id: str
    period_id: str = Field(..., description="Period the record belongs to")
    content: str = ""
    mood: Optional[Mood] = None
    highlights: List[str] = Field(default_factory=list)
    gratitude: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class AnnualEventType(str, Enum):
    """Kinds of yearly recurring dates."""
    BIRTHDAY = "birthday"
    ANNIVERSARY = "anniversary"
    MEMORIAL = "memorial"
    HOLIDAY = "holiday"
    OTHER = "other"


class AnnualEvent(BaseModel):
    """
    A date that recurs every year (birthday, anniversary...).
    """

    id: str
    title: str
    type: AnnualEventType = AnnualEventType.OTHER
    month: int = Field(..., ge=1, le=12)
    day: int = Field(..., ge=1, le=31)
    lunar_date: bool = False
    note: Optional[str] = None
    reminder_days: Optional[int] = None
    created_at: datetime = Field(default_factory=datetime.now)
