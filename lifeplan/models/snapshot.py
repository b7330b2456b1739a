"""
Snapshot model exchanged with the persistence collaborator.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from .plan import Item, Period
from .records import AnnualEvent, DailyRecord


class PlanSnapshot(BaseModel):
    """
    A complete copy of the planner state.

    Stores accept this shape for writes and return it for reads. ``items``
    may be empty in snapshots produced by older writers, in which case the
    engine rebuilds the canonical store from the period copies.
    """

    base_year: Optional[int] = Field(
        default=None,
        description="Year the 30-year horizon starts at"
    )

    periods: Dict[str, Period] = Field(default_factory=dict)
    items: Dict[str, Item] = Field(default_factory=dict)
    records: Dict[str, DailyRecord] = Field(default_factory=dict)
    annual_events: List[AnnualEvent] = Field(default_factory=list)
