"""
In-memory planner state: the canonical item store and the period store.
"""

import logging
from typing import Dict, List, Optional

from ..models import AnnualEvent, DailyRecord, Item, Period, PlanSnapshot, create_empty_period
from ..periods import parse_period_id
from .sync import rebuild_item_index


class PlanState:
    """
    Holds the shared mutable collections of the engine.

    Each collection is only ever replaced as a whole through :meth:`commit`,
    so readers never observe a half-applied mutation.
    """

    def __init__(
        self,
        base_year: int,
        periods: Optional[Dict[str, Period]] = None,
        items: Optional[Dict[str, Item]] = None,
        records: Optional[Dict[str, DailyRecord]] = None,
        annual_events: Optional[List[AnnualEvent]] = None,
    ):
        self.base_year = base_year
        self.periods: Dict[str, Period] = periods or {}
        self.items: Dict[str, Item] = items or {}
        self.records: Dict[str, DailyRecord] = records or {}
        self.annual_events: List[AnnualEvent] = annual_events or []

    def find_period(self, period_id: str) -> Optional[Period]:
        return self.periods.get(period_id)

    def ensure_period(self, period_id: str) -> Period:
        """
        Return a period, creating an empty one on first reference.

        Creation bypasses ``commit``: an empty period is part of the next
        snapshot but does not count as a change on its own.

        Args:
            period_id: Period identifier

        Returns:
            The existing or newly created Period
        """
        period = self.periods.get(period_id)
        if period is not None:
            return period

        period = create_empty_period(period_id, parse_period_id(period_id).level)
        self.periods = {**self.periods, period_id: period}
        logging.debug(f"Created period {period_id}")
        return period

    def commit(
        self,
        periods: Optional[Dict[str, Period]] = None,
        items: Optional[Dict[str, Item]] = None,
        records: Optional[Dict[str, DailyRecord]] = None,
        annual_events: Optional[List[AnnualEvent]] = None,
    ) -> None:
        """Swap in new collections; omitted ones are left untouched."""
        if items is not None:
            self.items = items
        if periods is not None:
            self.periods = periods
        if records is not None:
            self.records = records
        if annual_events is not None:
            self.annual_events = annual_events

    def to_snapshot(self) -> PlanSnapshot:
        return PlanSnapshot(
            base_year=self.base_year,
            periods=dict(self.periods),
            items=dict(self.items),
            records=dict(self.records),
            annual_events=list(self.annual_events),
        )

    @classmethod
    def from_snapshot(cls, snapshot: PlanSnapshot, base_year: int) -> "PlanState":
        """
        Build state from a persisted snapshot.

        Snapshots without an item map get their canonical store rebuilt from
        the period caches.
        """
        items = dict(snapshot.items)
        if not items and snapshot.periods:
            items = rebuild_item_index(snapshot.periods)
            logging.info(f"Rebuilt canonical store with {len(items)} items from {len(snapshot.periods)} periods")

        return cls(
            base_year=snapshot.base_year or base_year,
            periods=dict(snapshot.periods),
            items=items,
            records=dict(snapshot.records),
            annual_events=list(snapshot.annual_events),
        )
