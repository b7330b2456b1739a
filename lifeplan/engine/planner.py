"""
The planning engine facade.

PlanEngine combines the operation mixins over one shared PlanState and keeps
the navigation cursor (the period currently in focus).
"""

import logging
from datetime import date
from typing import Callable, List, Optional, Union

from ..config import get_config
from ..models import Item, Level, Period, PlanSnapshot
from ..periods import (
    Direction,
    adjacent_of,
    children_of,
    level_of,
    parent_of,
    period_for_date,
)
from .base import serialized
from .completion import CompletionActions
from .events import EventActions
from .headers import HeaderActions
from .items import ItemActions
from .records import RecordActions
from .routines import RoutineActions
from .slots import SlotActions
from .state import PlanState
from .tree import TreeActions


class PlanEngine(
    ItemActions,
    TreeActions,
    SlotActions,
    CompletionActions,
    RoutineActions,
    HeaderActions,
    RecordActions,
    EventActions,
):
    """
    In-memory planner over the seven-level period hierarchy.

    Args:
        base_year: First year of the 30-year horizon. Defaults to the
            ``planner.base_year`` setting, then to the current year.
        current_period_id: Period in focus, defaults to the current ISO week
        id_factory: Callable producing new item ids, defaults to uuid4 strings
    """

    def __init__(
        self,
        base_year: Optional[int] = None,
        current_period_id: Optional[str] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        if base_year is None:
            base_year = get_config().base_year or date.today().year
        if current_period_id is None:
            current_period_id = period_for_date(Level.WEEK, date.today(), base_year)

        super().__init__(PlanState(base_year), current_period_id, id_factory)
        self.state.ensure_period(current_period_id)

    @property
    def base_year(self) -> int:
        return self.state.base_year

    @property
    def current_level(self) -> Level:
        return level_of(self.current_period_id)

    @property
    def current_period(self) -> Period:
        return self.get_period(self.current_period_id)

    # Navigation

    @serialized
    def navigate_to(self, period_id: str) -> Period:
        """
        Move the cursor to a period, creating it if needed.

        Entering a period refreshes the quota of its routines.

        Returns:
            The period now in focus
        """
        created = self.state.find_period(period_id) is None
        self.state.ensure_period(period_id)
        if created:
            self._dirty = True

        if self.current_period_id != period_id:
            self.current_period_id = period_id
            self._dirty = True
            logging.debug(f"Navigated to {period_id}")

        self.reset_routines_if_needed(period_id)
        return self.state.periods[period_id]

    def drill_down(self, child_id: str) -> Optional[Period]:
        """Navigate into a child of the current period; other ids are ignored."""
        if child_id not in self.children_of(self.current_period_id):
            logging.warning(f"drill_down: {child_id} is not a child of {self.current_period_id}")
            return None
        return self.navigate_to(child_id)

    def drill_up(self) -> Optional[Period]:
        """Navigate to the parent of the current period, None at the top."""
        parent_id = self.parent_of(self.current_period_id)
        if parent_id is None:
            return None
        return self.navigate_to(parent_id)

    def go_adjacent(self, direction: Union[Direction, str]) -> Optional[Period]:
        """Navigate to the previous or next sibling of the current period."""
        sibling_id = self.adjacent_of(self.current_period_id, direction)
        if sibling_id is None:
            return None
        return self.navigate_to(sibling_id)

    @serialized
    def set_base_year(self, year: int) -> None:
        """Re-anchor the 30-year horizon; existing periods keep their ids."""
        if year == self.state.base_year:
            return
        self.state.base_year = year
        self._dirty = True
        logging.info(f"Base year set to {year}")

    # Queries

    def get_period(self, period_id: str) -> Period:
        """
        Return a period, creating an empty one on first reference.

        Reads never notify subscribers, so a period created here reaches the
        store with the next committed change.
        """
        with self._lock:
            return self.state.ensure_period(period_id)

    def get_item(self, item_id: str) -> Optional[Item]:
        return self.state.items.get(item_id)

    def children_of(self, period_id: Optional[str] = None) -> List[str]:
        return children_of(self._resolve_period_id(period_id), self.base_year)

    def parent_of(self, period_id: Optional[str] = None) -> Optional[str]:
        return parent_of(self._resolve_period_id(period_id), self.base_year)

    def adjacent_of(self, period_id: Optional[str], direction: Union[Direction, str]) -> Optional[str]:
        return adjacent_of(self._resolve_period_id(period_id), direction, self.base_year)

    # Snapshots

    def snapshot(self) -> PlanSnapshot:
        """Copy of the whole state, ready for a SnapshotStore."""
        with self._lock:
            return self.state.to_snapshot()

    @serialized
    def load_snapshot(self, snapshot: PlanSnapshot) -> None:
        """
        Replace the state with a persisted snapshot.

        The cursor stays where it is; its period is created if the snapshot
        does not hold it.
        """
        self.state = PlanState.from_snapshot(snapshot, self.state.base_year)
        self.state.ensure_period(self.current_period_id)
        self._dirty = True
        logging.info(
            f"Loaded snapshot with {len(self.state.periods)} periods and {len(self.state.items)} items"
        )
