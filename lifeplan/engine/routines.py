"""
Lazy quota reset of routines, triggered by navigation.
"""

import logging
from typing import Dict, Optional

from ..models import Item, Level, Period
from ..periods import level_of, reset_key
from .base import EngineBase, serialized
from .sync import sync_all_periods, sync_fields


def routine_cadence(routine: Item, period: Period) -> Level:
    """Level whose buckets drive a routine's quota refresh."""
    if routine.source_level is not None:
        return Level(routine.source_level)
    if routine.origin_period_id:
        return level_of(routine.origin_period_id)
    return period.level


class RoutineActions(EngineBase):

    @serialized
    def reset_routines_if_needed(self, period_id: Optional[str] = None) -> int:
        """
        Refresh the quota of every routine of a period whose bucket changed.

        Args:
            period_id: Period being entered, defaults to the current one

        Returns:
            Number of routines reset
        """
        pid = self._resolve_period_id(period_id)
        period = self.state.find_period(pid)
        if period is None:
            return 0

        items: Dict[str, Item] = dict(self.state.items)
        reset_ids = []
        for cached in period.routines:
            routine = self._canonical(cached)
            if not routine.has_quota:
                continue
            key = reset_key(pid, routine_cadence(routine, period))
            if routine.last_reset_date == key:
                continue
            items[routine.id] = routine.model_copy(
                update={"current_count": routine.target_count, "last_reset_date": key}
            )
            reset_ids.append(routine.id)

        if not reset_ids:
            return 0

        periods = sync_all_periods(
            self.state.periods, sync_fields(items, "current_count", "last_reset_date", only=reset_ids)
        )
        self._commit("reset_routines_if_needed", periods=periods, items=items)
        logging.info(f"Reset {len(reset_ids)} routine(s) in {pid}")
        return len(reset_ids)
