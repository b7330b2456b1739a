"""Planning engine: canonical item store, period caches and propagation."""

from .planner import PlanEngine
from .state import PlanState
from .completion import percent
from .events import next_occurrence
from .routines import routine_cadence
from .sync import (
    collect_descendant_ids,
    prune_periods,
    rebuild_item_index,
    sync_all_periods,
    sync_fields,
    update_item_and_descendants,
)

__all__ = [
    "PlanEngine",
    "PlanState",
    "percent",
    "next_occurrence",
    "routine_cadence",
    "collect_descendant_ids",
    "prune_periods",
    "rebuild_item_index",
    "sync_all_periods",
    "sync_fields",
    "update_item_and_descendants",
]
