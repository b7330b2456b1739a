"""
Completion toggling and progress.

Completing an item forces the same flag onto every descendant; the change
then bubbles up, each ancestor being completed exactly when all of its
direct children are.
"""

import logging
import math
from typing import Dict, Optional, Set

from ..models import Item
from .base import EngineBase, serialized
from .sync import sync_all_periods, sync_fields


def percent(done: int, total: int) -> int:
    """Percentage rounded half up."""
    return math.floor(100 * done / total + 0.5)


def children_progress(items: Dict[str, Item], item: Item) -> int:
    completed = sum(1 for child_id in item.child_ids if child_id in items and items[child_id].is_completed)
    return percent(completed, len(item.child_ids))


class CompletionActions(EngineBase):

    @serialized
    def toggle_complete(self, item_id: str) -> Optional[bool]:
        """
        Flip an item's completion and propagate it.

        Returns:
            The new completion state, or None for an unknown item
        """
        target = self.state.items.get(item_id)
        if target is None:
            logging.warning(f"toggle_complete: unknown item '{item_id}'")
            return None

        completed = not target.is_completed
        items = dict(self.state.items)
        items[item_id] = target.model_copy(update={"is_completed": completed})

        self._force_descendants(items, item_id, completed)
        self._bubble_up(items, item_id)

        periods = sync_all_periods(self.state.periods, sync_fields(items, "is_completed"))
        self._commit("toggle_complete", periods=periods, items=items)
        return completed

    @staticmethod
    def _force_descendants(items: Dict[str, Item], root_id: str, completed: bool) -> None:
        visited: Set[str] = set()

        def recurse(parent_id: str) -> None:
            if parent_id in visited:
                return
            visited.add(parent_id)
            parent = items.get(parent_id)
            if parent is None:
                return
            for child_id in parent.child_ids:
                child = items.get(child_id)
                if child is None:
                    continue
                if child.is_completed != completed:
                    items[child_id] = child.model_copy(update={"is_completed": completed})
                recurse(child_id)

        recurse(root_id)

    @staticmethod
    def _bubble_up(items: Dict[str, Item], item_id: str) -> None:
        visited: Set[str] = set()
        current_id = item_id
        while current_id not in visited:
            visited.add(current_id)
            current = items.get(current_id)
            if current is None or not current.parent_id:
                return
            parent = items.get(current.parent_id)
            if parent is None or not parent.child_ids:
                return

            should_complete = children_progress(items, parent) == 100
            if parent.is_completed == should_complete:
                return
            items[parent.id] = parent.model_copy(update={"is_completed": should_complete})
            current_id = parent.id

    def get_progress(self, item_id: str) -> int:
        """
        Progress of an item in percent.

        Leaves report 100 or 0 from their own flag; items with children report
        the share of completed direct children, regardless of their own flag.
        """
        item = self.state.items.get(item_id)
        if item is None:
            return 0
        if not item.child_ids:
            return 100 if item.is_completed else 0
        return children_progress(self.state.items, item)
