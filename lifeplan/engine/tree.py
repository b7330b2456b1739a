"""
Manual splitting of an item into sub-items inside the same list.
"""

import logging
from typing import List, Optional, Union

from ..models import Item, SourceType
from .base import EngineBase, coerce_enum, serialized
from .sync import sync_all_periods, sync_fields


def _insert_after_children(items: List[Item], parent_index: int, parent_id: str, new_item: Item) -> List[Item]:
    """Insert ``new_item`` right after the run of direct children following the parent."""
    insert_at = parent_index + 1
    while insert_at < len(items) and items[insert_at].parent_id == parent_id:
        insert_at += 1
    return items[:insert_at] + [new_item] + items[insert_at:]


class TreeActions(EngineBase):

    @serialized
    def add_sub_item(
        self,
        parent_id: str,
        content: str,
        location: Union[SourceType, str] = SourceType.TODO,
        period_id: Optional[str] = None,
    ) -> Optional[Item]:
        """
        Split an item by adding a child right below it.

        The child inherits color, categories and note; the parent gets the
        child id appended and is expanded.

        Args:
            parent_id: Item to split
            content: Child display text
            location: List holding the parent, "todo" or "routine"
            period_id: Period holding the parent, defaults to the current one

        Returns:
            The new child, or None when the parent is not in that list
        """
        location = coerce_enum(SourceType, location, "add_sub_item")
        if location is None:
            return None

        pid = self._resolve_period_id(period_id)
        period = self.state.find_period(pid)
        if period is None:
            return None

        field = self._list_field(location)
        source_list: List[Item] = getattr(period, field)
        parent_index = next((i for i, item in enumerate(source_list) if item.id == parent_id), None)
        if parent_index is None:
            logging.warning(f"add_sub_item: item '{parent_id}' not found in {field} of {pid}")
            return None

        parent = self._canonical(source_list[parent_index])
        child = Item(
            id=self._new_id(),
            content=content,
            color=parent.color,
            category=parent.category,
            todo_category=parent.todo_category,
            note=parent.note,
            parent_id=parent_id,
            origin_period_id=pid,
            source_level=period.level,
            source_type=location,
        )
        updated_parent = parent.model_copy(
            update={"child_ids": parent.child_ids + [child.id], "is_expanded": True}
        )

        items = {**self.state.items, parent_id: updated_parent, child.id: child}
        periods = sync_all_periods(
            self.state.periods, sync_fields(items, "child_ids", "is_expanded", only=[parent_id])
        )

        period = periods[pid]
        new_list = _insert_after_children(getattr(period, field), parent_index, parent_id, child)
        periods = {**periods, pid: period.model_copy(update={field: new_list})}

        self._commit("add_sub_item", periods=periods, items=items)
        return child

    @serialized
    def toggle_expand(self, item_id: str) -> Optional[bool]:
        """Flip the folder-tree expansion flag of an item; returns the new value."""
        item = self.state.items.get(item_id)
        if item is None:
            return None

        expanded = not item.is_expanded
        items = {**self.state.items, item_id: item.model_copy(update={"is_expanded": expanded})}
        periods = sync_all_periods(self.state.periods, sync_fields(items, "is_expanded", only=[item_id]))
        self._commit("toggle_expand", periods=periods, items=items)
        return expanded
