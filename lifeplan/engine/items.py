"""
Item creation, deletion and field edits.

Edits are asymmetric by field: content and color flow down the whole
descendant subtree, note and categories stay on the edited item.
"""

import logging
from typing import Dict, Optional, Set, Union

from ..models import Category, Item, SourceType, TodoCategory
from ..periods import reset_key
from .base import EngineBase, coerce_enum, serialized
from .sync import (
    collect_descendant_ids,
    iter_period_items,
    prune_periods,
    sync_all_periods,
    sync_fields,
    update_item_and_descendants,
)


class ItemActions(EngineBase):

    @serialized
    def add_item(
        self,
        content: str,
        to: Union[SourceType, str] = SourceType.TODO,
        target_count: Optional[int] = None,
        category: Optional[Category] = None,
        todo_category: Optional[TodoCategory] = None,
        period_id: Optional[str] = None,
    ) -> Optional[Item]:
        """
        Add a root item to a period's todo or routine list.

        Args:
            content: Display text
            to: "todo" or "routine"
            target_count: Quota for routines
            category: Routine category (ignored for todos)
            todo_category: Todo category (ignored for routines)
            period_id: Target period, defaults to the current one

        Returns:
            The created item, or None when the list or a category is unknown
        """
        to = coerce_enum(SourceType, to, "add_item")
        if to is None:
            return None
        if category is not None:
            category = coerce_enum(Category, category, "add_item")
            if category is None:
                return None
        if todo_category is not None:
            todo_category = coerce_enum(TodoCategory, todo_category, "add_item")
            if todo_category is None:
                return None

        pid = self._resolve_period_id(period_id)
        period = self.state.ensure_period(pid)
        is_routine = to == SourceType.ROUTINE

        item = Item(
            id=self._new_id(),
            content=content,
            target_count=target_count,
            current_count=target_count,
            category=category if is_routine else None,
            todo_category=todo_category if not is_routine else None,
            origin_period_id=pid,
            source_level=period.level if is_routine else None,
            source_type=SourceType.ROUTINE if is_routine else None,
            last_reset_date=reset_key(pid, period.level) if target_count is not None else None,
        )

        field = self._list_field(to)
        updated_period = period.model_copy(update={field: getattr(period, field) + [item]})

        self._commit(
            "add_item",
            periods={**self.state.periods, pid: updated_period},
            items={**self.state.items, item.id: item},
        )
        return item

    def _is_cached_anywhere(self, item_id: str) -> bool:
        return any(
            item.id == item_id
            for period in self.state.periods.values()
            for item in iter_period_items(period)
        )

    @serialized
    def delete_item(self, item_id: str) -> bool:
        """
        Delete an item together with its whole descendant subtree.

        Every cached copy is removed from every period, the ids leave the
        canonical store and the deleted item is unlinked from its parent.

        Returns:
            False when the id is unknown
        """
        item = self.state.items.get(item_id)
        if item is None and not self._is_cached_anywhere(item_id):
            logging.warning(f"delete_item: unknown item '{item_id}'")
            return False

        ids_to_delete = collect_descendant_ids(self.state.items, item_id)
        periods = prune_periods(self.state.periods, ids_to_delete)

        items = dict(self.state.items)
        parent_id = item.parent_id if item is not None else None
        parent = items.get(parent_id) if parent_id else None
        if parent is not None and parent_id not in ids_to_delete:
            items[parent_id] = parent.model_copy(
                update={"child_ids": [cid for cid in parent.child_ids if cid != item_id]}
            )
        else:
            parent_id = None

        for deleted_id in ids_to_delete:
            items.pop(deleted_id, None)

        if parent_id:
            periods = sync_all_periods(periods, sync_fields(items, "child_ids", only=[parent_id]))

        self._commit("delete_item", periods=periods, items=items)
        logging.debug(f"Deleted {len(ids_to_delete)} item(s) starting at {item_id}")
        return True

    @serialized
    def update_item_content(self, item_id: str, content: str) -> bool:
        """
        Change an item's content and relabel its descendants.

        Each descendant becomes "<new parent content>: <its sub_content>", or
        the parent content itself when it has no sub_content.
        """
        target = self.state.items.get(item_id)
        if target is None:
            logging.warning(f"update_item_content: unknown item '{item_id}'")
            return False

        items: Dict[str, Item] = dict(self.state.items)
        items[item_id] = target.model_copy(update={"content": content})
        visited: Set[str] = set()

        def relabel_children(parent_id: str, parent_content: str) -> None:
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
                child_content = f"{parent_content}: {child.sub_content}" if child.sub_content else parent_content
                items[child_id] = child.model_copy(update={"content": child_content})
                relabel_children(child_id, child_content)

        relabel_children(item_id, content)

        periods = sync_all_periods(self.state.periods, sync_fields(items, "content"))
        self._commit("update_item_content", periods=periods, items=items)
        return True

    @serialized
    def update_item_color(self, item_id: str, color: Optional[str]) -> bool:
        """Recolor an item and all of its descendants."""
        if item_id not in self.state.items:
            logging.warning(f"update_item_color: unknown item '{item_id}'")
            return False

        items = dict(self.state.items)
        update_item_and_descendants(items, item_id, lambda item: item.model_copy(update={"color": color}))

        periods = sync_all_periods(self.state.periods, sync_fields(items, "color"))
        self._commit("update_item_color", periods=periods, items=items)
        return True

    def _update_single_field(self, operation: str, item_id: str, field: str, value) -> bool:
        target = self.state.items.get(item_id)
        if target is None:
            logging.warning(f"{operation}: unknown item '{item_id}'")
            return False

        items = {**self.state.items, item_id: target.model_copy(update={field: value})}
        periods = sync_all_periods(self.state.periods, sync_fields(items, field, only=[item_id]))
        self._commit(operation, periods=periods, items=items)
        return True

    @serialized
    def update_item_note(self, item_id: str, note: Optional[str]) -> bool:
        """Set the note of exactly one item; notes never propagate."""
        return self._update_single_field("update_item_note", item_id, "note", note)

    @serialized
    def update_item_category(self, item_id: str, category: Optional[Category]) -> bool:
        if category is not None:
            category = coerce_enum(Category, category, "update_item_category")
            if category is None:
                return False
        return self._update_single_field("update_item_category", item_id, "category", category)

    @serialized
    def update_todo_category(self, item_id: str, todo_category: Optional[TodoCategory]) -> bool:
        if todo_category is not None:
            todo_category = coerce_enum(TodoCategory, todo_category, "update_todo_category")
            if todo_category is None:
                return False
        return self._update_single_field("update_todo_category", item_id, "todo_category", todo_category)
