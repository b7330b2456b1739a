"""
Assigning items down the hierarchy.

Assigning an item of a period into one of its child periods produces a
three-node chain:

    origin item (period P) -> slot entry (P.slots[child]) -> todo (child.todos)

which is how a commitment declared at one horizon becomes an actionable item
one level down.
"""

import logging
from typing import Dict, Optional, Tuple, Union

from ..models import Item, Level, Period, SourceType, TimeSlot, create_empty_period, empty_time_slots
from ..periods import level_of, parse_time_slot_id
from .base import EngineBase, coerce_enum, serialized
from .sync import sync_all_periods, sync_fields


class SlotActions(EngineBase):

    def _split_source(
        self, period: Period, item_id: str, source: SourceType, slot_item_id: str
    ) -> Optional[Tuple[Item, Item]]:
        """
        Locate the source item and link a new child id onto it.

        Quota routines lose one unit of their remaining count, floored at zero.

        Returns:
            (canonical source before the split, updated source), or None
        """
        cached = self._find_in_list(period, source, item_id)
        if cached is None:
            return None
        original = self._canonical(cached)

        updates = {"child_ids": original.child_ids + [slot_item_id]}
        if source == SourceType.ROUTINE and original.has_quota:
            remaining = original.current_count if original.current_count is not None else original.target_count
            updates["current_count"] = max(0, remaining - 1)

        return original, original.model_copy(update=updates)

    @staticmethod
    def _display_content(original: Item, sub_content: Optional[str]) -> str:
        return f"{original.content}: {sub_content}" if sub_content else original.content

    @serialized
    def assign_to_slot(
        self,
        item_id: str,
        source: Union[SourceType, str],
        target_slot_id: str,
        sub_content: Optional[str] = None,
        period_id: Optional[str] = None,
    ) -> Optional[Item]:
        """
        Split an item into a child period slot.

        Args:
            item_id: Item in the period's todos or routines
            source: "todo" or "routine", the list holding the item
            target_slot_id: Child period id to assign into
            sub_content: Optional detail, shown as "content: sub_content"
            period_id: Period holding the item, defaults to the current one

        Returns:
            The new slot entry, or None when the item is not in that list or
            the source is unknown
        """
        source = coerce_enum(SourceType, source, "assign_to_slot")
        if source is None:
            return None

        pid = self._resolve_period_id(period_id)
        period = self.state.ensure_period(pid)

        slot_item_id = self._new_id()
        split = self._split_source(period, item_id, source, slot_item_id)
        if split is None:
            logging.warning(f"assign_to_slot: item '{item_id}' not found in {source.value}s of {pid}")
            return None
        original, updated_original = split

        propagated_id = self._new_id()
        slot_item = Item(
            id=slot_item_id,
            content=self._display_content(original, sub_content),
            color=original.color,
            category=original.category,
            todo_category=original.todo_category,
            note=original.note,
            parent_id=original.id,
            child_ids=[propagated_id],
            origin_period_id=pid,
            sub_content=sub_content,
            source_level=period.level,
            source_type=source,
        )
        # the propagated todo already shows the slot label, it carries no
        # sub_content of its own so relabeling does not repeat the detail
        propagated = slot_item.model_copy(
            update={"id": propagated_id, "parent_id": slot_item_id, "child_ids": [], "sub_content": None}
        )

        items = {
            **self.state.items,
            updated_original.id: updated_original,
            slot_item.id: slot_item,
            propagated.id: propagated,
        }
        periods = sync_all_periods(
            self.state.periods, sync_fields(items, "child_ids", "current_count", only=[original.id])
        )

        period = periods[pid]
        slots = {**period.slots, target_slot_id: period.slots.get(target_slot_id, []) + [slot_item]}
        periods = {**periods, pid: period.model_copy(update={"slots": slots})}

        child_period = periods.get(target_slot_id) or create_empty_period(target_slot_id, level_of(target_slot_id))
        periods[target_slot_id] = child_period.model_copy(update={"todos": child_period.todos + [propagated]})

        self._commit("assign_to_slot", periods=periods, items=items)
        logging.debug(f"Assigned {item_id} from {pid} into {target_slot_id}")
        return slot_item

    @serialized
    def assign_to_time_slot(
        self,
        item_id: str,
        source: Union[SourceType, str],
        time_slot: Union[TimeSlot, str],
        sub_content: Optional[str] = None,
        period_id: Optional[str] = None,
    ) -> Optional[Item]:
        """
        Place an item of a day period into one of its time-of-day buckets.

        Only day periods have time slots; the slot entry is a child of the
        source item but nothing is propagated further down.

        Returns:
            The new slot entry, or None when not applicable
        """
        source = coerce_enum(SourceType, source, "assign_to_time_slot")
        if source is None:
            return None
        slot = self._as_time_slot(time_slot)
        if slot is None:
            logging.warning(f"assign_to_time_slot: unknown time slot '{time_slot}'")
            return None

        pid = self._resolve_period_id(period_id)
        period = self.state.ensure_period(pid)
        if period.level != Level.DAY:
            logging.warning(f"assign_to_time_slot: {pid} is not a day period")
            return None

        slot_item_id = self._new_id()
        split = self._split_source(period, item_id, source, slot_item_id)
        if split is None:
            return None
        original, updated_original = split

        slot_item = Item(
            id=slot_item_id,
            content=self._display_content(original, sub_content),
            color=original.color,
            category=original.category,
            todo_category=original.todo_category,
            note=original.note,
            sub_content=sub_content,
            source_level=original.source_level or period.level,
            source_type=original.source_type or source,
            parent_id=original.id,
            origin_period_id=pid,
        )

        items = {**self.state.items, updated_original.id: updated_original, slot_item.id: slot_item}
        periods = sync_all_periods(
            self.state.periods, sync_fields(items, "child_ids", "current_count", only=[original.id])
        )

        period = periods[pid]
        time_slots = dict(period.time_slots) if period.time_slots is not None else empty_time_slots()
        time_slots[slot] = time_slots.get(slot, []) + [slot_item]
        periods = {**periods, pid: period.model_copy(update={"time_slots": time_slots})}

        self._commit("assign_to_time_slot", periods=periods, items=items)
        return slot_item

    @serialized
    def move_slot_item(
        self, item_id: str, from_slot_id: str, to_slot_id: str, period_id: Optional[str] = None
    ) -> bool:
        """
        Move a slot entry to another child slot of the same period.

        The todos it propagated into the old child period follow it into the
        new one.

        Returns:
            True when something moved
        """
        if from_slot_id == to_slot_id:
            return False

        pid = self._resolve_period_id(period_id)
        period = self.state.ensure_period(pid)
        from_items = period.slots.get(from_slot_id, [])
        moving = next((item for item in from_items if item.id == item_id), None)
        if moving is None:
            return False

        slots = {
            **period.slots,
            from_slot_id: [item for item in from_items if item.id != item_id],
            to_slot_id: period.slots.get(to_slot_id, []) + [moving],
        }
        periods: Dict[str, Period] = {**self.state.periods, pid: period.model_copy(update={"slots": slots})}

        child_ids = set(self._canonical(moving).child_ids)
        old_child = periods.get(from_slot_id)
        if child_ids and old_child is not None:
            carried = [todo for todo in old_child.todos if todo.id in child_ids]
            if carried:
                periods[from_slot_id] = old_child.model_copy(
                    update={"todos": [todo for todo in old_child.todos if todo.id not in child_ids]}
                )
                new_child = periods.get(to_slot_id) or create_empty_period(to_slot_id, level_of(to_slot_id))
                periods[to_slot_id] = new_child.model_copy(update={"todos": new_child.todos + carried})

        self._commit("move_slot_item", periods=periods)
        return True

    @staticmethod
    def _as_time_slot(value: Union[TimeSlot, str]) -> Optional[TimeSlot]:
        if isinstance(value, str) and not isinstance(value, TimeSlot):
            parsed = parse_time_slot_id(value)
            if parsed is not None:
                return parsed[1]
        try:
            return TimeSlot(value)
        except ValueError:
            return None

    @serialized
    def move_time_slot_item(
        self,
        item_id: str,
        from_slot: Union[TimeSlot, str],
        to_slot: Union[TimeSlot, str],
        period_id: Optional[str] = None,
    ) -> bool:
        """
        Move an entry between time-of-day buckets of a day period.

        Buckets may be given as TimeSlot values or as ``ts-<day>-<slot>`` ids.
        """
        from_ts, to_ts = self._as_time_slot(from_slot), self._as_time_slot(to_slot)
        if from_ts is None or to_ts is None or from_ts == to_ts:
            return False

        pid = self._resolve_period_id(period_id)
        period = self.state.ensure_period(pid)
        if period.level != Level.DAY or period.time_slots is None:
            return False

        from_items = period.time_slots.get(from_ts, [])
        moving = next((item for item in from_items if item.id == item_id), None)
        if moving is None:
            return False

        time_slots = {
            **period.time_slots,
            from_ts: [item for item in from_items if item.id != item_id],
            to_ts: period.time_slots.get(to_ts, []) + [moving],
        }
        self._commit(
            "move_time_slot_item",
            periods={**self.state.periods, pid: period.model_copy(update={"time_slots": time_slots})},
        )
        return True
