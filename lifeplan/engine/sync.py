"""
Synchronization helpers between the canonical item store and period caches.

Periods hold value copies of items. After a mutation writes the canonical
store, :func:`sync_all_periods` is the one place where those copies are
patched. Change detection is by identity: a transform that returns the very
same object means "unchanged", so untouched periods, lists and items keep
their identity.
"""

from typing import Callable, Dict, Iterable, List, Mapping, Optional, Set

from ..models import Item, Period


ItemTransform = Callable[[Item], Item]
ListTransform = Callable[[List[Item]], List[Item]]


def collect_descendant_ids(items: Mapping[str, Item], root_id: str) -> Set[str]:
    """
    Collect an item id and every descendant id reachable through child_ids.

    Args:
        items: Canonical item store
        root_id: Id to start from (included in the result)

    Returns:
        Set of ids; revisits are skipped so cycles terminate
    """
    ids: Set[str] = set()
    stack = [root_id]
    while stack:
        current = stack.pop()
        if current in ids:
            continue
        ids.add(current)
        item = items.get(current)
        if item is not None:
            stack.extend(reversed(item.child_ids))
    return ids


def update_item_and_descendants(items: Dict[str, Item], root_id: str, updater: ItemTransform) -> None:
    """
    Rewrite an item and all its descendants in place.

    ``items`` must be a copy owned by the caller; entries are replaced, the
    Item objects themselves are never mutated.
    """
    visited: Set[str] = set()

    def recurse(item_id: str) -> None:
        if item_id in visited:
            return
        visited.add(item_id)
        item = items.get(item_id)
        if item is None:
            return
        items[item_id] = updater(item)
        for child_id in items[item_id].child_ids:
            recurse(child_id)

    recurse(root_id)


def _map_list(items: List[Item], transform: ItemTransform) -> List[Item]:
    synced = [transform(item) for item in items]
    if any(new is not old for new, old in zip(synced, items)):
        return synced
    return items


def _project_period(period: Period, transform_list: ListTransform) -> Period:
    updates = {}

    todos = transform_list(period.todos)
    if todos is not period.todos:
        updates["todos"] = todos

    routines = transform_list(period.routines)
    if routines is not period.routines:
        updates["routines"] = routines

    slots = {key: transform_list(value) for key, value in period.slots.items()}
    if any(slots[key] is not period.slots[key] for key in slots):
        updates["slots"] = slots

    if period.time_slots is not None:
        time_slots = {key: transform_list(value) for key, value in period.time_slots.items()}
        if any(time_slots[key] is not period.time_slots[key] for key in time_slots):
            updates["time_slots"] = time_slots

    if not updates:
        return period
    return period.model_copy(update=updates)


def _project_periods(periods: Dict[str, Period], transform_list: ListTransform) -> Dict[str, Period]:
    result: Optional[Dict[str, Period]] = None
    for period_id, period in periods.items():
        projected = _project_period(period, transform_list)
        if projected is not period:
            if result is None:
                result = dict(periods)
            result[period_id] = projected
    return periods if result is None else result


def sync_all_periods(periods: Dict[str, Period], transform: ItemTransform) -> Dict[str, Period]:
    """
    Apply a per-item transform to every cached item of every period.

    Args:
        periods: Period store
        transform: Returns the same object for unchanged items, a new one otherwise

    Returns:
        A new mapping with only the changed periods replaced, or ``periods``
        itself when nothing changed
    """
    return _project_periods(periods, lambda items: _map_list(items, transform))


def prune_periods(periods: Dict[str, Period], ids: Set[str]) -> Dict[str, Period]:
    """Remove every cached item whose id is in ``ids`` from every period."""
    def prune(items: List[Item]) -> List[Item]:
        kept = [item for item in items if item.id not in ids]
        return items if len(kept) == len(items) else kept

    return _project_periods(periods, prune)


def _copy_value(value):
    return list(value) if isinstance(value, list) else value


def sync_fields(items: Mapping[str, Item], *fields: str, only: Optional[Iterable[str]] = None) -> ItemTransform:
    """
    Build a transform copying canonical field values onto cached copies.

    Args:
        items: Canonical item store after the mutation
        fields: Field names to bring in line with the canonical copy
        only: Optional ids to restrict the sync to

    Returns:
        Item transform for :func:`sync_all_periods`
    """
    restrict = set(only) if only is not None else None

    def sync(item: Item) -> Item:
        if restrict is not None and item.id not in restrict:
            return item
        latest = items.get(item.id)
        if latest is None or latest is item:
            return item
        changes = {
            field: _copy_value(getattr(latest, field))
            for field in fields
            if getattr(latest, field) != getattr(item, field)
        }
        if not changes:
            return item
        return item.model_copy(update=changes)

    return sync


def iter_period_items(period: Period) -> Iterable[Item]:
    """Yield every cached item of a period: todos, routines, slots, time slots."""
    yield from period.todos
    yield from period.routines
    for slot_items in period.slots.values():
        yield from slot_items
    if period.time_slots is not None:
        for slot_items in period.time_slots.values():
            yield from slot_items


def rebuild_item_index(periods: Mapping[str, Period]) -> Dict[str, Item]:
    """
    Reconstruct a canonical store from the period caches.

    Used when loading snapshots written without an item map. When the same id
    is cached in several periods the last copy seen wins.
    """
    items: Dict[str, Item] = {}
    for period in periods.values():
        for item in iter_period_items(period):
            items[item.id] = item
    return items
