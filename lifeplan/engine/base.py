"""
Shared plumbing for the engine operation mixins.
"""

import functools
import logging
import threading
import uuid
from enum import Enum
from typing import Callable, List, Optional, Type, TypeVar, Union

from ..models import Item, Period, SourceType
from .state import PlanState


Listener = Callable[["EngineBase"], None]
E = TypeVar("E", bound=Enum)


def serialized(method):
    """
    Run an engine method under the engine lock.

    Calls nest freely; subscribers are notified once, when the outermost call
    returns after at least one commit.
    """
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            self._depth += 1
            try:
                return method(self, *args, **kwargs)
            finally:
                self._depth -= 1
                if self._depth == 0 and self._dirty:
                    self._dirty = False
                    self._notify()
    return wrapper


def coerce_enum(enum_cls: Type[E], value, operation: str) -> Optional[E]:
    """Convert caller input to an enum member, or log a warning and return None."""
    try:
        return enum_cls(value)
    except ValueError:
        logging.warning(f"{operation}: '{value}' is not a valid {enum_cls.__name__}")
        return None


def new_uuid() -> str:
    return str(uuid.uuid4())


class EngineBase:
    """
    State, locking, id generation and change notification for the engine.
    """

    def __init__(self, state: PlanState, current_period_id: str,
                 id_factory: Optional[Callable[[], str]] = None):
        self.state = state
        self.current_period_id = current_period_id
        self._new_id = id_factory or new_uuid
        self._lock = threading.RLock()
        self._depth = 0
        self._dirty = False
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callback invoked with the engine after each committed mutation.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as e:
                logging.error(f"State listener {listener!r} failed: {e}")

    def _commit(self, operation: str, **collections) -> None:
        self.state.commit(**collections)
        self._dirty = True
        logging.debug(f"Committed {operation}")

    def _resolve_period_id(self, period_id: Optional[str]) -> str:
        return period_id or self.current_period_id

    @staticmethod
    def _source_list(period: Period, location: Union[SourceType, str]) -> List[Item]:
        return period.todos if SourceType(location) == SourceType.TODO else period.routines

    @staticmethod
    def _list_field(location: Union[SourceType, str]) -> str:
        return "todos" if SourceType(location) == SourceType.TODO else "routines"

    def _find_in_list(self, period: Period, location: Union[SourceType, str], item_id: str) -> Optional[Item]:
        return next((item for item in self._source_list(period, location) if item.id == item_id), None)

    def _canonical(self, item: Item) -> Item:
        """The canonical version of a cached item, falling back to the copy itself."""
        return self.state.items.get(item.id, item)
