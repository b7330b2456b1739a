"""
In-memory snapshot store, used by tests and short-lived hosts.
"""

import logging
from typing import Optional

from ..models import PlanSnapshot
from .base import SnapshotStore


class InMemorySnapshotStore(SnapshotStore):
    """
    Keeps one deep copy of the last saved snapshot.
    """

    def __init__(self, snapshot: Optional[PlanSnapshot] = None):
        self._snapshot = snapshot.model_copy(deep=True) if snapshot is not None else None
        self.save_count = 0

    def save_snapshot(self, snapshot: PlanSnapshot) -> None:
        self._snapshot = snapshot.model_copy(deep=True)
        self.save_count += 1
        logging.debug(f"Stored in-memory snapshot #{self.save_count}")

    def load_snapshot(self) -> Optional[PlanSnapshot]:
        if self._snapshot is None:
            return None
        return self._snapshot.model_copy(deep=True)
