"""
Persistence interface for lifeplan.

This module defines the abstract interface that snapshot stores must implement.
The engine never talks to a store itself; hosts load a snapshot into the
engine and save ``engine.snapshot()`` back, typically from a subscriber.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import PlanSnapshot


class SnapshotStore(ABC):
    """
    Abstract base class for all snapshot stores.
    """

    @abstractmethod
    def save_snapshot(self, snapshot: PlanSnapshot) -> None:
        """
        Persist a complete planner snapshot, replacing what was stored.

        Args:
            snapshot: The state to store
        """
        pass

    @abstractmethod
    def load_snapshot(self) -> Optional[PlanSnapshot]:
        """
        Read back the stored snapshot.

        Returns:
            The snapshot, or None when nothing has been saved yet
        """
        pass
