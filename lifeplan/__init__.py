"""
lifeplan: a seven-horizon planning engine.

Plans span 30 years down to single days. Items declared at one horizon are
assigned into child periods, and completion, edits and deletions propagate
through the resulting item trees.
"""

__version__ = "0.1.0"
__author__ = "lifeplan Project"

# Import main components
from .database import DatabaseManager, InMemorySnapshotStore, SnapshotStore
from .engine import PlanEngine
from .models import Item, Level, Period, PlanSnapshot, TimeSlot

__all__ = [
    "DatabaseManager",
    "InMemorySnapshotStore",
    "SnapshotStore",
    "PlanEngine",
    "Item",
    "Level",
    "Period",
    "PlanSnapshot",
    "TimeSlot",
]
