"""Snapshot persistence for lifeplan."""

from .base import SnapshotStore
from .memory import InMemorySnapshotStore
from .manager import DatabaseManager

__all__ = ["SnapshotStore", "InMemorySnapshotStore", "DatabaseManager"]
