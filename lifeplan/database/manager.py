"""
Database manager for lifeplan.

This module stores planner snapshots in DuckDB. Every model is kept as a JSON
payload next to the columns needed to look it up.
"""

import duckdb
import logging
from datetime import datetime
from typing import Dict, List, Optional

from ..models import AnnualEvent, DailyRecord, Item, Period, PlanSnapshot
from .base import SnapshotStore


class DatabaseManager(SnapshotStore):
    """
    Manages the DuckDB database holding the periods, items, records and
    annual events of a plan.
    """

    def __init__(self, db_path: str = "lifeplan.db"):
        """
        Initialize the database manager.

        Args:
            db_path: Path to the DuckDB database file (":memory:" for a transient one)
        """
        self.db_path = db_path
        self.connection = None

    def connect(self):
        """Establish connection to the database."""
        self.connection = duckdb.connect(self.db_path)

    def disconnect(self):
        """Close the database connection."""
        if self.connection:
            self.connection.close()
            self.connection = None

    def __enter__(self):
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.disconnect()

    def _require_connection(self):
        if not self.connection:
            raise RuntimeError("Database connection not established")
        return self.connection

    def initialize_database(self):
        """
        Create all necessary tables if they don't exist.
        """
        connection = self._require_connection()

        connection.execute("""
            CREATE TABLE IF NOT EXISTS periods (
                period_id VARCHAR PRIMARY KEY,
                level VARCHAR NOT NULL,
                payload TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        connection.execute("""
            CREATE TABLE IF NOT EXISTS items (
                item_id VARCHAR PRIMARY KEY,
                parent_id VARCHAR,
                origin_period_id VARCHAR,
                payload TEXT NOT NULL
            )
        """)

        connection.execute("""
            CREATE TABLE IF NOT EXISTS records (
                period_id VARCHAR PRIMARY KEY,
                payload TEXT NOT NULL,
                updated_at TIMESTAMP
            )
        """)

        connection.execute("""
            CREATE TABLE IF NOT EXISTS annual_events (
                event_id VARCHAR PRIMARY KEY,
                sort_order INTEGER NOT NULL,
                payload TEXT NOT NULL
            )
        """)

        connection.execute("""
            CREATE TABLE IF NOT EXISTS plan_meta (
                meta_key VARCHAR PRIMARY KEY,
                meta_value VARCHAR
            )
        """)

    def save_snapshot(self, snapshot: PlanSnapshot) -> None:
        """
        Replace the stored plan with a snapshot.

        All tables are rewritten inside one transaction; on failure the
        previous contents are kept and the error is re-raised.

        Args:
            snapshot: The state to store
        """
        connection = self._require_connection()
        now = datetime.now()

        connection.execute("BEGIN TRANSACTION")
        try:
            for table in ("periods", "items", "records", "annual_events", "plan_meta"):
                connection.execute(f"DELETE FROM {table}")

            if snapshot.periods:
                connection.executemany(
                    "INSERT INTO periods (period_id, level, payload, updated_at) VALUES (?, ?, ?, ?)",
                    [
                        [period_id, period.level.value, period.model_dump_json(), now]
                        for period_id, period in snapshot.periods.items()
                    ],
                )

            if snapshot.items:
                connection.executemany(
                    "INSERT INTO items (item_id, parent_id, origin_period_id, payload) VALUES (?, ?, ?, ?)",
                    [
                        [item_id, item.parent_id, item.origin_period_id, item.model_dump_json()]
                        for item_id, item in snapshot.items.items()
                    ],
                )

            if snapshot.records:
                connection.executemany(
                    "INSERT INTO records (period_id, payload, updated_at) VALUES (?, ?, ?)",
                    [
                        [period_id, record.model_dump_json(), record.updated_at]
                        for period_id, record in snapshot.records.items()
                    ],
                )

            if snapshot.annual_events:
                connection.executemany(
                    "INSERT INTO annual_events (event_id, sort_order, payload) VALUES (?, ?, ?)",
                    [
                        [event.id, position, event.model_dump_json()]
                        for position, event in enumerate(snapshot.annual_events)
                    ],
                )

            connection.execute(
                "INSERT INTO plan_meta (meta_key, meta_value) VALUES (?, ?)",
                ["base_year", str(snapshot.base_year) if snapshot.base_year is not None else None],
            )
            connection.execute("INSERT INTO plan_meta (meta_key, meta_value) VALUES (?, ?)", ["saved_at", now.isoformat()])
            connection.execute("COMMIT")
        except duckdb.Error as e:
            connection.execute("ROLLBACK")
            logging.error(f"Failed to save snapshot: {e}")
            raise

        logging.info(
            f"Saved snapshot: {len(snapshot.periods)} periods, {len(snapshot.items)} items, "
            f"{len(snapshot.records)} records, {len(snapshot.annual_events)} annual events"
        )

    def load_snapshot(self) -> Optional[PlanSnapshot]:
        """
        Read the stored plan back.

        Returns:
            The snapshot, or None if nothing has been saved
        """
        connection = self._require_connection()

        meta = dict(connection.execute("SELECT meta_key, meta_value FROM plan_meta").fetchall())
        if "saved_at" not in meta:
            return None

        periods: Dict[str, Period] = {
            row[0]: Period.model_validate_json(row[1])
            for row in connection.execute("SELECT period_id, payload FROM periods").fetchall()
        }
        items: Dict[str, Item] = {
            row[0]: Item.model_validate_json(row[1])
            for row in connection.execute("SELECT item_id, payload FROM items").fetchall()
        }
        records: Dict[str, DailyRecord] = {
            row[0]: DailyRecord.model_validate_json(row[1])
            for row in connection.execute("SELECT period_id, payload FROM records").fetchall()
        }
        annual_events: List[AnnualEvent] = [
            AnnualEvent.model_validate_json(row[0])
            for row in connection.execute("SELECT payload FROM annual_events ORDER BY sort_order").fetchall()
        ]

        base_year = meta.get("base_year")
        return PlanSnapshot(
            base_year=int(base_year) if base_year is not None else None,
            periods=periods,
            items=items,
            records=records,
            annual_events=annual_events,
        )

    def get_period(self, period_id: str) -> Optional[Period]:
        """
        Retrieve a single stored period.

        Args:
            period_id: The id of the period

        Returns:
            The period if stored, None otherwise
        """
        connection = self._require_connection()

        result = connection.execute("""
            SELECT payload
            FROM periods
            WHERE period_id = ?
        """, [period_id]).fetchone()

        if result:
            return Period.model_validate_json(result[0])
        return None

    def list_period_ids(self, level: Optional[str] = None) -> List[str]:
        """
        List stored period ids, optionally filtered by level.

        Args:
            level: Optional level name filter

        Returns:
            Sorted list of period ids
        """
        connection = self._require_connection()

        if level:
            results = connection.execute("""
                SELECT period_id FROM periods
                WHERE level = ?
                ORDER BY period_id
            """, [level]).fetchall()
        else:
            results = connection.execute("""
                SELECT period_id FROM periods
                ORDER BY period_id
            """).fetchall()

        return [row[0] for row in results]
