"""
Unit tests for core lifeplan components.

Tests configuration management, data models and the DuckDB snapshot store.
"""

import itertools
import shutil
import tempfile
import unittest
from pathlib import Path

from lifeplan.config import ConfigManager
from lifeplan.database import DatabaseManager
from lifeplan.engine import PlanEngine
from lifeplan.models import Item, Level, TimeSlot, create_empty_period


class TestConfigManager(unittest.TestCase):
    """Test configuration management functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = Path(self.temp_dir) / "test_config.yaml"

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir)

    def test_config_creation_with_defaults(self):
        """Test config manager falls back to defaults when file missing."""
        config = ConfigManager(str(self.config_path))

        self.assertIsNone(config.base_year)
        self.assertEqual(config.start_level, "WEEK")
        self.assertEqual(config.upcoming_event_days, 30)
        self.assertEqual(config.database_filename, "lifeplan.db")
        self.assertEqual(config.log_filename, "lifeplan.log")

    def test_config_loading_from_file(self):
        """Test loading configuration from YAML file."""
        test_config = """
planner:
  base_year: 2024
  start_level: month

database:
  filename: "test.db"
"""
        with open(self.config_path, 'w') as f:
            f.write(test_config)

        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.base_year, 2024)
        self.assertEqual(config.start_level, "MONTH")
        self.assertEqual(config.database_filename, "test.db")
        # keys missing from the file use the property defaults
        self.assertEqual(config.upcoming_event_days, 30)

    def test_dot_notation_access(self):
        """Test accessing config values with dot notation."""
        config = ConfigManager(str(self.config_path))  # Uses defaults

        self.assertEqual(config.get("logging.level"), "INFO")
        self.assertEqual(config.get("paths.log_file"), "lifeplan.log")
        self.assertEqual(config.get("nonexistent.key", "default"), "default")
        self.assertEqual(config.get_section("database"), {"filename": "lifeplan.db"})

    def test_invalid_yaml_falls_back_to_defaults(self):
        """Test unreadable configuration files."""
        with open(self.config_path, 'w') as f:
            f.write("planner: [unclosed")

        with self.assertLogs(level="ERROR"):
            config = ConfigManager(str(self.config_path))
        self.assertEqual(config.database_filename, "lifeplan.db")

    def test_config_reload(self):
        """Test configuration reloading."""
        with open(self.config_path, 'w') as f:
            f.write("planner:\n  base_year: 2020")

        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.base_year, 2020)

        with open(self.config_path, 'w') as f:
            f.write("planner:\n  base_year: 2030")

        config.reload()
        self.assertEqual(config.base_year, 2030)


class TestDataModels(unittest.TestCase):
    """Test data model validation and functionality."""

    def test_day_period_has_all_time_slots(self):
        day = create_empty_period("d-2026-05-12", Level.DAY)

        self.assertEqual(set(day.time_slots), set(TimeSlot))
        self.assertTrue(all(entries == [] for entries in day.time_slots.values()))

    def test_other_periods_have_no_time_slots(self):
        week = create_empty_period("w-2026-20", Level.WEEK)

        self.assertIsNone(week.time_slots)
        self.assertEqual(week.slots, {})

    def test_item_defaults(self):
        item = Item(id="a", content="Read")

        self.assertFalse(item.is_completed)
        self.assertEqual(item.child_ids, [])
        self.assertFalse(item.has_quota)
        self.assertTrue(Item(id="b", content="Run", target_count=3).has_quota)

    def test_item_json_round_trip(self):
        item = Item(id="a", content="Run", target_count=3, source_level="WEEK", source_type="routine")
        self.assertEqual(Item.model_validate_json(item.model_dump_json()), item)


class TestDatabaseManager(unittest.TestCase):
    """Test the DuckDB snapshot store."""

    def setUp(self):
        """Set up test database."""
        self.temp_dir = tempfile.mkdtemp()
        self.db_path = Path(self.temp_dir) / "test.db"

    def tearDown(self):
        """Clean up test database."""
        shutil.rmtree(self.temp_dir)

    def build_engine(self):
        counter = itertools.count(1)
        engine = PlanEngine(base_year=2026, current_period_id="m-2026-05",
                            id_factory=lambda: f"id-{next(counter)}")
        todo = engine.add_item("Write report")
        engine.add_item("Run", to="routine", target_count=4)
        engine.assign_to_slot(todo.id, "todo", "w-2026-05-2", "draft")
        engine.update_period_header("goal", "Ship v1")
        engine.add_memo("Focus")

        call = engine.add_item("Call mom", period_id="d-2026-05-12")
        engine.assign_to_time_slot(call.id, "todo", TimeSlot.EVENING_EARLY, period_id="d-2026-05-12")
        engine.update_record_mood("d-2026-05-12", "good")
        engine.add_highlight("d-2026-05-12", "Finished draft")
        engine.add_annual_event("Mom's birthday", 6, 1)
        engine.add_annual_event("New year", 1, 1)
        return engine

    def test_database_initialization(self):
        """Test database creation and table initialization."""
        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()

            self.assertTrue(self.db_path.exists())
            self.assertIsNotNone(db.connection)
            self.assertIsNone(db.load_snapshot())

    def test_snapshot_round_trip(self):
        """Test saving and loading a full plan."""
        snapshot = self.build_engine().snapshot()

        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()
            db.save_snapshot(snapshot)

        with DatabaseManager(str(self.db_path)) as db:
            loaded = db.load_snapshot()

            self.assertEqual(loaded, snapshot)
            self.assertEqual([event.title for event in loaded.annual_events], ["Mom's birthday", "New year"])
            self.assertEqual(db.get_period("m-2026-05").goal, "Ship v1")
            self.assertIsNone(db.get_period("y-1999"))
            self.assertEqual(db.list_period_ids("WEEK"), ["w-2026-05-2"])

    def test_save_replaces_previous_contents(self):
        """Test that saving twice keeps only the latest snapshot."""
        engine = self.build_engine()

        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()
            db.save_snapshot(engine.snapshot())

            engine.delete_item("id-1")
            db.save_snapshot(engine.snapshot())

            loaded = db.load_snapshot()
            self.assertNotIn("id-1", loaded.items)
            self.assertEqual(loaded, engine.snapshot())

    def test_engine_restores_from_database(self):
        """Test loading a stored plan into a fresh engine."""
        original = self.build_engine()

        with DatabaseManager(str(self.db_path)) as db:
            db.initialize_database()
            db.save_snapshot(original.snapshot())

            restored = PlanEngine(base_year=2000, current_period_id="m-2026-05")
            restored.load_snapshot(db.load_snapshot())

        self.assertEqual(restored.base_year, 2026)
        self.assertEqual(restored.current_period.goal, "Ship v1")
        self.assertEqual(restored.get_period("w-2026-05-2").todos[0].content, "Write report: draft")

    def test_requires_connection(self):
        """Test that operations fail without a connection."""
        db = DatabaseManager(str(self.db_path))

        with self.assertRaises(RuntimeError):
            db.initialize_database()
        with self.assertRaises(RuntimeError):
            db.load_snapshot()


if __name__ == '__main__':
    unittest.main(verbosity=2)
