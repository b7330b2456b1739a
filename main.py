#!/usr/bin/env python3
"""
lifeplan - Seven-Horizon Planner

Command line host for the planning engine. Loads the plan from DuckDB,
applies the requested change, prints a breakdown of the period in focus and
saves the plan back whenever the engine reports a change.
"""

import logging
import sys
import argparse
from datetime import date
from typing import Optional

from lifeplan.config import config
from lifeplan.database import DatabaseManager
from lifeplan.engine import PlanEngine
from lifeplan.models import Level, Period, TIME_SLOT_CONFIG
from lifeplan.periods import period_for_date, slot_label


def setup_logging():
    """Configure logging for the application."""
    level = getattr(logging, config.get("logging.level", "INFO").upper())
    format_str = config.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    log_file = config.log_filename

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file)
        ]
    )


def resolve_start_period(engine: PlanEngine, args) -> str:
    """Pick the period to open: explicit id, else the configured level around a date."""
    if args.period:
        return args.period

    on = date.fromisoformat(args.date) if args.date else date.today()
    level = Level(args.level or config.start_level)
    return period_for_date(level, on, engine.base_year)


def print_period(engine: PlanEngine, period: Period):
    """Print the header, items and child slots of a period."""
    print("\n" + "=" * 60)
    print(f"{period.level.value} {period.id}")
    print("=" * 60)

    for field in ("goal", "motto", "memo"):
        value = getattr(period, field)
        if value:
            print(f"{field.capitalize()}: {value}")

    memos = engine.get_inherited_memos(period.id)
    if memos:
        print("\nMemos:")
        for memo in memos:
            print(f"  [{memo.source_period_id}] {memo.content}")

    print("\nTodos:")
    for item in period.todos:
        marker = "x" if item.is_completed else " "
        print(f"  [{marker}] {item.content}  ({item.id})")

    print("\nRoutines:")
    for item in period.routines:
        quota = f" {item.current_count}/{item.target_count}" if item.has_quota else ""
        print(f"  - {item.content}{quota}  ({item.id})")

    children = engine.children_of(period.id)
    if children:
        print("\nSlots:")
        for child_id in children:
            entries = period.slots.get(child_id, [])
            contents = ", ".join(entry.content for entry in entries) or "-"
            print(f"  {slot_label(child_id, engine.base_year):<28} {contents}")

    if period.time_slots:
        print("\nTime slots:")
        for slot, entries in period.time_slots.items():
            if entries:
                contents = ", ".join(entry.content for entry in entries)
                print(f"  {TIME_SLOT_CONFIG[slot]['label']:<14} {contents}")


def print_upcoming_events(engine: PlanEngine, days: Optional[int] = None):
    days = days if days is not None else config.upcoming_event_days
    upcoming = engine.get_upcoming_events(days)
    print(f"\nUpcoming annual events ({days} days):")
    if not upcoming:
        print("  none")
    for event, next_date, days_until in upcoming:
        print(f"  {next_date.isoformat()}  {event.title} (in {days_until} days)")


def parse_arguments():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="lifeplan - Seven-Horizon Planner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                                  # Show the current week
  python main.py --level MONTH --date 2026-05-12  # Show May 2026
  python main.py --period w-2026-05 --add "Write report"
  python main.py --period m-2026-05 --assign <item-id> --to w-2026-05-2
  python main.py --complete <item-id>
        """
    )

    parser.add_argument("--db", type=str, help="DuckDB file (default from config)")
    parser.add_argument("--period", type=str, help="Period id to open, e.g. m-2026-05")
    parser.add_argument(
        "--level",
        choices=[level.value for level in Level],
        help="Level to open around --date (default from config)"
    )
    parser.add_argument("--date", type=str, help="ISO date used with --level (default today)")
    parser.add_argument("--base-year", type=int, help="First year of the 30-year horizon")

    parser.add_argument("--add", type=str, help="Add a todo (or routine with --routine) to the period")
    parser.add_argument("--routine", action="store_true", help="Add to routines instead of todos")
    parser.add_argument("--target", type=int, help="Quota of a new routine")
    parser.add_argument("--complete", type=str, metavar="ITEM_ID", help="Toggle completion of an item")
    parser.add_argument("--assign", type=str, metavar="ITEM_ID", help="Assign an item into a child slot")
    parser.add_argument("--to", type=str, metavar="CHILD_ID", help="Child period id for --assign")
    parser.add_argument("--detail", type=str, help="Sub content for --assign")
    parser.add_argument("--delete", type=str, metavar="ITEM_ID", help="Delete an item and its subtree")
    parser.add_argument("--events", action="store_true", help="List upcoming annual events")

    parser.add_argument(
        "--version",
        action="version",
        version="lifeplan 0.1.0"
    )

    return parser.parse_args()


def apply_changes(engine: PlanEngine, args):
    """Apply the mutations requested on the command line."""
    if args.add:
        item = engine.add_item(args.add, to="routine" if args.routine else "todo", target_count=args.target)
        logging.info(f"Added {item.id}: {item.content}")

    if args.assign:
        if not args.to:
            raise ValueError("--assign requires --to")
        source = "todo"
        if engine.current_period.routines and any(r.id == args.assign for r in engine.current_period.routines):
            source = "routine"
        if engine.assign_to_slot(args.assign, source, args.to, args.detail) is None:
            print(f"Item {args.assign} not found in {engine.current_period_id}")

    if args.complete:
        if engine.toggle_complete(args.complete) is None:
            print(f"Unknown item {args.complete}")

    if args.delete:
        if not engine.delete_item(args.delete):
            print(f"Unknown item {args.delete}")


def main():
    """Main entry point."""
    args = parse_arguments()
    setup_logging()

    logging.info("lifeplan - Seven-Horizon Planner")

    db_path = args.db or config.database_filename

    try:
        with DatabaseManager(db_path) as db:
            db.initialize_database()

            engine = PlanEngine(base_year=args.base_year)
            snapshot = db.load_snapshot()
            if snapshot is not None:
                engine.load_snapshot(snapshot)
            if args.base_year:
                engine.set_base_year(args.base_year)

            engine.subscribe(lambda changed: db.save_snapshot(changed.snapshot()))

            engine.navigate_to(resolve_start_period(engine, args))
            apply_changes(engine, args)

            print_period(engine, engine.current_period)
            if args.events:
                print_upcoming_events(engine)

    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        print("\nInterrupted.")

    except Exception as e:
        logging.error(f"lifeplan failed: {e}")
        print(f"\nlifeplan failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
