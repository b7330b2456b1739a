"""
Tests for item creation, sub-items, deletion and edit propagation.
"""

import itertools
import unittest

from lifeplan.engine import PlanEngine
from lifeplan.models import Category, Item, Level, SourceType, TodoCategory


def make_engine(period_id="m-2026-05"):
    counter = itertools.count(1)
    return PlanEngine(base_year=2026, current_period_id=period_id, id_factory=lambda: f"id-{next(counter)}")


def cached_ids(period):
    ids = [item.id for item in period.todos + period.routines]
    for entries in period.slots.values():
        ids.extend(item.id for item in entries)
    for entries in (period.time_slots or {}).values():
        ids.extend(item.id for item in entries)
    return ids


class TestAddItem(unittest.TestCase):

    def setUp(self):
        self.engine = make_engine()

    def test_add_todo(self):
        item = self.engine.add_item("Write report", todo_category=TodoCategory.WORK)

        self.assertEqual(item.id, "id-1")
        self.assertEqual(item.origin_period_id, "m-2026-05")
        self.assertEqual(item.todo_category, TodoCategory.WORK)
        self.assertIsNone(item.source_type)
        self.assertEqual([todo.id for todo in self.engine.current_period.todos], ["id-1"])
        self.assertIs(self.engine.get_item("id-1"), item)

    def test_add_quota_routine(self):
        routine = self.engine.add_item("Run", to="routine", target_count=8, category=Category.HEALTH)

        self.assertEqual(routine.current_count, 8)
        self.assertEqual(routine.source_type, SourceType.ROUTINE)
        self.assertEqual(routine.source_level, Level.MONTH)
        self.assertEqual(routine.last_reset_date, "month-2026-5")
        self.assertEqual(routine.category, Category.HEALTH)
        self.assertEqual(self.engine.current_period.routines, [routine])

    def test_add_to_other_period_creates_it(self):
        self.engine.add_item("Plan holidays", period_id="y-2027")
        self.assertEqual(len(self.engine.state.find_period("y-2027").todos), 1)

    def test_unknown_list_or_category_is_ignored(self):
        with self.assertLogs(level="WARNING"):
            self.assertIsNone(self.engine.add_item("x", to="slot"))
        with self.assertLogs(level="WARNING"):
            self.assertIsNone(self.engine.add_item("x", to="routine", category="hobby"))
        with self.assertLogs(level="WARNING"):
            self.assertIsNone(self.engine.add_item("x", todo_category="chores"))

        self.assertEqual(self.engine.state.items, {})
        self.assertEqual(self.engine.current_period.todos, [])


class TestSubItems(unittest.TestCase):

    def setUp(self):
        self.engine = make_engine()
        self.parent = self.engine.add_item("Launch")

    def test_sub_items_follow_parent_in_order(self):
        other = self.engine.add_item("Unrelated")
        first = self.engine.add_sub_item(self.parent.id, "Design")
        second = self.engine.add_sub_item(self.parent.id, "Build")

        order = [todo.id for todo in self.engine.current_period.todos]
        self.assertEqual(order, [self.parent.id, first.id, second.id, other.id])

        parent = self.engine.get_item(self.parent.id)
        self.assertEqual(parent.child_ids, [first.id, second.id])
        self.assertTrue(parent.is_expanded)
        self.assertEqual(self.engine.current_period.todos[0].child_ids, [first.id, second.id])

    def test_sub_item_inherits_display_fields(self):
        self.engine.update_item_color(self.parent.id, "#ff0000")
        self.engine.update_item_note(self.parent.id, "see doc")

        child = self.engine.add_sub_item(self.parent.id, "Design")

        self.assertEqual(child.parent_id, self.parent.id)
        self.assertEqual(child.color, "#ff0000")
        self.assertEqual(child.note, "see doc")

    def test_unknown_parent_is_a_no_op(self):
        self.assertIsNone(self.engine.add_sub_item("missing", "x"))
        self.assertIsNone(self.engine.add_sub_item(self.parent.id, "x", period_id="y-2040"))

    def test_unknown_location_is_a_no_op(self):
        with self.assertLogs(level="WARNING"):
            self.assertIsNone(self.engine.add_sub_item(self.parent.id, "x", location="slot"))
        self.assertEqual(self.engine.get_item(self.parent.id).child_ids, [])

    def test_toggle_expand(self):
        self.engine.add_sub_item(self.parent.id, "Design")

        self.assertFalse(self.engine.toggle_expand(self.parent.id))
        self.assertFalse(self.engine.current_period.todos[0].is_expanded)
        self.assertTrue(self.engine.toggle_expand(self.parent.id))
        self.assertIsNone(self.engine.toggle_expand("missing"))


class TestDelete(unittest.TestCase):

    def setUp(self):
        self.engine = make_engine()
        self.root = self.engine.add_item("Launch")
        self.parent = self.engine.add_sub_item(self.root.id, "Build")
        self.child_a = self.engine.add_sub_item(self.parent.id, "Backend")
        self.child_b = self.engine.add_sub_item(self.parent.id, "Frontend")

    def test_delete_subtree_and_unlink_from_parent(self):
        self.assertTrue(self.engine.delete_item(self.parent.id))

        for item_id in (self.parent.id, self.child_a.id, self.child_b.id):
            self.assertIsNone(self.engine.get_item(item_id))
            for period in self.engine.state.periods.values():
                self.assertNotIn(item_id, cached_ids(period))

        self.assertEqual(self.engine.get_item(self.root.id).child_ids, [])
        self.assertEqual(self.engine.current_period.todos[0].child_ids, [])

    def test_delete_removes_assigned_chain(self):
        slot = self.engine.assign_to_slot(self.child_a.id, "todo", "w-2026-05-2")
        propagated_id = slot.child_ids[0]

        self.engine.delete_item(self.root.id)

        self.assertEqual(self.engine.state.items, {})
        self.assertEqual(self.engine.current_period.slots["w-2026-05-2"], [])
        self.assertEqual(self.engine.get_period("w-2026-05-2").todos, [])
        self.assertIsNone(self.engine.get_item(propagated_id))

    def test_delete_unknown_is_a_no_op(self):
        before = self.engine.state.items
        with self.assertLogs(level="WARNING"):
            self.assertFalse(self.engine.delete_item("missing"))
        self.assertIs(self.engine.state.items, before)


class TestEditPropagation(unittest.TestCase):

    def setUp(self):
        self.engine = make_engine()
        self.todo = self.engine.add_item("Write report")
        self.slot = self.engine.assign_to_slot(self.todo.id, "todo", "w-2026-05-2", "draft")
        self.propagated_id = self.slot.child_ids[0]

    def test_content_relabels_descendants(self):
        self.assertTrue(self.engine.update_item_content(self.todo.id, "Write paper"))

        self.assertEqual(self.engine.get_item(self.slot.id).content, "Write paper: draft")
        self.assertEqual(self.engine.get_item(self.propagated_id).content, "Write paper: draft")
        self.assertEqual(self.engine.current_period.todos[0].content, "Write paper")
        self.assertEqual(self.engine.current_period.slots["w-2026-05-2"][0].content, "Write paper: draft")
        self.assertEqual(self.engine.get_period("w-2026-05-2").todos[0].content, "Write paper: draft")

    def test_color_propagates_down(self):
        self.engine.update_item_color(self.todo.id, "blue")

        for item_id in (self.todo.id, self.slot.id, self.propagated_id):
            self.assertEqual(self.engine.get_item(item_id).color, "blue")
        self.assertEqual(self.engine.get_period("w-2026-05-2").todos[0].color, "blue")

    def test_note_stays_on_one_item(self):
        self.engine.update_item_note(self.todo.id, "due friday")

        self.assertEqual(self.engine.get_item(self.todo.id).note, "due friday")
        self.assertIsNone(self.engine.get_item(self.slot.id).note)
        self.assertIsNone(self.engine.get_item(self.propagated_id).note)
        self.assertEqual(self.engine.current_period.todos[0].note, "due friday")

    def test_categories_stay_on_one_item(self):
        self.engine.update_todo_category(self.todo.id, TodoCategory.PERSONAL)
        self.engine.update_item_category(self.slot.id, Category.GROWTH)

        self.assertEqual(self.engine.get_item(self.todo.id).todo_category, TodoCategory.PERSONAL)
        self.assertIsNone(self.engine.get_item(self.slot.id).todo_category)
        self.assertEqual(self.engine.get_item(self.slot.id).category, Category.GROWTH)

    def test_unknown_item_edits_are_no_ops(self):
        with self.assertLogs(level="WARNING"):
            self.assertFalse(self.engine.update_item_content("missing", "x"))
        self.assertFalse(self.engine.update_item_note("missing", "x"))

    def test_unknown_category_values_are_ignored(self):
        with self.assertLogs(level="WARNING"):
            self.assertFalse(self.engine.update_item_category(self.todo.id, "hobby"))
        with self.assertLogs(level="WARNING"):
            self.assertFalse(self.engine.update_todo_category(self.todo.id, "chores"))

        self.assertIsNone(self.engine.get_item(self.todo.id).category)
        self.assertIsNone(self.engine.get_item(self.todo.id).todo_category)


class TestCyclicItems(unittest.TestCase):

    def setUp(self):
        self.engine = make_engine()
        a = Item(id="a", content="A", child_ids=["b"], parent_id="b")
        b = Item(id="b", content="B", child_ids=["a"], parent_id="a", sub_content="next")
        period = self.engine.current_period.model_copy(update={"todos": [a, b]})
        self.engine.state.commit(items={"a": a, "b": b}, periods={period.id: period})

    def test_content_edit_terminates(self):
        self.assertTrue(self.engine.update_item_content("a", "Z"))

        self.assertEqual(self.engine.get_item("b").content, "Z: next")
        self.assertEqual(self.engine.current_period.todos[1].content, "Z: next")

    def test_color_edit_terminates(self):
        self.assertTrue(self.engine.update_item_color("a", "green"))

        self.assertEqual(self.engine.get_item("a").color, "green")
        self.assertEqual(self.engine.get_item("b").color, "green")

    def test_delete_removes_both(self):
        self.assertTrue(self.engine.delete_item("a"))

        self.assertEqual(self.engine.state.items, {})
        self.assertEqual(self.engine.current_period.todos, [])


if __name__ == '__main__':
    unittest.main(verbosity=2)
