from datetime import date

from django.test import SimpleTestCase

from ..cascade import ScheduleCascader
from ..exceptions import TaskNotCompleted
from ..graph import DependencyGraph
from ..models import Task


def make_task(task_id, start, end, completed=False):
    return Task(id=task_id, name=f"T{task_id}", start_date=start, end_date=end, is_completed=completed)


class ScheduleCascaderTests(SimpleTestCase):
    def setUp(self):
        self.graph = DependencyGraph()
        self.graph.add_edge(1, 2)
        self.cascader = ScheduleCascader(self.graph)
        self.predecessor = make_task(1, date(2024, 6, 10), date(2024, 6, 14), completed=True)
        self.successor = make_task(2, date(2024, 6, 17), date(2024, 6, 19))

    def test_friday_completion_slides_successor_to_saturday(self):
        changed = self.cascader.cascade_from(self.predecessor, [self.successor])

        self.assertEqual(changed, [self.successor])
        self.assertEqual(self.successor.start_date, date(2024, 6, 15))
        self.assertEqual(self.successor.end_date, date(2024, 6, 19))

    def test_successor_starting_on_working_day_keeps_its_effort(self):
        self.predecessor.end_date = date(2024, 6, 19)  # Wednesday
        self.cascader.cascade_from(self.predecessor, [self.successor])

        # Thu 20, Fri 21, Mon 24
        self.assertEqual(self.successor.start_date, date(2024, 6, 20))
        self.assertEqual(self.successor.end_date, date(2024, 6, 24))

    def test_second_run_changes_nothing(self):
        self.cascader.cascade_from(self.predecessor, [self.successor])
        first = (self.successor.start_date, self.successor.end_date)

        changed = self.cascader.cascade_from(self.predecessor, [self.successor])

        self.assertEqual(changed, [])
        self.assertEqual((self.successor.start_date, self.successor.end_date), first)

    def test_incomplete_predecessor_is_rejected_before_any_change(self):
        self.predecessor.is_completed = False
        with self.assertRaises(TaskNotCompleted):
            self.cascader.cascade_from(self.predecessor, [self.successor])
        self.assertEqual(self.successor.start_date, date(2024, 6, 17))
        self.assertEqual(self.successor.end_date, date(2024, 6, 19))

    def test_only_direct_successors_move(self):
        self.graph.add_edge(2, 3)
        grandchild = make_task(3, date(2024, 6, 20), date(2024, 6, 21))
        unrelated = make_task(4, date(2024, 6, 3), date(2024, 6, 4))

        changed = self.cascader.cascade_from(self.predecessor, [self.successor, grandchild, unrelated])

        self.assertEqual(changed, [self.successor])
        self.assertEqual((grandchild.start_date, grandchild.end_date), (date(2024, 6, 20), date(2024, 6, 21)))
        self.assertEqual((unrelated.start_date, unrelated.end_date), (date(2024, 6, 3), date(2024, 6, 4)))

    def test_completion_flags_are_untouched(self):
        self.successor.is_completed = True
        self.cascader.cascade_from(self.predecessor, [self.successor])
        self.assertTrue(self.successor.is_completed)
        self.assertTrue(self.predecessor.is_completed)

    def test_weekend_only_window_collapses_to_start(self):
        self.successor.start_date = date(2024, 6, 22)
        self.successor.end_date = date(2024, 6, 23)
        self.cascader.cascade_from(self.predecessor, [self.successor])
        self.assertEqual(self.successor.start_date, date(2024, 6, 15))
        self.assertEqual(self.successor.end_date, date(2024, 6, 15))
