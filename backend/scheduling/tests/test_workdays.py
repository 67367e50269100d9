from datetime import date, timedelta

from django.test import SimpleTestCase

from ..exceptions import InvalidDuration
from ..workdays import compute_end_date, is_working_day, window_end_date, working_days_in

FRIDAY = date(2024, 6, 14)
SATURDAY = date(2024, 6, 15)
MONDAY = date(2024, 6, 17)
WEDNESDAY = date(2024, 6, 19)


class ComputeEndDateTests(SimpleTestCase):
    def test_zero_duration_returns_start_even_on_weekend(self):
        self.assertEqual(compute_end_date(SATURDAY, 0), SATURDAY)
        self.assertEqual(compute_end_date(MONDAY, 0), MONDAY)

    def test_start_day_is_not_counted(self):
        self.assertEqual(compute_end_date(MONDAY, 2), WEDNESDAY)

    def test_weekend_is_skipped(self):
        self.assertEqual(compute_end_date(FRIDAY, 1), MONDAY)
        self.assertEqual(compute_end_date(FRIDAY, 3), WEDNESDAY)
        self.assertEqual(compute_end_date(SATURDAY, 3), WEDNESDAY)

    def test_negative_duration_is_rejected(self):
        with self.assertRaises(InvalidDuration) as ctx:
            compute_end_date(MONDAY, -1)
        self.assertEqual(ctx.exception.code, "INVALID_DURATION")

    def test_counts_exactly_duration_working_days(self):
        """For every start over two weeks, the result lands on a working day d working days later."""
        for offset in range(14):
            start = date(2024, 6, 10) + timedelta(days=offset)
            for duration in range(1, 13):
                end = compute_end_date(start, duration)
                self.assertTrue(is_working_day(end), (start, duration))
                self.assertEqual(working_days_in(start + timedelta(days=1), end), duration, (start, duration))


class WindowTests(SimpleTestCase):
    def test_working_days_in_inclusive_window(self):
        self.assertEqual(working_days_in(MONDAY, WEDNESDAY), 3)
        self.assertEqual(working_days_in(FRIDAY, MONDAY), 2)
        self.assertEqual(working_days_in(SATURDAY, SATURDAY + timedelta(days=1)), 0)
        self.assertEqual(working_days_in(WEDNESDAY, MONDAY), 0)

    def test_window_end_date_opening_on_weekend(self):
        self.assertEqual(window_end_date(SATURDAY, 3), WEDNESDAY)

    def test_window_end_date_opening_on_working_day(self):
        self.assertEqual(window_end_date(MONDAY, 3), WEDNESDAY)
        self.assertEqual(window_end_date(MONDAY, 1), MONDAY)

    def test_empty_window_ends_where_it_starts(self):
        self.assertEqual(window_end_date(SATURDAY, 0), SATURDAY)
        self.assertEqual(window_end_date(MONDAY, 0), MONDAY)

    def test_window_round_trips(self):
        for offset in range(7):
            start = MONDAY + timedelta(days=offset)
            for days in range(0, 10):
                end = window_end_date(start, days)
                self.assertEqual(window_end_date(start, working_days_in(start, end)), end, (start, days))
