"""Working-day calendar arithmetic.

Contains utilities for:
- telling working days (Monday to Friday) from weekend days,
- computing a task end date from a start date and a working-day duration,
- measuring and re-opening a window of working days.

There is no holiday calendar: Saturday and Sunday are the only non-working days.
"""

from datetime import date, timedelta

from .exceptions import InvalidDuration

ONE_DAY = timedelta(days=1)

# date.weekday(): Monday == 0 ... Sunday == 6
WEEKEND_DAYS = frozenset({5, 6})


def is_working_day(day: date) -> bool:
    return day.weekday() not in WEEKEND_DAYS


def compute_end_date(start_date: date, duration: int) -> date:
    """Return the date on which `duration` working days after `start_date` are used up.

    The start date itself is not counted: the walk begins on the following day
    and only weekdays count toward the duration. A duration of 0 returns
    `start_date` unchanged, even when it falls on a weekend.

    Raises:
        InvalidDuration: if `duration` is negative.
    """
    if duration < 0:
        raise InvalidDuration(duration)

    end_date = start_date
    counted = 0
    while counted < duration:
        end_date += ONE_DAY
        if is_working_day(end_date):
            counted += 1
    return end_date


def working_days_in(start_date: date, end_date: date) -> int:
    """Count working days in the inclusive window [start_date, end_date]."""
    count = 0
    day = start_date
    while day <= end_date:
        if is_working_day(day):
            count += 1
        day += ONE_DAY
    return count


def window_end_date(start_date: date, working_days: int) -> date:
    """Return the last day of a window opening on `start_date` with `working_days` working days.

    `start_date` counts when it is a working day. The result is never earlier
    than `start_date`, so an empty window ends where it starts. This is the
    inverse of `working_days_in`: re-opening a window at the same start gives
    back the same end date.
    """
    return max(start_date, compute_end_date(start_date - ONE_DAY, working_days))
