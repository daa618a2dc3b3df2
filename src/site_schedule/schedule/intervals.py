# src/site_schedule/schedule/intervals.py

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from ..tasks.task_models import Task

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)

# Fixed time-of-day anchors for membership tests.
CELL_ANCHOR = time(12, 0)
START_ANCHOR = time.min
END_ANCHOR = time.max


@dataclass(frozen=True, slots=True)
class OccupiedInterval:
    """Closed date range [start, end] a task is active on."""

    start: date
    end: date

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        """
        Inclusive membership with time-of-day anchors:
        day at midday vs [start 00:00, end 23:59:59.999999].
        """
        noon = datetime.combine(day, CELL_ANCHOR)
        return datetime.combine(self.start, START_ANCHOR) <= noon <= datetime.combine(self.end, END_ANCHOR)


def occupied_interval(task: Task) -> OccupiedInterval | None:
    """
    Interval a task occupies, or None when it has no usable start date.

    An explicit end_date wins over duration unless it precedes start_date,
    in which case the duration-derived end is used. A duration that runs
    past date.max also yields None.
    """
    start = task.start_date
    if start is None:
        return None

    if task.end_date is not None and task.end_date >= start:
        return OccupiedInterval(start=start, end=task.end_date)

    duration = task.duration if isinstance(task.duration, int) and task.duration >= 1 else 1
    try:
        end = start + timedelta(days=duration - 1)
    except OverflowError:
        logger.warning("Task %s: duration %s runs past the calendar, skipping", task.id, duration)
        return None
    return OccupiedInterval(start=start, end=end)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def normalize_month(year: int, month: int) -> tuple[int, int]:
    """Carry an out-of-range month into the year: (2026, 13) -> (2027, 1)."""
    y, m = divmod(month - 1, 12)
    return year + y, m + 1


def add_months(day: date, months: int) -> date:
    """Shift by whole months, clamping the day (Jan 31 + 1 -> Feb 28/29)."""
    year, month = normalize_month(day.year, day.month + months)
    return date(year, month, min(day.day, days_in_month(year, month)))
