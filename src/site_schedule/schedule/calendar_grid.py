# src/site_schedule/schedule/calendar_grid.py

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from ..tasks.task_models import Task
from .intervals import OccupiedInterval, days_in_month, normalize_month, occupied_interval

logger = logging.getLogger(__name__)

GRID_CELLS = 42  # 6 rows x 7 columns, regardless of month length
WEEK_DAYS = 7


@dataclass(frozen=True, slots=True)
class DayCell:
    date: date
    in_current_month: bool
    is_today: bool
    tasks: tuple[Task, ...]


@dataclass(frozen=True, slots=True)
class CalendarGrid:
    year: int
    month: int
    cells: tuple[DayCell, ...]

    def weeks(self) -> list[tuple[DayCell, ...]]:
        return [self.cells[i : i + WEEK_DAYS] for i in range(0, len(self.cells), WEEK_DAYS)]

    def tasks_on(self, day: date) -> tuple[Task, ...]:
        for cell in self.cells:
            if cell.date == day:
                return cell.tasks
        return ()


def first_weekday(year: int, month: int) -> int:
    """Weekday of day 1 with Sunday = 0."""
    return (date(year, month, 1).weekday() + 1) % WEEK_DAYS


def grid_dates(year: int, month: int) -> list[tuple[date, bool]]:
    """
    The 42 dates shown for a month, Sunday-first:
    trailing days of the previous month, the month itself, then leading days
    of the next month. Each date is paired with its in-current-month flag.
    """
    first = date(year, month, 1)
    lead = first_weekday(year, month)

    out: list[tuple[date, bool]] = []
    for back in range(lead, 0, -1):
        out.append((first - timedelta(days=back), False))
    for i in range(days_in_month(year, month)):
        out.append((first + timedelta(days=i), True))

    nxt_year, nxt_month = normalize_month(year, month + 1)
    nxt = date(nxt_year, nxt_month, 1)
    i = 0
    while len(out) < GRID_CELLS:
        out.append((nxt + timedelta(days=i), False))
        i += 1
    return out


def build_calendar_grid(
    year: int,
    month: int,
    tasks: Sequence[Task],
    *,
    today: date | None = None,
) -> CalendarGrid:
    """
    Month grid with per-day task membership.

    Tasks without a usable start date are skipped; membership keeps store order.
    """
    year, month = normalize_month(year, month)

    placed: list[tuple[Task, OccupiedInterval]] = []
    for task in tasks:
        interval = occupied_interval(task)
        if interval is None:
            logger.debug("Calendar: skipping task %s without start date", task.id)
            continue
        placed.append((task, interval))

    cells = tuple(
        DayCell(
            date=day,
            in_current_month=current,
            is_today=(today is not None and day == today),
            tasks=tuple(t for t, interval in placed if interval.contains(day)),
        )
        for day, current in grid_dates(year, month)
    )
    return CalendarGrid(year=year, month=month, cells=cells)
