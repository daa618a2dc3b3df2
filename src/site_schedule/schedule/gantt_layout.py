# src/site_schedule/schedule/gantt_layout.py

from __future__ import annotations

"""
Rolling Gantt timeline layout.

All positions are in day units relative to the window start, with pixel
helpers derived from a day width. Bars outside the window keep their real
offsets (negative or past the end): the rendering surface scrolls instead
of clamping.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta

from ..tasks.task_models import Task, TaskStatus
from .intervals import occupied_interval

logger = logging.getLogger(__name__)

LOOKBACK_DAYS = 5
WINDOW_DAYS = 30
DEFAULT_DAY_WIDTH = 50


def status_tone(status: TaskStatus) -> str:
    """Base colour family of a bar; Delayed and Blocked share one."""
    if status in (TaskStatus.DELAYED, TaskStatus.BLOCKED):
        return "delayed"
    if status == TaskStatus.COMPLETED:
        return "completed"
    if status == TaskStatus.IN_PROGRESS:
        return "in_progress"
    return "pending"


@dataclass(frozen=True, slots=True)
class GanttBar:
    task: Task
    row: int
    offset_days: int
    width_days: int
    day_width: int
    tone: str

    @property
    def end_offset_days(self) -> int:
        return self.offset_days + self.width_days

    @property
    def left_px(self) -> int:
        return self.offset_days * self.day_width

    @property
    def width_px(self) -> int:
        return self.width_days * self.day_width

    @property
    def fill_ratio(self) -> float:
        return max(0, min(100, self.task.progress)) / 100.0

    @property
    def fill_px(self) -> float:
        return self.width_px * self.fill_ratio


@dataclass(frozen=True, slots=True)
class DependencyConnector:
    """
    Horizontal link from the dependency's end to the dependent's start.

    width_days is clamped at 0; out_of_order records that the dependency
    does not finish before the dependent starts.
    """

    task_id: str
    dependency_id: str
    row: int
    dependency_row: int
    start_offset_days: int
    width_days: int
    out_of_order: bool
    day_width: int

    @property
    def mid_row(self) -> float:
        return (self.row + self.dependency_row) / 2

    @property
    def left_px(self) -> int:
        return self.start_offset_days * self.day_width

    @property
    def width_px(self) -> int:
        return self.width_days * self.day_width


@dataclass(frozen=True, slots=True)
class TodayMarker:
    offset_days: int
    x_px: float
    in_window: bool


@dataclass(frozen=True, slots=True)
class GanttLayout:
    reference_date: date
    window_start: date
    window_days: int
    day_width: int
    timeline: tuple[date, ...]
    today: TodayMarker
    bars: tuple[GanttBar, ...]
    connectors: tuple[DependencyConnector, ...]
    skipped: tuple[str, ...] = ()
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def width_px(self) -> int:
        return self.window_days * self.day_width

    def bar_for(self, task_id: str) -> GanttBar | None:
        for bar in self.bars:
            if bar.task.id == task_id:
                return bar
        return None

    def connector_for(self, task_id: str) -> DependencyConnector | None:
        for conn in self.connectors:
            if conn.task_id == task_id:
                return conn
        return None


def window_start_for(reference_date: date) -> date:
    return reference_date - timedelta(days=LOOKBACK_DAYS)


def offset_days(day: date, window_start: date) -> int:
    """Whole days from the window start (floor; dates carry no time part)."""
    return (day - window_start).days


def build_gantt_layout(
    reference_date: date,
    tasks: Sequence[Task],
    *,
    today: date | None = None,
    day_width: int = DEFAULT_DAY_WIDTH,
) -> GanttLayout:
    """
    Lay out every placeable task as a bar on the rolling window.

    Rows follow store order; tasks without a start date are listed in
    `skipped`. A dependency that is missing (or unplaceable) simply gets no
    connector.
    """
    day_width = int(day_width) if int(day_width) > 0 else DEFAULT_DAY_WIDTH
    start = window_start_for(reference_date)
    timeline = tuple(start + timedelta(days=i) for i in range(WINDOW_DAYS))

    bars: list[GanttBar] = []
    skipped: list[str] = []
    for task in tasks:
        interval = occupied_interval(task)
        if interval is None:
            skipped.append(task.id)
            continue
        bars.append(
            GanttBar(
                task=task,
                row=len(bars),
                offset_days=offset_days(interval.start, start),
                width_days=interval.days,
                day_width=day_width,
                tone=status_tone(task.status),
            )
        )

    by_id = {bar.task.id: bar for bar in bars}
    connectors: list[DependencyConnector] = []
    warnings: list[str] = []
    for bar in bars:
        dep_id = bar.task.dependency
        if not dep_id:
            continue
        dep = by_id.get(dep_id)
        if dep is None or dep is bar:
            continue

        raw_width = bar.offset_days - dep.end_offset_days
        out_of_order = raw_width < 0
        if out_of_order:
            msg = f"task {bar.task.id} starts before its dependency {dep_id} ends"
            logger.debug("Gantt: %s", msg)
            warnings.append(msg)

        connectors.append(
            DependencyConnector(
                task_id=bar.task.id,
                dependency_id=dep_id,
                row=bar.row,
                dependency_row=dep.row,
                start_offset_days=dep.end_offset_days,
                width_days=max(0, raw_width),
                out_of_order=out_of_order,
                day_width=day_width,
            )
        )

    today_day = today if today is not None else reference_date
    today_offset = offset_days(today_day, start)
    marker = TodayMarker(
        offset_days=today_offset,
        x_px=today_offset * day_width + day_width / 2,
        in_window=0 <= today_offset < WINDOW_DAYS,
    )

    return GanttLayout(
        reference_date=reference_date,
        window_start=start,
        window_days=WINDOW_DAYS,
        day_width=day_width,
        timeline=timeline,
        today=marker,
        bars=tuple(bars),
        connectors=tuple(connectors),
        skipped=tuple(skipped),
        warnings=tuple(warnings),
    )
