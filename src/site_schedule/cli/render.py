# src/site_schedule/cli/render.py

"""Plain-text renderings of the three views for the console."""

from __future__ import annotations

from collections.abc import Sequence

from ..schedule.calendar_grid import CalendarGrid
from ..schedule.gantt_layout import GanttLayout
from ..schedule.intervals import occupied_interval
from ..schedule.summary import TaskSummary
from ..tasks.task_models import Task

WEEKDAY_HEADER = "Su  Mo  Tu  We  Th  Fr  Sa"
LABEL_WIDTH = 18


def _clip(text: str, width: int) -> str:
    return text if len(text) <= width else text[: width - 1] + "~"


def render_list(tasks: Sequence[Task]) -> str:
    if not tasks:
        return "No tasks."
    lines = []
    for t in tasks:
        interval = occupied_interval(t)
        when = f"{interval.start:%d %b} -> {interval.end:%d %b}" if interval else "no start date"
        lines.append(
            f"{_clip(t.id, 10):<10}  {_clip(t.title or '(untitled)', 28):<28}  "
            f"{t.status.value:<11}  {t.progress:>3}%  {when:<18}  {t.category.value} / {t.assigned_team}"
        )
    return "\n".join(lines)


def render_calendar(grid: CalendarGrid) -> str:
    """
    One line per week. Each cell is the day number plus a task count;
    days of adjacent months are shown in parentheses, today in brackets.
    """
    lines = [f"{grid.year}-{grid.month:02d}", WEEKDAY_HEADER]
    for week in grid.weeks():
        parts = []
        for cell in week:
            day = f"{cell.date.day:2d}"
            if cell.is_today:
                day = f"[{cell.date.day}]"
            elif not cell.in_current_month:
                day = f"({cell.date.day})"
            count = f"{len(cell.tasks)}" if cell.tasks else ""
            parts.append(f"{day}{count}".ljust(4))
        lines.append("".join(parts).rstrip())
    return "\n".join(lines)


def render_gantt(layout: GanttLayout) -> str:
    """
    ASCII bars clipped to the visible window: '#' is the progress fill, '='
    the rest of the bar, '|' the today column.
    """
    header = " " * LABEL_WIDTH + "".join(str(d.day % 10) for d in layout.timeline)
    lines = [f"{layout.window_start:%d %b} .. {layout.timeline[-1]:%d %b}", header]

    for bar in layout.bars:
        filled = round(bar.width_days * bar.fill_ratio)
        row = []
        for col in range(layout.window_days):
            rel = col - bar.offset_days
            if 0 <= rel < bar.width_days:
                row.append("#" if rel < filled else "=")
            elif col == layout.today.offset_days:
                row.append("|")
            else:
                row.append(".")
        label = _clip(bar.task.title or bar.task.id, LABEL_WIDTH - 2)
        lines.append(f"{label:<{LABEL_WIDTH}}{''.join(row)}")

    for conn in layout.connectors:
        flag = "  (out of order)" if conn.out_of_order else ""
        lines.append(f"  {conn.dependency_id} -> {conn.task_id}: gap {conn.width_days}d{flag}")

    if layout.skipped:
        lines.append(f"  not placed (no start date): {', '.join(layout.skipped)}")
    return "\n".join(lines)


def render_summary(summary: TaskSummary) -> str:
    return (
        f"Total: {summary.total}  Pending: {summary.pending}  In progress: {summary.in_progress}  "
        f"Completed: {summary.completed}  Delayed/blocked: {summary.delayed}"
    )


def render_view(rendered: object) -> str:
    if isinstance(rendered, CalendarGrid):
        return render_calendar(rendered)
    if isinstance(rendered, GanttLayout):
        return render_gantt(rendered)
    return render_list(list(rendered))  # type: ignore[arg-type]
