# src/site_schedule/views/controller.py

"""
View controller.

Owns the active presentation (list / calendar / Gantt) and the reference
date, and re-runs the matching pure builder whenever the task store, the
reference date or the view changes. It is also the only place that talks to
the persistence gateway:

- refresh(): full refetch + store replace, sequence-numbered so a stale
  response never overwrites a newer one
- commit_task_edit(): validate -> gateway.update_task -> local patch
- create_task(): gateway.create_task -> local append

Gateway failures never escape: the store is left as it was and a Notice is
recorded for the user. Nothing is retried automatically.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import StrEnum
from typing import Any

from ..core.ports import ChangeNotifier, TaskGateway, Unsubscribe
from ..schedule.calendar_grid import CalendarGrid, build_calendar_grid
from ..schedule.gantt_layout import DEFAULT_DAY_WIDTH, GanttLayout, build_gantt_layout
from ..schedule.intervals import add_months
from ..schedule.summary import TaskSummary, summarize
from ..tasks.task_models import Task
from ..tasks.task_state import InvalidTaskEdit, TaskStateMachine, edit_to_payload
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)

ViewListener = Callable[["ViewMode", Any], None]


class ViewMode(StrEnum):
    LIST = "list"
    CALENDAR = "calendar"
    GANTT = "gantt"


@dataclass(frozen=True, slots=True)
class Notice:
    level: str  # "error" | "warning"
    message: str
    created_at: float = field(default_factory=time.time)


class ViewController:
    def __init__(
        self,
        store: TaskStore,
        gateway: TaskGateway,
        *,
        state_machine: TaskStateMachine | None = None,
        clock: Callable[[], date] = date.today,
        day_width: int = DEFAULT_DAY_WIDTH,
        max_notices: int = 50,
    ) -> None:
        self.store = store
        self.gateway = gateway
        self.state_machine = state_machine or TaskStateMachine()
        self.day_width = day_width
        self._clock = clock

        self.mode = ViewMode.LIST
        self.reference_date: date = clock()

        self.notices: list[Notice] = []
        self._max_notices = max(1, int(max_notices))

        self._listeners: list[ViewListener] = []
        self._refresh_seq = 0
        self._gantt_warnings: frozenset[str] = frozenset()
        self._detach: Unsubscribe | None = None

    # ---- notices / listeners ----

    def _notice(self, level: str, message: str) -> None:
        self.notices.append(Notice(level=level, message=message))
        if len(self.notices) > self._max_notices:
            del self.notices[: len(self.notices) - self._max_notices]

    def last_notice(self) -> Notice | None:
        return self.notices[-1] if self.notices else None

    def subscribe(self, listener: ViewListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self) -> None:
        if not self._listeners:
            return
        rendered = self.render()
        for listener in list(self._listeners):
            try:
                listener(self.mode, rendered)
            except Exception:
                logger.exception("View listener failed: %r", listener)

    # ---- queries ----

    def today(self) -> date:
        return self._clock()

    def get_calendar_grid(self, month: int, year: int) -> CalendarGrid:
        return build_calendar_grid(year, month, self.store.all(), today=self.today())

    def get_gantt_layout(self, reference_date: date | None = None) -> GanttLayout:
        layout = build_gantt_layout(
            reference_date or self.reference_date,
            self.store.all(),
            today=self.today(),
            day_width=self.day_width,
        )
        # Each out-of-order pair is reported once while it persists.
        current = frozenset(layout.warnings)
        for msg in sorted(current - self._gantt_warnings):
            logger.warning("Gantt: %s", msg)
        self._gantt_warnings = current
        return layout

    def get_summary(self) -> TaskSummary:
        return summarize(self.store.all())

    def render(self) -> list[Task] | CalendarGrid | GanttLayout:
        if self.mode == ViewMode.CALENDAR:
            return self.get_calendar_grid(self.reference_date.month, self.reference_date.year)
        if self.mode == ViewMode.GANTT:
            return self.get_gantt_layout(self.reference_date)
        return self.store.all()

    # ---- view selection / navigation ----

    def set_view(self, mode: ViewMode | str) -> None:
        self.mode = ViewMode(str(mode).strip().lower())
        logger.debug("View -> %s", self.mode.value)
        self._publish()

    def set_reference_date(self, day: date) -> None:
        self.reference_date = day
        self._publish()

    def next_month(self) -> None:
        self.set_reference_date(add_months(self.reference_date, 1))

    def prev_month(self) -> None:
        self.set_reference_date(add_months(self.reference_date, -1))

    def shift_days(self, days: int) -> None:
        self.set_reference_date(self.reference_date + timedelta(days=int(days)))

    def go_today(self) -> None:
        self.set_reference_date(self.today())

    # ---- refresh ----

    def begin_refresh(self) -> int:
        """Issue a new refresh sequence number; older ones become stale."""
        self._refresh_seq += 1
        return self._refresh_seq

    def is_latest(self, seq: int) -> bool:
        return seq == self._refresh_seq

    def apply_refresh(self, seq: int, tasks: list[Task]) -> bool:
        if not self.is_latest(seq):
            logger.info("Discarding stale refresh seq=%s (latest=%s)", seq, self._refresh_seq)
            return False
        self.store.replace(tasks)
        logger.info("Tasks refreshed total=%d", self.store.count())
        self._publish()
        return True

    def _refresh_failed(self, seq: int) -> None:
        if self.is_latest(seq):
            self._notice("error", "Could not load tasks. Showing the last known list.")

    def refresh(self) -> bool:
        seq = self.begin_refresh()
        try:
            tasks = self.gateway.list_tasks()
        except Exception:
            logger.exception("list_tasks failed seq=%s", seq)
            self._refresh_failed(seq)
            return False
        return self.apply_refresh(seq, tasks)

    async def refresh_async(self) -> bool:
        """Like refresh(), but the fetch runs in a worker thread."""
        seq = self.begin_refresh()
        try:
            tasks = await asyncio.to_thread(self.gateway.list_tasks)
        except Exception:
            logger.exception("list_tasks failed seq=%s", seq)
            self._refresh_failed(seq)
            return False
        return self.apply_refresh(seq, tasks)

    def attach(self, notifier: ChangeNotifier) -> None:
        """Refetch everything whenever another actor changes a task."""
        self.detach()
        self._detach = notifier.on_external_change(self._on_external_change)

    def detach(self) -> None:
        if self._detach is not None:
            self._detach()
            self._detach = None

    def _on_external_change(self) -> None:
        logger.info("External task change signalled; refreshing")
        self.refresh()

    # ---- commands ----

    def commit_task_edit(
        self,
        task_id: str,
        *,
        status: Any = None,
        progress: Any = None,
        remark: str | None = None,
    ) -> Task | None:
        """
        Persist a status/progress/remark edit and patch the local copy with
        what the server returned. Returns the patched task, or None on failure.
        """
        task = self.store.get(task_id)
        if task is None:
            self._notice("warning", f"Task {task_id} is not loaded.")
            return None

        try:
            edit = self.state_machine.build_edit(task, status=status, progress=progress, remark=remark)
        except InvalidTaskEdit as e:
            logger.info("Rejected edit task_id=%s: %s", task_id, e)
            self._notice("error", f"Invalid edit: {e}")
            return None

        if not edit:
            return task

        try:
            updated = self.gateway.update_task(task_id, edit_to_payload(edit))
        except Exception:
            logger.exception("update_task failed task_id=%s", task_id)
            self._notice("error", f"Could not save task {task.title or task_id}. Please retry.")
            return None

        # Local write supersedes any refresh still in flight.
        self.begin_refresh()
        patched = self.store.apply_patch(task_id, updated)
        self._publish()
        return patched

    def create_task(self, fields: Task | Mapping[str, Any]) -> Task | None:
        payload = fields.to_payload() if isinstance(fields, Task) else dict(fields)

        alt_title = payload.pop("title", None)
        title = str(payload.get("task") or alt_title or "").strip()
        if not title:
            self._notice("error", "Task name is required.")
            return None
        payload["task"] = title

        try:
            created = self.gateway.create_task(payload)
        except Exception:
            logger.exception("create_task failed title=%s", title)
            self._notice("error", f"Could not create task {title}. Please retry.")
            return None

        self.begin_refresh()
        self.store.append(created)
        self._publish()
        return created
