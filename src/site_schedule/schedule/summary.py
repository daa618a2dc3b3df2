# src/site_schedule/schedule/summary.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass

from ..tasks.task_models import Task, TaskStatus


@dataclass(frozen=True, slots=True)
class TaskSummary:
    total: int = 0
    pending: int = 0
    in_progress: int = 0
    completed: int = 0
    delayed: int = 0  # Delayed + Blocked

    @property
    def completion_ratio(self) -> float:
        return self.completed / self.total if self.total else 0.0

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


def summarize(tasks: Iterable[Task]) -> TaskSummary:
    counts = {"pending": 0, "in_progress": 0, "completed": 0, "delayed": 0}
    total = 0
    for task in tasks:
        total += 1
        if task.status == TaskStatus.COMPLETED:
            counts["completed"] += 1
        elif task.status == TaskStatus.IN_PROGRESS:
            counts["in_progress"] += 1
        elif task.status in (TaskStatus.DELAYED, TaskStatus.BLOCKED):
            counts["delayed"] += 1
        else:
            counts["pending"] += 1
    return TaskSummary(total=total, **counts)
