# tests/test_summary.py

from __future__ import annotations

from datetime import date

from site_schedule.schedule.summary import TaskSummary, summarize
from site_schedule.tasks.task_models import TaskStatus

from .fakes import make_task


def test_empty_collection_is_all_zero() -> None:
    assert summarize([]) == TaskSummary()
    assert summarize([]).completion_ratio == 0.0


def test_delayed_bucket_merges_blocked() -> None:
    statuses = [
        TaskStatus.PENDING,
        TaskStatus.IN_PROGRESS,
        TaskStatus.IN_PROGRESS,
        TaskStatus.COMPLETED,
        TaskStatus.BLOCKED,
        TaskStatus.DELAYED,
    ]
    tasks = [make_task(str(i), date(2026, 3, 1), status=s) for i, s in enumerate(statuses)]

    s = summarize(tasks)

    assert s.as_dict() == {"total": 6, "pending": 1, "in_progress": 2, "completed": 1, "delayed": 2}
    assert s.pending + s.in_progress + s.completed + s.delayed == s.total


def test_counts_always_sum_to_total() -> None:
    all_statuses = list(TaskStatus)
    for n in range(0, 23):
        tasks = [make_task(str(i), None, status=all_statuses[(i * 7) % len(all_statuses)]) for i in range(n)]
        s = summarize(tasks)
        assert s.total == n
        assert s.pending + s.in_progress + s.completed + s.delayed == n
