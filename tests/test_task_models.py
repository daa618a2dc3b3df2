# tests/test_task_models.py

from __future__ import annotations

from datetime import date

import pytest

from site_schedule.tasks.task_models import (
    Task,
    TaskCategory,
    TaskPriority,
    TaskStatus,
    coerce_date,
    coerce_duration,
    coerce_progress,
)


def test_from_payload_reads_dashboard_shape() -> None:
    task = Task.from_payload(
        {
            "_id": "65f0",
            "task": "Pour slab L2",
            "status": "In Progress",
            "priority": "High",
            "category": "Structural",
            "locationArea": "Block A, Floor 2",
            "startDate": "2026-03-02T00:00:00.000Z",
            "duration": 3,
            "progress": 40,
            "dependency": {"_id": "65e9", "task": "Formwork", "startDate": "2026-02-27"},
            "remarks": [
                {"text": "rebar checked", "date": "2026-03-02T10:00:00Z"},
                {"text": "waiting for pump", "date": "2026-03-03T08:00:00Z"},
            ],
            "projectId": "p1",
            "isCriticalPath": True,
        }
    )

    assert task.id == "65f0"
    assert task.title == "Pour slab L2"
    assert task.status is TaskStatus.IN_PROGRESS
    assert task.priority is TaskPriority.HIGH
    assert task.start_date == date(2026, 3, 2)
    assert task.dependency == "65e9"
    assert task.remark == "waiting for pump"
    assert [r.text for r in task.remarks] == ["rebar checked", "waiting for pump"]
    assert task.remarks[0].posted_at is not None
    assert task.project_id == "p1"
    assert task.is_critical_path is True


def test_from_payload_is_lenient_with_bad_fields() -> None:
    task = Task.from_payload(
        {
            "id": 7,
            "title": "Odd one",
            "status": "exploded",
            "category": "Carpentry",
            "duration": "abc",
            "progress": 250,
            "startDate": "not a date",
        }
    )
    assert task.id == "7"
    assert task.status is TaskStatus.PENDING
    assert task.category is TaskCategory.OTHER
    assert task.duration == 1
    assert task.progress == 100
    assert task.start_date is None


def test_from_payload_requires_id() -> None:
    with pytest.raises(ValueError):
        Task.from_payload({"task": "no id"})


def test_status_lookup_accepts_labels_and_names() -> None:
    assert TaskStatus.from_wire("In Progress") is TaskStatus.IN_PROGRESS
    assert TaskStatus.from_wire("in_progress") is TaskStatus.IN_PROGRESS
    assert TaskStatus.from_wire("InProgress") is TaskStatus.IN_PROGRESS
    assert TaskStatus.from_wire(None) is TaskStatus.PENDING


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, 1), (0, 1), (-3, 1), (4, 4), ("5", 5), (2.9, 2), ("x", 1), (True, 1), (float("nan"), 1)],
)
def test_coerce_duration(raw, expected) -> None:
    assert coerce_duration(raw) == expected


def test_coerce_progress_and_date() -> None:
    assert coerce_progress(-5) == 0
    assert coerce_progress("40") == 40
    assert coerce_progress({}) == 0
    assert coerce_date("2026-10-01T23:30:00+05:30") == date(2026, 10, 1)
    assert coerce_date("") is None


def test_to_payload_uses_wire_labels() -> None:
    task = Task(
        id="x",
        title="Inspect wiring",
        start_date=date(2026, 3, 1),
        category=TaskCategory.ELECTRICAL,
        status=TaskStatus.IN_PROGRESS,
        dependency="y",
    )
    body = task.to_payload()
    assert body["task"] == "Inspect wiring"
    assert body["status"] == "In Progress"
    assert body["category"] == "Electrical"
    assert body["startDate"] == "2026-03-01"
    assert body["dependency"] == "y"
    assert "endDate" not in body
