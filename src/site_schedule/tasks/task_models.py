# src/site_schedule/tasks/task_models.py

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from typing import Any


def _fold(raw: str) -> str:
    """Case/separator-insensitive key: 'In Progress', 'in_progress', 'InProgress' -> 'inprogress'."""
    return "".join(ch for ch in raw.lower() if ch.isalnum())


class _LabelEnum(StrEnum):
    """StrEnum whose values are the wire labels used by the dashboard API."""

    @classmethod
    def lookup(cls, raw: Any) -> Any:
        """Return the member matching a label or member name, or None."""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str) or not raw.strip():
            return None
        key = _fold(raw)
        for member in cls:
            if _fold(member.value) == key or _fold(member.name) == key:
                return member
        return None


class TaskStatus(_LabelEnum):
    """
    Task status labels.

    Flat and unordered: any status may follow any other (see task_state.py).
    """

    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    BLOCKED = "Blocked"
    DELAYED = "Delayed"

    @classmethod
    def from_wire(cls, raw: Any) -> TaskStatus:
        return cls.lookup(raw) or cls.PENDING


class TaskCategory(_LabelEnum):
    STRUCTURAL = "Structural"
    FINISHING = "Finishing"
    INSPECTION = "Inspection"
    ELECTRICAL = "Electrical"
    PLUMBING = "Plumbing"
    OTHER = "Other"

    @classmethod
    def from_wire(cls, raw: Any) -> TaskCategory:
        return cls.lookup(raw) or cls.OTHER


class TaskPriority(_LabelEnum):
    """Descriptive only; never affects layout."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @classmethod
    def from_wire(cls, raw: Any) -> TaskPriority:
        return cls.lookup(raw) or cls.MEDIUM


class RiskLevel(_LabelEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def from_wire(cls, raw: Any) -> RiskLevel:
        return cls.lookup(raw) or cls.LOW


# ---- field coercion (never raises) ----


def coerce_date(value: Any) -> date | None:
    """
    Calendar date from a date, datetime or ISO-8601 string.

    Only the calendar part is kept: '2026-10-01T00:00:00.000Z' -> 2026-10-01.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        s = value.strip()
        if len(s) < 10:
            return None
        try:
            return date.fromisoformat(s[:10])
        except ValueError:
            return None
    return None


def coerce_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    s = value.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(s)
    except ValueError:
        return None


def coerce_duration(value: Any) -> int:
    """Whole days, at least 1. Missing or non-numeric -> 1."""
    if isinstance(value, bool) or value is None:
        return 1
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 1
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return 1
        return max(1, int(value))
    return 1


def coerce_progress(value: Any) -> int:
    """Integer percentage clamped to 0..100. Non-numeric -> 0."""
    if isinstance(value, bool) or value is None:
        return 0
    try:
        num = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(num):
        return 0
    return int(max(0, min(100, round(num))))


def _ref_id(value: Any) -> str | None:
    """Dependency may arrive as a bare id or as a populated task object."""
    if value is None:
        return None
    if isinstance(value, Mapping):
        value = value.get("_id", value.get("id"))
        if value is None:
            return None
    s = str(value).strip()
    return s or None


def _opt_str(value: Any) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


@dataclass(frozen=True, slots=True)
class Remark:
    text: str
    posted_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    start_date: date | None

    category: TaskCategory = TaskCategory.STRUCTURAL
    location_area: str = ""
    assigned_team: str = "General"

    duration: int = 1
    end_date: date | None = None

    priority: TaskPriority = TaskPriority.MEDIUM
    dependency: str | None = None

    status: TaskStatus = TaskStatus.PENDING
    progress: int = 0
    remark: str | None = None

    description: str | None = None
    project_id: str | None = None
    remarks: tuple[Remark, ...] = field(default_factory=tuple)
    is_critical_path: bool = False
    risk_level: RiskLevel = RiskLevel.LOW
    created_at: datetime | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> Task:
        """
        Build a Task from the dashboard API JSON shape.

        Field values are coerced leniently; only a missing id is an error.
        """
        task_id = _ref_id(payload.get("_id", payload.get("id")))
        if task_id is None:
            raise ValueError("task payload has no id")

        remarks: list[Remark] = []
        raw_remarks = payload.get("remarks")
        if isinstance(raw_remarks, list):
            for r in raw_remarks:
                if isinstance(r, Mapping):
                    text = _opt_str(r.get("text"))
                    if text:
                        remarks.append(Remark(text=text, posted_at=coerce_datetime(r.get("date"))))
                elif isinstance(r, str) and r.strip():
                    remarks.append(Remark(text=r.strip()))

        remark = _opt_str(payload.get("remark"))
        if remark is None and remarks:
            remark = remarks[-1].text

        title = payload.get("task", payload.get("title"))

        return cls(
            id=task_id,
            title=str(title or "").strip(),
            start_date=coerce_date(payload.get("startDate")),
            category=TaskCategory.from_wire(payload.get("category")),
            location_area=str(payload.get("locationArea") or ""),
            assigned_team=str(payload.get("assignedTeam") or "General"),
            duration=coerce_duration(payload.get("duration")),
            end_date=coerce_date(payload.get("endDate")),
            priority=TaskPriority.from_wire(payload.get("priority")),
            dependency=_ref_id(payload.get("dependency")),
            status=TaskStatus.from_wire(payload.get("status")),
            progress=coerce_progress(payload.get("progress")),
            remark=remark,
            description=_opt_str(payload.get("description")),
            project_id=_ref_id(payload.get("projectId")),
            remarks=tuple(remarks),
            is_critical_path=bool(payload.get("isCriticalPath", False)),
            risk_level=RiskLevel.from_wire(payload.get("riskLevel")),
            created_at=coerce_datetime(payload.get("createdAt")),
        )

    def to_payload(self) -> dict[str, Any]:
        """Serialize the creatable fields (no id, no server-side history)."""
        out: dict[str, Any] = {
            "task": self.title,
            "category": self.category.value,
            "locationArea": self.location_area,
            "assignedTeam": self.assigned_team,
            "duration": self.duration,
            "priority": self.priority.value,
            "status": self.status.value,
            "progress": self.progress,
            "isCriticalPath": self.is_critical_path,
            "riskLevel": self.risk_level.value,
        }
        if self.start_date is not None:
            out["startDate"] = self.start_date.isoformat()
        if self.end_date is not None:
            out["endDate"] = self.end_date.isoformat()
        if self.dependency:
            out["dependency"] = self.dependency
        if self.description:
            out["description"] = self.description
        if self.project_id:
            out["projectId"] = self.project_id
        return out
