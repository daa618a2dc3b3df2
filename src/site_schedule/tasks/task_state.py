# src/site_schedule/tasks/task_state.py

from __future__ import annotations

"""
Status/progress rules for a single task.

Status is a flat label with no built-in transition graph: the default policy
allows any status to follow any other (Completed -> Pending included).
Stricter rules plug in as a TransitionPolicy without touching the Task type.

Progress is an independent 0..100 integer set by direct assignment; it is
never derived from status and never drives it.
"""

import dataclasses
import logging
import math
from collections.abc import Mapping
from typing import Any, Protocol

from .task_models import Task, TaskStatus

logger = logging.getLogger(__name__)


class InvalidTaskEdit(ValueError):
    """An edit with the wrong shape, or a transition refused by the policy."""


class TransitionPolicy(Protocol):
    def allows(self, src: TaskStatus, dst: TaskStatus) -> bool: ...


class PermissiveTransitions:
    """Every status may follow every other."""

    def allows(self, src: TaskStatus, dst: TaskStatus) -> bool:
        return True


class TaskStateMachine:
    def __init__(self, policy: TransitionPolicy | None = None) -> None:
        self.policy: TransitionPolicy = policy or PermissiveTransitions()

    @staticmethod
    def parse_status(value: Any) -> TaskStatus:
        status = TaskStatus.lookup(value)
        if status is None:
            raise InvalidTaskEdit(f"unknown status: {value!r}")
        return status

    @staticmethod
    def normalize_progress(value: Any) -> int:
        if isinstance(value, bool):
            raise InvalidTaskEdit(f"progress must be a number, got {value!r}")
        try:
            num = float(value)
        except (TypeError, ValueError):
            raise InvalidTaskEdit(f"progress must be a number, got {value!r}") from None
        if not math.isfinite(num):
            raise InvalidTaskEdit(f"progress must be finite, got {value!r}")
        return int(max(0, min(100, round(num))))

    def can_transition(self, src: TaskStatus, dst: TaskStatus) -> bool:
        return src == dst or self.policy.allows(src, dst)

    def build_edit(
        self,
        task: Task,
        *,
        status: Any = None,
        progress: Any = None,
        remark: str | None = None,
    ) -> dict[str, Any]:
        """
        Validate an edit against `task` and return the Task fields it changes.

        Arguments left as None are not part of the edit.
        """
        edit: dict[str, Any] = {}

        if status is not None:
            dst = self.parse_status(status)
            if not self.can_transition(task.status, dst):
                raise InvalidTaskEdit(f"transition {task.status.value} -> {dst.value} is not allowed")
            edit["status"] = dst

        if progress is not None:
            edit["progress"] = self.normalize_progress(progress)

        if remark is not None:
            text = str(remark).strip()
            if text:
                edit["remark"] = text

        return edit

    def apply_edit(self, task: Task, edit: Mapping[str, Any]) -> Task:
        """Return a copy of `task` with a build_edit() result applied."""
        if not edit:
            return task
        updated = dataclasses.replace(task, **dict(edit))
        logger.debug(
            "Task %s edited status=%s progress=%s",
            task.id,
            updated.status.value,
            updated.progress,
        )
        return updated


def edit_to_payload(edit: Mapping[str, Any]) -> dict[str, Any]:
    """Task field edit -> PATCH body for the dashboard API."""
    out: dict[str, Any] = {}
    if "status" in edit:
        out["status"] = TaskStatus(edit["status"]).value
    if "progress" in edit:
        out["progress"] = int(edit["progress"])
    if "remark" in edit:
        out["remark"] = edit["remark"]
    return out
