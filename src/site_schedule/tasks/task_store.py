# src/site_schedule/tasks/task_store.py

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .task_models import Task

logger = logging.getLogger(__name__)

_PATCHABLE = frozenset(f.name for f in dataclasses.fields(Task)) - {"id"}


class TaskStore:
    """
    In-memory task collection.

    The only mutable task state in the app:
    - replace(...) overwrites everything (full refetch / external change)
    - apply_patch(...) merges a single-task edit
    - all() returns a snapshot in insertion order

    Tasks are frozen dataclasses, so snapshots can be handed to the builders
    without copying. No timers, no implicit refetching: refresh cadence is
    the caller's business.
    """

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._tasks: list[Task] = list(tasks)

    def replace(self, tasks: Iterable[Task]) -> None:
        self._tasks = list(tasks)
        logger.debug("TaskStore replaced total=%d", len(self._tasks))

    def append(self, task: Task) -> None:
        self._tasks.append(task)
        logger.debug("TaskStore appended id=%s total=%d", task.id, len(self._tasks))

    def apply_patch(self, task_id: str, partial: Task | Mapping[str, Any]) -> Task | None:
        """
        Merge `partial` into the task with the given id.

        `partial` is either a mapping of Task field names or a full Task
        (e.g. the server's copy after an update). Unknown ids are a no-op.
        """
        if isinstance(partial, Task):
            changes = {name: getattr(partial, name) for name in _PATCHABLE}
        else:
            unknown = set(partial) - _PATCHABLE
            if unknown:
                raise ValueError(f"unknown task fields: {', '.join(sorted(unknown))}")
            changes = dict(partial)

        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                patched = dataclasses.replace(task, **changes)
                self._tasks[i] = patched
                logger.debug("TaskStore patched id=%s fields=%s", task_id, sorted(changes))
                return patched

        logger.debug("TaskStore patch ignored, unknown id=%s", task_id)
        return None

    def all(self) -> list[Task]:
        return list(self._tasks)

    def get(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def index_by_id(self) -> dict[str, Task]:
        return {t.id: t for t in self._tasks}

    def count(self) -> int:
        return len(self._tasks)
