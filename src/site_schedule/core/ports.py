# src/site_schedule/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the persistence API and the change-notification channel swappable
and makes testing easier.
"""

from collections.abc import Callable, Mapping
from typing import Any, Protocol

from ..tasks.task_models import Task

ChangeCallback = Callable[[], None]
Unsubscribe = Callable[[], None]


class TaskGateway(Protocol):
    """
    Persistence collaborator (create/update/list).

    Implementations raise on failure; the view controller turns failures
    into user-visible notices and leaves local state untouched.
    """

    def list_tasks(self) -> list[Task]: ...

    def create_task(self, fields: Mapping[str, Any]) -> Task: ...

    def update_task(self, task_id: str, partial_fields: Mapping[str, Any]) -> Task: ...


class ChangeNotifier(Protocol):
    """
    Notification collaborator: fires (with no payload) when a task was
    modified by another actor.
    """

    def on_external_change(self, callback: ChangeCallback) -> Unsubscribe: ...
