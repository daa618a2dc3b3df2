# src/site_schedule/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.notifier import ExternalChangeHub
from ..tasks.task_store import TaskStore
from ..views.controller import ViewController
from .ports import TaskGateway


@dataclass
class AppState:
    """Everything the console front end needs, wired once in cli/bootstrap.py."""

    settings: Any
    store: TaskStore
    gateway: TaskGateway
    hub: ExternalChangeHub
    controller: ViewController
