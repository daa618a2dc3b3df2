# src/site_schedule/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the HTTP gateway, the task store, the change hub and the view
  controller into AppState.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from ..config import get_settings
from ..core.ports import TaskGateway
from ..core.state import AppState
from ..tasks.notifier import ExternalChangeHub
from ..tasks.task_api import HttpTaskGateway
from ..tasks.task_store import TaskStore
from ..views.controller import ViewController

logger = logging.getLogger(__name__)


def create_initial_state(
    *,
    settings=None,
    gateway: TaskGateway | None = None,
    clock: Callable[[], date] = date.today,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the gateway) injectable makes the app easier to test.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    if gateway is None:
        gateway = HttpTaskGateway(
            settings.api_base_url,
            project_id=settings.project_id,
            timeout_seconds=settings.api_timeout_seconds,
        )

    store = TaskStore()
    hub = ExternalChangeHub()
    controller = ViewController(store, gateway, clock=clock, day_width=settings.gantt_day_width)
    controller.attach(hub)

    logger.info(
        "State ready api=%s project=%s",
        getattr(settings, "api_base_url", "?"),
        getattr(settings, "project_id", None) or "-",
    )
    return AppState(settings=settings, store=store, gateway=gateway, hub=hub, controller=controller)


def shutdown_state(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    state.controller.detach()
    close = getattr(state.gateway, "close", None)
    if close is None:
        return
    try:
        close()
    except Exception:
        logger.debug("Gateway close failed.", exc_info=True)
