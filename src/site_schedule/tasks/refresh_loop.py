# src/site_schedule/tasks/refresh_loop.py

from __future__ import annotations

"""
Periodic wholesale refresh.

A small polling loop that re-fetches the full task list every
interval_seconds through the view controller. Failures are recorded by the
controller (notice + log) and the loop keeps going. To stop it, cancel the
coroutine/task.
"""

import asyncio
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..views.controller import ViewController

logger = logging.getLogger(__name__)


async def run_refresh_loop(
    controller: ViewController,
    *,
    interval_seconds: float = 30.0,
    run_immediately: bool = True,
) -> None:
    sleep_s = max(0.5, float(interval_seconds))

    if not run_immediately:
        await asyncio.sleep(sleep_s)

    while True:
        try:
            applied = await controller.refresh_async()
            logger.debug("Periodic refresh applied=%s", applied)
        except Exception:
            logger.exception("Periodic refresh failed")

        await asyncio.sleep(sleep_s)
