# src/site_schedule/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, loads the task list once, then runs
either the console (interactive) or the periodic refresh loop alone.
"""

from __future__ import annotations

import asyncio
import logging

from ..config import get_settings
from ..logging_setup import setup_logging
from ..tasks.refresh_loop import run_refresh_loop
from .bootstrap import create_initial_state, shutdown_state
from .console import run_console_loop

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)
    try:
        if not state.controller.refresh():
            logger.warning("Initial task load failed; starting with an empty list.")

        if settings.console_enabled:
            run_console_loop(state)
        else:
            logger.info(
                "Console disabled. Refreshing every %.1fs. Press Ctrl+C to stop.",
                settings.refresh_interval_seconds,
            )
            try:
                asyncio.run(
                    run_refresh_loop(
                        state.controller,
                        interval_seconds=settings.refresh_interval_seconds,
                        run_immediately=False,
                    )
                )
            except KeyboardInterrupt:
                logger.info("Interrupted, shutting down...")
    finally:
        shutdown_state(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
