# src/site_schedule/tasks/notifier.py

from __future__ import annotations

import logging

from ..core.ports import ChangeCallback, Unsubscribe

logger = logging.getLogger(__name__)


class ExternalChangeHub:
    """
    In-process ChangeNotifier.

    Whatever receives the server push ("taskUpdated") calls notify(); every
    subscriber is called in registration order. A failing subscriber is
    logged and does not stop the rest.
    """

    def __init__(self) -> None:
        self._callbacks: list[ChangeCallback] = []

    def on_external_change(self, callback: ChangeCallback) -> Unsubscribe:
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def notify(self) -> int:
        """Fire all callbacks; returns how many completed without error."""
        ok = 0
        for cb in list(self._callbacks):
            try:
                cb()
                ok += 1
            except Exception:
                logger.exception("External change callback failed: %r", cb)
        logger.debug("External change delivered to %d/%d subscribers", ok, len(self._callbacks))
        return ok
