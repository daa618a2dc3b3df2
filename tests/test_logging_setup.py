# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from site_schedule.logging_setup import LOG_FILE_NAME, _ConsoleNoiseFilter, setup_logging


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        if h not in handlers:
            h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_keeps_own_logs_and_quiets_the_rest() -> None:
    f = _ConsoleNoiseFilter()
    assert f.filter(_record("site_schedule.views.controller", logging.INFO))
    assert not f.filter(_record("site_schedule.tasks.refresh_loop", logging.INFO))
    assert f.filter(_record("site_schedule.tasks.refresh_loop", logging.WARNING))
    assert not f.filter(_record("httpx", logging.WARNING))
    assert f.filter(_record("httpx", logging.ERROR))


def test_file_log_receives_debug_lines(tmp_path: Path, restore_root_logging) -> None:
    setup_logging(log_dir=tmp_path / "logs", console_level=logging.ERROR)

    logging.getLogger("site_schedule.test").debug("window shifted by %d days", 7)
    for h in logging.getLogger().handlers:
        h.flush()

    text = (tmp_path / "logs" / LOG_FILE_NAME).read_text(encoding="utf-8")
    assert "window shifted by 7 days" in text
    assert "[MainThread]" in text
    assert logging.getLogger("httpx").level == logging.WARNING
