# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from site_schedule.cli.bootstrap import create_initial_state
from site_schedule.core.state import AppState
from site_schedule.tasks.task_store import TaskStore
from site_schedule.views.controller import ViewController

from .fakes import FakeGateway

TODAY = date(2026, 3, 10)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and the controller.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="site-schedule-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        console_enabled=False,
        api_base_url="http://api.test/api",
        api_timeout_seconds=2.0,
        project_id=None,
        refresh_interval_seconds=0.5,
        gantt_day_width=50,
    )


@pytest.fixture()
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture()
def store() -> TaskStore:
    return TaskStore()


@pytest.fixture()
def controller(store: TaskStore, gateway: FakeGateway) -> ViewController:
    return ViewController(store, gateway, clock=lambda: TODAY)


@pytest.fixture()
def state(settings: SimpleNamespace, gateway: FakeGateway) -> AppState:
    """AppState wired through the real bootstrap with a fake gateway."""
    return create_initial_state(settings=settings, gateway=gateway, clock=lambda: TODAY)
