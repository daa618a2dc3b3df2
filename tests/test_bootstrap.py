# tests/test_bootstrap.py

from __future__ import annotations

from site_schedule.cli.bootstrap import create_initial_state, shutdown_state
from site_schedule.tasks.task_api import HttpTaskGateway

from .conftest import TODAY
from .fakes import FakeGateway, make_task


def test_state_is_wired_to_the_hub(state, gateway: FakeGateway) -> None:
    assert state.settings.data_dir.is_dir()
    assert state.controller.store is state.store

    gateway.tasks = [make_task("a", TODAY)]
    state.hub.notify()
    assert [t.id for t in state.store.all()] == ["a"]

    shutdown_state(state)
    gateway.tasks = []
    state.hub.notify()
    assert [t.id for t in state.store.all()] == ["a"]


def test_default_gateway_is_http(settings) -> None:
    state = create_initial_state(settings=settings)
    try:
        assert isinstance(state.gateway, HttpTaskGateway)
    finally:
        shutdown_state(state)
