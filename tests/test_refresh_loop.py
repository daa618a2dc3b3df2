# tests/test_refresh_loop.py

from __future__ import annotations

import asyncio

import pytest

from site_schedule.tasks.refresh_loop import run_refresh_loop
from site_schedule.views.controller import ViewController

from .conftest import TODAY
from .fakes import FakeGateway, make_task


@pytest.mark.asyncio
async def test_refresh_loop_fetches_until_cancelled(controller: ViewController, gateway: FakeGateway) -> None:
    gateway.tasks = [make_task("a", TODAY)]

    runner = asyncio.create_task(run_refresh_loop(controller, interval_seconds=0.01))

    await asyncio.sleep(0.1)
    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner

    assert gateway.list_calls >= 1
    assert [t.id for t in controller.store.all()] == ["a"]


@pytest.mark.asyncio
async def test_refresh_loop_survives_failures(controller: ViewController, gateway: FakeGateway) -> None:
    gateway.fail = True

    runner = asyncio.create_task(run_refresh_loop(controller, interval_seconds=0.01))

    await asyncio.sleep(0.1)
    assert not runner.done()
    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner

    notice = controller.last_notice()
    assert notice is not None and notice.level == "error"


@pytest.mark.asyncio
async def test_refresh_loop_can_wait_before_first_fetch(controller: ViewController, gateway: FakeGateway) -> None:
    runner = asyncio.create_task(run_refresh_loop(controller, interval_seconds=5, run_immediately=False))

    await asyncio.sleep(0.05)
    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner

    assert gateway.list_calls == 0
