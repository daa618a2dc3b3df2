# tests/test_commands.py

from __future__ import annotations

from datetime import date

from site_schedule.cli.commands import CommandRegistry, registry
from site_schedule.cli.render import render_gantt
from site_schedule.schedule.gantt_layout import build_gantt_layout

from .conftest import TODAY
from .fakes import FakeGateway, make_task


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b")

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/b y", emit=lambda _: None) == "h3"
    assert called["h2"] == 1
    assert called["h3"] == 1


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "unbalanced" in (reg.handle(state, '/edit a remark="oops') or "")


def test_help_lists_commands_and_exit(state) -> None:
    text = registry.handle(state, "/help") or ""
    assert "/gantt" in text
    assert "/edit" in text
    assert "/exit" in text


def test_refresh_then_edit_round_trip(state, gateway: FakeGateway) -> None:
    gateway.tasks = [make_task("a", TODAY)]
    emitted: list[str] = []

    out = registry.handle(state, "/refresh", emit=emitted.append) or ""
    assert emitted == ["Refreshing tasks..."]
    assert "Task a" in out

    reply = registry.handle(state, '/edit a status="In Progress" progress=40 remark="rebar delivered"')
    assert reply == "Saved Task a: In Progress, 40%"
    assert gateway.updates == [("a", {"status": "In Progress", "progress": 40, "remark": "rebar delivered"})]
    assert state.store.get("a").progress == 40


def test_edit_rejects_unknown_fields_and_bad_values(state, gateway: FakeGateway) -> None:
    gateway.tasks = [make_task("a", TODAY)]
    state.controller.refresh()

    assert registry.handle(state, "/edit a colour=red") == "Unknown edit field: colour=red"
    assert "Nothing to change" in (registry.handle(state, "/edit a") or "")
    assert gateway.updates == []

    reply = registry.handle(state, "/edit a status=Exploded") or ""
    assert "Exploded" in reply
    assert gateway.updates == []


def test_refresh_failure_reports_notice(state, gateway: FakeGateway) -> None:
    gateway.fail = True
    reply = registry.handle(state, "/refresh") or ""
    assert reply == state.controller.last_notice().message


def test_navigation_commands_follow_view(state) -> None:
    registry.handle(state, "/calendar")
    out = registry.handle(state, "/next") or ""
    assert out.startswith("2026-04")
    assert state.controller.reference_date == date(2026, 4, 10)

    registry.handle(state, "/gantt")
    registry.handle(state, "/prev")
    assert state.controller.reference_date == date(2026, 4, 3)

    assert "Not a number" in (registry.handle(state, "/shift soon") or "")
    registry.handle(state, "/today")
    assert state.controller.reference_date == TODAY


def test_summary_command(state, gateway: FakeGateway) -> None:
    gateway.tasks = [make_task("a", TODAY), make_task("b", TODAY)]
    state.controller.refresh()
    assert (registry.handle(state, "/summary") or "").startswith("Total: 2")


def test_gantt_rendering_marks_progress_and_today() -> None:
    task = make_task("a", TODAY, duration=4, progress=50, title="Pour slab")
    layout = build_gantt_layout(TODAY, [task, make_task("x", None)])

    text = render_gantt(layout)
    lines = text.splitlines()

    assert lines[0] == "05 Mar .. 03 Apr"
    bar_line = lines[2]
    assert bar_line.startswith("Pour slab")
    assert bar_line[18:].startswith(".....##==.")
    assert "not placed (no start date): x" in text
