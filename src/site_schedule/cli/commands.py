# src/site_schedule/cli/commands.py

from __future__ import annotations

import inspect
import logging
import shlex
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from .render import render_summary, render_view

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /gantt, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str, emit: CommandEmitter | None = None) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError:
            return "Could not parse command (unbalanced quotes?)."
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        return "\n".join(lines)


registry = CommandRegistry()


def _show(state: AppState) -> str:
    out = render_view(state.controller.render())
    notice = state.controller.last_notice()
    if notice is not None and notice.level == "error":
        out += f"\n! {notice.message}"
    return out


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def _switch(mode: str) -> CommandHandler2:
    def handler(state: AppState, args: list[str]) -> str:
        state.controller.set_view(mode)
        return _show(state)

    return handler


def cmd_next(state: AppState, args: list[str]) -> str:
    """Next month in the calendar, next 7 days on the timeline."""
    ctl = state.controller
    if ctl.mode == "gantt":
        ctl.shift_days(7)
    else:
        ctl.next_month()
    return _show(state)


def cmd_prev(state: AppState, args: list[str]) -> str:
    ctl = state.controller
    if ctl.mode == "gantt":
        ctl.shift_days(-7)
    else:
        ctl.prev_month()
    return _show(state)


def cmd_today(state: AppState, args: list[str]) -> str:
    state.controller.go_today()
    return _show(state)


def cmd_shift(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /shift <days> (negative to go back)."
    try:
        days = int(args[0])
    except ValueError:
        return f"Not a number of days: {args[0]}"
    state.controller.shift_days(days)
    return _show(state)


def cmd_summary(state: AppState, args: list[str]) -> str:
    return render_summary(state.controller.get_summary())


def cmd_refresh(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if emit:
        emit("Refreshing tasks...")
    if not state.controller.refresh():
        notice = state.controller.last_notice()
        return notice.message if notice else "Refresh failed."
    return _show(state)


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <id> status=<label> progress=<0-100> remark=<text>
    Quote values with spaces: status="In Progress" remark="rain delay".
    """
    if not args:
        return 'Usage: /edit <id> [status=..] [progress=..] [remark=".."]'

    task_id, rest = args[0], args[1:]
    fields: dict[str, str] = {}
    for item in rest:
        key, sep, value = item.partition("=")
        key = key.strip().lower()
        if not sep or key not in ("status", "progress", "remark"):
            return f"Unknown edit field: {item}"
        fields[key] = value

    if not fields:
        return "Nothing to change. Give at least one of status=, progress=, remark=."

    updated = state.controller.commit_task_edit(
        task_id,
        status=fields.get("status"),
        progress=fields.get("progress"),
        remark=fields.get("remark"),
    )
    if updated is None:
        notice = state.controller.last_notice()
        return notice.message if notice else "Edit failed."
    return f"Saved {updated.title or updated.id}: {updated.status.value}, {updated.progress}%"


def cmd_notices(state: AppState, args: list[str]) -> str:
    notices = state.controller.notices[-10:]
    if not notices:
        return "No notices."
    return "\n".join(f"[{n.level}] {n.message}" for n in notices)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", _switch("list"), help_text="Show the task list.", aliases=["ls"])
registry.register("calendar", _switch("calendar"), help_text="Show the month calendar.", aliases=["cal"])
registry.register("gantt", _switch("gantt"), help_text="Show the rolling timeline.")
registry.register("next", cmd_next, help_text="Next month (calendar) or next week (timeline).")
registry.register("prev", cmd_prev, help_text="Previous month (calendar) or previous week (timeline).")
registry.register("today", cmd_today, help_text="Jump back to today.")
registry.register("shift", cmd_shift, help_text="Move the reference date: /shift 3 | /shift -10.")
registry.register("summary", cmd_summary, help_text="Counts per status.")
registry.register("refresh", cmd_refresh, help_text="Reload all tasks from the server.")
registry.register("edit", cmd_edit, help_text='Edit a task: /edit <id> status=Delayed progress=40 remark="..".')
registry.register("notices", cmd_notices, help_text="Show recent errors and warnings.")
