# src/todo_tracker/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks.task_models import CompletionFilter, Priority, Task

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

FIELD_SEP = "|"
CLEAR_MARK = "-"


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

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

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
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
        return "\n".join(lines)


registry = CommandRegistry()


# ---- formatting ----

_PRIORITY_MARK = {Priority.HIGH: "!!!", Priority.MEDIUM: "!! ", Priority.LOW: "!  "}


def format_task(position: int, task: Task) -> str:
    box = "[x]" if task.is_completed else "[ ]"
    line = f"{position:>3}. {box} {_PRIORITY_MARK[task.priority]} {task.title}"
    if task.due_date:
        line += f" (due {task.due_date})"
    if task.description:
        line += f"\n          {task.description}"
    return line


def format_view(state: AppState) -> str:
    tasks = state.engine.filtered_tasks.value
    s = state.engine.summary()
    header = f"Tasks: {s.visible} shown / {s.total} total ({s.pending} open, {s.completed} done)"
    if not state.engine.filter_criteria.is_default:
        header += " [filtered]"
    if not tasks:
        empty = "  No tasks yet. Add one with /add <title>." if s.total == 0 else "  Nothing matches the filters."
        return f"{header}\n{empty}"
    return "\n".join([header, *(format_task(i, t) for i, t in enumerate(tasks, start=1))])


# ---- argument helpers ----

def _split_fields(args: list[str]) -> list[str]:
    """'/add a b | c | d' -> ['a b', 'c', 'd']"""
    return [p.strip() for p in " ".join(args).split(FIELD_SEP)]


def _task_at(state: AppState, raw: str) -> Task | None:
    """Resolve a 1-based position in the current view."""
    try:
        pos = int(raw)
    except ValueError:
        return None
    tasks = state.engine.filtered_tasks.value
    if 1 <= pos <= len(tasks):
        return tasks[pos - 1]
    return None


# ---- commands ----

def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return format_view(state)


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /add <title> [| description [| due date [| priority]]]
    """
    fields = _split_fields(args)
    fields += [""] * (4 - len(fields))
    title, description, due_date, prio_raw = fields[:4]

    priority = Priority.MEDIUM
    if prio_raw:
        try:
            priority = Priority.parse(prio_raw)
        except ValueError:
            return f"Unknown priority: {prio_raw}. Use low, medium or high."

    task_id = state.engine.add_task(title, description or None, due_date or None, priority)
    if task_id is None:
        return "Usage: /add <title> [| description [| due date [| priority]]]"
    return f"Added task #{task_id}."


def cmd_done(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /done <n>"
    task = _task_at(state, args[0])
    if task is None:
        return f"No task at position {args[0]}. Use /list."
    state.engine.toggle_completed(task)
    return f"{'Reopened' if task.is_completed else 'Completed'}: {task.title}"


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <n> <title> [| description [| due date [| priority]]]

    Omitted fields keep their value; "-" clears description or due date.
    """
    if len(args) < 2:
        return "Usage: /edit <n> <title> [| description [| due date [| priority]]]"
    task = _task_at(state, args[0])
    if task is None:
        return f"No task at position {args[0]}. Use /list."

    fields = _split_fields(args[1:])

    def pick(idx: int, current: str | None) -> str | None:
        if idx >= len(fields) or not fields[idx]:
            return current
        return None if fields[idx] == CLEAR_MARK else fields[idx]

    title = fields[0] or task.title
    description = pick(1, task.description)
    due_date = pick(2, task.due_date)
    priority = task.priority
    if len(fields) > 3 and fields[3]:
        try:
            priority = Priority.parse(fields[3])
        except ValueError:
            return f"Unknown priority: {fields[3]}. Use low, medium or high."

    state.engine.edit_task(task, title, description, due_date, priority)
    return f"Updated task #{task.id}."


def cmd_del(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /del <n>"
    task = _task_at(state, args[0])
    if task is None:
        return f"No task at position {args[0]}. Use /list."
    state.engine.delete_task(task)
    return f"Deleted: {task.title}"


def cmd_search(state: AppState, args: list[str]) -> str:
    query = " ".join(args)
    state.engine.update_search_query(query)
    return f"Search: {query!r}" if query else "Search cleared."


def cmd_show(state: AppState, args: list[str]) -> str:
    """
    /show all | open | done
    """
    if not args:
        return f"Showing: {state.engine.completion_filter.value}. Use /show all | open | done."
    try:
        completion = CompletionFilter.parse(args[0])
    except ValueError:
        return "Usage: /show all | open | done"
    state.engine.update_completion_filter(completion)
    return f"Showing: {completion.value}"


def cmd_prio(state: AppState, args: list[str]) -> str:
    """
    /prio <low|medium|high>  -> toggle that priority in the filter set
    """
    if not args:
        return "Usage: /prio low | medium | high"
    try:
        priority = Priority.parse(args[0])
    except ValueError:
        return "Usage: /prio low | medium | high"
    state.engine.toggle_priority_filter(priority)
    active = sorted(p.value for p in state.engine.priority_filters)
    return f"Priority filter: {', '.join(active) if active else 'any'}"


def cmd_clear(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if emit:
        with contextlib.suppress(Exception):
            emit("Clearing all filters...")
    state.engine.clear_all_filters()
    return "Filters cleared."


def cmd_status(state: AppState, args: list[str]) -> str:
    engine = state.engine
    s = engine.summary()
    prios = sorted(p.value for p in engine.priority_filters)
    return (
        "Status:\n"
        f"  Filters: {'none' if engine.filter_criteria.is_default else 'active'}\n"
        f"  Tasks: {s.total} total, {s.pending} open, {s.completed} done, {s.visible} shown\n"
        f"  Search: {engine.search_query!r}\n"
        f"  Showing: {engine.completion_filter.value}\n"
        f"  Priorities: {', '.join(prios) if prios else 'any'}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the current task view.", aliases=["ls"])
registry.register(
    "add", cmd_add, help_text="Add a task: /add title [| description [| due [| low|medium|high]]]."
)
registry.register("done", cmd_done, help_text="Toggle completion: /done <n>.", aliases=["x"])
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <n> title [| description [| due [| priority]]].")
registry.register("del", cmd_del, help_text="Delete a task: /del <n>.", aliases=["rm"])
registry.register("search", cmd_search, help_text="Filter by text: /search <text> (empty clears).")
registry.register("show", cmd_show, help_text="Completion filter: /show all | open | done.")
registry.register("prio", cmd_prio, help_text="Toggle a priority filter: /prio low | medium | high.")
registry.register("clear", cmd_clear, help_text="Reset all filters.")
registry.register("status", cmd_status, help_text="Show counts and active filters.")
