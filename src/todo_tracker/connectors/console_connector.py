# src/todo_tracker/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import format_view
from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.task_models import Task

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "todo"))
    _print_ts(f"[{app_name}] Use /help for commands. Plain text adds a task. Use /exit to quit.\n")

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    # Reprint the view whenever the engine publishes a new one (replays once on subscribe).
    def on_view(_tasks: tuple[Task, ...]) -> None:
        print(format_view(state), flush=True)

    unsubscribe = state.engine.filtered_tasks.subscribe(on_view)

    try:
        while True:
            try:
                user_input = input(">>> ").strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            # Plain text is shorthand for /add.
            line = user_input if user_input.startswith("/") else f"/add {user_input}"

            try:
                response = command_registry.handle(state, line, emit=emit)
            except Exception:
                # Storage failures surface here; the engine kept its last good view.
                logger.exception("Command handler crashed.")
                response = "Internal error while handling a command (see log)."

            if response is not None:
                _print_ts(response)
    finally:
        unsubscribe()

    logger.info("Console connector finished.")
