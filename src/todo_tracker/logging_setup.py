# src/todo_tracker/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "todo.log"
APP_LOGGER = "todo_tracker"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keeps stderr readable next to the ">>> " prompt.

    The REPL re-prints the whole task view after every change, so anything else
    written to the terminal interleaves with it. Only todo_tracker records pass
    at the configured console level; captured warnings ('py.warnings') and other
    libraries' records reach the terminal only when they are errors.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == APP_LOGGER or record.name.startswith(APP_LOGGER + "."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/todo",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Route logs to the terminal and to <log_dir>/todo.log.

    The console default is WARNING so engine INFO lines ("Task added id=...")
    do not land between the prompt and the reprinted view; TODO_LOG_LEVEL
    raises it. The file keeps every DEBUG record, including reload
    generations and storage failures the console only summarizes as
    "Internal error ... (see log)".

    Replaces any handlers already on the root logger, so calling it again
    (e.g. from tests) does not duplicate output.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_dir / LOG_FILE_NAME), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    # warnings.warn(...) goes to todo.log as 'py.warnings'.
    logging.captureWarnings(True)
