# src/todo_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_engine import TaskStateEngine
from .ports import TaskRepo


@dataclass
class AppState:
    """Everything one session needs; built once in cli/bootstrap.py."""

    # Settings object (config.Settings or a test namespace with the same fields).
    settings: object

    task_store: TaskRepo
    engine: TaskStateEngine
