# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_tracker.core.state import AppState
from todo_tracker.tasks.task_engine import TaskStateEngine
from todo_tracker.tasks.task_models import Priority, Task
from todo_tracker.tasks.task_store import TaskStore

from .fakes import FakeTaskRepo


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todo-test",
        log_level="DEBUG",
        console_enabled=True,
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture()
def sample_tasks() -> list[Task]:
    return [
        Task(id=1, title="Buy milk", priority=Priority.LOW, is_completed=False),
        Task(id=2, title="Ship release", priority=Priority.HIGH, is_completed=True),
    ]


@pytest.fixture()
def repo(sample_tasks: list[Task]) -> FakeTaskRepo:
    return FakeTaskRepo(sample_tasks)


@pytest.fixture()
def engine(repo: FakeTaskRepo) -> TaskStateEngine:
    return TaskStateEngine(repo)


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState wired with a real SQLite TaskStore in tmp_path.

    Command tests go through the real store because the round trip
    (write -> reload -> publish) is part of what we want to test.
    """
    store = TaskStore(settings.tasks_db_path)
    return AppState(settings=settings, task_store=store, engine=TaskStateEngine(store))
