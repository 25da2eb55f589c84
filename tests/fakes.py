# tests/fakes.py

from __future__ import annotations

import sqlite3
import threading
from dataclasses import dataclass, field
from typing import Any

from todo_tracker.tasks.task_models import NewTask, Task


class FakeTaskRepo:
    """
    In-memory TaskRepo used for engine unit tests.

    - ids are never reused (monotonic counter)
    - list_all() returns tasks in insertion order
    - fail_on: names of methods that should raise sqlite3.OperationalError
    - calls: every method call, for asserting "no storage access"
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self.rows: dict[int, Task] = {}
        self._next_id = 1
        self.fail_on: set[str] = set()
        self.calls: list[str] = []
        for t in tasks or []:
            self.rows[t.id] = t
            self._next_id = max(self._next_id, t.id + 1)

    def _enter(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise sqlite3.OperationalError(f"simulated failure in {name}")

    def insert(self, task: NewTask) -> int:
        self._enter("insert")
        task_id = self._next_id
        self._next_id += 1
        self.rows[task_id] = Task(
            id=task_id,
            title=task.title,
            description=task.description,
            is_completed=task.is_completed,
            due_date=task.due_date,
            priority=task.priority,
        )
        return task_id

    def list_all(self) -> list[Task]:
        self._enter("list_all")
        return list(self.rows.values())

    def update(self, task: Task) -> bool:
        self._enter("update")
        if task.id not in self.rows:
            return False
        self.rows[task.id] = task
        return True

    def delete(self, task_id: int) -> bool:
        self._enter("delete")
        return self.rows.pop(task_id, None) is not None


class BlockingTaskRepo(FakeTaskRepo):
    """
    FakeTaskRepo whose update() parks until the test releases it.

    `update_started` is set once a writer is inside update(); `release` lets it finish.
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        super().__init__(tasks)
        self.update_started = threading.Event()
        self.release = threading.Event()

    def update(self, task: Task) -> bool:
        self.update_started.set()
        if not self.release.wait(timeout=10):
            raise sqlite3.OperationalError("update was never released")
        return super().update(task)


@dataclass(slots=True)
class RecordingObserver:
    """Collects every value it is called with."""

    values: list[Any] = field(default_factory=list)

    def __call__(self, value: Any) -> None:
        self.values.append(value)

    @property
    def last(self) -> Any:
        return self.values[-1]
