# src/todo_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage swappable and makes testing easier.
"""

from collections.abc import Callable
from typing import Protocol, TypeVar

from ..tasks.task_models import NewTask, Task

T_contra = TypeVar("T_contra", contravariant=True)


class Observer(Protocol[T_contra]):
    """Receives each new value published by an ObservableValue."""

    def __call__(self, value: T_contra, /) -> None: ...


Unsubscribe = Callable[[], None]


class TaskRepo(Protocol):
    """
    Durable task storage.

    Each call is expected to be atomic on its own; no cross-call transactions.
    Any I/O failure is raised to the caller unchanged.
    """

    def insert(self, task: NewTask) -> int: ...

    # Order is not significant at this layer; the engine re-sorts.
    def list_all(self) -> list[Task]: ...

    # False means "no row with that id".
    def update(self, task: Task) -> bool: ...
    def delete(self, task_id: int) -> bool: ...
