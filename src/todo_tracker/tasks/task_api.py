# src/todo_tracker/tasks/task_api.py

"""
Async helpers for event-loop callers.

Storage ops on the engine block on SQLite; these wrappers run them in a worker
thread so a loop stays responsive. Ordering between concurrent calls is still
guaranteed by the engine's own write lock.

Filter ops never touch storage, so callers use the engine directly for those.
"""

from __future__ import annotations

import asyncio
import logging

from .task_engine import TaskStateEngine
from .task_models import Priority, Task

logger = logging.getLogger(__name__)


async def add_task(
    engine: TaskStateEngine,
    title: str,
    *,
    description: str | None = None,
    due_date: str | None = None,
    priority: Priority = Priority.MEDIUM,
) -> int | None:
    return await asyncio.to_thread(engine.add_task, title, description, due_date, priority)


async def toggle_completed(engine: TaskStateEngine, task: Task) -> None:
    await asyncio.to_thread(engine.toggle_completed, task)


async def edit_task(
    engine: TaskStateEngine,
    task: Task,
    *,
    title: str,
    description: str | None,
    due_date: str | None,
    priority: Priority,
) -> None:
    await asyncio.to_thread(engine.edit_task, task, title, description, due_date, priority)


async def delete_task(engine: TaskStateEngine, task: Task) -> None:
    await asyncio.to_thread(engine.delete_task, task)


async def refresh(engine: TaskStateEngine) -> None:
    await asyncio.to_thread(engine.refresh)
