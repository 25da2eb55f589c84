# src/todo_tracker/tasks/task_engine.py

from __future__ import annotations

"""
Task state engine.

Owns the authoritative task list and the filter criteria, and publishes the
filtered view after every change:

- storage ops (add/toggle/edit/delete): write -> full reload -> recompute -> publish
- filter ops: update criteria -> recompute -> publish (no storage access)

Locks (never held one inside the other by the engine itself):
- _write_lock serializes storage ops: the write and the reload that follows it
- _state_lock guards all_tasks/criteria and is the lock of both observables,
  so subscribe/replay, publish and summary() share one lock; never held during I/O

Each reload gets a generation number under _write_lock. A snapshot is installed
only if it is newer than the installed one, so a writer that lost the race to
_state_lock never publishes a stale list.

In-memory state is swapped only after a successful reload. If the store raises,
the exception reaches the caller and the published view stays at its last good value.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import replace

from ..core.observable import ObservableValue
from ..core.ports import TaskRepo
from .task_filter import apply_filters, sort_for_display
from .task_models import (
    CompletionFilter,
    FilterCriteria,
    NewTask,
    Priority,
    Task,
    TaskSummary,
    normalize_optional,
)

logger = logging.getLogger(__name__)

_Snapshot = tuple[int, tuple[Task, ...]]


class TaskStateEngine:
    def __init__(self, store: TaskRepo) -> None:
        self._store = store
        # Re-entrant so an observer may call back into the engine during publish.
        self._write_lock = threading.RLock()
        self._state_lock = threading.RLock()

        self._all_tasks: tuple[Task, ...] = ()
        self._criteria_value = FilterCriteria()
        self._loaded_generation = 0
        self._installed_generation = 0

        self.filtered_tasks: ObservableValue[tuple[Task, ...]] = ObservableValue(
            (), lock=self._state_lock
        )
        self.criteria: ObservableValue[FilterCriteria] = ObservableValue(
            self._criteria_value, lock=self._state_lock
        )

        self.refresh()

    # ---- read-only accessors ----

    @property
    def all_tasks(self) -> tuple[Task, ...]:
        return self._all_tasks

    @property
    def filter_criteria(self) -> FilterCriteria:
        """Current criteria; already updated while filtered_tasks observers run."""
        return self._criteria_value

    @property
    def search_query(self) -> str:
        return self._criteria_value.search_query

    @property
    def completion_filter(self) -> CompletionFilter:
        return self._criteria_value.completion_filter

    @property
    def priority_filters(self) -> frozenset[Priority]:
        return self._criteria_value.priority_filters

    def summary(self) -> TaskSummary:
        with self._state_lock:
            return TaskSummary(
                total=len(self._all_tasks),
                visible=len(self.filtered_tasks.value),
                completed=sum(1 for t in self._all_tasks if t.is_completed),
            )

    # ---- storage ops ----

    def refresh(self) -> None:
        with self._write_lock:
            snapshot = self._load()
        self._install(snapshot)

    def add_task(
        self,
        title: str,
        description: str | None = None,
        due_date: str | None = None,
        priority: Priority = Priority.MEDIUM,
    ) -> int | None:
        """Insert a new task. Returns its id, or None when the title is blank."""
        if not title or not title.strip():
            logger.debug("add_task rejected: blank title")
            return None

        new_task = NewTask(
            title=title,
            description=normalize_optional(description),
            due_date=normalize_optional(due_date),
            priority=priority,
        )
        with self._write_lock:
            task_id = self._store.insert(new_task)
            logger.info("Task added id=%s priority=%s", task_id, priority.value)
            snapshot = self._load()
        self._install(snapshot)
        return task_id

    def toggle_completed(self, task: Task) -> None:
        updated = replace(task, is_completed=not task.is_completed)
        with self._write_lock:
            if not self._store.update(updated):
                logger.debug("toggle_completed: task id=%s not found", task.id)
            else:
                logger.info("Task %s -> completed=%s", task.id, updated.is_completed)
            snapshot = self._load()
        self._install(snapshot)

    def edit_task(
        self,
        task: Task,
        new_title: str,
        new_description: str | None,
        new_due_date: str | None,
        new_priority: Priority,
    ) -> None:
        if not new_title or not new_title.strip():
            logger.debug("edit_task rejected: blank title id=%s", task.id)
            return

        updated = replace(
            task,
            title=new_title,
            description=normalize_optional(new_description),
            due_date=normalize_optional(new_due_date),
            priority=new_priority,
        )
        with self._write_lock:
            if not self._store.update(updated):
                logger.debug("edit_task: task id=%s not found", task.id)
            else:
                logger.info("Task %s edited", task.id)
            snapshot = self._load()
        self._install(snapshot)

    def delete_task(self, task: Task) -> None:
        with self._write_lock:
            if not self._store.delete(task.id):
                logger.debug("delete_task: task id=%s not found", task.id)
            else:
                logger.info("Task %s deleted", task.id)
            snapshot = self._load()
        self._install(snapshot)

    # ---- filter ops ----

    def update_search_query(self, text: str) -> None:
        self._set_criteria(lambda c: replace(c, search_query=text or ""))

    def update_completion_filter(self, completion_filter: CompletionFilter) -> None:
        self._set_criteria(lambda c: replace(c, completion_filter=completion_filter))

    def toggle_priority_filter(self, priority: Priority) -> None:
        def _toggle(c: FilterCriteria) -> FilterCriteria:
            return replace(c, priority_filters=c.priority_filters ^ {priority})

        self._set_criteria(_toggle)

    def clear_all_filters(self) -> None:
        self._set_criteria(lambda _c: FilterCriteria())

    # ---- internals ----

    def _load(self) -> _Snapshot:
        # Caller holds _write_lock. list_all() may raise; state is untouched then.
        tasks = sort_for_display(self._store.list_all())
        self._loaded_generation += 1
        return self._loaded_generation, tasks

    def _install(self, snapshot: _Snapshot) -> None:
        generation, tasks = snapshot
        with self._state_lock:
            if generation <= self._installed_generation:
                logger.debug("Skipped stale reload generation=%d", generation)
                return
            self._installed_generation = generation
            self._all_tasks = tasks
            self._publish()
        logger.debug("Reloaded %d tasks", len(tasks))

    def _set_criteria(self, change: Callable[[FilterCriteria], FilterCriteria]) -> None:
        with self._state_lock:
            new_criteria = change(self._criteria_value)
            if new_criteria == self._criteria_value:
                return
            self._criteria_value = new_criteria
            # View first: criteria observers may read filtered_tasks.
            self._publish()
            # A view observer may have changed the criteria again and published it.
            if self.criteria.value != self._criteria_value:
                self.criteria.set(self._criteria_value)

    def _publish(self) -> None:
        # Caller holds _state_lock.
        self.filtered_tasks.set(apply_filters(self._all_tasks, self._criteria_value))
