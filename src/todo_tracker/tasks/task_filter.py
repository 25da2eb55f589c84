# src/todo_tracker/tasks/task_filter.py

"""
Pure filtering helpers.

Nothing here touches storage or observers, so the predicate can be tested
on plain Task values.
"""

from __future__ import annotations

from collections.abc import Iterable

from .task_models import CompletionFilter, FilterCriteria, Task


def _matches_search(task: Task, query: str) -> bool:
    if not query:
        return True
    needle = query.casefold()
    if needle in task.title.casefold():
        return True
    # Absent description never matches.
    return task.description is not None and needle in task.description.casefold()


def _matches_completion(task: Task, completion: CompletionFilter) -> bool:
    if completion == CompletionFilter.COMPLETED:
        return task.is_completed
    if completion == CompletionFilter.NOT_COMPLETED:
        return not task.is_completed
    return True


def matches(task: Task, criteria: FilterCriteria) -> bool:
    return (
        _matches_search(task, criteria.search_query)
        and _matches_completion(task, criteria.completion_filter)
        and (not criteria.priority_filters or task.priority in criteria.priority_filters)
    )


def apply_filters(tasks: Iterable[Task], criteria: FilterCriteria) -> tuple[Task, ...]:
    """Stable filter: keeps the relative order of `tasks`, never re-sorts."""
    return tuple(t for t in tasks if matches(t, criteria))


def sort_for_display(tasks: Iterable[Task]) -> tuple[Task, ...]:
    """Incomplete tasks first; storage order is kept within each group."""
    return tuple(sorted(tasks, key=lambda t: t.is_completed))
