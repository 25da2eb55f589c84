# tests/test_task_filter.py

from __future__ import annotations

from todo_tracker.tasks.task_filter import apply_filters, matches, sort_for_display
from todo_tracker.tasks.task_models import CompletionFilter, FilterCriteria, Priority, Task


def _task(tid: int, title: str, **kw) -> Task:
    return Task(id=tid, title=title, **kw)


def test_default_criteria_match_everything() -> None:
    crit = FilterCriteria()
    assert crit.is_default
    assert matches(_task(1, "a"), crit)
    assert matches(_task(2, "b", is_completed=True, priority=Priority.HIGH), crit)


def test_search_is_case_insensitive_on_title_and_description() -> None:
    t = _task(1, "Ship release", description="Tag v2 and PUBLISH notes")
    assert matches(t, FilterCriteria(search_query="ship"))
    assert matches(t, FilterCriteria(search_query="SHIP"))
    assert matches(t, FilterCriteria(search_query="publish"))
    assert not matches(t, FilterCriteria(search_query="milk"))


def test_search_never_matches_absent_description() -> None:
    t = _task(1, "Buy milk", description=None)
    assert not matches(t, FilterCriteria(search_query="none"))


def test_completion_filter() -> None:
    done = _task(1, "a", is_completed=True)
    open_ = _task(2, "b", is_completed=False)

    completed = FilterCriteria(completion_filter=CompletionFilter.COMPLETED)
    not_completed = FilterCriteria(completion_filter=CompletionFilter.NOT_COMPLETED)

    assert matches(done, completed) and not matches(open_, completed)
    assert matches(open_, not_completed) and not matches(done, not_completed)


def test_priority_set_and_combination() -> None:
    low = _task(1, "Buy milk", priority=Priority.LOW)
    med = _task(2, "Walk dog", priority=Priority.MEDIUM)
    high = _task(3, "Ship release", priority=Priority.HIGH, is_completed=True)

    crit = FilterCriteria(priority_filters=frozenset({Priority.LOW, Priority.HIGH}))
    assert apply_filters([low, med, high], crit) == (low, high)

    # All three constraints apply together.
    crit_all = FilterCriteria(
        search_query="ship",
        completion_filter=CompletionFilter.NOT_COMPLETED,
        priority_filters=frozenset({Priority.HIGH}),
    )
    assert apply_filters([low, med, high], crit_all) == ()


def test_apply_filters_keeps_input_order() -> None:
    tasks = [_task(3, "c x"), _task(1, "a x"), _task(2, "b")]
    assert apply_filters(tasks, FilterCriteria(search_query="x")) == (tasks[0], tasks[1])


def test_sort_for_display_puts_open_first_and_is_stable() -> None:
    a = _task(1, "a", is_completed=True)
    b = _task(2, "b")
    c = _task(3, "c", is_completed=True)
    d = _task(4, "d")
    assert sort_for_display([a, b, c, d]) == (b, d, a, c)
