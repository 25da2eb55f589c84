# tests/test_commands.py

from __future__ import annotations

from todo_tracker.cli.commands import CommandRegistry, format_view, registry
from todo_tracker.tasks.task_models import CompletionFilter, Priority


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b")

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/b y", emit=lambda _: None) == "h3"
    assert called["h2"] == 1
    assert called["h3"] == 1


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")


def test_add_with_fields_and_list(state) -> None:
    reply = registry.handle(state, "/add Buy milk | oat, 2 litres | 2026-10-20 | low")
    assert reply is not None and reply.startswith("Added task #")

    (task,) = state.engine.all_tasks
    assert task.title == "Buy milk"
    assert task.description == "oat, 2 litres"
    assert task.due_date == "2026-10-20"
    assert task.priority == Priority.LOW

    view = registry.handle(state, "/list") or ""
    assert "1 shown / 1 total" in view
    assert "[filtered]" not in view
    assert "Buy milk (due 2026-10-20)" in view


def test_add_rejects_blank_and_bad_priority(state) -> None:
    assert "Usage" in (registry.handle(state, "/add") or "")
    assert "Unknown priority" in (registry.handle(state, "/add x | | | urgent") or "")
    assert state.engine.all_tasks == ()


def test_done_edit_del_address_view_positions(state) -> None:
    registry.handle(state, "/add first")
    registry.handle(state, "/add second")

    assert (registry.handle(state, "/done 1") or "").startswith("Completed")
    # Completed tasks sink below open ones.
    assert [t.title for t in state.engine.filtered_tasks.value] == ["second", "first"]

    registry.handle(state, "/edit 1 second! | with notes | - | high")
    edited = state.engine.filtered_tasks.value[0]
    assert (edited.title, edited.description, edited.priority) == ("second!", "with notes", Priority.HIGH)

    # Omitted fields keep their value; "-" clears.
    registry.handle(state, "/edit 1 | -")
    assert state.engine.filtered_tasks.value[0].title == "second!"
    assert state.engine.filtered_tasks.value[0].description is None

    assert (registry.handle(state, "/del 2") or "").startswith("Deleted")
    assert [t.title for t in state.engine.all_tasks] == ["second!"]

    assert "No task at position" in (registry.handle(state, "/done 9") or "")


def test_filter_commands(state) -> None:
    registry.handle(state, "/add Buy milk | | | low")
    registry.handle(state, "/add Ship release | | | high")
    registry.handle(state, "/add Walk dog")
    registry.handle(state, "/done 2")

    registry.handle(state, "/show open")
    assert state.engine.completion_filter == CompletionFilter.NOT_COMPLETED
    assert [t.title for t in state.engine.filtered_tasks.value] == ["Buy milk", "Walk dog"]

    registry.handle(state, "/show all")
    registry.handle(state, "/prio low")
    registry.handle(state, "/prio h")
    assert [t.title for t in state.engine.filtered_tasks.value] == ["Buy milk", "Ship release"]

    registry.handle(state, "/search SHIP")
    assert [t.title for t in state.engine.filtered_tasks.value] == ["Ship release"]

    status = registry.handle(state, "/status") or ""
    assert "Search: 'SHIP'" in status
    assert "Priorities: high, low" in status
    assert "Filters: active" in status

    notes: list[str] = []
    registry.handle(state, "/clear", emit=notes.append)
    assert notes
    assert state.engine.filtered_tasks.value == state.engine.all_tasks
    assert "Filters: none" in (registry.handle(state, "/status") or "")


def test_format_view_empty_states(state) -> None:
    assert "No tasks yet" in format_view(state)
    registry.handle(state, "/add something")
    registry.handle(state, "/search nothing-like-it")
    assert "Nothing matches" in format_view(state)
    assert "[filtered]" in format_view(state)
