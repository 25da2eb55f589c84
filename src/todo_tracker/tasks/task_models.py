# src/todo_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def from_db(cls, raw: str | None) -> Priority:
        if not raw:
            return cls.MEDIUM
        try:
            return cls(raw.lower())
        except ValueError:
            return cls.MEDIUM

    @classmethod
    def parse(cls, raw: str) -> Priority:
        """Strict parse for user input ("high", "H", "HIGH")."""
        s = (raw or "").strip().lower()
        for p in cls:
            if s in (p.value, p.value[0]):
                return p
        raise ValueError(f"unknown priority: {raw!r}")


class CompletionFilter(StrEnum):
    ALL = "all"
    COMPLETED = "completed"
    NOT_COMPLETED = "not_completed"

    @classmethod
    def parse(cls, raw: str) -> CompletionFilter:
        s = (raw or "").strip().lower().replace("-", "_")
        aliases = {
            "all": cls.ALL,
            "done": cls.COMPLETED,
            "completed": cls.COMPLETED,
            "open": cls.NOT_COMPLETED,
            "todo": cls.NOT_COMPLETED,
            "not_completed": cls.NOT_COMPLETED,
        }
        try:
            return aliases[s]
        except KeyError:
            raise ValueError(f"unknown completion filter: {raw!r}") from None


def normalize_optional(text: str | None) -> str | None:
    """Blank optional text is stored as absent, never as "". Anything else is kept as given."""
    if text is None:
        return None
    return text if text.strip() else None


@dataclass(slots=True, frozen=True)
class NewTask:
    """A task that storage has not assigned an identity to yet."""

    title: str
    description: str | None = None
    is_completed: bool = False
    due_date: str | None = None
    priority: Priority = Priority.MEDIUM


@dataclass(slots=True, frozen=True)
class Task:
    id: int
    title: str
    description: str | None = None
    is_completed: bool = False
    due_date: str | None = None
    priority: Priority = Priority.MEDIUM


@dataclass(slots=True, frozen=True)
class FilterCriteria:
    """
    Filter state applied to derive the visible list.

    All three fields constrain simultaneously; each has a "no constraint" value:
    - search_query == ""
    - completion_filter == ALL
    - priority_filters empty
    """

    search_query: str = ""
    completion_filter: CompletionFilter = CompletionFilter.ALL
    priority_filters: frozenset[Priority] = field(default_factory=frozenset)

    @property
    def is_default(self) -> bool:
        return self == FilterCriteria()


@dataclass(slots=True, frozen=True)
class TaskSummary:
    total: int
    visible: int
    completed: int

    @property
    def pending(self) -> int:
        return self.total - self.completed
