"""todo_tracker: a personal task list with a reactive filtering engine."""

__version__ = "0.1.0"
