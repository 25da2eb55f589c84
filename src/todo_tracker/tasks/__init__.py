"""
Task subsystem.

Components:
- task_models.py: data structures (Task, NewTask, Priority, FilterCriteria)
- task_filter.py: pure predicate and stable filtering/sorting helpers
- task_store.py: SQLite-backed storage
- task_engine.py: TaskStateEngine (authoritative list + criteria + published view)
- task_api.py: async wrappers for event-loop callers
"""
