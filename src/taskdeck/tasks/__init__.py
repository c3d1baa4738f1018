"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Priority, view filter selectors)
- task_store.py: authoritative in-memory collection + validation
- task_view.py: pure filter/sort of the collection, completion stats
- pagination.py: incremental materialization of the filtered sequence
- notifier.py: due-soon reminders published on the event bus
"""
