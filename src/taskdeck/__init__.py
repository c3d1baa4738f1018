"""taskdeck: a single-user task list with a filterable, paginated view."""

__version__ = "0.1.0"
