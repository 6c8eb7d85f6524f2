# src/task_tracker/core/errors.py

"""Exception hierarchy shared by the store, the service and the shell."""

from __future__ import annotations


class TaskTrackerError(Exception):
    """Base class for all task_tracker errors."""


class ValidationError(TaskTrackerError):
    """Bad input: empty description, malformed date, unknown assignee."""


class NotFoundError(TaskTrackerError):
    """The referenced task does not exist."""


class AccessDeniedError(TaskTrackerError):
    """The acting user may not modify the referenced task."""


class StoreError(TaskTrackerError):
    """The SQLite backing store failed (cannot open, constraint violation, ...)."""
