# src/task_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the store, the service and the identity provider into AppState,
- guarantees at least one user exists.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.errors import StoreError
from ..core.ports import StaticIdentity
from ..core.state import AppState
from ..tasks.task_service import TaskService
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)
audit = logging.getLogger("task_tracker.audit")


def _ensure_local_dirs(settings) -> None:
    paths = (
        settings.data_dir,
        settings.db_path.parent,
        settings.audit_log_path.parent,
        settings.export_path.parent,
    )
    for path in paths:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreError(f"cannot create directory {path}: {e}") from e


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().

    Raises StoreError if a data directory cannot be created or the database cannot be opened.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TaskStore(settings.db_path)
    service = TaskService(store)
    service.ensure_default_admin(getattr(settings, "default_admin_name", "Admin User"))
    audit.info("Database initialized")

    return AppState(
        settings=settings,
        task_store=store,
        service=service,
        identity=StaticIdentity(getattr(settings, "default_user_id", 1)),
    )
