# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from task_tracker.cli.bootstrap import create_initial_state
from task_tracker.core.models import Role
from task_tracker.core.state import AppState
from task_tracker.tasks.task_service import TaskService
from task_tracker.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="Task Manager CLI",
        data_dir=tmp_path,
        db_path=tmp_path / "tasks.db",
        audit_log_path=tmp_path / "task_manager.log",
        export_path=tmp_path / "tasks.ics",
        reminders_enabled=False,
        reminder_interval_seconds=60.0,
        default_user_id=1,
        default_admin_name="Admin User",
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.db_path)


@pytest.fixture()
def service(store: TaskStore) -> TaskService:
    """Service over a real SQLite file with the default admin (id=1) in place."""
    svc = TaskService(store)
    svc.ensure_default_admin()
    return svc


@pytest.fixture()
def member_id(service: TaskService) -> int:
    return service.add_user("Mia", Role.MEMBER)


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    return create_initial_state(settings=settings)
