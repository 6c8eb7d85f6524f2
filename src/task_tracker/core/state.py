# src/task_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_service import TaskService
from ..tasks.task_store import TaskStore
from .ports import IdentityProvider


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules.
    settings: object

    task_store: TaskStore
    service: TaskService
    identity: IdentityProvider

    @property
    def acting_user_id(self) -> int:
        return self.identity.current_user_id()
