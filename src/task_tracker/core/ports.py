# src/task_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the service and the reminder loop.

The service depends on Protocols instead of concrete implementations.
This keeps storage/notification/identity swappable and makes testing easier.
"""

from typing import Protocol

from .models import Category, Role, Task, User


class TaskRepo(Protocol):
    def list_tasks(self) -> list[Task]: ...
    def list_users(self) -> list[User]: ...
    def get_task(self, task_id: int) -> Task | None: ...

    def insert_user(self, name: str, role: Role) -> int: ...

    def insert_task(
            self,
            *,
            description: str,
            category: Category,
            due_date: str,
            assigned_to: int,
            priority: str,
            completed: bool = False,
    ) -> int: ...

    def update_task_fields(
            self,
            task_id: int,
            *,
            description: str | None = None,
            category: Category | None = None,
            due_date: str | None = None,
            assigned_to: int | None = None,
            priority: str | None = None,
            completed: bool | None = None,
    ) -> bool: ...

    def delete_task(self, task_id: int) -> bool: ...


class ReminderNotifier(Protocol):
    """Where the reminder loop sends "task is due today" notices."""

    def remind(self, task: Task) -> None: ...


class IdentityProvider(Protocol):
    """
    Resolves who is acting.

    There is no login: the default implementation returns a configured id.
    An authenticating provider can replace it without touching the service.
    """

    def current_user_id(self) -> int: ...


class StaticIdentity:
    def __init__(self, user_id: int) -> None:
        self._user_id = int(user_id)

    def current_user_id(self) -> int:
        return self._user_id
