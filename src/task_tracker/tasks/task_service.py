# src/task_tracker/tasks/task_service.py

from __future__ import annotations

"""
Task service.

Validates and applies mutations, then reloads the full task/user collections
from the store. The cached collections live behind one lock: a reload swaps
both lists at once and readers always get copies, so the background reminder
thread never sees a half-reloaded cache.

The acting user id is passed explicitly into every call and trusted as-is.
"""

import logging
import re
import threading

from ..core.errors import AccessDeniedError, NotFoundError, ValidationError
from ..core.models import Category, Role, Task, TaskView, User
from ..core.ports import TaskRepo

logger = logging.getLogger(__name__)
audit = logging.getLogger("task_tracker.audit")

DUE_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
UNKNOWN_ASSIGNEE = "Unknown"
DEFAULT_ADMIN_NAME = "Admin User"


def validate_description(description: str) -> None:
    if not description:
        raise ValidationError("Description cannot be empty")


def validate_due_date(due_date: str) -> None:
    # Syntactic only: 2024-13-99 is accepted.
    if not DUE_DATE_RE.fullmatch(due_date or ""):
        raise ValidationError("Invalid date format")


class TaskService:
    def __init__(self, store: TaskRepo) -> None:
        self._store = store
        self._lock = threading.Lock()
        self._tasks: list[Task] = []
        self._users: list[User] = []
        self.reload()

    # ---- cache ----

    def reload(self) -> None:
        """Re-read both collections from the store and swap them in atomically."""
        tasks = self._store.list_tasks()
        users = self._store.list_users()
        with self._lock:
            self._tasks = tasks
            self._users = users
        logger.debug("Cache reloaded tasks=%d users=%d", len(tasks), len(users))

    def list_tasks(self) -> list[Task]:
        with self._lock:
            return list(self._tasks)

    def list_users(self) -> list[User]:
        with self._lock:
            return list(self._users)

    def snapshot(self) -> tuple[list[Task], list[User]]:
        with self._lock:
            return list(self._tasks), list(self._users)

    def find_user(self, user_id: int) -> User | None:
        for user in self.list_users():
            if user.id == user_id:
                return user
        return None

    def find_task(self, task_id: int) -> Task | None:
        for task in self.list_tasks():
            if task.id == task_id:
                return task
        return None

    # ---- users ----

    def ensure_default_admin(self, name: str = DEFAULT_ADMIN_NAME) -> int | None:
        """Insert a default Admin when no users exist. Returns its id, or None if nothing was done."""
        if self.list_users():
            return None
        user_id = self.add_user(name, Role.ADMIN)
        logger.info("Created default admin user id=%s", user_id)
        return user_id

    def add_user(self, name: str, role: Role, acting_user_id: int | None = None) -> int:
        # No uniqueness check on name.
        user_id = self._store.insert_user(name, role)
        self.reload()
        if acting_user_id is None:
            audit.info("User added: %s", name)
        else:
            audit.info("User added: %s by user %s", name, acting_user_id)
        return user_id

    # ---- tasks ----

    def _require_user(self, user_id: int) -> None:
        if self.find_user(user_id) is None:
            raise ValidationError("Assigned user not found")

    def add_task(
        self,
        description: str,
        category: Category,
        due_date: str,
        assigned_to: int,
        priority: str,
        acting_user_id: int,
    ) -> int:
        validate_description(description)
        validate_due_date(due_date)
        self._require_user(assigned_to)

        task_id = self._store.insert_task(
            description=description,
            category=category,
            due_date=due_date,
            assigned_to=assigned_to,
            priority=priority,
        )
        self.reload()
        audit.info("Task added: %s by user %s", description, acting_user_id)
        return task_id

    def view_tasks(self, acting_user_id: int) -> list[TaskView]:
        """
        Tasks visible to the acting user, each with its assignee name.

        Admins see everything; everyone else sees tasks assigned to them.
        An unknown acting id is not an error: it just is not an admin.
        """
        tasks, users = self.snapshot()
        names = {u.id: u.name for u in users}
        acting = next((u for u in users if u.id == acting_user_id), None)
        is_admin = acting is not None and acting.is_admin

        out: list[TaskView] = []
        for task in tasks:
            if is_admin or task.assigned_to == acting_user_id:
                out.append(TaskView(task=task, assignee_name=names.get(task.assigned_to, UNKNOWN_ASSIGNEE)))
        return out

    def _task_for_mutation(self, task_id: int, acting_user_id: int) -> Task:
        task = self.find_task(task_id)
        if task is None:
            raise NotFoundError(f"Task {task_id} not found")
        acting = self.find_user(acting_user_id)
        if not (acting is not None and acting.is_admin) and task.assigned_to != acting_user_id:
            raise AccessDeniedError(f"User {acting_user_id} may not modify task {task_id}")
        return task

    def _after_write(self, task_id: int, ok: bool) -> None:
        if not ok:
            # Row vanished between the cache check and the write.
            self.reload()
            raise NotFoundError(f"Task {task_id} not found")
        self.reload()

    def update_task(
        self,
        task_id: int,
        acting_user_id: int,
        *,
        description: str | None = None,
        category: Category | None = None,
        due_date: str | None = None,
        assigned_to: int | None = None,
        priority: str | None = None,
    ) -> Task:
        self._task_for_mutation(task_id, acting_user_id)

        if description is not None:
            validate_description(description)
        if due_date is not None:
            validate_due_date(due_date)
        if assigned_to is not None:
            self._require_user(assigned_to)

        ok = self._store.update_task_fields(
            task_id,
            description=description,
            category=category,
            due_date=due_date,
            assigned_to=assigned_to,
            priority=priority,
        )
        self._after_write(task_id, ok)
        audit.info("Task updated: %s by user %s", task_id, acting_user_id)
        return self._get_cached(task_id)

    def mark_complete(self, task_id: int, acting_user_id: int) -> Task:
        task = self._task_for_mutation(task_id, acting_user_id)
        if task.completed:
            return task
        ok = self._store.update_task_fields(task_id, completed=True)
        self._after_write(task_id, ok)
        audit.info("Task completed: %s by user %s", task_id, acting_user_id)
        return self._get_cached(task_id)

    def delete_task(self, task_id: int, acting_user_id: int) -> None:
        self._task_for_mutation(task_id, acting_user_id)
        ok = self._store.delete_task(task_id)
        self._after_write(task_id, ok)
        audit.info("Task deleted: %s by user %s", task_id, acting_user_id)

    def _get_cached(self, task_id: int) -> Task:
        task = self.find_task(task_id)
        if task is None:
            raise NotFoundError(f"Task {task_id} not found")
        return task
