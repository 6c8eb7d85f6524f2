# tests/test_task_service.py

from __future__ import annotations

import logging

import pytest

from task_tracker.core.errors import AccessDeniedError, NotFoundError, ValidationError
from task_tracker.core.models import Category, Role
from task_tracker.tasks.task_service import TaskService
from task_tracker.tasks.task_store import TaskStore

ADMIN_ID = 1


def _add(service: TaskService, assigned_to: int, description: str = "Write report", due: str = "2024-06-01") -> int:
    return service.add_task(description, Category.WORK, due, assigned_to, "High", acting_user_id=ADMIN_ID)


def test_default_admin_created_once(service: TaskService) -> None:
    users = service.list_users()
    assert [(u.id, u.name, u.role) for u in users] == [(1, "Admin User", Role.ADMIN)]
    assert service.ensure_default_admin() is None
    assert len(service.list_users()) == 1


def test_add_task_appears_pending(service: TaskService, member_id: int) -> None:
    task_id = _add(service, member_id)

    (task,) = service.list_tasks()
    assert task.id == task_id
    assert task.completed is False
    assert task.assigned_to == member_id
    assert task.priority == "High"


@pytest.mark.parametrize("due", ["2024-6-01", "06/01/2024", "", "2024-06-01x", "tomorrow"])
def test_add_task_rejects_malformed_dates(service: TaskService, due: str) -> None:
    with pytest.raises(ValidationError, match="date"):
        _add(service, ADMIN_ID, due=due)
    assert service.list_tasks() == []


def test_add_task_accepts_syntactically_valid_impossible_date(service: TaskService) -> None:
    _add(service, ADMIN_ID, due="2024-13-99")
    assert service.list_tasks()[0].due_date == "2024-13-99"


def test_empty_description_is_rejected_before_anything_else(service: TaskService) -> None:
    with pytest.raises(ValidationError, match="Description"):
        service.add_task("", Category.WORK, "not a date", 12345, "High", acting_user_id=ADMIN_ID)
    assert service.list_tasks() == []


def test_unknown_assignee_is_rejected(service: TaskService) -> None:
    with pytest.raises(ValidationError, match="Assigned user not found"):
        _add(service, 42)
    assert service.list_tasks() == []


def test_visibility_admin_member_and_unknown(service: TaskService, member_id: int) -> None:
    mine = _add(service, member_id, "member task")
    _add(service, ADMIN_ID, "admin task")

    admin_view = service.view_tasks(ADMIN_ID)
    assert [v.task.description for v in admin_view] == ["member task", "admin task"]
    assert [v.assignee_name for v in admin_view] == ["Mia", "Admin User"]

    member_view = service.view_tasks(member_id)
    assert [v.task.id for v in member_view] == [mine]

    # Unknown acting user: not an admin, nothing assigned to it.
    assert service.view_tasks(777) == []


def test_view_shows_unknown_for_unresolvable_assignee(store: TaskStore) -> None:
    store.insert_user("Admin User", Role.ADMIN)
    store.insert_task(
        description="orphan", category=Category.OTHER, due_date="2024-01-01", assigned_to=55, priority="Low"
    )
    service = TaskService(store)

    (view,) = service.view_tasks(ADMIN_ID)
    assert view.assignee_name == "Unknown"


def test_restart_reproduces_collections(settings, service: TaskService) -> None:
    x = service.add_user("X", Role.MEMBER)
    _add(service, x, "for X")

    reopened = TaskService(TaskStore(settings.db_path))

    assert reopened.list_users() == service.list_users()
    assert reopened.list_tasks() == service.list_tasks()


def test_update_task_validates_and_applies(service: TaskService, member_id: int) -> None:
    task_id = _add(service, ADMIN_ID)

    updated = service.update_task(
        task_id, ADMIN_ID, description="Rewrite report", category=Category.STUDY, assigned_to=member_id
    )
    assert updated.description == "Rewrite report"
    assert updated.category == Category.STUDY
    assert updated.assigned_to == member_id
    assert updated.due_date == "2024-06-01"

    with pytest.raises(ValidationError):
        service.update_task(task_id, ADMIN_ID, due_date="soon")
    with pytest.raises(ValidationError):
        service.update_task(task_id, ADMIN_ID, assigned_to=404)
    with pytest.raises(ValidationError):
        service.update_task(task_id, ADMIN_ID, description="")
    assert service.find_task(task_id).description == "Rewrite report"


def test_mark_complete_and_delete(service: TaskService, member_id: int) -> None:
    task_id = _add(service, member_id)

    done = service.mark_complete(task_id, member_id)
    assert done.completed is True
    assert service.mark_complete(task_id, member_id).completed is True

    service.delete_task(task_id, ADMIN_ID)
    assert service.list_tasks() == []

    with pytest.raises(NotFoundError):
        service.delete_task(task_id, ADMIN_ID)
    with pytest.raises(NotFoundError):
        service.mark_complete(task_id, ADMIN_ID)


def test_members_cannot_touch_other_peoples_tasks(service: TaskService, member_id: int) -> None:
    task_id = _add(service, ADMIN_ID)

    with pytest.raises(AccessDeniedError):
        service.mark_complete(task_id, member_id)
    with pytest.raises(AccessDeniedError):
        service.delete_task(task_id, member_id)
    with pytest.raises(AccessDeniedError):
        service.update_task(task_id, member_id, priority="Low")

    assert service.find_task(task_id).completed is False


def test_audit_lines_for_actions(service: TaskService, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="task_tracker.audit")

    uid = service.add_user("Bob", Role.MEMBER)
    _add(service, uid, "Plan sprint")

    audit = [r.getMessage() for r in caplog.records if r.name == "task_tracker.audit"]
    assert "User added: Bob" in audit
    assert f"Task added: Plan sprint by user {ADMIN_ID}" in audit
