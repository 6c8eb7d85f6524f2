# tests/test_task_store.py

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from task_tracker.core.errors import StoreError
from task_tracker.core.models import Category, Role
from task_tracker.tasks.task_store import TaskStore


def test_insert_and_list_in_insertion_order(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.db")

    admin = store.insert_user("Admin User", Role.ADMIN)
    bob = store.insert_user("Bob", Role.MEMBER)
    assert bob > admin

    t1 = store.insert_task(
        description="Write report",
        category=Category.WORK,
        due_date="2024-06-01",
        assigned_to=bob,
        priority="High",
    )
    t2 = store.insert_task(
        description="Gym",
        category=Category.PERSONAL,
        due_date="2024-06-02",
        assigned_to=admin,
        priority="Low",
    )

    tasks = store.list_tasks()
    assert [t.id for t in tasks] == [t1, t2]
    assert tasks[0].description == "Write report"
    assert tasks[0].completed is False
    assert tasks[0].category == Category.WORK
    assert tasks[0].assigned_to == bob

    users = store.list_users()
    assert [(u.name, u.role) for u in users] == [("Admin User", Role.ADMIN), ("Bob", Role.MEMBER)]
    assert store.count_tasks() == 2
    assert store.count_users() == 2


def test_update_and_delete_report_missing_rows(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "tasks.db")
    uid = store.insert_user("Bob", Role.MEMBER)
    tid = store.insert_task(
        description="Read", category=Category.STUDY, due_date="2024-01-01", assigned_to=uid, priority="Medium"
    )

    assert store.update_task_fields(tid, completed=True, priority="Low") is True
    task = store.get_task(tid)
    assert task is not None
    assert task.completed is True
    assert task.priority == "Low"
    assert task.description == "Read"

    assert store.update_task_fields(999, completed=True) is False
    assert store.delete_task(tid) is True
    assert store.delete_task(tid) is False
    assert store.get_task(tid) is None


def test_unknown_enum_text_decodes_to_defaults(tmp_path: Path) -> None:
    db = tmp_path / "tasks.db"
    store = TaskStore(db)

    conn = sqlite3.connect(db)
    conn.execute("INSERT INTO users (name, role) VALUES ('Eve', 'superuser')")
    conn.execute(
        "INSERT INTO tasks (description, completed, category, due_date, assigned_to, priority) "
        "VALUES ('Odd', 0, 'Hobby', '2024-06-01', 1, 'High')"
    )
    conn.commit()
    conn.close()

    assert store.list_users()[0].role == Role.MEMBER
    assert store.list_tasks()[0].category == Category.OTHER


def test_old_schema_gets_missing_columns(tmp_path: Path) -> None:
    db = tmp_path / "tasks.db"
    conn = sqlite3.connect(db)
    conn.execute("CREATE TABLE tasks (id INTEGER PRIMARY KEY, description TEXT, due_date TEXT, assigned_to INTEGER)")
    conn.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT)")
    conn.execute("INSERT INTO tasks (description, due_date, assigned_to) VALUES ('legacy', '2024-01-01', 1)")
    conn.commit()
    conn.close()

    store = TaskStore(db)
    (task,) = store.list_tasks()
    assert task.description == "legacy"
    assert task.completed is False
    assert task.category == Category.OTHER
    assert task.priority == ""


def test_unopenable_database_raises_store_error(tmp_path: Path) -> None:
    # A directory where the database file should be.
    db = tmp_path / "tasks.db"
    db.mkdir()
    with pytest.raises(StoreError):
        TaskStore(db)
