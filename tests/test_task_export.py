# tests/test_task_export.py

from __future__ import annotations

import logging

import pytest

from task_tracker.core.models import Category, Task
from task_tracker.tasks.task_export import export_to_calendar, render_calendar
from task_tracker.tasks.task_service import TaskService


def _task(task_id: int, *, completed: bool, due: str = "2024-06-01", desc: str = "Ship it") -> Task:
    return Task(
        id=task_id,
        description=desc,
        completed=completed,
        category=Category.WORK,
        due_date=due,
        assigned_to=1,
        priority="High",
    )


def test_render_calendar_skips_completed_tasks() -> None:
    text = render_calendar([_task(1, completed=False), _task(2, completed=True, desc="Done already")])

    assert text == (
        "BEGIN:VCALENDAR\n"
        "VERSION:2.0\n"
        "PRODID:-//TaskManagerCLI//EN\n"
        "BEGIN:VEVENT\n"
        "UID:1@taskmanagercli\n"
        "DTSTART:20240601T000000\n"
        "SUMMARY:Ship it\n"
        "END:VEVENT\n"
        "END:VCALENDAR\n"
    )
    assert text.count("BEGIN:VEVENT") == 1


def test_render_calendar_empty_envelope() -> None:
    assert render_calendar([]) == "BEGIN:VCALENDAR\nVERSION:2.0\nPRODID:-//TaskManagerCLI//EN\nEND:VCALENDAR\n"


def test_export_overwrites_file_and_reflects_completion(
    tmp_path, service: TaskService, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO, logger="task_tracker.audit")
    path = tmp_path / "out" / "tasks.ics"

    first = service.add_task("First", Category.WORK, "2024-06-01", 1, "High", acting_user_id=1)
    service.add_task("Second", Category.STUDY, "2024-06-02", 1, "Low", acting_user_id=1)

    assert export_to_calendar(service, path) == 2
    assert path.read_text("utf-8").count("BEGIN:VEVENT") == 2

    service.mark_complete(first, 1)
    assert export_to_calendar(service, path) == 1

    text = path.read_text("utf-8")
    assert "SUMMARY:First" not in text
    assert "DTSTART:20240602T000000" in text
    assert any(r.getMessage() == f"Tasks exported to {path}" for r in caplog.records)
