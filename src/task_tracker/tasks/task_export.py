# src/task_tracker/tasks/task_export.py

from __future__ import annotations

"""
iCalendar export.

Only pending tasks are exported. Each export rewrites the whole file from the
current snapshot, so edits and completions show up on the next export and
nothing is ever cancelled or removed in the calendar client explicitly.
"""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from ..core.errors import StoreError
from ..core.models import Task
from .task_service import TaskService

logger = logging.getLogger(__name__)
audit = logging.getLogger("task_tracker.audit")

PRODUCT_ID = "-//TaskManagerCLI//EN"
UID_DOMAIN = "taskmanagercli"


def dtstart_from_due_date(due_date: str) -> str:
    """2024-06-01 -> 20240601T000000"""
    return due_date.replace("-", "") + "T000000"


def render_calendar(
    tasks: Iterable[Task],
    *,
    product_id: str = PRODUCT_ID,
    uid_domain: str = UID_DOMAIN,
) -> str:
    lines = ["BEGIN:VCALENDAR", "VERSION:2.0", f"PRODID:{product_id}"]
    for task in tasks:
        if task.completed:
            continue
        lines.extend(
            [
                "BEGIN:VEVENT",
                f"UID:{task.id}@{uid_domain}",
                f"DTSTART:{dtstart_from_due_date(task.due_date)}",
                f"SUMMARY:{task.description}",
                "END:VEVENT",
            ]
        )
    lines.append("END:VCALENDAR")
    return "\n".join(lines) + "\n"


def export_to_calendar(service: TaskService, path: str | Path) -> int:
    """
    Write pending tasks to `path`, overwriting any prior export.

    Returns the number of exported events.
    """
    path = Path(path)
    tasks = service.list_tasks()
    text = render_calendar(tasks)
    count = sum(1 for t in tasks if not t.completed)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(text, "utf-8")
        os.replace(tmp, path)
    except OSError as e:
        raise StoreError(f"cannot write export {path}: {e}") from e

    logger.info("Exported %d tasks to %s", count, path)
    audit.info("Tasks exported to %s", path)
    return count
