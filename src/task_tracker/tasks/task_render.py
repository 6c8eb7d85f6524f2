# src/task_tracker/tasks/task_render.py

from __future__ import annotations

from collections.abc import Iterable

from ..core.models import TaskView, User

NO_TASKS = "No tasks found."

# (header, width)
TASK_COLUMNS: tuple[tuple[str, int], ...] = (
    ("ID", 5),
    ("Description", 30),
    ("Status", 10),
    ("Category", 10),
    ("Due Date", 15),
    ("Assigned", 10),
    ("Priority", 10),
)
TABLE_WIDTH = 90


def _row(cells: Iterable[object]) -> str:
    return "".join(f"{str(c):<{w}}" for c, (_, w) in zip(cells, TASK_COLUMNS)).rstrip()


def render_task_table(rows: list[TaskView]) -> str:
    """Fixed-width listing. Descriptions are cut to fit their column."""
    if not rows:
        return NO_TASKS

    lines = [_row(h for h, _ in TASK_COLUMNS), "-" * TABLE_WIDTH]
    desc_width = TASK_COLUMNS[1][1] - 1
    for view in rows:
        task = view.task
        lines.append(
            _row(
                (
                    task.id,
                    task.description[:desc_width],
                    "Completed" if task.completed else "Pending",
                    task.category.value,
                    task.due_date,
                    view.assignee_name,
                    task.priority,
                )
            )
        )
    return "\n".join(lines)


def render_user_table(users: list[User]) -> str:
    if not users:
        return "No users found."
    lines = [f"{'ID':<5}{'Name':<30}{'Role':<10}".rstrip(), "-" * 45]
    for u in users:
        lines.append(f"{u.id:<5}{u.name[:29]:<30}{u.role.value:<10}".rstrip())
    return "\n".join(lines)
