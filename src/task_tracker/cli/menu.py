# src/task_tracker/cli/menu.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from ..core.models import Category, Role
from ..core.state import AppState
from ..tasks.task_export import export_to_calendar
from ..tasks.task_render import render_task_table, render_user_table

logger = logging.getLogger(__name__)


class InvalidInput(Exception):
    """A numeric prompt got something that is not a number."""


class Prompter(Protocol):
    def text(self, label: str) -> str: ...
    def number(self, label: str) -> int: ...
    def optional_text(self, label: str) -> str | None: ...
    def optional_number(self, label: str) -> int | None: ...


MenuHandler = Callable[[AppState, Prompter], str | None]


@dataclass(slots=True, frozen=True)
class MenuOption:
    number: int
    label: str
    handler: MenuHandler


class MenuRegistry:
    """Numbered menu. The exit entry is always shown last, after the registered options."""

    def __init__(self, title: str = "Task Manager CLI") -> None:
        self.title = title
        self._options: dict[int, MenuOption] = {}

    def register(self, number: int, label: str, handler: MenuHandler) -> None:
        self._options[number] = MenuOption(number=number, label=label, handler=handler)

    @property
    def exit_choice(self) -> int:
        return max(self._options, default=0) + 1

    def render(self) -> str:
        lines = ["", self.title]
        for number in sorted(self._options):
            lines.append(f"{number}. {self._options[number].label}")
        lines.append(f"{self.exit_choice}. Exit")
        return "\n".join(lines)

    def handle(self, state: AppState, choice: int, prompt: Prompter) -> str | None:
        """Run the option's flow. Returns the text to show, or None."""
        option = self._options.get(choice)
        if option is None:
            return "Invalid choice."
        logger.debug("Menu choice %s (%s)", choice, option.label)
        return option.handler(state, prompt)


def action_add_task(state: AppState, prompt: Prompter) -> str:
    description = prompt.text("Enter description: ")
    category = Category.from_choice(prompt.number("Select category (1=Work, 2=Personal, 3=Study, 4=Other): "))
    due_date = prompt.text("Enter due date (YYYY-MM-DD): ")
    priority = prompt.text("Enter priority (High/Medium/Low): ")
    assigned_to = prompt.number("Assign to user ID: ")

    task_id = state.service.add_task(
        description,
        category,
        due_date,
        assigned_to,
        priority,
        acting_user_id=state.acting_user_id,
    )
    return f"Task {task_id} added."


def action_view_tasks(state: AppState, prompt: Prompter) -> str:
    return render_task_table(state.service.view_tasks(state.acting_user_id))


def action_add_user(state: AppState, prompt: Prompter) -> str:
    name = prompt.text("Enter user name: ")
    role = Role.from_choice(prompt.number("Select role (1=Admin, 2=Member): "))
    user_id = state.service.add_user(name, role, acting_user_id=state.acting_user_id)
    return f"User {user_id} added."


def action_export(state: AppState, prompt: Prompter) -> str:
    path = state.settings.export_path
    export_to_calendar(state.service, path)
    return f"Tasks exported to {path}"


def action_update_task(state: AppState, prompt: Prompter) -> str:
    task_id = prompt.number("Enter task ID: ")
    keep = "(leave empty to keep)"
    description = prompt.optional_text(f"New description {keep}: ")
    raw_category = prompt.optional_number(f"New category 1=Work, 2=Personal, 3=Study, 4=Other {keep}: ")
    due_date = prompt.optional_text(f"New due date YYYY-MM-DD {keep}: ")
    priority = prompt.optional_text(f"New priority {keep}: ")
    assigned_to = prompt.optional_number(f"New assignee user ID {keep}: ")

    state.service.update_task(
        task_id,
        state.acting_user_id,
        description=description,
        category=Category.from_choice(raw_category) if raw_category is not None else None,
        due_date=due_date,
        assigned_to=assigned_to,
        priority=priority,
    )
    return f"Task {task_id} updated."


def action_delete_task(state: AppState, prompt: Prompter) -> str:
    task_id = prompt.number("Enter task ID to delete: ")
    state.service.delete_task(task_id, state.acting_user_id)
    return f"Task {task_id} deleted."


def action_complete_task(state: AppState, prompt: Prompter) -> str:
    task_id = prompt.number("Enter task ID to mark complete: ")
    state.service.mark_complete(task_id, state.acting_user_id)
    return f"Task {task_id} marked complete."


def action_list_users(state: AppState, prompt: Prompter) -> str:
    return render_user_table(state.service.list_users())


def build_registry(title: str = "Task Manager CLI") -> MenuRegistry:
    registry = MenuRegistry(title)
    registry.register(1, "Add Task", action_add_task)
    registry.register(2, "View Tasks", action_view_tasks)
    registry.register(3, "Add User", action_add_user)
    registry.register(4, "Export to iCalendar", action_export)
    registry.register(5, "Update Task", action_update_task)
    registry.register(6, "Delete Task", action_delete_task)
    registry.register(7, "Mark Task Complete", action_complete_task)
    registry.register(8, "List Users", action_list_users)
    return registry
