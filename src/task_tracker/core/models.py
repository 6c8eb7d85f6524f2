# src/task_tracker/core/models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Category(StrEnum):
    """
    Task category.

    Stored as its text value. Unknown values read back as OTHER.
    """

    WORK = "Work"
    PERSONAL = "Personal"
    STUDY = "Study"
    OTHER = "Other"

    @classmethod
    def from_db(cls, raw: str | None) -> Category:
        if not raw:
            return cls.OTHER
        try:
            return cls(raw)
        except ValueError:
            return cls.OTHER

    @classmethod
    def from_choice(cls, choice: int) -> Category:
        """Menu numbering: 1=Work, 2=Personal, 3=Study, anything else=Other."""
        return {1: cls.WORK, 2: cls.PERSONAL, 3: cls.STUDY}.get(choice, cls.OTHER)


class Role(StrEnum):
    ADMIN = "Admin"
    MEMBER = "Member"

    @classmethod
    def from_db(cls, raw: str | None) -> Role:
        # Only an exact "Admin" grants admin rights.
        return cls.ADMIN if raw == cls.ADMIN.value else cls.MEMBER

    @classmethod
    def from_choice(cls, choice: int) -> Role:
        return cls.ADMIN if choice == 1 else cls.MEMBER


@dataclass(slots=True, frozen=True)
class User:
    id: int
    name: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


@dataclass(slots=True, frozen=True)
class Task:
    id: int
    description: str
    completed: bool
    category: Category
    due_date: str  # YYYY-MM-DD
    assigned_to: int  # User.id
    priority: str


@dataclass(slots=True, frozen=True)
class TaskView:
    """A visible task plus its resolved assignee name, ready for rendering."""

    task: Task
    assignee_name: str
