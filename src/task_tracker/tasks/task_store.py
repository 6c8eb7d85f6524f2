# src/task_tracker/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from pathlib import Path
from typing import Any

from ..core.errors import StoreError
from ..core.models import Category, Role, Task, User

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite store for tasks and users.

    The schema is intentionally simple and migration-safe:
    - create tables if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread-safety:
    - each method opens its own SQLite connection
    - every write commits immediately

    Any sqlite3.Error is re-raised as StoreError.
    """

    def __init__(self, db_path: str | Path = "tasks.db") -> None:
        self._db_path = Path(db_path)
        self.initialize()
        logger.info(
            "TaskStore ready db=%s tasks=%s users=%s",
            self._db_path,
            self.count_tasks(),
            self.count_users(),
        )

    @property
    def db_path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        except sqlite3.Error as e:
            raise StoreError(f"cannot open database {self._db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    @contextlib.contextmanager
    def _connection(self):
        conn = self._get_conn()
        try:
            yield conn
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        finally:
            conn.close()

    def initialize(self) -> None:
        """Create the tasks/users tables if absent. Raises StoreError if the file cannot be opened."""
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreError(f"cannot create directory for {self._db_path}: {e}") from e

        with self._connection() as conn:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    description TEXT NOT NULL,
                    completed INTEGER NOT NULL DEFAULT 0,
                    category TEXT NOT NULL DEFAULT 'Other',
                    due_date TEXT NOT NULL,
                    assigned_to INTEGER NOT NULL,
                    priority TEXT NOT NULL DEFAULT ''
                )
                """
            )
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    role TEXT NOT NULL DEFAULT 'Member'
                )
                """
            )

            def add_col(table: str, name: str, decl: str) -> None:
                cur.execute(f"PRAGMA table_info({table})")
                cols = {row["name"] for row in cur.fetchall()}
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE {table} ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s.%s", table, name)

            # Databases written by older builds may lack these.
            add_col("tasks", "completed", "INTEGER NOT NULL DEFAULT 0")
            add_col("tasks", "category", "TEXT NOT NULL DEFAULT 'Other'")
            add_col("tasks", "priority", "TEXT NOT NULL DEFAULT ''")
            add_col("users", "role", "TEXT NOT NULL DEFAULT 'Member'")

            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_due ON tasks(completed, due_date)")
            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_assigned ON tasks(assigned_to)")

            conn.commit()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            description=str(row["description"] or ""),
            completed=bool(row["completed"]),
            category=Category.from_db(row["category"]),
            due_date=str(row["due_date"] or ""),
            assigned_to=int(row["assigned_to"] or 0),
            priority=str(row["priority"] or ""),
        )

    @staticmethod
    def _row_to_user(row: sqlite3.Row) -> User:
        return User(
            id=int(row["id"]),
            name=str(row["name"] or ""),
            role=Role.from_db(row["role"]),
        )

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._connection() as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)

    def count_users(self) -> int:
        with self._connection() as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM users").fetchone()
            return int(n)

    def insert_user(self, name: str, role: Role) -> int:
        with self._connection() as conn:
            cur = conn.execute(
                "INSERT INTO users (name, role) VALUES (?, ?)",
                (name, Role(role).value),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise StoreError("SQLite did not return lastrowid for users insert")
            logger.debug("User inserted id=%s role=%s", rowid, role)
            return int(rowid)

    def insert_task(
        self,
        *,
        description: str,
        category: Category,
        due_date: str,
        assigned_to: int,
        priority: str,
        completed: bool = False,
    ) -> int:
        with self._connection() as conn:
            cur = conn.execute(
                """
                INSERT INTO tasks (description, completed, category, due_date, assigned_to, priority)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    description,
                    1 if completed else 0,
                    Category(category).value,
                    due_date,
                    int(assigned_to),
                    priority,
                ),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise StoreError("SQLite did not return lastrowid for tasks insert")
            logger.debug(
                "Task inserted id=%s category=%s due=%s assigned_to=%s",
                rowid,
                category,
                due_date,
                assigned_to,
            )
            return int(rowid)

    def list_tasks(self) -> list[Task]:
        """Full snapshot in insertion order."""
        with self._connection() as conn:
            rows = conn.execute("SELECT * FROM tasks ORDER BY id ASC").fetchall()
            return [self._row_to_task(r) for r in rows]

    def list_users(self) -> list[User]:
        with self._connection() as conn:
            rows = conn.execute("SELECT * FROM users ORDER BY id ASC").fetchall()
            return [self._row_to_user(r) for r in rows]

    def get_task(self, task_id: int) -> Task | None:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (int(task_id),)).fetchone()
            return self._row_to_task(row) if row else None

    def get_user(self, user_id: int) -> User | None:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (int(user_id),)).fetchone()
            return self._row_to_user(row) if row else None

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
    ) -> bool:
        """Update the given columns. Returns False if no row has this id."""
        fields: list[str] = []
        params: list[Any] = []

        if description is not None:
            fields.append("description = ?")
            params.append(description)

        if category is not None:
            fields.append("category = ?")
            params.append(Category(category).value)

        if due_date is not None:
            fields.append("due_date = ?")
            params.append(due_date)

        if assigned_to is not None:
            fields.append("assigned_to = ?")
            params.append(int(assigned_to))

        if priority is not None:
            fields.append("priority = ?")
            params.append(priority)

        if completed is not None:
            fields.append("completed = ?")
            params.append(1 if completed else 0)

        if not fields:
            return self.get_task(task_id) is not None

        params.append(int(task_id))
        sql = f"UPDATE tasks SET {', '.join(fields)} WHERE id = ?"

        with self._connection() as conn:
            cur = conn.execute(sql, params)
            conn.commit()
            return cur.rowcount == 1

    def delete_task(self, task_id: int) -> bool:
        with self._connection() as conn:
            cur = conn.execute("DELETE FROM tasks WHERE id = ?", (int(task_id),))
            conn.commit()
            return cur.rowcount == 1
