# src/todo_cli/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterator
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..errors import NotFoundError, StorageError, ValidationError
from .task_models import Priority, Task, TaskChanges

logger = logging.getLogger(__name__)

_COLUMNS = "id, title, description, due_date, priority, completed, created_at, updated_at"
_EPOCH = datetime.fromtimestamp(0, UTC)


def _to_ts(dt: datetime | None) -> float | None:
    return dt.timestamp() if dt is not None else None


def _from_ts(value: float | str | None) -> datetime | None:
    """Read a stored moment: epoch seconds, or ISO-8601 text written by older versions."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            return datetime.fromtimestamp(float(value), UTC)
        except ValueError:
            pass
        try:
            dt = datetime.fromisoformat(value)
        except ValueError:
            raise StorageError(f"Unreadable timestamp in database: {value!r}") from None
        return dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt.astimezone(UTC)
    return datetime.fromtimestamp(float(value), UTC)


class TaskStore:
    """
    SQLite task store.

    The schema is simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Each method opens its own short-lived connection and commits before
    returning, so every mutation is durable once the call returns.
    """

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = Path(db_path).expanduser()
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create directory for {self._db_path}: {exc}") from exc
        self._ensure_schema()
        logger.debug("TaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ---- low-level helpers ----

    @contextlib.contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot open database {self._db_path}: {exc}") from exc
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            with contextlib.suppress(sqlite3.Error):
                conn.rollback()
            logger.debug("SQLite error on %s", self._db_path, exc_info=True)
            raise StorageError(f"Database error ({self._db_path}): {exc}") from exc
        except (OverflowError, UnicodeEncodeError) as exc:
            # sqlite3 refuses to bind ints beyond 64 bits and unencodable text.
            with contextlib.suppress(sqlite3.Error):
                conn.rollback()
            raise ValidationError(f"Value cannot be stored: {exc}") from exc
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    description TEXT,
                    due_date REAL,
                    priority INTEGER NOT NULL DEFAULT 1,
                    completed INTEGER NOT NULL DEFAULT 0,
                    created_at REAL NOT NULL,
                    updated_at REAL NOT NULL DEFAULT 0
                )
                """
            )

            # Migrations (safe): add missing columns.
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("description", "TEXT")
            add_col("due_date", "REAL")
            add_col("priority", "INTEGER NOT NULL DEFAULT 1")
            add_col("completed", "INTEGER NOT NULL DEFAULT 0")
            add_col("updated_at", "REAL NOT NULL DEFAULT 0")

            cur.execute(
                "CREATE INDEX IF NOT EXISTS idx_tasks_completed_priority "
                "ON tasks(completed, priority)"
            )

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        created_at = _from_ts(row["created_at"]) or _EPOCH
        # Rows migrated from files without updated_at carry 0 there.
        updated_at = _from_ts(row["updated_at"] or None) or created_at
        return Task(
            id=int(row["id"]),
            title=str(row["title"]),
            description=row["description"],
            due_date=_from_ts(row["due_date"]),
            priority=Priority.from_db(row["priority"]),
            completed=bool(row["completed"]),
            created_at=created_at,
            updated_at=updated_at,
        )

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._connect() as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)

    def add_task(
        self,
        *,
        title: str,
        description: str | None = None,
        due_date: datetime | None = None,
        priority: Priority = Priority.MEDIUM,
        completed: bool = False,
        now: datetime | None = None,
    ) -> int:
        if not title or not title.strip():
            raise ValidationError("Title must not be empty")

        now_ts = (now or datetime.now(UTC)).timestamp()

        with self._connect() as conn:
            cur = conn.execute(
                """
                INSERT INTO tasks(
                    title, description, due_date, priority, completed, created_at, updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    title,
                    description,
                    _to_ts(due_date),
                    priority.rank,
                    int(completed),
                    now_ts,
                    now_ts,
                ),
            )
            rowid = cur.lastrowid
            if rowid is None:
                raise StorageError("SQLite did not return lastrowid for tasks insert")
            task_id = int(rowid)

        logger.info(
            "Task added id=%s priority=%s due_date=%s",
            task_id,
            priority.value,
            due_date,
        )
        return task_id

    def list_tasks(
        self,
        *,
        completed: bool | None = None,
        priority: Priority | None = None,
    ) -> list[Task]:
        """
        Return tasks in id order, optionally filtered.

        completed=None means both pending and completed tasks.
        """
        where: list[str] = []
        params: list[Any] = []

        if completed is not None:
            where.append("completed = ?")
            params.append(int(completed))

        if priority is not None:
            where.append("priority = ?")
            params.append(priority.rank)

        sql = f"SELECT {_COLUMNS} FROM tasks"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY id ASC"

        with self._connect() as conn:
            rows = conn.execute(sql, params).fetchall()
        return [self._row_to_task(r) for r in rows]

    def get_task(self, task_id: int) -> Task:
        with self._connect() as conn:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM tasks WHERE id = ?", (int(task_id),)
            ).fetchone()
        if row is None:
            raise NotFoundError(task_id)
        return self._row_to_task(row)

    def update_task(
        self,
        task_id: int,
        changes: TaskChanges,
        now: datetime | None = None,
    ) -> None:
        fields: list[str] = []
        params: list[Any] = []

        if changes.title is not None:
            fields.append("title = ?")
            params.append(changes.title)

        if changes.clear_description:
            fields.append("description = NULL")
        elif changes.description is not None:
            fields.append("description = ?")
            params.append(changes.description)

        if changes.clear_due_date:
            fields.append("due_date = NULL")
        elif changes.due_date is not None:
            fields.append("due_date = ?")
            params.append(_to_ts(changes.due_date))

        if changes.priority is not None:
            fields.append("priority = ?")
            params.append(changes.priority.rank)

        if changes.completed is not None:
            fields.append("completed = ?")
            params.append(int(changes.completed))

        fields.append("updated_at = ?")
        params.append((now or datetime.now(UTC)).timestamp())
        params.append(int(task_id))

        sql = f"UPDATE tasks SET {', '.join(fields)} WHERE id = ?"

        with self._connect() as conn:
            cur = conn.execute(sql, params)
            if cur.rowcount == 0:
                raise NotFoundError(task_id)

        logger.info("Task updated id=%s", task_id)

    def complete_task(self, task_id: int, now: datetime | None = None) -> None:
        now_ts = (now or datetime.now(UTC)).timestamp()
        with self._connect() as conn:
            cur = conn.execute(
                "UPDATE tasks SET completed = 1, updated_at = ? WHERE id = ?",
                (now_ts, int(task_id)),
            )
            if cur.rowcount == 0:
                raise NotFoundError(task_id)

        logger.info("Task completed id=%s", task_id)

    def delete_task(self, task_id: int) -> None:
        with self._connect() as conn:
            cur = conn.execute("DELETE FROM tasks WHERE id = ?", (int(task_id),))
            if cur.rowcount == 0:
                raise NotFoundError(task_id)

        logger.info("Task deleted id=%s", task_id)
