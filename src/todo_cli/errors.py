# src/todo_cli/errors.py

"""
Error kinds surfaced to the user.

Each error carries the process exit code it maps to. Argument-parse failures are
not represented here: argparse exits with status 2 on its own.
"""

from __future__ import annotations

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_STORAGE = 3


class TodoError(Exception):
    """Base class for errors reported to the user as a readable message."""

    exit_code: int = EXIT_FAILURE


class ValidationError(TodoError):
    """Bad user input (title, date, priority, flag value)."""


class NotFoundError(TodoError):
    """An operation referenced a task id that does not exist."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task with ID {task_id} not found")
        self.task_id = task_id


class StorageError(TodoError):
    """The database file is unreadable, unwritable or corrupt."""

    exit_code = EXIT_STORAGE
