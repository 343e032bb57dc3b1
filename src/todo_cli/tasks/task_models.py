# src/todo_cli/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class Priority(StrEnum):
    """
    Task priority.

    Stored in the database as its ordinal (low=0, medium=1, high=2).
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANKS[self]

    @classmethod
    def from_db(cls, raw: int | None) -> Priority:
        if raw is None:
            return cls.MEDIUM
        for p, rank in _PRIORITY_RANKS.items():
            if rank == raw:
                return p
        return cls.MEDIUM


_PRIORITY_RANKS: dict[Priority, int] = {
    Priority.LOW: 0,
    Priority.MEDIUM: 1,
    Priority.HIGH: 2,
}


@dataclass(slots=True)
class Task:
    id: int
    title: str
    description: str | None
    due_date: datetime | None
    priority: Priority
    completed: bool
    created_at: datetime
    updated_at: datetime

    def is_overdue(self, now: datetime) -> bool:
        """A pending task whose due date has already passed."""
        if self.completed or self.due_date is None:
            return False
        return now > self.due_date


@dataclass(frozen=True, slots=True)
class NewTask:
    """Validated fields for a task that is about to be inserted."""

    title: str
    description: str | None = None
    due_date: datetime | None = None
    priority: Priority = Priority.MEDIUM


@dataclass(frozen=True, slots=True)
class TaskChanges:
    """
    Validated partial update.

    None means "leave unchanged". Clearing an optional column is explicit
    (clear_description / clear_due_date).
    """

    title: str | None = None
    description: str | None = None
    clear_description: bool = False
    due_date: datetime | None = None
    clear_due_date: bool = False
    priority: Priority | None = None
    completed: bool | None = None

    def is_empty(self) -> bool:
        return (
            self.title is None
            and self.description is None
            and not self.clear_description
            and self.due_date is None
            and not self.clear_due_date
            and self.priority is None
            and self.completed is None
        )
