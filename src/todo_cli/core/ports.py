# src/todo_cli/core/ports.py

"""
Ports (interfaces) used by the command layer.

Commands depend on Protocols instead of concrete implementations, so tests can
swap in a fake store or a fixed clock.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from ..tasks.task_models import Priority, Task, TaskChanges

Clock = Callable[[], datetime]
# Returns the current moment as an aware UTC datetime.


class TaskRepo(Protocol):
    def add_task(
            self,
            *,
            title: str,
            description: str | None = None,
            due_date: datetime | None = None,
            priority: Priority = Priority.MEDIUM,
            completed: bool = False,
            now: datetime | None = None,
    ) -> int: ...

    def list_tasks(
            self,
            *,
            completed: bool | None = None,
            priority: Priority | None = None,
    ) -> list[Task]: ...

    def get_task(self, task_id: int) -> Task: ...
    def update_task(self, task_id: int, changes: TaskChanges, now: datetime | None = None) -> None: ...
    def complete_task(self, task_id: int, now: datetime | None = None) -> None: ...
    def delete_task(self, task_id: int) -> None: ...
    def count_tasks(self) -> int: ...
