# src/todo_cli/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from ..config import Settings
from .ports import Clock, TaskRepo


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Settings

    task_store: TaskRepo
    clock: Clock = field(default=utc_now)
    # ANSI colors in list/show output; the entry point enables it for terminals.
    color: bool = False

    def now(self) -> datetime:
        return self.clock()
