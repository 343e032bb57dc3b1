# src/todo_cli/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root": it takes the settings once and wires the
concrete TaskStore and the system clock into AppState.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..core.state import AppState, utc_now
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings: Settings | None = None, color: bool = False) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings(). Raises StorageError when
    the database file cannot be opened.
    """
    if settings is None:
        settings = get_settings()

    logger.debug("Opening task database at %s", settings.db_path)
    return AppState(
        settings=settings,
        task_store=TaskStore(settings.db_path),
        clock=utc_now,
        color=color,
    )
