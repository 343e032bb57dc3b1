# tests/conftest.py

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

import pytest

from todo_cli.cli.parser import build_parser
from todo_cli.config import Settings
from todo_cli.core.state import AppState
from todo_cli.tasks.task_store import TaskStore

from .fakes import FixedClock

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """main() reconfigures the root logger; undo that after each test."""
    root = logging.getLogger()
    saved_level = root.level
    yield
    # Only plain handlers come from setup_logging; pytest installs its own subclasses.
    for h in list(root.handlers):
        if type(h) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(h)
            h.close()
    root.setLevel(saved_level)
    logging.captureWarnings(False)


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a per-test database, no file logging."""
    return Settings(
        app_name="todo",
        log_level="WARNING",
        db_path=tmp_path / "todo.db",
        log_dir=None,
    )


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture()
def store(settings: Settings) -> TaskStore:
    return TaskStore(settings.db_path)


@pytest.fixture()
def state(settings: Settings, store: TaskStore, clock: FixedClock) -> AppState:
    """
    AppState wired with a fixed clock.

    NOTE: We keep the real SQLite store here because its correctness is part of
    what we want to test.
    """
    return AppState(settings=settings, task_store=store, clock=clock)


@pytest.fixture()
def parse():
    parser = build_parser()
    return parser.parse_args
