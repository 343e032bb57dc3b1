# src/todo_cli/config.py

"""Settings loaded from environment variables (+ optional .env).

- One Settings object for the whole app.
- Every value has a default; nothing is required to run.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TODO"

DEFAULT_DB_FILENAME = ".todo.db"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv() -> None:
    # Look for .env in the working directory, never override the real environment.
    load_dotenv(find_dotenv(usecwd=True), override=False)


_load_dotenv()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_path(name: str, default: Path | None) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def default_db_path() -> Path:
    return Path.home() / DEFAULT_DB_FILENAME


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths ----
    db_path: Path
    log_dir: Path | None

    # ---- Output ----
    # https://no-color.org: any non-empty NO_COLOR disables ANSI colors.
    no_color: bool = False

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo").strip() or "todo"
        log_level = _env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING"

        db_path = _env_path(_k("DB_PATH"), None) or default_db_path()
        log_dir = _env_path(_k("LOG_DIR"), None)
        no_color = _env("NO_COLOR") != ""

        return Settings(
            app_name=app_name,
            log_level=log_level,
            db_path=db_path,
            log_dir=log_dir,
            no_color=no_color,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
