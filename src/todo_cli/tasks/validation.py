# src/todo_cli/tasks/validation.py

"""
Input validation for task mutations.

All functions are pure: they take raw user input (strings from the command line)
and return validated values or raise ValidationError. The current time is always
passed in explicitly so that "due date must be in the future" is deterministic.
"""

from __future__ import annotations

import re
from datetime import UTC, date, datetime, time

from ..errors import ValidationError
from .task_models import NewTask, Priority, TaskChanges

DATE_FORMAT = "%Y-%m-%d"

# SQLite INTEGER is a signed 64-bit value.
MAX_TASK_ID = 2**63 - 1

PRIORITY_CHOICES: tuple[str, ...] = tuple(p.value for p in Priority)

_TRUE_WORDS = {"1", "true", "yes", "y", "on"}
_FALSE_WORDS = {"0", "false", "no", "n", "off"}

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
_DATETIME_RE = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(?::\d{2}(?:\.\d{1,6})?)?(?:Z|[+-]\d{2}:\d{2})?",
    re.ASCII,
)


def _require_utf8(value: str, field: str) -> str:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise ValidationError(f"{field} must be valid UTF-8 text") from None
    return value


def validate_title(raw: str | None) -> str:
    title = (raw or "").strip()
    if not title:
        raise ValidationError("Title must not be empty")
    return _require_utf8(title, "Title")


def validate_description(raw: str | None) -> str | None:
    """Blank means "no description"; anything else is kept verbatim."""
    if raw is None or not raw.strip():
        return None
    return _require_utf8(raw, "Description")


def parse_due_date(raw: str) -> datetime:
    """
    Parse a due date.

    Accepts exactly YYYY-MM-DD (midnight UTC of that day) or an RFC 3339 style
    datetime YYYY-MM-DDTHH:MM[:SS[.ffffff]][Z|+HH:MM|-HH:MM]. Naive datetimes are
    taken as UTC. Always returns an aware UTC value.
    """
    text = (raw or "").strip()
    if not text:
        raise ValidationError("Due date must not be empty")

    invalid = ValidationError(
        f"Invalid due date {text!r}. Use YYYY-MM-DD or an RFC 3339 datetime"
    )
    try:
        if _DATE_RE.fullmatch(text):
            return _start_of_day(date.fromisoformat(text))
        if not _DATETIME_RE.fullmatch(text):
            raise invalid
        dt = datetime.fromisoformat(text)
        if dt.tzinfo is None:
            return dt.replace(tzinfo=UTC)
        return dt.astimezone(UTC)
    except (ValueError, OverflowError):
        # Out-of-range fields, or an offset that pushes the moment past year 9999.
        raise invalid from None


def validate_due_date(raw: str | None, *, now: datetime) -> datetime | None:
    if raw is None:
        return None
    due = parse_due_date(raw)
    if due <= now:
        raise ValidationError(
            f"Due date {due.strftime(DATE_FORMAT)} must be in the future"
        )
    return due


def validate_priority(
    raw: str | None, *, default: Priority | None = Priority.MEDIUM
) -> Priority | None:
    if raw is None:
        return default
    key = raw.strip().lower()
    try:
        return Priority(key)
    except ValueError:
        raise ValidationError(
            f"Invalid priority {raw!r}. Choose one of: {', '.join(PRIORITY_CHOICES)}"
        ) from None


def parse_bool(raw: str | None) -> bool | None:
    if raw is None:
        return None
    key = raw.strip().lower()
    if key in _TRUE_WORDS:
        return True
    if key in _FALSE_WORDS:
        return False
    raise ValidationError(f"Invalid boolean {raw!r}. Use true or false")


def validate_task_id(raw: int | str) -> int:
    try:
        task_id = int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid task id {raw!r}") from None
    if not 0 < task_id <= MAX_TASK_ID:
        raise ValidationError(f"Invalid task id {raw!r}")
    return task_id


def validate_new_task(
    *,
    title: str | None,
    description: str | None = None,
    due: str | None = None,
    priority: str | None = None,
    now: datetime,
) -> NewTask:
    return NewTask(
        title=validate_title(title),
        description=validate_description(description),
        due_date=validate_due_date(due, now=now),
        priority=validate_priority(priority) or Priority.MEDIUM,
    )


def validate_task_changes(
    *,
    title: str | None = None,
    description: str | None = None,
    due: str | None = None,
    clear_due: bool = False,
    priority: str | None = None,
    completed: str | None = None,
    now: datetime,
) -> TaskChanges:
    if due is not None and clear_due:
        raise ValidationError("Use either a new due date or --clear-due, not both")

    new_description = validate_description(description)
    changes = TaskChanges(
        title=validate_title(title) if title is not None else None,
        description=new_description,
        clear_description=description is not None and new_description is None,
        due_date=validate_due_date(due, now=now),
        clear_due_date=clear_due,
        priority=validate_priority(priority, default=None),
        completed=parse_bool(completed),
    )
    if changes.is_empty():
        raise ValidationError("Nothing to update")
    return changes


def _start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=UTC)
