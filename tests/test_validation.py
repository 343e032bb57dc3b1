# tests/test_validation.py

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from todo_cli.errors import ValidationError
from todo_cli.tasks.task_models import Priority
from todo_cli.tasks.validation import (
    MAX_TASK_ID,
    parse_bool,
    parse_due_date,
    validate_description,
    validate_due_date,
    validate_new_task,
    validate_priority,
    validate_task_changes,
    validate_task_id,
    validate_title,
)

from .conftest import NOW


def test_title_is_trimmed() -> None:
    assert validate_title("  Buy groceries \n") == "Buy groceries"


@pytest.mark.parametrize("raw", ["", "   ", "\t\n", None])
def test_empty_title_is_rejected(raw) -> None:
    with pytest.raises(ValidationError, match="Title must not be empty"):
        validate_title(raw)


def test_date_only_means_midnight_utc() -> None:
    assert parse_due_date("2999-01-01") == datetime(2999, 1, 1, tzinfo=UTC)


def test_rfc3339_datetime_is_converted_to_utc() -> None:
    assert parse_due_date("2027-03-01T10:30:00+02:00") == datetime(2027, 3, 1, 8, 30, tzinfo=UTC)
    assert parse_due_date("2027-03-01T10:30:00Z") == datetime(2027, 3, 1, 10, 30, tzinfo=UTC)


def test_naive_datetime_is_taken_as_utc() -> None:
    assert parse_due_date("2027-03-01T10:30") == datetime(2027, 3, 1, 10, 30, tzinfo=UTC)


def test_fractional_seconds_are_accepted() -> None:
    assert parse_due_date("2027-03-01T10:30:00.250Z") == datetime(
        2027, 3, 1, 10, 30, 0, 250000, tzinfo=UTC
    )


@pytest.mark.parametrize("raw", ["9999-12-31T23:00:00-05:00", "0001-01-01T00:30:00+01:00"])
def test_due_date_outside_datetime_range_is_rejected(raw: str) -> None:
    with pytest.raises(ValidationError, match="Invalid due date"):
        parse_due_date(raw)


@pytest.mark.parametrize(
    "raw",
    [
        "tomorrow",
        "2027-02-30",
        "01/02/2027",
        "",
        "2027-13-01",
        "29990101",
        "2999-1-1",
        "2999-01-01T1:00",
        "2999-01-01 10:00",
        "2999-01-01T10:00+0200",
        "\uff12\uff10\uff12\uff17-01-01",
    ],
)
def test_malformed_due_date_is_rejected(raw: str) -> None:
    with pytest.raises(ValidationError):
        parse_due_date(raw)


def test_due_date_in_future_is_accepted() -> None:
    assert validate_due_date("2026-10-19", now=NOW) == datetime(2026, 10, 19, tzinfo=UTC)


def test_due_date_none_passes_through() -> None:
    assert validate_due_date(None, now=NOW) is None


@pytest.mark.parametrize("raw", ["2026-10-18", "2020-01-01", "2026-10-18T12:00:00Z"])
def test_due_date_not_after_now_is_rejected(raw: str) -> None:
    # NOW is 2026-10-18 12:00 UTC; the last case is exactly equal to it.
    with pytest.raises(ValidationError, match="must be in the future"):
        validate_due_date(raw, now=NOW)


def test_due_date_check_uses_the_given_moment() -> None:
    earlier = datetime(2026, 10, 17, 23, 59, tzinfo=UTC)
    assert validate_due_date("2026-10-18", now=earlier) is not None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("low", Priority.LOW), ("Medium", Priority.MEDIUM), (" HIGH ", Priority.HIGH)],
)
def test_priority_is_case_insensitive(raw: str, expected: Priority) -> None:
    assert validate_priority(raw) is expected


def test_priority_defaults() -> None:
    assert validate_priority(None) is Priority.MEDIUM
    assert validate_priority(None, default=None) is None


@pytest.mark.parametrize("raw", ["urgent", "", "2"])
def test_unknown_priority_is_rejected(raw: str) -> None:
    with pytest.raises(ValidationError, match="Invalid priority"):
        validate_priority(raw)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("true", True), ("YES", True), ("1", True), ("false", False), ("off", False), (None, None)],
)
def test_parse_bool(raw, expected) -> None:
    assert parse_bool(raw) is expected


def test_parse_bool_rejects_garbage() -> None:
    with pytest.raises(ValidationError):
        parse_bool("maybe")


@pytest.mark.parametrize("raw", [0, -3, "abc", 2**63, "99999999999999999999"])
def test_invalid_task_id(raw) -> None:
    with pytest.raises(ValidationError, match="Invalid task id"):
        validate_task_id(raw)


def test_largest_sqlite_id_is_accepted() -> None:
    assert validate_task_id(str(MAX_TASK_ID)) == MAX_TASK_ID


def test_new_task_defaults() -> None:
    new_task = validate_new_task(title=" Call mom ", now=NOW)
    assert new_task.title == "Call mom"
    assert new_task.description is None
    assert new_task.due_date is None
    assert new_task.priority is Priority.MEDIUM


def test_new_task_blank_description_is_none() -> None:
    assert validate_new_task(title="t", description="   ", now=NOW).description is None


def test_description_is_kept_verbatim() -> None:
    raw = "  indented\n  second line  "
    assert validate_description(raw) == raw
    assert validate_new_task(title="t", description=raw, now=NOW).description == raw


def test_text_that_is_not_utf8_is_rejected() -> None:
    with pytest.raises(ValidationError, match="Title must be valid UTF-8"):
        validate_title("bad\udcff")
    with pytest.raises(ValidationError, match="Description must be valid UTF-8"):
        validate_description("bad\udcff")


def test_changes_require_at_least_one_field() -> None:
    with pytest.raises(ValidationError, match="Nothing to update"):
        validate_task_changes(now=NOW)


def test_changes_empty_description_clears_it() -> None:
    changes = validate_task_changes(description="", now=NOW)
    assert changes.clear_description is True
    assert changes.description is None


def test_changes_reject_due_and_clear_due_together() -> None:
    with pytest.raises(ValidationError):
        validate_task_changes(due="2999-01-01", clear_due=True, now=NOW)


def test_changes_validate_each_field() -> None:
    changes = validate_task_changes(
        title=" New ", due="2999-01-01", priority="low", completed="yes", now=NOW
    )
    assert changes.title == "New"
    assert changes.due_date == datetime(2999, 1, 1, tzinfo=UTC)
    assert changes.priority is Priority.LOW
    assert changes.completed is True
    assert changes.clear_due_date is False


def test_changes_reject_blank_title() -> None:
    with pytest.raises(ValidationError, match="Title must not be empty"):
        validate_task_changes(title="  ", now=NOW)


def test_changes_reject_past_due_date() -> None:
    with pytest.raises(ValidationError, match="must be in the future"):
        validate_task_changes(due="2000-01-01", now=NOW)
