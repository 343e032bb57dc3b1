# src/todo_cli/tasks/task_format.py

"""
Text rendering for tasks.

Every function takes `color`; when it is true, priorities, the completed status
and overdue due dates are wrapped in ANSI codes from colorama. The plain text is
identical either way once the codes are stripped.
"""

from __future__ import annotations

from datetime import datetime, time

from colorama import Fore, Style

from .task_models import Priority, Task

RULE = "-" * 72

PRIORITY_COLORS: dict[Priority, str] = {
    Priority.LOW: Fore.BLUE,
    Priority.MEDIUM: Fore.YELLOW,
    Priority.HIGH: Fore.RED,
}
COMPLETED_COLOR = Fore.GREEN
OVERDUE_COLOR = Fore.RED


def paint(text: str, code: str, color: bool) -> str:
    if not color:
        return text
    return f"{code}{text}{Style.RESET_ALL}"


def due_date_text(task: Task) -> str:
    if task.due_date is None:
        return "No due date"
    if task.due_date.time() == time.min:
        return task.due_date.strftime("%Y-%m-%d")
    return task.due_date.strftime("%Y-%m-%d %H:%M UTC")


def status_text(task: Task) -> str:
    return "COMPLETED" if task.completed else "PENDING"


def _local(dt: datetime) -> str:
    return dt.astimezone().strftime("%Y-%m-%d %H:%M")


def _status(task: Task, color: bool) -> str:
    if task.completed:
        return paint(status_text(task), COMPLETED_COLOR, color)
    return status_text(task)


def _due(task: Task, now: datetime, color: bool) -> str:
    due = due_date_text(task)
    if task.is_overdue(now):
        return paint(f"{due} (overdue)", OVERDUE_COLOR, color)
    return due


def format_summary(task: Task, *, now: datetime, color: bool = False) -> str:
    priority = paint(task.priority.value.upper(), PRIORITY_COLORS[task.priority], color)
    return f"[{task.id}] {task.title} {priority} {_status(task, color)} {_due(task, now, color)}"


def format_detailed(task: Task, *, now: datetime, color: bool = False) -> str:
    lines = [
        f"Task #{task.id}: {task.title}",
        f"Priority: {paint(task.priority.value, PRIORITY_COLORS[task.priority], color)}",
        f"Status: {_status(task, color)}",
        f"Due: {_due(task, now, color)}",
    ]
    if task.description:
        lines.append(f"Description: {task.description}")
    lines.append(f"Created: {_local(task.created_at)}")
    lines.append(f"Updated: {_local(task.updated_at)}")
    return "\n".join(lines)


def format_task_list(tasks: list[Task], *, now: datetime, color: bool = False) -> str:
    if not tasks:
        return "No tasks found."

    lines = ["Your tasks:", RULE]
    lines.extend(format_summary(t, now=now, color=color) for t in tasks)
    lines.append(RULE)
    lines.append(f"Total: {len(tasks)} task{'s' if len(tasks) != 1 else ''}")
    return "\n".join(lines)
