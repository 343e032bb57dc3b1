# src/todo_cli/cli/commands.py

from __future__ import annotations

import logging
from argparse import Namespace
from collections.abc import Callable
from dataclasses import dataclass

from ..core.state import AppState
from ..errors import EXIT_FAILURE, EXIT_OK, TodoError
from ..tasks.task_format import format_detailed, format_task_list
from ..tasks.validation import (
    validate_new_task,
    validate_priority,
    validate_task_changes,
    validate_task_id,
)

CommandHandler = Callable[[AppState, Namespace], str]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    ok: bool
    text: str
    exit_code: int = EXIT_OK


class CommandRegistry:
    """Subcommand registry used by the entry point (add, list, show, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._aliases: dict[str, list[str]] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        self._aliases[key] = [a.lower() for a in aliases]
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def names(self) -> list[str]:
        return list(self._help)

    def help_text(self, name: str) -> str:
        return self._help.get(name.lower(), "")

    def aliases(self, name: str) -> list[str]:
        return list(self._aliases.get(name.lower(), []))

    def handle(self, state: AppState, name: str, args: Namespace) -> CommandResult:
        """
        Run one command.

        Never raises TodoError: failures come back as a CommandResult carrying the
        message and the exit code to use.
        """
        handler = self._handlers.get(name.lower())
        if not handler:
            return CommandResult(
                ok=False,
                text=f"Unknown command: {name}. Use --help to list available commands.",
                exit_code=EXIT_FAILURE,
            )

        try:
            text = handler(state, args)
        except TodoError as exc:
            logger.debug("Command %s failed: %s", name, exc, exc_info=True)
            return CommandResult(ok=False, text=str(exc), exit_code=exc.exit_code)

        return CommandResult(ok=True, text=text)


registry = CommandRegistry()


def cmd_add(state: AppState, args: Namespace) -> str:
    now = state.now()
    new_task = validate_new_task(
        title=args.title,
        description=args.description,
        due=args.due,
        priority=args.priority,
        now=now,
    )
    task_id = state.task_store.add_task(
        title=new_task.title,
        description=new_task.description,
        due_date=new_task.due_date,
        priority=new_task.priority,
        now=now,
    )
    return f"Task added with ID {task_id}."


def cmd_list(state: AppState, args: Namespace) -> str:
    """
    list              -> all tasks
    list --completed  -> completed tasks only
    list --pending    -> pending tasks only
    list --priority P -> tasks with priority P (combines with the above)
    """
    completed: bool | None = None
    if getattr(args, "completed", False):
        completed = True
    elif getattr(args, "pending", False):
        completed = False

    priority = validate_priority(getattr(args, "priority", None), default=None)
    tasks = state.task_store.list_tasks(completed=completed, priority=priority)
    return format_task_list(tasks, now=state.now(), color=state.color)


def cmd_complete(state: AppState, args: Namespace) -> str:
    task_id = validate_task_id(args.id)
    state.task_store.complete_task(task_id, now=state.now())
    return f"Task {task_id} marked as completed."


def cmd_delete(state: AppState, args: Namespace) -> str:
    task_id = validate_task_id(args.id)
    state.task_store.delete_task(task_id)
    return f"Task {task_id} deleted."


def cmd_update(state: AppState, args: Namespace) -> str:
    task_id = validate_task_id(args.id)
    now = state.now()
    changes = validate_task_changes(
        title=args.title,
        description=args.description,
        due=args.due,
        clear_due=getattr(args, "clear_due", False),
        priority=args.priority,
        completed=args.completed,
        now=now,
    )
    state.task_store.update_task(task_id, changes, now=now)
    return f"Task {task_id} updated."


def cmd_show(state: AppState, args: Namespace) -> str:
    task_id = validate_task_id(args.id)
    task = state.task_store.get_task(task_id)
    return format_detailed(task, now=state.now(), color=state.color)


registry.register("add", cmd_add, help_text="Add a new task.")
registry.register("list", cmd_list, help_text="List tasks.", aliases=["ls"])
registry.register(
    "complete", cmd_complete, help_text="Mark a task as completed.", aliases=["done"]
)
registry.register("delete", cmd_delete, help_text="Delete a task.", aliases=["rm"])
registry.register("update", cmd_update, help_text="Update fields of a task.")
registry.register("show", cmd_show, help_text="Show details of a task.")
