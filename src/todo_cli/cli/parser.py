# src/todo_cli/cli/parser.py

"""
Argument parser for the `todo` command.

Subcommand names, aliases and help strings come from the command registry so the
parser and the dispatcher never drift apart.
"""

from __future__ import annotations

import argparse
from collections.abc import Callable

from .. import __version__
from ..tasks.validation import PRIORITY_CHOICES
from .commands import CommandRegistry, registry as default_registry

PRIORITY_METAVAR = "{" + ",".join(PRIORITY_CHOICES) + "}"


def _subparser(
    subparsers: argparse._SubParsersAction,
    reg: CommandRegistry,
    name: str,
) -> argparse.ArgumentParser:
    help_text = reg.help_text(name)
    sp = subparsers.add_parser(
        name,
        aliases=reg.aliases(name),
        help=help_text,
        description=help_text,
    )
    # Aliases resolve to the canonical name for dispatch.
    sp.set_defaults(command=name)
    return sp


def _add_args(sp: argparse.ArgumentParser) -> None:
    sp.add_argument("title", help="Task title.")
    sp.add_argument("--description", help="Task description.")
    sp.add_argument("-d", "--due", metavar="YYYY-MM-DD", help="Due date (must be in the future).")
    sp.add_argument("-p", "--priority", metavar=PRIORITY_METAVAR, help="Priority (default: medium).")


def _list_args(sp: argparse.ArgumentParser) -> None:
    state_group = sp.add_mutually_exclusive_group()
    state_group.add_argument("-c", "--completed", action="store_true", help="Only completed tasks.")
    state_group.add_argument("--pending", action="store_true", help="Only pending tasks.")
    sp.add_argument("-p", "--priority", metavar=PRIORITY_METAVAR, help="Filter by priority.")


def _id_arg(sp: argparse.ArgumentParser) -> None:
    sp.add_argument("id", type=int, help="Task ID.")


def _update_args(sp: argparse.ArgumentParser) -> None:
    _id_arg(sp)
    sp.add_argument("-t", "--title", help="New title.")
    sp.add_argument("--description", help='New description ("" clears it).')
    due_group = sp.add_mutually_exclusive_group()
    due_group.add_argument("-d", "--due", metavar="YYYY-MM-DD", help="New due date.")
    due_group.add_argument("--clear-due", action="store_true", help="Remove the due date.")
    sp.add_argument("-p", "--priority", metavar=PRIORITY_METAVAR, help="New priority.")
    sp.add_argument("--completed", metavar="BOOL", help="Set completion state (true/false).")


# Positional/optional arguments per registered command; commands not listed take none.
COMMAND_ARGUMENTS: dict[str, Callable[[argparse.ArgumentParser], None]] = {
    "add": _add_args,
    "list": _list_args,
    "complete": _id_arg,
    "delete": _id_arg,
    "show": _id_arg,
    "update": _update_args,
}


def build_parser(reg: CommandRegistry | None = None, prog: str = "todo") -> argparse.ArgumentParser:
    reg = reg or default_registry

    parser = argparse.ArgumentParser(
        prog=prog,
        description="A simple todo CLI tool with SQLite storage.",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Show more log output on stderr (-v info, -vv debug).",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Plain output even on a terminal (also set by the NO_COLOR variable).",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>", required=True)

    for name in reg.names():
        sp = _subparser(subparsers, reg, name)
        configure = COMMAND_ARGUMENTS.get(name)
        if configure is not None:
            configure(sp)

    return parser
