# src/todo_cli/cli/main.py

"""
CLI entrypoint.

Parses arguments, initializes logging, builds AppState, runs exactly one command
and maps the outcome to a process exit code.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from colorama import just_fix_windows_console

from .. import __version__
from ..config import Settings, get_settings
from ..core.state import AppState
from ..errors import EXIT_OK, StorageError
from ..logging_setup import level_from_name, setup_logging
from .bootstrap import create_initial_state
from .commands import registry
from .parser import build_parser

logger = logging.getLogger(__name__)


def _console_level(settings: Settings, verbose: int) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return level_from_name(settings.log_level)


def use_color(settings: Settings, *, no_color_flag: bool = False) -> bool:
    """Colors only for an interactive stdout, unless turned off by flag or NO_COLOR."""
    if no_color_flag or settings.no_color:
        return False
    return sys.stdout is not None and sys.stdout.isatty()


def main(
    argv: Sequence[str] | None = None,
    *,
    settings: Settings | None = None,
    state: AppState | None = None,
) -> int:
    """
    Run one invocation and return its exit code.

    Argument errors exit through argparse (usage on stderr, status 2).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if settings is None:
        settings = state.settings if state is not None else get_settings()

    setup_logging(
        log_dir=settings.log_dir,
        console_level=_console_level(settings, args.verbose),
    )
    logger.info("Starting %s %s...", settings.app_name, __version__)
    logger.debug("Running command=%s", args.command)

    if state is None:
        try:
            state = create_initial_state(
                settings=settings,
                color=use_color(settings, no_color_flag=args.no_color),
            )
        except StorageError as exc:
            logger.debug("Cannot open task database", exc_info=True)
            print(f"error: {exc}", file=sys.stderr)
            return exc.exit_code

    result = registry.handle(state, args.command, args)
    if result.ok:
        print(result.text)
        return EXIT_OK

    print(f"error: {result.text}", file=sys.stderr)
    return result.exit_code


def run() -> None:
    # Lets ANSI codes render on legacy Windows consoles; a no-op elsewhere.
    just_fix_windows_console()
    sys.exit(main())


if __name__ == "__main__":
    run()
