"""Command dispatch for `scriptkit <command> ...`.

Exit statuses:
    lock     0 acquired, 1 usage error or lock not acquired
    unlock   0 always, 1 usage error
    log      0 delivered, 1 usage error, 74 destination unwritable
    error    the parsed or defaulted status (1 on usage error)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from dotenv import find_dotenv

from scriptkit.cli.parser import COMMANDS, parse_lock_args, parse_log_args, usage_line
from scriptkit.core.config import ScriptConfig
from scriptkit.core.constants import EXIT_FAILURE, EXIT_IOERR, EXIT_OK, EXIT_USAGE
from scriptkit.core.exceptions import LockError, LogRouteError, UsageError
from scriptkit.core.locks import LockManager
from scriptkit.core.logging import setup_logging
from scriptkit.core.version import __version__
from scriptkit.router import LogRouter, split_exit_status

logger = logging.getLogger(__name__)


def _print_usage(command: str | None, error: UsageError) -> int:
    logger.debug("Usage error in %s: %s", command or "scriptkit", error)
    print(f"{usage_line(command)} ({error})", file=sys.stderr)
    return EXIT_USAGE


def _run_lock(command: str, argv: Sequence[str], manager: LockManager) -> int:
    try:
        options = parse_lock_args(command, argv)
    except UsageError as e:
        return _print_usage(command, e)

    if command == "unlock":
        manager.release(options.lockfile)
        return EXIT_OK

    try:
        manager.acquire(options.lockfile, options.timeout)
    except LockError as e:
        print(f"{command}: {e}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK


def _run_log(command: str, argv: Sequence[str], router: LogRouter) -> int:
    status = None
    if command == "error":
        status, rest = split_exit_status(argv)
        argv = [str(arg) for arg in rest]

    try:
        options, words = parse_log_args(command, argv)
        if command == "error":
            return router.error(*words, status=status, options=options)
        getattr(router, command)(*words, options=options)
    except UsageError as e:
        if e.command is None:
            print(f"{command}: {e}", file=sys.stderr)
            return EXIT_USAGE
        return _print_usage(command, e)
    except LogRouteError as e:
        print(f"{command}: {e}", file=sys.stderr)
        return status if status is not None else EXIT_IOERR
    return EXIT_OK


def main(
    argv: Sequence[str] | None = None,
    *,
    config: ScriptConfig | None = None,
    router: LogRouter | None = None,
    lock_manager: LockManager | None = None,
) -> int:
    """Run one scriptkit command and return its exit status."""
    argv = list(sys.argv[1:] if argv is None else argv)
    setup_logging()

    if argv and argv[0] in ("-V", "--version"):
        print(f"scriptkit {__version__}")
        return EXIT_OK
    if not argv or argv[0] not in COMMANDS:
        return _print_usage(None, UsageError(f"unknown command '{argv[0]}'" if argv else "missing command"))

    command, rest = argv[0], argv[1:]
    if config is None:
        config = ScriptConfig.from_env(dotenv_path=find_dotenv(usecwd=True) or None)

    if command in ("lock", "unlock"):
        return _run_lock(command, rest, lock_manager or LockManager(config))
    return _run_log(command, rest, router or LogRouter(config))


def cli() -> None:
    """Console-script entry point."""
    sys.exit(main())
