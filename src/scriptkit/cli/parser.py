"""Command-line argument parsing for the scriptkit commands.

Each command parses getopts-style: flags first, then the free-form
arguments. Option parsing stops at the first non-flag argument, so message
words may themselves start with a dash. Parse failures raise `UsageError`
instead of exiting, so callers decide the exit status.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from scriptkit.core.config import LockOptions, LogOptions
from scriptkit.core.exceptions import UsageError

PROG = "scriptkit"

LOG_COMMANDS = ("log", "error", "stdlog", "verbose", "debug")
COMMANDS = ("lock", "unlock", *LOG_COMMANDS)

_LOG_SYNOPSIS = "[-s] [-o logfile] [-t tag] [-f facility] [-p priority] [message...]"
SYNOPSIS: dict[str, str] = {
    "lock": "[-l lockfile] [-t timeout_seconds] [path]",
    "unlock": "[-l lockfile] [path]",
    "log": _LOG_SYNOPSIS,
    "error": f"[-status] {_LOG_SYNOPSIS}",
    "stdlog": _LOG_SYNOPSIS,
    "verbose": _LOG_SYNOPSIS,
    "debug": _LOG_SYNOPSIS,
}


def usage_line(command: str | None = None) -> str:
    """One-line usage message for a command, or for the whole tool."""
    if command in SYNOPSIS:
        return f"usage: {PROG} {command} {SYNOPSIS[command]}"
    return f"usage: {PROG} {{{','.join(COMMANDS)}}} [options] [args...]"


class CommandArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of printing and exiting."""

    def __init__(self, command: str, **kwargs):
        self.command = command
        kwargs.setdefault("prog", f"{PROG} {command}")
        kwargs.setdefault("add_help", False)
        kwargs.setdefault("allow_abbrev", False)
        super().__init__(**kwargs)

    def error(self, message: str):
        raise UsageError(message, command=self.command)

    def exit(self, status: int = 0, message: str | None = None):
        raise UsageError(message.strip() if message else f"exit {status}", command=self.command)


def _non_negative_int(value: str) -> int:
    """Argparse type for a timeout in whole seconds."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a whole number of seconds, got '{value}'") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {number}")
    return number


def _strip_separator(words: list[str]) -> list[str]:
    if words and words[0] == "--":
        return words[1:]
    return words


def build_parser(command: str) -> CommandArgumentParser:
    """Build the parser for one command."""
    if command not in COMMANDS:
        raise UsageError(f"unknown command '{command}'")

    parser = CommandArgumentParser(command)

    if command in ("lock", "unlock"):
        parser.add_argument("-l", dest="lockfile", metavar="lockfile", help="Lock file path")
        if command == "lock":
            parser.add_argument(
                "-t",
                dest="timeout",
                metavar="timeout_seconds",
                type=_non_negative_int,
                default=None,
                help="Keep retrying once per second for this many seconds",
            )
        parser.add_argument("path", nargs="?", default=None, help="Lock file path (when -l is not given)")
        return parser

    parser.add_argument("-s", dest="duplicate_to_stderr", action="store_true", help="Also write to standard error")
    parser.add_argument("-o", dest="logfile", metavar="logfile", help="Append to this file instead of syslog")
    parser.add_argument("-t", dest="tag", metavar="tag", help="Syslog tag (default: $TAG or program name)")
    parser.add_argument("-f", dest="facility", metavar="facility", help="Syslog facility (default: $FACILITY or user)")
    parser.add_argument("-p", dest="priority", metavar="priority", help="Syslog priority (default: $PRIORITY or notice)")
    parser.add_argument("message", nargs=argparse.REMAINDER, help="Message words; standard input when omitted")
    return parser


def parse_lock_args(command: str, argv: Sequence[str]) -> LockOptions:
    """Parse `lock`/`unlock` arguments. `-l` wins over the positional path."""
    ns = build_parser(command).parse_args(list(argv))
    return LockOptions(
        lockfile=ns.lockfile or ns.path,
        timeout=getattr(ns, "timeout", None),
    )


def parse_log_args(command: str, argv: Sequence[str]) -> tuple[LogOptions, list[str]]:
    """Parse log-family arguments into options and message words."""
    ns = build_parser(command).parse_args(list(argv))
    options = LogOptions(
        logfile=ns.logfile,
        tag=ns.tag,
        facility=ns.facility,
        priority=ns.priority,
        duplicate_to_stderr=ns.duplicate_to_stderr or None,
    )
    return options, _strip_separator(list(ns.message))
