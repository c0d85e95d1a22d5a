"""CLI module - Command-line interface components."""

from scriptkit.cli.main import cli, main
from scriptkit.cli.parser import build_parser, parse_lock_args, parse_log_args, usage_line

__all__ = [
    "build_parser",
    "cli",
    "main",
    "parse_lock_args",
    "parse_log_args",
    "usage_line",
]
