"""Function-style helpers for scripts that want the shell-library feel.

Each call builds its collaborators from the given config, or from the
environment when none is passed:

    from scriptkit import lock, unlock, log, error

    lock(timeout=10)
    log("starting nightly sync")
    ...
    unlock()
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import IO

from scriptkit.core.config import LogOptions, ScriptConfig
from scriptkit.core.locks import LockManager
from scriptkit.router import LogRouter


def lock(
    path: str | os.PathLike[str] | None = None,
    timeout: int | None = None,
    *,
    config: ScriptConfig | None = None,
) -> Path:
    """Acquire a lock file. See LockManager.acquire."""
    return LockManager(config).acquire(path, timeout)


def unlock(path: str | os.PathLike[str] | None = None, *, config: ScriptConfig | None = None) -> Path:
    """Release a lock file. See LockManager.release."""
    return LockManager(config).release(path)


def log(
    *words: object,
    options: LogOptions | None = None,
    stdin: IO | None = None,
    config: ScriptConfig | None = None,
) -> None:
    LogRouter(config).log(*words, options=options, stdin=stdin)


def error(
    *args: object,
    options: LogOptions | None = None,
    stdin: IO | None = None,
    config: ScriptConfig | None = None,
) -> int:
    """Log at err priority and return the exit status, e.g. `sys.exit(error(-2, "bad input"))`."""
    return LogRouter(config).error(*args, options=options, stdin=stdin)


def stdlog(
    *words: object,
    options: LogOptions | None = None,
    stdin: IO | None = None,
    config: ScriptConfig | None = None,
) -> None:
    LogRouter(config).stdlog(*words, options=options, stdin=stdin)


def verbose(
    *words: object,
    options: LogOptions | None = None,
    stdin: IO | None = None,
    config: ScriptConfig | None = None,
) -> None:
    LogRouter(config).verbose(*words, options=options, stdin=stdin)


def debug(
    *words: object,
    options: LogOptions | None = None,
    stdin: IO | None = None,
    config: ScriptConfig | None = None,
) -> None:
    LogRouter(config).debug(*words, options=options, stdin=stdin)
