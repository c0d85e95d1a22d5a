"""Configuration dataclasses for scriptkit.

Shell scripts traditionally steer these helpers through global variables
(`TAG`, `FACILITY`, `PRIORITY`, `verbose`, `DEBUG`). Here those values live in
an explicit `ScriptConfig` that is passed to the lock manager and the log
router. Every setting resolves in the same order:

    explicit call argument > injected ScriptConfig > hardcoded default
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from dotenv import dotenv_values

from scriptkit.core.constants import (
    DEFAULT_FACILITY,
    DEFAULT_LOCK_BACKEND,
    DEFAULT_PRIORITY,
    DEFAULT_SYSLOG_ADDRESS,
    ENV_DEBUG,
    ENV_FACILITY,
    ENV_LOCK_BACKEND,
    ENV_LOCKDIR,
    ENV_LOCKFILE,
    ENV_PRIORITY,
    ENV_PROGRAM_NAME,
    ENV_SYSLOG_ADDRESS,
    ENV_TAG,
    ENV_VERBOSE,
    FALSE_FLAG_VALUES,
    LOCK_FILE_SUFFIX,
    default_lock_dir,
)


def default_program_name() -> str:
    """Derive the program name from the invocation path."""
    name = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else ""
    return name or "scriptkit"


def _non_empty(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass
class ScriptConfig:
    """Injected defaults for the lock manager and the log router.

    Attributes:
        tag: Default syslog tag (falls back to program_name)
        facility: Default syslog facility (falls back to "user")
        priority: Default syslog priority (falls back to "notice")
        verbose: Raw value of the verbose flag; unset, empty or "0" means off
        debug: Raw value of the debug flag; unset or empty means off
        lockfile: Default lock file path
        lock_dir: Directory for per-program lock files
        program_name: Name used for the default tag and lock file stem
        lock_backend: Lock backend name ("file" or "memory")
        syslog_address: Unix socket path or "host:port" of the system logger
    """

    tag: str | None = None
    facility: str | None = None
    priority: str | None = None
    verbose: str | None = None
    debug: str | None = None
    lockfile: str | None = None
    lock_dir: str = field(default_factory=default_lock_dir)
    program_name: str = field(default_factory=default_program_name)
    lock_backend: str = DEFAULT_LOCK_BACKEND
    syslog_address: str = DEFAULT_SYSLOG_ADDRESS

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        dotenv_path: str | os.PathLike[str] | None = None,
    ) -> ScriptConfig:
        """Build configuration from environment variables.

        Args:
            environ: Mapping to read instead of os.environ
            dotenv_path: Optional .env file; real environment values win over it

        Returns:
            ScriptConfig with every field populated from the environment or defaults
        """
        values: dict[str, str] = {}
        if dotenv_path:
            values.update({k: v for k, v in dotenv_values(dotenv_path).items() if v is not None})
        values.update(os.environ if environ is None else environ)

        return cls(
            tag=_non_empty(values.get(ENV_TAG)),
            facility=_non_empty(values.get(ENV_FACILITY)),
            priority=_non_empty(values.get(ENV_PRIORITY)),
            verbose=values.get(ENV_VERBOSE),
            debug=values.get(ENV_DEBUG),
            lockfile=_non_empty(values.get(ENV_LOCKFILE)),
            lock_dir=_non_empty(values.get(ENV_LOCKDIR)) or default_lock_dir(),
            program_name=_non_empty(values.get(ENV_PROGRAM_NAME)) or default_program_name(),
            lock_backend=_non_empty(values.get(ENV_LOCK_BACKEND)) or DEFAULT_LOCK_BACKEND,
            syslog_address=_non_empty(values.get(ENV_SYSLOG_ADDRESS)) or DEFAULT_SYSLOG_ADDRESS,
        )

    @property
    def verbose_enabled(self) -> bool:
        if self.verbose is None:
            return False
        return self.verbose not in FALSE_FLAG_VALUES

    @property
    def debug_enabled(self) -> bool:
        return bool(self.debug)

    def default_lock_path(self) -> Path:
        """Return `<lock_dir>/<program_name>.lock`."""
        return Path(self.lock_dir) / f"{self.program_name}{LOCK_FILE_SUFFIX}"


@dataclass
class LockOptions:
    """Per-call lock options. `None` means "use the configured default"."""

    lockfile: str | None = None
    timeout: int | None = None


@dataclass
class LogOptions:
    """Per-call log options. `None` means "use the configured default".

    Attributes:
        logfile: Append to this file instead of sending to the system logger
        tag: Syslog tag
        facility: Syslog facility name
        priority: Syslog priority name
        duplicate_to_stderr: Also write the message to standard error
    """

    logfile: str | None = None
    tag: str | None = None
    facility: str | None = None
    priority: str | None = None
    duplicate_to_stderr: bool | None = None

    def with_overrides(self, **overrides: object) -> LogOptions:
        """Return a copy with the given fields forced, e.g. priority="err"."""
        return replace(self, **overrides)


def resolve_lock_path(path: str | os.PathLike[str] | None, config: ScriptConfig) -> Path:
    """Resolve a lock path: explicit argument, configured lockfile, then the per-program default."""
    if path is not None and str(path).strip():
        return Path(path)
    if config.lockfile:
        return Path(config.lockfile)
    return config.default_lock_path()
