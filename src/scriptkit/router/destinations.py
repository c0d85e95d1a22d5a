"""Log destinations and the defaulting rules that produce them."""

from __future__ import annotations

from dataclasses import dataclass
from logging.handlers import SysLogHandler
from pathlib import Path

from scriptkit.core.config import LogOptions, ScriptConfig
from scriptkit.core.constants import DEFAULT_FACILITY, DEFAULT_PRIORITY
from scriptkit.core.exceptions import UsageError


@dataclass(frozen=True)
class FileDestination:
    """Append to a plain file, optionally mirroring to standard error."""

    path: Path
    duplicate_to_stderr: bool = False

    def describe(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class SyslogDestination:
    """Submit to the system logger with a tag and facility.priority."""

    tag: str
    facility: str
    priority: str
    duplicate_to_stderr: bool = False

    def describe(self) -> str:
        return f"syslog {self.facility}.{self.priority} [{self.tag}]"


LogDestination = FileDestination | SyslogDestination


def _validate_name(kind: str, value: str, known: dict[str, int]) -> str:
    name = value.strip().lower()
    if name not in known:
        raise UsageError(f"unknown {kind} name '{value}'", details=f"expected one of {', '.join(sorted(known))}")
    return name


def resolve_destination(options: LogOptions | None, config: ScriptConfig) -> LogDestination:
    """Resolve per-call options against the configuration.

    Shared by every log entry point. Order: explicit option, then
    configuration, then the hardcoded default (program name, "user", "notice").

    Raises:
        UsageError: facility or priority is not a known syslog name
    """
    options = options or LogOptions()
    duplicate = bool(options.duplicate_to_stderr)

    if options.logfile:
        return FileDestination(path=Path(options.logfile), duplicate_to_stderr=duplicate)

    facility = options.facility or config.facility or DEFAULT_FACILITY
    priority = options.priority or config.priority or DEFAULT_PRIORITY
    return SyslogDestination(
        tag=options.tag or config.tag or config.program_name,
        facility=_validate_name("facility", facility, SysLogHandler.facility_names),
        priority=_validate_name("priority", priority, SysLogHandler.priority_names),
        duplicate_to_stderr=duplicate,
    )
