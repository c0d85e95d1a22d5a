"""System logger sinks.

`SysLogHandlerSink` talks to the local syslog daemon through the standard
library's `SysLogHandler`, one handler per submission so each call carries
its own tag, facility and priority.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from logging.handlers import SysLogHandler
from typing import Protocol, TextIO

from scriptkit.core.constants import DEFAULT_SYSLOG_ADDRESS
from scriptkit.core.exceptions import LogRouteError, UsageError
from scriptkit.router.destinations import SyslogDestination


class SyslogSink(Protocol):
    """Anything that can deliver records to the system logger."""

    def send(self, destination: SyslogDestination, lines: Iterable[str]) -> None:
        """Deliver every line as one record. Raise LogRouteError on failure."""


def parse_syslog_address(address: str) -> str | tuple[str, int]:
    """Return a Unix socket path, or (host, port) for "host:port".

    Anything else is rejected rather than taken as a relative socket path.
    """
    if address.startswith("/"):
        return address
    host, sep, port = address.rpartition(":")
    if sep and host and port.isdigit():
        return (host, int(port))
    raise UsageError(
        f"invalid syslog address '{address}'",
        details="expected an absolute socket path or host:port",
    )


class _TaggedSysLogHandler(SysLogHandler):
    """SysLogHandler with a fixed priority name and a `tag: ` prefix."""

    def __init__(self, address: str | tuple[str, int], facility: str, priority: str, tag: str):
        super().__init__(address=address, facility=facility)
        self.ident = f"{tag}: "
        self._priority_name = priority

    def mapPriority(self, levelName: str) -> str:
        return self._priority_name

    def handleError(self, record: logging.LogRecord) -> None:
        error = sys.exc_info()[1]
        raise LogRouteError(
            "System logger rejected message",
            destination=f"{self.facility}.{self._priority_name}",
            details=str(error),
            original_error=error if isinstance(error, Exception) else None,
        ) from error


class SysLogHandlerSink:
    """Deliver records through `logging.handlers.SysLogHandler`.

    When the destination asks for it, each record is also echoed to
    standard error as `<tag>: <message>`, like `logger -s`.
    """

    def __init__(self, address: str = DEFAULT_SYSLOG_ADDRESS, stderr: TextIO | None = None):
        self.address = address
        self._stderr = stderr

    def send(self, destination: SyslogDestination, lines: Iterable[str]) -> None:
        try:
            handler = _TaggedSysLogHandler(
                parse_syslog_address(self.address),
                facility=destination.facility,
                priority=destination.priority,
                tag=destination.tag,
            )
        except OSError as e:
            raise LogRouteError(
                "Cannot connect to system logger",
                destination=self.address,
                details=str(e),
                original_error=e,
            ) from e

        try:
            for line in lines:
                handler.emit(logging.makeLogRecord({"msg": line, "args": None}))
                if destination.duplicate_to_stderr:
                    stream = self._stderr or sys.stderr
                    stream.write(f"{destination.tag}: {line}\n")
                    stream.flush()
        finally:
            handler.close()
