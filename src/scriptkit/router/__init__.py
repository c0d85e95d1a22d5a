"""Log routing to files or the system logger, with optional stderr duplication."""

from scriptkit.router.destinations import (
    FileDestination,
    LogDestination,
    SyslogDestination,
    resolve_destination,
)
from scriptkit.router.message import LogMessage
from scriptkit.router.router import LogRouter, split_exit_status
from scriptkit.router.sinks import SysLogHandlerSink, SyslogSink, parse_syslog_address

__all__ = [
    "FileDestination",
    "LogDestination",
    "LogMessage",
    "LogRouter",
    "SysLogHandlerSink",
    "SyslogDestination",
    "SyslogSink",
    "parse_syslog_address",
    "resolve_destination",
    "split_exit_status",
]
