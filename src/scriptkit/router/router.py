"""Log router: format a message and deliver it to a file or the system logger.

Entry points mirror the shell helpers scripts are used to:

- `log`     route with the given options
- `error`   log at `err`, echo to stderr, return an exit status
- `stdlog`  log and always echo to stderr
- `verbose` echo to stderr only when the verbose flag is on
- `debug`   log at `debug`, only when the debug flag is on
"""

from __future__ import annotations

import logging
import re
import sys
from collections.abc import Sequence
from typing import IO, TextIO

from scriptkit.core.config import LogOptions, ScriptConfig
from scriptkit.core.constants import DEBUG_PRIORITY, DEFAULT_ERROR_STATUS, ERROR_PRIORITY
from scriptkit.core.exceptions import LogRouteError
from scriptkit.router.destinations import (
    FileDestination,
    LogDestination,
    SyslogDestination,
    resolve_destination,
)
from scriptkit.router.message import LogMessage
from scriptkit.router.sinks import SysLogHandlerSink, SyslogSink

_EXIT_STATUS_PATTERN = re.compile(r"-(\d+)")


def split_exit_status(args: Sequence[object]) -> tuple[int, list[object]]:
    """Pull a leading `-N` token off `args`.

    Returns the status (default 1) and the remaining arguments. A leading
    token that is not exactly a dash followed by digits stays in the message.
    """
    if args:
        match = _EXIT_STATUS_PATTERN.fullmatch(str(args[0]))
        if match:
            return int(match.group(1)), list(args[1:])
    return DEFAULT_ERROR_STATUS, list(args)


class LogRouter:
    """Route log messages according to per-call options and injected config."""

    def __init__(
        self,
        config: ScriptConfig | None = None,
        *,
        sink: SyslogSink | None = None,
        stderr: TextIO | None = None,
        stdin: IO | None = None,
        logger: logging.Logger | None = None,
    ):
        self.config = config or ScriptConfig.from_env()
        self.logger = logger or logging.getLogger(__name__)
        self._stderr = stderr
        self._stdin = stdin
        self.sink = sink or SysLogHandlerSink(address=self.config.syslog_address, stderr=stderr)

    def route(self, destination: LogDestination, message: LogMessage) -> None:
        """Deliver `message` to `destination`.

        Raises:
            LogRouteError: the file cannot be opened or written, or the
                system logger cannot be reached
            UsageError: the configured syslog address is malformed
        """
        self.logger.debug("Routing %s message to %s", "stdin" if message.from_stream else "argument",
                          destination.describe())
        if isinstance(destination, FileDestination):
            self._append_to_file(destination, message)
        elif isinstance(destination, SyslogDestination):
            self.sink.send(destination, message.iter_lines())
        else:
            raise TypeError(f"Unsupported log destination: {destination!r}")

    def log(self, *words: object, options: LogOptions | None = None, stdin: IO | None = None) -> None:
        """Log `words` joined by spaces, or standard input when no words are given."""
        destination = resolve_destination(options, self.config)
        message = LogMessage.from_words(words, stdin=stdin if stdin is not None else self._stdin)
        self.route(destination, message)

    def error(
        self,
        *args: object,
        status: int | None = None,
        options: LogOptions | None = None,
        stdin: IO | None = None,
    ) -> int:
        """Log at `err` priority with stderr echo and return an exit status.

        The status comes from `status` when given, else from a leading `-N`
        argument, else defaults to 1. The process is not terminated.
        """
        if status is None:
            status, words = split_exit_status(args)
        else:
            words = list(args)
        forced = (options or LogOptions()).with_overrides(priority=ERROR_PRIORITY, duplicate_to_stderr=True)
        self.log(*words, options=forced, stdin=stdin)
        return status

    def stdlog(self, *words: object, options: LogOptions | None = None, stdin: IO | None = None) -> None:
        """Log and always echo to standard error."""
        forced = (options or LogOptions()).with_overrides(duplicate_to_stderr=True)
        self.log(*words, options=forced, stdin=stdin)

    def verbose(self, *words: object, options: LogOptions | None = None, stdin: IO | None = None) -> None:
        """Like `stdlog` when the verbose flag is on, otherwise a plain `log`."""
        if self.config.verbose_enabled:
            self.stdlog(*words, options=options, stdin=stdin)
        else:
            self.log(*words, options=options, stdin=stdin)

    def debug(self, *words: object, options: LogOptions | None = None, stdin: IO | None = None) -> None:
        """Log at `debug` priority when the debug flag is set; otherwise do nothing."""
        if not self.config.debug_enabled:
            return
        forced = (options or LogOptions()).with_overrides(priority=DEBUG_PRIORITY)
        self.log(*words, options=forced, stdin=stdin)

    def _append_to_file(self, destination: FileDestination, message: LogMessage) -> None:
        try:
            log_file = open(destination.path, "ab")
        except OSError as e:
            raise LogRouteError(
                "Cannot open log file for append",
                destination=destination.describe(),
                details=str(e),
                original_error=e,
            ) from e

        with log_file:
            for chunk in message.iter_chunks():
                try:
                    log_file.write(chunk)
                    log_file.flush()
                except OSError as e:
                    raise LogRouteError(
                        "Write to log file failed",
                        destination=destination.describe(),
                        details=str(e),
                        original_error=e,
                    ) from e
                if destination.duplicate_to_stderr:
                    self._echo(chunk)

    def _echo(self, chunk: bytes) -> None:
        stream = self._stderr or sys.stderr
        buffer = getattr(stream, "buffer", None)
        if buffer is None:
            stream.write(chunk.decode("utf-8", errors="replace"))
            stream.flush()
            return
        stream.flush()
        buffer.write(chunk)
        buffer.flush()
