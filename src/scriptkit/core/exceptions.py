"""Custom exceptions for scriptkit.

All exception classes carry a short message plus optional details so the
command-line front end can print one clear line to standard error.
"""


class ScriptKitError(Exception):
    """Base exception for all scriptkit errors."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class UsageError(ScriptKitError):
    """Exception raised for malformed flags or options.

    Usage errors are reported on standard error and are never logged.

    Examples:
        - Unrecognized flag
        - Missing value for a flag that requires one
        - Unknown syslog facility or priority name
    """

    def __init__(self, message: str, command: str | None = None, details: str | None = None):
        self.command = command
        super().__init__(message, details)


class LockError(ScriptKitError):
    """Exception raised when a lock cannot be created or inspected.

    Wraps filesystem failures such as a lock directory that cannot be
    created or written.
    """

    def __init__(
        self,
        message: str,
        lock_path: str | None = None,
        details: str | None = None,
        original_error: Exception | None = None,
    ):
        self.lock_path = lock_path
        self.original_error = original_error
        super().__init__(message, details)


class LockTimeoutError(LockError):
    """Exception raised when a lock is still held after the allotted wait.

    A timeout of zero means a single attempt with no wait at all.

    Attributes:
        lock_path: Path of the contended lock file
        timeout_seconds: How long the caller was willing to wait
        holder_pid: PID recorded by the current holder, when readable
    """

    def __init__(self, lock_path: str, timeout_seconds: int = 0, holder_pid: int | None = None):
        self.timeout_seconds = timeout_seconds
        self.holder_pid = holder_pid

        if timeout_seconds:
            message = f"Lock '{lock_path}' not acquired within {timeout_seconds}s"
        else:
            message = f"Lock '{lock_path}' is already held"
        details = f"held by PID {holder_pid}" if holder_pid else None
        super().__init__(message, lock_path=lock_path, details=details)


class LogRouteError(ScriptKitError):
    """Exception raised when a log message cannot be delivered.

    Examples:
        - Log file cannot be opened for append
        - Write to the log file fails (disk full, permission denied)
        - System logger socket is unreachable
    """

    def __init__(
        self,
        message: str,
        destination: str | None = None,
        details: str | None = None,
        original_error: Exception | None = None,
    ):
        self.destination = destination
        self.original_error = original_error
        super().__init__(message, details)

    def __str__(self) -> str:
        parts = [self.message]
        if self.destination:
            parts.append(f"destination {self.destination}")
        if self.details:
            parts.append(self.details)
        return " - ".join(parts)
