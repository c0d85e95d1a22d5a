"""Lock manager orchestrating path resolution, backend selection and retry."""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable
from pathlib import Path

from scriptkit.core.config import ScriptConfig, resolve_lock_path
from scriptkit.core.constants import DEFAULT_LOCK_BACKEND, ENV_LOCK_BACKEND, LOCK_RETRY_INTERVAL_SECONDS
from scriptkit.core.exceptions import LockError, LockTimeoutError
from scriptkit.core.locks.backends import (
    ExclusiveFileLockBackend,
    LockBackend,
    LockInfo,
    MemoryLockBackend,
)

_BACKENDS: dict[str, type] = {
    "file": ExclusiveFileLockBackend,
    "memory": MemoryLockBackend,
}


def create_lock_backend(
    backend_name: str | None = None,
    *,
    logger: logging.Logger | None = None,
) -> LockBackend:
    """Create lock backend from explicit value or environment override."""
    log = logger or logging.getLogger(__name__)
    requested = (backend_name or os.environ.get(ENV_LOCK_BACKEND, DEFAULT_LOCK_BACKEND)).strip().lower()

    backend_cls = _BACKENDS.get(requested)
    if backend_cls is None:
        log.warning("Unknown lock backend '%s'; falling back to '%s'", requested, DEFAULT_LOCK_BACKEND)
        backend_cls = _BACKENDS[DEFAULT_LOCK_BACKEND]
    return backend_cls()


class LockManager:
    """Acquire and release advisory lock files with optional bounded retry.

    The manager keeps no record of what it has acquired. A lock is held for
    as long as its path exists, whichever process created it.
    """

    def __init__(
        self,
        config: ScriptConfig | None = None,
        *,
        backend: LockBackend | None = None,
        retry_interval: float = LOCK_RETRY_INTERVAL_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        logger: logging.Logger | None = None,
    ):
        self.config = config or ScriptConfig.from_env()
        self.logger = logger or logging.getLogger(__name__)
        self.backend = backend or create_lock_backend(self.config.lock_backend, logger=self.logger)
        self.retry_interval = retry_interval
        self._sleep = sleep
        self._clock = clock

    def resolve_path(self, path: str | os.PathLike[str] | None = None) -> Path:
        return resolve_lock_path(path, self.config)

    def acquire(self, path: str | os.PathLike[str] | None = None, timeout: int | None = None) -> Path:
        """Create the lock file, retrying once per interval for up to `timeout` seconds.

        Args:
            path: Lock file path; defaults to the configured lock file
            timeout: Seconds to keep retrying; None or 0 means a single attempt

        Returns:
            The resolved lock path, which now exists

        Raises:
            LockTimeoutError: The lock was still held when the wait ran out
            LockError: The backend failed for a reason other than contention
            ValueError: timeout is negative
        """
        timeout = 0 if timeout is None else int(timeout)
        if timeout < 0:
            raise ValueError(f"timeout must be non-negative, got {timeout}")

        lock_path = self.resolve_path(path)
        deadline = self._clock() + timeout
        attempt = 0

        while True:
            attempt += 1
            if self._try_create(lock_path):
                self.logger.debug("Acquired lock %s after %d attempt(s)", lock_path, attempt)
                return lock_path

            if timeout == 0 or self._clock() >= deadline:
                break
            self.logger.debug("Lock %s busy; retrying in %.1fs", lock_path, self.retry_interval)
            self._sleep(self.retry_interval)

        holder = self.backend.read_info(lock_path)
        raise LockTimeoutError(
            str(lock_path),
            timeout_seconds=timeout,
            holder_pid=holder.pid if holder else None,
        )

    def release(self, path: str | os.PathLike[str] | None = None) -> Path:
        """Delete the lock file if present. Succeeds whether or not it existed.

        No ownership check is made: any caller can release any lock, so a
        supervisor may clean up after the process that acquired it.
        """
        lock_path = self.resolve_path(path)
        try:
            self.backend.remove(lock_path)
        except OSError as e:
            # Best-effort, as with `rm -f`.
            self.logger.warning("Could not remove lock %s: %s", lock_path, e)
        return lock_path

    def read_info(self, path: str | os.PathLike[str] | None = None) -> dict | None:
        """Read lock metadata for diagnostics."""
        lock_info = self.backend.read_info(self.resolve_path(path))
        if lock_info is None:
            return None
        return lock_info.to_dict()

    def _try_create(self, lock_path: Path) -> bool:
        info = LockInfo.for_current_process(owner=self.config.program_name, backend=self.backend.name)
        try:
            return self.backend.try_create(lock_path, info)
        except OSError as e:
            raise LockError(
                "Cannot create lock file",
                lock_path=str(lock_path),
                details=str(e),
                original_error=e,
            ) from e
