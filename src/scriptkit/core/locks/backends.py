"""Lock backend implementations.

Design principles:
- A lock exists exactly when its path exists. Creation must be a single
  atomic create-if-absent, never check-then-create.
- Metadata is informational and must not be treated as lock truth.
- Removal is idempotent and performs no ownership check.
"""

from __future__ import annotations

import contextlib
import json
import os
import socket
import threading
import uuid
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Protocol


def _utcnow_iso() -> str:
    return datetime.now(UTC).isoformat()


def _write_all(fd: int, payload: bytes) -> None:
    """Write complete payload to fd, handling short writes."""
    total_written = 0
    while total_written < len(payload):
        written = os.write(fd, payload[total_written:])
        if written <= 0:
            raise OSError("short write while persisting lock metadata")
        total_written += written


@dataclass
class LockInfo:
    """Serializable lock metadata for diagnostics."""

    lock_id: str
    pid: int
    host: str
    owner: str
    started_at: str
    backend: str
    version: int = 1

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LockInfo | None:
        try:
            return cls(
                lock_id=str(data["lock_id"]),
                pid=int(data["pid"]),
                host=str(data["host"]),
                owner=str(data.get("owner", "")),
                started_at=str(data["started_at"]),
                backend=str(data.get("backend", "")),
                version=int(data.get("version", 1)),
            )
        except (KeyError, TypeError, ValueError):
            return None

    @classmethod
    def for_current_process(cls, owner: str, backend: str) -> LockInfo:
        return cls(
            lock_id=str(uuid.uuid4()),
            pid=os.getpid(),
            host=socket.gethostname(),
            owner=owner,
            started_at=_utcnow_iso(),
            backend=backend,
        )


class LockBackend(Protocol):
    """Backend abstraction for atomic lock creation and removal."""

    name: str

    def try_create(self, lock_path: Path, info: LockInfo) -> bool:
        """Atomically create the lock. Returns False if it already exists."""

    def remove(self, lock_path: Path) -> None:
        """Delete the lock if present. Absence is not an error."""

    def read_info(self, lock_path: Path) -> LockInfo | None:
        """Read metadata for diagnostics, if available."""


class ExclusiveFileLockBackend:
    """Lock files created with `O_CREAT | O_EXCL`.

    The lock outlives the creating process; nothing is cleaned up unless
    `remove` is called.
    """

    name = "file"
    file_mode = 0o644

    def try_create(self, lock_path: Path, info: LockInfo) -> bool:
        lock_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            fd = os.open(str(lock_path), os.O_CREAT | os.O_EXCL | os.O_WRONLY, self.file_mode)
        except FileExistsError:
            return False

        try:
            payload = (json.dumps(info.to_dict(), sort_keys=True) + "\n").encode("utf-8")
            _write_all(fd, payload)
            os.fsync(fd)
        except OSError:
            os.close(fd)
            with contextlib.suppress(OSError):
                lock_path.unlink()
            raise
        os.close(fd)
        return True

    def remove(self, lock_path: Path) -> None:
        try:
            lock_path.unlink()
        except FileNotFoundError:
            pass

    def read_info(self, lock_path: Path) -> LockInfo | None:
        if not lock_path.exists():
            return None
        try:
            with open(lock_path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError):
            return None

        if not isinstance(data, dict):
            return None
        return LockInfo.from_dict(data)


class MemoryLockBackend:
    """In-process backend with the same contract as the file backend.

    Used for deterministic concurrency tests and for embedding where only
    threads of one process coordinate.
    """

    name = "memory"

    def __init__(self) -> None:
        self._held: dict[Path, LockInfo] = {}
        self._guard = threading.Lock()

    def try_create(self, lock_path: Path, info: LockInfo) -> bool:
        with self._guard:
            if lock_path in self._held:
                return False
            self._held[lock_path] = info
            return True

    def remove(self, lock_path: Path) -> None:
        with self._guard:
            self._held.pop(lock_path, None)

    def read_info(self, lock_path: Path) -> LockInfo | None:
        with self._guard:
            return self._held.get(lock_path)

    def held_paths(self) -> set[Path]:
        with self._guard:
            return set(self._held)
