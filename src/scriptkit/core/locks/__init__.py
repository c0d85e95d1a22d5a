"""Locking subsystem for cross-process coordination.

This package centralizes lock acquisition/release behavior behind
backend abstractions so scripts can use a stable API.
"""

from scriptkit.core.locks.backends import (
    ExclusiveFileLockBackend,
    LockBackend,
    LockInfo,
    MemoryLockBackend,
)
from scriptkit.core.locks.manager import LockManager, create_lock_backend

__all__ = [
    "ExclusiveFileLockBackend",
    "LockBackend",
    "LockInfo",
    "LockManager",
    "MemoryLockBackend",
    "create_lock_backend",
]
