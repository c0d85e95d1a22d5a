"""Core module - Foundation components shared by the lock manager and the log router.

This module provides the basic building blocks used throughout the package:
- Version information
- Custom exceptions
- Configuration dataclasses
- Constants and defaults
"""

from scriptkit.core.version import __version__

from scriptkit.core.exceptions import (
    ScriptKitError,
    UsageError,
    LockError,
    LockTimeoutError,
    LogRouteError,
)

from scriptkit.core.config import (
    ScriptConfig,
    LockOptions,
    LogOptions,
    resolve_lock_path,
)

from scriptkit.core.constants import (
    DEFAULT_FACILITY,
    DEFAULT_PRIORITY,
    ERROR_PRIORITY,
    DEBUG_PRIORITY,
    DEFAULT_ERROR_STATUS,
    LOCK_RETRY_INTERVAL_SECONDS,
    EXIT_OK,
    EXIT_FAILURE,
    EXIT_USAGE,
    EXIT_IOERR,
)

__all__ = [
    # Version
    '__version__',
    # Exceptions
    'ScriptKitError',
    'UsageError',
    'LockError',
    'LockTimeoutError',
    'LogRouteError',
    # Config dataclasses
    'ScriptConfig',
    'LockOptions',
    'LogOptions',
    'resolve_lock_path',
    # Constants
    'DEFAULT_FACILITY',
    'DEFAULT_PRIORITY',
    'ERROR_PRIORITY',
    'DEBUG_PRIORITY',
    'DEFAULT_ERROR_STATUS',
    'LOCK_RETRY_INTERVAL_SECONDS',
    'EXIT_OK',
    'EXIT_FAILURE',
    'EXIT_USAGE',
    'EXIT_IOERR',
]
