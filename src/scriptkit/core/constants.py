"""Constants and default values for scriptkit.

This module centralizes environment variable names, hardcoded defaults and
exit codes used by the lock manager, the log router and the CLI.
"""

import os
import tempfile

# ==================== ENVIRONMENT VARIABLES ====================

ENV_TAG = "TAG"
ENV_FACILITY = "FACILITY"
ENV_PRIORITY = "PRIORITY"
ENV_VERBOSE = "verbose"  # lowercase, as scripts traditionally set it
ENV_DEBUG = "DEBUG"
ENV_LOCKFILE = "LOCKFILE"
ENV_LOCKDIR = "LOCKDIR"
ENV_PROGRAM_NAME = "PROGRAM_NAME"
ENV_LOCK_BACKEND = "SCRIPTKIT_LOCK_BACKEND"
ENV_SYSLOG_ADDRESS = "SCRIPTKIT_SYSLOG_ADDRESS"
ENV_LOG_LEVEL = "SCRIPTKIT_LOG_LEVEL"

# ==================== LOG ROUTER DEFAULTS ====================

DEFAULT_FACILITY: str = "user"
DEFAULT_PRIORITY: str = "notice"
ERROR_PRIORITY: str = "err"
DEBUG_PRIORITY: str = "debug"

DEFAULT_SYSLOG_ADDRESS: str = "/dev/log"

# Chunk size used when copying a stdin-sourced message to a file
STREAM_CHUNK_SIZE: int = 64 * 1024

# Values of the `verbose` flag that mean "off"
FALSE_FLAG_VALUES: frozenset[str] = frozenset({"", "0"})

# ==================== LOCK DEFAULTS ====================

SYSTEM_LOCK_DIR: str = "/var/lock"
LOCK_FILE_SUFFIX: str = ".lock"
LOCK_RETRY_INTERVAL_SECONDS: float = 1.0
DEFAULT_LOCK_BACKEND: str = "file"

# ==================== EXIT CODES ====================

EXIT_OK: int = 0
EXIT_FAILURE: int = 1
EXIT_USAGE: int = 1
EXIT_IOERR: int = 74  # sysexits.h EX_IOERR
DEFAULT_ERROR_STATUS: int = 1

# ==================== LIBRARY DIAGNOSTICS ====================

DEFAULT_DIAGNOSTIC_LEVEL: str = "WARNING"


def default_lock_dir() -> str:
    """Return the conventional lock directory, or the temp dir if it is not writable."""
    if os.path.isdir(SYSTEM_LOCK_DIR) and os.access(SYSTEM_LOCK_DIR, os.W_OK):
        return SYSTEM_LOCK_DIR
    return tempfile.gettempdir()
