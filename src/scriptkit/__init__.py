"""
scriptkit - advisory lock files and log routing for scripts

Provides `lock`/`unlock` on atomically created lock files, and
`log`/`error`/`stdlog`/`verbose`/`debug` routing to a file or the system
logger with optional duplication to standard error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from scriptkit.core.version import __version__

_LAZY_EXPORTS = {
    "lock": "scriptkit.functions",
    "unlock": "scriptkit.functions",
    "log": "scriptkit.functions",
    "error": "scriptkit.functions",
    "stdlog": "scriptkit.functions",
    "verbose": "scriptkit.functions",
    "debug": "scriptkit.functions",
    "LockManager": "scriptkit.core.locks",
    "LogRouter": "scriptkit.router",
    "LogOptions": "scriptkit.core.config",
    "ScriptConfig": "scriptkit.core.config",
    "main": "scriptkit.cli.main",
}

__all__ = ["__version__", *_LAZY_EXPORTS]

if TYPE_CHECKING:
    from scriptkit.cli.main import main
    from scriptkit.core.config import LogOptions, ScriptConfig
    from scriptkit.core.locks import LockManager
    from scriptkit.functions import debug, error, lock, log, stdlog, unlock, verbose
    from scriptkit.router import LogRouter


def __getattr__(name: str) -> Any:
    if name in _LAZY_EXPORTS:
        import importlib

        return getattr(importlib.import_module(_LAZY_EXPORTS[name]), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
