"""Pytest configuration and fixtures for scriptkit tests"""
import logging

import pytest

from scriptkit.core.config import ScriptConfig
from scriptkit.router import LogRouter


class RecordingSink:
    """Syslog sink double that records what would have been sent"""

    def __init__(self):
        self.sent = []

    def send(self, destination, lines):
        self.sent.append((destination, list(lines)))

    @property
    def last(self):
        return self.sent[-1]


class FakeClock:
    """Monotonic clock advanced only by its own sleep(), with optional hooks"""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []
        self._hooks = []

    def at(self, when, callback):
        self._hooks.append((when, callback))

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds
        for when, callback in list(self._hooks):
            if self.now >= when:
                self._hooks.remove((when, callback))
                callback()

    def __call__(self):
        return self.now


@pytest.fixture(autouse=True)
def reset_scriptkit_logger():
    """Drop handlers installed by setup_logging so tests stay isolated"""
    yield
    logger = logging.getLogger("scriptkit")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def script_config(tmp_path):
    """Configuration isolated from the real environment"""
    return ScriptConfig(
        lock_dir=str(tmp_path / "locks"),
        program_name="testprog",
        syslog_address=str(tmp_path / "no-syslog-here"),
    )


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def router(script_config, sink):
    return LogRouter(script_config, sink=sink)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def log_file(tmp_path):
    return tmp_path / "app.log"
