"""Tests for configuration loading and default resolution"""
from pathlib import Path

import pytest

from scriptkit.core.config import LockOptions, ScriptConfig, default_program_name, resolve_lock_path
from scriptkit.core.constants import DEFAULT_LOCK_BACKEND, DEFAULT_SYSLOG_ADDRESS


class TestFromEnv:
    """ScriptConfig.from_env"""

    def test_reads_all_variables(self, tmp_path):
        environ = {
            "TAG": "backup",
            "FACILITY": "local2",
            "PRIORITY": "info",
            "verbose": "1",
            "DEBUG": "yes",
            "LOCKFILE": str(tmp_path / "x.lock"),
            "LOCKDIR": str(tmp_path),
            "PROGRAM_NAME": "backup.sh",
            "SCRIPTKIT_LOCK_BACKEND": "memory",
            "SCRIPTKIT_SYSLOG_ADDRESS": "loghost:514",
        }

        config = ScriptConfig.from_env(environ)

        assert config.tag == "backup"
        assert config.facility == "local2"
        assert config.priority == "info"
        assert config.verbose == "1"
        assert config.debug == "yes"
        assert config.lockfile == str(tmp_path / "x.lock")
        assert config.lock_dir == str(tmp_path)
        assert config.program_name == "backup.sh"
        assert config.lock_backend == "memory"
        assert config.syslog_address == "loghost:514"

    def test_empty_environment_uses_defaults(self):
        config = ScriptConfig.from_env({})

        assert config.tag is None
        assert config.facility is None
        assert config.priority is None
        assert config.verbose is None
        assert config.debug is None
        assert config.lockfile is None
        assert config.lock_dir
        assert config.program_name == default_program_name()
        assert config.lock_backend == DEFAULT_LOCK_BACKEND
        assert config.syslog_address == DEFAULT_SYSLOG_ADDRESS

    def test_blank_values_count_as_unset(self):
        config = ScriptConfig.from_env({"TAG": "  ", "FACILITY": "", "LOCKDIR": ""})

        assert config.tag is None
        assert config.facility is None
        assert config.lock_dir

    def test_dotenv_values_lose_to_environment(self, tmp_path):
        dotenv_file = tmp_path / ".env"
        dotenv_file.write_text("TAG=from-dotenv\nFACILITY=local5\n")

        config = ScriptConfig.from_env({"TAG": "from-env"}, dotenv_path=dotenv_file)

        assert config.tag == "from-env"
        assert config.facility == "local5"

    def test_reads_process_environment_by_default(self, monkeypatch):
        monkeypatch.setenv("TAG", "process-tag")

        assert ScriptConfig.from_env().tag == "process-tag"


class TestFlags:
    """verbose/debug flag interpretation"""

    @pytest.mark.parametrize("value, expected", [
        (None, False), ("", False), ("0", False), ("false", True), ("OFF", True), (" 0 ", True),
        ("1", True), ("yes", True), ("true", True), ("anything", True),
    ])
    def test_verbose_enabled(self, value, expected):
        assert ScriptConfig(verbose=value).verbose_enabled is expected

    @pytest.mark.parametrize("value, expected", [
        (None, False), ("", False), ("0", True), ("1", True),
    ])
    def test_debug_enabled(self, value, expected):
        assert ScriptConfig(debug=value).debug_enabled is expected


class TestLockPathResolution:
    """explicit path > configured lockfile > <lock_dir>/<program>.lock"""

    def test_explicit_path_wins(self, tmp_path):
        config = ScriptConfig(lockfile=str(tmp_path / "cfg.lock"), lock_dir=str(tmp_path), program_name="p")

        assert resolve_lock_path(tmp_path / "arg.lock", config) == tmp_path / "arg.lock"

    def test_configured_lockfile_second(self, tmp_path):
        config = ScriptConfig(lockfile=str(tmp_path / "cfg.lock"), lock_dir=str(tmp_path), program_name="p")

        assert resolve_lock_path(None, config) == tmp_path / "cfg.lock"

    def test_program_default_last(self, tmp_path):
        config = ScriptConfig(lock_dir=str(tmp_path), program_name="p")

        assert resolve_lock_path(None, config) == tmp_path / "p.lock"
        assert resolve_lock_path("", config) == tmp_path / "p.lock"
        assert config.default_lock_path() == Path(tmp_path) / "p.lock"


def test_lock_options_default_to_unset():
    options = LockOptions()

    assert options.lockfile is None
    assert options.timeout is None


def test_default_program_name_from_argv(monkeypatch):
    monkeypatch.setattr("sys.argv", ["/usr/local/bin/rotate-logs", "--flag"])
    assert default_program_name() == "rotate-logs"

    monkeypatch.setattr("sys.argv", [""])
    assert default_program_name() == "scriptkit"
