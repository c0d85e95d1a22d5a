"""Tests for the log router: destinations, message sources and entry points"""
import io
from dataclasses import replace
from pathlib import Path

import pytest

from scriptkit.core.config import LogOptions, ScriptConfig
from scriptkit.core.exceptions import LogRouteError, UsageError
from scriptkit.router import (
    FileDestination,
    LogMessage,
    LogRouter,
    SyslogDestination,
    resolve_destination,
    split_exit_status,
)


class TestFileDestination:
    """Messages appended to a plain file"""

    def test_hello_without_dup_writes_only_file(self, router, log_file, capsys):
        router.log("hello", options=LogOptions(logfile=str(log_file)))

        assert log_file.read_bytes() == b"hello\n"
        assert capsys.readouterr().err == ""

    def test_hello_with_dup_mirrors_to_stderr(self, router, log_file, capsys):
        router.log("hello", options=LogOptions(logfile=str(log_file), duplicate_to_stderr=True))

        assert log_file.read_bytes() == b"hello\n"
        assert capsys.readouterr().err == "hello\n"

    def test_words_joined_with_single_spaces(self, router, log_file):
        router.log("disk", "usage", 93, "%", options=LogOptions(logfile=str(log_file)))

        assert log_file.read_text() == "disk usage 93 %\n"

    def test_appends_without_timestamp(self, router, log_file):
        log_file.write_text("existing\n")

        router.log("first", options=LogOptions(logfile=str(log_file)))
        router.log("second", options=LogOptions(logfile=str(log_file)))

        assert log_file.read_text() == "existing\nfirst\nsecond\n"

    def test_stdin_copied_unmodified(self, router, log_file, capsys):
        payload = b"line one\n\n  indented\nno trailing newline"

        router.log(options=LogOptions(logfile=str(log_file)), stdin=io.BytesIO(payload))

        assert log_file.read_bytes() == payload
        assert capsys.readouterr().err == ""

    def test_stdin_streamed_to_stderr_with_dup(self, router, log_file, capsys):
        payload = b"x" * 200_000 + b"\nend\n"

        router.log(options=LogOptions(logfile=str(log_file), duplicate_to_stderr=True), stdin=io.BytesIO(payload))

        assert log_file.read_bytes() == payload
        assert capsys.readouterr().err == payload.decode()

    def test_arguments_win_over_stdin(self, router, log_file):
        stdin = io.BytesIO(b"should not be read\n")

        router.log("from args", options=LogOptions(logfile=str(log_file)), stdin=stdin)

        assert log_file.read_text() == "from args\n"
        assert stdin.tell() == 0

    def test_router_level_stdin_used_when_no_words(self, script_config, sink, log_file):
        router = LogRouter(script_config, sink=sink, stdin=io.BytesIO(b"piped\n"))

        router.log(options=LogOptions(logfile=str(log_file)))

        assert log_file.read_text() == "piped\n"

    def test_unopenable_file_raises_route_error(self, router, tmp_path):
        target = tmp_path / "missing-dir" / "app.log"

        with pytest.raises(LogRouteError) as exc_info:
            router.log("hello", options=LogOptions(logfile=str(target)))

        assert exc_info.value.destination == str(target)
        assert isinstance(exc_info.value.original_error, OSError)

    def test_injected_text_stderr(self, script_config, sink, log_file):
        stderr = io.StringIO()
        router = LogRouter(script_config, sink=sink, stderr=stderr)

        router.log("hello", options=LogOptions(logfile=str(log_file), duplicate_to_stderr=True))

        assert stderr.getvalue() == "hello\n"


class TestSyslogDestination:
    """Messages submitted to the system logger"""

    def test_defaults_from_program_name(self, router, sink):
        router.log("hello")

        destination, lines = sink.last
        assert destination == SyslogDestination("testprog", "user", "notice", False)
        assert lines == ["hello"]

    def test_config_overrides_defaults(self, script_config, sink):
        config = replace(script_config, tag="cfgtag", facility="local3", priority="info")
        LogRouter(config, sink=sink).log("hello")

        assert sink.last[0] == SyslogDestination("cfgtag", "local3", "info", False)

    def test_explicit_options_override_config(self, script_config, sink):
        config = replace(script_config, tag="cfgtag", facility="local3", priority="info")
        options = LogOptions(tag="cli", facility="daemon", priority="warning", duplicate_to_stderr=True)

        LogRouter(config, sink=sink).log("hello", options=options)

        assert sink.last[0] == SyslogDestination("cli", "daemon", "warning", True)

    def test_stdin_lines_sent_in_one_call(self, router, sink):
        router.log(stdin=io.BytesIO(b"first\n\nsecond\r\nthird"))

        assert len(sink.sent) == 1
        assert sink.last[1] == ["first", "second", "third"]

    def test_unknown_facility_is_usage_error_before_reading_stdin(self, router, sink):
        stdin = io.BytesIO(b"data\n")

        with pytest.raises(UsageError, match="facility"):
            router.log(options=LogOptions(facility="nope"), stdin=stdin)

        assert sink.sent == []
        assert stdin.tell() == 0

    def test_unknown_priority_is_usage_error(self, router):
        with pytest.raises(UsageError, match="priority"):
            router.log("x", options=LogOptions(priority="loud"))

    def test_names_are_case_insensitive(self, router, sink):
        router.log("x", options=LogOptions(facility="LOCAL0", priority="Err"))

        assert sink.last[0].facility == "local0"
        assert sink.last[0].priority == "err"


class TestErrorEntryPoint:
    """error(): err priority, stderr echo, exit status"""

    def test_numeric_status_is_consumed(self, router, sink):
        status = router.error(-42, "disk full")

        assert status == 42
        destination, lines = sink.last
        assert destination.priority == "err"
        assert destination.duplicate_to_stderr is True
        assert lines == ["disk full"]

    def test_string_status_is_consumed(self, router, sink):
        assert router.error("-3", "bad input") == 3
        assert sink.last[1] == ["bad input"]

    def test_default_status_is_one(self, router, sink):
        assert router.error("disk full") == 1
        assert sink.last[1] == ["disk full"]

    def test_malformed_status_is_logged_as_text(self, router, sink):
        assert router.error("-4x", "oops") == 1
        assert sink.last[1] == ["-4x oops"]

    def test_explicit_status_keyword(self, router, sink):
        assert router.error("-9", status=5) == 5
        assert sink.last[1] == ["-9"]

    def test_error_to_file_echoes_to_stderr(self, router, log_file, capsys):
        status = router.error(-2, "cannot continue", options=LogOptions(logfile=str(log_file)))

        assert status == 2
        assert log_file.read_text() == "cannot continue\n"
        assert capsys.readouterr().err == "cannot continue\n"

    def test_error_overrides_caller_priority(self, router, sink):
        router.error("x", options=LogOptions(priority="info", duplicate_to_stderr=False))

        assert sink.last[0].priority == "err"
        assert sink.last[0].duplicate_to_stderr is True


class TestConditionalEntryPoints:
    """stdlog, verbose and debug"""

    def test_stdlog_always_duplicates(self, router, sink):
        router.stdlog("x")

        assert sink.last[0].duplicate_to_stderr is True

    @pytest.mark.parametrize("flag", [None, "", "0"])
    def test_verbose_off_behaves_like_log(self, script_config, sink, flag):
        LogRouter(replace(script_config, verbose=flag), sink=sink).verbose("x")

        assert sink.last == (SyslogDestination("testprog", "user", "notice", False), ["x"])

    @pytest.mark.parametrize("flag", ["1", "yes", "2", "false", "off", "no", " 0 "])
    def test_verbose_on_duplicates(self, script_config, sink, flag):
        LogRouter(replace(script_config, verbose=flag), sink=sink).verbose("x")

        assert sink.last[0].duplicate_to_stderr is True

    def test_verbose_to_file(self, script_config, sink, log_file, capsys):
        router = LogRouter(replace(script_config, verbose="1"), sink=sink)

        router.verbose("progress", options=LogOptions(logfile=str(log_file)))

        assert log_file.read_text() == "progress\n"
        assert capsys.readouterr().err == "progress\n"

    @pytest.mark.parametrize("flag", [None, ""])
    def test_debug_unset_is_noop(self, script_config, sink, log_file, flag):
        router = LogRouter(replace(script_config, debug=flag), sink=sink)

        assert router.debug("x") is None
        router.debug("x", options=LogOptions(logfile=str(log_file)))

        assert sink.sent == []
        assert not log_file.exists()

    @pytest.mark.parametrize("flag", ["1", "0", "yes"])
    def test_debug_set_logs_at_debug(self, script_config, sink, flag):
        LogRouter(replace(script_config, debug=flag), sink=sink).debug("x")

        destination, lines = sink.last
        assert destination.priority == "debug"
        assert lines == ["x"]


class TestHelpers:
    """Message and destination helpers"""

    def test_split_exit_status(self):
        assert split_exit_status(["-42", "a"]) == (42, ["a"])
        assert split_exit_status([-7]) == (7, [])
        assert split_exit_status(["42", "a"]) == (1, ["42", "a"])
        assert split_exit_status(["--5"]) == (1, ["--5"])
        assert split_exit_status([]) == (1, [])

    def test_message_requires_exactly_one_source(self):
        with pytest.raises(ValueError):
            LogMessage()
        with pytest.raises(ValueError):
            LogMessage(text="a", stream=io.BytesIO())

    def test_message_from_text_stream(self):
        message = LogMessage.from_words([], stdin=io.StringIO("a\nb\n"))

        assert message.from_stream
        assert b"".join(message.iter_chunks()) == b"a\nb\n"

    def test_resolve_file_destination(self, script_config):
        destination = resolve_destination(LogOptions(logfile="/tmp/x.log"), script_config)

        assert destination == FileDestination(Path("/tmp/x.log"), False)

    def test_resolve_without_options(self, script_config):
        assert resolve_destination(None, script_config) == SyslogDestination("testprog", "user", "notice", False)

    def test_with_overrides_leaves_original(self):
        options = LogOptions(tag="a")
        forced = options.with_overrides(priority="err")

        assert options.priority is None
        assert forced.tag == "a"
        assert forced.priority == "err"

    def test_router_reads_environment_when_no_config(self, monkeypatch, sink):
        monkeypatch.setenv("TAG", "envtag")
        monkeypatch.setenv("PRIORITY", "info")

        LogRouter(sink=sink).log("x")

        assert sink.last[0].tag == "envtag"
        assert sink.last[0].priority == "info"

    def test_unsupported_destination(self, router):
        with pytest.raises(TypeError):
            router.route(object(), LogMessage(text="x"))


def test_default_sink_uses_configured_address(script_config):
    router = LogRouter(script_config)

    assert router.sink.address == script_config.syslog_address


def test_script_config_is_used_verbatim(tmp_path):
    config = ScriptConfig(lock_dir=str(tmp_path), program_name="p")

    assert LogRouter(config).config is config
