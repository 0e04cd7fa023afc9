"""
Tests for graphene_cli.logs
===========================

Covers the structlog setup: JSON lines written to a log file, level
filtering, and handing the open log file over on reconfiguration.
"""

import json
from unittest.mock import patch

import structlog

from graphene_cli import logs as log_setup
from graphene_cli.cli.runner import EXIT_OK, main
from graphene_cli.config import GrapheneConfig
from graphene_cli.logs import close_log_file, configure_logging

from conftest import StubEngine


def read_events(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


# ── Log file ───────────────────────────────────────────────────────────────


class TestLogFile:
    def test_writes_json_lines(self, tmp_path):
        path = tmp_path / "logs" / "graphene.log"
        configure_logging("info", str(path))
        structlog.get_logger("graphene_cli.tests").info("hello", items=1)
        close_log_file()

        (event,) = read_events(path)
        assert event["event"] == "hello"
        assert event["level"] == "info"
        assert event["items"] == 1
        assert "timestamp" in event

    def test_level_filter(self, tmp_path):
        path = tmp_path / "graphene.log"
        configure_logging("warning", str(path))
        log = structlog.get_logger("graphene_cli.tests")
        log.info("dropped")
        log.error("kept")
        close_log_file()

        assert [e["event"] for e in read_events(path)] == ["kept"]

    def test_appends(self, tmp_path):
        path = tmp_path / "graphene.log"
        path.write_text('{"event": "earlier"}\n', encoding="utf-8")
        configure_logging("info", str(path))
        structlog.get_logger("graphene_cli.tests").info("later")
        close_log_file()

        assert [e["event"] for e in read_events(path)] == ["earlier", "later"]


# ── Reconfiguration ────────────────────────────────────────────────────────


class TestReconfigure:
    def test_previous_file_closed(self, tmp_path):
        configure_logging("info", str(tmp_path / "first.log"))
        first = log_setup._log_stream
        configure_logging("info", str(tmp_path / "second.log"))

        assert first.closed
        assert not log_setup._log_stream.closed

    def test_back_to_stderr(self, tmp_path):
        configure_logging("info", str(tmp_path / "first.log"))
        first = log_setup._log_stream
        configure_logging("info")

        assert first.closed
        assert log_setup._log_stream is None

    def test_close_is_idempotent(self, tmp_path):
        configure_logging("info", str(tmp_path / "graphene.log"))
        close_log_file()
        close_log_file()
        assert log_setup._log_stream is None


# ── main() ─────────────────────────────────────────────────────────────────


class TestMainLogFile:
    def test_batch_logged_to_file(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "run.log"
        monkeypatch.setattr("graphene_cli.cli.runner.load_config", lambda path=None: GrapheneConfig())
        argv = [
            "--operation", "RE", "--input", "TEXT", "--output", "CMDLINE",
            "--log-level", "info", "--log-file", str(path), "some text",
        ]
        with patch("graphene_cli.cli.runner.create_engine", return_value=StubEngine()):
            code = main(argv)
        stream = log_setup._log_stream
        close_log_file()

        assert code == EXIT_OK
        assert stream.closed
        events = read_events(path)
        complete = [e for e in events if e["event"] == "Batch complete"]
        assert complete and complete[0]["level"] == "info"
        assert complete[0]["inputs"] == 1
        assert "Batch complete" not in capsys.readouterr().err
