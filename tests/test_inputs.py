"""
Tests for graphene_cli.core.inputs
==================================

Covers text pass-through, file joining, unreadable files and the
unsupported WIKI mode.
"""

import pytest
from structlog.testing import capture_logs

from graphene_cli.core.errors import InputReadError, UnsupportedInputModeError
from graphene_cli.core.inputs import read_file, resolve_inputs
from graphene_cli.core.models import InputSource


class TestReadFile:
    def test_lines_joined_with_spaces(self, tmp_path):
        path = tmp_path / "doc.txt"
        path.write_text("First line.\nSecond line.\n", encoding="utf-8")
        assert read_file(str(path)) == "First line. Second line. "

    def test_last_line_without_newline(self, tmp_path):
        path = tmp_path / "doc.txt"
        path.write_text("a\nb", encoding="utf-8")
        assert read_file(str(path)) == "a b "

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("", encoding="utf-8")
        assert read_file(str(path)) == ""

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(InputReadError) as exc_info:
            read_file(str(tmp_path / "missing.txt"))
        assert exc_info.value.path.endswith("missing.txt")


class TestResolveInputs:
    def test_text_passthrough(self):
        assert resolve_inputs(["one", "two"], InputSource.TEXT) == ["one", "two"]

    def test_files_in_order(self, tmp_path):
        a = tmp_path / "a.txt"
        b = tmp_path / "b.txt"
        a.write_text("alpha\n", encoding="utf-8")
        b.write_text("beta\n", encoding="utf-8")
        assert resolve_inputs([str(a), str(b)], InputSource.FILE) == ["alpha ", "beta "]

    def test_unreadable_file_gives_empty_text(self, tmp_path):
        good = tmp_path / "good.txt"
        good.write_text("text\n", encoding="utf-8")
        missing = tmp_path / "missing.txt"

        with capture_logs() as logs:
            texts = resolve_inputs([str(missing), str(good)], InputSource.FILE)

        assert texts == ["", "text "]
        warnings = [e for e in logs if e["log_level"] == "warning"]
        assert warnings[0]["event"] == "Can't read from file"
        assert warnings[0]["path"] == str(missing)

    def test_wiki_not_implemented(self):
        with pytest.raises(UnsupportedInputModeError) as exc_info:
            resolve_inputs(["Barack_Obama"], InputSource.WIKI)
        assert "WIKI" in str(exc_info.value)
