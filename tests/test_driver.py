"""
Front-End Driver Tests
======================

Tests for PascalFrontend, ParseResult and FrontendOptions: parsing
strings and files, merging scanner and parser diagnostics, and reading
configuration from the environment.
"""

import pytest
from simple_pascal.errors import PascalError
from simple_pascal.frontend import (
    FrontendCompilationError,
    FrontendOptions,
    NodeType,
    PascalFrontend,
    parse_file,
    parse_source,
)


HELLO = """\
PROGRAM hello;
BEGIN
    i := 1;
    WHILE i <= 3 DO BEGIN
        writeln('Hello');
        i := i + 1
    END
END.
"""


# =============================================================================
# Options Tests
# =============================================================================

class TestFrontendOptions:
    """Tests for FrontendOptions and environment configuration."""

    def test_defaults(self):
        options = FrontendOptions()
        assert options.encoding == "utf-8"
        assert options.echo_diagnostics is False
        assert options.log_level == "WARNING"

    def test_from_env_empty(self, monkeypatch):
        monkeypatch.delenv("SIMPLE_PASCAL_ENCODING", raising=False)
        monkeypatch.delenv("SIMPLE_PASCAL_ECHO_DIAGNOSTICS", raising=False)
        monkeypatch.delenv("SIMPLE_PASCAL_LOG_LEVEL", raising=False)
        assert FrontendOptions.from_env() == FrontendOptions()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SIMPLE_PASCAL_ENCODING", "latin-1")
        monkeypatch.setenv("SIMPLE_PASCAL_ECHO_DIAGNOSTICS", "yes")
        monkeypatch.setenv("SIMPLE_PASCAL_LOG_LEVEL", "debug")

        options = FrontendOptions.from_env()
        assert options.encoding == "latin-1"
        assert options.echo_diagnostics is True
        assert options.log_level == "DEBUG"

    def test_from_env_echo_false(self, monkeypatch):
        monkeypatch.setenv("SIMPLE_PASCAL_ECHO_DIAGNOSTICS", "0")
        assert FrontendOptions.from_env().echo_diagnostics is False

    def test_from_env_unknown_level_ignored(self, monkeypatch):
        monkeypatch.setenv("SIMPLE_PASCAL_LOG_LEVEL", "LOUD")
        assert FrontendOptions.from_env().log_level == "WARNING"


# =============================================================================
# Parse Result Tests
# =============================================================================

class TestParseSource:
    """Tests for parsing program text."""

    def test_success(self):
        result = parse_source(HELLO, "hello.pas")
        assert result.success
        assert result.error_count == 0
        assert result.filename == "hello.pas"
        assert result.ast.type == NodeType.PROGRAM
        assert result.ast.text == "hello"
        assert [e.name for e in result.symtab] == ["hello", "i"]

    def test_token_count(self):
        result = parse_source("PROGRAM p; BEGIN x := 1 END.")
        # PROGRAM p ; BEGIN x := 1 END .
        assert result.token_count == 9

    def test_report_without_errors(self):
        result = parse_source(HELLO)
        assert result.report() == "0 syntax errors, 0 semantic errors"
        result.raise_if_errors()

    def test_counts_by_kind(self):
        result = parse_source("PROGRAM p;\nBEGIN\n  x := y\n  z := 1\nEND.")
        assert result.syntax_error_count == 1
        assert result.semantic_error_count == 1
        assert result.lexical_error_count == 0
        assert not result.success

    def test_lexical_errors_merged(self):
        source = "PROGRAM p;\nBEGIN\n  x := 1;\n  y := 2 ? 3\nEND."
        result = parse_source(source)
        assert result.lexical_error_count == 1
        assert result.syntax_error_count == 1
        assert [str(d) for d in result.diagnostics] == [
            "TOKEN ERROR at line 4: Invalid character at '?'",
            "SYNTAX ERROR at line 4: Unexpected token at '?'",
        ]
        assert result.report().endswith("1 token errors")

    def test_diagnostics_in_line_order(self):
        source = "PROGRAM p;\nBEGIN\n  x := 1 ?\nEND;\n"
        result = parse_source(source)
        lines = [d.line_number for d in result.diagnostics]
        assert lines == sorted(lines)

    def test_diagnostics_ordered_by_reported_line(self):
        """Syntax errors report the statement line, not the offending token's line."""
        source = (
            "PROGRAM p;\n"
            "BEGIN\n"
            "  x := 1;\n"
            "  WHILE x\n"
            "  ? DO x := 2\n"
            "END."
        )
        result = parse_source(source)
        lines = [d.line_number for d in result.diagnostics]
        assert lines == sorted(lines)
        assert str(result.diagnostics[0]) == "SYNTAX ERROR at line 4: Expecting DO at '?'"
        assert result.diagnostics[0].location.line == 5

    def test_raise_if_errors(self):
        result = parse_source("PROGRAM p; BEGIN x := y END.")
        with pytest.raises(FrontendCompilationError) as exc_info:
            result.raise_if_errors()
        assert exc_info.value.error_count == 1
        assert "Undeclared identifier" in str(exc_info.value)
        assert "0 syntax errors, 1 semantic errors" in str(exc_info.value)

    def test_compilation_error_is_pascal_error(self):
        result = parse_source("PROGRAM p; BEGIN x := y END.")
        with pytest.raises(PascalError):
            result.raise_if_errors()


# =============================================================================
# Diagnostic Echo Tests
# =============================================================================

class TestDiagnosticEcho:
    """Diagnostics reach the sink only when echo is enabled."""

    def test_echo_enabled(self):
        lines = []
        frontend = PascalFrontend(FrontendOptions(echo_diagnostics=True), sink=lines.append)
        frontend.parse_source("PROGRAM p; BEGIN x := y END.")
        assert lines == ["SEMANTIC ERROR at line 1: Undeclared identifier at 'y'"]

    def test_echo_disabled(self):
        lines = []
        frontend = PascalFrontend(FrontendOptions(echo_diagnostics=False), sink=lines.append)
        result = frontend.parse_source("PROGRAM p; BEGIN x := y END.")
        assert lines == []
        assert result.semantic_error_count == 1

    def test_echo_includes_scanner_errors(self):
        lines = []
        frontend = PascalFrontend(FrontendOptions(echo_diagnostics=True), sink=lines.append)
        frontend.parse_source("PROGRAM p; BEGIN x := 'oops\nEND.")
        assert lines[0].startswith("TOKEN ERROR at line 1: Unterminated string")


# =============================================================================
# File Tests
# =============================================================================

class TestParseFile:
    """Tests for parsing program files."""

    def test_parse_file(self, tmp_path):
        source_file = tmp_path / "hello.pas"
        source_file.write_text(HELLO)

        result = parse_file(source_file)
        assert result.success
        assert result.filename == str(source_file)

    def test_parse_file_str_path(self, tmp_path):
        source_file = tmp_path / "hello.pas"
        source_file.write_text(HELLO)
        assert parse_file(str(source_file)).success

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_file(tmp_path / "missing.pas")

    def test_encoding_option(self, tmp_path):
        source_file = tmp_path / "greet.pas"
        source_file.write_bytes("PROGRAM p; BEGIN writeln('h\xe9') END.".encode("latin-1"))

        result = parse_file(source_file, FrontendOptions(encoding="latin-1"))
        assert result.success
        write = result.ast.children[0].children[0]
        assert write.children[0].value == "h\xe9"

    def test_error_locations_use_filename(self, tmp_path):
        source_file = tmp_path / "bad.pas"
        source_file.write_text("PROGRAM p; BEGIN x := y END.")

        result = PascalFrontend().parse_file(source_file)
        assert result.diagnostics[0].location.filename == str(source_file)
