"""
Front-End Driver
================

This module ties the scanner, symbol table and parser together:

    Source → Scanner → Parser → AST + symbol table + diagnostics

Usage
-----
Command line:
    $ spparse hello.pas --ast

Programmatic:
    >>> from simple_pascal.frontend import parse_source
    >>> result = parse_source("PROGRAM p; BEGIN x := 1 END.")
    >>> result.success
    True
    >>> result.ast.children[0].type.name
    'COMPOUND'

Error Handling
--------------
A parse always completes and always produces a tree. Callers decide what
to do with a program that has errors: check ``result.success`` or call
``result.raise_if_errors()`` before handing the tree to a later stage.

Configuration
-------------
FrontendOptions can be built directly or from environment variables
(see FrontendOptions.from_env).
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from simple_pascal.frontend.ast import Node
from simple_pascal.frontend.errors import (
    ErrorReporter,
    FrontendCompilationError,
    FrontendError,
)
from simple_pascal.frontend.lexer import PascalScanner, PascalToken
from simple_pascal.frontend.parser import PascalParser
from simple_pascal.frontend.symtab import SymbolTable

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class FrontendOptions:
    """
    Front-end configuration.

    Attributes:
        encoding: Encoding used to read source files
        echo_diagnostics: Pass each diagnostic line to the sink as soon as
            it is recorded
        log_level: Logging level name used by the CLI
    """
    encoding: str = "utf-8"
    echo_diagnostics: bool = False
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "FrontendOptions":
        """
        Create FrontendOptions from environment variables.

        Environment variables (all optional):
            SIMPLE_PASCAL_ENCODING: Source file encoding
            SIMPLE_PASCAL_ECHO_DIAGNOSTICS: 1/true/yes/on to echo diagnostics
            SIMPLE_PASCAL_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL

        Returns:
            FrontendOptions with values from environment variables
        """
        options = cls()

        if encoding := os.environ.get("SIMPLE_PASCAL_ENCODING"):
            options.encoding = encoding

        if echo := os.environ.get("SIMPLE_PASCAL_ECHO_DIAGNOSTICS"):
            options.echo_diagnostics = echo.strip().lower() in ("1", "true", "yes", "on")

        if level := os.environ.get("SIMPLE_PASCAL_LOG_LEVEL"):
            if level.upper() in LOG_LEVELS:
                options.log_level = level.upper()

        return options


@dataclass
class ParseResult:
    """
    Result of parsing one program.

    Attributes:
        filename: Source filename
        ast: PROGRAM node (always present, possibly incomplete)
        symtab: Symbol table filled during the parse
        diagnostics: Lexical, syntax and semantic errors in the order found
        syntax_error_count: Number of syntax errors
        semantic_error_count: Number of semantic errors
        lexical_error_count: Number of scanner errors
        token_count: Number of tokens the parser pulled from the scanner
    """
    filename: str = ""
    ast: Optional[Node] = None
    symtab: SymbolTable = field(default_factory=SymbolTable)
    diagnostics: list[FrontendError] = field(default_factory=list)
    syntax_error_count: int = 0
    semantic_error_count: int = 0
    lexical_error_count: int = 0
    token_count: int = 0

    @property
    def error_count(self) -> int:
        return self.syntax_error_count + self.semantic_error_count + self.lexical_error_count

    @property
    def success(self) -> bool:
        return self.error_count == 0

    def report(self) -> str:
        """Format diagnostics followed by a summary line."""
        lines = [str(d) for d in self.diagnostics]
        lines.append(
            f"{self.syntax_error_count} syntax errors, "
            f"{self.semantic_error_count} semantic errors"
        )
        if self.lexical_error_count:
            lines.append(f"{self.lexical_error_count} token errors")
        return "\n".join(lines)

    def raise_if_errors(self) -> None:
        """Raise FrontendCompilationError if the program has any errors."""
        if not self.success:
            raise FrontendCompilationError(self.report(), self.error_count)


class _CountingScanner:
    """Wraps a scanner to count the tokens handed to the parser."""

    def __init__(self, scanner: PascalScanner):
        self.scanner = scanner
        self.count = 0

    def next_token(self) -> PascalToken:
        self.count += 1
        return self.scanner.next_token()


class PascalFrontend:
    """
    Parses programs with a fixed configuration.

    Example:
        frontend = PascalFrontend(FrontendOptions(echo_diagnostics=True), sink=print)
        result = frontend.parse_file("hello.pas")
        if result.success:
            run(result.ast, result.symtab)
    """

    def __init__(
        self,
        options: Optional[FrontendOptions] = None,
        sink: Optional[Callable[[str], None]] = None,
    ):
        self.options = options or FrontendOptions()
        self.sink = sink

    def _make_reporter(self) -> ErrorReporter:
        return ErrorReporter(sink=self.sink if self.options.echo_diagnostics else None)

    def parse_source(self, source: str, filename: str = "<input>") -> ParseResult:
        """
        Parse a program held in a string.

        Args:
            source: Program text
            filename: Source filename for diagnostics

        Returns:
            ParseResult with the tree, symbol table and diagnostics
        """
        scanner = PascalScanner(source, filename)
        scanner.errors = self._make_reporter()
        counting = _CountingScanner(scanner)

        symtab = SymbolTable()
        errors = self._make_reporter()
        parser = PascalParser(counting, symtab, errors)
        ast = parser.parse_program()

        diagnostics = list(scanner.errors.errors) + list(errors.errors)
        diagnostics.sort(key=lambda d: d.line_number)

        result = ParseResult(
            filename=filename,
            ast=ast,
            symtab=symtab,
            diagnostics=diagnostics,
            syntax_error_count=len(errors.syntax_errors),
            semantic_error_count=len(errors.semantic_errors),
            lexical_error_count=scanner.errors.error_count(),
            token_count=counting.count,
        )
        logger.debug(f"{filename}: {result.token_count} tokens, {result.error_count} errors")
        return result

    def parse_file(self, filepath: str | Path) -> ParseResult:
        """
        Parse a program file.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        logger.info(f"Parsing {path}")
        source = path.read_text(encoding=self.options.encoding)
        return self.parse_source(source, str(path))


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(source: str, filename: str = "<input>") -> ParseResult:
    """Parse a program string with default options."""
    return PascalFrontend().parse_source(source, filename)


def parse_file(filepath: str | Path, options: Optional[FrontendOptions] = None) -> ParseResult:
    """Parse a program file."""
    return PascalFrontend(options).parse_file(filepath)
