"""
Front-End Error Hierarchy
=========================

This module defines the exceptions and the error collector used by the
scanner and the parser.

Exception Hierarchy
-------------------
FrontendError (base for all front-end errors)
├── PascalLexicalError - scanner errors
│   ├── InvalidCharacterError - character that starts no token
│   ├── UnterminatedStringError - missing closing quote
│   └── UnterminatedCommentError - missing closing brace
├── PascalSyntaxError - unexpected token relative to the grammar
├── PascalSemanticError - semantic errors
│   └── UndeclaredIdentifierError - identifier never assigned
└── FrontendCompilationError - aggregate report

Diagnostics are recorded, not raised: the parser creates an instance,
hands it to ErrorReporter, and continues. Each diagnostic formats to a
single line with three fields (line number, message, offending text):

    SYNTAX ERROR at line 5: Missing ; at 'y'
    SEMANTIC ERROR at line 7: Undeclared identifier at 'count'
    TOKEN ERROR at line 2: Invalid character at '?'
"""

import logging
from typing import Callable, List, Optional

from simple_pascal.errors import PascalError, SourceLocation

logger = logging.getLogger(__name__)


# =============================================================================
# Base Front-End Exception
# =============================================================================

class FrontendError(PascalError):
    """
    Base exception for all front-end diagnostics.

    Attributes:
        message: The error description (e.g. "Missing ;")
        line_number: Line reported in the diagnostic
        token_text: Text of the offending token
        location: Exact source location of the offending token, if known
    """

    # Prefix of the formatted diagnostic line
    kind = "ERROR"

    def __init__(
        self,
        message: str,
        line_number: int = 0,
        token_text: str = "",
        location: Optional[SourceLocation] = None,
    ):
        self.message = message
        self.line_number = line_number
        self.token_text = token_text
        self.location = location
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        return f"{self.kind} at line {self.line_number}: {self.message} at '{self.token_text}'"


class FrontendCompilationError(FrontendError):
    """
    Aggregate error for a program that parsed with errors.

    The message is the formatted report from ErrorReporter and is passed
    through as-is.
    """

    def __init__(self, report: str, error_count: int = 0):
        self.error_count = error_count
        super().__init__(report)

    def _format_message(self) -> str:
        """Return message as-is - it's already a formatted aggregate report."""
        return self.message


# =============================================================================
# Lexical Errors (Scanner)
# =============================================================================

class PascalLexicalError(FrontendError):
    """
    Lexical error found by the scanner.

    The scanner turns the offending text into an ERROR token so that the
    parser reports it as an unexpected token as well.
    """
    kind = "TOKEN ERROR"


class InvalidCharacterError(PascalLexicalError):
    """A character that cannot start any token."""

    def __init__(self, char: str, line_number: int, location: Optional[SourceLocation] = None):
        self.char = char
        super().__init__("Invalid character", line_number, char, location)


class UnterminatedStringError(PascalLexicalError):
    """A string literal not closed before the end of its line."""

    def __init__(self, text: str, line_number: int, location: Optional[SourceLocation] = None):
        super().__init__("Unterminated string", line_number, text, location)


class UnterminatedCommentError(PascalLexicalError):
    """A { comment with no closing brace before end of input."""

    def __init__(self, line_number: int, location: Optional[SourceLocation] = None):
        super().__init__("Unterminated comment", line_number, "{", location)


# =============================================================================
# Syntax and Semantic Errors (Parser)
# =============================================================================

class PascalSyntaxError(FrontendError):
    """
    Grammar violation.

    Every syntax error triggers panic-mode recovery to the nearest
    statement follower token.

    Examples:
        - Missing ; between statements
        - Missing := in an assignment
        - Expecting END, UNTIL or DO
        - Unexpected token at the start of a statement or factor
    """
    kind = "SYNTAX ERROR"


class PascalSemanticError(FrontendError):
    """
    Semantic error.

    Semantic errors are recorded but never trigger recovery; parsing
    continues at the very next token.
    """
    kind = "SEMANTIC ERROR"


class UndeclaredIdentifierError(PascalSemanticError):
    """Reference to an identifier that was never assigned."""

    def __init__(
        self,
        identifier: str,
        line_number: int = 0,
        location: Optional[SourceLocation] = None,
        message: str = "Undeclared identifier",
    ):
        self.identifier = identifier
        super().__init__(message, line_number, identifier, location)


# =============================================================================
# Error Collection
# =============================================================================

class ErrorReporter:
    """
    Collects diagnostics for one scan or parse.

    Diagnostics are kept in the order they were recorded. When a sink is
    given, each formatted line is passed to it as soon as it is recorded,
    which is how the CLI echoes errors while parsing.

    Example:
        reporter = ErrorReporter(sink=print)
        reporter.add(PascalSyntaxError("Missing ;", 3, "y"))
        if reporter.has_errors():
            print(reporter.report())
    """

    def __init__(self, sink: Optional[Callable[[str], None]] = None):
        self.errors: List[FrontendError] = []
        self.sink = sink

    def add(self, error: FrontendError) -> None:
        """Record a diagnostic and forward it to the sink."""
        self.errors.append(error)
        logger.debug(str(error))
        if self.sink is not None:
            self.sink(str(error))

    def has_errors(self) -> bool:
        """Return True if any errors have been recorded."""
        return len(self.errors) > 0

    def error_count(self) -> int:
        """Return the number of recorded errors."""
        return len(self.errors)

    @property
    def syntax_errors(self) -> List[PascalSyntaxError]:
        return [e for e in self.errors if isinstance(e, PascalSyntaxError)]

    @property
    def semantic_errors(self) -> List[PascalSemanticError]:
        return [e for e in self.errors if isinstance(e, PascalSemanticError)]

    def report(self) -> str:
        """Format all diagnostics followed by a summary line."""
        lines = [str(error) for error in self.errors]
        error_word = "error" if len(self.errors) == 1 else "errors"
        lines.append(f"{len(self.errors)} {error_word}")
        return "\n".join(lines)

    def clear(self) -> None:
        """Forget all recorded diagnostics."""
        self.errors.clear()

    def raise_if_errors(self) -> None:
        """Raise a FrontendCompilationError if any errors were recorded."""
        if self.has_errors():
            raise FrontendCompilationError(self.report(), self.error_count())
