"""
Simple Pascal Error Base
========================

This module defines the root of the exception hierarchy for the whole
simple_pascal package. All exceptions inherit from PascalError, allowing
callers to catch every package error with a single except clause.

Exception Hierarchy
-------------------
PascalError (base)
└── FrontendError (simple_pascal.frontend.errors)
    ├── PascalLexicalError - invalid characters, unterminated strings/comments
    ├── PascalSyntaxError - grammar violations found by the parser
    ├── PascalSemanticError - undeclared identifiers
    └── FrontendCompilationError - aggregate report of a failed parse

Design Philosophy
-----------------
Each exception captures source location information (filename, line,
column) when applicable. The parser never raises these for recoverable
grammar problems: it builds the exception instances, collects them, and
keeps parsing so that one pass reports as many problems as possible.
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class PascalError(Exception):
    """
    Base exception for all simple_pascal errors.

    Callers can catch all package errors with a single except clause:

        try:
            result = parse_file("hello.pas")
            result.raise_if_errors()
        except PascalError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
