"""
Simple Pascal - Front End for a Pascal-like Teaching Language
=============================================================

This package provides the syntax-analysis stage of a small interpreter:
it scans and parses programs written in a Pascal-like teaching language
and produces an abstract syntax tree for later semantic checking and
execution.

Main Components
---------------
- **frontend**: scanner, symbol table, parser and AST
- **cli**: the ``spparse`` command-line tool

Quick Start
-----------
Parse a program:
    >>> from simple_pascal.frontend import parse_source
    >>> result = parse_source("PROGRAM p; BEGIN x := 1 + 2 * 3 END.")
    >>> result.success
    True

Parse a file and refuse to continue on errors:
    >>> from simple_pascal.frontend import parse_file
    >>> result = parse_file("hello.pas")
    >>> result.raise_if_errors()
"""

__version__ = "1.0.0"

from simple_pascal.errors import PascalError, SourceLocation

__all__ = [
    "__version__",
    "PascalError",
    "SourceLocation",
]
