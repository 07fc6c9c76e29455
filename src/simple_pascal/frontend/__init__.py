"""
Simple Pascal Front End
=======================

This package implements the front end of an interpreter for a small
Pascal-like teaching language:

- A scanner producing typed tokens with line numbers and literal values
- A case-insensitive symbol table
- A recursive descent parser producing an AST, with panic-mode error
  recovery and undeclared-identifier checks
- A driver that runs the whole front end on a string or a file

Pipeline
--------
    Source → Scanner → Parser → AST (+ symbol table, diagnostics)

Usage
-----
>>> from simple_pascal.frontend import parse_source, ASTPrinter
>>> result = parse_source('''
... PROGRAM hello;
... BEGIN
...     i := 1;
...     WHILE i <= 3 DO BEGIN
...         writeln('Hello');
...         i := i + 1
...     END
... END.
... ''')
>>> result.error_count
0
>>> print(ASTPrinter().dump(result.ast))  # doctest: +SKIP

Language Subset
---------------
Supported:
- Assignment, BEGIN/END, REPEAT/UNTIL, WHILE/DO, WRITE, WRITELN
- Integer and real arithmetic with + - * /, one relational operator per
  expression, parentheses, NOT
- Variables are declared implicitly by assignment

Not supported:
- Declarations, procedures, functions, types, arrays, records
"""

from simple_pascal.frontend.ast import ASTPrinter, Node, NodeType, NodeVisitor
from simple_pascal.frontend.driver import (
    FrontendOptions,
    ParseResult,
    PascalFrontend,
    parse_file,
    parse_source,
)
from simple_pascal.frontend.errors import (
    ErrorReporter,
    FrontendCompilationError,
    FrontendError,
    InvalidCharacterError,
    PascalLexicalError,
    PascalSemanticError,
    PascalSyntaxError,
    UndeclaredIdentifierError,
    UnterminatedCommentError,
    UnterminatedStringError,
)
from simple_pascal.frontend.lexer import PascalScanner, PascalToken, PascalTokenType
from simple_pascal.frontend.parser import PascalParser
from simple_pascal.frontend.symtab import SymbolTable, SymtabEntry

__all__ = [
    # Driver
    "PascalFrontend",
    "FrontendOptions",
    "ParseResult",
    "parse_source",
    "parse_file",
    # Errors
    "FrontendError",
    "FrontendCompilationError",
    "PascalLexicalError",
    "InvalidCharacterError",
    "UnterminatedStringError",
    "UnterminatedCommentError",
    "PascalSyntaxError",
    "PascalSemanticError",
    "UndeclaredIdentifierError",
    "ErrorReporter",
    # Scanner
    "PascalScanner",
    "PascalToken",
    "PascalTokenType",
    # Symbol table
    "SymbolTable",
    "SymtabEntry",
    # Parser
    "PascalParser",
    # AST
    "Node",
    "NodeType",
    "NodeVisitor",
    "ASTPrinter",
]
