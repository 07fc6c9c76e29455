"""
Pascal Scanner (Tokenizer)
==========================

This module implements the scanner for the Pascal-like teaching language.
It converts source text into tokens on demand: the parser pulls one token
at a time with next_token().

Token Categories
----------------
- Reserved words: PROGRAM, BEGIN, END, REPEAT, UNTIL, WHILE, DO, WRITE,
  WRITELN, NOT (matched case-insensitively)
- Identifiers: letter { letter | digit }
- Numbers: 42 (INTEGER), 3.14 and 2.5e-3 (REAL)
- Strings: 'hello' (STRING), 'x' (CHARACTER), '' inside a string is a quote
- Special symbols: . , : := ; + - * / ( ) = <> < <= > >=

Comments
--------
Braces enclose comments: { this is skipped }

Errors
------
The scanner never raises. An invalid character or an unterminated string
becomes an ERROR token and a PascalLexicalError is recorded in
``scanner.errors``; the parser then reports the ERROR token as unexpected.

Example Usage
-------------
>>> from simple_pascal.frontend.lexer import PascalScanner
>>> scanner = PascalScanner("x := 42;", "test.pas")
>>> for token in scanner.tokenize():
...     print(token)
Token(IDENTIFIER, 'x', 1:1)
Token(COLON_EQUALS, ':=', 1:3)
Token(INTEGER, 42, 1:6)
Token(SEMICOLON, ';', 1:8)
Token(END_OF_FILE, 1:9)
"""

import logging
import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator

from simple_pascal.errors import SourceLocation
from simple_pascal.frontend.errors import (
    ErrorReporter,
    InvalidCharacterError,
    UnterminatedCommentError,
    UnterminatedStringError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class PascalTokenType(Enum):
    """Token types of the teaching language."""

    # === Reserved Words ===
    PROGRAM = auto()
    BEGIN = auto()
    END = auto()
    REPEAT = auto()
    UNTIL = auto()
    WHILE = auto()
    DO = auto()
    WRITE = auto()
    WRITELN = auto()
    NOT = auto()

    # === Special Symbols ===
    PERIOD = auto()             # .
    COMMA = auto()              # ,
    COLON = auto()              # :
    COLON_EQUALS = auto()       # :=
    SEMICOLON = auto()          # ;
    PLUS = auto()               # +
    MINUS = auto()              # -
    STAR = auto()               # *
    SLASH = auto()              # /
    LPAREN = auto()             # (
    RPAREN = auto()             # )
    EQUALS = auto()             # =
    NOT_EQUALS = auto()         # <>
    LESS_THAN = auto()          # <
    LESS_EQUALS = auto()        # <=
    GREATER_THAN = auto()       # >
    GREATER_EQUALS = auto()     # >=

    # === Identifiers and Literals ===
    IDENTIFIER = auto()
    INTEGER = auto()
    REAL = auto()
    CHARACTER = auto()
    STRING = auto()

    # === Structural ===
    ERROR = auto()              # Invalid lexeme
    END_OF_FILE = auto()


# =============================================================================
# Reserved Words
# =============================================================================

# Keyed by lower-case spelling
RESERVED_WORDS: dict[str, PascalTokenType] = {
    "program": PascalTokenType.PROGRAM,
    "begin": PascalTokenType.BEGIN,
    "end": PascalTokenType.END,
    "repeat": PascalTokenType.REPEAT,
    "until": PascalTokenType.UNTIL,
    "while": PascalTokenType.WHILE,
    "do": PascalTokenType.DO,
    "write": PascalTokenType.WRITE,
    "writeln": PascalTokenType.WRITELN,
    "not": PascalTokenType.NOT,
}

SINGLE_CHARACTER_SYMBOLS: dict[str, PascalTokenType] = {
    ".": PascalTokenType.PERIOD,
    ",": PascalTokenType.COMMA,
    ";": PascalTokenType.SEMICOLON,
    "+": PascalTokenType.PLUS,
    "-": PascalTokenType.MINUS,
    "*": PascalTokenType.STAR,
    "/": PascalTokenType.SLASH,
    "(": PascalTokenType.LPAREN,
    ")": PascalTokenType.RPAREN,
    "=": PascalTokenType.EQUALS,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class PascalToken:
    """
    A single token.

    Attributes:
        type: The PascalTokenType classification
        text: The token as written in the source (empty at end of file)
        value: Decoded literal value (int, float or str) for literal kinds
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: PascalTokenType
    text: str
    value: int | float | str | None
    line: int
    column: int
    filename: str = "<input>"

    def __repr__(self) -> str:
        if self.value is not None:
            if isinstance(self.value, (int, float)):
                return f"Token({self.type.name}, {self.value}, {self.line}:{self.column})"
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        if self.text:
            return f"Token({self.type.name}, {self.text!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)


# =============================================================================
# Scanner Implementation
# =============================================================================

class PascalScanner:
    """
    Produces tokens from source text on demand.

    Usage:
        scanner = PascalScanner(source_text, filename)
        token = scanner.next_token()

    Once the end of the source is reached, every further call to
    next_token() returns another END_OF_FILE token.

    Attributes:
        source: The source code being scanned
        filename: Name of the source file (for error reporting)
        errors: Lexical errors found so far
    """

    WORD_START = string.ascii_letters
    WORD_CHARS = string.ascii_letters + string.digits

    def __init__(self, source: str, filename: str = "<input>", line_number: int = 1):
        self.source = source
        self.filename = filename
        self.errors = ErrorReporter()

        self._pos = 0
        self._line = line_number
        self._column = 1

    def tokenize(self) -> Iterator[PascalToken]:
        """
        Generate all remaining tokens.

        Yields:
            PascalToken objects, ending with a single END_OF_FILE token
        """
        while True:
            token = self.next_token()
            yield token
            if token.type == PascalTokenType.END_OF_FILE:
                return

    def next_token(self) -> PascalToken:
        """Scan and return the next token."""
        self._skip_whitespace_and_comments()

        if self._at_end():
            return self._make_token(PascalTokenType.END_OF_FILE, "", None, self._line, self._column)

        start_line = self._line
        start_column = self._column
        char = self._peek()

        if char in self.WORD_START:
            return self._scan_word(start_line, start_column)

        if self._is_digit(char):
            return self._scan_number(start_line, start_column)

        if char == "'":
            return self._scan_string(start_line, start_column)

        return self._scan_special_symbol(start_line, start_column)

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Character at current position + offset, or "" past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    @staticmethod
    def _is_digit(char: str) -> bool:
        return char != "" and char in string.digits

    def _advance(self) -> str:
        """Consume the current character, tracking line and column."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1

        return char

    def _make_token(
        self,
        token_type: PascalTokenType,
        text: str,
        value: int | float | str | None,
        start_line: int,
        start_column: int,
    ) -> PascalToken:
        return PascalToken(
            type=token_type,
            text=text,
            value=value,
            line=start_line,
            column=start_column,
            filename=self.filename,
        )

    def _location(self, line: int, column: int) -> SourceLocation:
        return SourceLocation(self.filename, line, column)

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> None:
        while not self._at_end():
            char = self._peek()

            if char.isspace():
                self._advance()
                continue

            if char == "{":
                self._skip_comment()
                continue

            break

    def _skip_comment(self) -> None:
        """Skip a { ... } comment; an unterminated one runs to end of input."""
        start_line = self._line
        start_column = self._column
        self._advance()  # consume {

        while not self._at_end():
            if self._advance() == "}":
                return

        error = UnterminatedCommentError(start_line, self._location(start_line, start_column))
        logger.warning(str(error))
        self.errors.add(error)

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_word(self, start_line: int, start_column: int) -> PascalToken:
        """Scan a reserved word or an identifier."""
        chars = []
        while self._peek() and self._peek() in self.WORD_CHARS:
            chars.append(self._advance())

        text = "".join(chars)
        token_type = RESERVED_WORDS.get(text.lower(), PascalTokenType.IDENTIFIER)
        return self._make_token(token_type, text, None, start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> PascalToken:
        """
        Scan an INTEGER or REAL literal.

        A period only belongs to the number when a digit follows it, so
        "END." and "1." (integer then period) scan as expected.
        """
        chars = self._scan_digits()
        is_real = False

        if self._peek() == "." and self._is_digit(self._peek(1)):
            is_real = True
            chars.append(self._advance())  # consume .
            chars.extend(self._scan_digits())

        if self._peek() in ("e", "E"):
            sign = self._peek(1)
            if self._is_digit(sign) or (sign in ("+", "-") and self._is_digit(self._peek(2))):
                is_real = True
                chars.append(self._advance())  # consume e
                if sign in ("+", "-"):
                    chars.append(self._advance())
                chars.extend(self._scan_digits())

        text = "".join(chars)
        if is_real:
            return self._make_token(PascalTokenType.REAL, text, float(text), start_line, start_column)
        return self._make_token(PascalTokenType.INTEGER, text, int(text), start_line, start_column)

    def _scan_digits(self) -> list[str]:
        chars = []
        while self._is_digit(self._peek()):
            chars.append(self._advance())
        return chars

    def _scan_string(self, start_line: int, start_column: int) -> PascalToken:
        """
        Scan a quoted literal.

        Two consecutive quotes inside the literal stand for one quote.
        A literal of exactly one character is a CHARACTER token.
        """
        raw = [self._advance()]  # consume opening '
        chars = []

        while not self._at_end() and self._peek() != "\n":
            char = self._advance()
            raw.append(char)

            if char == "'":
                if self._peek() == "'":
                    raw.append(self._advance())
                    chars.append("'")
                    continue

                value = "".join(chars)
                token_type = PascalTokenType.CHARACTER if len(value) == 1 else PascalTokenType.STRING
                return self._make_token(token_type, "".join(raw), value, start_line, start_column)

            chars.append(char)

        text = "".join(raw)
        error = UnterminatedStringError(text, start_line, self._location(start_line, start_column))
        logger.warning(str(error))
        self.errors.add(error)
        return self._make_token(PascalTokenType.ERROR, text, None, start_line, start_column)

    def _scan_special_symbol(self, start_line: int, start_column: int) -> PascalToken:
        """Scan punctuation and operators, longest match first."""
        char = self._advance()

        if char == ":":
            if self._peek() == "=":
                self._advance()
                return self._make_token(PascalTokenType.COLON_EQUALS, ":=", None, start_line, start_column)
            return self._make_token(PascalTokenType.COLON, ":", None, start_line, start_column)

        if char == "<":
            if self._peek() == "=":
                self._advance()
                return self._make_token(PascalTokenType.LESS_EQUALS, "<=", None, start_line, start_column)
            if self._peek() == ">":
                self._advance()
                return self._make_token(PascalTokenType.NOT_EQUALS, "<>", None, start_line, start_column)
            return self._make_token(PascalTokenType.LESS_THAN, "<", None, start_line, start_column)

        if char == ">":
            if self._peek() == "=":
                self._advance()
                return self._make_token(PascalTokenType.GREATER_EQUALS, ">=", None, start_line, start_column)
            return self._make_token(PascalTokenType.GREATER_THAN, ">", None, start_line, start_column)

        if char in SINGLE_CHARACTER_SYMBOLS:
            return self._make_token(SINGLE_CHARACTER_SYMBOLS[char], char, None, start_line, start_column)

        error = InvalidCharacterError(char, start_line, self._location(start_line, start_column))
        logger.warning(str(error))
        self.errors.add(error)
        return self._make_token(PascalTokenType.ERROR, char, None, start_line, start_column)


def scan_source(source: str, filename: str = "<input>") -> list[PascalToken]:
    """Scan a whole source string into a list of tokens ending with END_OF_FILE."""
    return list(PascalScanner(source, filename).tokenize())
