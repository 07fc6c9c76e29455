# =============================================================================
# test_lexer.py - Scanner Unit Tests
# =============================================================================
# Tests for the Pascal scanner.
#
# Test coverage includes:
#   - Reserved words (case-insensitive) and identifiers
#   - INTEGER and REAL literals, including exponents and "1." followed by a period
#   - CHARACTER and STRING literals with doubled quotes
#   - Special symbols, longest match first
#   - Brace comments
#   - Line and column tracking
#   - Error tokens for invalid characters and unterminated literals
# =============================================================================

import pytest
from simple_pascal.frontend.lexer import (
    PascalScanner,
    PascalToken,
    PascalTokenType,
    scan_source,
)
from simple_pascal.frontend.errors import (
    InvalidCharacterError,
    UnterminatedCommentError,
    UnterminatedStringError,
)


# =============================================================================
# Helper Function
# =============================================================================

def tokenize(source: str, line_number: int = 1) -> list:
    """
    Helper to tokenize and drop the END_OF_FILE token.

    Args:
        source: The program text to scan
        line_number: Starting line number (for position tracking tests)
    """
    scanner = PascalScanner(source, "<test>", line_number=line_number)
    return [t for t in scanner.tokenize() if t.type != PascalTokenType.END_OF_FILE]


def types(source: str) -> list:
    return [t.type for t in tokenize(source)]


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test basic token recognition for simple inputs."""

    def test_empty_source(self):
        """Empty source should produce only END_OF_FILE."""
        tokens = scan_source("")
        assert len(tokens) == 1
        assert tokens[0].type == PascalTokenType.END_OF_FILE
        assert tokens[0].text == ""

    def test_whitespace_only(self):
        tokens = scan_source("   \n\t  \n  ")
        assert len(tokens) == 1
        assert tokens[0].type == PascalTokenType.END_OF_FILE

    def test_identifier(self):
        tokens = tokenize("count")
        assert len(tokens) == 1
        assert tokens[0].type == PascalTokenType.IDENTIFIER
        assert tokens[0].text == "count"
        assert tokens[0].value is None

    def test_identifier_with_digits(self):
        """Identifiers can contain digits after the first letter."""
        tokens = tokenize("loop1")
        assert tokens[0].type == PascalTokenType.IDENTIFIER
        assert tokens[0].text == "loop1"

    def test_identifier_keeps_spelling(self):
        tokens = tokenize("MixedCase")
        assert tokens[0].text == "MixedCase"

    def test_assignment_statement(self):
        tokens = tokenize("x := 42;")
        assert [t.type for t in tokens] == [
            PascalTokenType.IDENTIFIER,
            PascalTokenType.COLON_EQUALS,
            PascalTokenType.INTEGER,
            PascalTokenType.SEMICOLON,
        ]
        assert [t.column for t in tokens] == [1, 3, 6, 8]


# =============================================================================
# Reserved Word Tests
# =============================================================================

class TestReservedWords:
    """Reserved words are recognized regardless of case."""

    @pytest.mark.parametrize("word,expected", [
        ("PROGRAM", PascalTokenType.PROGRAM),
        ("BEGIN", PascalTokenType.BEGIN),
        ("END", PascalTokenType.END),
        ("REPEAT", PascalTokenType.REPEAT),
        ("UNTIL", PascalTokenType.UNTIL),
        ("WHILE", PascalTokenType.WHILE),
        ("DO", PascalTokenType.DO),
        ("WRITE", PascalTokenType.WRITE),
        ("WRITELN", PascalTokenType.WRITELN),
        ("NOT", PascalTokenType.NOT),
    ])
    def test_reserved_word(self, word, expected):
        assert types(word) == [expected]

    def test_case_insensitive(self):
        assert types("begin BEGIN Begin bEgIn") == [PascalTokenType.BEGIN] * 4

    def test_reserved_word_keeps_text(self):
        tokens = tokenize("WriteLn")
        assert tokens[0].type == PascalTokenType.WRITELN
        assert tokens[0].text == "WriteLn"

    def test_prefix_is_identifier(self):
        """A word that merely starts with a reserved word is an identifier."""
        assert types("ending writer") == [PascalTokenType.IDENTIFIER] * 2


# =============================================================================
# Number Tests
# =============================================================================

class TestNumbers:
    """Test INTEGER and REAL literals."""

    def test_integer(self):
        tokens = tokenize("42")
        assert tokens[0].type == PascalTokenType.INTEGER
        assert tokens[0].value == 42
        assert tokens[0].text == "42"

    def test_real(self):
        tokens = tokenize("3.14")
        assert tokens[0].type == PascalTokenType.REAL
        assert tokens[0].value == pytest.approx(3.14)

    def test_real_with_exponent(self):
        tokens = tokenize("2.5e-3")
        assert tokens[0].type == PascalTokenType.REAL
        assert tokens[0].value == pytest.approx(0.0025)

    def test_integer_with_exponent_is_real(self):
        tokens = tokenize("1E5")
        assert tokens[0].type == PascalTokenType.REAL
        assert tokens[0].value == pytest.approx(100000.0)

    def test_period_without_fraction(self):
        """"1." is an integer followed by a period."""
        assert types("1.") == [PascalTokenType.INTEGER, PascalTokenType.PERIOD]

    def test_exponent_without_digits(self):
        """"2e" is an integer followed by an identifier."""
        assert types("2e") == [PascalTokenType.INTEGER, PascalTokenType.IDENTIFIER]

    def test_number_then_word(self):
        tokens = tokenize("12abc")
        assert tokens[0].value == 12
        assert tokens[1].type == PascalTokenType.IDENTIFIER
        assert tokens[1].text == "abc"


# =============================================================================
# String Tests
# =============================================================================

class TestStrings:
    """Test CHARACTER and STRING literals."""

    def test_string(self):
        tokens = tokenize("'hello'")
        assert tokens[0].type == PascalTokenType.STRING
        assert tokens[0].value == "hello"
        assert tokens[0].text == "'hello'"

    def test_single_character(self):
        tokens = tokenize("'x'")
        assert tokens[0].type == PascalTokenType.CHARACTER
        assert tokens[0].value == "x"

    def test_doubled_quote(self):
        tokens = tokenize("'it''s'")
        assert tokens[0].type == PascalTokenType.STRING
        assert tokens[0].value == "it's"
        assert tokens[0].text == "'it''s'"

    def test_quote_character(self):
        tokens = tokenize("''''")
        assert tokens[0].type == PascalTokenType.CHARACTER
        assert tokens[0].value == "'"

    def test_empty_string(self):
        tokens = tokenize("''")
        assert tokens[0].type == PascalTokenType.STRING
        assert tokens[0].value == ""

    def test_braces_inside_string(self):
        """A brace inside quotes does not start a comment."""
        tokens = tokenize("'{not a comment}'")
        assert len(tokens) == 1
        assert tokens[0].value == "{not a comment}"

    def test_unterminated_string(self):
        scanner = PascalScanner("'abc\nx", "<test>")
        tokens = list(scanner.tokenize())
        assert tokens[0].type == PascalTokenType.ERROR
        assert tokens[0].text == "'abc"
        assert tokens[1].type == PascalTokenType.IDENTIFIER
        assert tokens[1].line == 2
        assert len(scanner.errors.errors) == 1
        assert isinstance(scanner.errors.errors[0], UnterminatedStringError)


# =============================================================================
# Special Symbol Tests
# =============================================================================

class TestSpecialSymbols:
    """Test punctuation and operators."""

    @pytest.mark.parametrize("text,expected", [
        (".", PascalTokenType.PERIOD),
        (",", PascalTokenType.COMMA),
        (":", PascalTokenType.COLON),
        (":=", PascalTokenType.COLON_EQUALS),
        (";", PascalTokenType.SEMICOLON),
        ("+", PascalTokenType.PLUS),
        ("-", PascalTokenType.MINUS),
        ("*", PascalTokenType.STAR),
        ("/", PascalTokenType.SLASH),
        ("(", PascalTokenType.LPAREN),
        (")", PascalTokenType.RPAREN),
        ("=", PascalTokenType.EQUALS),
        ("<>", PascalTokenType.NOT_EQUALS),
        ("<", PascalTokenType.LESS_THAN),
        ("<=", PascalTokenType.LESS_EQUALS),
        (">", PascalTokenType.GREATER_THAN),
        (">=", PascalTokenType.GREATER_EQUALS),
    ])
    def test_symbol(self, text, expected):
        tokens = tokenize(text)
        assert len(tokens) == 1
        assert tokens[0].type == expected
        assert tokens[0].text == text

    def test_adjacent_symbols(self):
        assert types("x:=(a<=b)") == [
            PascalTokenType.IDENTIFIER,
            PascalTokenType.COLON_EQUALS,
            PascalTokenType.LPAREN,
            PascalTokenType.IDENTIFIER,
            PascalTokenType.LESS_EQUALS,
            PascalTokenType.IDENTIFIER,
            PascalTokenType.RPAREN,
        ]

    def test_end_period(self):
        assert types("END.") == [PascalTokenType.END, PascalTokenType.PERIOD]


# =============================================================================
# Comment Tests
# =============================================================================

class TestComments:
    """Brace comments are skipped."""

    def test_comment_skipped(self):
        tokens = tokenize("{ a comment } x")
        assert len(tokens) == 1
        assert tokens[0].text == "x"
        assert tokens[0].column == 15

    def test_multiline_comment(self):
        tokens = tokenize("{ one\ntwo }\nx")
        assert tokens[0].line == 3

    def test_unterminated_comment(self):
        scanner = PascalScanner("x { never closed", "<test>")
        tokens = list(scanner.tokenize())
        assert [t.type for t in tokens] == [
            PascalTokenType.IDENTIFIER,
            PascalTokenType.END_OF_FILE,
        ]
        assert len(scanner.errors.errors) == 1
        assert isinstance(scanner.errors.errors[0], UnterminatedCommentError)


# =============================================================================
# Position Tracking Tests
# =============================================================================

class TestPositionTracking:
    """Test line and column tracking."""

    def test_line_numbers(self):
        tokens = tokenize("a\n  b\n\nc")
        assert [(t.line, t.column) for t in tokens] == [(1, 1), (2, 3), (4, 1)]

    def test_starting_line_number(self):
        tokens = tokenize("x", line_number=10)
        assert tokens[0].line == 10

    def test_location(self):
        token = tokenize("  x")[0]
        assert str(token.location) == "<test>:1:3"

    def test_end_of_file_repeats(self):
        """Once exhausted, the scanner keeps returning END_OF_FILE."""
        scanner = PascalScanner("x")
        scanner.next_token()
        first = scanner.next_token()
        second = scanner.next_token()
        assert first.type == PascalTokenType.END_OF_FILE
        assert second.type == PascalTokenType.END_OF_FILE


# =============================================================================
# Error Tests
# =============================================================================

class TestErrors:
    """Invalid input produces ERROR tokens and recorded diagnostics."""

    def test_invalid_character(self):
        scanner = PascalScanner("x ? y", "<test>")
        tokens = list(scanner.tokenize())
        assert tokens[1].type == PascalTokenType.ERROR
        assert tokens[1].text == "?"
        assert tokens[2].text == "y"

        error = scanner.errors.errors[0]
        assert isinstance(error, InvalidCharacterError)
        assert str(error) == "TOKEN ERROR at line 1: Invalid character at '?'"

    def test_scanner_does_not_raise(self):
        scanner = PascalScanner("@ # $ %", "<test>")
        tokens = list(scanner.tokenize())
        assert [t.type for t in tokens[:-1]] == [PascalTokenType.ERROR] * 4
        assert scanner.errors.error_count() == 4


# =============================================================================
# Token Representation Tests
# =============================================================================

class TestTokenRepr:

    def test_repr_number(self):
        token = PascalToken(PascalTokenType.INTEGER, "42", 42, 1, 6)
        assert repr(token) == "Token(INTEGER, 42, 1:6)"

    def test_repr_symbol(self):
        token = PascalToken(PascalTokenType.SEMICOLON, ";", None, 1, 8)
        assert repr(token) == "Token(SEMICOLON, ';', 1:8)"

    def test_repr_end_of_file(self):
        token = PascalToken(PascalTokenType.END_OF_FILE, "", None, 2, 1)
        assert repr(token) == "Token(END_OF_FILE, 2:1)"
