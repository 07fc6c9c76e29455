"""
Pascal Recursive Descent Parser
===============================

This module implements the recursive descent parser for the Pascal-like
teaching language. It pulls tokens from a scanner one at a time and
builds the AST defined in ``simple_pascal.frontend.ast``. The grammar is
listed in ``simple_pascal.frontend.grammar``.

Expression Precedence (lowest to highest)
-----------------------------------------
1. relational      = <> < <= > >=   (at most one per expression)
2. additive        + -
3. multiplicative  * /
4. factor          variable, number, ( expression ), NOT factor

Each tier parses the tier below and then loops over its own operators,
building left-associative trees: ``10 - 2 - 3`` is
SUBTRACT(SUBTRACT(10, 2), 3).

Loops
-----
Both loop forms produce a LOOP node that repeats until its TEST child is
true. WHILE is lowered to that shape by negating its condition:

    REPEAT body UNTIL cond  ->  LOOP(body..., TEST(cond))
    WHILE cond DO body      ->  LOOP(TEST(NOT(cond)), body)

Error Handling
--------------
The parser never raises for bad input. A syntax error is recorded and
followed by panic-mode recovery: tokens are skipped until one in
STATEMENT_FOLLOWERS (; END UNTIL DO or end of file). A semantic error
(undeclared identifier) is recorded without skipping anything. Rules
that hit an error return what they have built so far, so callers must
tolerate nodes with missing children.

Example Usage
-------------
>>> from simple_pascal.frontend.lexer import PascalScanner
>>> from simple_pascal.frontend.parser import PascalParser
>>> scanner = PascalScanner("PROGRAM hello; BEGIN x := 1 END.")
>>> parser = PascalParser(scanner)
>>> program = parser.parse_program()
>>> program.children[0].type
<NodeType.COMPOUND: 2>
>>> parser.error_count
0
"""

import logging
from typing import Callable, Mapping, Optional, Protocol

from simple_pascal.frontend.ast import Node, NodeType
from simple_pascal.frontend.errors import (
    ErrorReporter,
    PascalSyntaxError,
    UndeclaredIdentifierError,
)
from simple_pascal.frontend.grammar import (
    FACTOR_NODE_TYPES,
    FACTOR_OPERATORS,
    RELATIONAL_NODE_TYPES,
    RELATIONAL_OPERATORS,
    SIMPLE_EXPRESSION_NODE_TYPES,
    STATEMENT_FOLLOWERS,
    STATEMENT_STARTERS,
    TERM_NODE_TYPES,
)
from simple_pascal.frontend.lexer import PascalToken, PascalTokenType
from simple_pascal.frontend.symtab import SymbolTable

logger = logging.getLogger(__name__)


class TokenSource(Protocol):
    """Anything that hands out tokens one at a time, such as PascalScanner."""

    def next_token(self) -> PascalToken: ...


class PascalParser:
    """
    Recursive descent parser for one program.

    Attributes:
        scanner: Token source; next_token() must keep returning
            END_OF_FILE once the input is exhausted
        symtab: Symbol table that receives the program name and every
            assignment target
        errors: Collector for syntax and semantic diagnostics
        current_token: The lookahead token
        line_number: Line of the statement being parsed, used in
            diagnostics
    """

    def __init__(
        self,
        scanner: TokenSource,
        symtab: Optional[SymbolTable] = None,
        errors: Optional[ErrorReporter] = None,
    ):
        self.scanner = scanner
        self.symtab = symtab if symtab is not None else SymbolTable()
        self.errors = errors if errors is not None else ErrorReporter()

        self.current_token: Optional[PascalToken] = None
        self.line_number = 0

        self._lookahead: Optional[PascalToken] = None
        # Terminators of the statement lists being parsed, innermost last
        self._open_terminators: list[PascalTokenType] = []

    @property
    def error_count(self) -> int:
        """Number of syntax and semantic errors recorded so far."""
        return self.errors.error_count()

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _next_token(self) -> PascalToken:
        """Consume the current token and fetch the next one."""
        if self._lookahead is not None:
            self.current_token, self._lookahead = self._lookahead, None
        else:
            self.current_token = self.scanner.next_token()
        return self.current_token

    def _peek_token(self) -> PascalToken:
        """Return the token after the current one without consuming anything."""
        if self._lookahead is None:
            self._lookahead = self.scanner.next_token()
        return self._lookahead

    def _check(self, *types: PascalTokenType) -> bool:
        """Check if the current token is one of the given types."""
        return self.current_token.type in types

    # =========================================================================
    # Program
    # =========================================================================

    def parse_program(self) -> Node:
        """
        Parse a whole program.

        Returns:
            PROGRAM node whose single child is the main COMPOUND node
        """
        program_node = Node(NodeType.PROGRAM)

        self._next_token()  # first token
        self.line_number = self.current_token.line

        if self._check(PascalTokenType.PROGRAM):
            self._next_token()  # consume PROGRAM
        else:
            # Carry on as if the keyword were there
            self.syntax_error("Expecting PROGRAM", recover=False)

        if self._check(PascalTokenType.IDENTIFIER):
            program_name = self.current_token.text
            self.symtab.enter(program_name)
            program_node.text = program_name
            self._next_token()  # consume program name
        else:
            self.syntax_error("Expecting program name")

        if self._check(PascalTokenType.SEMICOLON):
            self._next_token()  # consume ;
        else:
            self.syntax_error("Missing ;")

        if not self._check(PascalTokenType.BEGIN):
            self.syntax_error("Expecting BEGIN")

        program_node.adopt(self.parse_compound_statement())

        if self._check(PascalTokenType.SEMICOLON):
            self.syntax_error("Expecting .")

        logger.info(
            f"Parsed program '{program_node.text}': "
            f"{len(self.errors.syntax_errors)} syntax errors, "
            f"{len(self.errors.semantic_errors)} semantic errors"
        )
        return program_node

    # =========================================================================
    # Statements
    # =========================================================================

    def parse_statement(self) -> Optional[Node]:
        """
        Parse one statement.

        Returns:
            The statement node, or None for an empty statement or after
            a syntax error
        """
        saved_line_number = self.current_token.line
        self.line_number = saved_line_number
        token_type = self.current_token.type

        if token_type == PascalTokenType.IDENTIFIER:
            stmt_node = self.parse_assignment_statement()
        elif token_type == PascalTokenType.BEGIN:
            stmt_node = self.parse_compound_statement()
        elif token_type == PascalTokenType.REPEAT:
            stmt_node = self.parse_repeat_statement()
        elif token_type == PascalTokenType.WHILE:
            stmt_node = self.parse_while_statement()
        elif token_type == PascalTokenType.WRITE:
            stmt_node = self.parse_write_statement()
        elif token_type == PascalTokenType.WRITELN:
            stmt_node = self.parse_writeln_statement()
        elif token_type == PascalTokenType.SEMICOLON:
            stmt_node = None  # empty statement
        else:
            self.syntax_error("Unexpected token")
            stmt_node = None

        if stmt_node is not None:
            stmt_node.line_number = saved_line_number
        return stmt_node

    def parse_statement_list(self, parent_node: Node, terminator: PascalTokenType) -> None:
        """
        Parse statements into parent_node until terminator or end of file.

        Statements are separated by one or more semicolons; a semicolon
        before the terminator is optional. The list also stops, without
        reporting anything, at the terminator of an enclosing list, so the
        rule that owns the unfinished construct reports it.
        """
        self._open_terminators.append(terminator)
        try:
            self._parse_statements(parent_node)
        finally:
            self._open_terminators.pop()

    def _parse_statements(self, parent_node: Node) -> None:
        while not self._check(PascalTokenType.END_OF_FILE, *self._open_terminators):
            start_token = self.current_token
            stmt_node = self.parse_statement()
            parent_node.adopt(stmt_node)

            if self._check(PascalTokenType.SEMICOLON):
                while self._check(PascalTokenType.SEMICOLON):
                    self._next_token()  # consume ;
            elif self.current_token.type in STATEMENT_STARTERS:
                self.syntax_error("Missing ;")
            elif stmt_node is None and self.current_token is start_token:
                # A follower that closes no open list (DO, or UNTIL outside
                # any REPEAT) stops recovery without being consumed
                logger.debug(f"Skipping stray {start_token.type.name} at line {start_token.line}")
                self._next_token()

    def parse_assignment_statement(self) -> Node:
        """Parse ``variable := expression``. The target is entered if new."""
        assign_node = Node(NodeType.ASSIGN)

        variable_name = self.current_token.text
        entry = self.symtab.lookup(SymbolTable.fold(variable_name))
        if entry is None:
            entry = self.symtab.enter(variable_name)

        lhs_node = Node(NodeType.VARIABLE, text=variable_name, entry=entry.key)
        assign_node.adopt(lhs_node)

        self._next_token()  # consume the LHS variable

        if self._check(PascalTokenType.COLON_EQUALS):
            self._next_token()  # consume :=
        else:
            self.syntax_error("Missing :=")

        assign_node.adopt(self.parse_expression())
        return assign_node

    def parse_compound_statement(self) -> Node:
        """Parse ``BEGIN statement_list END``."""
        compound_node = Node(NodeType.COMPOUND, line_number=self.current_token.line)

        self._next_token()  # consume BEGIN
        self.parse_statement_list(compound_node, PascalTokenType.END)

        if self._check(PascalTokenType.END):
            self._next_token()  # consume END
        else:
            self.syntax_error("Expecting END")

        return compound_node

    def parse_repeat_statement(self) -> Node:
        """Parse ``REPEAT statement_list UNTIL expression``."""
        loop_node = Node(NodeType.LOOP)
        self._next_token()  # consume REPEAT

        self.parse_statement_list(loop_node, PascalTokenType.UNTIL)

        if self._check(PascalTokenType.UNTIL):
            self.line_number = self.current_token.line
            test_node = Node(NodeType.TEST, line_number=self.line_number)
            self._next_token()  # consume UNTIL
            test_node.adopt(self.parse_expression())

            # The TEST node is always the last child
            loop_node.adopt(test_node)
        else:
            self.syntax_error("Expecting UNTIL")

            # REPEAT ... END: take the END as the end of the loop body unless
            # it is the last END of the program
            if self._check(PascalTokenType.END) and self._peek_token().type not in (
                PascalTokenType.PERIOD,
                PascalTokenType.END_OF_FILE,
            ):
                self._next_token()  # consume END

        return loop_node

    def parse_while_statement(self) -> Node:
        """Parse ``WHILE expression DO statement`` as LOOP(TEST(NOT(expr)), stmt)."""
        loop_node = Node(NodeType.LOOP)
        self._next_token()  # consume WHILE

        test_node = Node(NodeType.TEST)
        not_node = Node(NodeType.NOT)
        not_node.adopt(self.parse_expression())
        test_node.adopt(not_node)
        loop_node.adopt(test_node)

        if self._check(PascalTokenType.DO):
            self._next_token()  # consume DO
            loop_node.adopt(self.parse_statement())
        else:
            self.syntax_error("Expecting DO")

        return loop_node

    def parse_write_statement(self) -> Node:
        """Parse ``WRITE ( argument )``; the argument list is required."""
        write_node = Node(NodeType.WRITE)
        self._next_token()  # consume WRITE

        errors_before = self.error_count
        self.parse_write_arguments(write_node, allow_empty=True)
        if not write_node.children and self.error_count == errors_before:
            self.syntax_error("Invalid WRITE statement")

        return write_node

    def parse_writeln_statement(self) -> Node:
        """
        Parse ``WRITELN [ ( argument ) ]``.

        Without parentheses the statement prints a line break. Once ``(``
        is present an argument is required.
        """
        writeln_node = Node(NodeType.WRITELN)
        self._next_token()  # consume WRITELN

        if self._check(PascalTokenType.LPAREN):
            self.parse_write_arguments(writeln_node)
        return writeln_node

    def parse_write_arguments(self, node: Node, allow_empty: bool = False) -> None:
        """
        Parse a write argument list into node.

        Grammar:
            '(' (variable | CHARACTER | STRING) [':' INTEGER [':' INTEGER]] ')'

        The argument, field width and decimal places are adopted in that
        order. Parsing stops at the first error.

        Args:
            node: WRITE or WRITELN node receiving the arguments
            allow_empty: Accept ``()`` and adopt nothing; the caller reports
                the empty list itself
        """
        if self._check(PascalTokenType.LPAREN):
            self._next_token()  # consume (
        else:
            self.syntax_error("Missing left parenthesis")
            return

        if allow_empty and self._check(PascalTokenType.RPAREN):
            self._next_token()  # consume )
            return

        if self._check(PascalTokenType.IDENTIFIER):
            node.adopt(self.parse_variable())
        elif self._check(PascalTokenType.CHARACTER, PascalTokenType.STRING):
            node.adopt(self.parse_string_constant())
        else:
            self.syntax_error("Invalid WRITE or WRITELN statement")
            return

        if self._check(PascalTokenType.COLON):
            self._next_token()  # consume :

            if not self._check(PascalTokenType.INTEGER):
                self.syntax_error("Invalid field width")
                return
            node.adopt(self.parse_integer_constant())

            if self._check(PascalTokenType.COLON):
                self._next_token()  # consume :

                if not self._check(PascalTokenType.INTEGER):
                    self.syntax_error("Invalid count of decimal places")
                    return
                node.adopt(self.parse_integer_constant())

        if self._check(PascalTokenType.RPAREN):
            self._next_token()  # consume )
        else:
            self.syntax_error("Missing right parenthesis")

    # =========================================================================
    # Expressions
    # =========================================================================

    def parse_expression(self) -> Optional[Node]:
        """Parse a simple expression optionally compared with one more."""
        expr_node = self.parse_simple_expression()

        if self.current_token.type in RELATIONAL_OPERATORS:
            op_node = Node(RELATIONAL_NODE_TYPES[self.current_token.type])
            self._next_token()  # consume relational operator

            op_node.adopt(expr_node)
            op_node.adopt(self.parse_simple_expression())
            expr_node = op_node

        return expr_node

    def parse_simple_expression(self) -> Optional[Node]:
        """Parse ``term { (+|-) term }``."""
        return self._parse_binary(self.parse_term, SIMPLE_EXPRESSION_NODE_TYPES)

    def parse_term(self) -> Optional[Node]:
        """Parse ``factor { (*|/) factor }``."""
        return self._parse_binary(self.parse_factor, TERM_NODE_TYPES)

    def _parse_binary(
        self,
        operand_parser: Callable[[], Optional[Node]],
        operators: Mapping[PascalTokenType, NodeType],
    ) -> Optional[Node]:
        """
        Left-associative binary tier.

        Each operator node adopts the tree built so far as its first
        child and the next operand as its second, then becomes the root.
        """
        root = operand_parser()

        while self.current_token.type in operators:
            op_node = Node(operators[self.current_token.type])
            self._next_token()  # consume the operator

            op_node.adopt(root)
            op_node.adopt(operand_parser())
            root = op_node

        return root

    def parse_factor(self) -> Optional[Node]:
        """Parse a variable, a number, a parenthesized expression or NOT factor."""
        if self._check(PascalTokenType.IDENTIFIER):
            return self.parse_variable()
        if self._check(PascalTokenType.INTEGER):
            return self.parse_integer_constant()
        if self._check(PascalTokenType.REAL):
            return self.parse_real_constant()

        if self.current_token.type in FACTOR_OPERATORS:
            op_node = Node(FACTOR_NODE_TYPES[self.current_token.type])
            self._next_token()  # consume NOT
            op_node.adopt(self.parse_factor())
            return op_node

        if self._check(PascalTokenType.LPAREN):
            self._next_token()  # consume (
            expr_node = self.parse_expression()

            if self._check(PascalTokenType.RPAREN):
                self._next_token()  # consume )
            else:
                self.syntax_error("Expecting )")

            return expr_node

        self.syntax_error("Unexpected token")
        return None

    # =========================================================================
    # Variables and Literals
    # =========================================================================

    def parse_variable(self) -> Node:
        """
        Parse a variable reference.

        An identifier that was never assigned is a semantic error, but the
        VARIABLE node is still built (with no entry) and parsing goes on.
        """
        variable_name = self.current_token.text
        entry = self.symtab.lookup(SymbolTable.fold(variable_name))
        if entry is None:
            self.semantic_error("Undeclared identifier")

        node = Node(
            NodeType.VARIABLE,
            text=variable_name,
            entry=entry.key if entry is not None else None,
        )

        self._next_token()  # consume the identifier
        return node

    def parse_integer_constant(self) -> Node:
        node = Node(NodeType.INTEGER_CONSTANT, value=self.current_token.value)
        self._next_token()  # consume the number
        return node

    def parse_real_constant(self) -> Node:
        node = Node(NodeType.REAL_CONSTANT, value=self.current_token.value)
        self._next_token()  # consume the number
        return node

    def parse_string_constant(self) -> Node:
        node = Node(NodeType.STRING_CONSTANT, value=self.current_token.value)
        self._next_token()  # consume the string
        return node

    # =========================================================================
    # Error Reporting and Recovery
    # =========================================================================

    def syntax_error(self, message: str, recover: bool = True) -> None:
        """
        Record a syntax error at the current token, then synchronize.

        Args:
            message: Diagnostic text, e.g. "Missing ;"
            recover: Skip ahead to a statement follower (the program
                header check reports without skipping)
        """
        token = self.current_token
        self.errors.add(PascalSyntaxError(message, self.line_number, token.text, token.location))

        if recover:
            self.synchronize()

    def semantic_error(self, message: str) -> None:
        """Record a semantic error at the current token. No tokens are skipped."""
        token = self.current_token
        self.errors.add(
            UndeclaredIdentifierError(token.text, self.line_number, token.location, message)
        )

    def synchronize(self) -> None:
        """Skip tokens until the current one can follow a statement."""
        skipped = 0
        while self.current_token.type not in STATEMENT_FOLLOWERS:
            self._next_token()
            skipped += 1

        if skipped:
            logger.debug(f"Recovered at {self.current_token.type.name} after skipping {skipped} tokens")
