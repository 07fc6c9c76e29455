"""
Grammar Classification Sets
===========================

Read-only token classifications that drive the parser's loop
termination and error recovery decisions. They are built once at import
and never change.

Grammar (EBNF)
--------------
program        ::= PROGRAM IDENTIFIER ';' compound
compound       ::= BEGIN statement_list END
statement_list ::= statement { ';' statement }
statement      ::= assignment | compound | repeat | while | write | writeln | <empty>
assignment     ::= IDENTIFIER ':=' expression
repeat         ::= REPEAT statement_list UNTIL expression
while          ::= WHILE expression DO statement
write          ::= WRITE write_args
writeln        ::= WRITELN [ write_args ]
write_args     ::= '(' (IDENTIFIER | CHARACTER | STRING) [':' INTEGER [':' INTEGER]] ')'

expression     ::= simple_expr [ relop simple_expr ]
simple_expr    ::= term { ('+' | '-') term }
term           ::= factor { ('*' | '/') factor }
factor         ::= IDENTIFIER | INTEGER | REAL | '(' expression ')' | NOT factor
"""

from types import MappingProxyType

from simple_pascal.frontend.ast import NodeType
from simple_pascal.frontend.lexer import PascalTokenType


# Tokens that can start a statement
STATEMENT_STARTERS = frozenset({
    PascalTokenType.BEGIN,
    PascalTokenType.IDENTIFIER,
    PascalTokenType.REPEAT,
    PascalTokenType.WHILE,
    PascalTokenType.WRITE,
    PascalTokenType.WRITELN,
})

# Tokens that can immediately follow a statement; panic-mode recovery
# skips ahead to one of these
STATEMENT_FOLLOWERS = frozenset({
    PascalTokenType.SEMICOLON,
    PascalTokenType.END,
    PascalTokenType.UNTIL,
    PascalTokenType.DO,
    PascalTokenType.END_OF_FILE,
})

RELATIONAL_OPERATORS = frozenset({
    PascalTokenType.EQUALS,
    PascalTokenType.LESS_THAN,
    PascalTokenType.LESS_EQUALS,
    PascalTokenType.GREATER_THAN,
    PascalTokenType.GREATER_EQUALS,
    PascalTokenType.NOT_EQUALS,
})

SIMPLE_EXPRESSION_OPERATORS = frozenset({
    PascalTokenType.PLUS,
    PascalTokenType.MINUS,
})

TERM_OPERATORS = frozenset({
    PascalTokenType.STAR,
    PascalTokenType.SLASH,
})

FACTOR_OPERATORS = frozenset({
    PascalTokenType.NOT,
})


# =============================================================================
# Operator Token -> Node Kind
# =============================================================================

RELATIONAL_NODE_TYPES = MappingProxyType({
    PascalTokenType.EQUALS: NodeType.EQ,
    PascalTokenType.LESS_THAN: NodeType.LT,
    PascalTokenType.LESS_EQUALS: NodeType.LE,
    PascalTokenType.GREATER_THAN: NodeType.GT,
    PascalTokenType.GREATER_EQUALS: NodeType.GE,
    PascalTokenType.NOT_EQUALS: NodeType.NE,
})

SIMPLE_EXPRESSION_NODE_TYPES = MappingProxyType({
    PascalTokenType.PLUS: NodeType.ADD,
    PascalTokenType.MINUS: NodeType.SUBTRACT,
})

TERM_NODE_TYPES = MappingProxyType({
    PascalTokenType.STAR: NodeType.MULTIPLY,
    PascalTokenType.SLASH: NodeType.DIVIDE,
})

FACTOR_NODE_TYPES = MappingProxyType({
    PascalTokenType.NOT: NodeType.NOT,
})
