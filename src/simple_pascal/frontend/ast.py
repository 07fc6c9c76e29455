"""
Abstract Syntax Tree (AST) Definitions
======================================

This module defines the tree built by the parser. Every construct is a
``Node`` tagged with a ``NodeType``; the shape of a node is fixed by its
kind:

| Kind                         | Payload           | Children                          |
|------------------------------|-------------------|-----------------------------------|
| PROGRAM                      | text (name)       | COMPOUND                          |
| COMPOUND                     |                   | statements                        |
| ASSIGN                       |                   | VARIABLE, expression              |
| LOOP (repeat)                |                   | statements..., TEST               |
| LOOP (while)                 |                   | TEST, statement                   |
| TEST                         |                   | expression (NOT for while loops)  |
| NOT                          |                   | expression                        |
| WRITE / WRITELN              |                   | argument [, width [, precision]]  |
| EQ LT LE GT GE NE            |                   | left, right                       |
| ADD SUBTRACT MULTIPLY DIVIDE |                   | left, right                       |
| VARIABLE                     | text, entry (key) |                                   |
| INTEGER/REAL/STRING_CONSTANT | value             |                                   |

Design Notes
------------
- Children are ordered and exclusively owned; the tree has no shared or
  back edges.
- ``entry`` is the symbol table key of a VARIABLE, or None when the
  identifier was undeclared.
- A node built by a rule that hit a syntax error may be missing children;
  consumers must tolerate incomplete subtrees.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Optional, Union


# =============================================================================
# Node Kinds
# =============================================================================

class NodeType(Enum):
    """Kinds of AST node."""

    # Statements
    PROGRAM = auto()
    COMPOUND = auto()
    ASSIGN = auto()
    LOOP = auto()
    TEST = auto()
    WRITE = auto()
    WRITELN = auto()

    # Relational operators
    EQ = auto()
    LT = auto()
    LE = auto()
    GT = auto()
    GE = auto()
    NE = auto()

    # Arithmetic operators
    ADD = auto()
    SUBTRACT = auto()
    MULTIPLY = auto()
    DIVIDE = auto()

    # Logical operator
    NOT = auto()

    # Operands
    VARIABLE = auto()
    INTEGER_CONSTANT = auto()
    REAL_CONSTANT = auto()
    STRING_CONSTANT = auto()


LITERAL_TYPES = frozenset({
    NodeType.INTEGER_CONSTANT,
    NodeType.REAL_CONSTANT,
    NodeType.STRING_CONSTANT,
})


# =============================================================================
# Node
# =============================================================================

@dataclass
class Node:
    """
    A node of the syntax tree.

    Attributes:
        type: The node kind
        text: Display text (program or variable name)
        value: Literal value for the constant kinds
        line_number: Source line of the construct, when known
        entry: Symbol table key of a VARIABLE
        children: Owned child nodes, in grammar order
    """
    type: NodeType
    text: Optional[str] = None
    value: Union[int, float, str, None] = None
    line_number: Optional[int] = None
    entry: Optional[str] = None
    children: list["Node"] = field(default_factory=list)

    def adopt(self, child: Optional["Node"]) -> None:
        """Append a child; None (from a failed sub-parse) is ignored."""
        if child is not None:
            self.children.append(child)

    @property
    def is_literal(self) -> bool:
        return self.type in LITERAL_TYPES

    def walk(self):
        """Yield this node and all descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def __repr__(self) -> str:
        parts = [self.type.name]
        if self.text is not None:
            parts.append(repr(self.text))
        if self.value is not None:
            parts.append(repr(self.value))
        if self.children:
            parts.append(f"{len(self.children)} children")
        return f"Node({', '.join(parts)})"


# =============================================================================
# AST Visitor
# =============================================================================

class NodeVisitor:
    """
    Base class for AST visitors.

    ``visit`` dispatches on the node kind to ``visit_<kind>`` (lower case,
    e.g. ``visit_assign``). Every kind has a method here, defaulting to
    ``generic_visit``, which visits the children in order.

    Usage:
        class VariableCollector(NodeVisitor):
            def __init__(self):
                self.names = []

            def visit_variable(self, node):
                self.names.append(node.text)
    """

    def visit(self, node: Node) -> Any:
        visitor = getattr(self, f"visit_{node.type.name.lower()}")
        return visitor(node)

    def generic_visit(self, node: Node) -> None:
        for child in node.children:
            self.visit(child)

    def visit_program(self, node: Node): return self.generic_visit(node)
    def visit_compound(self, node: Node): return self.generic_visit(node)
    def visit_assign(self, node: Node): return self.generic_visit(node)
    def visit_loop(self, node: Node): return self.generic_visit(node)
    def visit_test(self, node: Node): return self.generic_visit(node)
    def visit_write(self, node: Node): return self.generic_visit(node)
    def visit_writeln(self, node: Node): return self.generic_visit(node)
    def visit_eq(self, node: Node): return self.generic_visit(node)
    def visit_lt(self, node: Node): return self.generic_visit(node)
    def visit_le(self, node: Node): return self.generic_visit(node)
    def visit_gt(self, node: Node): return self.generic_visit(node)
    def visit_ge(self, node: Node): return self.generic_visit(node)
    def visit_ne(self, node: Node): return self.generic_visit(node)
    def visit_add(self, node: Node): return self.generic_visit(node)
    def visit_subtract(self, node: Node): return self.generic_visit(node)
    def visit_multiply(self, node: Node): return self.generic_visit(node)
    def visit_divide(self, node: Node): return self.generic_visit(node)
    def visit_not(self, node: Node): return self.generic_visit(node)
    def visit_variable(self, node: Node): return self.generic_visit(node)
    def visit_integer_constant(self, node: Node): return self.generic_visit(node)
    def visit_real_constant(self, node: Node): return self.generic_visit(node)
    def visit_string_constant(self, node: Node): return self.generic_visit(node)


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter(NodeVisitor):
    """
    Indented tree dump for debugging.

    Usage:
        printer = ASTPrinter()
        print(printer.dump(program_node))

    Output for ``x := 1 + 2``:

        ASSIGN [line 3]
          VARIABLE x
          ADD
            INTEGER_CONSTANT 1
            INTEGER_CONSTANT 2
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def dump(self, node: Node) -> str:
        """Print the tree rooted at node and return it as a string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def _label(self, node: Node) -> str:
        label = node.type.name
        if node.line_number is not None:
            label += f" [line {node.line_number}]"
        return label

    def generic_visit(self, node: Node) -> None:
        self._emit(self._label(node))
        self.indent_level += 1
        for child in node.children:
            self.visit(child)
        self.indent_level -= 1

    def visit_program(self, node: Node):
        self._emit(f"PROGRAM {node.text}")
        self.indent_level += 1
        for child in node.children:
            self.visit(child)
        self.indent_level -= 1

    def visit_variable(self, node: Node):
        suffix = "" if node.entry is not None else " (undeclared)"
        self._emit(f"VARIABLE {node.text}{suffix}")

    def visit_integer_constant(self, node: Node):
        self._emit(f"INTEGER_CONSTANT {node.value}")

    def visit_real_constant(self, node: Node):
        self._emit(f"REAL_CONSTANT {node.value}")

    def visit_string_constant(self, node: Node):
        self._emit(f"STRING_CONSTANT {node.value!r}")
