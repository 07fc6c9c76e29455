"""
Simple Pascal Command-Line Interface
====================================

This package provides the command-line tools for simple_pascal:

- **spparse**: parse a program, report diagnostics, dump the AST

Each tool is a Click application with help text and consistent exit
codes (see simple_pascal.cli.errors).
"""

__all__ = ["spparse"]
