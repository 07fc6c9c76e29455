"""
spparse - Pascal Front-End Command-Line Interface
=================================================

This module implements the command-line interface for the front end. It
parses one program, reports its diagnostics and optionally dumps the
syntax tree and the symbol table.

Usage Examples
--------------
Check a program:
    $ spparse hello.pas

Print the syntax tree:
    $ spparse hello.pas --ast

Print the identifiers entered during the parse:
    $ spparse hello.pas --symbols

Verbose mode (debug logging):
    $ spparse -v hello.pas

Environment
-----------
SIMPLE_PASCAL_ENCODING and SIMPLE_PASCAL_LOG_LEVEL provide defaults
(see FrontendOptions.from_env); command-line options take precedence.
"""

import logging
import sys
from pathlib import Path

import click

from simple_pascal import __version__
from simple_pascal.cli.errors import ExitCode, handle_cli_exception
from simple_pascal.frontend import ASTPrinter, FrontendOptions, PascalFrontend


def setup_logging(level: str, verbose: bool) -> None:
    """Configure logging based on verbosity."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level, logging.WARNING),
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print the syntax tree",
)
@click.option(
    "--symbols",
    is_flag=True,
    help="Print the symbol table",
)
@click.option(
    "-q", "--quiet",
    is_flag=True,
    help="Do not print individual diagnostics",
)
@click.option(
    "-e", "--encoding",
    default=None,
    help="Source file encoding (default: utf-8)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="spparse")
def main(
    input_file: Path,
    ast: bool,
    symbols: bool,
    quiet: bool,
    encoding: str | None,
    verbose: bool,
) -> None:
    """
    Parse a program written in the Pascal-like teaching language.

    INPUT_FILE is the program source file (.pas).

    Diagnostics are printed to stderr as they are found. The exit status
    is 0 for a program without errors and 1 otherwise.

    \b
    Examples:
        spparse hello.pas            # Check syntax
        spparse hello.pas --ast      # Dump the syntax tree
        spparse -q hello.pas         # Summary only
    """
    options = FrontendOptions.from_env()
    options.echo_diagnostics = not quiet
    if encoding:
        options.encoding = encoding

    setup_logging(options.log_level, verbose)

    try:
        frontend = PascalFrontend(options, sink=lambda line: click.echo(line, err=True))
        result = frontend.parse_file(input_file)
    except Exception as e:
        handle_cli_exception(e, verbose)

    if ast:
        click.echo(ASTPrinter().dump(result.ast))

    if symbols:
        for entry in result.symtab:
            click.echo(entry.name)

    if verbose:
        click.echo(f"Scanned {result.token_count} tokens")

    if result.lexical_error_count:
        click.echo(f"{result.lexical_error_count} token errors", err=True)
    click.echo(
        f"{result.syntax_error_count} syntax errors, "
        f"{result.semantic_error_count} semantic errors",
        err=not result.success,
    )

    if not result.success:
        sys.exit(ExitCode.PROGRAM_ERROR)


if __name__ == "__main__":
    main()
