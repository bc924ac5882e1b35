"""
tlc - tinylang Front-End Command-Line Interface
===============================================

Tokenizes and checks a tinylang source file and prints the results.

Usage Examples
--------------
Check a file (diagnostics only):
    $ tlc program.tl

Show tokens and the symbol table:
    $ tlc program.tl --tokens --symbols

Dump the lexer's automata:
    $ tlc program.tl --automata

Verbose mode (debug logging):
    $ tlc -v program.tl

Exit Codes
----------
0 when no diagnostics were reported, 1 when the program has diagnostics,
2 for unreadable input, 3 for internal errors.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from tinylang import __version__
from tinylang.cli.errors import handle_cli_exception
from tinylang.config import CompilerOptions
from tinylang.compiler import FrontEnd
from tinylang.lexer import Lexer
from tinylang.errors import ErrorCollector
from tinylang.report import (
    format_automaton,
    format_symbols,
    format_tokens,
)


logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(name)s: %(message)s" if verbose else "%(message)s",
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
    "--tokens",
    is_flag=True,
    help="Print the token list",
)
@click.option(
    "--symbols",
    is_flag=True,
    help="Print the symbol table",
)
@click.option(
    "--automata",
    is_flag=True,
    help="Print the transition tables of the lexer's automata",
)
@click.option(
    "--max-fraction-digits",
    type=click.IntRange(min=0),
    default=None,
    help="Longest allowed fractional part of decimal literals "
         "(default: $TINYLANG_MAX_FRACTION_DIGITS or 5)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="tlc")
def main(
    input_file: Path,
    tokens: bool,
    symbols: bool,
    automata: bool,
    max_fraction_digits: Optional[int],
    verbose: bool,
) -> None:
    """
    Tokenize and check a tinylang program.

    INPUT_FILE is the source file to check.

    \b
    Examples:
        tlc program.tl                   # Diagnostics only
        tlc program.tl --tokens          # Also print tokens
        tlc program.tl --symbols         # Also print the symbol table
        tlc program.tl --automata        # Also print automata
    """
    setup_logging(verbose)

    options = CompilerOptions.from_env()
    if max_fraction_digits is not None:
        options.max_fraction_digits = max_fraction_digits
    logger.debug("options: %s", options)

    try:
        result = FrontEnd(options).run_file(input_file)

        if tokens:
            click.echo(format_tokens(result.tokens))

        if symbols:
            if tokens:
                click.echo()
            click.echo(format_symbols(result.symbols))

        if automata:
            lexer = Lexer("", ErrorCollector(), options)
            for automaton in lexer.automata:
                click.echo()
                click.echo(format_automaton(automaton))

        result.raise_if_errors()

        if verbose:
            click.echo(f"Checked {input_file}: {result.token_count} tokens, no errors")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
