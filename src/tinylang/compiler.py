"""
tinylang Front-End Pipeline
===========================

This module wires the lexer and the statement checker together:

    Source -> Lex -> Check -> CompilationResult

Each run gets its own ErrorCollector and SymbolTable, so running the same
source twice produces identical results and separate runs never share
state.

Usage
-----
Command line:
    $ tlc program.tl --symbols

Programmatic:
    >>> from tinylang import check_source
    >>> result = check_source("int a = 5; a = 6;")
    >>> result.success
    True
    >>> dict(result.symbols.global_scope)
    {'a': 'int-global'}

Error Handling
--------------
Diagnostics are collected in the result, never raised. Callers that want
an exception use CompilationResult.raise_if_errors() or validate_source().
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging

from tinylang.checker import StatementChecker
from tinylang.config import CompilerOptions
from tinylang.errors import CompilationError, ErrorCollector, ErrorRecord
from tinylang.lexer import Lexer, Token
from tinylang.symbols import SymbolSnapshot, SymbolTable


logger = logging.getLogger(__name__)


@dataclass
class CompilationResult:
    """
    Result of a front-end run.

    Attributes:
        filename: Source name used in log messages
        tokens: All tokens, ending with EOF
        symbols: Final symbol table contents
        errors: Diagnostics in the order they were reported
    """
    filename: str = "<input>"
    tokens: list[Token] = field(default_factory=list)
    symbols: Optional[SymbolSnapshot] = None
    errors: list[ErrorRecord] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def token_count(self) -> int:
        return len(self.tokens)

    def raise_if_errors(self) -> None:
        """Raise a CompilationError if any diagnostics were reported."""
        if self.errors:
            raise CompilationError(self.errors)


class FrontEnd:
    """
    Runs the lexer and the statement checker.

    Example:
        front_end = FrontEnd(CompilerOptions(max_fraction_digits=3))
        result = front_end.run_file("program.tl")
        for record in result.errors:
            print(record)

    Attributes:
        options: Front-end configuration
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def run(self, source: str, filename: str = "<input>") -> CompilationResult:
        """
        Tokenize and check source text.

        Args:
            source: Program text
            filename: Name used in log messages

        Returns:
            CompilationResult with tokens, symbols and diagnostics
        """
        errors = ErrorCollector()
        symbols = SymbolTable()

        logger.debug("lexing %s", filename)
        lexer = Lexer(source, errors, self.options)
        tokens = lexer.tokenize()

        logger.debug("checking %s (%d tokens)", filename, len(tokens))
        StatementChecker(tokens, symbols, errors).check()

        result = CompilationResult(
            filename=filename,
            tokens=tokens,
            symbols=symbols.snapshot(),
            errors=errors.records,
        )
        logger.info(
            "%s: %d tokens, %d errors", filename, result.token_count, len(result.errors)
        )
        return result

    def run_file(self, filepath: str | Path) -> CompilationResult:
        """
        Read and check a source file.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding=self.options.encoding)
        return self.run(source, str(path))


# =============================================================================
# Convenience Functions
# =============================================================================

def check_source(
    source: str,
    filename: str = "<input>",
    options: Optional[CompilerOptions] = None,
) -> CompilationResult:
    """Run the front-end on a string."""
    return FrontEnd(options).run(source, filename)


def check_file(
    filepath: str | Path,
    options: Optional[CompilerOptions] = None,
) -> CompilationResult:
    """Run the front-end on a file."""
    return FrontEnd(options).run_file(filepath)


def validate_source(
    source: str,
    filename: str = "<input>",
    options: Optional[CompilerOptions] = None,
) -> CompilationResult:
    """
    Run the front-end and raise if anything was reported.

    Raises:
        CompilationError: Carrying every diagnostic from the run

    Example:
        >>> validate_source("b = 1;")
        Traceback (most recent call last):
        ...
        tinylang.errors.CompilationError: [Line 1] ERROR: Variable 'b' is not declared.
    """
    result = check_source(source, filename, options)
    result.raise_if_errors()
    return result
