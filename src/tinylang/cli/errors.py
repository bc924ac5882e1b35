"""
Unified CLI Error Handling
==========================

Provides consistent error handling and exit codes for the CLI.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    BUILD_ERROR = 1      # The checked program has diagnostics
    INVALID_ARGS = 2     # Invalid arguments or unreadable files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception and exit with the matching exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always
    """
    from tinylang.errors import CompilationError, TinyLangError
    from tinylang.report import format_errors

    if isinstance(error, CompilationError):
        click.echo(format_errors(error.records), err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, TinyLangError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INTERNAL_ERROR)

    elif isinstance(error, (FileNotFoundError, PermissionError, UnicodeDecodeError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
