"""
tinylang Error Handling
=======================

This module defines two distinct kinds of error for the tinylang front-end.

Diagnostics (records)
---------------------
Problems found in the *program being checked* (an invalid character, an
unclosed string, a redeclared variable) are never raised. The lexer and
the statement checker append an ErrorRecord to a shared ErrorCollector and
keep going, so a single run reports every problem it can find.

Exceptions
----------
Problems with the *caller* or the *environment* are exceptions rooted at
TinyLangError, allowing callers to catch everything from this package with
a single except clause:

TinyLangError (base)
├── AutomatonError - malformed automaton construction
└── CompilationError - raised on request when diagnostics were collected

Record Format
-------------
Each record renders on one line:

    [Line 3] ERROR: Variable 'b' is not declared.

Records without a line number drop the prefix:

    ERROR: description
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional


# =============================================================================
# Exceptions
# =============================================================================

class TinyLangError(Exception):
    """
    Base exception for all tinylang errors.

        try:
            validate_source(text)
        except TinyLangError as e:
            print(f"Error: {e}")
    """
    pass


class AutomatonError(TinyLangError):
    """
    Raised when an automaton is built incorrectly.

    Examples:
        - transition from a state that was never added
        - two different targets for the same (state, symbol) pair
        - a symbol outside the automaton alphabet
        - building without a start state
    """
    pass


class CompilationError(TinyLangError):
    """
    Aggregate error carrying every diagnostic from a run.

    The message is the already formatted report, one record per line.
    """

    def __init__(self, records: List["ErrorRecord"]):
        self.records = list(records)
        super().__init__("\n".join(str(record) for record in self.records))


# =============================================================================
# Diagnostic Records
# =============================================================================

class ErrorKind(Enum):
    """Which stage produced a diagnostic."""
    LEXICAL = auto()
    SEMANTIC = auto()


@dataclass(frozen=True)
class ErrorRecord:
    """
    A single diagnostic.

    Attributes:
        message: Human-readable description
        line: 1-based source line, or None when no line applies
        kind: The stage that reported it
    """
    message: str
    line: Optional[int] = None
    kind: ErrorKind = ErrorKind.SEMANTIC

    def __str__(self) -> str:
        if self.line is not None and self.line >= 0:
            return f"[Line {self.line}] ERROR: {self.message}"
        return f"ERROR: {self.message}"


# =============================================================================
# Error Collection
# =============================================================================

class ErrorCollector:
    """
    Append-only sink for diagnostics.

    One collector is created per run and handed to both the lexer and the
    statement checker. Records are kept in insertion order and are never
    deduplicated.

    Example:
        errors = ErrorCollector()
        tokens = Lexer(source, errors).tokenize()
        StatementChecker(tokens, SymbolTable(), errors).check()

        if errors.has_errors():
            print(errors.format())
    """

    def __init__(self):
        self._records: List[ErrorRecord] = []

    def report(
        self,
        line: Optional[int],
        message: str,
        kind: ErrorKind = ErrorKind.SEMANTIC,
    ) -> ErrorRecord:
        """
        Append a diagnostic.

        Args:
            line: Source line (None if unknown)
            message: Error description
            kind: Producing stage

        Returns:
            The appended record
        """
        record = ErrorRecord(message=message, line=line, kind=kind)
        self._records.append(record)
        return record

    def lexical(self, line: Optional[int], message: str) -> ErrorRecord:
        """Append a diagnostic from the lexer."""
        return self.report(line, message, ErrorKind.LEXICAL)

    def semantic(self, line: Optional[int], message: str) -> ErrorRecord:
        """Append a diagnostic from the statement checker."""
        return self.report(line, message, ErrorKind.SEMANTIC)

    @property
    def records(self) -> List[ErrorRecord]:
        """A copy of the collected records, in insertion order."""
        return list(self._records)

    def has_errors(self) -> bool:
        return len(self._records) > 0

    def error_count(self) -> int:
        return len(self._records)

    def format(self) -> str:
        """Format all records, one per line."""
        return "\n".join(str(record) for record in self._records)

    def report_text(self) -> str:
        """Format all records followed by a summary line."""
        word = "error" if len(self._records) == 1 else "errors"
        summary = f"{len(self._records)} {word}"
        if not self._records:
            return summary
        return f"{self.format()}\n\n{summary}"

    def clear(self) -> None:
        self._records.clear()

    def raise_if_errors(self) -> None:
        """Raise a CompilationError if any records were collected."""
        if self.has_errors():
            raise CompilationError(self._records)
