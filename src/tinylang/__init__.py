"""
tinylang - DFA Lexer and Scope Checker
======================================

This package implements the front-end of tinylang, a small block-scoped
language with typed variable declarations:

    int a = 5;
    {
        decimal b = 1.25;
        a = b;
    }

The front-end performs no evaluation. It provides:

- An automaton engine and the identifier, number and operator automata
- A lexer that classifies source text into tokens by longest match
- A scoped symbol table
- A statement checker for declarations, assignments and blocks

Pipeline
--------
    Source -> Lexer -> tokens -> StatementChecker -> symbols + diagnostics

Diagnostics are collected, never raised, so a single run reports every
problem it finds.

Quick Start
-----------
    >>> from tinylang import check_source
    >>> result = check_source("int a = 5; int a = 6;")
    >>> [str(e) for e in result.errors]
    ["[Line 1] ERROR: Variable 'a' already declared in this scope."]

Or use the command-line tool:
    $ tlc program.tl --tokens --symbols
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from tinylang.automaton import (
    Automaton,
    AutomatonBuilder,
    identifier_automaton,
    number_automaton,
    operator_automaton,
)
from tinylang.checker import StatementChecker
from tinylang.compiler import (
    CompilationResult,
    FrontEnd,
    check_file,
    check_source,
    validate_source,
)
from tinylang.config import CompilerOptions
from tinylang.errors import (
    AutomatonError,
    CompilationError,
    ErrorCollector,
    ErrorKind,
    ErrorRecord,
    TinyLangError,
)
from tinylang.lexer import KEYWORDS, TYPE_KEYWORDS, Lexer, Token, TokenType
from tinylang.symbols import SymbolSnapshot, SymbolTable

__all__ = [
    # Version
    "__version__",
    # Pipeline
    "FrontEnd",
    "CompilationResult",
    "CompilerOptions",
    "check_source",
    "check_file",
    "validate_source",
    # Automata
    "Automaton",
    "AutomatonBuilder",
    "identifier_automaton",
    "number_automaton",
    "operator_automaton",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "KEYWORDS",
    "TYPE_KEYWORDS",
    # Symbols
    "SymbolTable",
    "SymbolSnapshot",
    # Checker
    "StatementChecker",
    # Errors
    "TinyLangError",
    "AutomatonError",
    "CompilationError",
    "ErrorCollector",
    "ErrorKind",
    "ErrorRecord",
]
