"""
tinylang Command-Line Interface
===============================

This package provides the command-line tool for the tinylang front-end:

- **tlc**: tokenize and check a source file, printing tokens, the symbol
  table, automaton transition tables and diagnostics

The tool is implemented as a Click-based CLI application.
"""

__all__ = ["tlc"]
