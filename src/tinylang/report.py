"""
Text Reports
============

Plain-text renderers for the three products of a run (tokens, symbol
table, diagnostics) and for automaton transition tables. The CLI prints
these; library callers can use them for logging or golden-file tests.

Sample symbol table report:

    === Symbol Table ===
    global scope:
      a : int-global
    local scope (exited):
      b : decimal-local
"""

from typing import Iterable, Mapping

from tinylang.automaton import Automaton
from tinylang.errors import ErrorRecord
from tinylang.lexer import Token
from tinylang.symbols import SymbolSnapshot


def format_tokens(tokens: Iterable[Token]) -> str:
    lines = ["=== Tokens ==="]
    lines.extend(str(token) for token in tokens)
    return "\n".join(lines)


def _format_frame(title: str, frame: Mapping[str, str]) -> list[str]:
    lines = [title]
    for name, label in frame.items():
        lines.append(f"  {name} : {label}")
    return lines


def format_symbols(snapshot: SymbolSnapshot) -> str:
    """Global frame, then archived frames, then frames left open."""
    lines = ["=== Symbol Table ==="]
    lines.extend(_format_frame("global scope:", snapshot.global_scope))
    for frame in snapshot.archived_scopes:
        lines.extend(_format_frame("local scope (exited):", frame))
    for frame in snapshot.active_scopes:
        lines.extend(_format_frame("local scope (active):", frame))
    return "\n".join(lines)


def format_errors(errors: Iterable[ErrorRecord]) -> str:
    """Empty string when there is nothing to report."""
    errors = list(errors)
    if not errors:
        return ""
    lines = ["=== Errors ==="]
    lines.extend(str(record) for record in errors)
    return "\n".join(lines)


def format_automaton(automaton: Automaton) -> str:
    """
    Render a transition table, grouping symbols that share a target.

    Example (operator automaton):
        === Operator Automaton ===
        Total States: 3
        Start State: q0
        Accepting States: q1, q2
        Transitions:
          q0 --[!%*+-/<=>]--> q1
          q1 --[=]--> q2
    """
    accepting = ", ".join(f"q{state}" for state in sorted(automaton.accepting))
    lines = [
        f"=== {automaton.name.capitalize()} Automaton ===",
        f"Total States: {automaton.state_count}",
        f"Start State: q{automaton.start}",
        f"Accepting States: {accepting}",
        "Transitions:",
    ]

    grouped: dict[tuple[int, int], list[str]] = {}
    for src, symbol, dst in automaton.transitions():
        grouped.setdefault((src, dst), []).append(symbol)

    for (src, dst), symbols in grouped.items():
        lines.append(f"  q{src} --[{''.join(symbols)}]--> q{dst}")
    return "\n".join(lines)
