"""
Deterministic Finite Automata
=============================

This module implements the automaton engine used by the lexer for
longest-match classification of variable-length lexemes, together with
the three automata the language needs.

Representation
--------------
States are small integers allocated by AutomatonBuilder in order
(0, 1, 2, ...). Transitions live in a fixed-size table with one row per
state and one column per 7-bit ASCII code; an entry of NO_TRANSITION means
the automaton is stuck. Symbols outside the alphabet never have a
transition, so the simulation stops on them.

Longest Match
-------------
The simulation remembers the largest offset at which it stood in an
accepting state and stops at the first symbol without a transition:

    number automaton on "12.5x"

    offset  symbol  state  accepting
    0       -       q0     no
    1       '1'     q1     yes   <- longest so far: 1
    2       '2'     q1     yes   <- 2
    3       '.'     q2     no
    4       '5'     q3     yes   <- 4
    5       'x'     (stuck)

    longest_accepted_length("12.5x", 0) == 4

Built-in Automata
-----------------
| Factory               | Language                                      |
|-----------------------|-----------------------------------------------|
| identifier_automaton  | [a-z]+                                        |
| number_automaton      | [0-9]+ ('.' [0-9]+)? ([Ee] [+-]? [0-9]+)?     |
| operator_automaton    | [+\\-*/%<>=!] '='?                             |

Example Usage
-------------
>>> from tinylang.automaton import number_automaton
>>> dfa = number_automaton()
>>> dfa.longest_accepted_length("2E10;", 0)
4
>>> dfa.longest_accepted_length("2E", 0)
1
"""

import string
from typing import Iterable, Iterator

from tinylang.errors import AutomatonError


# Number of input symbols in the transition table (7-bit ASCII)
ALPHABET_SIZE = 128

# Table entry for a missing transition
NO_TRANSITION = -1


# =============================================================================
# Automaton
# =============================================================================

class Automaton:
    """
    An immutable deterministic finite automaton.

    Instances are created by AutomatonBuilder.build() and are safe to
    share between lexers; nothing mutates them after construction.

    Attributes:
        name: Descriptive name used in transition table dumps
        start: The start state
        accepting: Frozen set of accepting states
    """

    __slots__ = ("name", "start", "accepting", "_table")

    def __init__(
        self,
        name: str,
        table: list[list[int]],
        start: int,
        accepting: frozenset[int],
    ):
        self.name = name
        self.start = start
        self.accepting = accepting
        # Rows are stored as tuples so the table cannot be modified
        self._table: tuple[tuple[int, ...], ...] = tuple(tuple(row) for row in table)

    def __repr__(self) -> str:
        return (
            f"Automaton({self.name!r}, states={self.state_count}, "
            f"accepting={sorted(self.accepting)})"
        )

    @property
    def state_count(self) -> int:
        """Number of states."""
        return len(self._table)

    def step(self, state: int, symbol: str) -> int:
        """
        Return the target of (state, symbol), or NO_TRANSITION.

        Symbols outside the alphabet (including multi-character strings
        and the empty string) never have a transition.
        """
        if len(symbol) != 1:
            return NO_TRANSITION
        code = ord(symbol)
        if code >= ALPHABET_SIZE:
            return NO_TRANSITION
        return self._table[state][code]

    def longest_accepted_length(self, text: str, start: int = 0) -> int:
        """
        Length of the longest prefix of text[start:] that this automaton accepts.

        The start state counts as a match of length 0 when it is accepting.
        The scan stops at the first symbol with no transition and never
        looks further.

        Args:
            text: The input being scanned
            start: Offset where the match begins

        Returns:
            The match length, or 0 when no accepting state was reached
        """
        state = self.start
        longest = 0
        length = 0

        for pos in range(max(start, 0), len(text)):
            state = self.step(state, text[pos])
            if state == NO_TRANSITION:
                break
            length += 1
            if state in self.accepting:
                longest = length

        return longest

    def accepts(self, text: str) -> bool:
        """Return True if the whole of text is accepted."""
        return len(text) > 0 and self.longest_accepted_length(text) == len(text)

    def transitions(self) -> Iterator[tuple[int, str, int]]:
        """Yield (source, symbol, target) triples in state and symbol order."""
        for src, row in enumerate(self._table):
            for code, dst in enumerate(row):
                if dst != NO_TRANSITION:
                    yield src, chr(code), dst


# =============================================================================
# Builder
# =============================================================================

class AutomatonBuilder:
    """
    Incrementally constructs an Automaton.

    Usage:
        builder = AutomatonBuilder()
        q0 = builder.add_state()
        q1 = builder.add_state(accepting=True)
        builder.set_start(q0)
        builder.add_transition(q0, "ab", q1)
        dfa = builder.build("example")

    Adding the same transition twice is harmless; adding a different
    target for an existing (state, symbol) pair raises AutomatonError.
    """

    def __init__(self):
        self._table: list[list[int]] = []
        self._accepting: set[int] = set()
        self._start: int | None = None

    def add_state(self, accepting: bool = False) -> int:
        """Allocate a new state and return its id."""
        state = len(self._table)
        self._table.append([NO_TRANSITION] * ALPHABET_SIZE)
        if accepting:
            self._accepting.add(state)
        return state

    def set_start(self, state: int) -> None:
        self._check_state(state)
        self._start = state

    def add_transition(self, src: int, symbols: Iterable[str], dst: int) -> None:
        """
        Add transitions from src to dst on every symbol in symbols.

        Raises:
            AutomatonError: On unknown states, symbols outside the
                alphabet, or a conflicting existing transition
        """
        self._check_state(src)
        self._check_state(dst)

        for symbol in symbols:
            if len(symbol) != 1 or ord(symbol) >= ALPHABET_SIZE:
                raise AutomatonError(f"symbol {symbol!r} is outside the automaton alphabet")
            code = ord(symbol)
            existing = self._table[src][code]
            if existing not in (NO_TRANSITION, dst):
                raise AutomatonError(
                    f"non-deterministic transition on {symbol!r} from state {src}: "
                    f"already goes to {existing}, cannot also go to {dst}"
                )
            self._table[src][code] = dst

    def build(self, name: str = "automaton") -> Automaton:
        """Freeze the builder's contents into an Automaton."""
        if self._start is None:
            raise AutomatonError(f"automaton '{name}' has no start state")
        return Automaton(name, self._table, self._start, frozenset(self._accepting))

    def _check_state(self, state: int) -> None:
        if not 0 <= state < len(self._table):
            raise AutomatonError(f"unknown state {state}")


# =============================================================================
# Language Automata
# =============================================================================

OPERATOR_SYMBOLS = "+-*/%<>=!"


def identifier_automaton() -> Automaton:
    """One or more lowercase ASCII letters."""
    builder = AutomatonBuilder()
    q0 = builder.add_state()
    q1 = builder.add_state(accepting=True)
    builder.set_start(q0)

    builder.add_transition(q0, string.ascii_lowercase, q1)
    builder.add_transition(q1, string.ascii_lowercase, q1)
    return builder.build("identifier")


def number_automaton() -> Automaton:
    """
    Integer, decimal and exponent literals.

    States:
        q0 start, q1 integer part (accepting), q2 after '.',
        q3 fraction (accepting), q4 after exponent marker,
        q5 after exponent sign, q6 exponent digits (accepting)
    """
    builder = AutomatonBuilder()
    q0 = builder.add_state()
    q1 = builder.add_state(accepting=True)
    q2 = builder.add_state()
    q3 = builder.add_state(accepting=True)
    q4 = builder.add_state()
    q5 = builder.add_state()
    q6 = builder.add_state(accepting=True)
    builder.set_start(q0)

    digits = string.digits
    builder.add_transition(q0, digits, q1)
    builder.add_transition(q1, digits, q1)
    builder.add_transition(q2, digits, q3)
    builder.add_transition(q3, digits, q3)
    builder.add_transition(q4, digits, q6)
    builder.add_transition(q5, digits, q6)
    builder.add_transition(q6, digits, q6)

    builder.add_transition(q1, ".", q2)
    builder.add_transition(q1, "Ee", q4)
    builder.add_transition(q3, "Ee", q4)
    builder.add_transition(q4, "+-", q5)
    return builder.build("number")


def operator_automaton() -> Automaton:
    """A single operator symbol optionally followed by '='."""
    builder = AutomatonBuilder()
    q0 = builder.add_state()
    q1 = builder.add_state(accepting=True)
    q2 = builder.add_state(accepting=True)
    builder.set_start(q0)

    builder.add_transition(q0, OPERATOR_SYMBOLS, q1)
    builder.add_transition(q1, "=", q2)
    return builder.build("operator")
