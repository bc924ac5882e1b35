"""
tinylang Lexer (Tokenizer)
==========================

This module converts source text into a list of classified tokens. The
variable-length classes (identifiers, numbers, operators) are recognised
by running deterministic automata from tinylang.automaton and taking the
longest accepted prefix; literals and comments use small hand-written
scanners.

Token Categories
----------------
- KEYWORD: if, else, while, for, int, decimal, bool, char, string,
  true, false, input, output
- IDENTIFIER: one or more lowercase letters
- NUMBER: 42, 3.14, 6E23, 1.5E-3
- OPERATOR: + - * / % < > = ! and the same followed by '='
- STRING: "double quoted"
- CHAR: 'x'
- LBRACE, RBRACE, SEMICOLON: { } ;
- EOF: always the last token

Scan Order
----------
At each position the first matching rule wins:

    whitespace -> { } ; -> comment -> string -> char
        -> identifier/keyword -> number -> operator -> invalid character

Comments
--------
- Single-line: // comment
- Multi-line: /* comment */

Escape Sequences
----------------
\\n (newline), \\t (tab), \\r (return); any other escaped character
stands for itself (\\" gives ", \\\\ gives \\).

Error Recovery
--------------
The lexer never raises on bad input. Each problem is appended to the
shared ErrorCollector and scanning continues; an unrecognised character
is skipped, so every loop iteration consumes at least one character.

Example Usage
-------------
>>> from tinylang.errors import ErrorCollector
>>> from tinylang.lexer import Lexer
>>> for token in Lexer("int a = 5;", ErrorCollector()).tokenize():
...     print(token)
KEYWORD:int (Line 1)
IDENTIFIER:a (Line 1)
OPERATOR:= (Line 1)
NUMBER:5 (Line 1)
SEMICOLON:; (Line 1)
EOF: (Line 1)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional
import logging
import re

from tinylang.automaton import (
    Automaton,
    identifier_automaton,
    number_automaton,
    operator_automaton,
)
from tinylang.config import CompilerOptions
from tinylang.errors import ErrorCollector


logger = logging.getLogger(__name__)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """The closed set of token kinds."""
    KEYWORD = auto()
    IDENTIFIER = auto()
    NUMBER = auto()
    OPERATOR = auto()
    STRING = auto()
    CHAR = auto()
    LBRACE = auto()
    RBRACE = auto()
    SEMICOLON = auto()
    EOF = auto()


# =============================================================================
# Keyword Tables
# =============================================================================

# Type keywords start a declaration
TYPE_KEYWORDS: frozenset[str] = frozenset({
    "int", "decimal", "bool", "char", "string",
})

KEYWORDS: frozenset[str] = TYPE_KEYWORDS | frozenset({
    # Control flow
    "if", "else", "while", "for",
    # Literals
    "true", "false",
    # I/O
    "input", "output",
})

# Characters that may start an operator. '^' is admitted here but has no
# transition in the operator automaton, so it ends up as an invalid
# character.
OPERATOR_START = "=<>!+-*/%^"

PUNCTUATION: dict[str, TokenType] = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    ";": TokenType.SEMICOLON,
}

ESCAPE_SEQUENCES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
}

_VALID_EXPONENT = re.compile(r".*[Ee][+-]?\d+")


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token.

    Attributes:
        type: The TokenType classification
        lexeme: Matched text (escapes resolved for STRING and CHAR)
        line: Line on which the token starts (1-indexed)
    """
    type: TokenType
    lexeme: str
    line: int

    def __str__(self) -> str:
        return f"{self.type.name}:{self.lexeme} (Line {self.line})"

    def is_type_keyword(self) -> bool:
        """Return True if this token starts a declaration."""
        return self.type == TokenType.KEYWORD and self.lexeme in TYPE_KEYWORDS

    def is_assign(self) -> bool:
        """Return True if this token is the '=' operator."""
        return self.type == TokenType.OPERATOR and self.lexeme == "="


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes tinylang source code.

    The automata are built once per lexer and are available as attributes
    for inspection (the CLI prints their transition tables).

    Usage:
        errors = ErrorCollector()
        tokens = Lexer(source_text, errors).tokenize()

    Attributes:
        source: The text being tokenized
        errors: Shared diagnostic sink
        options: Front-end options (fraction digit limit)
        identifier_dfa, number_dfa, operator_dfa: The lexical automata
    """

    def __init__(
        self,
        source: str,
        errors: ErrorCollector,
        options: Optional[CompilerOptions] = None,
    ):
        self.source = source
        self.errors = errors
        self.options = options or CompilerOptions()

        self.identifier_dfa: Automaton = identifier_automaton()
        self.number_dfa: Automaton = number_automaton()
        self.operator_dfa: Automaton = operator_automaton()

        self._pos = 0
        self._line = 1

    @property
    def automata(self) -> list[Automaton]:
        return [self.identifier_dfa, self.number_dfa, self.operator_dfa]

    def tokenize(self) -> list[Token]:
        """
        Scan the whole source.

        Returns:
            Tokens in source order, terminated by exactly one EOF token
        """
        tokens: list[Token] = []

        while not self._at_end():
            token = self._scan_token()
            if token is not None:
                tokens.append(token)

        tokens.append(Token(TokenType.EOF, "", self._line))
        logger.debug("Total tokens: %d", len(tokens))
        return tokens

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Character at current position + offset, or "" past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume one character, counting newlines."""
        char = self.source[self._pos]
        self._pos += 1
        if char == "\n":
            self._line += 1
        return char

    def _take(self, length: int) -> str:
        """Consume a match found by an automaton."""
        lexeme = self.source[self._pos:self._pos + length]
        for _ in range(length):
            self._advance()
        return lexeme

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Optional[Token]:
        """
        Apply the scan rules at the current position.

        Returns:
            A token, or None when the position held whitespace, a comment
            or an invalid character
        """
        char = self._peek()
        start_line = self._line

        if char.isspace():
            self._advance()
            return None

        if char in PUNCTUATION:
            self._advance()
            return Token(PUNCTUATION[char], char, start_line)

        if char == "/" and self._peek(1) in ("/", "*"):
            self._skip_comment()
            return None

        if char == '"':
            return Token(TokenType.STRING, self._scan_string(), start_line)

        if char == "'":
            return Token(TokenType.CHAR, self._scan_char(), start_line)

        if char.isalpha():
            length = self.identifier_dfa.longest_accepted_length(self.source, self._pos)
            if length > 0:
                lexeme = self._take(length)
                token_type = TokenType.KEYWORD if lexeme in KEYWORDS else TokenType.IDENTIFIER
                return Token(token_type, lexeme, start_line)

        if char.isdigit():
            length = self.number_dfa.longest_accepted_length(self.source, self._pos)
            if length > 0:
                lexeme = self._take(length)
                self._validate_number(lexeme, start_line)
                return Token(TokenType.NUMBER, lexeme, start_line)

        if char in OPERATOR_START:
            length = self.operator_dfa.longest_accepted_length(self.source, self._pos)
            if length > 0:
                return Token(TokenType.OPERATOR, self._take(length), start_line)

        self.errors.lexical(start_line, f"Invalid character: '{char}'")
        self._advance()
        return None

    def _validate_number(self, lexeme: str, line: int) -> None:
        """Report over-long fractions and malformed exponents."""
        limit = self.options.max_fraction_digits
        if "." in lexeme:
            fraction = re.split(r"[Ee]", lexeme.split(".", 1)[1])[0]
            if len(fraction) > limit:
                self.errors.lexical(line, f"Decimal exceeds {limit} places: {lexeme}")

        if "E" in lexeme.upper() and not _VALID_EXPONENT.fullmatch(lexeme):
            self.errors.lexical(line, f"Invalid exponent: {lexeme}")

    # =========================================================================
    # Comments and Literals
    # =========================================================================

    def _skip_comment(self) -> None:
        """Skip a // or /* */ comment starting at the current position."""
        start_line = self._line
        self._advance()  # consume /

        if self._advance() == "/":
            while not self._at_end() and self._peek() != "\n":
                self._advance()
            return

        while not self._at_end():
            if self._peek() == "*" and self._peek(1) == "/":
                self._advance()  # consume *
                self._advance()  # consume /
                return
            self._advance()

        self.errors.lexical(start_line, "Unclosed multi-line comment")

    def _scan_escape(self) -> str:
        """Resolve the character after a backslash ("" at end of input)."""
        if self._at_end():
            return ""
        char = self._advance()
        return ESCAPE_SEQUENCES.get(char, char)

    def _scan_string(self) -> str:
        """Scan a double-quoted string literal and return its value."""
        start_line = self._line
        self._advance()  # consume opening "

        chars = []
        while not self._at_end():
            char = self._advance()
            if char == '"':
                return "".join(chars)
            if char == "\\":
                chars.append(self._scan_escape())
            else:
                chars.append(char)

        self.errors.lexical(start_line, "Unclosed string literal")
        return "".join(chars)

    def _scan_char(self) -> str:
        """Scan a character literal: exactly one character or escape."""
        start_line = self._line
        self._advance()  # consume opening '

        value = ""
        if not self._at_end():
            char = self._advance()
            value = self._scan_escape() if char == "\\" else char

        if self._peek() == "'":
            self._advance()
        else:
            self.errors.lexical(start_line, "Unclosed character literal")
        return value
