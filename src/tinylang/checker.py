"""
tinylang Statement Checker
==========================

A single-pass walk over the token list that tracks block scopes and
checks declarations and variable usage.

Statement Forms
---------------
    block        ::= '{' statement* '}'
    declaration  ::= TYPE_KEYWORD IDENTIFIER '=' expr ';'
    assignment   ::= IDENTIFIER '=' expr ';'
    expr         ::= any tokens up to ';'

The expression after '=' is not parsed; it is scanned token by token and
every identifier in it must be visible in some active scope.

Any other token at statement position (a stray ';', an operator, a
keyword that is not a type) is skipped without a diagnostic. This is a
known leniency of the language, not an oversight.

Scopes
------
'{' pushes a frame and '}' pops it. A declaration at depth 1 is labelled
"<type>-global", anything deeper "<type>-local". Redeclaration is only
checked against the innermost frame, so inner blocks may shadow outer
names.

Error Recovery
--------------
Nothing here raises on bad input. Each problem goes to the shared
ErrorCollector and checking resumes at the next plausible token, so the
token list is consumed exactly once. Open braces live on an explicit
stack rather than the call stack. Every block still open at EOF reports
the line of its '{', innermost first, and leaves its frame open.

Example Usage
-------------
>>> errors = ErrorCollector()
>>> symbols = SymbolTable()
>>> tokens = Lexer("int a = 5; a = b;", errors).tokenize()
>>> StatementChecker(tokens, symbols, errors).check()
>>> print(errors.format())
[Line 1] ERROR: Variable 'b' is not declared.
"""

import logging

from tinylang.errors import ErrorCollector
from tinylang.lexer import Token, TokenType
from tinylang.symbols import SymbolTable


logger = logging.getLogger(__name__)


class StatementChecker:
    """
    Checks a token list against a scope-aware symbol table.

    Attributes:
        tokens: Tokens from the lexer, ending with EOF
        symbols: Symbol table mutated during the walk
        errors: Shared diagnostic sink
    """

    def __init__(
        self,
        tokens: list[Token],
        symbols: SymbolTable,
        errors: ErrorCollector,
    ):
        self.tokens = tokens
        self.symbols = symbols
        self.errors = errors
        self._pos = 0
        self._open_braces: list[Token] = []

    def check(self) -> None:
        """Walk every statement until the EOF token."""
        while not self._at_end():
            self._check_statement()

        # Innermost first
        while self._open_braces:
            open_brace = self._open_braces.pop()
            self.errors.semantic(open_brace.line, "Missing closing brace")

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _peek(self) -> Token:
        if self._pos >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[self._pos]

    def _at_end(self) -> bool:
        return self._pos >= len(self.tokens) or self._peek().type == TokenType.EOF

    def _advance(self) -> Token:
        token = self._peek()
        if not self._at_end():
            self._pos += 1
        return token

    def _check(self, token_type: TokenType) -> bool:
        return not self._at_end() and self._peek().type == token_type

    # =========================================================================
    # Statements
    # =========================================================================

    def _check_statement(self) -> None:
        token = self._peek()

        if token.type == TokenType.LBRACE:
            self._open_block()
        elif token.type == TokenType.RBRACE:
            self._close_block()
        elif token.is_type_keyword():
            self._check_declaration()
        elif token.type == TokenType.IDENTIFIER:
            self._check_assignment()
        else:
            self._advance()

    def _open_block(self) -> None:
        self._open_braces.append(self._advance())
        self.symbols.enter_scope()

    def _close_block(self) -> None:
        self._advance()
        # A '}' with nothing open is skipped like any stray token
        if self._open_braces:
            self._open_braces.pop()
            self.symbols.exit_scope()

    def _check_declaration(self) -> None:
        type_token = self._advance()
        type_name = type_token.lexeme
        line = type_token.line

        if not self._check(TokenType.IDENTIFIER):
            self.errors.semantic(line, f"Expected identifier after type keyword {type_name}")
            return

        ident_token = self._advance()
        name = ident_token.lexeme

        # The lexer accepts any run of lowercase letters; declared names
        # are limited to a single letter.
        if len(name) != 1:
            self.errors.semantic(
                ident_token.line,
                f"Invalid identifier '{name}'. Must be a single lowercase letter.",
            )

        if self.symbols.exists_in_current_scope(name):
            self.errors.semantic(
                ident_token.line,
                f"Variable '{name}' already declared in this scope.",
            )
        else:
            visibility = "global" if self.symbols.scope_depth() == 1 else "local"
            self.symbols.add_symbol(name, f"{type_name}-{visibility}")
            logger.debug("declared %s as %s-%s", name, type_name, visibility)

        if self._peek().is_assign():
            self._advance()
        else:
            self.errors.semantic(line, f"Expected '=' in declaration for variable {name}")

        self._check_expression("Variable '{}' used in initialization is not declared.")

        if self._check(TokenType.SEMICOLON):
            self._advance()
        else:
            self.errors.semantic(line, f"Missing semicolon after declaration of {name}")

    def _check_assignment(self) -> None:
        ident_token = self._advance()
        name = ident_token.lexeme
        line = ident_token.line

        if not self.symbols.lookup(name):
            self.errors.semantic(line, f"Variable '{name}' is not declared.")

        if self._peek().is_assign():
            self._advance()
        else:
            self.errors.semantic(line, f"Expected '=' in assignment for variable {name}")

        self._check_expression("Variable '{}' is not declared.")

        if self._check(TokenType.SEMICOLON):
            self._advance()
        else:
            self.errors.semantic(line, f"Missing semicolon in assignment for variable {name}")

    def _check_expression(self, undeclared_message: str) -> None:
        """
        Consume tokens up to ';' or EOF, checking identifier references.

        Args:
            undeclared_message: Format string taking the identifier name
        """
        while not self._at_end() and not self._check(TokenType.SEMICOLON):
            token = self._advance()
            if token.type == TokenType.IDENTIFIER and not self.symbols.lookup(token.lexeme):
                self.errors.semantic(token.line, undeclared_message.format(token.lexeme))
