"""
Front-End Pipeline Test Suite
=============================

End-to-end tests for the lexer + checker pipeline, configuration, error
records and text reports.

Test Organization
-----------------
- TestFrontEnd: check_source / FrontEnd.run scenarios
- TestFiles: reading sources from disk
- TestValidation: CompilationError raising
- TestErrorCollector: record formatting and collection
- TestOptions: CompilerOptions and environment variables
- TestReports: text renderers
"""

import pytest

from tinylang import (
    CompilationError,
    CompilerOptions,
    ErrorCollector,
    ErrorRecord,
    FrontEnd,
    TokenType,
    check_file,
    check_source,
    validate_source,
)
from tinylang.automaton import operator_automaton
from tinylang.errors import ErrorKind
from tinylang.report import (
    format_automaton,
    format_errors,
    format_symbols,
    format_tokens,
)


SAMPLE_PROGRAM = """\
// sample program
int a = 5;
decimal d = 3.14;
{
    int b = a;
    /* shadow the global */
    int a = 2;
    b = a + d;
}
string s = "hi";
char c = 'x';
a = s;
"""


# =============================================================================
# Pipeline Tests
# =============================================================================

class TestFrontEnd:

    def test_clean_program(self):
        result = check_source(SAMPLE_PROGRAM)
        assert result.success
        assert result.errors == []
        assert dict(result.symbols.global_scope) == {
            "a": "int-global",
            "d": "decimal-global",
            "s": "string-global",
            "c": "char-global",
        }
        assert [dict(f) for f in result.symbols.archived_scopes] == [
            {"b": "int-local", "a": "int-local"},
        ]
        assert result.symbols.active_scopes == ()

    def test_token_stream(self):
        result = check_source("int a = 5;")
        assert [(t.type, t.lexeme) for t in result.tokens] == [
            (TokenType.KEYWORD, "int"),
            (TokenType.IDENTIFIER, "a"),
            (TokenType.OPERATOR, "="),
            (TokenType.NUMBER, "5"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.EOF, ""),
        ]
        assert result.token_count == 6

    def test_lexical_and_semantic_errors_share_one_list(self):
        result = check_source("int a = 1.1234567;\nb = 2; @")
        assert [(e.kind, e.line) for e in result.errors] == [
            (ErrorKind.LEXICAL, 1),
            (ErrorKind.LEXICAL, 2),
            (ErrorKind.SEMANTIC, 2),
        ]
        assert not result.success

    def test_scenarios(self):
        assert len(check_source("int a = 5; int a = 6;").errors) == 1
        assert "already declared" in check_source("int a = 5; int a = 6;").errors[0].message

        undeclared = check_source("b = 1;").errors
        assert len(undeclared) == 1
        assert "not declared" in undeclared[0].message
        assert "'b'" in undeclared[0].message

        block = check_source("{ int a = 1; }")
        assert block.errors == []
        assert dict(block.symbols.global_scope) == {}
        assert [dict(f) for f in block.symbols.archived_scopes] == [{"a": "int-local"}]

    def test_idempotent(self):
        source = SAMPLE_PROGRAM + "\n@ x = 1; {"
        first = check_source(source)
        second = check_source(source)
        assert first.tokens == second.tokens
        assert first.errors == second.errors

    def test_front_end_reusable(self):
        """Runs do not leak symbols or errors into each other."""
        front_end = FrontEnd()
        assert front_end.run("int a = 1;").success
        second = front_end.run("a = 1;")
        assert [e.message for e in second.errors] == ["Variable 'a' is not declared."]

    def test_options_reach_lexer(self):
        result = check_source("decimal d = 1.25;", options=CompilerOptions(max_fraction_digits=1))
        assert [e.message for e in result.errors] == ["Decimal exceeds 1 places: 1.25"]


# =============================================================================
# File Tests
# =============================================================================

class TestFiles:

    def test_check_file(self, tmp_path):
        path = tmp_path / "program.tl"
        path.write_text(SAMPLE_PROGRAM, encoding="utf-8")
        result = check_file(path)
        assert result.success
        assert result.filename == str(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            check_file(tmp_path / "missing.tl")

    def test_encoding_option(self, tmp_path):
        path = tmp_path / "latin.tl"
        path.write_bytes('string s = "caf\xe9";'.encode("latin-1"))
        result = check_file(path, CompilerOptions(encoding="latin-1"))
        assert result.success
        assert result.tokens[3].lexeme == "café"


# =============================================================================
# Validation Tests
# =============================================================================

class TestValidation:

    def test_validate_clean_source(self):
        assert validate_source("int a = 1;").success

    def test_validate_raises_with_records(self):
        with pytest.raises(CompilationError) as excinfo:
            validate_source("b = 1;\nc = 2;")
        assert len(excinfo.value.records) == 2
        assert str(excinfo.value) == (
            "[Line 1] ERROR: Variable 'b' is not declared.\n"
            "[Line 2] ERROR: Variable 'c' is not declared."
        )

    def test_result_raise_if_errors(self):
        result = check_source("int a = 1")
        with pytest.raises(CompilationError):
            result.raise_if_errors()


# =============================================================================
# Error Collector Tests
# =============================================================================

class TestErrorCollector:

    def test_record_formatting(self):
        assert str(ErrorRecord("boom", 3)) == "[Line 3] ERROR: boom"
        assert str(ErrorRecord("boom")) == "ERROR: boom"

    def test_records_kept_in_order_without_dedup(self):
        errors = ErrorCollector()
        errors.lexical(1, "same")
        errors.semantic(1, "same")
        errors.report(None, "no line")
        assert errors.error_count() == 3
        assert [r.kind for r in errors.records] == [
            ErrorKind.LEXICAL, ErrorKind.SEMANTIC, ErrorKind.SEMANTIC,
        ]
        assert errors.format().splitlines()[-1] == "ERROR: no line"

    def test_records_is_a_copy(self):
        errors = ErrorCollector()
        errors.semantic(1, "x")
        errors.records.clear()
        assert errors.has_errors()

    def test_report_text_summary(self):
        errors = ErrorCollector()
        assert errors.report_text() == "0 errors"
        errors.semantic(2, "x")
        assert errors.report_text() == "[Line 2] ERROR: x\n\n1 error"

    def test_clear_and_raise(self):
        errors = ErrorCollector()
        errors.raise_if_errors()
        errors.semantic(1, "x")
        with pytest.raises(CompilationError):
            errors.raise_if_errors()
        errors.clear()
        assert not errors.has_errors()


# =============================================================================
# Configuration Tests
# =============================================================================

class TestOptions:

    def test_defaults(self):
        options = CompilerOptions()
        assert options.max_fraction_digits == 5
        assert options.encoding == "utf-8"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("TINYLANG_MAX_FRACTION_DIGITS", "2")
        monkeypatch.setenv("TINYLANG_ENCODING", "latin-1")
        options = CompilerOptions.from_env()
        assert options.max_fraction_digits == 2
        assert options.encoding == "latin-1"

    def test_from_env_ignores_invalid_values(self, monkeypatch):
        monkeypatch.setenv("TINYLANG_MAX_FRACTION_DIGITS", "many")
        monkeypatch.setenv("TINYLANG_ENCODING", "no-such-codec")
        options = CompilerOptions.from_env()
        assert options.max_fraction_digits == 5
        assert options.encoding == "utf-8"

    def test_from_env_without_variables(self, monkeypatch):
        monkeypatch.delenv("TINYLANG_MAX_FRACTION_DIGITS", raising=False)
        monkeypatch.delenv("TINYLANG_ENCODING", raising=False)
        assert CompilerOptions.from_env() == CompilerOptions()


# =============================================================================
# Report Tests
# =============================================================================

class TestReports:

    def test_format_tokens(self):
        result = check_source("a;")
        assert format_tokens(result.tokens) == (
            "=== Tokens ===\n"
            "IDENTIFIER:a (Line 1)\n"
            "SEMICOLON:; (Line 1)\n"
            "EOF: (Line 1)"
        )

    def test_format_symbols(self):
        result = check_source("int a = 1; { int b = 2; } {")
        assert format_symbols(result.symbols) == (
            "=== Symbol Table ===\n"
            "global scope:\n"
            "  a : int-global\n"
            "local scope (exited):\n"
            "  b : int-local\n"
            "local scope (active):"
        )

    def test_format_errors(self):
        assert format_errors([]) == ""
        text = format_errors(check_source("b = 1;").errors)
        assert text == "=== Errors ===\n[Line 1] ERROR: Variable 'b' is not declared."

    def test_format_automaton(self):
        assert format_automaton(operator_automaton()) == (
            "=== Operator Automaton ===\n"
            "Total States: 3\n"
            "Start State: q0\n"
            "Accepting States: q1, q2\n"
            "Transitions:\n"
            "  q0 --[!%*+-/<=>]--> q1\n"
            "  q1 --[=]--> q2"
        )
