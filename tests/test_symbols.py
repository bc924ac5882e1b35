# =============================================================================
# test_symbols.py - Symbol Table Tests
# =============================================================================
# Tests for the scope stack: entering and leaving scopes, lookups, the
# archive of closed frames and snapshots.
# =============================================================================

import pytest

from tinylang.symbols import SymbolTable


@pytest.fixture
def table():
    return SymbolTable()


class TestScopeStack:
    """Tests for enter_scope() / exit_scope()."""

    def test_starts_with_global_frame(self, table):
        assert table.scope_depth() == 1
        assert dict(table.global_scope) == {}

    def test_enter_and_exit(self, table):
        table.enter_scope()
        table.enter_scope()
        assert table.scope_depth() == 3
        table.exit_scope()
        assert table.scope_depth() == 2

    def test_exit_global_is_noop(self, table):
        table.add_symbol("a", "int-global")
        table.exit_scope()
        table.exit_scope()
        assert table.scope_depth() == 1
        assert table.lookup("a")
        assert table.archived_scopes == []

    def test_closed_frame_archived_not_visible(self, table):
        table.enter_scope()
        table.add_symbol("x", "int-local")
        table.exit_scope()

        assert not table.lookup("x")
        assert [dict(frame) for frame in table.archived_scopes] == [{"x": "int-local"}]

    def test_archive_in_closing_order(self, table):
        table.enter_scope()
        table.add_symbol("a", "int-local")
        table.enter_scope()
        table.add_symbol("b", "int-local")
        table.exit_scope()
        table.exit_scope()

        assert [dict(f) for f in table.archived_scopes] == [
            {"b": "int-local"},
            {"a": "int-local"},
        ]


class TestLookup:
    """Tests for exists_in_current_scope() and lookup()."""

    def test_outer_names_visible_inside(self, table):
        table.add_symbol("a", "int-global")
        table.enter_scope()
        assert table.lookup("a")
        assert not table.exists_in_current_scope("a")

    def test_shadowing(self, table):
        table.add_symbol("a", "int-global")
        table.enter_scope()
        table.add_symbol("a", "bool-local")
        assert table.exists_in_current_scope("a")
        table.exit_scope()
        assert dict(table.global_scope) == {"a": "int-global"}

    def test_add_symbol_overwrites(self, table):
        table.add_symbol("a", "int-global")
        table.add_symbol("a", "char-global")
        assert dict(table.global_scope) == {"a": "char-global"}

    def test_unknown_name(self, table):
        assert not table.lookup("zz")


class TestSnapshot:

    def test_snapshot_lists_open_frames(self, table):
        table.add_symbol("g", "int-global")
        table.enter_scope()
        table.add_symbol("a", "int-local")
        table.enter_scope()
        table.add_symbol("b", "int-local")
        table.exit_scope()

        snapshot = table.snapshot()
        assert dict(snapshot.global_scope) == {"g": "int-global"}
        assert [dict(f) for f in snapshot.archived_scopes] == [{"b": "int-local"}]
        assert [dict(f) for f in snapshot.active_scopes] == [{"a": "int-local"}]

    def test_snapshot_is_a_copy(self, table):
        snapshot = table.snapshot()
        table.add_symbol("late", "int-global")
        assert "late" not in snapshot.global_scope

    def test_views_are_read_only(self, table):
        with pytest.raises(TypeError):
            table.global_scope["a"] = "int-global"
