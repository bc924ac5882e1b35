"""
Scoped Symbol Table
===================

The symbol table is a stack of scope frames. Each frame maps an
identifier to a label combining its declared type and visibility:

    int a = 1;          global frame:  a -> int-global
    {
        decimal b = 2;  local frame:   b -> decimal-local
    }

Frame 0 is the global frame. It is created with the table and is never
popped, so the stack always holds at least one frame. When a block closes,
its frame leaves the stack and a copy is kept in the archive; archived
frames are reported but no longer take part in lookups.

Lookup Rules
------------
- exists_in_current_scope() looks at the innermost frame only; this is
  what redeclaration checks use, so shadowing an outer name is allowed.
- lookup() searches from the innermost frame outwards.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping
import logging


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SymbolSnapshot:
    """
    Read-only view of a symbol table at the end of a run.

    Attributes:
        global_scope: Contents of the global frame
        archived_scopes: Closed local frames, in closing order
        active_scopes: Local frames still open (only after a missing
            closing brace), in opening order
    """
    global_scope: Mapping[str, str]
    archived_scopes: tuple[Mapping[str, str], ...]
    active_scopes: tuple[Mapping[str, str], ...]


class SymbolTable:
    """Stack of scope frames with an archive of closed frames."""

    def __init__(self):
        self._scopes: list[dict[str, str]] = [{}]
        self._archived: list[dict[str, str]] = []

    def enter_scope(self) -> None:
        """Push a new empty frame."""
        self._scopes.append({})
        logger.debug("enter scope (depth %d)", len(self._scopes))

    def exit_scope(self) -> None:
        """
        Pop the innermost frame and archive a copy of it.

        Does nothing when only the global frame is left.
        """
        if len(self._scopes) > 1:
            frame = self._scopes.pop()
            self._archived.append(dict(frame))
            logger.debug("exit scope (depth %d, %d symbols)", len(self._scopes), len(frame))

    def add_symbol(self, name: str, label: str) -> None:
        """Insert or overwrite name in the innermost frame."""
        self._scopes[-1][name] = label

    def exists_in_current_scope(self, name: str) -> bool:
        return name in self._scopes[-1]

    def lookup(self, name: str) -> bool:
        """Return True if name is visible from the innermost frame."""
        for frame in reversed(self._scopes):
            if name in frame:
                return True
        return False

    def scope_depth(self) -> int:
        """Number of active frames (1 means only the global frame)."""
        return len(self._scopes)

    @property
    def global_scope(self) -> Mapping[str, str]:
        return MappingProxyType(self._scopes[0])

    @property
    def archived_scopes(self) -> list[Mapping[str, str]]:
        return [MappingProxyType(frame) for frame in self._archived]

    @property
    def active_scopes(self) -> list[Mapping[str, str]]:
        """Open local frames, outermost first (the global frame excluded)."""
        return [MappingProxyType(frame) for frame in self._scopes[1:]]

    def snapshot(self) -> SymbolSnapshot:
        """Copy the current contents into a SymbolSnapshot."""
        return SymbolSnapshot(
            global_scope=MappingProxyType(dict(self._scopes[0])),
            archived_scopes=tuple(MappingProxyType(dict(f)) for f in self._archived),
            active_scopes=tuple(MappingProxyType(dict(f)) for f in self._scopes[1:]),
        )
