"""
Symbol Table
============

Case-insensitive storage for the identifiers of one program. The parser
only needs two operations:

    lookup(name) -> entry or None
    enter(name)  -> entry (created on first use)

Names are folded to lower case, so ``Count``, ``COUNT`` and ``count`` are
the same identifier. The spelling used the first time a name is entered
is kept for display.

AST nodes never hold entries directly; a VARIABLE node stores the entry's
``key`` and later stages resolve it through the table.
"""

from dataclasses import dataclass
from typing import Any, Iterator, Optional


@dataclass
class SymtabEntry:
    """
    One identifier in the symbol table.

    Attributes:
        name: Spelling used when the identifier was first entered
        key: Case-folded name used for lookup
        value: Slot for the execution stage (unused by the parser)
    """
    name: str
    key: str
    value: Any = None


class SymbolTable:
    """Case-insensitive identifier table for a single program."""

    def __init__(self):
        self._entries: dict[str, SymtabEntry] = {}

    @staticmethod
    def fold(name: str) -> str:
        """Return the lookup key for a name."""
        return name.lower()

    def lookup(self, name: str) -> Optional[SymtabEntry]:
        """Return the entry for name, or None if it was never entered."""
        return self._entries.get(self.fold(name))

    def enter(self, name: str) -> SymtabEntry:
        """Return the entry for name, creating it if needed."""
        key = self.fold(name)
        entry = self._entries.get(key)
        if entry is None:
            entry = SymtabEntry(name=name, key=key)
            self._entries[key] = entry
        return entry

    def __contains__(self, name: str) -> bool:
        return self.fold(name) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[SymtabEntry]:
        return iter(self._entries.values())
