"""
Symbol table built from parse results.

Groups the symbol occurrences reported by the parser by name so callers can
look symbols up, list them in order of first appearance, or highlight every
occurrence in the original input.

Author: xwest
"""

from typing import Dict, Iterator, List, Optional, Tuple
from dataclasses import dataclass, field

from ..parser.ast_nodes import ParseOutcome, SymbolOccurrence


@dataclass
class SymbolEntry:
    """All occurrences of one symbol name."""
    name: str
    positions: List[int] = field(default_factory=list)

    @property
    def first_position(self) -> int:
        return self.positions[0]

    @property
    def count(self) -> int:
        return len(self.positions)

    def spans(self) -> List[Tuple[int, int]]:
        """(start, end) offsets of each occurrence."""
        return [(position, position + len(self.name)) for position in self.positions]

    def __str__(self) -> str:
        return f"{self.name} x{self.count}"


class SymbolTable:
    """Symbols of one parsed expression, keyed by name in first-appearance order."""

    def __init__(self):
        self._entries: Dict[str, SymbolEntry] = {}

    @classmethod
    def from_outcome(cls, outcome: ParseOutcome) -> 'SymbolTable':
        table = cls()
        for occurrence in outcome.symbols:
            table.add_occurrence(occurrence.name, occurrence.position)
        return table

    def add_occurrence(self, name: str, position: int) -> SymbolEntry:
        entry = self._entries.get(name)
        if entry is None:
            entry = SymbolEntry(name)
            self._entries[name] = entry
        entry.positions.append(position)
        return entry

    def lookup(self, name: str) -> Optional[SymbolEntry]:
        return self._entries.get(name)

    def names(self) -> List[str]:
        return list(self._entries)

    def occurrences(self) -> List[SymbolOccurrence]:
        """Every occurrence, ordered by position."""
        return sorted(
            (SymbolOccurrence(entry.name, position)
             for entry in self._entries.values()
             for position in entry.positions),
            key=lambda occurrence: occurrence.position
        )

    def highlight_spans(self) -> List[Tuple[int, int]]:
        """(start, end) offsets of every occurrence, ordered by position."""
        return [(occurrence.position, occurrence.position + len(occurrence.name))
                for occurrence in self.occurrences()]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[SymbolEntry]:
        return iter(self._entries.values())
