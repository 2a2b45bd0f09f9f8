"""
Cursor over the unparsed remainder of an expression.

A cursor pairs a slice of the original input with the absolute offset of its
first character, so every failure found deep inside a sub-expression can be
reported against the original string.

Author: xwest
"""

from dataclasses import dataclass


# Exactly the characters stripped by trim(); no locale rules.
WHITESPACE = " \t\r\n"


@dataclass(frozen=True)
class Cursor:
    """
    Immutable view of a substring plus its absolute start offset.

    Every operation returns a new cursor; `start` always counts the
    characters removed from the front of the original input.
    """
    text: str
    start: int = 0

    def __post_init__(self):
        if self.start < 0:
            raise ValueError(f"Cursor start must be non-negative, got {self.start}")

    @property
    def end(self) -> int:
        """Absolute offset one past the last character."""
        return self.start + len(self.text)

    @property
    def is_empty(self) -> bool:
        return not self.text

    def __len__(self) -> int:
        return len(self.text)

    def __bool__(self) -> bool:
        return bool(self.text)

    def __str__(self) -> str:
        return f"{self.text!r}@{self.start}"

    def trim(self) -> 'Cursor':
        """Strip surrounding whitespace, shifting `start` past the leading part."""
        stripped = self.text.lstrip(WHITESPACE)
        leading = len(self.text) - len(stripped)
        return Cursor(stripped.rstrip(WHITESPACE), self.start + leading)

    def advance(self, count: int) -> 'Cursor':
        """Drop `count` leading characters."""
        count = min(count, len(self.text))
        return Cursor(self.text[count:], self.start + count)

    def drop_last(self) -> 'Cursor':
        """Drop the final character."""
        return Cursor(self.text[:-1], self.start)

    def slice(self, begin: int, stop: int) -> 'Cursor':
        """Sub-cursor for the local range [begin, stop)."""
        return Cursor(self.text[begin:stop], self.start + begin)

    def first(self) -> str:
        return self.text[:1]

    def last(self) -> str:
        return self.text[-1:]
