"""
Bracket-aware operator scanner.

Locates operator characters at nesting depth zero so that the grammar levels
can split a cursor into left operand, operator and right operand without a
separate tokenizer.

Author: xwest
"""

from typing import Mapping, Optional, Tuple, TypeVar

from .cursor import Cursor


T = TypeVar("T")

OPENERS = {"(": "round", "[": "square"}
CLOSERS = {")": "round", "]": "square"}


def find_split(skip: int, operators: Mapping[str, T],
               cursor: Cursor) -> Optional[Tuple[Cursor, T, Cursor]]:
    """
    Split `cursor` at the (skip+1)-th unbracketed operator character.

    Args:
        skip: Number of candidate operators to pass over first
        operators: Mapping of operator character to the tag returned on a match
        cursor: Text to scan

    Returns:
        (left, tag, right) or None when there are not enough candidates.

    Brackets are not validated. An unclosed opener hides every later
    candidate and a stray closer drives the depth negative, which hides
    them too; both read as "operator not found".
    """
    depth = {"round": 0, "square": 0}
    seen = 0

    for index, char in enumerate(cursor.text):
        if char in OPENERS:
            depth[OPENERS[char]] += 1
        elif char in CLOSERS:
            depth[CLOSERS[char]] -= 1
        elif char in operators and depth["round"] == 0 and depth["square"] == 0:
            if seen == skip:
                left = cursor.slice(0, index)
                right = cursor.slice(index + 1, len(cursor.text))
                return left, operators[char], right
            seen += 1

    return None
