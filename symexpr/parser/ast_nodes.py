"""
Abstract Syntax Tree node definitions for symexpr.

The expression tree is a closed set of immutable node types. Nodes compare
structurally, so two parses of equivalent text produce equal trees.

Author: xwest
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Tuple, Union


class BinaryOperator(Enum):
    """Binary operators, valued by their source character."""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    EXPONENTIATE = "^"

    def __str__(self) -> str:
        return self.value


class UnaryOperator(Enum):
    """Prefix sign operators."""
    PLUS = "+"
    MINUS = "-"

    def __str__(self) -> str:
        return self.value


# Operator tables keyed by source character, in scanner form
ADDITIVE_OPERATORS = {"+": BinaryOperator.ADD, "-": BinaryOperator.SUBTRACT}
MULTIPLICATIVE_OPERATORS = {"*": BinaryOperator.MULTIPLY, "/": BinaryOperator.DIVIDE}
EXPONENT_OPERATORS = {"^": BinaryOperator.EXPONENTIATE}
UNARY_OPERATORS = {"+": UnaryOperator.PLUS, "-": UnaryOperator.MINUS}

CONJUGATE_TRANSPOSE = "'"


def can_be_unary(operator: BinaryOperator) -> bool:
    """Whether the operator's character doubles as a prefix sign."""
    return operator.value in UNARY_OPERATORS


# ============================================================================
# Expressions
# ============================================================================

@dataclass(frozen=True)
class Symbol:
    """Leaf symbol (identifier or numeric literal)."""
    name: str

    def children(self) -> List['Expression']:
        return []


@dataclass(frozen=True)
class UnaryOp:
    """Prefix sign applied to an operand."""
    operator: UnaryOperator
    operand: 'Expression'

    def children(self) -> List['Expression']:
        return [self.operand]


@dataclass(frozen=True)
class BinaryOp:
    """Binary operation expression."""
    left: 'Expression'
    operator: BinaryOperator
    right: 'Expression'

    def children(self) -> List['Expression']:
        return [self.left, self.right]


@dataclass(frozen=True)
class ConjugateTranspose:
    """Postfix conjugate transpose (`x'`)."""
    operand: 'Expression'

    def children(self) -> List['Expression']:
        return [self.operand]


@dataclass(frozen=True)
class Function:
    """Bracketed function application (`name[argument]`)."""
    name: str
    argument: 'Expression'

    def children(self) -> List['Expression']:
        return [self.argument]


Expression = Union[Symbol, UnaryOp, BinaryOp, ConjugateTranspose, Function]


# ============================================================================
# Parse results
# ============================================================================

class SymbolOccurrence(NamedTuple):
    """A leaf symbol and the absolute offset of its first character."""
    name: str
    position: int


@dataclass(frozen=True)
class ParseOutcome:
    """Successful parse: the tree plus its symbol occurrences in text order."""
    expression: Expression
    symbols: Tuple[SymbolOccurrence, ...] = ()

    @property
    def symbol_names(self) -> List[str]:
        return [occurrence.name for occurrence in self.symbols]
