"""
symexpr Recursive Descent Parser Implementation

Parses arithmetic expressions directly from string slices, one precedence
level per method:

    additive (+ -) -> multiplicative (* /) -> exponential (^)
        -> unary (+ -) -> conjugate transpose (postfix ') -> primary

Binary levels split on the first unbracketed operator. Because `+` and `-`
are both binary operators and prefix signs, a split whose operand turns out
to be missing is retried one candidate further right (skip-and-retry), which
separates `a - -b` from `-b` without a tokenizer.

Author: xwest
"""

import logging
from dataclasses import dataclass
from string import ascii_letters, digits
from typing import Callable, Mapping, Optional

from .cursor import Cursor
from .scanner import find_split
from .ast_nodes import (
    BinaryOp, BinaryOperator, ConjugateTranspose, Function, ParseOutcome,
    Symbol, SymbolOccurrence, UnaryOp, ADDITIVE_OPERATORS, CONJUGATE_TRANSPOSE,
    EXPONENT_OPERATORS, MULTIPLICATIVE_OPERATORS, UNARY_OPERATORS, can_be_unary
)
from .errors import (
    ErrorKind, OperandSide, ParseContext, ParseError,
    create_empty_input_error, create_missing_operand_error,
    create_missing_unary_operand_error,
    create_missing_conjugate_transpose_operand_error,
    create_unmatched_parenthesis_error, create_empty_parentheses_error,
    create_invalid_character_error
)


logger = logging.getLogger("symexpr.parser")

TraceSink = Callable[[str, Cursor], None]
Level = Callable[[Cursor], ParseOutcome]

SYMBOL_CHARACTERS = frozenset(ascii_letters + digits + ".")


def logging_trace(label: str, cursor: Cursor) -> None:
    """Trace sink that reports each level entry on the module logger."""
    logger.debug("%s: %r at offset %d", label, cursor.text, cursor.start)


@dataclass
class ParserConfig:
    """Configuration for expression parsing"""
    trace: Optional[TraceSink] = None  # Called with (level label, cursor) on every level entry
    debug_mode: bool = False  # Falls back to logging_trace when no sink is given


def _combine(left: ParseOutcome, operator: BinaryOperator, right: ParseOutcome) -> ParseOutcome:
    return ParseOutcome(
        BinaryOp(left.expression, operator, right.expression),
        left.symbols + right.symbols
    )


def _is_dangling_sign(error: ParseError, operand: Cursor) -> bool:
    """
    Whether a failed operand simply ran out at its right edge.

    That happens when the operator that ended it was really a prefix sign,
    e.g. the left part `a *` of `a * -b`.
    """
    return error.kind is ErrorKind.MISSING_OPERAND and error.position == operand.trim().end


class ExpressionParser:
    """
    Precedence-climbing recursive descent parser over cursors.

    Holds only configuration, so one instance may be shared freely.
    """

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()
        self._trace = self.config.trace
        if self._trace is None and self.config.debug_mode:
            self._trace = logging_trace

    def parse(self, text: str) -> ParseOutcome:
        """
        Parse a complete expression.

        Returns:
            ParseOutcome with the expression tree and symbol occurrences

        Raises:
            ParseError: With `source` set to `text`
        """
        try:
            outcome = self.parse_additive(Cursor(text, 0))
        except ParseError as error:
            error.source = text
            logger.debug("Failed to parse %r: %s at offset %d",
                         text, error.kind.name, error.position)
            raise
        logger.debug("Parsed %r with %d symbol occurrence(s)", text, len(outcome.symbols))
        return outcome

    def _enter(self, label: str, cursor: Cursor) -> Cursor:
        cursor = cursor.trim()
        if self._trace is not None:
            self._trace(label, cursor)
        if cursor.is_empty:
            raise create_empty_input_error(cursor.start)
        return cursor

    def _parse_operand(self, level: Level, cursor: Cursor,
                       operator: BinaryOperator, side: OperandSide) -> ParseOutcome:
        """Parse one side of a binary operator, recording the context on failure."""
        try:
            return level(cursor)
        except ParseError as error:
            if error.kind is ErrorKind.EMPTY_INPUT:
                error = create_missing_operand_error(side, operator, error.position)
            raise error.push_context(ParseContext.binary_operand(operator, side), cursor)

    # Binary levels

    def parse_additive(self, cursor: Cursor) -> ParseOutcome:
        return self._parse_binary_level("additive", cursor, ADDITIVE_OPERATORS,
                                        self.parse_multiplicative)

    def parse_multiplicative(self, cursor: Cursor) -> ParseOutcome:
        return self._parse_binary_level("multiplicative", cursor, MULTIPLICATIVE_OPERATORS,
                                        self.parse_exponential)

    def _parse_binary_level(self, label: str, cursor: Cursor,
                            operators: Mapping[str, BinaryOperator],
                            next_level: Level) -> ParseOutcome:
        cursor = self._enter(label, cursor)

        skip = 0
        while True:
            split = find_split(skip, operators, cursor)
            if split is None:
                return next_level(cursor)

            left, operator, right = split
            try:
                left_outcome = self._parse_operand(next_level, left, operator, OperandSide.LEFT)
            except ParseError as error:
                if can_be_unary(operator) and _is_dangling_sign(error, left):
                    skip += 1
                    continue
                raise

            return self._fold_chain(left_outcome, operator, right, operators, next_level)

    def _fold_chain(self, left_outcome: ParseOutcome, operator: BinaryOperator,
                    remainder: Cursor, operators: Mapping[str, BinaryOperator],
                    next_level: Level) -> ParseOutcome:
        """Consume the rest of a same-level operator chain, folding to the left."""
        skip = 0
        while True:
            split = find_split(skip, operators, remainder)
            if split is None:
                right_outcome = self._parse_operand(next_level, remainder, operator,
                                                    OperandSide.RIGHT)
                return _combine(left_outcome, operator, right_outcome)

            middle, next_operator, rest = split
            try:
                middle_outcome = self._parse_operand(next_level, middle, operator,
                                                     OperandSide.RIGHT)
            except ParseError as error:
                # Widen the operand past a sign, as in `a - -b - c`
                if can_be_unary(next_operator) and _is_dangling_sign(error, middle):
                    skip += 1
                    continue
                raise

            left_outcome = _combine(left_outcome, operator, middle_outcome)
            operator, remainder, skip = next_operator, rest, 0

    # Exponential level

    def parse_exponential(self, cursor: Cursor) -> ParseOutcome:
        """
        Parse `base ^ exponent`.

        Only the first unbracketed `^` splits. The exponent is parsed from the
        unary level, so `a^b^c` fails on the second `^` and chained powers
        need parentheses.
        """
        cursor = self._enter("exponential", cursor)

        split = find_split(0, EXPONENT_OPERATORS, cursor)
        if split is None:
            return self.parse_unary(cursor)

        left, operator, right = split
        left_outcome = self._parse_operand(self.parse_conjugate_transpose, left,
                                           operator, OperandSide.LEFT)
        right_outcome = self._parse_operand(self.parse_unary, right,
                                            operator, OperandSide.RIGHT)
        return _combine(left_outcome, operator, right_outcome)

    # Prefix and postfix levels

    def parse_unary(self, cursor: Cursor) -> ParseOutcome:
        cursor = self._enter("unary", cursor)

        operator = UNARY_OPERATORS.get(cursor.first())
        if operator is None:
            return self.parse_conjugate_transpose(cursor)

        operand = cursor.advance(1).trim()
        if operand.is_empty:
            raise create_missing_unary_operand_error(operator, operand.start)

        try:
            outcome = self.parse_conjugate_transpose(operand)
        except ParseError as error:
            raise error.push_context(ParseContext.unary_operand(operator), cursor)

        return ParseOutcome(UnaryOp(operator, outcome.expression), outcome.symbols)

    def parse_conjugate_transpose(self, cursor: Cursor) -> ParseOutcome:
        cursor = self._enter("conjugate_transpose", cursor)

        if cursor.last() != CONJUGATE_TRANSPOSE:
            return self.parse_primary(cursor)

        operand = cursor.drop_last().trim()
        if operand.is_empty:
            raise create_missing_conjugate_transpose_operand_error(cursor.start)

        try:
            outcome = self.parse_primary(operand)
        except ParseError as error:
            raise error.push_context(ParseContext.conjugate_transpose_operand(), cursor)

        return ParseOutcome(ConjugateTranspose(outcome.expression), outcome.symbols)

    # Primary level

    def parse_primary(self, cursor: Cursor) -> ParseOutcome:
        """Parse a parenthesised group, a function application or a symbol."""
        cursor = self._enter("primary", cursor)

        if cursor.first() == "(":
            return self._parse_parentheses(cursor)

        bracket = cursor.text.find("[")
        if bracket >= 0:
            return self._parse_function(cursor, bracket)

        return self._parse_symbol(cursor)

    def _parse_parentheses(self, cursor: Cursor) -> ParseOutcome:
        if len(cursor) < 2 or cursor.last() != ")":
            raise create_unmatched_parenthesis_error(")", cursor.end)

        interior = cursor.slice(1, len(cursor) - 1)
        if interior.trim().is_empty:
            raise create_empty_parentheses_error(interior.start)

        try:
            return self.parse_additive(interior)
        except ParseError as error:
            raise error.push_context(ParseContext.parentheses(), cursor)

    def _parse_function(self, cursor: Cursor, bracket: int) -> ParseOutcome:
        if cursor.last() != "]":
            raise create_unmatched_parenthesis_error("]", cursor.end)

        name_cursor = cursor.slice(0, bracket).trim()
        if name_cursor.is_empty:
            raise create_invalid_character_error("[", cursor.start + bracket)
        name = self._validate_symbol(name_cursor)

        argument = cursor.slice(bracket + 1, len(cursor) - 1)
        if argument.trim().is_empty:
            raise create_empty_parentheses_error(argument.start)

        try:
            outcome = self.parse_additive(argument)
        except ParseError as error:
            raise error.push_context(ParseContext.function_argument(name), cursor)

        return ParseOutcome(Function(name, outcome.expression), outcome.symbols)

    def _parse_symbol(self, cursor: Cursor) -> ParseOutcome:
        name = self._validate_symbol(cursor)
        return ParseOutcome(Symbol(name), (SymbolOccurrence(name, cursor.start),))

    @staticmethod
    def _validate_symbol(cursor: Cursor) -> str:
        for index, char in enumerate(cursor.text):
            if char not in SYMBOL_CHARACTERS:
                raise create_invalid_character_error(char, cursor.start + index)
        return cursor.text


def parse_expression(text: str, config: Optional[ParserConfig] = None) -> ParseOutcome:
    """Parse `text` from offset 0. Raises ParseError on failure."""
    return ExpressionParser(config).parse(text)
