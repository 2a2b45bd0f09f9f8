"""
Test suite for parser error reporting.

Tests cover:
- Error kinds and absolute positions
- Context trails built while errors propagate
- Diagnostic rendering with source locations

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from symexpr.parser.ast_nodes import BinaryOperator, UnaryOperator
from symexpr.parser.cursor import Cursor
from symexpr.parser.errors import (
    ContextKind, ErrorKind, OperandSide, ParseContext, ParseError, SourceLocation,
    PARSER_ERROR_CODES, create_missing_operand_error
)
from symexpr.parser.parser import parse_expression


class ParseErrorTestCase(unittest.TestCase):

    def assertParseError(self, text, kind, position):
        """Parse `text`, check kind and position, and return the error."""
        with self.assertRaises(ParseError) as context:
            parse_expression(text)
        error = context.exception
        self.assertIs(error.kind, kind, f"{text!r}: {error!r}")
        self.assertEqual(error.position, position, f"{text!r}: {error!r}")
        return error


class TestErrorKinds(ParseErrorTestCase):
    """Test cases for each error kind and its position."""

    def test_empty_input(self):
        """Test empty and whitespace-only input."""
        self.assertParseError("", ErrorKind.EMPTY_INPUT, 0)
        self.assertParseError("   ", ErrorKind.EMPTY_INPUT, 3)

    def test_missing_left_operand(self):
        """Test a leading non-sign operator."""
        error = self.assertParseError("* b", ErrorKind.MISSING_OPERAND, 0)
        self.assertIs(error.side, OperandSide.LEFT)
        self.assertIs(error.operator, BinaryOperator.MULTIPLY)

    def test_missing_right_operand(self):
        """Test a trailing operator."""
        error = self.assertParseError("a +", ErrorKind.MISSING_OPERAND, 3)
        self.assertIs(error.side, OperandSide.RIGHT)
        self.assertIs(error.operator, BinaryOperator.ADD)

        error = self.assertParseError("a * b /  ", ErrorKind.MISSING_OPERAND, 7)
        self.assertIs(error.operator, BinaryOperator.DIVIDE)

    def test_doubled_operator(self):
        """Test two non-sign operators in a row."""
        error = self.assertParseError("a * * b", ErrorKind.MISSING_OPERAND, 4)
        self.assertIs(error.side, OperandSide.RIGHT)

    def test_missing_exponent_operands(self):
        """Test both sides of `^`."""
        error = self.assertParseError("^ 2", ErrorKind.MISSING_OPERAND, 0)
        self.assertIs(error.operator, BinaryOperator.EXPONENTIATE)
        self.assertIs(error.side, OperandSide.LEFT)
        error = self.assertParseError("x^", ErrorKind.MISSING_OPERAND, 2)
        self.assertIs(error.side, OperandSide.RIGHT)

    def test_missing_unary_operand(self):
        """Test a sign with nothing after it."""
        error = self.assertParseError("-", ErrorKind.MISSING_UNARY_OPERAND, 1)
        self.assertIs(error.operator, UnaryOperator.MINUS)

    def test_missing_conjugate_transpose_operand(self):
        """Test a lone `'`."""
        self.assertParseError("a * '", ErrorKind.MISSING_CONJUGATE_TRANSPOSE_OPERAND, 4)

    def test_empty_parentheses(self):
        """Test `a * () + 3` points just inside the parentheses."""
        self.assertParseError("a * () + 3", ErrorKind.EMPTY_PARENTHESES, 5)

    def test_empty_function_argument(self):
        """Test `f[]` points just inside the brackets."""
        self.assertParseError("f[ ]", ErrorKind.EMPTY_PARENTHESES, 2)

    def test_unmatched_parenthesis(self):
        """Test missing closers point at the end of the input."""
        self.assertParseError("(a + b", ErrorKind.UNMATCHED_PARENTHESIS, 6)
        self.assertParseError("sin[x", ErrorKind.UNMATCHED_PARENTHESIS, 5)
        self.assertParseError("(", ErrorKind.UNMATCHED_PARENTHESIS, 1)

    def test_unmatched_parenthesis_ignores_trailing_whitespace(self):
        """Test the position is just past the last non-blank character."""
        self.assertParseError("sin[x   ", ErrorKind.UNMATCHED_PARENTHESIS, 5)
        self.assertParseError("(a + b \n", ErrorKind.UNMATCHED_PARENTHESIS, 6)

    def test_invalid_character(self):
        """Test `a#b` reports the offending character."""
        error = self.assertParseError("a#b", ErrorKind.INVALID_CHARACTER, 1)
        self.assertEqual(error.character, "#")

    def test_implicit_multiplication_rejected(self):
        """Test juxtaposed symbols are not multiplied."""
        error = self.assertParseError("2 x", ErrorKind.INVALID_CHARACTER, 1)
        self.assertEqual(error.character, " ")

    def test_chained_exponent_rejected(self):
        """Test an unparenthesised second `^` is not a symbol character."""
        error = self.assertParseError("a^b^c", ErrorKind.INVALID_CHARACTER, 3)
        self.assertEqual(error.character, "^")

    def test_repeated_transpose_rejected(self):
        """Test a second `'` needs its operand grouped, as in `(A')'`."""
        error = self.assertParseError("A''", ErrorKind.INVALID_CHARACTER, 1)
        self.assertEqual(error.character, "'")
        self.assertParseError("(a)''", ErrorKind.UNMATCHED_PARENTHESIS, 4)
        self.assertParseError("f[x]''", ErrorKind.UNMATCHED_PARENTHESIS, 5)

    def test_signed_base_needs_parentheses(self):
        """Test a signed exponent base must be grouped."""
        self.assertParseError("-a^2", ErrorKind.INVALID_CHARACTER, 0)

    def test_invalid_function_name(self):
        """Test function names follow symbol rules."""
        error = self.assertParseError("s#n[x]", ErrorKind.INVALID_CHARACTER, 1)
        self.assertEqual(error.character, "#")
        error = self.assertParseError("[x]", ErrorKind.INVALID_CHARACTER, 0)
        self.assertEqual(error.character, "[")

    def test_positions_inside_nested_groups(self):
        """Test positions stay absolute through several levels."""
        error = self.assertParseError("x + f[(a * b?)]", ErrorKind.INVALID_CHARACTER, 12)
        self.assertEqual(error.character, "?")


class TestContextTrail(ParseErrorTestCase):
    """Test cases for the context trail."""

    def test_trail_is_outermost_first(self):
        """Test the trail lists enclosing contexts from the outside in."""
        error = self.assertParseError("a * () + 3", ErrorKind.EMPTY_PARENTHESES, 5)
        self.assertEqual(
            [entry.context for entry in error.trail],
            [
                ParseContext.binary_operand(BinaryOperator.ADD, OperandSide.LEFT),
                ParseContext.binary_operand(BinaryOperator.MULTIPLY, OperandSide.RIGHT),
            ]
        )
        self.assertEqual(error.trail[0].cursor, Cursor("a * () ", 0))
        self.assertEqual(error.trail[1].cursor, Cursor(" ()", 3))

    def test_trail_through_groups_and_functions(self):
        """Test parentheses, functions and signs record their contexts."""
        error = self.assertParseError("-(f[a +])", ErrorKind.MISSING_OPERAND, 7)
        self.assertEqual(
            [entry.context.kind for entry in error.trail],
            [
                ContextKind.UNARY_OPERAND,
                ContextKind.PARENTHESES,
                ContextKind.FUNCTION_ARGUMENT,
                ContextKind.BINARY_OPERAND,
            ]
        )
        self.assertEqual(error.trail[2].context.name, "f")

    def test_nested_missing_operand_is_not_retried(self):
        """Test a failure inside parentheses is reported where it happened."""
        error = self.assertParseError("(a +) - b", ErrorKind.MISSING_OPERAND, 4)
        self.assertIs(error.operator, BinaryOperator.ADD)

    def test_failed_sign_retry_reports_later_error(self):
        """Test disambiguation does not hide genuine errors."""
        self.assertParseError("a - - ", ErrorKind.MISSING_UNARY_OPERAND, 5)


class TestDiagnostics(unittest.TestCase):
    """Test cases for rendering errors."""

    def test_rendering_with_source(self):
        """Test the entry point attaches the source for rendering."""
        with self.assertRaises(ParseError) as context:
            parse_expression("a +")
        error = context.exception
        self.assertEqual(error.source, "a +")
        rendered = str(error)
        self.assertIn("ERROR[P002]: Missing right-hand operand for `+`", rendered)
        self.assertIn("--> 1:4 (offset 3)", rendered)
        self.assertIn("while parsing the right-hand side of `+` at offset 3", rendered)
        self.assertIn("1 | a +\n  |    ^", rendered)

    def test_rendering_without_source(self):
        """Test errors render without a location when no source is known."""
        error = create_missing_operand_error(OperandSide.LEFT, BinaryOperator.DIVIDE, 0)
        rendered = str(error)
        self.assertTrue(rendered.startswith("ERROR[P002]: Missing left-hand operand for `/`"))
        self.assertNotIn("-->", rendered)
        self.assertIsNone(error.location())

    def test_multiline_location(self):
        """Test line and column are derived from absolute offsets."""
        self.assertEqual(SourceLocation.from_offset("a +\nb #", 6), SourceLocation(2, 3, 6))
        with self.assertRaises(ParseError) as context:
            parse_expression("a +\nb #")
        self.assertEqual(str(context.exception.location()), "2:2")

    def test_diagnostic_structure(self):
        """Test the structured diagnostic mirrors the error."""
        with self.assertRaises(ParseError) as context:
            parse_expression("x * (y +)")
        diagnostic = context.exception.diagnostic()
        self.assertEqual(diagnostic.severity, "error")
        self.assertEqual(diagnostic.code, "P002")
        self.assertEqual(len(diagnostic.notes), 3)
        self.assertIn(diagnostic.code, PARSER_ERROR_CODES)

    def test_every_kind_has_a_code(self):
        """Test the error code table covers every kind."""
        for kind in ErrorKind:
            self.assertIn(kind.code, PARSER_ERROR_CODES)


if __name__ == "__main__":
    unittest.main()
