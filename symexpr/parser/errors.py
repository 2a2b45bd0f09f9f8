"""
Error handling for the symexpr parser.

Every failure carries an absolute position in the original input, a closed
error kind, and a context trail that grows outward as the error propagates
through the grammar levels. Errors render themselves as IDE-friendly
diagnostics once the entry point has attached the source text.

Author: xwest
"""

from typing import Optional, List, NamedTuple, Union
from dataclasses import dataclass, field
from enum import Enum

from .cursor import Cursor
from .ast_nodes import BinaryOperator, UnaryOperator


class ErrorKind(Enum):
    """Closed set of parse failures, valued by their error code."""
    EMPTY_INPUT = "P001"
    MISSING_OPERAND = "P002"
    MISSING_UNARY_OPERAND = "P003"
    MISSING_CONJUGATE_TRANSPOSE_OPERAND = "P004"
    UNMATCHED_PARENTHESIS = "P005"
    EMPTY_PARENTHESES = "P006"
    INVALID_CHARACTER = "P007"

    @property
    def code(self) -> str:
        return self.value


class OperandSide(Enum):
    """Which side of a binary operator an operand belongs to."""
    LEFT = "left"
    RIGHT = "right"


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Empty input",
    "P002": "Missing operand for binary operator",
    "P003": "Missing operand for unary operator",
    "P004": "Missing operand for conjugate transpose",
    "P005": "Unmatched parenthesis",
    "P006": "Empty parentheses",
    "P007": "Invalid character in symbol",
}


# ============================================================================
# Context trail
# ============================================================================

class ContextKind(Enum):
    """Grammar situations recorded on an error's trail."""
    BINARY_OPERAND = "binary_operand"
    UNARY_OPERAND = "unary_operand"
    CONJUGATE_TRANSPOSE_OPERAND = "conjugate_transpose_operand"
    PARENTHESES = "parentheses"
    FUNCTION_ARGUMENT = "function_argument"


@dataclass(frozen=True)
class ParseContext:
    """Tag describing what a grammar level was parsing when a failure passed through."""
    kind: ContextKind
    operator: Optional[Union[BinaryOperator, UnaryOperator]] = None
    side: Optional[OperandSide] = None
    name: Optional[str] = None

    @classmethod
    def binary_operand(cls, operator: BinaryOperator, side: OperandSide) -> 'ParseContext':
        return cls(ContextKind.BINARY_OPERAND, operator=operator, side=side)

    @classmethod
    def unary_operand(cls, operator: UnaryOperator) -> 'ParseContext':
        return cls(ContextKind.UNARY_OPERAND, operator=operator)

    @classmethod
    def conjugate_transpose_operand(cls) -> 'ParseContext':
        return cls(ContextKind.CONJUGATE_TRANSPOSE_OPERAND)

    @classmethod
    def parentheses(cls) -> 'ParseContext':
        return cls(ContextKind.PARENTHESES)

    @classmethod
    def function_argument(cls, name: str) -> 'ParseContext':
        return cls(ContextKind.FUNCTION_ARGUMENT, name=name)

    def describe(self) -> str:
        """Breadcrumb phrase, e.g. "the right-hand side of `+`"."""
        if self.kind is ContextKind.BINARY_OPERAND:
            return f"the {self.side.value}-hand side of `{self.operator}`"
        if self.kind is ContextKind.UNARY_OPERAND:
            return f"the operand of unary `{self.operator}`"
        if self.kind is ContextKind.CONJUGATE_TRANSPOSE_OPERAND:
            return "the operand of the conjugate transpose `'`"
        if self.kind is ContextKind.PARENTHESES:
            return "the contents of parentheses"
        return f"the argument of `{self.name}[...]`"


class TrailEntry(NamedTuple):
    """One step of an error's context trail."""
    context: ParseContext
    cursor: Cursor


# ============================================================================
# Diagnostics
# ============================================================================

@dataclass
class SourceLocation:
    """
    Represents a location in the parsed input.

    Lines and columns are 1-based; `offset` is the absolute character offset.
    """
    line: int
    column: int
    offset: int

    @classmethod
    def from_offset(cls, source: str, offset: int) -> 'SourceLocation':
        offset = max(0, min(offset, len(source)))
        line = source.count("\n", 0, offset) + 1
        column = offset - source.rfind("\n", 0, offset)  # rfind gives -1 on the first line
        return cls(line, column, offset)

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass
class Diagnostic:
    """Structured, printable description of a parse failure."""
    message: str
    location: Optional[SourceLocation]
    severity: str
    code: Optional[str] = None
    help_text: Optional[str] = None
    notes: List[str] = field(default_factory=list)
    snippet: Optional[str] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        code = f"[{self.code}]" if self.code else ""
        result = f"{severity_prefix}{code}: {self.message}\n"
        if self.location is not None:
            result += f"  --> {self.location} (offset {self.location.offset})\n"

        for note in self.notes:
            result += f"  {note}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.snippet:
            result += self.snippet

        return result


def _render_snippet(source: str, location: SourceLocation) -> str:
    lines = source.split("\n")
    line_text = lines[location.line - 1] if location.line <= len(lines) else ""
    gutter = " " * len(str(location.line))
    return (
        f"{gutter} |\n"
        f"{location.line} | {line_text}\n"
        f"{gutter} | {' ' * (location.column - 1)}^\n"
    )


class ParseError(Exception):
    """
    Exception raised when an expression cannot be parsed.

    `position` is always absolute. `trail` lists the grammar contexts the
    failure passed through, outermost first. `source` is attached by the
    entry point and enables line/column rendering.
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        position: int,
        side: Optional[OperandSide] = None,
        operator: Optional[Union[BinaryOperator, UnaryOperator]] = None,
        character: Optional[str] = None,
        help_text: Optional[str] = None,
        trail: Optional[List[TrailEntry]] = None,
        source: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.position = position
        self.side = side
        self.operator = operator
        self.character = character
        self.help_text = help_text
        self.trail: List[TrailEntry] = list(trail or [])
        self.source = source

    @property
    def code(self) -> str:
        return self.kind.code

    def push_context(self, context: ParseContext, cursor: Cursor) -> 'ParseError':
        """Prepend a context entry; called by each enclosing level on the way out."""
        self.trail.insert(0, TrailEntry(context, cursor))
        return self

    def location(self) -> Optional[SourceLocation]:
        if self.source is None:
            return None
        return SourceLocation.from_offset(self.source, self.position)

    def breadcrumbs(self) -> List[str]:
        return [
            f"while parsing {entry.context.describe()} at offset {entry.cursor.start}"
            for entry in self.trail
        ]

    def diagnostic(self) -> Diagnostic:
        location = self.location()
        snippet = _render_snippet(self.source, location) if location is not None else None
        return Diagnostic(
            message=self.message,
            location=location,
            severity="error",
            code=self.code,
            help_text=self.help_text,
            notes=self.breadcrumbs(),
            snippet=snippet
        )

    def __str__(self) -> str:
        return str(self.diagnostic())

    def __repr__(self) -> str:
        return f"ParseError({self.kind.name}, position={self.position}, message={self.message!r})"


# Helper functions for creating common parser errors

def create_empty_input_error(position: int) -> ParseError:
    """Create an error for an empty (or whitespace-only) expression."""
    return ParseError(
        message="Empty expression",
        kind=ErrorKind.EMPTY_INPUT,
        position=position,
        help_text="An expression was expected here."
    )


def create_missing_operand_error(side: OperandSide, operator: BinaryOperator,
                                 position: int) -> ParseError:
    """Create an error for a binary operator lacking one of its operands."""
    return ParseError(
        message=f"Missing {side.value}-hand operand for `{operator}`",
        kind=ErrorKind.MISSING_OPERAND,
        position=position,
        side=side,
        operator=operator,
        help_text=f"The operator `{operator}` needs an expression on its {side.value}."
    )


def create_missing_unary_operand_error(operator: UnaryOperator, position: int) -> ParseError:
    """Create an error for a sign with nothing after it."""
    return ParseError(
        message=f"Missing operand after unary `{operator}`",
        kind=ErrorKind.MISSING_UNARY_OPERAND,
        position=position,
        operator=operator,
        help_text=f"The sign `{operator}` must be followed by an expression."
    )


def create_missing_conjugate_transpose_operand_error(position: int) -> ParseError:
    """Create an error for a `'` with nothing before it."""
    return ParseError(
        message="Missing operand before conjugate transpose `'`",
        kind=ErrorKind.MISSING_CONJUGATE_TRANSPOSE_OPERAND,
        position=position,
        help_text="The postfix `'` must follow an expression."
    )


def create_unmatched_parenthesis_error(closing: str, position: int) -> ParseError:
    """Create an error for an opening bracket that is never closed."""
    return ParseError(
        message="Unmatched parenthesis",
        kind=ErrorKind.UNMATCHED_PARENTHESIS,
        position=position,
        help_text=f"Add a closing '{closing}'."
    )


def create_empty_parentheses_error(position: int) -> ParseError:
    """Create an error for `()` or `name[]`."""
    return ParseError(
        message="Empty parentheses",
        kind=ErrorKind.EMPTY_PARENTHESES,
        position=position,
        help_text="Brackets must enclose an expression."
    )


def create_invalid_character_error(char: str, position: int) -> ParseError:
    """Create an error for a character that cannot appear in a symbol."""
    return ParseError(
        message=f"Invalid character: '{char}'",
        kind=ErrorKind.INVALID_CHARACTER,
        position=position,
        character=char,
        help_text="Symbols may only contain ASCII letters, digits and '.'."
    )
