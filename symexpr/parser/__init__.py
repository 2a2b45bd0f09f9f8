"""
symexpr Parser Package

Implements a recursive descent parser that works directly on string slices,
without a tokenizer. Every sub-expression is tracked as a cursor carrying its
absolute offset, so errors point at the exact failing character.

Key Features:
- Bracket-aware operator scanning
- Precedence levels for + - * / ^, prefix signs and postfix '
- Function application with square brackets: name[argument]
- Symbol occurrence table with absolute positions
- Error diagnostics with a context trail

Author: xwest
"""

from .cursor import Cursor
from .scanner import find_split
from .ast_nodes import *
from .errors import (
    ErrorKind, OperandSide, ContextKind, ParseContext, TrailEntry,
    SourceLocation, Diagnostic, ParseError, PARSER_ERROR_CODES
)
from .parser import ExpressionParser, ParserConfig, TraceSink, logging_trace, parse_expression
from .printer import format_expression

__all__ = [
    # Core parser
    "ExpressionParser", "ParserConfig", "TraceSink", "logging_trace",
    "parse_expression", "format_expression",

    # Cursor and scanning
    "Cursor", "find_split",

    # AST nodes
    "Expression", "Symbol", "UnaryOp", "BinaryOp", "ConjugateTranspose", "Function",
    "BinaryOperator", "UnaryOperator", "ParseOutcome", "SymbolOccurrence",

    # Error handling
    "ErrorKind", "OperandSide", "ContextKind", "ParseContext", "TrailEntry",
    "SourceLocation", "Diagnostic", "ParseError", "PARSER_ERROR_CODES",
]
