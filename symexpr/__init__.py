"""
symexpr Package

Parser for flat arithmetic expressions over symbols, with exact error
positions for every failure.

Architecture:
    symexpr/
    ├── parser/          # Cursors, scanning, grammar levels, errors, printing
    └── analyzer/        # Symbol table and substitution over parse results

Author: xwest
License: MIT
"""

__version__ = "0.1.0-alpha"
__author__ = "xwest"
__email__ = "dev@symexpr.org"
__license__ = "MIT"

from .parser import (
    ExpressionParser,
    ParserConfig,
    ParseError,
    ParseOutcome,
    parse_expression,
    format_expression,
)
from .analyzer import SymbolTable, substitute

__all__ = [
    # Core
    "ExpressionParser",
    "ParserConfig",
    "ParseError",
    "ParseOutcome",
    "parse_expression",
    "format_expression",
    "SymbolTable",
    "substitute",

    # Version info
    "__version__",
    "__author__",
    "__email__",
    "__license__",
]
