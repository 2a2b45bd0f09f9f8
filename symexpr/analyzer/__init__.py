"""
symexpr Analyzer Package

Consumers of parse results: the symbol occurrence table and substitution of
symbols by other expressions.

Author: xwest
"""

from .symbol_table import SymbolTable, SymbolEntry
from .substitution import substitute, symbols_in

__all__ = [
    "SymbolTable",
    "SymbolEntry",
    "substitute",
    "symbols_in",
]
