"""
Symbol substitution over expression trees.

Author: xwest
"""

from typing import List, Mapping

from ..parser.ast_nodes import (
    BinaryOp, ConjugateTranspose, Expression, Function, Symbol, UnaryOp
)


def substitute(expression: Expression, replacements: Mapping[str, Expression]) -> Expression:
    """
    Return a copy of `expression` with symbols replaced.

    Every `Symbol` whose name is a key of `replacements` becomes the mapped
    expression; function names are never replaced.
    """
    if isinstance(expression, Symbol):
        return replacements.get(expression.name, expression)
    if isinstance(expression, UnaryOp):
        return UnaryOp(expression.operator, substitute(expression.operand, replacements))
    if isinstance(expression, BinaryOp):
        return BinaryOp(
            substitute(expression.left, replacements),
            expression.operator,
            substitute(expression.right, replacements)
        )
    if isinstance(expression, ConjugateTranspose):
        return ConjugateTranspose(substitute(expression.operand, replacements))
    if isinstance(expression, Function):
        return Function(expression.name, substitute(expression.argument, replacements))
    raise TypeError(f"Not an expression node: {expression!r}")


def symbols_in(expression: Expression) -> List[str]:
    """Leaf symbol names, left to right."""
    if isinstance(expression, Symbol):
        return [expression.name]
    names: List[str] = []
    for child in expression.children():
        names.extend(symbols_in(child))
    return names
