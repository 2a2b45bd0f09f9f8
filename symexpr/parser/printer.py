"""
Canonical printing of expression trees.

Symbols and function applications print bare; every other node prints inside
exactly one pair of parentheses, so the output re-parses to an equal tree
regardless of precedence or associativity.

Author: xwest
"""

from .ast_nodes import (
    BinaryOp, ConjugateTranspose, Expression, Function, Symbol, UnaryOp,
    CONJUGATE_TRANSPOSE
)


def format_expression(expression: Expression) -> str:
    """Render `expression` in fully parenthesised form."""
    if isinstance(expression, Symbol):
        return expression.name
    if isinstance(expression, Function):
        return f"{expression.name}[{format_expression(expression.argument)}]"
    if isinstance(expression, UnaryOp):
        return f"({expression.operator}{format_expression(expression.operand)})"
    if isinstance(expression, BinaryOp):
        left = format_expression(expression.left)
        right = format_expression(expression.right)
        return f"({left} {expression.operator} {right})"
    if isinstance(expression, ConjugateTranspose):
        return f"({format_expression(expression.operand)}{CONJUGATE_TRANSPOSE})"
    raise TypeError(f"Not an expression node: {expression!r}")
