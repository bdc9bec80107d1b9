# converter/parentheses.py
# This file is part of Formula Converter - Formula 1.0 to 2.0 rewriting
#
# Decides when emitted sub-expressions need parentheses

"""Parenthesization policy for operator and unary positions.

Parentheses in the input are not preserved, so every sub-expression that
is spliced next to an operator is checked here. The policy wraps any child
whose emitted text is itself an operator expression (or a conditional)
without working out precedence or associativity. This can add redundant
parentheses but never changes the meaning of the output.
"""

from __future__ import annotations
from model import formula_nodes as fn
from .rules import BINARY_FUNCTION_TO_OPERATOR, OPERATOR_RESULT_FUNCTIONS, UNARY_FUNCTIONS


def needs_parentheses(node: fn.FormulaNode) -> bool:
    """Return True if the converted text of ``node`` must be wrapped."""
    if isinstance(node, fn.Conditional):
        return True

    if isinstance(node, fn.Function):
        return (
            node.name in BINARY_FUNCTION_TO_OPERATOR
            or node.name in UNARY_FUNCTIONS
            or node.name in OPERATOR_RESULT_FUNCTIONS
        )

    if isinstance(node, fn.Operator):
        return len(node.args) >= 2

    return False


def maybe_wrap_parentheses(node: fn.FormulaNode | None, converted: str) -> str:
    """Wrap ``converted`` in parentheses when ``node`` requires it.

    Args:
        node: Formula node before conversion (None for a missing argument)
        converted: Text already emitted for ``node``

    Returns:
        The text, wrapped if needed
    """
    if node is not None and needs_parentheses(node):
        return f"({converted})"
    return converted
