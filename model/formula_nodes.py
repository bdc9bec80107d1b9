# model/formula_nodes.py
# This file is part of Formula Converter - Formula 1.0 to 2.0 rewriting
#
# Normalized expression tree consumed by the rewrite engine

"""Formula tree node classes.

The parser normalizes its syntax tree into these immutable nodes. The
rewrite engine walks them to emit formula 2.0 text. The tree is built fresh
for every parse and never modified afterwards.

Node Types:
    Literal: Number, string or other constant already in source form
    Function: Named call with ordered arguments
    Property: ``prop("Name")`` reference with its resolved semantic type
    Parentheses: Explicit grouping of an inner node
    Operator: Unary operator (one argument) or n-ary operator chain
    Conditional: ``condition ? if_true : if_false``
    Symbol: One of the constants ``pi``, ``e``, ``true``, ``false``
    Error: Unsupported or malformed input, carrying a message and no children

All nodes support the visitor design pattern for traversal.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, Tuple

from .property_types import PropertyType


class FormulaVisitor(Protocol):
    """Interface for formula tree visitors."""

    def visit_literal(self, n: Literal): ...

    def visit_function(self, n: Function): ...

    def visit_property(self, n: Property): ...

    def visit_parentheses(self, n: Parentheses): ...

    def visit_operator(self, n: Operator): ...

    def visit_conditional(self, n: Conditional): ...

    def visit_symbol(self, n: Symbol): ...

    def visit_error(self, n: Error): ...


@dataclass(frozen=True, slots=True)
class FormulaNode:
    """Base class for all formula tree nodes."""

    def accept(self, v: FormulaVisitor):
        """Dispatch to the matching ``visit_*`` method of the visitor."""
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class Literal(FormulaNode):
    """Constant in source form, e.g. ``1.5`` or ``"a\\"b"`` (quotes included)."""

    value: str

    def accept(self, v: FormulaVisitor):
        return v.visit_literal(self)


@dataclass(frozen=True, slots=True)
class Function(FormulaNode):
    """Call of a named function.

    Attributes:
        name: Function name as written in the source
        args: Normalized arguments, with arguments that produced nothing removed
    """

    name: str
    args: Tuple[FormulaNode, ...] = ()

    def accept(self, v: FormulaVisitor):
        return v.visit_function(self)


@dataclass(frozen=True, slots=True)
class Property(FormulaNode):
    """Reference to a page property.

    Attributes:
        name: Unescaped property name
        property_type: Semantic type resolved from the caller's mapping
    """

    name: str
    property_type: PropertyType = PropertyType.OTHER

    def accept(self, v: FormulaVisitor):
        return v.visit_property(self)


@dataclass(frozen=True, slots=True)
class Parentheses(FormulaNode):
    inner: FormulaNode

    def accept(self, v: FormulaVisitor):
        return v.visit_parentheses(self)


@dataclass(frozen=True, slots=True)
class Operator(FormulaNode):
    """Operator application.

    A single argument means a unary operator. Two or more arguments form a
    chain ``a OP b OP c`` evaluated left to right.
    """

    symbol: str
    args: Tuple[FormulaNode, ...] = ()

    @property
    def is_unary(self) -> bool:
        return len(self.args) == 1

    def accept(self, v: FormulaVisitor):
        return v.visit_operator(self)


@dataclass(frozen=True, slots=True)
class Conditional(FormulaNode):
    condition: FormulaNode
    if_true: FormulaNode
    if_false: FormulaNode

    def accept(self, v: FormulaVisitor):
        return v.visit_conditional(self)


@dataclass(frozen=True, slots=True)
class Symbol(FormulaNode):
    name: str

    def accept(self, v: FormulaVisitor):
        return v.visit_symbol(self)


@dataclass(frozen=True, slots=True)
class Error(FormulaNode):
    """Unsupported or malformed input.

    An error node has no children. It contributes no text to the enclosing
    expression and is reported once in the error log.
    """

    message: str

    def accept(self, v: FormulaVisitor):
        return v.visit_error(self)
