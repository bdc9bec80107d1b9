# converter/rewriter.py
# This file is part of Formula Converter - Formula 1.0 to 2.0 rewriting
#
# Formula tree to formula 2.0 text rewrite engine

"""Rewrite engine emitting formula 2.0 text from a formula tree.

The engine walks the tree once, depth first and left to right. Three
accumulators live in a ``ConversionContext`` created for a single
top-level conversion and shared by every recursive call:

- the change log, ordered so that a node's own change comes before the
  changes produced by its arguments;
- the error log, in traversal order;
- the referenced property names, de-duplicated in first-reference order.

Rewrite priority for function calls:
1. Renamed functions (``slice`` -> ``substring``)
2. Two-argument functions replaced by operators (``add(a, b)`` -> ``a + b``)
3. Special rewrites (``unaryMinus``, ``unaryPlus``, ``day``, ``month``, ``join``)
4. Everything else is emitted unchanged
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from model import formula_nodes as fn
from model.conversion import Change, ConversionResult, FormulaError
from model.property_types import PropertyType
from utils.logger import get_logger
from .parentheses import maybe_wrap_parentheses
from .rules import (
    BINARY_FUNCTION_TO_OPERATOR,
    RENAMED_FUNCTIONS,
    SPECIAL_FUNCTIONS,
    SYMBOL_CALLS,
    property_reference,
    rewrite_property,
)


def _unary_minus(args, converted: List[str]) -> str:
    if not args:
        return "-"
    return "-" + maybe_wrap_parentheses(args[0], converted[0])


def _unary_plus(args, converted: List[str]) -> str:
    return f"toNumber({', '.join(converted)})"


def _day(args, converted: List[str]) -> str:
    return f"day({', '.join(converted)}) % 7"


def _month(args, converted: List[str]) -> str:
    return f"month({', '.join(converted)}) - 1"


def _join(args, converted: List[str]) -> str:
    if not converted:
        return "join([])"
    separator, values = converted[0], converted[1:]
    return f"join([{', '.join(values)}], {separator})"


# Bespoke rewrites, keyed by the names in SPECIAL_FUNCTIONS. Each receives
# the original arguments and their converted text.
SPECIAL_REWRITES: Dict[str, Callable[[Sequence[fn.FormulaNode], List[str]], str]] = {
    "unaryMinus": _unary_minus,
    "unaryPlus": _unary_plus,
    "day": _day,
    "month": _month,
    "join": _join,
}


@dataclass
class ConversionContext:
    """Mutable accumulators for one top-level conversion.

    Never reuse a context across conversions.
    """

    changes: List[Change] = field(default_factory=list)
    errors: List[FormulaError] = field(default_factory=list)
    props_referenced: Dict[str, None] = field(default_factory=dict)

    def mark(self) -> int:
        """Return the change log position before a node's arguments are converted."""
        return len(self.changes)

    def record_change(
        self, identifier: str, context: Optional[str] = None, at: Optional[int] = None
    ) -> None:
        """Record a change, inserted at ``at`` when given, appended otherwise."""
        change = Change(identifier, context)
        if at is None:
            self.changes.append(change)
        else:
            self.changes.insert(at, change)
        get_logger().change_recorded(identifier, context)

    def record_error(self, identifier: str, context: Optional[str] = None) -> None:
        self.errors.append(FormulaError(identifier, context))
        get_logger().error_recorded(identifier, context)

    def reference_property(self, name: str) -> None:
        self.props_referenced.setdefault(name, None)

    def to_result(self, formula: str) -> ConversionResult:
        """Fold the accumulators into an immutable result."""
        return ConversionResult(
            formula=formula,
            changes=list(self.changes),
            errors=list(self.errors),
            props_referenced=set(self.props_referenced),
            props_in_order=tuple(self.props_referenced),
        )


class FormulaRewriter(fn.FormulaVisitor):
    """Emits formula 2.0 text for a formula tree.

    Attributes:
        context: Accumulators shared by the whole walk
    """

    def __init__(self, context: ConversionContext):
        self.context = context

    def convert(self, node: Optional[fn.FormulaNode]) -> str:
        """Return the 2.0 text for ``node`` (empty for a missing node)."""
        if node is None:
            return ""
        return node.accept(self)

    def _convert_all(self, nodes) -> List[str]:
        return [self.convert(node) for node in nodes]

    def visit_literal(self, n: fn.Literal) -> str:
        return n.value

    def visit_error(self, n: fn.Error) -> str:
        self.context.record_error("parserError", n.message)
        return ""

    def visit_parentheses(self, n: fn.Parentheses) -> str:
        return f"({self.convert(n.inner)})"

    def visit_function(self, n: fn.Function) -> str:
        change_index = self.context.mark()
        converted = self._convert_all(n.args)
        name = n.name

        if name in RENAMED_FUNCTIONS:
            self.context.record_change(name, at=change_index)
            return f"{RENAMED_FUNCTIONS[name]}({', '.join(converted)})"

        if name in BINARY_FUNCTION_TO_OPERATOR:
            self.context.record_change(name, at=change_index)
            if len(n.args) != 2:
                self.context.record_error("operatorIncorrectArgs", name)
            operator = BINARY_FUNCTION_TO_OPERATOR[name]
            sides = [
                maybe_wrap_parentheses(arg, text) for arg, text in zip(n.args, converted)
            ]
            return f" {operator} ".join(sides)

        if name in SPECIAL_FUNCTIONS:
            self.context.record_change(name, at=change_index)
            return SPECIAL_REWRITES[name](n.args, converted)

        return f"{name}({', '.join(converted)})"

    def visit_property(self, n: fn.Property) -> str:
        self.context.reference_property(n.name)
        if n.property_type is not PropertyType.OTHER:
            self.context.record_change(n.property_type.value, property_reference(n.name))
        return rewrite_property(n.name, n.property_type)

    def visit_operator(self, n: fn.Operator) -> str:
        symbol = n.symbol

        if not n.args:
            self.context.record_error("operatorNoArgs", symbol)
            return ""

        if n.is_unary:
            change_index = self.context.mark()
            operand = n.args[0]
            converted = self.convert(operand)

            if symbol == "not":
                self.context.record_change("not", at=change_index)
                return "!" + maybe_wrap_parentheses(operand, converted)

            if symbol == "+":
                self.context.record_change("unaryPlus", at=change_index)
                return f"toNumber({converted})"

            return symbol + maybe_wrap_parentheses(operand, converted)

        # Operators with two or more arguments are valid 2.0 as they stand
        converted_args = self._convert_all(n.args)
        return f" {symbol} ".join(
            maybe_wrap_parentheses(arg, text) for arg, text in zip(n.args, converted_args)
        )

    def visit_conditional(self, n: fn.Conditional) -> str:
        terms = (n.condition, n.if_true, n.if_false)
        converted = self._convert_all(terms)
        wrapped = [maybe_wrap_parentheses(term, text) for term, text in zip(terms, converted)]
        return f"if({', '.join(wrapped)})"

    def visit_symbol(self, n: fn.Symbol) -> str:
        if n.name in SYMBOL_CALLS:
            self.context.record_change(n.name)
            return f"{n.name}()"

        # true / false
        return n.name
