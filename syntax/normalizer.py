# syntax/normalizer.py
# This file is part of Formula Converter - Formula 1.0 to 2.0 rewriting
#
# Syntax tree to formula tree normalization

"""Normalizes the grammar's syntax tree into the converter's formula tree.

The normalizer is where the supported language is enforced:

1. Unsupported constructs (arrays, objects, assignments, indexing, member
   access, statement blocks) become ``Error`` nodes quoting the fragment.
2. ``prop("Name")`` calls become ``Property`` nodes whose semantic type is
   resolved from the caller's property mapping.
3. Parentheses are dropped; output grouping is decided again by the
   rewrite engine.
4. Left-nested chains of the same operator written without parentheses
   (``a + b + c``) collapse into one n-ary ``Operator``.
5. Unknown bare names become ``Error`` nodes.

Every error node created is also recorded, in creation order, in
``errors``.
"""

from __future__ import annotations
import json
from typing import List, Optional

from . import syntax_nodes as syn
from model import formula_nodes as fn
from model.property_types import PropertyMapping, resolve_property_type
from utils.logger import get_logger

KNOWN_SYMBOLS = ("e", "pi", "true", "false")

# Power is right-associative, so a left-nested ``^`` only exists with parentheses
_NON_CHAINING_OPERATORS = frozenset({"^"})


class FormulaNormalizer(syn.SyntaxVisitor):
    """Transforms a syntax tree into a formula tree.

    Attributes:
        property_mapping: Property name to type mapping used for ``prop()``
        errors: Messages of the error nodes created so far
    """

    def __init__(self, property_mapping: PropertyMapping | None = None):
        self.property_mapping = property_mapping or {}
        self.errors: List[str] = []

    def normalize(self, root: syn.SyntaxNode) -> Optional[fn.FormulaNode]:
        """Normalize a complete syntax tree.

        Args:
            root: Root node returned by the grammar

        Returns:
            Formula tree root, or None when nothing usable remains
        """
        logger = get_logger()
        logger.debug(f"Normalizing syntax tree rooted at {type(root).__name__}")

        self.errors = []
        result = self._visit(root)

        logger.debug(
            f"Normalization complete: {type(result).__name__}, {len(self.errors)} errors"
        )
        return result

    def _visit(self, node: Optional[syn.SyntaxNode]) -> Optional[fn.FormulaNode]:
        if node is None:
            return None
        return node.accept(self)

    def _visit_all(self, nodes) -> tuple:
        """Normalize nodes in order, dropping the ones that produce nothing."""
        visited = (self._visit(node) for node in nodes)
        return tuple(node for node in visited if node is not None)

    def _error(self, message: str) -> fn.Error:
        self.errors.append(message)
        return fn.Error(message)

    def _invalid_syntax(self, n: syn.SyntaxNode) -> fn.Error:
        return self._error(f"Invalid syntax: {n}")

    # Supported constructs
    def visit_constant(self, n: syn.ConstantNode) -> fn.Literal:
        if n.is_string:
            return fn.Literal(requote(n.text))
        return fn.Literal(n.text)

    def visit_symbol(self, n: syn.SymbolNode) -> fn.FormulaNode:
        if n.name in KNOWN_SYMBOLS:
            return fn.Symbol(n.name)
        return self._error(f"Undefined constant:{n.name}")

    def visit_call(self, n: syn.CallNode) -> fn.FormulaNode:
        if n.name == "prop":
            return self._property(n)

        # Function names are not checked; the 2.0 editor reports unknown ones
        return fn.Function(n.name, self._visit_all(n.args))

    def _property(self, n: syn.CallNode) -> fn.FormulaNode:
        if len(n.args) != 1:
            return self._error("Invalid number of arguments passed to prop()")

        arg = n.args[0]
        if not isinstance(arg, syn.ConstantNode):
            return self._error(f"Invalid property reference: {arg}")

        name = unquote(arg.text) if arg.is_string else arg.text
        try:
            property_type = resolve_property_type(name, self.property_mapping)
        except ValueError as e:
            return self._error(f"{e} for property {name!r}")

        return fn.Property(name, property_type)

    def visit_operator(self, n: syn.OperatorNode) -> fn.Operator:
        args = self._visit_all(n.args)

        if (
            len(n.args) == 2
            and n.op not in _NON_CHAINING_OPERATORS
            and isinstance(n.args[0], syn.OperatorNode)
            and args
            and isinstance(args[0], fn.Operator)
            and args[0].symbol == n.op
            and len(args[0].args) >= 2
        ):
            # a OP b OP c reads left to right, so one chain preserves meaning
            args = args[0].args + args[1:]

        return fn.Operator(n.op, args)

    def visit_parenthesis(self, n: syn.ParenthesisNode) -> Optional[fn.FormulaNode]:
        return self._visit(n.content)

    def visit_conditional(self, n: syn.ConditionalNode) -> Optional[fn.FormulaNode]:
        condition = self._visit(n.condition)
        if_true = self._visit(n.true_expr)
        if_false = self._visit(n.false_expr)

        if condition is None:
            return None

        for term in (condition, if_true, if_false):
            if isinstance(term, fn.Error):
                return term

        if if_true is None or if_false is None:
            return self._error(f"Invalid conditional: {n}")

        return fn.Conditional(condition, if_true, if_false)

    # Constructs outside the formula language
    def visit_array(self, n: syn.ArrayNode) -> fn.Error:
        return self._invalid_syntax(n)

    def visit_object(self, n: syn.ObjectNode) -> fn.Error:
        return self._invalid_syntax(n)

    def visit_assignment(self, n: syn.AssignmentNode) -> fn.Error:
        return self._invalid_syntax(n)

    def visit_index(self, n: syn.IndexNode) -> fn.Error:
        return self._invalid_syntax(n)

    def visit_accessor(self, n: syn.AccessorNode) -> fn.Error:
        return self._invalid_syntax(n)

    def visit_block(self, n: syn.BlockNode) -> fn.Error:
        return self._invalid_syntax(n)


def requote(text: str) -> str:
    """Return a string literal in double quotes, keeping its escapes.

    Double quoted literals are returned unchanged. Single quoted literals
    are rewritten so that escaped single quotes become plain and bare
    double quotes become escaped.
    """
    if text.startswith('"'):
        return text

    body = text[1:-1]
    out = []
    i = 0
    while i < len(body):
        char = body[i]
        if char == "\\" and i + 1 < len(body):
            escaped = body[i + 1]
            out.append("'" if escaped == "'" else char + escaped)
            i += 2
            continue
        out.append('\\"' if char == '"' else char)
        i += 1
    return '"' + "".join(out) + '"'


def unquote(text: str) -> str:
    """Return the value of a string literal with its escapes resolved."""
    return json.loads(requote(text), strict=False)
