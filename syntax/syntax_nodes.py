# syntax/syntax_nodes.py
# This file is part of Formula Converter - Formula 1.0 to 2.0 rewriting
#
# Concrete syntax tree produced by the formula grammar

"""Syntax tree node classes built directly by the grammar.

The syntax tree mirrors what the user wrote, including parentheses and
constructs the converter does not support (arrays, objects, assignments,
indexing, member access and statement blocks). The normalizer later turns
it into the formula tree from ``model.formula_nodes``.

Every node renders back to canonical formula text through ``__str__``;
that text is quoted in error messages about unsupported constructs.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

# Operators spelled as words need a space before their operand
WORD_OPERATORS = frozenset({"and", "or", "xor", "not", "mod"})


class SyntaxVisitor(Protocol):
    """Interface for syntax tree visitors."""

    def visit_constant(self, n: ConstantNode): ...

    def visit_symbol(self, n: SymbolNode): ...

    def visit_call(self, n: CallNode): ...

    def visit_operator(self, n: OperatorNode): ...

    def visit_parenthesis(self, n: ParenthesisNode): ...

    def visit_conditional(self, n: ConditionalNode): ...

    def visit_array(self, n: ArrayNode): ...

    def visit_object(self, n: ObjectNode): ...

    def visit_assignment(self, n: AssignmentNode): ...

    def visit_index(self, n: IndexNode): ...

    def visit_accessor(self, n: AccessorNode): ...

    def visit_block(self, n: BlockNode): ...


def _join(nodes) -> str:
    return ", ".join(str(node) for node in nodes)


@dataclass(frozen=True, slots=True)
class SyntaxNode:
    """Base class for all syntax tree nodes."""

    def accept(self, v: SyntaxVisitor):
        raise NotImplementedError

    def __str__(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class ConstantNode(SyntaxNode):
    """Number or string literal.

    Attributes:
        text: Exact source text, including quotes for strings
        kind: ``"number"`` or ``"string"``
    """

    text: str
    kind: str = "number"

    @property
    def is_string(self) -> bool:
        return self.kind == "string"

    def accept(self, v: SyntaxVisitor):
        return v.visit_constant(self)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class SymbolNode(SyntaxNode):
    name: str

    def accept(self, v: SyntaxVisitor):
        return v.visit_symbol(self)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class CallNode(SyntaxNode):
    name: str
    args: Tuple[SyntaxNode, ...] = ()

    def accept(self, v: SyntaxVisitor):
        return v.visit_call(self)

    def __str__(self) -> str:
        return f"{self.name}({_join(self.args)})"


@dataclass(frozen=True, slots=True)
class OperatorNode(SyntaxNode):
    """Unary (one argument) or binary (two arguments) operator."""

    op: str
    args: Tuple[SyntaxNode, ...] = ()

    def accept(self, v: SyntaxVisitor):
        return v.visit_operator(self)

    def __str__(self) -> str:
        if len(self.args) == 1:
            space = " " if self.op in WORD_OPERATORS else ""
            return f"{self.op}{space}{self.args[0]}"
        return f" {self.op} ".join(str(arg) for arg in self.args)


@dataclass(frozen=True, slots=True)
class ParenthesisNode(SyntaxNode):
    content: SyntaxNode

    def accept(self, v: SyntaxVisitor):
        return v.visit_parenthesis(self)

    def __str__(self) -> str:
        return f"({self.content})"


@dataclass(frozen=True, slots=True)
class ConditionalNode(SyntaxNode):
    """Ternary ``condition ? true_expr : false_expr``."""

    condition: Optional[SyntaxNode]
    true_expr: Optional[SyntaxNode]
    false_expr: Optional[SyntaxNode]

    def accept(self, v: SyntaxVisitor):
        return v.visit_conditional(self)

    def __str__(self) -> str:
        return f"{self.condition} ? {self.true_expr} : {self.false_expr}"


@dataclass(frozen=True, slots=True)
class ArrayNode(SyntaxNode):
    items: Tuple[SyntaxNode, ...] = ()

    def accept(self, v: SyntaxVisitor):
        return v.visit_array(self)

    def __str__(self) -> str:
        return f"[{_join(self.items)}]"


@dataclass(frozen=True, slots=True)
class ObjectNode(SyntaxNode):
    """Object literal ``{key: value, ...}``; keys keep their source text."""

    pairs: Tuple[Tuple[str, SyntaxNode], ...] = ()

    def accept(self, v: SyntaxVisitor):
        return v.visit_object(self)

    def __str__(self) -> str:
        body = ", ".join(f"{key}: {value}" for key, value in self.pairs)
        return "{" + body + "}"


@dataclass(frozen=True, slots=True)
class AssignmentNode(SyntaxNode):
    target: SyntaxNode
    value: SyntaxNode

    def accept(self, v: SyntaxVisitor):
        return v.visit_assignment(self)

    def __str__(self) -> str:
        return f"{self.target} = {self.value}"


@dataclass(frozen=True, slots=True)
class IndexNode(SyntaxNode):
    obj: SyntaxNode
    index: Tuple[SyntaxNode, ...]

    def accept(self, v: SyntaxVisitor):
        return v.visit_index(self)

    def __str__(self) -> str:
        return f"{self.obj}[{_join(self.index)}]"


@dataclass(frozen=True, slots=True)
class AccessorNode(SyntaxNode):
    """Member access ``obj.name`` or method call ``obj.name(args)``.

    Attributes:
        args: Call arguments, or None for a plain member access
    """

    obj: SyntaxNode
    name: str
    args: Optional[Tuple[SyntaxNode, ...]] = None

    def accept(self, v: SyntaxVisitor):
        return v.visit_accessor(self)

    def __str__(self) -> str:
        if self.args is None:
            return f"{self.obj}.{self.name}"
        return f"{self.obj}.{self.name}({_join(self.args)})"


@dataclass(frozen=True, slots=True)
class BlockNode(SyntaxNode):
    """Several statements separated by semicolons."""

    statements: Tuple[SyntaxNode, ...]

    def accept(self, v: SyntaxVisitor):
        return v.visit_block(self)

    def __str__(self) -> str:
        return "; ".join(str(s) for s in self.statements)
