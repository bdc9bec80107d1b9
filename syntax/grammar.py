# syntax/grammar.py
# This file is part of Formula Converter - Formula 1.0 to 2.0 rewriting
#
# LALR(1) grammar and parser for formula 1.0 using SLY

"""Formula 1.0 grammar implementation using SLY parser generator.

The parser builds a syntax tree (``syntax.syntax_nodes``) from the token
stream. Besides the supported language (literals, calls, operators,
ternary conditionals and symbols) it also accepts arrays, objects,
assignments, indexing, member access and statement blocks, so that the
normalizer can report them precisely instead of failing the whole parse.
The keyword operators ``and``, ``or``, ``xor`` and ``mod`` followed by an
argument list are function calls.

Operator Precedence (lowest to highest):
- ``=``: right-associative
- ``? :``: right-associative
- ``or``, then ``xor``, then ``and``: left-associative
- ``== != < <= > >=``: left-associative
- ``+ -``, then ``* / % mod``: left-associative
- unary ``- + not !``: right-associative
- ``^``: right-associative, binds tighter than unary minus
- postfix ``[...]`` and ``.name``
"""

from sly import Parser
from .lexer import FormulaLexer
from .syntax_nodes import (
    SyntaxNode,
    ConstantNode,
    SymbolNode,
    CallNode,
    OperatorNode,
    ParenthesisNode,
    ConditionalNode,
    ArrayNode,
    ObjectNode,
    AssignmentNode,
    IndexNode,
    AccessorNode,
    BlockNode,
)
from .exceptions import ParseError
from utils.logger import get_logger


class _FormulaParser(Parser):
    """SLY-based LALR(1) parser for formula 1.0.

    Attributes:
        tokens: Token types from FormulaLexer
        precedence: Operator precedence and associativity rules
    """

    tokens = FormulaLexer.tokens

    precedence = (
        ("right", "ASSIGN"),
        ("right", "QUESTION", "COLON"),
        ("left", "OR"),
        ("left", "XOR"),
        ("left", "AND"),
        ("left", "EQ", "NE", "LT", "LE", "GT", "GE"),
        ("left", "PLUS", "MINUS"),
        ("left", "TIMES", "DIVIDE", "MOD", "MODULO"),
        ("right", "UNARY"),
        ("right", "POW"),
        ("left", "LBRACKET", "DOT"),
    )

    @_("statements", "statements SEMI")
    def start(self, p) -> SyntaxNode:
        """Start rule: one expression, or a block of several."""
        statements = p.statements
        if len(statements) == 1:
            return statements[0]
        return BlockNode(tuple(statements))

    @_("expr")
    def statements(self, p):
        return [p.expr]

    @_("statements SEMI expr")
    def statements(self, p):
        return p.statements + [p.expr]

    # Expression grammar rules
    @_("expr ASSIGN expr")
    def expr(self, p) -> SyntaxNode:
        return AssignmentNode(p.expr0, p.expr1)

    @_("expr QUESTION expr COLON expr")
    def expr(self, p) -> SyntaxNode:
        """Ternary conditional."""
        return ConditionalNode(p.expr0, p.expr1, p.expr2)

    @_(
        "expr OR expr",
        "expr XOR expr",
        "expr AND expr",
        "expr EQ expr",
        "expr NE expr",
        "expr LT expr",
        "expr LE expr",
        "expr GT expr",
        "expr GE expr",
        "expr PLUS expr",
        "expr MINUS expr",
        "expr TIMES expr",
        "expr DIVIDE expr",
        "expr MOD expr",
        "expr MODULO expr",
        "expr POW expr",
    )
    def expr(self, p) -> SyntaxNode:
        """Binary operator; the node keeps the operator's source spelling."""
        return OperatorNode(p[1], (p.expr0, p.expr1))

    @_(
        "MINUS expr %prec UNARY",
        "PLUS expr %prec UNARY",
        "NOT expr %prec UNARY",
        "BANG expr %prec UNARY",
    )
    def expr(self, p) -> SyntaxNode:
        """Prefix unary operator."""
        return OperatorNode(p[0], (p.expr,))

    @_("expr LBRACKET args RBRACKET")
    def expr(self, p) -> SyntaxNode:
        return IndexNode(p.expr, tuple(p.args))

    @_("expr DOT NAME")
    def expr(self, p) -> SyntaxNode:
        return AccessorNode(p.expr, p.NAME)

    @_("expr DOT NAME LPAREN RPAREN")
    def expr(self, p) -> SyntaxNode:
        return AccessorNode(p.expr, p.NAME, ())

    @_("expr DOT NAME LPAREN args RPAREN")
    def expr(self, p) -> SyntaxNode:
        return AccessorNode(p.expr, p.NAME, tuple(p.args))

    @_("LPAREN expr RPAREN")
    def expr(self, p) -> SyntaxNode:
        """Parenthesized expression for grouping."""
        return ParenthesisNode(p.expr)

    @_("NAME LPAREN RPAREN")
    def expr(self, p) -> SyntaxNode:
        return CallNode(p.NAME, ())

    @_("NAME LPAREN args RPAREN")
    def expr(self, p) -> SyntaxNode:
        """Function call."""
        return CallNode(p.NAME, tuple(p.args))

    @_(
        "AND LPAREN RPAREN",
        "OR LPAREN RPAREN",
        "XOR LPAREN RPAREN",
        "MODULO LPAREN RPAREN",
    )
    def expr(self, p) -> SyntaxNode:
        return CallNode(p[0], ())

    @_(
        "AND LPAREN args RPAREN",
        "OR LPAREN args RPAREN",
        "XOR LPAREN args RPAREN",
        "MODULO LPAREN args RPAREN",
    )
    def expr(self, p) -> SyntaxNode:
        """Keyword operator used as a function name, e.g. ``and(a, b)``."""
        return CallNode(p[0], tuple(p.args))

    @_("LBRACKET RBRACKET")
    def expr(self, p) -> SyntaxNode:
        return ArrayNode(())

    @_("LBRACKET args RBRACKET")
    def expr(self, p) -> SyntaxNode:
        return ArrayNode(tuple(p.args))

    @_("LBRACE RBRACE")
    def expr(self, p) -> SyntaxNode:
        return ObjectNode(())

    @_("LBRACE pairs RBRACE")
    def expr(self, p) -> SyntaxNode:
        return ObjectNode(tuple(p.pairs))

    @_("NUMBER")
    def expr(self, p) -> SyntaxNode:
        return ConstantNode(p.NUMBER, "number")

    @_("STRING")
    def expr(self, p) -> SyntaxNode:
        return ConstantNode(p.STRING, "string")

    @_("NAME")
    def expr(self, p) -> SyntaxNode:
        """Bare identifier, e.g. ``pi`` or ``true``."""
        return SymbolNode(p.NAME)

    # Argument and object member lists
    @_("expr")
    def args(self, p):
        return [p.expr]

    @_("args COMMA expr")
    def args(self, p):
        return p.args + [p.expr]

    @_("pair")
    def pairs(self, p):
        return [p.pair]

    @_("pairs COMMA pair")
    def pairs(self, p):
        return p.pairs + [p.pair]

    @_("NAME COLON expr", "STRING COLON expr")
    def pair(self, p):
        return (p[0], p.expr)

    def parse(self, text: str) -> SyntaxNode:
        """Parse formula text into a syntax tree.

        Args:
            text: Formula 1.0 source text

        Returns:
            Root syntax node

        Raises:
            ParseError: If the formula is empty or contains syntax errors
        """
        logger = get_logger()
        logger.debug(f"Parsing formula: {text}")

        try:
            tree = super().parse(FormulaLexer().tokenize(text))

            if tree is None and text.strip() == "":
                raise ParseError("Input formula is empty.")

            if tree is None:
                raise ParseError("Failed to parse formula (syntax error).")

            logger.debug(f"Successfully parsed formula into {type(tree).__name__}")
            return tree

        except ParseError:
            logger.debug("Parse error encountered")
            raise
        except Exception as e:
            logger.debug(f"Unexpected parsing error: {e}")
            raise ParseError(f"Parse failed: {e}")

    def error(self, token):
        """Handle syntax errors during parsing.

        Args:
            token: Problematic token or None for end of input

        Raises:
            ParseError: Always raises with detailed error information
        """
        if token:
            error_msg = (
                f"Syntax error near '{token.value}' "
                f"(type: {token.type}) at position {token.index}"
            )
        else:
            error_msg = "Syntax error: Unexpected end of formula"

        raise ParseError(error_msg)
