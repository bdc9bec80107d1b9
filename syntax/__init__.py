# syntax/__init__.py
# This file is part of Formula Converter - Formula 1.0 to 2.0 rewriting
#
# Formula 1.0 parsing and normalization components

"""Formula 1.0 parsing and normalization.

The parsing pipeline tokenizes formula text, builds a syntax tree with an
LALR(1) grammar and normalizes that tree into the formula tree consumed by
the rewrite engine. Property references are resolved against the
caller's property mapping along the way.

Core Functions:
    parse_syntax: Converts formula text into a syntax tree (raises ParseError)
    parse: Complete text to formula tree pipeline that never raises

Grammar Features:
    - Number and string literals, function calls, ``prop("Name")``
    - Arithmetic, comparison and boolean operators with precedence
    - Ternary conditionals ``a ? b : c``
    - The constants ``e``, ``pi``, ``true`` and ``false``

Example:
    >>> from syntax import parse
    >>> result = parse('prop("Due") > 1', {"Due": "other"})
    >>> result.formula
    Operator(symbol='>', args=(Property(...), Literal(value='1')))
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from .exceptions import ParseError
from .grammar import _FormulaParser
from .normalizer import FormulaNormalizer
from .syntax_nodes import SyntaxNode
from model.formula_nodes import FormulaNode
from model.property_types import PropertyMapping
from utils.logger import get_logger

COULD_NOT_PARSE = "Could not parse formula"


@dataclass(frozen=True)
class ParseResult:
    """Formula tree plus the parse errors met while building it.

    Attributes:
        formula: Root of the formula tree, or None when parsing failed
        errors: Error messages in the order they were produced
    """

    formula: Optional[FormulaNode] = None
    errors: List[str] = field(default_factory=list)


def parse_syntax(source: str) -> SyntaxNode:
    """Parse formula text into a syntax tree.

    Uses a fresh parser instance for each invocation.

    Args:
        source: Formula 1.0 text

    Returns:
        Root syntax node

    Raises:
        ParseError: Formula is malformed or contains illegal characters
    """
    logger = get_logger()
    parser = _FormulaParser()

    try:
        return parser.parse(source)

    except ParseError:
        logger.debug("ParseError encountered during formula parsing")
        raise

    except Exception as exc:
        logger.debug(f"Unexpected parsing error: {type(exc).__name__}: {exc}")
        raise ParseError(str(exc)) from exc


def parse(source: str, property_mapping: PropertyMapping | None = None) -> ParseResult:
    """Parse formula text into a formula tree.

    Empty input gives an empty result. Malformed input gives no tree and a
    single "could not parse" error; partial trees are never returned.
    Unsupported constructs inside otherwise valid input become ``Error``
    nodes whose messages are also listed in ``errors``.

    Args:
        source: Formula 1.0 text
        property_mapping: Property name to type; missing names are ``other``

    Returns:
        ParseResult with the formula tree and error messages
    """
    logger = get_logger()

    if not source or not source.strip():
        logger.debug("Empty formula, nothing to parse")
        return ParseResult()

    try:
        tree = parse_syntax(source)
    except ParseError as exc:
        logger.debug(f"Could not parse formula: {exc}")
        return ParseResult(None, [COULD_NOT_PARSE])

    normalizer = FormulaNormalizer(property_mapping)
    try:
        formula = normalizer.normalize(tree)
    except RecursionError:
        logger.debug("Formula is nested too deeply to normalize")
        return ParseResult(None, [COULD_NOT_PARSE])

    if formula is None:
        return ParseResult(None, [COULD_NOT_PARSE])

    return ParseResult(formula, list(normalizer.errors))


__all__ = ["parse", "parse_syntax", "ParseResult", "ParseError", "COULD_NOT_PARSE"]
