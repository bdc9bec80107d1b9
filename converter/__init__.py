# converter/__init__.py
# This file is part of Formula Converter - Formula 1.0 to 2.0 rewriting
#
# Formula 1.0 to 2.0 conversion entry point

"""Converts formula 1.0 text into formula 2.0 text.

The conversion parses the formula, resolving ``prop("Name")`` references
against a property mapping, then walks the formula tree once to emit 2.0
text while recording every change and error along the way.

Core Functions:
    convert_formula: Complete text to text conversion that never raises

Example:
    >>> from converter import convert_formula
    >>> result = convert_formula('add(prop("Owner"), pi)', {"Owner": "person"})
    >>> result.formula
    'join(prop("Owner"), map(format(current)), ", ") + pi()'
    >>> [c.change_identifier for c in result.changes]
    ['add', 'person', 'pi']
"""

from __future__ import annotations

from model.conversion import ConversionResult
from model.property_types import PropertyMapping
from syntax import parse
from utils.logger import get_logger
from .rewriter import ConversionContext, FormulaRewriter
from .rules import FORMULA_CHANGES, FORMULA_ERRORS
from .report import describe_change, describe_error, render_report

TOO_DEEP = "Formula is nested too deeply"


def convert_formula(
    source: str, property_mapping: PropertyMapping | None = None
) -> ConversionResult:
    """Convert formula 1.0 text to formula 2.0.

    Never raises for any formula text: parse failures, unsupported syntax
    and rewrite problems are all reported in ``errors`` next to the best
    effort output.

    Args:
        source: Formula 1.0 text
        property_mapping: Property name to type; missing names are ``other``

    Returns:
        ConversionResult with the 2.0 formula, changes, errors and the
        referenced property names
    """
    logger = get_logger()

    if not source:
        return ConversionResult()

    logger.conversion_start(source, len(property_mapping or {}))

    parsed = parse(source, property_mapping)
    context = ConversionContext()

    if parsed.formula is None:
        for message in parsed.errors:
            context.record_error("parserError", message)
        return context.to_result("")

    try:
        formula = FormulaRewriter(context).convert(parsed.formula)
    except RecursionError:
        logger.debug("Formula tree is nested too deeply to rewrite")
        context = ConversionContext()
        context.record_error("parserError", TOO_DEEP)
        return context.to_result("")

    result = context.to_result(formula)
    logger.conversion_summary(
        result.formula, len(result.changes), len(result.errors), len(result.props_referenced)
    )
    return result


__all__ = [
    "convert_formula",
    "ConversionContext",
    "FormulaRewriter",
    "FORMULA_CHANGES",
    "FORMULA_ERRORS",
    "describe_change",
    "describe_error",
    "render_report",
]
