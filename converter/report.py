# converter/report.py
# This file is part of Formula Converter - Formula 1.0 to 2.0 rewriting
#
# Human-readable explanations of a conversion result

"""Renders conversion results for people.

Changes and errors only carry an identifier and an optional context. The
functions here look them up in the catalogues of ``converter.rules`` to
produce descriptions, ``before → after`` examples and a plain text report
with the same sections the converter page shows: errors, the referenced
properties with their types, and the list of changes.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List

from model.conversion import Change, ConversionResult, FormulaError
from model.property_types import (
    PROPERTY_TYPES_WITH_CHANGES,
    PropertyMapping,
    resolve_property_type,
)
from .rules import FORMULA_CHANGES, FORMULA_ERRORS


@dataclass(frozen=True)
class ChangeExplanation:
    identifier: str
    description: str
    example: str


def describe_change(change: Change) -> ChangeExplanation:
    """Look up the description and example for a recorded change.

    Raises:
        KeyError: If the identifier is not in the change catalogue
    """
    entry = FORMULA_CHANGES[change.change_identifier]
    return ChangeExplanation(
        identifier=change.change_identifier,
        description=entry.description,
        example=entry.example(change.context or ""),
    )


def describe_error(error: FormulaError) -> str:
    """Return the message for a recorded error."""
    entry = FORMULA_ERRORS.get(error.error_identifier)
    if entry is None:
        return str(error)
    return entry.text(error.context or "")


def render_report(
    result: ConversionResult, property_mapping: PropertyMapping | None = None
) -> str:
    """Render a plain text report for a conversion result.

    Args:
        result: Conversion to explain
        property_mapping: Mapping used for the conversion, to show each
            referenced property's type

    Returns:
        Report text; empty sections are omitted
    """
    sections: List[str] = []

    if result.errors:
        lines = ["Errors"]
        lines.extend(f"  - {describe_error(error)}" for error in result.errors)
        sections.append("\n".join(lines))

    if result.props_in_order:
        lines = [
            "Property types",
            f"  Property types with changes: {', '.join(PROPERTY_TYPES_WITH_CHANGES)}",
        ]
        for name in result.props_in_order:
            try:
                property_type = resolve_property_type(name, property_mapping).value
            except ValueError:
                property_type = str((property_mapping or {}).get(name))
            lines.append(f"  - {name}: {property_type}")
        sections.append("\n".join(lines))

    if result.changes:
        lines = ["Changes"]
        for change in result.changes:
            explanation = describe_change(change)
            lines.append(f"  - {explanation.description}")
            lines.append(f"    Example: {explanation.example}")
        sections.append("\n".join(lines))

    return "\n\n".join(sections)
