# model/conversion.py
# This file is part of Formula Converter - Formula 1.0 to 2.0 rewriting
#
# Records produced by a conversion: changes, errors and the final result

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple


@dataclass(frozen=True, slots=True)
class Change:
    """One semantic rewrite performed during conversion.

    Attributes:
        change_identifier: Key into the change catalogue
        context: Extra detail, e.g. ``prop("Name")`` for property rewrites
    """

    change_identifier: str
    context: Optional[str] = None

    def __str__(self) -> str:
        if self.context:
            return f"{self.change_identifier}: {self.context}"
        return self.change_identifier


@dataclass(frozen=True, slots=True)
class FormulaError:
    """One problem found while parsing or rewriting.

    Attributes:
        error_identifier: Key into the error catalogue
        context: Operator name or parser message
    """

    error_identifier: str
    context: Optional[str] = None

    def __str__(self) -> str:
        if self.context:
            return f"{self.error_identifier}: {self.context}"
        return self.error_identifier


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of converting one formula.

    Attributes:
        formula: Formula 2.0 text (best effort when errors are present)
        changes: Changes in traversal order, parents before their arguments
        errors: Errors in traversal order
        props_referenced: Every referenced property name, once each
        props_in_order: The same names in order of first reference
    """

    formula: str = ""
    changes: List[Change] = field(default_factory=list)
    errors: List[FormulaError] = field(default_factory=list)
    props_referenced: Set[str] = field(default_factory=set)
    props_in_order: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-ready representation of the result."""
        return {
            "formula": self.formula,
            "changes": [
                {"changeIdentifier": c.change_identifier, "context": c.context}
                for c in self.changes
            ],
            "errors": [
                {"errorIdentifier": e.error_identifier, "context": e.context}
                for e in self.errors
            ],
            "propsReferenced": list(self.props_in_order),
        }
