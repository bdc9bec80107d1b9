# model/__init__.py
# This file is part of Formula Converter - Formula 1.0 to 2.0 rewriting
#
# Data model exports

from .property_types import (
    PropertyType,
    PropertyMapping,
    PROPERTY_TYPES,
    PROPERTY_TYPES_WITH_CHANGES,
    PROPERTY_TYPES_STRING,
    resolve_property_type,
)
from .formula_nodes import (
    FormulaNode,
    FormulaVisitor,
    Literal,
    Function,
    Property,
    Parentheses,
    Operator,
    Conditional,
    Symbol,
    Error,
)
from .conversion import Change, FormulaError, ConversionResult

__all__ = [
    "PropertyType",
    "PropertyMapping",
    "PROPERTY_TYPES",
    "PROPERTY_TYPES_WITH_CHANGES",
    "PROPERTY_TYPES_STRING",
    "resolve_property_type",
    "FormulaNode",
    "FormulaVisitor",
    "Literal",
    "Function",
    "Property",
    "Parentheses",
    "Operator",
    "Conditional",
    "Symbol",
    "Error",
    "Change",
    "FormulaError",
    "ConversionResult",
]
