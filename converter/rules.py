# converter/rules.py
# This file is part of Formula Converter - Formula 1.0 to 2.0 rewriting
#
# Rewrite tables and the change/error catalogues

"""Static rewrite tables for formula 1.0 to 2.0 conversion.

Tables:
    RENAMED_FUNCTIONS: 1:1 function renames
    BINARY_FUNCTION_TO_OPERATOR: two-argument functions replaced by operators
    SPECIAL_FUNCTIONS: functions with a bespoke rewrite in the rewrite engine
    PROPERTY_TYPE_REWRITES: templates for property references by type

Catalogues:
    FORMULA_CHANGES: change identifier -> description and example generator
    FORMULA_ERRORS: error identifier -> message template

Every change identifier the rewrite engine records is a key of
FORMULA_CHANGES, and every error identifier a key of FORMULA_ERRORS.
"""

from __future__ import annotations
import json
from dataclasses import dataclass
from typing import Callable, Dict, Mapping

from model.property_types import PropertyType

RENAMED_FUNCTIONS: Mapping[str, str] = {
    "slice": "substring",
    "start": "dateStart",
    "end": "dateEnd",
}

# add, subtract, multiply, divide, pow and mod still exist in 2.0. add() no
# longer accepts text, so all of them are rewritten to operators.
BINARY_FUNCTION_TO_OPERATOR: Mapping[str, str] = {
    "add": "+",
    "subtract": "-",
    "multiply": "*",
    "divide": "/",
    "pow": "^",
    "mod": "%",
    "equal": "==",
    "unequal": "!=",
    "larger": ">",
    "largerEq": ">=",
    "smaller": "<",
    "smallerEq": "<=",
    "concat": "+",
}

UNARY_FUNCTIONS = frozenset({"unaryMinus", "unaryPlus"})

# Dispatched through converter.rewriter.SPECIAL_REWRITES
SPECIAL_FUNCTIONS = frozenset({"unaryMinus", "unaryPlus", "day", "month", "join"})

# Functions whose rewrite is an operator expression rather than a call
OPERATOR_RESULT_FUNCTIONS = frozenset({"day", "month"})

PROPERTY_TYPE_REWRITES: Mapping[PropertyType, str] = {
    PropertyType.PERSON: 'join({prop}, map(format(current)), ", ")',
    PropertyType.RELATION: 'join({prop}, map(format(current)), ", ")',
    # 1.0 rollups were joined without a space
    PropertyType.ROLLUP: 'join({prop}, map(format(current)), ",")',
    PropertyType.FILE: 'join({prop}, ", ")',
    PropertyType.MULTI_SELECT: 'join({prop}, ", ")',
    PropertyType.ID: "{prop}.split('-').last().toNumber()",
    PropertyType.OTHER: "{prop}",
}

SYMBOL_CALLS = frozenset({"pi", "e"})


def property_reference(name: str) -> str:
    """Return the ``prop("Name")`` expression for a property name."""
    return f"prop({json.dumps(name, ensure_ascii=False)})"


def rewrite_property(name: str, property_type: PropertyType) -> str:
    """Return the 2.0 expression that reproduces a 1.0 property value."""
    return PROPERTY_TYPE_REWRITES[property_type].format(prop=property_reference(name))


@dataclass(frozen=True)
class ChangeDescription:
    """Catalogue entry explaining one kind of change.

    Attributes:
        description: What changed between 1.0 and 2.0
        example: Builds a ``before → after`` example; property entries use
            the ``prop("Name")`` context, the others ignore it
    """

    description: str
    example: Callable[[str], str]


@dataclass(frozen=True)
class ErrorDescription:
    text: Callable[[str], str]


def _fixed(example: str) -> Callable[[str], str]:
    return lambda context="": example


def _operator_change(name: str, description: str) -> ChangeDescription:
    operator = BINARY_FUNCTION_TO_OPERATOR[name]
    return ChangeDescription(description, _fixed(f"{name}(1, 2) → 1 {operator} 2"))


def _property_change(property_type: PropertyType, description: str) -> ChangeDescription:
    template = PROPERTY_TYPE_REWRITES[property_type]
    return ChangeDescription(
        description,
        lambda context="": f"{context} → {template.format(prop=context)}",
    )


_COMMA_SEPARATED = (
    "In the conversion, we re-map old prop references to the comma-separated "
    "text value to preserve outputs."
)

FORMULA_CHANGES: Dict[str, ChangeDescription] = {
    # Renamed functions
    "slice": ChangeDescription(
        "slice() is now substring(). Note that slice() still exists, but it is now a list function.",
        _fixed('slice("abc", 1, 2) → substring("abc", 1, 2)'),
    ),
    "start": ChangeDescription(
        "start() is now dateStart().",
        _fixed('start(prop("Date")) → dateStart(prop("Date"))'),
    ),
    "end": ChangeDescription(
        "end() is now dateEnd().",
        _fixed('end(prop("Date")) → dateEnd(prop("Date"))'),
    ),
    # Removed functions
    "unaryMinus": ChangeDescription(
        "unaryMinus() is removed.",
        _fixed("unaryMinus(1) → -1"),
    ),
    "unaryPlus": ChangeDescription(
        "unaryPlus() is removed. Use 'toNumber' instead.",
        _fixed('unaryPlus("1") → toNumber("1")'),
    ),
    "larger": _operator_change("larger", "larger() is removed. Use '>' instead."),
    "largerEq": _operator_change("largerEq", "largerEq() is removed. Use '>=' instead."),
    "smaller": _operator_change("smaller", "smaller() is removed. Use '<' instead."),
    "smallerEq": _operator_change("smallerEq", "smallerEq() is removed. Use '<=' instead."),
    "not": ChangeDescription(
        "not() is removed. Use '!' instead.",
        _fixed("not(true) → !true"),
    ),
    # Revised functions
    "add": _operator_change(
        "add",
        "add() no longer supports text values. All usages of add are converted to '+' for safety.",
    ),
    "month": ChangeDescription(
        "month() is now 1-indexed instead of 0-indexed. All existing usages of month subtract 1.",
        _fixed("month(x) → month(x) - 1"),
    ),
    "day": ChangeDescription(
        "day() is now 1-indexed instead of 0-indexed. All usages of day are taken mod 7.",
        _fixed("day(x) → day(x) % 7"),
    ),
    "join": ChangeDescription(
        "join() is now a list function and doesn't work for regular string params. "
        "All usages of join are converted to the new list format.",
        _fixed('join(",", "a", "b", "c") → join(["a", "b", "c"], ",")'),
    ),
    # Converted although still available in 2.0
    "subtract": _operator_change(
        "subtract", "subtract() is converted to `-`. The function is still available in 2.0."
    ),
    "multiply": _operator_change(
        "multiply", "multiply() is converted to `*`. The function is still available in 2.0."
    ),
    "divide": _operator_change(
        "divide", "divide() is converted to `/`. The function is still available in 2.0."
    ),
    "pow": _operator_change(
        "pow", "pow() is converted to `^`. The function is still available in 2.0."
    ),
    "mod": _operator_change(
        "mod", "mod() is converted to `%`. The function is still available in 2.0."
    ),
    "equal": _operator_change(
        "equal", "equal() is converted to `==`. The function is still available in 2.0."
    ),
    "unequal": _operator_change(
        "unequal", "unequal() is converted to `!=`. The function is still available in 2.0."
    ),
    "concat": ChangeDescription(
        "concat() is now only used for lists, so existing usages were converted to `+`.",
        _fixed('concat("a", "b") → "a" + "b"'),
    ),
    # Lookup only: unary + is recorded as unaryPlus
    "+": ChangeDescription(
        "+ as a unary operator is now removed. Use toNumber instead.",
        _fixed('+"1" → toNumber("1")'),
    ),
    # Properties
    "person": _property_change(
        PropertyType.PERSON,
        "In 1.0, Person properties returned comma-separated text values. "
        "In 2.0, they are a list of Person objects. " + _COMMA_SEPARATED,
    ),
    "relation": _property_change(
        PropertyType.RELATION,
        "In 1.0, Relation properties returned comma-separated text values. "
        "In 2.0, they are a list of Page objects. " + _COMMA_SEPARATED,
    ),
    "file": _property_change(
        PropertyType.FILE,
        "In 1.0, File properties returned comma-separated text values. "
        "In 2.0, they are a list of text. " + _COMMA_SEPARATED,
    ),
    "multi-select": _property_change(
        PropertyType.MULTI_SELECT,
        "In 1.0, Multi-select properties returned comma-separated text values. "
        "In 2.0, they are a list of text. " + _COMMA_SEPARATED,
    ),
    "rollup": _property_change(
        PropertyType.ROLLUP,
        'In 1.0, Rollup properties that "show original" returned comma-separated text '
        "values (without a space). In 2.0, they are a list of objects. " + _COMMA_SEPARATED,
    ),
    "id": _property_change(
        PropertyType.ID,
        "In 1.0, ID properties returned the ID number. In 2.0, they return a string "
        'with the prefix, e.g. "TASK-123". In the conversion, we re-map prop '
        "references to the ID number to preserve outputs.",
    ),
    # Constants
    "pi": ChangeDescription(
        "pi is now referred to with parentheses, like pi().",
        _fixed("pi → pi()"),
    ),
    "e": ChangeDescription(
        "e is now referred to with parentheses, like e().",
        _fixed("e → e()"),
    ),
}

FORMULA_ERRORS: Dict[str, ErrorDescription] = {
    "operatorNoArgs": ErrorDescription(
        lambda context="": f"Operator {context} with no arguments"
    ),
    "operatorIncorrectArgs": ErrorDescription(
        lambda context="": f"Operator {context} called with incorrect arguments"
    ),
    "parserError": ErrorDescription(lambda context="": f"Parser error: {context}"),
}
