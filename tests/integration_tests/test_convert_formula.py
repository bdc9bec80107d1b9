# tests/integration_tests/test_convert_formula.py
# This file is part of Formula Converter - Formula 1.0 to 2.0 rewriting
#
# End-to-end tests for the conversion entry point

"""End-to-end tests for ``convert_formula``.

Checks the properties every conversion must have: it never raises,
conversions do not leak state into each other, already valid 2.0 text
is stable, and literal text survives untouched.
"""

import pytest
from converter import TOO_DEEP, convert_formula
from model.conversion import Change, ConversionResult, FormulaError
from utils.logger import get_logger


class TestConvertFormula:
    def setup_method(self):
        self.logger = get_logger()

    @pytest.mark.parametrize(
        "source",
        [
            r'"\n\t\""',
            '"plain"',
            '"unicode é ✓"',
            "42",
            "3.14e-2",
        ],
    )
    def test_literals_survive_unchanged(self, source):
        result = convert_formula(source)

        assert result.formula == source
        assert result.changes == []
        assert result.errors == []

    def test_single_quoted_string_becomes_double_quoted(self):
        assert convert_formula("'a\"b'").formula == r'"a\"b"'

    @pytest.mark.parametrize("source", ["", None])
    def test_empty_input(self, source):
        assert convert_formula(source) == ConversionResult()

    def test_whitespace_input(self):
        result = convert_formula("   ")

        assert result.formula == ""
        assert result.errors == []

    def test_readme_example(self):
        result = convert_formula('add(prop("Owner"), pi)', {"Owner": "person"})

        assert result.formula == 'join(prop("Owner"), map(format(current)), ", ") + pi()'
        assert result.changes == [
            Change("add"),
            Change("person", 'prop("Owner")'),
            Change("pi"),
        ]
        assert result.props_referenced == {"Owner"}

    def test_mapping_is_optional(self):
        result = convert_formula('prop("Owner")')

        assert result.formula == 'prop("Owner")'
        assert result.props_referenced == {"Owner"}

    def test_conversions_do_not_share_state(self):
        first = convert_formula("pi")
        second = convert_formula("pi")

        assert first.changes == [Change("pi")]
        assert second.changes == [Change("pi")]
        assert first.changes is not second.changes

    @pytest.mark.parametrize(
        "source",
        [
            "1 + 2",
            "1 + (2 * 3)",
            "(1 + 2) * 3",
            "-(1 + 2)",
            "!true",
            'prop("A") * 2',
            "if(true, 1, 2)",
            "format(now())",
            'substring("abc", 1, 2)',
            '"a" + "b"',
            'prop("A") + prop("B")',
            "and(true, false)",
            'or(prop("A") > 1, false)',
            "if(and(true, false), 1, 2)",
            "xor(true, false)",
            "10 mod 3",
            "true xor false",
            'prop("A") * .5',
            ".5 + 1",
        ],
    )
    def test_valid_output_is_stable(self, source):
        result = convert_formula(source)

        assert result.ok
        assert result.formula == source
        assert result.changes == []

    @pytest.mark.parametrize(
        "source, expected",
        [
            ('prop("A") * .5', 'join(prop("A"), ", ") * .5'),
            ("and(prop(\"A\"), true)", 'and(join(prop("A"), ", "), true)'),
            ('mod(prop("A"), 2) mod 3', '(join(prop("A"), ", ") % 2) mod 3'),
        ],
    )
    def test_keyword_calls_and_bare_decimals(self, source, expected):
        result = convert_formula(source, {"A": "file"})

        assert result.ok
        assert result.formula == expected

    @pytest.mark.parametrize(
        "source",
        ["true ? 1 : 2", "not true", "add(1, 2)", "multiply(add(1, 2), 3)", 'unaryPlus("1")'],
    )
    def test_conversion_is_idempotent(self, source):
        once = convert_formula(source).formula
        twice = convert_formula(once)

        assert twice.formula == once
        assert twice.changes == []

    @pytest.mark.parametrize(
        "source",
        [
            "1 +",
            ")",
            "add(1,",
            "1 @ 2",
            "[1, 2]",
            "x",
            "a.b",
            "x = 1",
            "1; 2",
            'prop("A", "B")',
            "prop(x)",
            "1 : 2",
            "?",
            '"\\q"',
        ],
    )
    def test_never_raises(self, source):
        result = convert_formula(source, {"A": "person"})

        assert isinstance(result, ConversionResult)
        assert not result.ok
        assert all(e.error_identifier == "parserError" for e in result.errors)

    def test_partial_output_next_to_errors(self):
        result = convert_formula("add(1, x)")

        assert result.formula == "1 + "
        assert result.changes == [Change("add")]
        assert result.errors == [FormulaError("parserError", "Undefined constant:x")]

    def test_deep_nesting_is_reported(self):
        source = "(" * 5000 + "1" + ")" * 5000

        result = convert_formula(source)

        assert result.formula == ""
        assert result.errors in (
            [FormulaError("parserError", "Could not parse formula")],
            [FormulaError("parserError", TOO_DEEP)],
        )
