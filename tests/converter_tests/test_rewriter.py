# tests/converter_tests/test_rewriter.py
# This file is part of Formula Converter - Formula 1.0 to 2.0 rewriting
#
# Test suite for the formula 2.0 rewrite engine

"""Test suite for the rewrite engine.

Each rule family is checked through ``convert_formula`` for the emitted
text and the recorded changes and errors. The ordering of the change log
and a few nodes the parser never produces are tested against the engine
directly.
"""

import pytest
from converter import convert_formula
from converter.rewriter import ConversionContext, FormulaRewriter
from model.conversion import Change, FormulaError
from model.formula_nodes import Error, Literal, Operator, Parentheses
from utils.logger import get_logger


def change_ids(result):
    return [change.change_identifier for change in result.changes]


class TestFunctionRewrites:
    """Renamed, operator-replaced, special and passthrough functions."""

    def setup_method(self):
        self.logger = get_logger()

    FUNCTION_CASES = [
        # Renames
        ('slice("abc",1,2)', 'substring("abc", 1, 2)', ["slice"]),
        ("start(now())", "dateStart(now())", ["start"]),
        ("end(now())", "dateEnd(now())", ["end"]),
        # Binary functions to operators
        ("add(1,2)", "1 + 2", ["add"]),
        ("subtract(1, 2)", "1 - 2", ["subtract"]),
        ("multiply(1, 2)", "1 * 2", ["multiply"]),
        ("divide(1, 2)", "1 / 2", ["divide"]),
        ("pow(1, 2)", "1 ^ 2", ["pow"]),
        ("mod(1, 2)", "1 % 2", ["mod"]),
        ("equal(1, 2)", "1 == 2", ["equal"]),
        ("unequal(1, 2)", "1 != 2", ["unequal"]),
        ("larger(1, 2)", "1 > 2", ["larger"]),
        ("largerEq(1, 2)", "1 >= 2", ["largerEq"]),
        ("smaller(1, 2)", "1 < 2", ["smaller"]),
        ("smallerEq(1, 2)", "1 <= 2", ["smallerEq"]),
        ('concat("a", "b")', '"a" + "b"', ["concat"]),
        # Operator operands are wrapped
        ("multiply(add(1, 2), 3)", "(1 + 2) * 3", ["multiply", "add"]),
        ("add(1 + 2, 3)", "(1 + 2) + 3", ["add"]),
        ("add(true ? 1 : 2, 3)", "(if(true, 1, 2)) + 3", ["add"]),
        ("subtract(1, unaryMinus(2))", "1 - (-2)", ["subtract", "unaryMinus"]),
        ("add(day(now()), 1)", "(day(now()) % 7) + 1", ["add", "day"]),
        ("add(format(1), 2)", "format(1) + 2", ["add"]),
        # Special rewrites
        ("unaryMinus(1)", "-1", ["unaryMinus"]),
        ("unaryMinus(add(1, 2))", "-(1 + 2)", ["unaryMinus", "add"]),
        ('unaryPlus("1")', 'toNumber("1")', ["unaryPlus"]),
        ("day(now())", "day(now()) % 7", ["day"]),
        ("month(now())", "month(now()) - 1", ["month"]),
        ('join(",", "a", "b", "c")', 'join(["a", "b", "c"], ",")', ["join"]),
        ('join(", ")', 'join([], ", ")', ["join"]),
        # Passthrough
        ("format(1)", "format(1)", []),
        ("if(true, 1, 2)", "if(true, 1, 2)", []),
        ("now()", "now()", []),
        ("someFutureFunction(1, 2)", "someFutureFunction(1, 2)", []),
        # Keyword operators called as functions
        ("and(true, false)", "and(true, false)", []),
        ('or(prop("A") > 1, false)', 'or(prop("A") > 1, false)', []),
        ("xor(true, false)", "xor(true, false)", []),
        ("if(and(true, false), 1, 2)", "if(and(true, false), 1, 2)", []),
        ("and(add(1, 2), pi)", "and(1 + 2, pi())", ["add", "pi"]),
        ("mod(10, 3)", "10 % 3", ["mod"]),
    ]

    @pytest.mark.parametrize("formula, expected, changes", FUNCTION_CASES)
    def test_function_rewrite(self, formula, expected, changes):
        result = convert_formula(formula, {})

        self.logger.debug(f"{formula} -> {result.formula}")

        assert result.formula == expected
        assert change_ids(result) == changes
        assert result.errors == []

    @pytest.mark.parametrize(
        "formula, expected",
        [("add(1)", "1"), ("add(1, 2, 3)", "1 + 2 + 3"), ("add()", "")],
    )
    def test_binary_function_with_wrong_arity(self, formula, expected):
        """Wrong arity is reported but the rewrite still happens."""
        result = convert_formula(formula, {})

        assert result.formula == expected
        assert result.changes == [Change("add")]
        assert result.errors == [FormulaError("operatorIncorrectArgs", "add")]

    def test_join_without_arguments(self):
        result = convert_formula("join()", {})

        assert result.formula == "join([])"
        assert change_ids(result) == ["join"]


class TestPropertyRewrites:
    """Property references are rewritten by semantic type."""

    def setup_method(self):
        self.logger = get_logger()

    PROPERTY_CASES = [
        ("person", 'join(prop("A"), map(format(current)), ", ")'),
        ("relation", 'join(prop("A"), map(format(current)), ", ")'),
        ("rollup", 'join(prop("A"), map(format(current)), ",")'),
        ("file", 'join(prop("A"), ", ")'),
        ("multi-select", 'join(prop("A"), ", ")'),
        ("id", "prop(\"A\").split('-').last().toNumber()"),
    ]

    @pytest.mark.parametrize("property_type, expected", PROPERTY_CASES)
    def test_typed_property(self, property_type, expected):
        result = convert_formula('prop("A")', {"A": property_type})

        assert result.formula == expected
        assert result.changes == [Change(property_type, 'prop("A")')]
        assert result.errors == []
        assert result.props_referenced == {"A"}

    def test_other_property_passes_through(self):
        result = convert_formula('prop("A")', {"A": "other"})

        assert result.formula == 'prop("A")'
        assert result.changes == []
        assert result.props_referenced == {"A"}

    def test_rollup_separator_has_no_space(self):
        result = convert_formula('prop("R")', {"R": "rollup"})
        assert result.formula.endswith(', ",")')

    def test_name_with_quote_is_escaped_again(self):
        result = convert_formula(r'prop("say \"hi\"")', {'say "hi"': "file"})

        assert result.formula == r'join(prop("say \"hi\""), ", ")'
        assert result.props_referenced == {'say "hi"'}

    def test_props_referenced_deduplicates(self):
        result = convert_formula(
            'prop("B") + prop("A") * prop("B") + length(prop("A"))', {"A": "person"}
        )

        assert result.props_referenced == {"A", "B"}
        assert result.props_in_order == ("B", "A")
        assert change_ids(result) == ["person", "person"]

    def test_every_type_still_counts_as_referenced(self, property_mapping):
        formula = " + ".join(f'prop("{name}")' for name in property_mapping)

        result = convert_formula(formula, property_mapping)

        assert result.props_referenced == set(property_mapping)
        assert len(result.changes) == len(property_mapping) - 1


class TestOperatorRewrites:
    """Unary and n-ary operators."""

    def setup_method(self):
        self.logger = get_logger()

    OPERATOR_CASES = [
        ("1 + 2", "1 + 2", []),
        ("1 + 2 + 3", "1 + 2 + 3", []),
        ("1 + 2 * 3", "1 + (2 * 3)", []),
        ("(1 + 2) * 3", "(1 + 2) * 3", []),
        ("2 ^ 3 ^ 4", "2 ^ (3 ^ 4)", []),
        ("1 == 1 and 2 > 1", "(1 == 1) and (2 > 1)", []),
        ("10 mod 3", "10 mod 3", []),
        ("1 + 2 mod 3", "1 + (2 mod 3)", []),
        ("true xor false", "true xor false", []),
        ("true or false xor true", "true or (false xor true)", []),
        ("2 * .5", "2 * .5", []),
        ("not true", "!true", ["not"]),
        ("not(true)", "!true", ["not"]),
        ("not (1 > 2)", "!(1 > 2)", ["not"]),
        ("not not true", "!!true", ["not", "not"]),
        ("not add(1, 2)", "!(1 + 2)", ["not", "add"]),
        ('+"1"', 'toNumber("1")', ["unaryPlus"]),
        ("+(1 + 2)", "toNumber(1 + 2)", ["unaryPlus"]),
        ("-pi", "-pi()", ["pi"]),
        ("-(1 + 2)", "-(1 + 2)", []),
        ("!true", "!true", []),
        ("!(true or false)", "!(true or false)", []),
    ]

    @pytest.mark.parametrize("formula, expected, changes", OPERATOR_CASES)
    def test_operator_rewrite(self, formula, expected, changes):
        result = convert_formula(formula, {})

        assert result.formula == expected
        assert change_ids(result) == changes
        assert result.errors == []

    def test_operator_without_arguments(self):
        context = ConversionContext()

        text = FormulaRewriter(context).convert(Operator("+", ()))

        assert text == ""
        assert context.errors == [FormulaError("operatorNoArgs", "+")]
        assert context.changes == []


class TestConditionalsAndSymbols:
    def setup_method(self):
        self.logger = get_logger()

    CASES = [
        ("true ? 1 : 2", "if(true, 1, 2)", []),
        ("1 > 2 ? 1 : 2", "if((1 > 2), 1, 2)", []),
        ("true ? 1 : 2 + 3", "if(true, 1, (2 + 3))", []),
        ("true ? 1 : false ? 2 : 3", "if(true, 1, (if(false, 2, 3)))", []),
        ("true ? add(1, 2) : 3", "if(true, (1 + 2), 3)", ["add"]),
        ("pi", "pi()", ["pi"]),
        ("e", "e()", ["e"]),
        ("true", "true", []),
        ("false", "false", []),
        ("pi * e", "pi() * e()", ["pi", "e"]),
    ]

    @pytest.mark.parametrize("formula, expected, changes", CASES)
    def test_conversion(self, formula, expected, changes):
        result = convert_formula(formula, {})

        assert result.formula == expected
        assert change_ids(result) == changes
        assert result.errors == []


class TestChangeOrdering:
    """A node's change precedes its arguments' changes; siblings stay in order."""

    def setup_method(self):
        self.logger = get_logger()

    ORDERING_CASES = [
        ('add(prop("A"), pi)', {"A": "person"}, ["add", "person", "pi"]),
        ("multiply(add(1, 2), subtract(3, 4))", {}, ["multiply", "add", "subtract"]),
        ("slice(format(start(now())), 0, 1)", {}, ["slice", "start"]),
        ("add(pi, e)", {}, ["add", "pi", "e"]),
        ("pi + add(e, 1)", {}, ["pi", "add", "e"]),
        ("unaryMinus(month(end(now())))", {}, ["unaryMinus", "month", "end"]),
        ('join(", ", prop("A"), prop("B"))', {"A": "id", "B": "file"}, ["join", "id", "file"]),
    ]

    @pytest.mark.parametrize("formula, mapping, expected", ORDERING_CASES)
    def test_change_order(self, formula, mapping, expected):
        result = convert_formula(formula, mapping)
        assert change_ids(result) == expected

    def test_errors_interleave_in_traversal_order(self):
        result = convert_formula("add(x, add(1), y)", {})

        assert result.errors == [
            FormulaError("parserError", "Undefined constant:x"),
            FormulaError("operatorIncorrectArgs", "add"),
            FormulaError("parserError", "Undefined constant:y"),
            FormulaError("operatorIncorrectArgs", "add"),
        ]
        assert change_ids(result) == ["add", "add"]


class TestEngineNodes:
    """Nodes handled by the engine that the parser does not produce."""

    def setup_method(self):
        self.context = ConversionContext()
        self.rewriter = FormulaRewriter(self.context)

    def test_missing_node(self):
        assert self.rewriter.convert(None) == ""
        assert self.context.errors == []

    def test_explicit_parentheses(self):
        assert self.rewriter.convert(Parentheses(Literal("1"))) == "(1)"

    def test_error_node(self):
        assert self.rewriter.convert(Error("boom")) == ""
        assert self.context.errors == [FormulaError("parserError", "boom")]
        assert self.context.changes == []

    def test_record_change_insertion(self):
        self.context.record_change("pi")
        self.context.record_change("add", at=0)
        assert self.context.changes == [Change("add"), Change("pi")]

    def test_to_result_keeps_reference_order(self):
        self.context.reference_property("B")
        self.context.reference_property("A")
        self.context.reference_property("B")

        result = self.context.to_result("x")

        assert result.props_referenced == {"A", "B"}
        assert result.props_in_order == ("B", "A")
