from fractions import Fraction

import pytest

from stepwise_simplex.lp.expression import LinearExpression
from stepwise_simplex.lp.parser import (
    build_dictionary,
    parse_constraint,
    parse_dictionary_text,
    parse_expression,
)
from stepwise_simplex.lp.policies import NaivePolicy, RandomPolicy
from stepwise_simplex.schemas import DictionarySpec, SolveOptions


def test_parser_reads_coefficients_exactly():
    assert parse_expression("2 * x1 + 3x2") == LinearExpression({"x1": 2, "x2": 3})
    assert parse_expression("1/2*x1 - 0.5 + x1") == LinearExpression({"x1": Fraction(3, 2)}, Fraction(-1, 2))
    assert parse_expression("80000 - x1 + 4 * x2") == LinearExpression({"x1": -1, "x2": 4}, 80000)
    assert parse_expression("-8 + 4 * x1") == LinearExpression({"x1": 4}, -8)


def test_parser_rejects_garbage():
    with pytest.raises(ValueError):
        parse_expression("6 - x1 ^ 2")
    with pytest.raises(ValueError):
        parse_expression("   ")


def test_parser_rejects_zero_denominator():
    with pytest.raises(ValueError, match="Invalid coefficient"):
        parse_expression("1/0 + x1")
    with pytest.raises(ValueError, match="Invalid coefficient"):
        parse_expression("x1 - 3/0")


@pytest.mark.parametrize("text", ["x1 x2", "6 x1 x2", "2 3x1", "x1 + 4 5"])
def test_parser_rejects_missing_operator(text):
    with pytest.raises(ValueError, match="Missing operator"):
        parse_expression(text)


def test_parser_rejects_scientific_notation():
    with pytest.raises(ValueError, match="Scientific notation"):
        parse_expression("1e5 - x1")
    with pytest.raises(ValueError, match="Scientific notation"):
        parse_expression("x1 + 2.5E-3")
    assert parse_expression("x1e2 + 2*e1") == LinearExpression({"x1e2": 1, "e1": 2})


def test_parse_constraint():
    constraint = parse_constraint("w1 = 6 - x1 - x2")

    assert constraint.basic == "w1"
    assert constraint.rhs == LinearExpression({"x1": -1, "x2": -1}, 6)
    with pytest.raises(ValueError):
        parse_constraint("x1 + x2 <= 4")
    with pytest.raises(ValueError):
        parse_constraint("w1 = ")


def test_parse_dictionary_text_infers_variable_count():
    spec = parse_dictionary_text(
        """
        Objective: 2*x1 + 3*x2
        w1 = 6 - x1 - x2
        w2 = 10 - 2*x1 - x2
        """
    )

    assert spec.variables == 2
    assert spec.objective == "2*x1 + 3*x2"
    assert spec.constraints == ["w1 = 6 - x1 - x2", "w2 = 10 - 2*x1 - x2"]
    with pytest.raises(ValueError):
        parse_dictionary_text("w1 = 6 - x1")


def test_rendered_dictionary_round_trips():
    spec = DictionarySpec(
        variables=2,
        objective="2 * x1 + 3 * x2",
        constraints=["w1 = 6 - x1 - x2", "w2 = 10 - 2 * x1 - x2", "w3 = 4 + x1 - x2"],
    )
    dictionary = build_dictionary(spec)
    dictionary.next()

    again = build_dictionary(parse_dictionary_text(str(dictionary)))

    assert again.objective == dictionary.objective
    assert [c.rhs for c in again.constraints] == [c.rhs for c in dictionary.constraints]
    assert set(again.basics) == set(dictionary.basics)


def test_build_dictionary_uses_options():
    spec = DictionarySpec(variables=1, objective="x1", constraints=["w1 = 5 - x1"])

    assert isinstance(build_dictionary(spec, SolveOptions(policy="naive")).policy, NaivePolicy)
    assert isinstance(build_dictionary(spec, SolveOptions(policy="random", seed=3)).policy, RandomPolicy)
