from fractions import Fraction

import pytest

from stepwise_simplex.lp.expression import Constraint, LinearExpression


def test_zero_coefficients_are_dropped_and_order_kept():
    expr = LinearExpression({"x2": 3, "x1": 0, "w1": "-1/2"}, 4)

    assert list(expr.variables()) == ["x2", "w1"]
    assert expr.coefficient("x1") == 0
    assert expr.coefficient("w1") == Fraction(-1, 2)
    assert expr.constant == 4


def test_floats_are_rejected():
    with pytest.raises(TypeError):
        LinearExpression({"x1": 0.5})


def test_addition_cancels_terms():
    left = LinearExpression({"x1": 1}, 1)
    right = LinearExpression({"x1": -1, "x2": "1/2"}, 2)

    assert left + right == LinearExpression({"x2": Fraction(1, 2)}, 3)
    assert (left - left) == LinearExpression()
    assert left.add(5).constant == 6


def test_substitute_expression_and_scalar():
    objective = LinearExpression({"x1": 2, "x2": 3})
    x1 = LinearExpression({"w2": Fraction(-1, 2), "x2": Fraction(-1, 2)}, 5)

    assert objective.substitute({"x1": x1}) == LinearExpression({"x2": 2, "w2": -1}, 10)

    relaxed = LinearExpression({"x1": 1, "x0": 1}, -1)
    assert relaxed.substitute({"x0": 0}) == LinearExpression({"x1": 1}, -1)


def test_solve_for_isolates_variable():
    row = Constraint("w2", LinearExpression({"x1": -2, "x2": -1}, 10))

    solved = row.solve_for("x1")

    assert solved == LinearExpression({"x2": Fraction(-1, 2), "w2": Fraction(-1, 2)}, 5)
    with pytest.raises(ZeroDivisionError):
        row.solve_for("x3")


def test_rendering():
    assert str(LinearExpression({"x1": 2, "x2": 3})) == "2*x1 + 3*x2"
    assert str(LinearExpression({"x1": -2}, 6)) == "6 - 2*x1"
    assert str(LinearExpression({"x1": -1, "x2": Fraction(1, 2)})) == "-x1 + 1/2*x2"
    assert str(LinearExpression()) == "0"
    assert str(Constraint("w1", LinearExpression({"x1": -1}, -1))) == "w1 = -1 - x1"


def test_signature_ignores_term_order():
    first = LinearExpression({"a": 1, "b": 2}, 3)
    second = LinearExpression({"b": 2, "a": 1}, 3)

    assert first.signature() == second.signature()
    assert first == second
    assert first.signature() != LinearExpression({"a": 1, "b": 2}, 4).signature()


def test_constraint_basic_requires_single_unit_variable():
    assert Constraint("w1", LinearExpression({"x1": 1})).basic == "w1"
    with pytest.raises(ValueError):
        Constraint(LinearExpression({"w1": 2}), LinearExpression({"x1": 1})).basic
    with pytest.raises(ValueError):
        Constraint(LinearExpression({"w1": 1, "w2": 1}), LinearExpression({"x1": 1})).basic
