from __future__ import annotations

from fractions import Fraction
from numbers import Rational
from typing import Dict, Iterator, Mapping, Optional, Tuple, Union

Number = Union[int, Fraction, str]


def to_fraction(value: Number) -> Fraction:
    if isinstance(value, Fraction):
        return value
    if isinstance(value, (int, Rational)):
        return Fraction(value)
    if isinstance(value, str):
        text = value.replace(" ", "")
        if "/" in text:
            numerator, denominator = text.split("/", 1)
            try:
                return Fraction(numerator) / Fraction(denominator)
            except ZeroDivisionError as exc:
                raise ValueError(f"Invalid coefficient '{value}'.") from exc
        return Fraction(text)
    raise TypeError(f"Coefficients must be exact rationals, got {type(value).__name__}.")


def format_fraction(value: Fraction) -> str:
    if value.denominator == 1:
        return str(value.numerator)
    return f"{value.numerator}/{value.denominator}"


class LinearExpression:
    """
    constant + sum(coefficient * variable) with exact rational coefficients.

    Terms keep insertion order; zero coefficients are never stored. Every
    operation returns a new expression, instances are never mutated.
    """

    __slots__ = ("_terms", "_constant")

    def __init__(self, terms: Optional[Mapping[str, Number]] = None, constant: Number = 0) -> None:
        self._terms: Dict[str, Fraction] = {}
        for name, coef in (terms or {}).items():
            value = to_fraction(coef)
            if value != 0:
                self._terms[name] = value
        self._constant = to_fraction(constant)

    @classmethod
    def variable(cls, name: str) -> "LinearExpression":
        return cls({name: 1})

    @property
    def constant(self) -> Fraction:
        return self._constant

    @property
    def terms(self) -> Dict[str, Fraction]:
        return dict(self._terms)

    def coefficient(self, name: str) -> Fraction:
        return self._terms.get(name, Fraction(0))

    def variables(self) -> Iterator[str]:
        return iter(self._terms)

    def items(self) -> Iterator[Tuple[str, Fraction]]:
        return iter(self._terms.items())

    def __len__(self) -> int:
        return len(self._terms)

    def __contains__(self, name: object) -> bool:
        return name in self._terms

    def copy(self) -> "LinearExpression":
        return LinearExpression(self._terms, self._constant)

    def add(self, other: Union["LinearExpression", Number]) -> "LinearExpression":
        if not isinstance(other, LinearExpression):
            return LinearExpression(self._terms, self._constant + to_fraction(other))
        terms = dict(self._terms)
        for name, coef in other._terms.items():
            terms[name] = terms.get(name, Fraction(0)) + coef
        return LinearExpression(terms, self._constant + other._constant)

    def scale(self, factor: Number) -> "LinearExpression":
        factor = to_fraction(factor)
        return LinearExpression(
            {name: coef * factor for name, coef in self._terms.items()},
            self._constant * factor,
        )

    def without(self, name: str) -> "LinearExpression":
        return LinearExpression(
            {other: coef for other, coef in self._terms.items() if other != name},
            self._constant,
        )

    def substitute(self, mapping: Mapping[str, Union["LinearExpression", Number]]) -> "LinearExpression":
        """Replace each variable named in ``mapping`` by the given expression or number."""
        result = LinearExpression(constant=self._constant)
        kept: Dict[str, Fraction] = {}
        for name, coef in self._terms.items():
            if name in mapping:
                replacement = mapping[name]
                if not isinstance(replacement, LinearExpression):
                    replacement = LinearExpression(constant=replacement)
                result = result.add(replacement.scale(coef))
            else:
                kept[name] = coef
        return LinearExpression(kept).add(result)

    def signature(self) -> Tuple[Fraction, Tuple[Tuple[str, Fraction], ...]]:
        """Order-independent identity used to spot a revisited objective."""
        return self._constant, tuple(sorted(self._terms.items()))

    def __add__(self, other: Union["LinearExpression", Number]) -> "LinearExpression":
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other: Union["LinearExpression", Number]) -> "LinearExpression":
        if isinstance(other, LinearExpression):
            return self.add(other.scale(-1))
        return self.add(-to_fraction(other))

    def __neg__(self) -> "LinearExpression":
        return self.scale(-1)

    def __mul__(self, factor: Number) -> "LinearExpression":
        return self.scale(factor)

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LinearExpression):
            return NotImplemented
        return self._constant == other._constant and self._terms == other._terms

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"LinearExpression({str(self)!r})"

    def __str__(self) -> str:
        pieces = []
        if self._constant != 0 or not self._terms:
            pieces.append(format_fraction(self._constant))
        for name, coef in self._terms.items():
            magnitude = abs(coef)
            body = name if magnitude == 1 else f"{format_fraction(magnitude)}*{name}"
            if not pieces:
                pieces.append(body if coef > 0 else f"-{body}")
            else:
                pieces.append(f"+ {body}" if coef > 0 else f"- {body}")
        return " ".join(pieces)


class Constraint:
    """An equation ``lhs = rhs``; in a dictionary the lhs is one basic variable."""

    __slots__ = ("lhs", "rhs")

    def __init__(self, lhs: Union[LinearExpression, str], rhs: LinearExpression) -> None:
        if isinstance(lhs, str):
            lhs = LinearExpression.variable(lhs)
        self.lhs = lhs
        self.rhs = rhs

    @property
    def basic(self) -> str:
        if len(self.lhs) != 1 or self.lhs.constant != 0:
            raise ValueError(f"Constraint '{self}' does not isolate a single variable.")
        name, coef = next(self.lhs.items())
        if coef != 1:
            raise ValueError(f"Constraint '{self}' does not isolate a single variable.")
        return name

    @property
    def constant(self) -> Fraction:
        return self.rhs.constant

    def is_dictionary_row(self) -> bool:
        try:
            self.basic
        except ValueError:
            return False
        return True

    def solve_for(self, name: str) -> LinearExpression:
        """Rearrange the equation as ``name = ...``."""
        balance = self.rhs - self.lhs
        coef = balance.coefficient(name)
        if coef == 0:
            raise ZeroDivisionError(f"'{name}' does not appear in '{self}'.")
        return balance.without(name).scale(Fraction(-1) / coef)

    def copy(self) -> "Constraint":
        return Constraint(self.lhs.copy(), self.rhs.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Constraint):
            return NotImplemented
        return self.lhs == other.lhs and self.rhs == other.rhs

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Constraint({str(self)!r})"

    def __str__(self) -> str:
        return f"{self.lhs} = {self.rhs}"
