"""Stepwise simplex: exact, observable pivoting on LP dictionaries."""

from .exceptions import ConstructionError, InvalidPivotError, SimplexError, SimplexLogicError
from .lp import Dictionary, LinearExpression, Constraint, build_dictionary, solve, trace
from .schemas import DictionarySpec, SolveOptions, Status

__all__ = [
    "ConstructionError",
    "InvalidPivotError",
    "SimplexError",
    "SimplexLogicError",
    "Dictionary",
    "LinearExpression",
    "Constraint",
    "build_dictionary",
    "solve",
    "trace",
    "DictionarySpec",
    "SolveOptions",
    "Status",
]
