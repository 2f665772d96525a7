"""Dictionary-form simplex: exact pivoting, step by step."""

from .dictionary import Dictionary, PivotCandidate
from .expression import Constraint, LinearExpression
from .parser import build_dictionary, parse_constraint, parse_dictionary_text, parse_expression
from .policies import CyclingAvoidancePolicy, NaivePolicy, PivotPolicy, RandomPolicy, make_policy
from .simplex import advance, solve, trace

__all__ = [
    "Dictionary",
    "PivotCandidate",
    "Constraint",
    "LinearExpression",
    "build_dictionary",
    "parse_constraint",
    "parse_dictionary_text",
    "parse_expression",
    "PivotPolicy",
    "NaivePolicy",
    "RandomPolicy",
    "CyclingAvoidancePolicy",
    "make_policy",
    "advance",
    "solve",
    "trace",
]
