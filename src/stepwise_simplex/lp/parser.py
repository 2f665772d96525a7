import re
from collections import OrderedDict
from fractions import Fraction
from typing import List, Optional, Tuple

from ..schemas import DictionarySpec, SolveOptions
from .dictionary import Dictionary
from .expression import Constraint, LinearExpression, to_fraction
from .policies import make_policy

_COMPARATOR = re.compile(r"(<=|>=|==|=|<|>)")
_OBJECTIVE = re.compile(r"^\s*(?:objective|maximize|maximise|max)\s*:?\s*(.*)$", re.IGNORECASE)
_NUMBER = r"\d+(?:\.\d+)?(?:\s*/\s*\d+(?:\.\d+)?)?"
_TERM_PATTERN = re.compile(r"([+-]?\s*(?:" + _NUMBER + r")?)\s*([A-Za-z_][\w]*)")
_NUMBER_PATTERN = re.compile(r"[+-]?\s*" + _NUMBER)
_SCIENTIFIC = re.compile(r"(?<![\w.])\d+(?:\.\d+)?[eE][+-]?\d")


def parse_expression(expr_str: str) -> LinearExpression:
    """
    Parse a linear expression such as ``6 - x1 - x2``, ``2 * x1 + 3x2`` or
    ``1/2*x1 - 0.5``. Decimal and ``p/q`` coefficients become exact fractions.
    """

    if not expr_str or not expr_str.strip():
        raise ValueError("Expression is empty.")
    if _SCIENTIFIC.search(expr_str):
        raise ValueError(f"Scientific notation is not supported in expression '{expr_str}'.")

    expr_clean = expr_str.replace("*", " ")
    coeffs: "OrderedDict[str, Fraction]" = OrderedDict()
    spans: List[Tuple[int, int]] = []
    operands: List[Tuple[int, str]] = []

    for match in _TERM_PATTERN.finditer(expr_clean):
        coef_text = match.group(1).replace(" ", "")
        var_name = match.group(2)
        if coef_text in ("", "+"):
            coef = Fraction(1)
        elif coef_text == "-":
            coef = Fraction(-1)
        else:
            coef = to_fraction(coef_text)
        coeffs[var_name] = coeffs.get(var_name, Fraction(0)) + coef
        spans.append(match.span())
        operands.append((match.start(), match.group(0)))

    remaining = list(expr_clean)
    for start, end in spans:
        for idx in range(start, end):
            remaining[idx] = " "
    remaining_str = "".join(remaining)

    constant = Fraction(0)
    leftover = list(remaining_str)
    for num_match in _NUMBER_PATTERN.finditer(remaining_str):
        constant += to_fraction(num_match.group(0))
        operands.append((num_match.start(), num_match.group(0)))
        for idx in range(*num_match.span()):
            leftover[idx] = " "
    # Operators whose operand was a term or number were consumed with it.
    unparsed = "".join(leftover).strip()
    if unparsed:
        raise ValueError(f"Could not parse '{unparsed}' in expression '{expr_str}'.")

    # Every operand after the first needs its own sign.
    for _, text in sorted(operands)[1:]:
        if text.strip()[0] not in "+-":
            raise ValueError(f"Missing operator before '{text.strip()}' in expression '{expr_str}'.")

    return LinearExpression(coeffs, constant)


def parse_constraint(text: str) -> Constraint:
    """Parse ``w1 = 6 - x1 - x2``; inequalities are not dictionary rows."""
    comp_match = _COMPARATOR.search(text)
    if not comp_match:
        raise ValueError(f"Could not parse constraint segment '{text}'.")
    if comp_match.group(1) not in ("=", "=="):
        raise ValueError(f"Dictionary constraints must be equations, got '{text}'.")
    lhs_str = text[: comp_match.start()].strip()
    rhs_str = text[comp_match.end() :].strip()
    if not lhs_str or not rhs_str:
        raise ValueError(f"Incomplete constraint expression '{text}'.")
    return Constraint(parse_expression(lhs_str), parse_expression(rhs_str))


def parse_dictionary_text(text: str, variables: Optional[int] = None, name: str = "dictionary") -> DictionarySpec:
    """
    Read the printed form of a dictionary back::

        Objective: 2*x1 + 3*x2
        w1 = 6 - x1 - x2
        w2 = 10 - 2*x1 - x2

    ``variables`` defaults to the number of distinct names on the objective
    and the right-hand sides.
    """

    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines:
        raise ValueError("Dictionary text is empty.")
    match = _OBJECTIVE.match(lines[0])
    if not match or not match.group(1).strip():
        raise ValueError("First line must be 'Objective: <expression>'.")
    objective = match.group(1).strip()
    constraints = lines[1:]

    if variables is None:
        names = OrderedDict((var, None) for var in parse_expression(objective).variables())
        for line in constraints:
            for var in parse_constraint(line).rhs.variables():
                names.setdefault(var, None)
        variables = len(names)

    return DictionarySpec(name=name, variables=variables, objective=objective, constraints=constraints)


def build_dictionary(spec: DictionarySpec, options: Optional[SolveOptions] = None) -> Dictionary:
    opts = options or SolveOptions()
    return Dictionary(
        spec.variables,
        parse_expression(spec.objective),
        [parse_constraint(text) for text in spec.constraints],
        deep_copy=opts.deep_copy,
        policy=make_policy(opts.policy, opts.seed),
    )
