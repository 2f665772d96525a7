class SimplexError(Exception):
    """Base class for every error raised by stepwise_simplex."""


class ConstructionError(SimplexError, ValueError):
    """The objective/constraints handed to a Dictionary do not form a dictionary."""


class InvalidPivotError(SimplexError, ValueError):
    """A pivot was requested on a variable or constraint that cannot take part in it."""


class SimplexLogicError(SimplexError, RuntimeError):
    """
    An internal invariant broke while solving (feasibility lost after a pivot,
    a bounded dictionary pivoting into unboundedness, a phase-one run that did
    not end optimal). Signals a bug, never a property of the input.
    """
