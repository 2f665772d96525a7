from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

PolicyName = Literal["naive", "random", "cycling_avoidance"]


class Status(str, Enum):
    OPTIMIZABLE = "optimizable"
    OPTIMAL = "optimal"
    UNBOUNDED = "unbounded"
    INFEASIBLE = "infeasible"
    HELP_NEEDED = "helper-needed"
    HELPER_CREATED = "helper-created"
    HELPER_FEASIBLE = "helper-feasible"
    ORIGIN_FEASIBLE = "origin-feasible"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({Status.OPTIMAL, Status.UNBOUNDED, Status.INFEASIBLE})


class DictionarySpec(BaseModel):
    """Textual dictionary: ``objective`` over non-basics, one ``w = ...`` per constraint."""

    name: str = "dictionary"
    variables: int
    objective: str
    constraints: List[str] = Field(default_factory=list)


class SolveOptions(BaseModel):
    policy: PolicyName = "cycling_avoidance"
    seed: Optional[int] = None
    deep_copy: bool = True
    max_steps: int = 10_000


class StepRecord(BaseModel):
    index: int
    status: Status
    objective_value: str
    basics: List[str]
    non_basics: List[str]
    text: str


class SolveTrace(BaseModel):
    status: Literal[
        "optimal", "unbounded", "infeasible", "step_limit"
    ]
    objective_value: Optional[str]
    x: Dict[str, str] | None
    steps: List[StepRecord]
    pivots: int
    message: str = ""


class CandidateRecord(BaseModel):
    entering: str
    leaving: str
    bound: str


class DictionaryReport(BaseModel):
    feasible: bool
    optimal: bool
    unbounded: bool
    objective_value: str
    candidates: List[CandidateRecord] = Field(default_factory=list)
    text: str
