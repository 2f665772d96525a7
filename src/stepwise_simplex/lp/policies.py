from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Optional, Sequence, Set

if TYPE_CHECKING:
    from .dictionary import Dictionary, PivotCandidate

logger = logging.getLogger(__name__)


class PivotPolicy:
    """Chooses one entering candidate out of the ratio-test results."""

    name = "base"

    def pick(self, candidates: Sequence["PivotCandidate"], dictionary: "Dictionary") -> "PivotCandidate":
        raise NotImplementedError

    def reset(self) -> None:
        """Forget any history; called by the driver at terminal and phase boundaries."""


class NaivePolicy(PivotPolicy):
    name = "naive"

    def pick(self, candidates, dictionary):
        return candidates[0]


class RandomPolicy(PivotPolicy):
    name = "random"

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def pick(self, candidates, dictionary):
        return candidates[self._rng.randrange(len(candidates))]


class CyclingAvoidancePolicy(PivotPolicy):
    """
    Takes the first candidate unless a degenerate pivot (bound 0) is about to
    leave an objective that was already seen since the last non-degenerate
    pivot; then the second candidate is taken instead, when there is one.
    """

    name = "cycling_avoidance"

    def __init__(self) -> None:
        self.history: Set[tuple] = set()

    def pick(self, candidates, dictionary):
        choice = candidates[0]
        if choice.bound == 0:
            signature = dictionary.objective.signature()
            if signature in self.history:
                if len(candidates) > 1:
                    logger.warning(
                        "Objective %s revisited through degenerate pivots; entering %s instead of %s",
                        dictionary.objective,
                        candidates[1].variable,
                        choice.variable,
                    )
                    choice = candidates[1]
            else:
                self.history.add(signature)
        else:
            self.history.clear()
        return choice

    def reset(self) -> None:
        self.history.clear()


_POLICIES = {
    NaivePolicy.name: NaivePolicy,
    RandomPolicy.name: RandomPolicy,
    CyclingAvoidancePolicy.name: CyclingAvoidancePolicy,
}


def make_policy(name: str, seed: Optional[int] = None) -> PivotPolicy:
    try:
        policy_cls = _POLICIES[name]
    except KeyError as exc:
        raise ValueError(f"Unknown pivot policy '{name}'.") from exc
    if policy_cls is RandomPolicy:
        return RandomPolicy(seed)
    return policy_cls()
