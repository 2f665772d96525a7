#!/usr/bin/env python3
import argparse
import json
import random
from pathlib import Path
from typing import List, Optional

from stepwise_simplex.schemas import DictionarySpec


def _term(coef: int, name: str) -> str:
    sign = "-" if coef < 0 else "+"
    magnitude = abs(coef)
    body = name if magnitude == 1 else f"{magnitude} * {name}"
    return f"{sign} {body}"


def generate_random_dictionary(
    num_vars: int,
    num_constraints: int,
    seed: Optional[int] = None,
    allow_infeasible: bool = False,
) -> DictionarySpec:
    """Small integer dictionaries; constants may go negative to force phase one."""
    rng = random.Random(seed)
    names = [f"x{i + 1}" for i in range(num_vars)]
    low = -num_vars * 2 if allow_infeasible else 0
    constraints: List[str] = []
    for j in range(num_constraints):
        constant = rng.randint(low, num_vars * 6)
        terms = [_term(-rng.randint(1, 5), name) for name in names]
        constraints.append(f"w{j + 1} = {constant} " + " ".join(terms))
    objective = " ".join(_term(rng.randint(1, 4), name) for name in names)
    return DictionarySpec(
        name="random-dictionary",
        variables=num_vars,
        objective=objective.lstrip("+ "),
        constraints=constraints,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate random LP dictionaries.")
    parser.add_argument("--vars", type=int, default=3, help="Number of non-basic variables")
    parser.add_argument("--constraints", type=int, default=3, help="Number of constraints")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--count", type=int, default=1, help="Number of instances")
    parser.add_argument("--infeasible-start", action="store_true", help="Allow negative constants")
    parser.add_argument("--out", type=Path, default=None, help="Optional output file")
    args = parser.parse_args()

    instances = [
        generate_random_dictionary(args.vars, args.constraints, (args.seed or 0) + idx, args.infeasible_start)
        for idx in range(args.count)
    ]
    payload = [instance.model_dump() for instance in instances]

    if args.out:
        Path(args.out).write_text(json.dumps(payload, indent=2))
    else:
        print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
