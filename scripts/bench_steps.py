#!/usr/bin/env python3
"""Compare traced results with HiGHS. Run from the repository root: python -m scripts.bench_steps"""
import json
import time
from pathlib import Path

from stepwise_simplex.lp.parser import build_dictionary
from stepwise_simplex.lp.simplex import trace
from stepwise_simplex.lp.utils import reference_optimum
from stepwise_simplex.schemas import DictionarySpec, SolveOptions
from scripts.generate_instances import generate_random_dictionary


def load_example(name: str) -> DictionarySpec:
    path = Path(__file__).resolve().parent.parent / "examples" / name
    return DictionarySpec.model_validate(json.loads(path.read_text()))


def main() -> None:
    opts = SolveOptions()
    cases = [(f"examples/{name}", load_example(name)) for name in ("golden.json", "infeasible_start.json")]
    for seed in range(3):
        cases.append((f"random-{seed}", generate_random_dictionary(3, 3, seed, allow_infeasible=True)))

    print("name,status,objective,pivots,highs_status,highs_objective,time_ms")
    for name, spec in cases:
        start = time.perf_counter()
        result = trace(build_dictionary(spec, opts), opts)
        elapsed_ms = (time.perf_counter() - start) * 1000
        reference_status, reference_value = reference_optimum(build_dictionary(spec, opts))
        print(
            f"{name},{result.status},{result.objective_value},{result.pivots},"
            f"{reference_status},{reference_value},{elapsed_ms:.2f}"
        )


if __name__ == "__main__":
    main()
