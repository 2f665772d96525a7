#!/usr/bin/env python3
import argparse
import json
import logging
import os
from pathlib import Path

from stepwise_simplex.lp.parser import build_dictionary, parse_dictionary_text
from stepwise_simplex.schemas import DictionarySpec, SolveOptions


def main() -> None:
    parser = argparse.ArgumentParser(description="Print every dictionary the simplex method goes through.")
    parser.add_argument("path", type=Path, help="JSON DictionarySpec or a printed dictionary (.txt)")
    parser.add_argument("--policy", default="cycling_avoidance", choices=["naive", "random", "cycling_avoidance"])
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random policy")
    args = parser.parse_args()

    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "WARNING").upper())

    text = args.path.read_text()
    if args.path.suffix == ".json":
        spec = DictionarySpec.model_validate(json.loads(text))
    else:
        spec = parse_dictionary_text(text)
    dictionary = build_dictionary(spec, SolveOptions(policy=args.policy, seed=args.seed))

    print(f"{dictionary}\n")
    for snapshot, status in dictionary.solve():
        print(status.value)
        print(f"{snapshot}\n")


if __name__ == "__main__":
    main()
