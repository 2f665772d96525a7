import json
from pathlib import Path

from stepwise_simplex.schemas import DictionarySpec, SolveOptions
from stepwise_simplex.server import (
    inspect_dictionary,
    parse_dictionary,
    solve_dictionary,
    verify_dictionary,
)


def load_example(name: str) -> DictionarySpec:
    data = json.loads(Path(__file__).parent.parent.joinpath("examples", name).read_text())
    return DictionarySpec.model_validate(data)


def test_solve_dictionary_tool():
    result = solve_dictionary(load_example("golden.json"), SolveOptions(policy="naive"))

    assert result["status"] == "optimal"
    assert result["objective_value"] == "17"
    assert result["steps"][-1]["status"] == "optimal"


def test_solve_dictionary_reports_construction_errors():
    spec = load_example("golden.json").model_copy(update={"variables": 3})

    result = solve_dictionary(spec)

    assert "error" in result
    assert "designated number" in result["error"]


def test_parse_dictionary_tool():
    result = parse_dictionary("Objective: x1\nw1 = 5 - x1")

    assert result["variables"] == 1
    assert result["constraints"] == ["w1 = 5 - x1"]
    assert "error" in parse_dictionary("w1 = 5 - x1")


def test_inspect_dictionary_tool():
    report = inspect_dictionary(load_example("golden.json"))

    assert report["feasible"] is True
    assert report["optimal"] is False
    assert report["unbounded"] is False
    assert report["candidates"] == [
        {"entering": "x1", "leaving": "w2", "bound": "5"},
        {"entering": "x2", "leaving": "w3", "bound": "4"},
    ]


def test_verify_dictionary_tool():
    result = verify_dictionary(load_example("golden.json"))

    assert result["status"] == "optimal"
    assert result["reference_status"] == "optimal"
    assert abs(result["reference_value"] - 17.0) < 1e-6


def test_bad_coefficients_come_back_as_errors():
    assert "error" in parse_dictionary("Objective: 1/0 + x1\nw1 = 5 - x1")
    spec = DictionarySpec(variables=1, objective="x1", constraints=["w1 = 5 - x1 x2"])
    assert "Missing operator" in solve_dictionary(spec)["error"]
