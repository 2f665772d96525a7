import logging
import os

from mcp.server.fastmcp import FastMCP

from .lp.expression import format_fraction
from .lp.parser import build_dictionary, parse_dictionary_text
from .lp.simplex import trace
from .lp.utils import reference_optimum
from .schemas import CandidateRecord, DictionaryReport, DictionarySpec, SolveOptions, Status

mcp = FastMCP("Stepwise Simplex")


@mcp.tool()
def solve_dictionary(spec: DictionarySpec, options: SolveOptions | None = None) -> dict:
    "Pivot a dictionary to optimality and return every intermediate dictionary."
    opts = options or SolveOptions()
    try:
        dictionary = build_dictionary(spec, opts)
    except ValueError as exc:
        return {"error": str(exc)}
    return trace(dictionary, opts).model_dump(mode="json")


@mcp.tool()
def parse_dictionary(text: str, variables: int | None = None) -> dict:
    "Parse the printed form ('Objective: ...' then 'w1 = ...' lines) into a DictionarySpec."
    try:
        return parse_dictionary_text(text, variables).model_dump()
    except ValueError as exc:
        return {"error": str(exc)}


@mcp.tool()
def inspect_dictionary(spec: DictionarySpec) -> dict:
    "Report feasibility, optimality, unboundedness and the ratio-test candidates."
    try:
        dictionary = build_dictionary(spec)
    except ValueError as exc:
        return {"error": str(exc)}

    feasible = dictionary.is_feasible()
    candidates = []
    if feasible:
        found = dictionary.entering_candidates()
        if not isinstance(found, Status):
            candidates = [
                CandidateRecord(
                    entering=candidate.variable,
                    leaving=candidate.leaving,
                    bound=format_fraction(candidate.bound),
                )
                for candidate in found
            ]
    report = DictionaryReport(
        feasible=feasible,
        optimal=feasible and dictionary.is_optimal(),
        unbounded=dictionary.is_unbounded(),
        objective_value=format_fraction(dictionary.current_value()),
        candidates=candidates,
        text=str(dictionary),
    )
    return report.model_dump()


@mcp.tool()
def verify_dictionary(spec: DictionarySpec) -> dict:
    "Solve exactly and with SciPy's HiGHS side by side."
    try:
        dictionary = build_dictionary(spec)
    except ValueError as exc:
        return {"error": str(exc)}
    reference_status, reference_value = reference_optimum(dictionary)
    result = trace(dictionary)
    return {
        "status": result.status,
        "objective_value": result.objective_value,
        "reference_status": reference_status,
        "reference_value": reference_value,
    }


if __name__ == "__main__":
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "WARNING").upper())
    transport = os.environ.get("MCP_TRANSPORT", "stdio")
    if transport == "stdio":
        mcp.run()
    else:
        mcp.settings.host = "0.0.0.0"
        mcp.settings.port = int(os.environ.get("PORT", "8081"))
        mcp.run(transport="streamable-http")
