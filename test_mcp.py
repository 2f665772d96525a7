#!/usr/bin/env python3
"""
Quick script to verify the MCP server is working.
Run this before connecting the server to an MCP client.
"""

import asyncio
import os
import sys

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

from stepwise_simplex.schemas import DictionarySpec, SolveOptions
from stepwise_simplex.server import mcp, solve_dictionary


def test_golden_dictionary():
    """Pivot the textbook example to its optimum."""
    print("Testing step-by-step solve...")

    spec = DictionarySpec(
        variables=2,
        objective="2 * x1 + 3 * x2",
        constraints=["w1 = 6 - x1 - x2", "w2 = 10 - 2 * x1 - x2", "w3 = 4 + x1 - x2"],
    )
    result = solve_dictionary(spec, SolveOptions(policy="naive"))
    if "error" in result:
        print(f"✗ Solve failed: {result['error']}")
        return False

    print(f"✓ Status: {result['status']}")
    print(f"✓ Objective value: {result['objective_value']}")
    print(f"✓ Steps: {len(result['steps'])}, pivots: {result['pivots']}")
    return result["status"] == "optimal" and result["objective_value"] == "17"


def test_tools_available():
    """Check that all tools are registered."""
    print("\nChecking available tools...")

    expected_tools = ["solve_dictionary", "parse_dictionary", "inspect_dictionary", "verify_dictionary"]
    tool_names = [tool.name for tool in asyncio.run(mcp.list_tools())]

    print(f"Found {len(tool_names)} tools:")
    for tool_name in tool_names:
        print(f"  - {tool_name}")

    missing = [name for name in expected_tools if name not in tool_names]
    if missing:
        print(f"\n⚠️  Missing tools: {missing}")
        return False
    print("\n✅ All expected tools are available!")
    return True


if __name__ == "__main__":
    print("=" * 60)
    print("MCP Server Check")
    print("=" * 60)

    success = True
    success &= test_tools_available()
    success &= test_golden_dictionary()

    print("\n" + "=" * 60)
    if success:
        print("✅ Server is ready to use!")
        print("\nRun 'python -m stepwise_simplex.server' (MCP_TRANSPORT=http for streamable HTTP).")
    else:
        print("❌ Some checks failed. Please check the output above.")
        sys.exit(1)
