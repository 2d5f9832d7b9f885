#!/usr/bin/env python3
from __future__ import annotations

"""Check that two run_draws outputs agree, e.g. across machines or versions."""

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Optional


def load_json(path: Path) -> Dict[str, Any]:
    """Read a JSON file and return the parsed dictionary."""
    with path.open() as f:
        return json.load(f)


def approx_equal(a: float, b: float, tol: float = 1e-9) -> bool:
    """Helper for float comparisons that tolerates tiny rounding noise."""
    return abs(a - b) <= tol


def compare_outputs(lhs: Dict[str, Any], rhs: Dict[str, Any]) -> None:
    """Raise AssertionError on the first field where the runs disagree."""
    for field in ("seed", "bound", "config", "rangeClass", "calls"):
        if lhs.get(field) != rhs.get(field):
            raise AssertionError(f"{field} mismatch: {lhs.get(field)} vs {rhs.get(field)}")

    lhs_values: List[int] = lhs.get("values", [])
    rhs_values: List[int] = rhs.get("values", [])
    if len(lhs_values) != len(rhs_values):
        raise AssertionError(f"values length mismatch: {len(lhs_values)} vs {len(rhs_values)}")
    for idx, (lv, rv) in enumerate(zip(lhs_values, rhs_values)):
        if lv != rv:
            raise AssertionError(f"values[{idx}] mismatch: {lv} vs {rv}")

    if not approx_equal(lhs.get("callsPerOutput", 0.0), rhs.get("callsPerOutput", 0.0)):
        raise AssertionError(
            f"callsPerOutput mismatch: {lhs.get('callsPerOutput')} vs {rhs.get('callsPerOutput')}"
        )


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Compare two run_draws JSON outputs.")
    parser.add_argument("--lhs", required=True, help="Path to the first JSON output.")
    parser.add_argument("--rhs", required=True, help="Path to the second JSON output.")
    args = parser.parse_args(argv)

    compare_outputs(load_json(Path(args.lhs)), load_json(Path(args.rhs)))

    print("Draw outputs match for all comparable fields.")


if __name__ == "__main__":
    main()
