#!/usr/bin/env python3
from __future__ import annotations

"""CLI entry point for drawing bounded integers from a seeded source."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from bounded_draw.baseline import classify
from bounded_draw.entropy import SeededSource
from bounded_draw.sampler import BoundedSampler, SamplerConfig, Strategy


def parse_bound(text: str) -> int:
    """Accept decimal, hex (0x...) or power expressions like 2**63+1."""
    text = text.replace("_", "").strip()
    total = 0
    for term in text.split("+"):
        term = term.strip()
        if "**" in term:
            base, exponent = term.split("**", 1)
            total += int(base, 0) ** int(exponent, 0)
        else:
            total += int(term, 0)
    return total


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Draw uniform integers below a bound.")
    parser.add_argument("--bound", required=True, type=parse_bound, help="Exclusive upper bound, e.g. 170 or 2**63+1.")
    parser.add_argument("--width", type=int, default=64, help="Bit width of the entropy source.")
    parser.add_argument(
        "--strategy",
        choices=[s.value for s in Strategy],
        default=Strategy.PAIRED_ROAD.value,
    )
    parser.add_argument("--seed", type=int, default=1337, help="Deterministic RNG seed.")
    parser.add_argument("--count", type=int, default=16)
    parser.add_argument("--max-draws", type=int, help="Fail a draw after this many source calls.")
    parser.add_argument("--log-level", default="WARNING")
    return parser


def run(args: argparse.Namespace) -> Dict[str, Any]:
    config = SamplerConfig(
        width=args.width,
        strategy=Strategy(args.strategy),
        max_draws=args.max_draws,
    )
    sampler = BoundedSampler(SeededSource(args.seed, args.width), config)
    values: List[int] = sampler.draws(args.bound, args.count)
    return {
        "seed": args.seed,
        "config": {
            "width": config.width,
            "strategy": config.strategy.value,
            "maxDraws": config.max_draws,
        },
        "bound": args.bound,
        "rangeClass": classify(args.bound, sampler.uint).value,
        "values": values,
        "calls": sampler.calls,
        "callsPerOutput": sampler.calls_per_output(),
    }


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    print(json.dumps(run(args), indent=2))


if __name__ == "__main__":
    main()
