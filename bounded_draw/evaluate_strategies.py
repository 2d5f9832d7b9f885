#!/usr/bin/env python3
from __future__ import annotations

"""Batch runner that compares call counts of every strategy across a bound sweep."""

import argparse
import json
import logging
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from bounded_draw.baseline import classify
from bounded_draw.fixed_width import FixedWidth, width_for
from bounded_draw.sampler import Strategy
from bounded_draw.stats import expected_calls, measure_calls, uniformity

logger = logging.getLogger(__name__)

DEFAULT_FRACTIONS = (
    0.25, 0.5, 0.5001, 0.52, 0.55, 0.58, 0.6, 0.62, 0.64, 0.6666, 0.67, 0.75, 0.9, 0.99,
)


@dataclass
class SweepConfig:
    width: int = 32
    samples: int = 20000
    seed: int = 1337
    fractions: Sequence[float] = DEFAULT_FRACTIONS
    strategies: Sequence[Strategy] = field(default_factory=lambda: list(Strategy))
    buckets: int = 64


def bound_for_fraction(fraction: float, uint: FixedWidth) -> int:
    """Turn a fraction of 2**bits into a valid bound."""
    bound = int(fraction * (uint.max + 1))
    return min(max(bound, 1), uint.max)


def run_strategy(bound: int, uint: FixedWidth, strategy: Strategy, config: SweepConfig, seed: int) -> Dict[str, Any]:
    """Measure one strategy at one bound and collect runtime plus call metrics."""
    start = time.perf_counter()
    measurement = measure_calls(bound, uint, strategy, config.samples, seed)
    elapsed = (time.perf_counter() - start) * 1000.0
    fit = uniformity(measurement.samples, bound, config.buckets)
    return {
        "meanCalls": measurement.mean_calls,
        "maxCalls": measurement.max_calls,
        "expectedCalls": expected_calls(bound, uint, strategy),
        "callHistogram": {str(k): v for k, v in measurement.call_histogram().items()},
        "chiSquare": fit.statistic,
        "chiSquareCritical": fit.critical,
        "pValue": fit.p_value,
        "uniform": fit.passed,
        "runtimeMs": elapsed,
    }


def sweep(config: SweepConfig) -> List[Dict[str, Any]]:
    uint = width_for(config.width)
    results: List[Dict[str, Any]] = []
    for idx, fraction in enumerate(config.fractions):
        bound = bound_for_fraction(fraction, uint)
        range_class = classify(bound, uint)
        logger.info("bound %d (%.4f of range, %s)", bound, fraction, range_class.value)
        entry: Dict[str, Any] = {
            "fraction": bound / (uint.max + 1),
            "bound": bound,
            "rangeClass": range_class.value,
        }
        # Every strategy sees the same draws so the comparison is paired.
        for strategy in config.strategies:
            entry[strategy.value] = run_strategy(bound, uint, strategy, config, config.seed + idx)
        baseline = entry.get(Strategy.BASELINE.value)
        if baseline:
            for strategy in config.strategies:
                if strategy is Strategy.BASELINE:
                    continue
                entry[strategy.value]["callsSaved"] = baseline["meanCalls"] - entry[strategy.value]["meanCalls"]
        results.append(entry)
    return results


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Compare draw strategies across a sweep of bounds.")
    parser.add_argument("--width", type=int, default=32)
    parser.add_argument("--samples", type=int, default=20000)
    parser.add_argument("--seed", type=int, default=1337)
    parser.add_argument("--fractions", type=float, nargs="+", help="Bounds as fractions of 2**width.")
    parser.add_argument(
        "--strategies",
        nargs="+",
        choices=[s.value for s in Strategy],
        default=[s.value for s in Strategy],
    )
    parser.add_argument("--buckets", type=int, default=64)
    parser.add_argument("--output", required=True, help="Path to write JSON summary.")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    config = SweepConfig(
        width=args.width,
        samples=args.samples,
        seed=args.seed,
        fractions=args.fractions or DEFAULT_FRACTIONS,
        strategies=[Strategy(s) for s in args.strategies],
        buckets=args.buckets,
    )
    for fraction in config.fractions:
        if not 0.0 < fraction < 1.0:
            raise ValueError(f"Fraction {fraction} must lie strictly between 0 and 1")

    results = sweep(config)

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w") as f:
        json.dump(results, f, indent=2)

    print(f"Wrote strategy summary for {len(results)} bounds to {output_path}")


if __name__ == "__main__":
    main()
