#!/usr/bin/env python3
from __future__ import annotations

"""Plotting utility that visualises calls per output for each strategy."""

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

STYLES = {
    "baseline": {"marker": "x", "color": "#a855f7", "label": "Lemire baseline"},
    "paired_road": {"marker": "o", "color": "#2563eb", "label": "Paired road"},
    "bit_bank": {"marker": "s", "color": "#16a34a", "label": "Bit bank"},
}


def load_summary(path: Path) -> List[Dict[str, Any]]:
    """Parse the JSON summary emitted by evaluate_strategies.py."""
    with path.open() as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError("Summary file must contain a list of bound records")
    return data


def strategies_in(summary: List[Dict[str, Any]]) -> List[str]:
    return [name for name in STYLES if any(name in entry for entry in summary)]


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Plot calls per output across a bound sweep.")
    parser.add_argument("--summary", required=True, help="JSON output from evaluate_strategies.py")
    parser.add_argument("--output", required=True, help="Path to save the figure (PNG/SVG).")
    args = parser.parse_args(argv)

    summary = load_summary(Path(args.summary))
    if not summary:
        raise ValueError("Summary is empty")
    summary = sorted(summary, key=lambda entry: entry["fraction"])
    names = strategies_in(summary)
    if not names:
        raise ValueError("Summary contains no known strategy records")
    fractions = [entry["fraction"] for entry in summary]

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    ax0 = axes[0]
    for name in names:
        style = STYLES[name]
        measured = [entry[name]["meanCalls"] for entry in summary]
        ax0.plot(fractions, measured, marker=style["marker"], color=style["color"], label=style["label"])
        expected = [(f, entry[name]["expectedCalls"]) for f, entry in zip(fractions, summary)
                    if entry[name].get("expectedCalls") is not None]
        if expected:
            ax0.plot(
                [x for x, _ in expected],
                [y for _, y in expected],
                linestyle="--",
                color=style["color"],
                linewidth=0.8,
                alpha=0.7,
            )
    ax0.axvspan(0.5, 2 / 3, color="#94a3b8", alpha=0.15, label="Hard region")
    ax0.set_xlabel("Bound / 2^width")
    ax0.set_ylabel("Entropy-source calls per output")
    ax0.set_title("Calls per Output vs. Bound")
    ax0.legend()

    ax1 = axes[1]
    for name in names:
        style = STYLES[name]
        ax1.scatter(
            fractions,
            [entry[name]["chiSquare"] for entry in summary],
            marker=style["marker"],
            color=style["color"],
            label=style["label"],
        )
    critical = [entry[names[0]]["chiSquareCritical"] for entry in summary]
    ax1.plot(fractions, critical, color="#ef4444", linewidth=0.8, label="Critical value")
    ax1.set_xlabel("Bound / 2^width")
    ax1.set_ylabel("Chi-square statistic")
    ax1.set_title("Uniformity of Outputs")
    ax1.legend()

    fig.tight_layout()
    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=200)
    plt.close(fig)
    print(f"Saved call-count plot to {output_path}")


if __name__ == "__main__":
    main()
