"""Call-count expectations and uniformity checks for the draw strategies."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from statistics import mean
from typing import Dict, List, Optional, Sequence, Tuple

from scipy import stats

from bounded_draw.baseline import RangeClass, classify, rejection_threshold
from bounded_draw.entropy import CountingSource, SeededSource
from bounded_draw.fixed_width import FixedWidth
from bounded_draw.sampler import Strategy, draw_below


def baseline_expected_calls(bound: int, uint: FixedWidth) -> float:
    """Expected calls for plain multiply-and-reject: 2**bits / (2**bits - t)."""
    range_class = classify(bound, uint)
    threshold = rejection_threshold(bound, uint, range_class)
    full = uint.max + 1
    return full / (full - threshold)


def paired_road_expected_calls(bound: int, uint: FixedWidth) -> float:
    """f(n) = (2 - 1/n) / (1 - ((1 - 1/n)(2 - 3/n))**2) in the hard region."""
    if classify(bound, uint) is not RangeClass.HARD_REGION:
        return baseline_expected_calls(bound, uint)
    n = (uint.max + 1) / bound
    return (2 - 1 / n) / (1 - ((1 - 1 / n) * (2 - 3 / n)) ** 2)


def expected_calls(bound: int, uint: FixedWidth, strategy: Strategy) -> Optional[float]:
    """Closed-form expectation, or None where no closed form is known."""
    if strategy is Strategy.BASELINE:
        return baseline_expected_calls(bound, uint)
    if strategy is Strategy.PAIRED_ROAD:
        return paired_road_expected_calls(bound, uint)
    return None


@dataclass
class CallMeasurement:
    bound: int
    strategy: Strategy
    samples: List[int]
    calls: List[int]

    @property
    def mean_calls(self) -> float:
        return mean(self.calls)

    @property
    def max_calls(self) -> int:
        return max(self.calls)

    def call_histogram(self) -> Dict[int, int]:
        return dict(sorted(Counter(self.calls).items()))


def measure_calls(
    bound: int,
    uint: FixedWidth,
    strategy: Strategy,
    count: int,
    seed: int,
) -> CallMeasurement:
    """Draw ``count`` values and record the source calls each one took."""
    source = CountingSource(SeededSource(seed, uint.bits))
    samples: List[int] = []
    calls: List[int] = []
    for _ in range(count):
        samples.append(draw_below(bound, source, uint, strategy))
        calls.append(source.reset())
    return CallMeasurement(bound=bound, strategy=strategy, samples=samples, calls=calls)


def bucket_counts(samples: Sequence[int], bound: int, buckets: int) -> List[int]:
    """Fold values in [0, bound) into ``buckets`` equal-width bins.

    Bins may differ in size by one value when bound is not a multiple of
    ``buckets``; expected_bucket_counts accounts for that.
    """
    buckets = min(buckets, bound)
    counts = [0] * buckets
    for value in samples:
        counts[value * buckets // bound] += 1
    return counts


def expected_bucket_counts(total: int, bound: int, buckets: int) -> List[float]:
    buckets = min(buckets, bound)
    sizes = [0] * buckets
    # Bin i holds the values v with v * buckets // bound == i.
    for i in range(buckets):
        lo = -(-i * bound // buckets)
        hi = -(-(i + 1) * bound // buckets)
        sizes[i] = hi - lo
    return [total * size / bound for size in sizes]


def chi_square(observed: Sequence[int], expected: Sequence[float]) -> Tuple[float, float]:
    """Return the (statistic, p-value) of Pearson's goodness-of-fit test."""
    statistic, p_value = stats.chisquare(observed, expected)
    return float(statistic), float(p_value)


def chi_square_critical(dof: int, alpha: float = 0.001) -> float:
    """Upper ``alpha`` critical value of the chi-square distribution."""
    if dof <= 0:
        raise ValueError("Degrees of freedom must be positive")
    return float(stats.chi2.ppf(1 - alpha, dof))


@dataclass
class UniformityResult:
    statistic: float
    critical: float
    dof: int
    p_value: float = 1.0

    @property
    def passed(self) -> bool:
        return self.statistic <= self.critical


def uniformity(
    samples: Sequence[int], bound: int, buckets: int = 64, alpha: float = 0.001
) -> UniformityResult:
    """Chi-square goodness of fit of ``samples`` against uniform on [0, bound)."""
    if bound < 2:
        return UniformityResult(statistic=0.0, critical=0.0, dof=0)
    observed = bucket_counts(samples, bound, buckets)
    expected = expected_bucket_counts(len(samples), bound, buckets)
    dof = len(observed) - 1
    statistic, p_value = chi_square(observed, expected)
    return UniformityResult(
        statistic=statistic,
        p_value=p_value,
        critical=chi_square_critical(dof, alpha),
        dof=dof,
    )
