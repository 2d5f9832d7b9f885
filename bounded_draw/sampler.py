"""Public bounded draw operation and the strategy that recycles rejections."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Protocol

from bounded_draw.baseline import (
    RangeClass,
    Rejection,
    check_bound,
    classify,
    lemire_loop,
    rejection_loop,
    rejection_threshold,
)
from bounded_draw.bit_bank import BitBankRecycler
from bounded_draw.entropy import CountingSource, EntropySource
from bounded_draw.fixed_width import UINT64, FixedWidth, width_for
from bounded_draw.paired_road import PairedRoadRecycler

logger = logging.getLogger(__name__)


class Strategy(Enum):
    BASELINE = "baseline"
    PAIRED_ROAD = "paired_road"
    BIT_BANK = "bit_bank"


class Recycler(Protocol):
    name: str

    def covers(self, range_class: RangeClass) -> bool:
        ...

    def resume(
        self, bound: int, rejection: Rejection, source: EntropySource, uint: FixedWidth
    ) -> int:
        ...


RECYCLERS: Dict[Strategy, Recycler] = {
    Strategy.PAIRED_ROAD: PairedRoadRecycler(),
    Strategy.BIT_BANK: BitBankRecycler(),
}


def draw_below(
    bound: int,
    source: EntropySource,
    uint: FixedWidth = UINT64,
    strategy: Strategy = Strategy.PAIRED_ROAD,
) -> int:
    """Return an integer uniformly distributed on ``[0, bound)``.

    ``source.next()`` must return integers uniform on ``[0, 2**uint.bits)``.
    Raises InvalidBoundError before drawing anything when ``bound`` is zero or
    does not fit the width. Errors raised by the source propagate unchanged.
    """
    check_bound(bound, uint)

    random = source.next()
    high, low = uint.multiplied_full_width(random, bound)
    if low >= bound:
        return high

    range_class = classify(bound, uint)
    threshold = rejection_threshold(bound, uint, range_class)
    if low >= threshold:
        return high

    recycler = RECYCLERS.get(strategy)
    if recycler is not None and recycler.covers(range_class):
        return recycler.resume(bound, Rejection(random, low, threshold), source, uint)
    if range_class is RangeClass.TOP_THIRD:
        return rejection_loop(bound, source)
    return lemire_loop(bound, threshold, source, uint)


@dataclass
class SamplerConfig:
    width: int = 64
    strategy: Strategy = Strategy.PAIRED_ROAD
    max_draws: Optional[int] = None


class BoundedSampler:
    """Draws bounded integers from one source and keeps call statistics."""

    def __init__(self, source: EntropySource, config: Optional[SamplerConfig] = None) -> None:
        self.config = config or SamplerConfig()
        if source.width != self.config.width:
            raise ValueError(
                f"Source width {source.width} does not match configured width {self.config.width}"
            )
        self.uint = width_for(self.config.width)
        self._source = CountingSource(source)
        self.outputs = 0

    @property
    def calls(self) -> int:
        """Total entropy-source calls made so far."""
        return self._source.calls

    def calls_per_output(self) -> float:
        if self.outputs == 0:
            return 0.0
        return self.calls / self.outputs

    def draw(self, bound: int) -> int:
        """Draw one value below ``bound``, honouring ``max_draws`` if set."""
        check_bound(bound, self.uint)
        self._source.limit = (
            None if self.config.max_draws is None else self._source.calls + self.config.max_draws
        )
        value = draw_below(bound, self._source, self.uint, self.config.strategy)
        self.outputs += 1
        return value

    def draws(self, bound: int, count: int) -> List[int]:
        logger.debug(
            "drawing %d values below %d (%s, %d-bit) with %s",
            count,
            bound,
            classify(bound, self.uint).value,
            self.uint.bits,
            self.config.strategy.value,
        )
        return [self.draw(bound) for _ in range(count)]
