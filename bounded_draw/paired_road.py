"""Paired-road recycling for bounds between one half and two thirds of the range.

After a rejected draw in that region the leftover value is uniform on
``[0, diff)`` with ``diff = 2**bits - bound``, and ``diff/2 < halfBound <= diff``
where ``halfBound = ceil(bound / 2)``. Two such leftovers form a point in a
``diff x diff`` lattice::

          |<-------- bits -------->|
    ----- +-------------+----------+ diff
      ^   | . . . . . . |          |
      |   +-------------+          |
     new  | . . . . . . +--+---+---+ halfBound
     bits +-------------+  | . | . |
      |   | . . . . . . |  | . | . |
      v   +-------------+  | . | . |
    ----- +-------------+--+---+---+ 0
          0         halfBound    diff

Left of ``halfBound`` adjacent rows pair up into two-lane roads; below it,
adjacent columns do. Each complete road holds ``2*halfBound`` points, which is
``bound`` or ``bound + 1``. Numbering the points of a road by alternating lanes
gives a value uniform on ``[0, 2*halfBound)``. A possible one-lane road at the
end of each side is skipped by the parity checks.

Expected calls in the region fall from ``n = 2**bits / bound`` to
``(2 - 1/n) / (1 - ((1 - 1/n)(2 - 3/n))**2)``: 1.6 instead of 2 just above one
half, 4/3 instead of 1.5 just below two thirds.
"""

from __future__ import annotations

import logging
from typing import Optional

from bounded_draw.baseline import RangeClass, Rejection, uniform_remainder
from bounded_draw.entropy import EntropySource
from bounded_draw.fixed_width import FixedWidth, is_even

logger = logging.getLogger(__name__)


def road_position(bits: int, new_bits: int, diff: int, half_bound: int) -> Optional[int]:
    """Return the position of (bits, new_bits) along its road, if it has one."""
    if bits < half_bound:
        if is_even(diff) or new_bits != 0:
            return (bits << 1) | (new_bits & 1)
    elif new_bits < half_bound:
        if is_even(diff - half_bound) or bits != half_bound:
            return (new_bits << 1) | (bits & 1)
    return None


class PairedRoadRecycler:
    """Pairs the complements of consecutive rejected draws."""

    name = "paired_road"

    def covers(self, range_class: RangeClass) -> bool:
        return range_class is RangeClass.HARD_REGION

    def resume(
        self,
        bound: int,
        rejection: Rejection,
        source: EntropySource,
        uint: FixedWidth,
    ) -> int:
        """Finish a draw whose first attempt was rejected."""
        diff = uint.wrap(-bound)
        half_bound = (bound + 1) >> 1
        bits = uniform_remainder(bound, rejection.random, rejection.low, uint)

        while True:
            random = source.next()
            if random < bound:
                return random
            new_bits = uint.max - random

            x = road_position(bits, new_bits, diff, half_bound)
            if x is not None and x < bound:
                logger.debug("bound=%d recycled bits=%d new_bits=%d into %d", bound, bits, new_bits, x)
                return x

            # Missed every two-lane road; start over with a fresh pair.
            random = source.next()
            if random < bound:
                return random
            bits = uint.max - random
