"""Range classifier and Lemire's full-width multiplication baseline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from bounded_draw.entropy import EntropySource
from bounded_draw.errors import InvalidBoundError
from bounded_draw.fixed_width import FixedWidth, is_even


class RangeClass(Enum):
    BOTTOM_HALF = "bottom_half"
    HARD_REGION = "hard_region"
    TOP_THIRD = "top_third"


@dataclass(frozen=True)
class Rejection:
    """A first draw whose low product half fell below the threshold."""

    random: int
    low: int
    threshold: int


def check_bound(bound: int, uint: FixedWidth) -> None:
    """Raise InvalidBoundError unless 1 <= bound <= uint.max."""
    if not isinstance(bound, int) or isinstance(bound, bool) or not 1 <= bound <= uint.max:
        raise InvalidBoundError(bound, uint.bits)


def classify(bound: int, uint: FixedWidth) -> RangeClass:
    """Place ``bound`` in the bottom half, the top third, or the region between."""
    check_bound(bound, uint)
    if bound <= uint.half:
        return RangeClass.BOTTOM_HALF
    diff = uint.wrap(-bound)
    if (diff << 1) < bound:
        return RangeClass.TOP_THIRD
    return RangeClass.HARD_REGION


def rejection_threshold(bound: int, uint: FixedWidth, range_class: RangeClass) -> int:
    """Return 2**bits mod bound.

    In the top half 2**bits - bound is already smaller than bound, so the
    division is skipped.
    """
    diff = uint.wrap(-bound)
    if range_class is RangeClass.BOTTOM_HALF:
        return diff % bound
    return diff


def uniform_remainder(bound: int, random: int, low: int, uint: FixedWidth) -> int:
    """Widen the low product half back into a value uniform over the draw.

    For an even bound the low half always has trailing_zeros(bound) zero bits.
    Two draws share a low half exactly when they differ only in their top
    trailing_zeros(bound) bits, so those bits fill the gap losslessly.
    """
    if is_even(bound):
        low |= random >> (uint.bits - uint.trailing_zero_bit_count(bound))
    return low


def lemire_loop(bound: int, threshold: int, source: EntropySource, uint: FixedWidth) -> int:
    """Redraw until the low product half clears the threshold."""
    while True:
        high, low = uint.multiplied_full_width(source.next(), bound)
        if low >= threshold:
            return high


def rejection_loop(bound: int, source: EntropySource) -> int:
    """Redraw until a draw lands below bound and return it unchanged."""
    while True:
        random = source.next()
        if random < bound:
            return random
