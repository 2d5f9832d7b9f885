from __future__ import annotations

"""Fixed-width unsigned integer helpers used by every draw path."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class FixedWidth:
    """An unsigned integer type of ``bits`` width.

    Python ints never overflow, so every wraparound operation is clipped
    explicitly against ``max``.
    """

    bits: int

    def __post_init__(self) -> None:
        if not isinstance(self.bits, int) or isinstance(self.bits, bool) or self.bits <= 0:
            raise ValueError(f"Width must be a positive integer, got {self.bits!r}")

    @property
    def max(self) -> int:
        return (1 << self.bits) - 1

    @property
    def half(self) -> int:
        """Return 2**(bits - 1), the first value of the top half."""
        return 1 << (self.bits - 1)

    def wrap(self, x: int) -> int:
        """Clip an integer so that it occupies ``bits`` bits."""
        return x & self.max

    def multiplied_full_width(self, a: int, b: int) -> Tuple[int, int]:
        """Return the (high, low) halves of the 2*bits product."""
        product = a * b
        return product >> self.bits, product & self.max

    def leading_zero_bit_count(self, x: int) -> int:
        return self.bits - x.bit_length()

    def trailing_zero_bit_count(self, x: int) -> int:
        if x == 0:
            return self.bits
        return (x & -x).bit_length() - 1


UINT8 = FixedWidth(8)
UINT16 = FixedWidth(16)
UINT32 = FixedWidth(32)
UINT64 = FixedWidth(64)


def is_even(n: int) -> bool:
    return n & 1 == 0


def binary_logarithm(x: int) -> int:
    """Return floor(log2(x)) for a positive integer."""
    if x <= 0:
        raise ValueError("Binary logarithm requires a positive value")
    return x.bit_length() - 1


def width_for(bits: int) -> FixedWidth:
    """Reuse the module constants for the common widths."""
    for uint in (UINT8, UINT16, UINT32, UINT64):
        if uint.bits == bits:
            return uint
    return FixedWidth(bits)
