"""Bit-bank recycling: carry leftover entropy across any number of draws."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from bounded_draw.baseline import RangeClass, Rejection, uniform_remainder
from bounded_draw.entropy import EntropySource
from bounded_draw.fixed_width import UINT64, FixedWidth, binary_logarithm

logger = logging.getLogger(__name__)


@dataclass
class BitBank:
    """Per-call state: ``bits`` is uniform on ``[0, bit_bound)``.

    ``bits_needed`` is how many more bits push ``bit_bound`` to at least
    ``half_bound``; ``bits_available`` counts the uniform low bits still
    unspent in ``new_bits``.
    """

    bound: int
    bits: int
    bit_bound: int
    uint: FixedWidth = UINT64
    new_bits: int = 0
    bits_available: int = 0
    bits_needed: int = 0

    def __post_init__(self) -> None:
        self.half_bound = (self.bound >> 1) + (self.bound & 1)
        self.bits_needed = self.calculate_bits_needed()

    def calculate_bits_needed(self) -> int:
        if self.bit_bound >= self.half_bound:
            return 0
        n = self.uint.leading_zero_bit_count(self.bit_bound) - self.uint.leading_zero_bit_count(
            self.half_bound
        )
        if (self.bit_bound << n) < self.half_bound:
            n += 1
        return n

    def deposit(self, new_bits: int, threshold: int) -> None:
        """Bank a rejected draw's remainder, uniform on ``[0, threshold)``.

        Below the highest bit where it differs from ``threshold`` every bit
        is uniform and independent of the bits above.
        """
        self.new_bits = new_bits
        self.bits_available = binary_logarithm(threshold ^ new_bits)

    def consume_bits(self, n: int) -> None:
        mask = (1 << n) - 1
        self.bits = (self.bits << n) | (self.new_bits & mask)
        self.new_bits >>= n
        self.bit_bound <<= n
        self.bits_needed -= n
        self.bits_available -= n

    def decrease_bounds(self, n: int) -> None:
        self.bits -= n
        self.bit_bound -= n
        self.bits_needed = self.calculate_bits_needed()

    def settle(self) -> Optional[int]:
        """Spend the available bits; return a result if one is decided."""
        while self.bits_needed < self.bits_available:
            self.consume_bits(self.bits_needed)
            if self.bits < self.half_bound:
                # bits is now uniform on [0, half_bound); the lane bit doubles it.
                self.bit_bound = self.half_bound
                self.consume_bits(1)
                if self.bits < self.bound:
                    return self.bits
                self.decrease_bounds(self.bound)
            else:
                self.decrease_bounds(self.half_bound)
        self.consume_bits(self.bits_available)
        return None


class BitBankRecycler:
    """Recycles rejected draws for every bound, not only the hard region."""

    name = "bit_bank"

    def covers(self, range_class: RangeClass) -> bool:
        return True

    def resume(
        self,
        bound: int,
        rejection: Rejection,
        source: EntropySource,
        uint: FixedWidth,
    ) -> int:
        threshold = rejection.threshold
        bank = BitBank(
            bound=bound,
            bits=uniform_remainder(bound, rejection.random, rejection.low, uint),
            bit_bound=threshold,
            uint=uint,
        )

        while True:
            random = source.next()
            high, low = uint.multiplied_full_width(random, bound)
            if low >= threshold:
                return high

            bank.deposit(uniform_remainder(bound, random, low, uint), threshold)
            result = bank.settle()
            if result is not None:
                logger.debug("bound=%d settled from bank with %d bits unspent", bound, bank.bits_available)
                return result
