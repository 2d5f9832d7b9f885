"""Entropy sources that feed the bounded draw operations.

A source is anything with a ``width`` attribute and a ``next()`` method that
returns an integer uniformly distributed over ``[0, 2**width)``.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Protocol

from bounded_draw.errors import DrawLimitExceeded, EntropyExhaustedError


UINT64_MAX = 0xFFFFFFFFFFFFFFFF
XORSHIFT64STAR_MULTIPLIER = 0x2545F4914F6CDD1D
GOLDEN_GAMMA = 0x9E3779B97F4A7C15


class EntropySource(Protocol):
    width: int

    def next(self) -> int:
        ...


@dataclass
class SeededSource:
    """Deterministic xorshift64* generator producing ``width``-bit words.

    Narrow words take the high bits of one 64-bit output; wider words are
    concatenated from several outputs.
    """

    seed: int
    width: int = 64

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError(f"Width must be positive, got {self.width}")
        state = (self.seed * GOLDEN_GAMMA) & UINT64_MAX
        # xorshift can never leave zero; pick a non-zero default.
        if state == 0:
            state = 0xA5366B4D9A3C1F27
        self._state = state

    def _next64(self) -> int:
        x = self._state
        x ^= x >> 12
        x ^= (x << 25) & UINT64_MAX
        x ^= x >> 27
        self._state = x
        return (x * XORSHIFT64STAR_MULTIPLIER) & UINT64_MAX

    def next(self) -> int:
        """Return a uniformly random ``width``-bit integer."""
        if self.width <= 64:
            return self._next64() >> (64 - self.width)
        value = 0
        produced = 0
        while produced < self.width:
            value = (value << 64) | self._next64()
            produced += 64
        return value >> (produced - self.width)


@dataclass
class SystemSource:
    """Operating-system entropy via :mod:`secrets`."""

    width: int = 64

    def next(self) -> int:
        return secrets.randbits(self.width)


@dataclass
class ScriptedSource:
    """Replays a fixed sequence of draws, then raises EntropyExhaustedError."""

    values: List[int]
    width: int = 64
    position: int = 0

    def __post_init__(self) -> None:
        self.values = list(self.values)
        limit = 1 << self.width
        for value in self.values:
            if not 0 <= value < limit:
                raise ValueError(f"Scripted draw {value} does not fit in {self.width} bits")

    @classmethod
    def of(cls, values: Iterable[int], width: int = 64) -> "ScriptedSource":
        return cls(list(values), width)

    @property
    def remaining(self) -> int:
        return len(self.values) - self.position

    def next(self) -> int:
        if self.position >= len(self.values):
            raise EntropyExhaustedError(
                f"Scripted source exhausted after {len(self.values)} draws"
            )
        value = self.values[self.position]
        self.position += 1
        return value


@dataclass
class CountingSource:
    """Wraps another source, counting calls and optionally capping them."""

    source: EntropySource
    limit: Optional[int] = None
    calls: int = field(default=0, init=False)

    @property
    def width(self) -> int:
        return self.source.width

    def reset(self) -> int:
        """Zero the call counter and return its previous value."""
        calls, self.calls = self.calls, 0
        return calls

    def next(self) -> int:
        if self.limit is not None and self.calls >= self.limit:
            raise DrawLimitExceeded(self.limit)
        self.calls += 1
        return self.source.next()
