"""Uniform integers below a bound, recycling the entropy of rejected draws."""

from .baseline import RangeClass, classify
from .entropy import CountingSource, EntropySource, ScriptedSource, SeededSource, SystemSource
from .errors import BoundedDrawError, DrawLimitExceeded, EntropyExhaustedError, InvalidBoundError
from .fixed_width import UINT8, UINT16, UINT32, UINT64, FixedWidth
from .sampler import BoundedSampler, SamplerConfig, Strategy, draw_below

__all__ = [
    "draw_below",
    "Strategy",
    "BoundedSampler",
    "SamplerConfig",
    "RangeClass",
    "classify",
    "FixedWidth",
    "UINT8",
    "UINT16",
    "UINT32",
    "UINT64",
    "EntropySource",
    "SeededSource",
    "SystemSource",
    "ScriptedSource",
    "CountingSource",
    "BoundedDrawError",
    "InvalidBoundError",
    "EntropyExhaustedError",
    "DrawLimitExceeded",
]
