"""Exceptions raised by the bounded draw operations and entropy sources."""


class BoundedDrawError(Exception):
    """Base class for every error raised by this package."""


class InvalidBoundError(BoundedDrawError, ValueError):
    """The upper bound is zero or does not fit the integer width."""

    def __init__(self, bound, bits: int) -> None:
        super().__init__(f"Upper bound must be in [1, 2**{bits} - 1], got {bound!r}")
        self.bound = bound
        self.bits = bits


class EntropyExhaustedError(BoundedDrawError):
    """A finite entropy source has no draws left."""


class DrawLimitExceeded(BoundedDrawError):
    """A caller-imposed cap on source calls was reached."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"Entropy source call limit of {limit} exceeded")
        self.limit = limit
