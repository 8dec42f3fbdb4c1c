"""
Bounds layer for the bounded algebra.

Python integers never overflow, so the fixed-width behaviour of machine
integers has to be stated explicitly.  A Bounds value is the domain
[lo, hi] of a fixed-width type together with the strategy used when a raw
result escapes it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class OverflowStrategy(Enum):
    """What to do when a result would exceed the bounds."""

    WRAP = auto()        # Two's-complement wrap-around (machine int)
    CLAMP = auto()       # Saturate at lo/hi
    ERROR = auto()       # Raise an OverflowError


@dataclass(frozen=True)
class Bounds:
    """
    An integer domain [lo, hi] with explicit overflow semantics.

    Every value produced through ``apply`` is guaranteed to live in
    [lo, hi], or an OverflowError is raised.
    """

    lo: int
    hi: int
    overflow: OverflowStrategy = OverflowStrategy.WRAP

    def __post_init__(self):
        if self.lo > self.hi:
            raise ValueError(f"lo ({self.lo}) must be <= hi ({self.hi})")

    @classmethod
    def signed(
        cls, bits: int, overflow: OverflowStrategy = OverflowStrategy.WRAP
    ) -> Bounds:
        """Domain of a two's-complement signed integer of ``bits`` width."""
        if bits < 1:
            raise ValueError(f"bit width must be >= 1, got {bits}")
        return cls(lo=-(2 ** (bits - 1)), hi=2 ** (bits - 1) - 1, overflow=overflow)

    @property
    def width(self) -> int:
        """Total number of representable values."""
        return self.hi - self.lo + 1

    def contains(self, value: int) -> bool:
        return self.lo <= value <= self.hi

    def all_values(self) -> range:
        return range(self.lo, self.hi + 1)

    def clamp(self, value: int) -> int:
        return max(self.lo, min(self.hi, value))

    def wrap(self, value: int) -> int:
        return self.lo + (value - self.lo) % self.width

    def apply(self, raw: int) -> int:
        """Apply the overflow strategy to bring a raw result into bounds."""
        if self.lo <= raw <= self.hi:
            return raw

        if self.overflow == OverflowStrategy.WRAP:
            return self.wrap(raw)

        if self.overflow == OverflowStrategy.CLAMP:
            return self.clamp(raw)

        # ERROR
        raise OverflowError(
            f"Result {raw} is outside bounds [{self.lo}, {self.hi}]"
        )


# ---------------------------------------------------------------------------
# Common bounds presets
# ---------------------------------------------------------------------------

INT8 = Bounds.signed(8)
INT16 = Bounds.signed(16)
INT32 = Bounds.signed(32)
INT64 = Bounds.signed(64)

# Small bounds useful for exhaustive verification
TINY = Bounds(lo=-8, hi=7)
