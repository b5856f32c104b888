"""
Integer domains for the engine.

A Bounds value is an inclusive interval [lo, hi] together with the rule
used when a raw result escapes it.  Two domains matter here:

  - the hexadecimal word, which wraps like a C ``uint64_t``
  - the 64-bit integer bridge used when an operand changes base, where
    anything that does not fit is narrowed to zero
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class OverflowStrategy(Enum):
    """What to do when a value falls outside the bounds."""

    WRAP = auto()        # Modular wrap-around (like C unsigned)
    ZERO = auto()        # Lossy narrowing: out-of-range values become 0


@dataclass(frozen=True)
class Bounds:
    """An integer domain [lo, hi] with explicit overflow semantics."""

    lo: int
    hi: int
    overflow: OverflowStrategy = OverflowStrategy.WRAP

    def __post_init__(self):
        if self.lo > self.hi:
            raise ValueError(f"lo ({self.lo}) must be <= hi ({self.hi})")

    @property
    def width(self) -> int:
        """Total number of representable values."""
        return self.hi - self.lo + 1

    def contains(self, value: int) -> bool:
        return self.lo <= value <= self.hi

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

        # ZERO
        return 0


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

UINT64 = Bounds(lo=0, hi=2**64 - 1, overflow=OverflowStrategy.WRAP)
INT64 = Bounds(lo=-(2**63), hi=2**63 - 1, overflow=OverflowStrategy.ZERO)
