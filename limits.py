"""
Representable-range configuration.

Every interval carries the ``Limits`` it was built against.  Python ints
never overflow on their own, so the limits are what make an interval
computation fail instead of silently growing: any bound that would leave
``[limits.lower, limits.upper]`` is reported as an error.

The range is two's-complement shaped (one more negative value than
positive), so negating or taking the absolute value of the most negative
representable value overflows, exactly as it would in a fixed-width
integer.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Limits:
    """The signed integer width that bounds every interval computation."""

    bits: int

    def __post_init__(self):
        if self.bits < 1:
            raise ValueError(f"bits ({self.bits}) must be >= 1")

    @property
    def lower(self) -> int:
        return -(1 << (self.bits - 1))

    @property
    def upper(self) -> int:
        return (1 << (self.bits - 1)) - 1

    def contains(self, value: int) -> bool:
        return self.lower <= value <= self.upper


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

I8 = Limits(bits=8)
I16 = Limits(bits=16)
I32 = Limits(bits=32)
I64 = Limits(bits=64)

# Wide enough that no realistic combination of intervals overflows.
DEFAULT_LIMITS = Limits(bits=65535)
