"""
Interval layer.

An ``Interval`` is the closed integer range ``[lower, upper]`` that a
bounded integer is statically known to live in.  This module computes,
from operand intervals alone, the tightest interval each arithmetic
operation can produce.

Nothing here ever wraps or truncates: a result that would leave the
interval's ``Limits`` raises ``IntervalOverflowError`` or
``IntervalUnderflowError``.  ``union``, ``min``, ``max`` and ``closest``
cannot leave the range of their operands and never fail.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from errors import (
    IntervalOverflowError,
    IntervalUnderflowError,
    InvalidIntervalError,
)
from limits import DEFAULT_LIMITS, Limits


@dataclass(frozen=True)
class Interval:
    """
    The closed integer range [lower, upper].

    ``limits`` is the representable range every bound (and every bound
    computed from this interval) must stay within.  It does not take
    part in equality: two intervals are equal when their bounds are.
    """

    lower: int
    upper: int
    limits: Limits = field(default=DEFAULT_LIMITS, compare=False, repr=False)

    def __post_init__(self):
        if self.lower < self.limits.lower:
            raise IntervalUnderflowError(self.lower, self.limits.lower)
        if self.upper > self.limits.upper:
            raise IntervalOverflowError(self.upper, self.limits.upper)
        if self.lower > self.upper:
            raise InvalidIntervalError(self.lower, self.upper)

    # -- constructors -----------------------------------------------------

    @classmethod
    def make(cls, lower: int, upper: int, limits: Limits = DEFAULT_LIMITS) -> Interval:
        return cls(lower, upper, limits)

    @classmethod
    def point(cls, value: int, limits: Limits = DEFAULT_LIMITS) -> Interval:
        """The interval holding exactly one value."""
        return cls(value, value, limits)

    @classmethod
    def from_limits(cls, limits: Limits) -> Interval:
        """The whole representable range of ``limits``."""
        return cls(limits.lower, limits.upper, limits)

    def derive(self, lower: int, upper: int) -> Interval:
        return Interval(lower, upper, self.limits)

    # -- queries ----------------------------------------------------------

    @property
    def is_point(self) -> bool:
        return self.lower == self.upper

    @property
    def point_value(self) -> int | None:
        """The single value of a point interval, ``None`` otherwise."""
        return self.lower if self.lower == self.upper else None

    @property
    def width(self) -> int:
        """Number of values in the interval."""
        return self.upper - self.lower + 1

    def contains(self, value: int) -> bool:
        return self.lower <= value <= self.upper

    def __contains__(self, value: int) -> bool:
        return self.contains(value)

    def contains_interval(self, inner: Interval) -> bool:
        return self.lower <= inner.lower and inner.upper <= self.upper

    def values(self) -> range:
        return range(self.lower, self.upper + 1)

    def middle(self) -> int:
        """The middle value, rounded toward negative infinity."""
        return (self.lower + self.upper) // 2

    def is_middle_exact(self) -> bool:
        """True when both halves around ``middle()`` have the same length."""
        m = self.middle()
        return self.upper - m == m - self.lower

    def __str__(self) -> str:
        return f"[{self.lower}..{self.upper}]"

    # -- never failing combinators ----------------------------------------

    def union(self, other: Interval) -> Interval:
        """The smallest interval containing both operands."""
        return self.derive(
            min(self.lower, other.lower),
            max(self.upper, other.upper),
        )

    def min(self, other: Interval) -> Interval:
        """Interval of ``min(a, b)`` for ``a`` in self and ``b`` in other."""
        return self.derive(
            min(self.lower, other.lower),
            min(self.upper, other.upper),
        )

    def max(self, other: Interval) -> Interval:
        """Interval of ``max(a, b)`` for ``a`` in self and ``b`` in other."""
        return self.derive(
            max(self.lower, other.lower),
            max(self.upper, other.upper),
        )

    def closest(self, other: Interval) -> Interval:
        """The part of self nearest to ``other``.

        When ``other`` lies entirely below (above) self, that is the point
        at self's lower (upper) bound; otherwise it is the overlap.
        """
        if other.upper <= self.lower:
            return self.derive(self.lower, self.lower)
        if self.upper <= other.lower:
            return self.derive(self.upper, self.upper)
        return self.derive(
            max(self.lower, other.lower),
            min(self.upper, other.upper),
        )

    # -- arithmetic -------------------------------------------------------

    def checked(self, value: int) -> int:
        if value > self.limits.upper:
            raise IntervalOverflowError(value, self.limits.upper)
        if value < self.limits.lower:
            raise IntervalUnderflowError(value, self.limits.lower)
        return value

    def negate(self) -> Interval:
        return self.derive(
            self.checked(-self.upper),
            self.checked(-self.lower),
        )

    def add(self, other: Interval) -> Interval:
        return self.derive(
            self.checked(self.lower + other.lower),
            self.checked(self.upper + other.upper),
        )

    def sub(self, other: Interval) -> Interval:
        return self.derive(
            self.checked(self.lower - other.upper),
            self.checked(self.upper - other.lower),
        )

    def mul(self, other: Interval) -> Interval:
        # Signed multiplication: the extremes are always among the corners.
        corners = [
            self.checked(self.lower * other.lower),
            self.checked(self.lower * other.upper),
            self.checked(self.upper * other.lower),
            self.checked(self.upper * other.upper),
        ]
        return self.derive(min(corners), max(corners))

    def abs(self) -> Interval:
        magnitudes = (abs(self.lower), abs(self.upper))
        if self.lower <= 0 <= self.upper:
            lower = 0
        else:
            lower = min(magnitudes)
        return self.derive(lower, self.checked(max(magnitudes)))

    # -- operators --------------------------------------------------------

    def __neg__(self) -> Interval:
        return self.negate()

    def __abs__(self) -> Interval:
        return self.abs()

    def __add__(self, other: Interval) -> Interval:
        return self.add(other)

    def __sub__(self, other: Interval) -> Interval:
        return self.sub(other)

    def __mul__(self, other: Interval) -> Interval:
        return self.mul(other)

    def __or__(self, other: Interval) -> Interval:
        return self.union(other)
