"""
Fallible-operation classifier.

Some operations succeed or fail depending on the concrete values, not
only on their intervals: a floor fails when the value is below the
floor, a division fails when the divisor is zero.  For those, this
module answers from the intervals alone whether the operation

  MUST_FAIL   whatever the concrete values are,
  MUST_PASS   whatever the concrete values are, or
  MAY_FAIL    depending on the concrete values,

together with the interval of the result when it does succeed.  A
caller can skip the runtime check entirely on ``MUST_PASS`` and skip the
success path entirely on ``MUST_FAIL``.

The concrete helpers at the bottom (``floor_div``, ``trunc_div``, ...)
perform the matching arithmetic on plain ints.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from errors import DivisionByZeroError
from interval import Interval


class Outcome(Enum):
    MUST_FAIL = auto()
    MUST_PASS = auto()
    MAY_FAIL = auto()


class Rounding(Enum):
    """How an inexact integer quotient is rounded."""

    FLOOR = auto()   # toward negative infinity
    TRUNC = auto()   # toward zero


@dataclass(frozen=True)
class Classification:
    """Outcome of a fallible operation, decided from intervals alone.

    ``interval`` is the interval of a successful result; it is ``None``
    exactly when the outcome is ``MUST_FAIL``.
    """

    outcome: Outcome
    interval: Interval | None = None

    def __post_init__(self):
        if (self.outcome == Outcome.MUST_FAIL) != (self.interval is None):
            raise ValueError(
                f"{self.outcome.name} must "
                f"{'not ' if self.outcome == Outcome.MUST_FAIL else ''}"
                "carry a result interval"
            )

    @classmethod
    def must_fail(cls) -> Classification:
        return cls(Outcome.MUST_FAIL)

    @classmethod
    def must_pass(cls, interval: Interval) -> Classification:
        return cls(Outcome.MUST_PASS, interval)

    @classmethod
    def may_fail(cls, interval: Interval) -> Classification:
        return cls(Outcome.MAY_FAIL, interval)

    @property
    def can_fail(self) -> bool:
        return self.outcome != Outcome.MUST_PASS

    @property
    def can_pass(self) -> bool:
        return self.outcome != Outcome.MUST_FAIL


# ---------------------------------------------------------------------------
# Narrowing: floor, ceil, clamp
# ---------------------------------------------------------------------------

def floor(a: Interval, bound: Interval) -> Classification:
    """Require a value of ``a`` to be at least a value of ``bound``."""
    if a.upper < bound.lower:
        return Classification.must_fail()

    narrowed = a.derive(max(a.lower, bound.lower), a.upper)

    if bound.upper <= a.lower:
        return Classification.must_pass(narrowed)
    return Classification.may_fail(narrowed)


def ceil(a: Interval, bound: Interval) -> Classification:
    """Require a value of ``a`` to be at most a value of ``bound``."""
    if bound.upper < a.lower:
        return Classification.must_fail()

    narrowed = a.derive(a.lower, min(a.upper, bound.upper))

    if a.upper <= bound.lower:
        return Classification.must_pass(narrowed)
    return Classification.may_fail(narrowed)


def clamp(a: Interval, lower: Interval, upper: Interval) -> Classification:
    """``ceil`` by ``upper`` then ``floor`` by ``lower``."""
    ceiled = ceil(a, upper)
    if ceiled.outcome == Outcome.MUST_FAIL:
        return ceiled

    floored = floor(ceiled.interval, lower)
    if floored.outcome == Outcome.MUST_FAIL:
        return floored

    if ceiled.outcome == floored.outcome == Outcome.MUST_PASS:
        return Classification.must_pass(floored.interval)
    return Classification.may_fail(floored.interval)


# ---------------------------------------------------------------------------
# Division and remainder
# ---------------------------------------------------------------------------

def _division_outcome(den: Interval) -> Outcome:
    if den.point_value == 0:
        return Outcome.MUST_FAIL
    if 0 in den:
        return Outcome.MAY_FAIL
    return Outcome.MUST_PASS


def _quotient_interval(num: Interval, den: Interval, rounding: Rounding) -> Interval:
    # Division is monotonic only while both signs are fixed, so split
    # each operand by sign and bound every pairing by its corners.
    numerators = [
        floor(num, Interval.point(0)).interval,
        ceil(num, Interval.point(-1)).interval,
    ]
    denominators = [
        floor(den, Interval.point(1)).interval,
        ceil(den, Interval.point(-1)).interval,
    ]

    quotients: list[int] = []
    for n in numerators:
        if n is None:
            continue
        for d in denominators:
            if d is None:
                continue
            quotients.extend(
                divide_values(n_val, d_val, rounding)
                for n_val in (n.lower, n.upper)
                for d_val in (d.lower, d.upper)
            )

    return num.derive(
        num.checked(min(quotients)),
        num.checked(max(quotients)),
    )


def divide(num: Interval, den: Interval, rounding: Rounding) -> Classification:
    """Classify ``num / den`` and bound its quotient."""
    outcome = _division_outcome(den)
    if outcome == Outcome.MUST_FAIL:
        return Classification.must_fail()
    return Classification(outcome, _quotient_interval(num, den, rounding))


def remainder(num: Interval, den: Interval, rounding: Rounding) -> Classification:
    """Classify ``num % den`` and bound its remainder.

    The bound only uses the largest magnitude ``m`` of the denominator:
    the remainder lies strictly between ``-m`` and ``m``.  It ignores
    the signs involved and may become narrower in the future.
    """
    outcome = _division_outcome(den)
    if outcome == Outcome.MUST_FAIL:
        return Classification.must_fail()

    m = max(abs(den.lower), abs(den.upper))
    return Classification(outcome, num.derive(-(m - 1), m - 1))


# ---------------------------------------------------------------------------
# Concrete arithmetic
# ---------------------------------------------------------------------------

def floor_div(a: int, b: int) -> int:
    if b == 0:
        raise DivisionByZeroError()
    return a // b


def trunc_div(a: int, b: int) -> int:
    """Quotient rounded toward zero, as fixed-width integer division does."""
    if b == 0:
        raise DivisionByZeroError()
    q, r = divmod(a, b)
    # divmod floors; step back toward zero for inexact negative quotients.
    if r != 0 and (a < 0) != (b < 0):
        q += 1
    return q


def floor_rem(a: int, b: int) -> int:
    """Remainder of ``floor_div``; takes the sign of ``b``."""
    return a - b * floor_div(a, b)


def trunc_rem(a: int, b: int) -> int:
    """Remainder of ``trunc_div``; takes the sign of ``a``."""
    return a - b * trunc_div(a, b)


def divide_values(a: int, b: int, rounding: Rounding) -> int:
    if rounding == Rounding.FLOOR:
        return floor_div(a, b)
    return trunc_div(a, b)


def remainder_values(a: int, b: int, rounding: Rounding) -> int:
    if rounding == Rounding.FLOOR:
        return floor_rem(a, b)
    return trunc_rem(a, b)
