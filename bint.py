"""
Bounded-value runtime type.

A ``BoundedInt`` is a concrete int paired with the interval it is known
to live in.  Every operation asks the interval engine for the result
interval first, then performs the arithmetic on the stored value.  Only
operations classified ``MAY_FAIL`` look at the concrete values to decide
whether they fail; ``MUST_FAIL`` ones fail without looking.

Plain ints are accepted wherever a ``BoundedInt`` is, as the point
interval holding just that int.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union

import classify
from classify import Classification, Outcome, Rounding, divide_values, remainder_values
from errors import (
    DivisionByZeroError,
    IncompatibleIntervalError,
    InvalidIntervalError,
    OutOfBoundsError,
)
from interval import Interval
from limits import DEFAULT_LIMITS, Limits
from order import Furthest, Order, order, resolve_furthest, resolve_order

Operand = Union["BoundedInt", int]


@dataclass(frozen=True)
class BoundedInt:
    """An int that is guaranteed to lie within ``interval``."""

    value: int
    interval: Interval

    def __post_init__(self):
        if not self.interval.contains(self.value):
            raise OutOfBoundsError(self.value, self.interval.lower, self.interval.upper)

    # -- construction -----------------------------------------------------

    @classmethod
    def of(cls, value: int, limits: Limits = DEFAULT_LIMITS) -> BoundedInt:
        """A value known exactly: its interval is the point ``{value}``."""
        return cls(value, Interval.point(value, limits))

    @classmethod
    def from_int(cls, value: int, limits: Limits = DEFAULT_LIMITS) -> BoundedInt:
        """A value only known to fit ``limits``, like a fixed-width int."""
        return cls(value, Interval.from_limits(limits))

    @classmethod
    def init(cls, operand: Operand, interval: Interval) -> BoundedInt:
        """Move a value into ``interval``, checking it at runtime.

        Raises ``OutOfBoundsError`` when the value is outside.
        """
        return cls(_coerce(operand, interval.limits).value, interval)

    def widen(self, interval: Interval) -> BoundedInt:
        """Move into an interval that is known to contain this one."""
        if not interval.contains_interval(self.interval):
            raise IncompatibleIntervalError(self.interval, interval)
        return BoundedInt(self.value, interval)

    def expect(self) -> None:
        """Raise ``OutOfBoundsError`` if the value escaped its interval."""
        if not self.interval.contains(self.value):
            raise OutOfBoundsError(self.value, self.interval.lower, self.interval.upper)

    def _coerce(self, operand: Operand) -> BoundedInt:
        return _coerce(operand, self.interval.limits)

    # -- infallible arithmetic --------------------------------------------

    def add(self, other: Operand) -> BoundedInt:
        other = self._coerce(other)
        return BoundedInt(self.value + other.value, self.interval.add(other.interval))

    def sub(self, other: Operand) -> BoundedInt:
        other = self._coerce(other)
        return BoundedInt(self.value - other.value, self.interval.sub(other.interval))

    def mul(self, other: Operand) -> BoundedInt:
        other = self._coerce(other)
        return BoundedInt(self.value * other.value, self.interval.mul(other.interval))

    def neg(self) -> BoundedInt:
        return BoundedInt(-self.value, self.interval.negate())

    def abs(self) -> BoundedInt:
        return BoundedInt(abs(self.value), self.interval.abs())

    def min(self, other: Operand) -> BoundedInt:
        other = self._coerce(other)
        return BoundedInt(min(self.value, other.value), self.interval.min(other.interval))

    def max(self, other: Operand) -> BoundedInt:
        other = self._coerce(other)
        return BoundedInt(max(self.value, other.value), self.interval.max(other.interval))

    # -- fallible arithmetic ----------------------------------------------

    @staticmethod
    def _check_divisor(divisor: BoundedInt, classification: Classification) -> None:
        if classification.outcome == Outcome.MUST_FAIL:
            raise DivisionByZeroError()
        if classification.outcome == Outcome.MAY_FAIL and divisor.value == 0:
            raise DivisionByZeroError()

    def div(self, other: Operand, rounding: Rounding = Rounding.FLOOR) -> BoundedInt:
        other = self._coerce(other)
        result = classify.divide(self.interval, other.interval, rounding)
        self._check_divisor(other, result)
        return BoundedInt(divide_values(self.value, other.value, rounding), result.interval)

    def rem(self, other: Operand, rounding: Rounding = Rounding.FLOOR) -> BoundedInt:
        other = self._coerce(other)
        result = classify.remainder(self.interval, other.interval, rounding)
        self._check_divisor(other, result)
        return BoundedInt(remainder_values(self.value, other.value, rounding), result.interval)

    def floor(self, bound: Operand) -> BoundedInt:
        """This value, provided it is at least ``bound``."""
        bound = self._coerce(bound)
        result = classify.floor(self.interval, bound.interval)
        if result.outcome == Outcome.MUST_FAIL or (
            result.outcome == Outcome.MAY_FAIL and self.value < bound.value
        ):
            raise OutOfBoundsError(self.value, bound.value, None)
        return BoundedInt(self.value, result.interval)

    def ceil(self, bound: Operand) -> BoundedInt:
        """This value, provided it is at most ``bound``."""
        bound = self._coerce(bound)
        result = classify.ceil(self.interval, bound.interval)
        if result.outcome == Outcome.MUST_FAIL or (
            result.outcome == Outcome.MAY_FAIL and self.value > bound.value
        ):
            raise OutOfBoundsError(self.value, None, bound.value)
        return BoundedInt(self.value, result.interval)

    def clamp(self, lower: Operand, upper: Operand) -> BoundedInt:
        """This value, provided it is within ``[lower, upper]``."""
        lower = self._coerce(lower)
        upper = self._coerce(upper)
        result = classify.clamp(self.interval, lower.interval, upper.interval)
        if result.outcome == Outcome.MUST_FAIL or (
            result.outcome == Outcome.MAY_FAIL
            and not lower.value <= self.value <= upper.value
        ):
            raise OutOfBoundsError(self.value, lower.value, upper.value)
        return BoundedInt(self.value, result.interval)

    # -- comparison -------------------------------------------------------

    def ord(self, other: Operand) -> Order:
        other = self._coerce(other)
        possible = order(self.interval, other.interval)
        return resolve_order(possible, self.value, other.value)

    # -- operators --------------------------------------------------------

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return f"{self.value} in {self.interval}"

    def __neg__(self) -> BoundedInt:
        return self.neg()

    def __abs__(self) -> BoundedInt:
        return self.abs()

    def __add__(self, other: Operand) -> BoundedInt:
        return self.add(other)

    def __radd__(self, other: int) -> BoundedInt:
        return self._coerce(other).add(self)

    def __sub__(self, other: Operand) -> BoundedInt:
        return self.sub(other)

    def __rsub__(self, other: int) -> BoundedInt:
        return self._coerce(other).sub(self)

    def __mul__(self, other: Operand) -> BoundedInt:
        return self.mul(other)

    def __rmul__(self, other: int) -> BoundedInt:
        return self._coerce(other).mul(self)

    def __floordiv__(self, other: Operand) -> BoundedInt:
        return self.div(other, Rounding.FLOOR)

    def __mod__(self, other: Operand) -> BoundedInt:
        return self.rem(other, Rounding.FLOOR)


def _coerce(operand: Operand, limits: Limits) -> BoundedInt:
    if isinstance(operand, BoundedInt):
        return operand
    return BoundedInt.of(operand, limits)


# ---------------------------------------------------------------------------
# Queries about an interval, answered with bounded values
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FurthestPoint:
    """Which bound of an interval is furthest from a value, and its value.

    ``value`` is ``None`` when both bounds are equally far.
    """

    kind: Furthest
    value: BoundedInt | None


def closest(interval: Interval, point: Operand) -> BoundedInt:
    """The value of ``interval`` closest to ``point``."""
    point = _coerce(point, interval.limits)
    value = min(max(point.value, interval.lower), interval.upper)
    return BoundedInt(value, interval.closest(point.interval))


def furthest(interval: Interval, point: Operand) -> FurthestPoint:
    """The bound of ``interval`` furthest from ``point``."""
    point = _coerce(point, interval.limits)
    kind = resolve_furthest(interval, point.value)
    if kind == Furthest.EQUIDISTANT:
        return FurthestPoint(kind, None)
    value = interval.lower if kind == Furthest.LOWER else interval.upper
    return FurthestPoint(kind, BoundedInt(value, interval))


def values(
    interval: Interval,
    start: Operand | None = None,
    stop: Operand | None = None,
) -> Iterator[BoundedInt]:
    """Every value of ``interval`` from ``start`` to ``stop`` inclusive.

    Both ends default to the interval's own bounds.
    """
    first = interval.lower if start is None else BoundedInt.init(start, interval).value
    last = interval.upper if stop is None else BoundedInt.init(stop, interval).value
    if first > last:
        raise InvalidIntervalError(first, last)
    return (BoundedInt(v, interval) for v in range(first, last + 1))
