"""
Tests for the bounded-value runtime type.

A BoundedInt's value always lies in its interval.  Infallible
operations never raise (within the limits), fallible ones raise exactly
when the concrete values land in the failing region.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from hypothesis import given, settings, assume
from hypothesis.strategies import composite, integers, sampled_from

from bint import BoundedInt, FurthestPoint, closest, furthest, values
from classify import Rounding
from errors import (
    DivisionByZeroError,
    IncompatibleIntervalError,
    IntervalOverflowError,
    InvalidIntervalError,
    OutOfBoundsError,
    ValueFailure,
)
from interval import Interval
from limits import I8
from order import Furthest, Order


@composite
def bounded_ints(draw, lo=-20, hi=20):
    """A BoundedInt with a random interval and a random value in it."""
    a = draw(integers(min_value=lo, max_value=hi))
    b = draw(integers(min_value=lo, max_value=hi))
    interval = Interval(min(a, b), max(a, b))
    value = draw(integers(min_value=interval.lower, max_value=interval.upper))
    return BoundedInt(value, interval)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestConstruction:
    def test_value_in_interval(self):
        x = BoundedInt(3, Interval(0, 5))
        assert int(x) == 3
        assert x.interval == Interval(0, 5)

    def test_value_outside_raises(self):
        with pytest.raises(OutOfBoundsError) as exc:
            BoundedInt(9, Interval(0, 5))
        assert exc.value.side == "over"

    def test_of_is_point(self):
        x = BoundedInt.of(7)
        assert x.interval == Interval.point(7)

    def test_from_int_uses_limits(self):
        x = BoundedInt.from_int(5, I8)
        assert x.interval == Interval(-128, 127)

    def test_from_int_outside_limits(self):
        with pytest.raises(OutOfBoundsError):
            BoundedInt.from_int(200, I8)

    def test_init_checks_value(self):
        assert BoundedInt.init(3, Interval(0, 5)).value == 3
        assert BoundedInt.init(BoundedInt.of(4), Interval(0, 5)).interval == Interval(0, 5)
        with pytest.raises(OutOfBoundsError) as exc:
            BoundedInt.init(-1, Interval(0, 5))
        assert exc.value.side == "under"

    def test_widen(self):
        x = BoundedInt(3, Interval(2, 4)).widen(Interval(0, 10))
        assert x.interval == Interval(0, 10)

    def test_widen_to_narrower_raises(self):
        with pytest.raises(IncompatibleIntervalError):
            BoundedInt(3, Interval(2, 4)).widen(Interval(3, 10))

    def test_widen_error_is_type_error(self):
        with pytest.raises(TypeError):
            BoundedInt(3, Interval(2, 4)).widen(Interval(0, 3))

    def test_expect(self):
        BoundedInt(3, Interval(0, 5)).expect()

    def test_index(self):
        assert [10, 20, 30][BoundedInt.of(1)] == 20

    def test_str(self):
        assert str(BoundedInt(3, Interval(0, 5))) == "3 in [0..5]"


# ---------------------------------------------------------------------------
# Infallible arithmetic
# ---------------------------------------------------------------------------

class TestInfallible:
    def test_add(self):
        x = BoundedInt(15, Interval(10, 20)) + BoundedInt(1, Interval(-1, 2))
        assert x.value == 16
        assert x.interval == Interval(9, 22)

    def test_int_operands(self):
        x = BoundedInt(15, Interval(10, 20))
        assert (x + 1).interval == Interval(11, 21)
        assert (1 + x).interval == Interval(11, 21)
        assert (30 - x).interval == Interval(10, 20)
        assert (2 * x).interval == Interval(20, 40)

    def test_mul(self):
        x = BoundedInt(-4, Interval(-8, 0)) * BoundedInt(3, Interval(2, 10))
        assert x.value == -12
        assert x.interval == Interval(-80, 0)

    def test_neg_abs(self):
        x = BoundedInt(-3, Interval(-5, 2))
        assert (-x).interval == Interval(-2, 5)
        assert abs(x).value == 3
        assert abs(x).interval == Interval(0, 5)

    def test_min_max(self):
        a = BoundedInt(8, Interval(0, 10))
        b = BoundedInt(2, Interval(-5, 5))
        assert a.min(b) == BoundedInt(2, Interval(-5, 5))
        assert a.max(b) == BoundedInt(8, Interval(0, 10))

    def test_overflow_surfaces_from_interval(self):
        x = BoundedInt(1, Interval(0, 100, I8))
        with pytest.raises(IntervalOverflowError):
            x + x

    @given(a=bounded_ints(), b=bounded_ints())
    def test_results_stay_in_interval(self, a, b):
        for result in (a + b, a - b, a * b, -a, abs(a), a.min(b), a.max(b)):
            assert result.value in result.interval


# ---------------------------------------------------------------------------
# Fallible arithmetic
# ---------------------------------------------------------------------------

class TestDivision:
    def test_floor_and_trunc(self):
        x = BoundedInt(-7, Interval(-16, 16))
        assert x.div(2).value == -4
        assert x.div(2, Rounding.TRUNC).value == -3
        assert (x // 2).value == -4

    def test_remainder(self):
        x = BoundedInt(-7, Interval(-16, 16))
        assert (x % 2).value == 1
        assert x.rem(2, Rounding.TRUNC).value == -1
        assert (x % 2).interval == Interval(-1, 1)

    def test_zero_point_divisor_must_fail(self):
        with pytest.raises(DivisionByZeroError):
            BoundedInt.of(5).div(0)

    def test_zero_value_in_spanning_divisor(self):
        d = BoundedInt(0, Interval(-2, 2))
        with pytest.raises(DivisionByZeroError):
            BoundedInt.of(5).div(d)
        with pytest.raises(ZeroDivisionError):
            BoundedInt.of(5).rem(d)

    def test_nonzero_value_in_spanning_divisor(self):
        d = BoundedInt(-2, Interval(-2, 2))
        assert BoundedInt.of(5).div(d).value == -3

    @given(
        a=bounded_ints(),
        b=bounded_ints(),
        rounding=sampled_from([Rounding.FLOOR, Rounding.TRUNC]),
    )
    def test_fails_only_on_zero(self, a, b, rounding):
        if b.value == 0:
            with pytest.raises(DivisionByZeroError):
                a.div(b, rounding)
            return
        q = a.div(b, rounding)
        r = a.rem(b, rounding)
        assert q.value in q.interval
        assert r.value in r.interval
        assert q.value * b.value + r.value == a.value


class TestNarrowing:
    def test_floor_passes(self):
        x = BoundedInt(2, Interval(-3, 4)).floor(0)
        assert x.value == 2
        assert x.interval == Interval(0, 4)

    def test_floor_fails_under(self):
        with pytest.raises(OutOfBoundsError) as exc:
            BoundedInt(-2, Interval(-3, 4)).floor(0)
        assert exc.value.side == "under"
        assert exc.value.value == -2

    def test_floor_must_fail(self):
        with pytest.raises(OutOfBoundsError):
            BoundedInt(2, Interval(0, 3)).floor(BoundedInt(5, Interval(4, 9)))

    def test_ceil_fails_over(self):
        with pytest.raises(OutOfBoundsError) as exc:
            BoundedInt(3, Interval(-3, 4)).ceil(0)
        assert exc.value.side == "over"

    def test_ceil_passes(self):
        assert BoundedInt(-1, Interval(-3, 4)).ceil(0).interval == Interval(-3, 0)

    def test_clamp(self):
        x = BoundedInt(5, Interval(-5, 15)).clamp(0, 10)
        assert x.interval == Interval(0, 10)

    def test_clamp_failures(self):
        with pytest.raises(OutOfBoundsError) as exc:
            BoundedInt(12, Interval(-5, 15)).clamp(0, 10)
        assert exc.value.side == "over"
        with pytest.raises(OutOfBoundsError) as exc:
            BoundedInt(-1, Interval(-5, 15)).clamp(0, 10)
        assert exc.value.side == "under"

    def test_value_failures_share_base(self):
        with pytest.raises(ValueFailure):
            BoundedInt.of(1).floor(2)

    @given(a=bounded_ints(), b=bounded_ints())
    def test_floor_ceil_exact(self, a, b):
        if a.value < b.value:
            with pytest.raises(OutOfBoundsError):
                a.floor(b)
        else:
            assert a.floor(b).value == a.value
        if a.value > b.value:
            with pytest.raises(OutOfBoundsError):
                a.ceil(b)
        else:
            assert a.ceil(b).value == a.value

    @given(a=bounded_ints(), lo=bounded_ints(-20, 0), hi=bounded_ints(0, 20))
    @settings(max_examples=200)
    def test_clamp_exact(self, a, lo, hi):
        assume(lo.value <= hi.value)
        if lo.value <= a.value <= hi.value:
            result = a.clamp(lo, hi)
            assert result.value == a.value
            assert result.value in result.interval
        else:
            with pytest.raises(OutOfBoundsError):
                a.clamp(lo, hi)


# ---------------------------------------------------------------------------
# Comparison and interval helpers
# ---------------------------------------------------------------------------

class TestComparison:
    def test_ord_overlapping(self):
        a = BoundedInt(1, Interval(0, 12))
        b = BoundedInt(3, Interval(-10, 4))
        assert a.ord(b) == Order.LESS

    def test_ord_disjoint(self):
        a = BoundedInt(1, Interval(0, 2))
        assert a.ord(BoundedInt(7, Interval(5, 9))) == Order.LESS
        assert a.ord(1) == Order.SAME

    @given(a=bounded_ints(), b=bounded_ints())
    def test_ord_matches_ints(self, a, b):
        expected = Order.LESS if a.value < b.value else (
            Order.MORE if a.value > b.value else Order.SAME
        )
        assert a.ord(b) == expected


class TestIntervalHelpers:
    def test_closest_inside(self):
        x = closest(Interval(0, 10), BoundedInt(4, Interval(2, 20)))
        assert x.value == 4
        assert x.interval == Interval(2, 10)

    def test_closest_below(self):
        x = closest(Interval(0, 10), -7)
        assert x.value == 0
        assert x.interval == Interval.point(0)

    def test_closest_above(self):
        x = closest(Interval(0, 10), 99)
        assert x == BoundedInt(10, Interval.point(10))

    def test_furthest(self):
        assert furthest(Interval(0, 4), 1) == FurthestPoint(
            Furthest.UPPER, BoundedInt(4, Interval(0, 4))
        )
        assert furthest(Interval(0, 4), 3).value.value == 0
        assert furthest(Interval(0, 4), 2) == FurthestPoint(Furthest.EQUIDISTANT, None)

    def test_furthest_of_point(self):
        found = furthest(Interval.point(3), 0)
        assert found.kind == Furthest.EQUAL
        assert found.value.value == 3

    def test_values(self):
        assert [int(v) for v in values(Interval(-1, 2))] == [-1, 0, 1, 2]
        assert all(v.interval == Interval(-1, 2) for v in values(Interval(-1, 2)))

    def test_values_sub_range(self):
        assert [int(v) for v in values(Interval(0, 9), 3, 5)] == [3, 4, 5]

    def test_values_start_after_stop(self):
        with pytest.raises(InvalidIntervalError):
            values(Interval(0, 9), 5, 3)

    def test_values_start_outside(self):
        with pytest.raises(OutOfBoundsError):
            values(Interval(0, 9), -1)
