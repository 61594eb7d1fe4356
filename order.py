"""
Furthest-point and ordering queries.

Both queries come in two halves.  The classification looks only at the
intervals and returns the set of answers that are still possible.  The
resolution takes the concrete values and picks the one answer that
actually holds.  When a classification already holds a single answer,
no concrete value is needed.
"""

from __future__ import annotations

from enum import Flag

from interval import Interval


class Furthest(Flag):
    """Which bound of an interval can be furthest from a value.

    ``EQUAL`` (no bit set) means the interval is a single point, so both
    bounds are the same value.
    """

    EQUAL = 0
    UPPER = 1
    LOWER = 2
    EQUIDISTANT = 4

    LOWER_OR_EQUIDISTANT = LOWER | EQUIDISTANT
    UPPER_OR_EQUIDISTANT = UPPER | EQUIDISTANT
    LOWER_OR_UPPER = LOWER | UPPER
    ANY = LOWER | UPPER | EQUIDISTANT

    def has(self, other: Furthest) -> bool:
        """True when every answer in ``other`` is possible here."""
        return self & other == other


class Order(Flag):
    """How a value compares to another: less, same, or more."""

    LESS = 1
    SAME = 2
    MORE = 4

    LESS_OR_SAME = LESS | SAME
    SAME_OR_MORE = SAME | MORE
    LESS_OR_MORE = LESS | MORE
    ANY = LESS | SAME | MORE

    @property
    def is_definite(self) -> bool:
        return self in (Order.LESS, Order.SAME, Order.MORE)


# ---------------------------------------------------------------------------
# Furthest
# ---------------------------------------------------------------------------

def furthest(a: Interval, b: Interval) -> Furthest:
    """Which bounds of ``a`` can be furthest from a value taken in ``b``."""
    if a.is_point:
        return Furthest.EQUAL

    m = a.middle()
    exact = a.is_middle_exact()

    found = Furthest.EQUAL
    if exact and m in b:
        found |= Furthest.EQUIDISTANT
    if m < b.upper:
        found |= Furthest.LOWER
    # Without an exact middle, a value sitting on the rounded-down middle
    # is strictly closer to the lower bound.
    if b.lower < m or (not exact and b.lower == m):
        found |= Furthest.UPPER
    return found


def resolve_furthest(a: Interval, point: int) -> Furthest:
    """The single bound of ``a`` that is furthest from ``point``."""
    if a.is_point:
        return Furthest.EQUAL

    m = a.middle()
    if point == m and a.is_middle_exact():
        return Furthest.EQUIDISTANT
    if point <= m:
        return Furthest.UPPER
    return Furthest.LOWER


def furthest_value(a: Interval, point: int) -> int | None:
    """The bound of ``a`` furthest from ``point``; ``None`` on a tie."""
    found = resolve_furthest(a, point)
    if found == Furthest.EQUIDISTANT:
        return None
    if found == Furthest.LOWER:
        return a.lower
    return a.upper


# ---------------------------------------------------------------------------
# Order
# ---------------------------------------------------------------------------

def order(a: Interval, b: Interval) -> Order:
    """Which orderings of a value of ``a`` against a value of ``b`` can occur."""
    found = Order(0)
    if a.lower < b.upper:
        found |= Order.LESS
    if a.lower <= b.upper and b.lower <= a.upper:
        found |= Order.SAME
    if a.upper > b.lower:
        found |= Order.MORE
    return found


def compare(a: int, b: int) -> Order:
    if a < b:
        return Order.LESS
    if a > b:
        return Order.MORE
    return Order.SAME


def resolve_order(classification: Order, a: int, b: int) -> Order:
    """Turn an ``order`` classification into the actual order of ``a`` and ``b``."""
    if classification.is_definite:
        return classification
    return compare(a, b)
