"""
Soundness specifications for the interval engine.

A Spec states what must be true of one operation over a pair of operand
intervals ``a`` and ``b``.  It is purely declarative: each property is a
predicate over concrete values ``x`` taken from ``a`` and ``y`` taken
from ``b``.

Every builder computes the engine's answer once, from the intervals
alone, and its properties then check that answer against the concrete
arithmetic:

  - soundness: the concrete result lies in the computed interval
  - classification: the operation fails only when the classification
    allows it to, and always fails when it says it must
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import classify
from classify import Classification, Outcome, Rounding, divide_values, remainder_values
from interval import Interval
from order import compare, furthest, order, resolve_furthest


# ---------------------------------------------------------------------------
# Core spec primitives
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Property:
    """A single verifiable property over a pair of concrete values."""

    name: str
    description: str
    predicate: Callable[[int, int], bool]

    def check(self, x: int, y: int) -> bool:
        return self.predicate(x, y)


@dataclass
class Spec:
    """An ordered collection of properties over the operands ``a`` and ``b``."""

    name: str
    a: Interval
    b: Interval
    properties: list[Property] = field(default_factory=list)

    def add(self, prop: Property) -> None:
        self.properties.append(prop)

    def __iter__(self):
        return iter(self.properties)

    def __len__(self):
        return len(self.properties)


def _classified(c: Classification, fails: bool) -> bool:
    """True when a concrete success or failure agrees with ``c``."""
    if fails:
        return c.outcome != Outcome.MUST_PASS
    return c.outcome != Outcome.MUST_FAIL


def _holds(c: Classification, value: int) -> bool:
    return c.interval is not None and value in c.interval


# ---------------------------------------------------------------------------
# Infallible operations
# ---------------------------------------------------------------------------

def addition_spec(a: Interval, b: Interval) -> Spec:
    result = a.add(b)
    spec = Spec(name="addition", a=a, b=b)

    spec.add(Property(
        name="soundness",
        description="x + y lies in a + b",
        predicate=lambda x, y: x + y in result,
    ))
    return spec


def subtraction_spec(a: Interval, b: Interval) -> Spec:
    result = a.sub(b)
    spec = Spec(name="subtraction", a=a, b=b)

    spec.add(Property(
        name="soundness",
        description="x - y lies in a - b",
        predicate=lambda x, y: x - y in result,
    ))
    return spec


def multiplication_spec(a: Interval, b: Interval) -> Spec:
    result = a.mul(b)
    swapped = b.mul(a)
    spec = Spec(name="multiplication", a=a, b=b)

    spec.add(Property(
        name="soundness",
        description="x * y lies in a * b",
        predicate=lambda x, y: x * y in result,
    ))
    spec.add(Property(
        name="commutativity",
        description="a * b == b * a",
        predicate=lambda x, y: result == swapped,
    ))
    return spec


def min_spec(a: Interval, b: Interval) -> Spec:
    result = a.min(b)
    swapped = b.min(a)
    same = a.min(a)
    spec = Spec(name="min", a=a, b=b)

    spec.add(Property(
        name="soundness",
        description="min(x, y) lies in min(a, b)",
        predicate=lambda x, y: min(x, y) in result,
    ))
    spec.add(Property(
        name="commutativity",
        description="min(a, b) == min(b, a)",
        predicate=lambda x, y: result == swapped,
    ))
    spec.add(Property(
        name="idempotence",
        description="min(a, a) == a",
        predicate=lambda x, y: same == a,
    ))
    return spec


def max_spec(a: Interval, b: Interval) -> Spec:
    result = a.max(b)
    swapped = b.max(a)
    same = a.max(a)
    spec = Spec(name="max", a=a, b=b)

    spec.add(Property(
        name="soundness",
        description="max(x, y) lies in max(a, b)",
        predicate=lambda x, y: max(x, y) in result,
    ))
    spec.add(Property(
        name="commutativity",
        description="max(a, b) == max(b, a)",
        predicate=lambda x, y: result == swapped,
    ))
    spec.add(Property(
        name="idempotence",
        description="max(a, a) == a",
        predicate=lambda x, y: same == a,
    ))
    return spec


def union_spec(a: Interval, b: Interval) -> Spec:
    result = a.union(b)
    spec = Spec(name="union", a=a, b=b)

    spec.add(Property(
        name="containment",
        description="x and y both lie in a | b",
        predicate=lambda x, y: x in result and y in result,
    ))
    return spec


# ---------------------------------------------------------------------------
# Fallible operations
# ---------------------------------------------------------------------------

def division_spec(a: Interval, b: Interval, rounding: Rounding = Rounding.FLOOR) -> Spec:
    c = classify.divide(a, b, rounding)
    spec = Spec(name=f"division ({rounding.name.lower()})", a=a, b=b)

    spec.add(Property(
        name="classification",
        description="fails exactly when y == 0, as the outcome allows",
        predicate=lambda x, y: _classified(c, y == 0),
    ))
    spec.add(Property(
        name="soundness",
        description="x / y lies in the quotient interval  (for y != 0)",
        predicate=lambda x, y: y == 0 or _holds(c, divide_values(x, y, rounding)),
    ))
    return spec


def remainder_spec(a: Interval, b: Interval, rounding: Rounding = Rounding.FLOOR) -> Spec:
    c = classify.remainder(a, b, rounding)
    spec = Spec(name=f"remainder ({rounding.name.lower()})", a=a, b=b)

    spec.add(Property(
        name="classification",
        description="fails exactly when y == 0, as the outcome allows",
        predicate=lambda x, y: _classified(c, y == 0),
    ))
    spec.add(Property(
        name="soundness",
        description="x % y lies in the remainder interval  (for y != 0)",
        predicate=lambda x, y: y == 0 or _holds(c, remainder_values(x, y, rounding)),
    ))
    return spec


def floor_spec(a: Interval, b: Interval) -> Spec:
    c = classify.floor(a, b)
    spec = Spec(name="floor", a=a, b=b)

    spec.add(Property(
        name="classification",
        description="x fails the floor y exactly when x < y",
        predicate=lambda x, y: _classified(c, x < y),
    ))
    spec.add(Property(
        name="soundness",
        description="a passing x lies in the narrowed interval",
        predicate=lambda x, y: x < y or _holds(c, x),
    ))
    return spec


def ceil_spec(a: Interval, b: Interval) -> Spec:
    c = classify.ceil(a, b)
    spec = Spec(name="ceil", a=a, b=b)

    spec.add(Property(
        name="classification",
        description="x fails the ceiling y exactly when x > y",
        predicate=lambda x, y: _classified(c, x > y),
    ))
    spec.add(Property(
        name="soundness",
        description="a passing x lies in the narrowed interval",
        predicate=lambda x, y: x > y or _holds(c, x),
    ))
    return spec


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def order_spec(a: Interval, b: Interval) -> Spec:
    possible = order(a, b)
    spec = Spec(name="order", a=a, b=b)

    spec.add(Property(
        name="soundness",
        description="the order of x and y is among the possible orders",
        predicate=lambda x, y: compare(x, y) in possible,
    ))
    return spec


def furthest_spec(a: Interval, b: Interval) -> Spec:
    possible = furthest(a, b)
    spec = Spec(name="furthest", a=a, b=b)

    spec.add(Property(
        name="soundness",
        description="the bound of a furthest from y is among the possible ones",
        predicate=lambda x, y: possible.has(resolve_furthest(a, y)),
    ))
    return spec


def floor_division_spec(a: Interval, b: Interval) -> Spec:
    return division_spec(a, b, Rounding.FLOOR)


def trunc_division_spec(a: Interval, b: Interval) -> Spec:
    return division_spec(a, b, Rounding.TRUNC)


def floor_remainder_spec(a: Interval, b: Interval) -> Spec:
    return remainder_spec(a, b, Rounding.FLOOR)


def trunc_remainder_spec(a: Interval, b: Interval) -> Spec:
    return remainder_spec(a, b, Rounding.TRUNC)


SPEC_BUILDERS: list[Callable[[Interval, Interval], Spec]] = [
    addition_spec,
    subtraction_spec,
    multiplication_spec,
    min_spec,
    max_spec,
    union_spec,
    floor_division_spec,
    trunc_division_spec,
    floor_remainder_spec,
    trunc_remainder_spec,
    floor_spec,
    ceil_spec,
    order_spec,
    furthest_spec,
]
