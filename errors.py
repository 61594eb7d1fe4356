"""
Exception hierarchy for bounded integers.

Two families, both rooted at ``BintError``:

RepresentabilityError
    The caller asked for an interval that cannot exist within its
    ``Limits`` (or with ``lower > upper``).  These are programming
    errors: the intervals involved are known before any value is.

ValueFailure
    A fallible operation whose classification was not ``MUST_PASS``
    met a concrete value in its failing region.  These are ordinary,
    recoverable errors.

Each class also derives from the closest builtin so callers can catch
``ValueError``, ``OverflowError`` or ``ZeroDivisionError`` as usual.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from interval import Interval


class BintError(Exception):
    """Base class for every bounded-integer error."""


# ---------------------------------------------------------------------------
# Representability failures
# ---------------------------------------------------------------------------

class RepresentabilityError(BintError):
    """An interval cannot be represented."""


class InvalidIntervalError(RepresentabilityError, ValueError):
    """Raised when ``lower > upper``."""

    def __init__(self, lower: int, upper: int) -> None:
        self.lower = lower
        self.upper = upper
        super().__init__(f"lower ({lower}) must be <= upper ({upper})")


class OutOfRangeError(RepresentabilityError, ValueError):
    """A bound falls outside the representable range."""

    def __init__(self, bound: int, limit: int, message: str) -> None:
        self.bound = bound
        self.limit = limit
        super().__init__(message)


class IntervalOverflowError(OutOfRangeError, OverflowError):
    """A bound is above the representable range."""

    def __init__(self, bound: int, limit: int) -> None:
        super().__init__(bound, limit, f"upper bound must be at most {limit}")


class IntervalUnderflowError(OutOfRangeError, OverflowError):
    """A bound is below the representable range."""

    def __init__(self, bound: int, limit: int) -> None:
        super().__init__(bound, limit, f"lower bound must be at least {limit}")


class IncompatibleIntervalError(RepresentabilityError, TypeError):
    """A value's interval is not guaranteed to fit the target interval."""

    def __init__(self, source: Interval, target: Interval) -> None:
        self.source = source
        self.target = target
        super().__init__(
            f"values of {source} aren't guaranteed to fit within {target}"
        )


# ---------------------------------------------------------------------------
# Value failures
# ---------------------------------------------------------------------------

class ValueFailure(BintError):
    """A concrete value landed in the failing region of an operation."""


class DivisionByZeroError(ValueFailure, ZeroDivisionError):
    def __init__(self) -> None:
        super().__init__("division by zero")


class OutOfBoundsError(ValueFailure, ValueError):
    """A value is outside the concrete bounds it must respect.

    Either bound may be ``None`` when only one side was checked (a floor
    has no upper bound, a ceil no lower one).  ``side`` is ``"under"``
    when the value is below ``lower`` and ``"over"`` otherwise.
    """

    def __init__(self, value: int, lower: int | None, upper: int | None) -> None:
        self.value = value
        self.lower = lower
        self.upper = upper
        self.side = "under" if lower is not None and value < lower else "over"
        lo = "" if lower is None else lower
        hi = "" if upper is None else upper
        super().__init__(f"{value} is outside [{lo}..{hi}]")
