"""Request and response models for the interval query service.

Intervals travel as ``{"lower": ..., "upper": ...}`` objects.  These
models only check the shape of a request; whether the bounds fit the
service's ``Limits`` is decided by the engine when the request is
answered.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from classify import Classification, Outcome, Rounding
from interval import Interval
from limits import Limits


# ---------------------------------------------------------------------------
# Intervals
# ---------------------------------------------------------------------------

class IntervalModel(BaseModel):
    """A closed integer interval ``[lower, upper]``."""

    lower: int
    upper: int

    @model_validator(mode="after")
    def lower_not_above_upper(self) -> IntervalModel:
        if self.lower > self.upper:
            raise ValueError(
                f"lower bound {self.lower} is above upper bound {self.upper}"
            )
        return self

    def to_interval(self, limits: Limits) -> Interval:
        return Interval(self.lower, self.upper, limits)

    @classmethod
    def from_interval(cls, interval: Interval) -> IntervalModel:
        return cls(lower=interval.lower, upper=interval.upper)


# ---------------------------------------------------------------------------
# Operation names
# ---------------------------------------------------------------------------

class IntervalOp(str, Enum):
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    MIN = "min"
    MAX = "max"
    UNION = "union"
    CLOSEST = "closest"
    NEGATE = "negate"
    ABS = "abs"

    @property
    def is_unary(self) -> bool:
        return self in (IntervalOp.NEGATE, IntervalOp.ABS)


class ClassifyOp(str, Enum):
    FLOOR = "floor"
    CEIL = "ceil"
    CLAMP = "clamp"
    DIVIDE = "divide"
    REMAINDER = "remainder"


class RoundingName(str, Enum):
    FLOOR = "floor"
    TRUNC = "trunc"

    def to_rounding(self) -> Rounding:
        return Rounding[self.name]


class OutcomeName(str, Enum):
    MUST_FAIL = "must_fail"
    MUST_PASS = "must_pass"
    MAY_FAIL = "may_fail"

    @classmethod
    def from_outcome(cls, outcome: Outcome) -> OutcomeName:
        return cls[outcome.name]


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class IntervalRequest(BaseModel):
    """Operands of an interval operation; ``b`` is unused by unary ones."""

    a: IntervalModel
    b: IntervalModel | None = None


class ClassifyRequest(BaseModel):
    """Operands of a fallible operation.

    ``clamp`` takes ``b`` as the lower and ``c`` as the upper bound; the
    others ignore ``c``.
    """

    a: IntervalModel
    b: IntervalModel
    c: IntervalModel | None = None
    rounding: RoundingName = RoundingName.FLOOR


class PairRequest(BaseModel):
    a: IntervalModel
    b: IntervalModel


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class ClassificationResponse(BaseModel):
    outcome: OutcomeName
    interval: IntervalModel | None = None

    @classmethod
    def from_classification(cls, c: Classification) -> ClassificationResponse:
        return cls(
            outcome=OutcomeName.from_outcome(c.outcome),
            interval=IntervalModel.from_interval(c.interval)
            if c.interval is not None else None,
        )


class PossibleResponse(BaseModel):
    """The answers an ordering or furthest query can still give."""

    possible: list[str] = Field(default_factory=list)


class PropertyResult(BaseModel):
    name: str
    passed: bool
    counterexample: list[int] | None = None
    tests_run: int = 0


class SpecReport(BaseModel):
    spec: str
    passed: bool
    skipped: str | None = None
    results: list[PropertyResult] = Field(default_factory=list)


class VerifyResponse(BaseModel):
    passed: bool
    reports: list[SpecReport]
