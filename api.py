"""FastAPI endpoints answering interval queries.

Routes
------
POST   /intervals/{op}     Result interval of add, sub, mul, min, max, union,
                           closest, negate or abs
POST   /classify/{op}      Outcome and result interval of floor, ceil, clamp,
                           divide or remainder
POST   /order              Possible orderings of a value of a against one of b
POST   /furthest           Bounds of a that can be furthest from a value of b
POST   /verify             Check every operation on a and b against concrete
                           arithmetic
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

import classify
from errors import RepresentabilityError
from interval import Interval
from limits import DEFAULT_LIMITS, Limits
from models import (
    ClassificationResponse,
    ClassifyOp,
    ClassifyRequest,
    IntervalModel,
    IntervalOp,
    IntervalRequest,
    PairRequest,
    PossibleResponse,
    PropertyResult,
    SpecReport,
    VerifyResponse,
)
from order import Furthest, Order, furthest, order
from verification import Verifier

logger = logging.getLogger(__name__)

router = APIRouter(tags=["intervals"])

# The limits are injected by the app factory (see app.py).
_limits: Limits = DEFAULT_LIMITS


def set_limits(limits: Limits) -> None:
    """Set the representable range every request is answered in."""
    global _limits
    _limits = limits


def get_limits() -> Limits:
    return _limits


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _not_found(kind: str, op: str) -> HTTPException:
    logger.info("rejected unknown %s operation %r", kind, op)
    return HTTPException(status_code=404, detail=f"Unknown {kind} operation: {op}")


def _unrepresentable(e: RepresentabilityError) -> HTTPException:
    logger.info("rejected unrepresentable request: %s", e)
    return HTTPException(status_code=422, detail=str(e))


def _interval(model: IntervalModel) -> Interval:
    return model.to_interval(get_limits())


def _flag_names(flag: Order | Furthest, members: list) -> list[str]:
    return [m.name.lower() for m in members if m & flag]


def _apply(op: IntervalOp, a: Interval, b: Interval | None) -> Interval:
    if op == IntervalOp.NEGATE:
        return a.negate()
    if op == IntervalOp.ABS:
        return a.abs()
    return {
        IntervalOp.ADD: a.add,
        IntervalOp.SUB: a.sub,
        IntervalOp.MUL: a.mul,
        IntervalOp.MIN: a.min,
        IntervalOp.MAX: a.max,
        IntervalOp.UNION: a.union,
        IntervalOp.CLOSEST: a.closest,
    }[op](b)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/intervals/{op}", response_model=IntervalModel)
def interval_op(op: str, payload: IntervalRequest) -> IntervalModel:
    """Compute the result interval of an infallible operation."""
    try:
        operation = IntervalOp(op)
    except ValueError:
        raise _not_found("interval", op)

    if not operation.is_unary and payload.b is None:
        logger.info("rejected %s without a second operand", op)
        raise HTTPException(status_code=422, detail=f"{op} needs operand b")

    try:
        a = _interval(payload.a)
        b = _interval(payload.b) if payload.b is not None else None
        return IntervalModel.from_interval(_apply(operation, a, b))
    except RepresentabilityError as e:
        raise _unrepresentable(e) from e


@router.post("/classify/{op}", response_model=ClassificationResponse)
def classify_op(op: str, payload: ClassifyRequest) -> ClassificationResponse:
    """Classify a fallible operation and bound its successful result."""
    try:
        operation = ClassifyOp(op)
    except ValueError:
        raise _not_found("classify", op)

    if operation == ClassifyOp.CLAMP and payload.c is None:
        logger.info("rejected clamp without an upper bound")
        raise HTTPException(status_code=422, detail="clamp needs operand c")

    rounding = payload.rounding.to_rounding()
    try:
        a = _interval(payload.a)
        b = _interval(payload.b)
        if operation == ClassifyOp.FLOOR:
            result = classify.floor(a, b)
        elif operation == ClassifyOp.CEIL:
            result = classify.ceil(a, b)
        elif operation == ClassifyOp.CLAMP:
            result = classify.clamp(a, b, _interval(payload.c))
        elif operation == ClassifyOp.DIVIDE:
            result = classify.divide(a, b, rounding)
        else:
            result = classify.remainder(a, b, rounding)
    except RepresentabilityError as e:
        raise _unrepresentable(e) from e
    return ClassificationResponse.from_classification(result)


@router.post("/order", response_model=PossibleResponse)
def order_op(payload: PairRequest) -> PossibleResponse:
    """Which orderings of a value of ``a`` against a value of ``b`` can occur."""
    try:
        possible = order(_interval(payload.a), _interval(payload.b))
    except RepresentabilityError as e:
        raise _unrepresentable(e) from e
    return PossibleResponse(
        possible=_flag_names(possible, [Order.LESS, Order.SAME, Order.MORE])
    )


@router.post("/furthest", response_model=PossibleResponse)
def furthest_op(payload: PairRequest) -> PossibleResponse:
    """Which bounds of ``a`` can be furthest from a value of ``b``.

    A point ``a`` answers ``["equal"]``.
    """
    try:
        possible = furthest(_interval(payload.a), _interval(payload.b))
    except RepresentabilityError as e:
        raise _unrepresentable(e) from e
    if possible == Furthest.EQUAL:
        return PossibleResponse(possible=["equal"])
    return PossibleResponse(
        possible=_flag_names(
            possible, [Furthest.UPPER, Furthest.LOWER, Furthest.EQUIDISTANT]
        )
    )


@router.post("/verify", response_model=VerifyResponse)
def verify_op(payload: PairRequest) -> VerifyResponse:
    """Check every operation on ``a`` and ``b`` against concrete arithmetic."""
    try:
        reports = Verifier.verify(_interval(payload.a), _interval(payload.b))
    except RepresentabilityError as e:
        raise _unrepresentable(e) from e

    return VerifyResponse(
        passed=all(r.passed for r in reports),
        reports=[
            SpecReport(
                spec=r.spec_name,
                passed=r.passed,
                skipped=r.skipped,
                results=[
                    PropertyResult(
                        name=res.property_name,
                        passed=res.passed,
                        counterexample=list(res.counterexample)
                        if res.counterexample else None,
                        tests_run=res.tests_run,
                    )
                    for res in r.results
                ],
            )
            for r in reports
        ],
    )
