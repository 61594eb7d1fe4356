"""
Soundness verification.

The verifier runs every spec in ``spec.SPEC_BUILDERS`` for a pair of
operand intervals and reports, per property, whether it held and the
first counterexample if it did not.

For small operand pairs every combination of concrete values is checked.
For larger ones the verifier checks all combinations of edge values
(bounds, their neighbours, -1, 0, 1 and the middle) and then random
pairs up to ``SAMPLE_COUNT``.

An operation whose result interval cannot be represented (the engine
raises ``RepresentabilityError`` while building the spec) has nothing
to verify; its report is marked skipped.
"""

from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass, field
from typing import Callable

from errors import RepresentabilityError
from interval import Interval
from spec import SPEC_BUILDERS, Property, Spec

logger = logging.getLogger(__name__)


@dataclass
class VerificationResult:
    """Outcome of verifying one property."""

    property_name: str
    passed: bool
    counterexample: tuple[int, int] | None = None
    tests_run: int = 0

    def __repr__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        ce = f"  counterexample={self.counterexample}" if self.counterexample else ""
        return f"[{status}] {self.property_name} ({self.tests_run} tests){ce}"


@dataclass
class VerificationReport:
    """Aggregate result of verifying one spec."""

    spec_name: str
    results: list[VerificationResult] = field(default_factory=list)
    skipped: str | None = None

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    def summary(self) -> str:
        lines = [f"--- {self.spec_name} ---"]
        if self.skipped is not None:
            lines.append(f"  => SKIPPED ({self.skipped})")
            return "\n".join(lines)
        for r in self.results:
            lines.append(f"  {r}")
        status = "ALL PASSED" if self.passed else "FAILED"
        lines.append(f"  => {status}")
        return "\n".join(lines)


class VerificationError(Exception):
    """Raised when the engine fails one of its specs."""

    def __init__(self, reports: list[VerificationReport]):
        self.reports = reports
        failed = "\n".join(r.summary() for r in reports if not r.passed)
        super().__init__(f"Verification failed:\n{failed}")


# ---------------------------------------------------------------------------
# The verifier
# ---------------------------------------------------------------------------

class Verifier:
    """Checks the interval engine against concrete arithmetic."""

    EXHAUSTIVE_THRESHOLD = 65_536  # max number of (x, y) pairs for brute force
    SAMPLE_COUNT = 2_000

    @classmethod
    def verify(
        cls,
        a: Interval,
        b: Interval,
        builders: list[Callable[[Interval, Interval], Spec]] | None = None,
    ) -> list[VerificationReport]:
        """Run every spec for ``a`` and ``b`` and return one report each."""
        pairs = cls._pairs(a, b)
        reports = []
        for build in builders if builders is not None else SPEC_BUILDERS:
            try:
                spec = build(a, b)
            except RepresentabilityError as e:
                name = build.__name__.removesuffix("_spec")
                logger.debug("skipping %s for %s, %s: %s", name, a, b, e)
                reports.append(VerificationReport(spec_name=name, skipped=str(e)))
                continue
            reports.append(cls._verify_spec(spec, pairs))
        return reports

    @classmethod
    def require(cls, a: Interval, b: Interval) -> list[VerificationReport]:
        """Like ``verify``, but raise ``VerificationError`` on any failure."""
        reports = cls.verify(a, b)
        if not all(r.passed for r in reports):
            raise VerificationError(reports)
        return reports

    # -- internal ---------------------------------------------------------

    @classmethod
    def _pairs(cls, a: Interval, b: Interval) -> list[tuple[int, int]]:
        if a.width * b.width <= cls.EXHAUSTIVE_THRESHOLD:
            return list(itertools.product(a.values(), b.values()))
        return _generate_samples(a, b, count=cls.SAMPLE_COUNT)

    @classmethod
    def _verify_spec(
        cls, spec: Spec, pairs: list[tuple[int, int]]
    ) -> VerificationReport:
        report = VerificationReport(spec_name=spec.name)
        for prop in spec:
            result = cls._verify_property(prop, pairs)
            logger.debug("%s for %s, %s: %r", spec.name, spec.a, spec.b, result)
            if not result.passed:
                logger.warning(
                    "%s.%s fails for %s, %s at %s",
                    spec.name, prop.name, spec.a, spec.b, result.counterexample,
                )
            report.results.append(result)
        return report

    @staticmethod
    def _verify_property(
        prop: Property, pairs: list[tuple[int, int]]
    ) -> VerificationResult:
        tests_run = 0
        for x, y in pairs:
            tests_run += 1
            if not prop.check(x, y):
                return VerificationResult(
                    property_name=prop.name,
                    passed=False,
                    counterexample=(x, y),
                    tests_run=tests_run,
                )
        return VerificationResult(
            property_name=prop.name,
            passed=True,
            tests_run=tests_run,
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def edge_values(interval: Interval) -> list[int]:
    """The values of ``interval`` most likely to expose a wrong bound."""
    lo, hi = interval.lower, interval.upper
    candidates = [lo, lo + 1, -1, 0, 1, interval.middle(), hi - 1, hi]
    return sorted({v for v in candidates if interval.contains(v)})


def _generate_samples(
    a: Interval, b: Interval, count: int
) -> list[tuple[int, int]]:
    """Generate edge-case + random samples for property checking."""
    samples = list(itertools.product(edge_values(a), edge_values(b)))

    while len(samples) < count:
        samples.append((
            random.randint(a.lower, a.upper),
            random.randint(b.lower, b.upper),
        ))

    return samples
