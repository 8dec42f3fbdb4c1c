"""
The algebra factory.

The factory does not just construct an Algebra - it *verifies* it
against the contract before releasing it.

Flow:
  1. Caller requests an algebra for a given Bounds.
  2. Factory builds the implementation.
  3. Factory checks every postcondition, error condition and algebraic
     property of the contract against the implementation.
  4. If verification passes  -> return the algebra.
     If verification fails   -> raise, never hand out a broken instance.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable

from algebra import Algebra
from bounds import Bounds, OverflowStrategy
from contract import (
    AlgebraicProperty,
    OperationContract,
    build_contract,
    safe_range,
)

logger = logging.getLogger(__name__)


@dataclass
class VerificationResult:
    """Outcome of verifying one contract clause."""

    name: str
    passed: bool
    counterexample: int | None = None
    tests_run: int = 0

    def __repr__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        ce = (
            f"  counterexample={self.counterexample}"
            if self.counterexample is not None else ""
        )
        return f"[{status}] {self.name} ({self.tests_run} tests){ce}"


@dataclass
class VerificationReport:
    """Aggregate result of verifying one operation."""

    operation: str
    results: list[VerificationResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    def summary(self) -> str:
        lines = [f"--- {self.operation} ---"]
        for r in self.results:
            lines.append(f"  {r}")
        status = "ALL PASSED" if self.passed else "FAILED"
        lines.append(f"  => {status}")
        return "\n".join(lines)


class VerificationError(Exception):
    """Raised when an implementation fails its contract."""

    def __init__(self, report: VerificationReport):
        self.report = report
        super().__init__(f"Verification failed:\n{report.summary()}")


# ---------------------------------------------------------------------------
# The factory
# ---------------------------------------------------------------------------

class AlgebraFactory:
    """
    Produces Algebra instances that are verified against their contract.

    Domains up to EXHAUSTIVE_THRESHOLD values are checked exhaustively.
    Wider domains (INT32, INT64) are checked on edge values plus a
    seeded random sample, so the outcome is reproducible.
    """

    EXHAUSTIVE_THRESHOLD = 65_536
    SAMPLE_COUNT = 2_000
    SEED = 0

    @classmethod
    def create(cls, bounds: Bounds) -> Algebra:
        """Build, verify, and return an Algebra."""
        return cls.verify(Algebra(bounds=bounds))

    @classmethod
    def verify(cls, algebra: Algebra) -> Algebra:
        """Verify an existing implementation, returning it unchanged."""
        contract = build_contract(algebra.bounds)
        values = cls._domain_values(algebra.bounds)
        for name, op_contract in contract.operations.items():
            report = cls._verify_operation(
                op_contract, getattr(algebra, name), algebra, values
            )
            if not report.passed:
                logger.warning("verification failed for %s", name)
                raise VerificationError(report)
        logger.info(
            "verified algebra on [%d, %d] (%s, %d values per clause)",
            algebra.bounds.lo, algebra.bounds.hi,
            algebra.bounds.overflow.name, len(values),
        )
        return algebra

    # -- internal ---------------------------------------------------------

    @classmethod
    def _domain_values(cls, bounds: Bounds) -> list[int]:
        if bounds.width <= cls.EXHAUSTIVE_THRESHOLD:
            return list(bounds.all_values())
        return _generate_samples(bounds, cls.SAMPLE_COUNT, cls.SEED)

    @classmethod
    def _verify_operation(
        cls,
        op_contract: OperationContract,
        op: Callable[[int], int],
        algebra: Algebra,
        values: list[int],
    ) -> VerificationReport:
        report = VerificationReport(operation=op_contract.name)
        report.results.append(cls._verify_postconditions(op_contract, op, values))
        for prop in op_contract.properties:
            report.results.append(cls._verify_property(prop, algebra, values))
        return report

    @classmethod
    def _verify_postconditions(
        cls,
        op_contract: OperationContract,
        op: Callable[[int], int],
        values: list[int],
    ) -> VerificationResult:
        name = "postconditions"
        tests_run = 0
        for n in values:
            tests_run += 1
            expected_errors = tuple(
                ec.exception for ec in op_contract.error_conditions
                if ec.trigger(n)
            )
            if expected_errors:
                try:
                    op(n)
                except expected_errors:
                    continue
                except Exception:
                    # wrong exception type
                    return VerificationResult(name, False, n, tests_run)
                return VerificationResult(name, False, n, tests_run)

            try:
                result = op(n)
            except Exception:
                # any exception outside a triggered error condition is a failure
                return VerificationResult(name, False, n, tests_run)
            if not all(post.check(n, result) for post in op_contract.postconditions):
                return VerificationResult(name, False, n, tests_run)

        return VerificationResult(name, True, tests_run=tests_run)

    @classmethod
    def _verify_property(
        cls, prop: AlgebraicProperty, algebra: Algebra, values: list[int]
    ) -> VerificationResult:
        raises = algebra.bounds.overflow == OverflowStrategy.ERROR
        tests_run = 0
        for n in values:
            tests_run += 1
            try:
                ok = prop.check(algebra, n)
            except OverflowError:
                # only ERROR-mode overflow is an expected outcome
                if raises:
                    continue
                ok = False
            except Exception:
                ok = False
            if not ok:
                return VerificationResult(prop.name, False, n, tests_run)
        return VerificationResult(prop.name, True, tests_run=tests_run)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def edge_values(bounds: Bounds) -> list[int]:
    """Domain edges plus the edges of the square and cube safe ranges."""
    candidates = [bounds.lo, bounds.lo + 1, -1, 0, 1, bounds.hi - 1, bounds.hi]
    if bounds.contains(0):
        for exponent in (2, 3):
            m = safe_range(bounds, exponent)
            candidates.extend([-m - 1, -m, m, m + 1])
    seen: set[int] = set()
    edges: list[int] = []
    for v in candidates:
        if bounds.contains(v) and v not in seen:
            seen.add(v)
            edges.append(v)
    return edges


def _generate_samples(bounds: Bounds, count: int, seed: int) -> list[int]:
    """Generate edge-case + seeded random samples for verification."""
    rng = random.Random(seed)
    samples = edge_values(bounds)
    while len(samples) < count:
        samples.append(rng.randint(bounds.lo, bounds.hi))
    return samples
