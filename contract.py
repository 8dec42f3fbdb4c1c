"""Formal contract for the bounded algebra.

Each operation is described as a collection of:
- postconditions: what the output must satisfy given a valid input
- error conditions: what inputs must cause specific exceptions
- algebraic properties: mathematical relationships that must hold

The contract is machine-readable.  The factory and the validation tools
iterate over it to verify an implementation and to search for
counterexamples.

Layers
------
Bounds              domain constraints and overflow semantics (bounds.py)
OperationContract   per-operation contract (post/error/properties)
AlgebraContract     the full contract for a configured domain
build_contract()    constructs an AlgebraContract for given bounds
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from bounds import Bounds, OverflowStrategy


# ---------------------------------------------------------------------------
# Contract building blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Postcondition:
    name: str
    description: str
    check: Callable[[int, int], bool]   # (n, result)


@dataclass(frozen=True)
class ErrorCondition:
    name: str
    description: str
    trigger: Callable[[int], bool]
    exception: type


@dataclass(frozen=True)
class AlgebraicProperty:
    name: str
    description: str
    check: Callable[..., bool]          # (algebra, n)


@dataclass(frozen=True)
class OperationContract:
    name: str
    exponent: int
    postconditions: list[Postcondition]
    error_conditions: list[ErrorCondition]
    properties: list[AlgebraicProperty]

    def raw(self, n: int) -> int:
        """The unbounded mathematical result."""
        return n ** self.exponent


@dataclass(frozen=True)
class AlgebraContract:
    """Complete contract for a configured domain."""

    bounds: Bounds
    operations: dict[str, OperationContract]

    @property
    def all_properties(self) -> list[tuple[str, AlgebraicProperty]]:
        out: list[tuple[str, AlgebraicProperty]] = []
        for name, op in self.operations.items():
            for prop in op.properties:
                out.append((name, prop))
        return out

    @property
    def all_postconditions(self) -> list[tuple[str, Postcondition]]:
        out: list[tuple[str, Postcondition]] = []
        for name, op in self.operations.items():
            for post in op.postconditions:
                out.append((name, post))
        return out


# ---------------------------------------------------------------------------
# Helpers used inside the contract predicates
# ---------------------------------------------------------------------------

def safe_range(bounds: Bounds, exponent: int) -> int:
    """Largest ``m`` such that every ``n`` in [-m, m] has ``n**exponent``
    inside ``bounds``.

    Inputs in the safe range never trigger the overflow strategy.
    """
    if not bounds.contains(0):
        raise ValueError(f"bounds [{bounds.lo}, {bounds.hi}] must contain 0")

    def fits(m: int) -> bool:
        return bounds.contains(m ** exponent) and bounds.contains((-m) ** exponent)

    # fits() is monotone in m, so binary search for the last m that fits
    lo, hi = 0, min(bounds.hi, -bounds.lo)
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if fits(mid):
            lo = mid
        else:
            hi = mid - 1
    return lo


# ---------------------------------------------------------------------------
# Contract builder
# ---------------------------------------------------------------------------

def build_contract(bounds: Bounds) -> AlgebraContract:
    """Construct the full square/cube contract for a domain."""
    contains = bounds.contains

    # -- overflow helper used in postconditions --
    def _expected(raw: int) -> int:
        if bounds.overflow == OverflowStrategy.WRAP:
            return bounds.wrap(raw)
        if bounds.overflow == OverflowStrategy.CLAMP:
            return bounds.clamp(raw)
        return raw  # ERROR mode: out-of-bounds raws are covered by the
                    # error condition instead.

    def _overflow_error(exponent: int) -> ErrorCondition:
        return ErrorCondition(
            "overflow_error",
            "OverflowError when the raw power is out of bounds in ERROR mode",
            lambda n: (
                bounds.overflow == OverflowStrategy.ERROR
                and not contains(n ** exponent)
            ),
            OverflowError,
        )

    # --------------------------------------------------------------- square
    square_contract = OperationContract(
        name="square",
        exponent=2,
        postconditions=[
            Postcondition(
                "result_in_bounds",
                "Result is within bounds",
                lambda n, result: contains(result),
            ),
            Postcondition(
                "result_correct",
                "Result equals overflow-adjusted n * n",
                lambda n, result: result == _expected(n * n),
            ),
        ],
        error_conditions=[_overflow_error(2)],
        properties=[
            AlgebraicProperty(
                "closure", "Result always in bounds",
                lambda alg, n: contains(alg.square(n)),
            ),
            AlgebraicProperty(
                "zero", "square(0) == 0",
                lambda alg, _: not contains(0) or alg.square(0) == 0,
            ),
            AlgebraicProperty(
                "matches_product", "square(n) == n * n in the safe range",
                lambda alg, n: not contains(n * n) or alg.square(n) == n * n,
            ),
            AlgebraicProperty(
                "even_symmetry", "square(-n) == square(n) when -n is representable",
                lambda alg, n: not contains(-n) or alg.square(-n) == alg.square(n),
            ),
            AlgebraicProperty(
                "non_negative", "square(n) >= 0 in the safe range",
                lambda alg, n: not contains(n * n) or alg.square(n) >= 0,
            ),
        ],
    )

    # ----------------------------------------------------------------- cube
    cube_contract = OperationContract(
        name="cube",
        exponent=3,
        postconditions=[
            Postcondition(
                "result_in_bounds",
                "Result is within bounds",
                lambda n, result: contains(result),
            ),
            Postcondition(
                "result_correct",
                "Result equals overflow-adjusted n * n * n",
                lambda n, result: result == _expected(n * n * n),
            ),
        ],
        error_conditions=[_overflow_error(3)],
        properties=[
            AlgebraicProperty(
                "closure", "Result always in bounds",
                lambda alg, n: contains(alg.cube(n)),
            ),
            AlgebraicProperty(
                "zero", "cube(0) == 0",
                lambda alg, _: not contains(0) or alg.cube(0) == 0,
            ),
            AlgebraicProperty(
                "matches_product", "cube(n) == n * n * n in the safe range",
                lambda alg, n: not contains(n ** 3) or alg.cube(n) == n * n * n,
            ),
            AlgebraicProperty(
                "odd_symmetry", "cube(-n) == -cube(n) in the safe range",
                lambda alg, n: (
                    not (contains(-n) and contains(n ** 3) and contains(-(n ** 3)))
                    or alg.cube(-n) == -alg.cube(n)
                ),
            ),
            AlgebraicProperty(
                "unit", "cube(1) == 1 and cube(-1) == -1 when representable",
                lambda alg, _: (
                    (not contains(1) or alg.cube(1) == 1)
                    and (not contains(-1) or alg.cube(-1) == -1)
                ),
            ),
            AlgebraicProperty(
                "square_relation", "cube(n) == n * square(n) in the safe range",
                lambda alg, n: (
                    not (contains(n ** 2) and contains(n ** 3))
                    or alg.cube(n) == n * alg.square(n)
                ),
            ),
        ],
    )

    return AlgebraContract(
        bounds=bounds,
        operations={
            "square": square_contract,
            "cube": cube_contract,
        },
    )
