"""Counterexample search: discovers gaps in implementation or tests.

This module runs independently of the test suite.  It walks every value
of a small domain and searches for:

1. Postcondition violations: inputs where the implementation doesn't
   match the contract's expected output.
2. Error condition violations: inputs that should raise but don't (or
   raise the wrong exception).
3. Property violations: algebraic relationships that fail for some
   input.

Run directly::

    python -m validation.counterexample_search
"""
from __future__ import annotations

import sys
from dataclasses import dataclass, field

from algebra import Algebra
from bounds import INT8, TINY, Bounds, OverflowStrategy
from contract import AlgebraContract, build_contract


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass
class Counterexample:
    category: str
    operation: str
    inputs: tuple
    expected: str
    actual: str
    description: str


@dataclass
class SearchReport:
    counterexamples: list[Counterexample] = field(default_factory=list)
    checks_run: int = 0

    @property
    def passed(self) -> bool:
        return len(self.counterexamples) == 0

    def summary(self) -> str:
        lines = [
            "Counterexample Search Report",
            "=" * 40,
            f"Total checks: {self.checks_run}",
            f"Counterexamples found: {len(self.counterexamples)}",
        ]
        if self.counterexamples:
            lines.append("")
            for i, cx in enumerate(self.counterexamples, 1):
                lines.append(f"  [{i}] {cx.category} / {cx.operation}")
                lines.append(f"      Inputs:   {cx.inputs}")
                lines.append(f"      Expected: {cx.expected}")
                lines.append(f"      Actual:   {cx.actual}")
                lines.append(f"      {cx.description}")
        else:
            lines.append("\nNo counterexamples found, all checks passed.")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Search functions
# ---------------------------------------------------------------------------

def search_postcondition_violations(
    alg: Algebra,
    contract: AlgebraContract,
) -> tuple[list[Counterexample], int]:
    """Exhaustively verify postconditions for every input."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, op_contract in contract.operations.items():
        op = getattr(alg, op_name)
        for n in contract.bounds.all_values():
            checks += 1
            # Inputs that are supposed to error are covered separately
            if any(ec.trigger(n) for ec in op_contract.error_conditions):
                continue

            try:
                result = op(n)
            except Exception as e:
                cxs.append(Counterexample(
                    category="unexpected_error",
                    operation=op_name,
                    inputs=(n,),
                    expected="no error",
                    actual=f"{type(e).__name__}: {e}",
                    description="Operation raised an unexpected exception",
                ))
                continue

            for post in op_contract.postconditions:
                if not post.check(n, result):
                    cxs.append(Counterexample(
                        category="postcondition_violation",
                        operation=op_name,
                        inputs=(n,),
                        expected=post.description,
                        actual=f"result={result} (raw={op_contract.raw(n)})",
                        description=f"Postcondition '{post.name}' violated",
                    ))

    return cxs, checks


def search_error_condition_violations(
    alg: Algebra,
    contract: AlgebraContract,
) -> tuple[list[Counterexample], int]:
    """Check that every triggered error condition raises its exception."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, op_contract in contract.operations.items():
        op = getattr(alg, op_name)
        for ec in op_contract.error_conditions:
            for n in contract.bounds.all_values():
                if not ec.trigger(n):
                    continue
                checks += 1
                try:
                    result = op(n)
                except ec.exception:
                    continue
                except Exception as e:
                    cxs.append(Counterexample(
                        category="wrong_exception",
                        operation=op_name,
                        inputs=(n,),
                        expected=ec.exception.__name__,
                        actual=f"{type(e).__name__}: {e}",
                        description=f"Error condition '{ec.name}' raised the wrong type",
                    ))
                    continue
                cxs.append(Counterexample(
                    category="missing_error",
                    operation=op_name,
                    inputs=(n,),
                    expected=ec.exception.__name__,
                    actual=f"result={result}",
                    description=f"Error condition '{ec.name}' did not raise",
                ))

    return cxs, checks


def search_property_violations(
    alg: Algebra,
    contract: AlgebraContract,
) -> tuple[list[Counterexample], int]:
    """Exhaustively check every algebraic property."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, prop in contract.all_properties:
        for n in contract.bounds.all_values():
            checks += 1
            try:
                if not prop.check(alg, n):
                    cxs.append(Counterexample(
                        category="property_violation",
                        operation=op_name,
                        inputs=(n,),
                        expected=prop.description,
                        actual="property does not hold",
                        description=f"Property '{prop.name}' violated",
                    ))
            except OverflowError:
                pass

    return cxs, checks


# ---------------------------------------------------------------------------
# Top-level runner
# ---------------------------------------------------------------------------

def run_search(bounds: Bounds, alg: Algebra | None = None) -> SearchReport:
    """Run complete counterexample search for one domain."""
    if alg is None:
        alg = Algebra(bounds=bounds)
    contract = build_contract(bounds)
    report = SearchReport()

    for search_fn in (
        search_postcondition_violations,
        search_error_condition_violations,
        search_property_violations,
    ):
        cxs, checks = search_fn(alg, contract)
        report.counterexamples.extend(cxs)
        report.checks_run += checks

    return report


CONFIGURATIONS = [
    ("WRAP   [-8, 7]", TINY),
    ("CLAMP  [-8, 7]", Bounds(-8, 7, OverflowStrategy.CLAMP)),
    ("ERROR  [-8, 7]", Bounds(-8, 7, OverflowStrategy.ERROR)),
    ("WRAP   INT8", INT8),
    ("CLAMP  INT8", Bounds.signed(8, OverflowStrategy.CLAMP)),
]


def main() -> None:
    """Run counterexample search across several configurations."""
    all_passed = True
    for name, bounds in CONFIGURATIONS:
        print(f"\n--- Configuration: {name} ---")
        report = run_search(bounds)
        print(report.summary())
        if not report.passed:
            all_passed = False

    print("\n" + "=" * 40)
    if all_passed:
        print("ALL CONFIGURATIONS PASSED")
    else:
        print("SOME CONFIGURATIONS HAD COUNTEREXAMPLES")
        sys.exit(1)


if __name__ == "__main__":
    main()
