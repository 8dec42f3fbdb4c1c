"""Tests for the stand-alone counterexample search."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from algebra import Algebra
from bounds import TINY, Bounds, OverflowStrategy
from validation import counterexample_search
from validation.counterexample_search import (
    CONFIGURATIONS,
    Counterexample,
    SearchReport,
    run_search,
)


@dataclass(frozen=True)
class OffByOneSquare(Algebra):
    def square(self, n: int) -> int:
        return self.bounds.apply(n * n + (1 if n == 2 else 0))


@dataclass(frozen=True)
class NeverRaises(Algebra):
    def cube(self, n: int) -> int:
        return self.bounds.wrap(n ** 3)


class TestRunSearch:

    @pytest.mark.parametrize("name, bounds", CONFIGURATIONS)
    def test_shipped_configurations_pass(self, name, bounds):
        report = run_search(bounds)
        assert report.passed, report.summary()
        assert report.checks_run > 0

    def test_finds_postcondition_violation(self):
        report = run_search(TINY, OffByOneSquare(TINY))
        categories = {(cx.category, cx.operation, cx.inputs) for cx in report.counterexamples}
        assert ("postcondition_violation", "square", (2,)) in categories

    def test_finds_property_violation(self):
        report = run_search(TINY, OffByOneSquare(TINY))
        props = {cx.description for cx in report.counterexamples
                 if cx.category == "property_violation"}
        assert "Property 'even_symmetry' violated" in props

    def test_finds_missing_error(self):
        bounds = Bounds(-8, 7, OverflowStrategy.ERROR)
        report = run_search(bounds, NeverRaises(bounds))
        missing = [cx for cx in report.counterexamples if cx.category == "missing_error"]
        assert missing
        assert all(cx.operation == "cube" for cx in missing)
        assert (2,) in {cx.inputs for cx in missing}


class TestSearchReport:

    def test_empty_report_passes(self):
        report = SearchReport(checks_run=4)
        assert report.passed
        assert "No counterexamples found" in report.summary()

    def test_summary_lists_counterexamples(self):
        report = SearchReport(
            counterexamples=[Counterexample(
                category="property_violation",
                operation="cube",
                inputs=(3,),
                expected="cube(0) == 0",
                actual="property does not hold",
                description="Property 'zero' violated",
            )],
            checks_run=1,
        )
        text = report.summary()
        assert not report.passed
        assert "[1] property_violation / cube" in text
        assert "Inputs:   (3,)" in text


class TestMain:

    def test_main_prints_success(self, capsys):
        counterexample_search.main()
        assert "ALL CONFIGURATIONS PASSED" in capsys.readouterr().out

    def test_main_exits_on_counterexample(self, monkeypatch, capsys):
        monkeypatch.setattr(
            counterexample_search,
            "run_search",
            lambda bounds: SearchReport(counterexamples=[Counterexample(
                "property_violation", "square", (1,), "x", "y", "z",
            )]),
        )
        with pytest.raises(SystemExit) as exc_info:
            counterexample_search.main()
        assert exc_info.value.code == 1
        assert "SOME CONFIGURATIONS HAD COUNTEREXAMPLES" in capsys.readouterr().out
