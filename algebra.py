"""
Square and cube over fixed-width signed integers.

Each operation is a plain computation that:
  1. Rejects inputs that are not values of the fixed-width type
  2. Performs the raw computation
  3. Applies the bounds to bring the result back into the domain

With the default 32-bit wrapping bounds the results match what a
two's-complement ``int`` produces on common platforms.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bounds import Bounds, INT32

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Algebra:
    """
    Bounded integer powers.  Every result lies within ``bounds``
    (or an OverflowError is raised under the ERROR strategy).
    """

    bounds: Bounds = INT32

    # -- internal helpers ---------------------------------------------------

    def _validate(self, n: int) -> None:
        # bool is an int subclass but not a value of an integer type here
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError(f"expected int, got {type(n).__name__}")
        if not self.bounds.contains(n):
            raise ValueError(
                f"{n} is outside bounds [{self.bounds.lo}, {self.bounds.hi}]"
            )

    def _apply(self, op: str, n: int, raw: int) -> int:
        result = self.bounds.apply(raw)
        if result != raw:
            logger.debug(
                "%s(%d) overflowed: raw=%d adjusted=%d (%s)",
                op, n, raw, result, self.bounds.overflow.name,
            )
        return result

    # -- public operations --------------------------------------------------

    def square(self, n: int) -> int:
        """Return ``n * n`` within bounds."""
        self._validate(n)
        return self._apply("square", n, n * n)

    def cube(self, n: int) -> int:
        """Return ``n * n * n`` within bounds."""
        self._validate(n)
        return self._apply("cube", n, n * n * n)


_default = Algebra()


def square(n: int) -> int:
    """Square a 32-bit signed integer, wrapping on overflow."""
    return _default.square(n)


def cube(n: int) -> int:
    """Cube a 32-bit signed integer, wrapping on overflow."""
    return _default.cube(n)
