"""Request and response models for the algebra HTTP service.

The service exposes square and cube over a configurable fixed-width
domain.  This module defines the wire models only -- no arithmetic.
"""

from __future__ import annotations

from enum import Enum, IntEnum

from pydantic import BaseModel, Field

from bounds import Bounds, OverflowStrategy


class Operation(str, Enum):
    SQUARE = "square"
    CUBE = "cube"


class OverflowMode(str, Enum):
    """Overflow strategy as spelled on the wire."""

    WRAP = "wrap"
    CLAMP = "clamp"
    ERROR = "error"

    def to_strategy(self) -> OverflowStrategy:
        return OverflowStrategy[self.name]


class BitWidth(IntEnum):
    INT8 = 8
    INT16 = 16
    INT32 = 32
    INT64 = 64


def bounds_for(bits: BitWidth, overflow: OverflowMode = OverflowMode.WRAP) -> Bounds:
    return Bounds.signed(int(bits), overflow.to_strategy())


class PowerResult(BaseModel):
    """Result of a square or cube evaluation."""

    operation: Operation
    n: int
    result: int
    bits: BitWidth
    overflow: OverflowMode
    overflowed: bool = Field(
        default=False,
        description="True when the raw result left the domain and was adjusted",
    )


class BoundsInfo(BaseModel):
    """Domain of a bit width, with the inputs that never overflow."""

    bits: BitWidth
    lo: int
    hi: int
    square_safe_max: int = Field(..., ge=0)
    cube_safe_max: int = Field(..., ge=0)


class ErrorResponse(BaseModel):
    detail: str
