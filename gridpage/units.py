from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real

from reportlab.lib import units as rl_units


MM_PER_INCH = 25.4


@dataclass(frozen=True, order=True)
class Unit:
    """
    A length, stored as millimeters.

    The only ways in are mm() / inches() and the only ways out are the
    to_*() methods, so a bare float never gets mistaken for a length.
    Dividing a Unit by a Unit strips the unit and returns a ratio.
    """

    value_mm: float = 0.0

    def __post_init__(self) -> None:
        value = float(self.value_mm)
        if not math.isfinite(value):
            raise ValueError(f"Unit must be finite, got {self.value_mm!r}")
        object.__setattr__(self, "value_mm", value)

    @classmethod
    def zero(cls) -> "Unit":
        return cls(0.0)

    @classmethod
    def from_mm(cls, value: float) -> "Unit":
        return cls(value)

    @classmethod
    def from_inches(cls, value: float) -> "Unit":
        return cls(float(value) * MM_PER_INCH)

    def to_mm(self) -> float:
        return self.value_mm

    def to_inches(self) -> float:
        return self.value_mm / MM_PER_INCH

    def to_points(self) -> float:
        return self.value_mm * rl_units.mm

    def pct(self, percentage: float) -> "Unit":
        # x.pct(100.0) == x
        return Unit(self.value_mm * (percentage / 100.0))

    def min(self, other: "Unit") -> "Unit":
        return self if self <= other else other

    def max(self, other: "Unit") -> "Unit":
        return self if self >= other else other

    def __abs__(self) -> "Unit":
        return Unit(abs(self.value_mm))

    def __neg__(self) -> "Unit":
        return Unit(-self.value_mm)

    def __add__(self, other: "Unit") -> "Unit":
        if not isinstance(other, Unit):
            return NotImplemented
        return Unit(self.value_mm + other.value_mm)

    def __sub__(self, other: "Unit") -> "Unit":
        if not isinstance(other, Unit):
            return NotImplemented
        return Unit(self.value_mm - other.value_mm)

    def __mul__(self, factor: Real) -> "Unit":
        if isinstance(factor, Unit) or not isinstance(factor, Real):
            return NotImplemented
        return Unit(self.value_mm * float(factor))

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Unit):
            return self.value_mm / other.value_mm
        if isinstance(other, Real):
            return Unit(self.value_mm / float(other))
        return NotImplemented

    def __repr__(self) -> str:
        return f"{self.value_mm:g}mm"


def mm(value: float) -> Unit:
    return Unit.from_mm(value)


def inches(value: float) -> Unit:
    return Unit.from_inches(value)
