from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple, Union

from .units import Unit


# Control-point offset for approximating a quarter circle with one cubic
# Bezier, measured from the corner as a fraction of the radius.
KAPPA = 1.0 - 0.55228


@dataclass(frozen=True)
class Point:
    x: Unit
    y: Unit


@dataclass(frozen=True)
class LineTo:
    end: Point


@dataclass(frozen=True)
class CurveTo:
    control1: Point
    control2: Point
    end: Point


Segment = Union[LineTo, CurveTo]


@dataclass(frozen=True)
class Path:
    """An outline in page coordinates plus how it should be painted."""

    start: Point
    segments: Tuple[Segment, ...] = ()
    closed: bool = False
    fill: bool = False
    stroke: bool = True

    def points(self) -> Tuple[Point, ...]:
        out = [self.start]
        for seg in self.segments:
            if isinstance(seg, CurveTo):
                out.extend([seg.control1, seg.control2, seg.end])
            else:
                out.append(seg.end)
        return tuple(out)


@dataclass(frozen=True)
class Line:
    x1: Unit
    y1: Unit
    x2: Unit
    y2: Unit

    def as_path(self) -> Path:
        return Path(
            start=Point(self.x1, self.y1),
            segments=(LineTo(Point(self.x2, self.y2)),),
            closed=False,
            fill=False,
            stroke=True,
        )


@dataclass(frozen=True)
class Rect:
    """
    Axis-aligned rectangle in Quadrant-1 coordinates: `top` is the larger y
    value and the rectangle extends downward by `height`.

    Every operation returns a new Rect. Insets are not clamped, so an inset
    larger than the rectangle leaves a negative width or height.
    """

    top: Unit
    left: Unit
    width: Unit
    height: Unit

    @classmethod
    def with_dimensions(cls, width: Unit, height: Unit) -> "Rect":
        return cls(top=Unit.zero(), left=Unit.zero(), width=width, height=height)

    @property
    def right(self) -> Unit:
        return self.left + self.width

    @property
    def bottom(self) -> Unit:
        return self.top - self.height

    def move_to(self, left: Unit, top: Unit) -> "Rect":
        return replace(self, left=left, top=top)

    def move_by(self, dx: Unit, dy: Unit) -> "Rect":
        return replace(self, left=self.left + dx, top=self.top + dy)

    def resize(self, width: Unit, height: Unit) -> "Rect":
        return replace(self, width=width, height=height)

    def inset_q1(self, dx: Unit, dy: Unit) -> "Rect":
        return self.inset_all_q1(dx, dy, dx, dy)

    def inset_all_q1(self, left: Unit, top: Unit, right: Unit, bottom: Unit) -> "Rect":
        # the top moves down when inset
        return Rect(
            top=self.top - top,
            left=self.left + left,
            width=self.width - left - right,
            height=self.height - top - bottom,
        )

    def as_path(self, fill: bool = True, stroke: bool = False) -> Path:
        return Path(
            start=Point(self.left, self.top),
            segments=(
                LineTo(Point(self.right, self.top)),
                LineTo(Point(self.right, self.bottom)),
                LineTo(Point(self.left, self.bottom)),
            ),
            closed=True,
            fill=fill,
            stroke=stroke,
        )

    def as_rounded_path(self, radius: Unit, fill: bool = True, stroke: bool = False) -> Path:
        r = radius
        k = radius * KAPPA
        top, right, bottom, left = self.top, self.right, self.bottom, self.left
        return Path(
            start=Point(right - r, top),
            segments=(
                CurveTo(Point(right - k, top), Point(right, top - k), Point(right, top - r)),
                LineTo(Point(right, bottom + r)),
                CurveTo(Point(right, bottom + k), Point(right - k, bottom), Point(right - r, bottom)),
                LineTo(Point(left + r, bottom)),
                CurveTo(Point(left + k, bottom), Point(left, bottom + k), Point(left, bottom + r)),
                LineTo(Point(left, top - r)),
                CurveTo(Point(left, top - k), Point(left + k, top), Point(left + r, top)),
            ),
            closed=True,
            fill=fill,
            stroke=stroke,
        )
