from __future__ import annotations

from typing import Callable, Dict

from .geometry import Rect
from .units import Unit, inches, mm


# reMarkable 2 screen, sized so an exported page fills the display.
REMARKABLE_WIDTH_MM = 157.2
REMARKABLE_HEIGHT_MM = 209.6


def cornell_rule_height() -> Unit:
    return inches(9.0 / 32.0)


def wide_rule_height() -> Unit:
    return inches(11.0 / 32.0)


def quadrant1(width: Unit, height: Unit) -> Rect:
    return Rect.with_dimensions(width, height).move_to(Unit.zero(), height)


def letter() -> Rect:
    return quadrant1(inches(8.5), inches(11.0))


def half_letter() -> Rect:
    return quadrant1(inches(5.5), inches(8.5))


def legal() -> Rect:
    return quadrant1(inches(8.5), inches(14.0))


def tableau() -> Rect:
    return quadrant1(inches(11.0), inches(17.0))


def a4() -> Rect:
    return quadrant1(mm(210.0), mm(297.0))


def remarkable2() -> Rect:
    return quadrant1(mm(REMARKABLE_WIDTH_MM), mm(REMARKABLE_HEIGHT_MM))


PAGE_SIZES: Dict[str, Callable[[], Rect]] = {
    "letter": letter,
    "half_letter": half_letter,
    "legal": legal,
    "tableau": tableau,
    "a4": a4,
    "remarkable2": remarkable2,
}


def page_size(name: str) -> Rect:
    try:
        return PAGE_SIZES[name]()
    except KeyError:
        raise ValueError(f"Unsupported page size: {name}") from None
