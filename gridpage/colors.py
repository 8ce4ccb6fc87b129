from __future__ import annotations

from reportlab.lib import colors


Color = colors.Color


def rgb(r: float, g: float, b: float) -> Color:
    return colors.Color(r, g, b)


def gray(level: float) -> Color:
    return rgb(level, level, level)


def black() -> Color:
    return gray(0.0)


def white() -> Color:
    return gray(1.0)


def red() -> Color:
    return rgb(1.0, 0.0, 0.0)


def green() -> Color:
    return rgb(0.0, 1.0, 0.0)


def blue() -> Color:
    return rgb(0.0, 0.0, 1.0)
