from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Union

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from ..errors import DocumentIOError, FontResolutionError
from ..fonts import FontMap, FontProxy
from ..geometry import CurveTo, Rect
from ..geometry import Path as ShapePath
from ..instructions import (
    Attributes,
    Attrs,
    Instructions,
    PopState,
    PushState,
    Rotate,
    Shape,
    Text,
    Translate,
)

logger = logging.getLogger(__name__)


class PageSurface:
    """
    A reportlab canvas seen as a page to replay Instructions onto.

    Quadrant-1 rectangles already match PDF user space (origin bottom-left,
    y up), so coordinates only need converting from mm to points.
    """

    def __init__(self, canv: canvas.Canvas) -> None:
        self.canv = canv

    def materialize_font(self, proxy: FontProxy) -> str:
        name = proxy.font_name
        try:
            pdfmetrics.getFont(name)
        except KeyError as exc:
            raise FontResolutionError(proxy, f"{name} is neither builtin nor registered") from exc
        return name

    def resolve_fonts(self, instructions: Instructions) -> FontMap:
        return FontMap().resolve_fonts(self.materialize_font, instructions)

    def draw(self, instructions: Instructions, font_map: FontMap) -> None:
        for record in instructions:
            if isinstance(record, Shape):
                self._draw_path(record.path)
            elif isinstance(record, Attrs):
                self._apply_attrs(record.attributes)
            elif isinstance(record, Text):
                self.canv.setFont(font_map.lookup(record.font), record.height)
                self.canv.drawString(record.x.to_points(), record.y.to_points(), record.text)
            elif isinstance(record, PushState):
                self.canv.saveState()
            elif isinstance(record, PopState):
                self.canv.restoreState()
            elif isinstance(record, Rotate):
                self.canv.rotate(record.degrees)
            elif isinstance(record, Translate):
                self.canv.translate(record.dx.to_points(), record.dy.to_points())
            else:
                raise RuntimeError(f"Unknown instruction {record!r}")

    def _apply_attrs(self, attrs: Attributes) -> None:
        # Only the fields that are set change; everything else stays active.
        if attrs.stroke_width is not None:
            self.canv.setLineWidth(attrs.stroke_width)
        if attrs.stroke_color is not None:
            self.canv.setStrokeColor(attrs.stroke_color)
        if attrs.fill_color is not None:
            self.canv.setFillColor(attrs.fill_color)
        if attrs.dash is not None:
            if attrs.dash.is_solid:
                self.canv.setDash([], 0)
            else:
                self.canv.setDash([attrs.dash.length, attrs.dash.gap], 0)

    def _draw_path(self, shape: ShapePath) -> None:
        path = self.canv.beginPath()
        path.moveTo(shape.start.x.to_points(), shape.start.y.to_points())
        for seg in shape.segments:
            if isinstance(seg, CurveTo):
                path.curveTo(
                    seg.control1.x.to_points(),
                    seg.control1.y.to_points(),
                    seg.control2.x.to_points(),
                    seg.control2.y.to_points(),
                    seg.end.x.to_points(),
                    seg.end.y.to_points(),
                )
            else:
                path.lineTo(seg.end.x.to_points(), seg.end.y.to_points())
        if shape.closed:
            path.close()
        self.canv.drawPath(path, stroke=1 if shape.stroke else 0, fill=1 if shape.fill else 0)


def draw_instructions(surface: PageSurface, instructions: Instructions) -> None:
    font_map = surface.resolve_fonts(instructions)
    surface.draw(instructions, font_map)


PageCallback = Callable[[PageSurface, Rect], Instructions]


def _new_canvas(title: str, output_path: Path, page_bounds: Rect) -> canvas.Canvas:
    pagesize = (page_bounds.width.to_points(), page_bounds.height.to_points())
    canv = canvas.Canvas(str(output_path), pagesize=pagesize)
    canv.setTitle(title)
    return canv


def _save(canv: canvas.Canvas, output_path: Path) -> None:
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        canv.save()
    except OSError as exc:
        raise DocumentIOError(f"Cannot write {output_path}: {exc}") from exc


def save_one_page_document(
    title: str,
    output_path: Union[str, Path],
    page_bounds: Rect,
    callback: PageCallback,
) -> Path:
    output_path = Path(output_path)
    canv = _new_canvas(title, output_path, page_bounds)
    surface = PageSurface(canv)

    instructions = callback(surface, page_bounds)
    draw_instructions(surface, instructions)
    canv.showPage()

    _save(canv, output_path)
    logger.info("Saved %s (%d instructions)", output_path, len(instructions))
    return output_path


def save_double_sided_document(
    title: str,
    output_path: Union[str, Path],
    page_bounds: Rect,
    flip_page_2: bool,
    callback: PageCallback,
) -> Path:
    """Draw the same instructions on two pages, the second optionally turned 180 degrees."""
    output_path = Path(output_path)
    canv = _new_canvas(title, output_path, page_bounds)
    surface = PageSurface(canv)

    instructions = callback(surface, page_bounds)
    font_map = surface.resolve_fonts(instructions)
    surface.draw(instructions, font_map)
    canv.showPage()

    canv.saveState()
    if flip_page_2:
        canv.translate(page_bounds.width.to_points(), page_bounds.height.to_points())
        canv.rotate(180)
    surface.draw(instructions, font_map)
    canv.restoreState()
    canv.showPage()

    _save(canv, output_path)
    logger.info("Saved double-sided %s (%d instructions)", output_path, len(instructions))
    return output_path
