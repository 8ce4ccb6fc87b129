from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

import fitz  # PyMuPDF
import pytest

from gridpage import colors
from gridpage.errors import DocumentIOError, FontResolutionError
from gridpage.fonts import FontProxy
from gridpage.geometry import Line, Rect
from gridpage.instructions import Instructions
from gridpage.pipeline.render_pdf import (
    PageSurface,
    save_double_sided_document,
    save_one_page_document,
)
from gridpage.sizes import half_letter
from gridpage.tgrid.description import GridDescription
from gridpage.tgrid.grid import TGrid
from gridpage.units import inches, mm


class RecordingPath:
    def __init__(self) -> None:
        self.ops = []

    def moveTo(self, x, y) -> None:  # noqa: N802 - reportlab naming
        self.ops.append(("moveTo", x, y))

    def lineTo(self, x, y) -> None:  # noqa: N802
        self.ops.append(("lineTo", x, y))

    def curveTo(self, *args) -> None:  # noqa: N802
        self.ops.append(("curveTo",) + args)

    def close(self) -> None:
        self.ops.append(("close",))


class RecordingCanvas:
    def __init__(self) -> None:
        self.calls = []

    def beginPath(self) -> RecordingPath:  # noqa: N802
        return RecordingPath()

    def __getattr__(self, name):
        def record(*args, **kwargs):
            self.calls.append((name, args, kwargs))

        return record


class LabelledGrid(GridDescription):
    def bounds(self) -> Rect:
        return half_letter().inset_q1(inches(0.5), inches(0.5))

    def num_rows(self):
        return 10

    def num_cols(self):
        return 4

    def row_label_width(self):
        return inches(1.0)

    def col_label_height(self):
        return inches(1.0)

    def row_label(self, index: int) -> str:
        return f"Day {index + 1}"

    def col_label(self, index: int) -> str:
        return f"Task {index + 1}"

    def column_background(self, index: int):
        return colors.gray(0.9) if index % 2 else None


class SurfaceTests(unittest.TestCase):
    def test_interprets_records_in_order(self) -> None:
        ins = Instructions()
        ins.set_stroke_width(2.0)
        ins.set_dash(3, 1)
        ins.push_line(Line(mm(0), mm(0), inches(1), mm(0)))
        ins.push_state()
        ins.rotate(90)
        ins.translate(inches(1), inches(-1))
        ins.push_text("hi", 12, mm(0), mm(0), FontProxy.helvetica())
        ins.pop_state()
        ins.clear_dash()

        canv = RecordingCanvas()
        surface = PageSurface(canv)
        surface.draw(ins, surface.resolve_fonts(ins))

        names = [name for name, _, _ in canv.calls]
        self.assertEqual(
            names,
            [
                "setLineWidth",
                "setDash",
                "drawPath",
                "saveState",
                "rotate",
                "translate",
                "setFont",
                "drawString",
                "restoreState",
                "setDash",
            ],
        )
        self.assertEqual(canv.calls[1][1], ([3.0, 1.0], 0))
        self.assertEqual(canv.calls[2][2], {"stroke": 1, "fill": 0})
        self.assertEqual(canv.calls[4][1], (90.0,))
        self.assertAlmostEqual(canv.calls[5][1][0], 72.0)
        self.assertAlmostEqual(canv.calls[5][1][1], -72.0)
        self.assertEqual(canv.calls[6][1], ("Helvetica", 12.0))
        self.assertEqual(canv.calls[-1][1], ([], 0))

    def test_unset_attribute_fields_are_left_alone(self) -> None:
        ins = Instructions()
        ins.set_fill_color(colors.red())
        canv = RecordingCanvas()
        surface = PageSurface(canv)
        surface.draw(ins, surface.resolve_fonts(ins))
        self.assertEqual([name for name, _, _ in canv.calls], ["setFillColor"])

    def test_unknown_font_fails_resolution(self) -> None:
        ins = Instructions()
        ins.push_text("x", 10, mm(0), mm(0), FontProxy("NoSuchFamily"))
        with self.assertRaises(FontResolutionError):
            PageSurface(RecordingCanvas()).resolve_fonts(ins)


def _grid_callback(surface, bounds):
    return TGrid(LabelledGrid()).generate_instructions()


def test_save_one_page_document() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / "nested" / "grid.pdf"
        result = save_one_page_document("Grid", path, half_letter(), _grid_callback)
        assert result == path
        assert path.read_bytes().startswith(b"%PDF")
        with fitz.open(path) as doc:
            assert doc.page_count == 1
            assert doc.metadata["title"] == "Grid"
            page = doc.load_page(0)
            assert page.rect.width == pytest.approx(5.5 * 72, abs=0.01)
            assert "Day 1" in page.get_text()


@pytest.mark.parametrize("flip", [False, True])
def test_save_double_sided_document(flip: bool) -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / "grid.pdf"
        save_double_sided_document("Grid", path, half_letter(), flip, _grid_callback)
        with fitz.open(path) as doc:
            assert doc.page_count == 2
            assert "Task 4" in doc.load_page(1).get_text()


def test_unwritable_output_is_document_io_error() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        blocker = Path(temp_dir) / "file.txt"
        blocker.write_text("not a directory", encoding="utf-8")
        with pytest.raises(DocumentIOError):
            save_one_page_document("Grid", blocker / "grid.pdf", half_letter(), _grid_callback)


def test_callback_errors_propagate() -> None:
    def failing(surface, bounds):
        raise ValueError("bad layout")

    with tempfile.TemporaryDirectory() as temp_dir:
        with pytest.raises(ValueError):
            save_one_page_document("Grid", Path(temp_dir) / "x.pdf", half_letter(), failing)
