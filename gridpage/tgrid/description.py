from __future__ import annotations

from typing import Optional

from ..colors import Color
from ..fonts import FontProxy
from ..geometry import Rect
from ..instructions import Attributes, Instructions
from ..sizes import letter
from ..units import Unit


class GridDescription:
    """
    Describes one grid. Subclass and override only what the grid needs;
    every method has a usable default.

    Sizing: for each axis, at least one of the count and the size must be
    given (num_rows()/row_height(), num_cols()/col_width()). Whatever is
    missing is derived from bounds() minus the label band.
    """

    def bounds(self) -> Rect:
        # One sheet of copy paper, shifted for Quadrant-1 math.
        return letter()

    def num_rows(self) -> Optional[int]:
        return None

    def num_cols(self) -> Optional[int]:
        return None

    def row_height(self) -> Optional[Unit]:
        return None

    def col_width(self) -> Optional[Unit]:
        return None

    # Width (height) of the row (column) label band. None means no labels.
    def row_label_width(self) -> Optional[Unit]:
        return None

    def col_label_height(self) -> Optional[Unit]:
        return None

    # index < num_rows (num_cols)
    def row_label(self, index: int) -> str:
        return ""

    def col_label(self, index: int) -> str:
        return ""

    def horiz_line_style(self, index: int, num_rows: int) -> Optional[Attributes]:
        """
        Style for the horizontal line above row `index`; index == num_rows
        is the line after the last row. None draws no line. Fields set on
        the returned Attributes override the 1.0 / black / solid defaults.
        """
        return Attributes()

    def vert_line_style(self, index: int, num_cols: int) -> Optional[Attributes]:
        return Attributes()

    def column_background(self, index: int) -> Optional[Color]:
        return None

    def render_cell_contents(
        self,
        row: int,
        col: int,
        cell_rect: Rect,
        instructions: Instructions,
    ) -> None:
        pass

    # Font for the labels.
    def font(self) -> FontProxy:
        return FontProxy.times_bold()
