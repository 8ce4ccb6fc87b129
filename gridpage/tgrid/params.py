from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..errors import ConfigError
from ..fonts import FontProxy
from ..geometry import Rect
from ..units import Unit
from .description import GridDescription

logger = logging.getLogger(__name__)

# Keeps floor(extent / size) from losing a row when the ratio is an exact
# multiple that floating point lands just under.
_FLOOR_TOLERANCE = 1e-9


@dataclass(frozen=True)
class RenderParams:
    """Concrete geometry for one grid, resolved from a GridDescription."""

    description: GridDescription = field(compare=False, repr=False)
    grid_bounds: Rect
    row_height: Unit
    col_width: Unit
    num_rows: int
    num_cols: int
    has_row_labels: bool
    row_label_width: Unit
    has_col_labels: bool
    col_label_height: Unit
    font: FontProxy

    @classmethod
    def from_description(cls, description: GridDescription) -> "RenderParams":
        grid_bounds = description.bounds()

        row_label_width = description.row_label_width()
        col_label_height = description.col_label_height()
        has_row_labels = row_label_width is not None
        has_col_labels = col_label_height is not None
        row_label_width = row_label_width if has_row_labels else Unit.zero()
        col_label_height = col_label_height if has_col_labels else Unit.zero()

        num_rows, row_height = _resolve_axis(
            "row",
            count=description.num_rows(),
            size=description.row_height(),
            extent=grid_bounds.height - col_label_height,
        )
        num_cols, col_width = _resolve_axis(
            "col",
            count=description.num_cols(),
            size=description.col_width(),
            extent=grid_bounds.width - row_label_width,
        )

        params = cls(
            description=description,
            grid_bounds=grid_bounds,
            row_height=row_height,
            col_width=col_width,
            num_rows=num_rows,
            num_cols=num_cols,
            has_row_labels=has_row_labels,
            row_label_width=row_label_width,
            has_col_labels=has_col_labels,
            col_label_height=col_label_height,
            font=description.font(),
        )
        logger.debug(
            "Resolved grid %dx%d, cell %r x %r, labels %r / %r",
            num_rows,
            num_cols,
            col_width,
            row_height,
            row_label_width,
            col_label_height,
        )
        return params

    # Top edge of `row`; row == num_rows is the bottom of the grid.
    def row_y(self, row: int) -> Unit:
        return self.grid_bounds.top - self.col_label_height - self.row_height * row

    # Left edge of `col`; col == num_cols is the right edge of the grid.
    def col_x(self, col: int) -> Unit:
        return self.grid_bounds.left + self.row_label_width + self.col_width * col

    @property
    def grid_right(self) -> Unit:
        return self.col_x(self.num_cols)

    @property
    def grid_bottom(self) -> Unit:
        return self.row_y(self.num_rows)

    def cell_rect(self, row: int, col: int) -> Rect:
        return Rect.with_dimensions(self.col_width, self.row_height).move_to(
            self.col_x(col), self.row_y(row)
        )


def _resolve_axis(
    name: str,
    count: Optional[int],
    size: Optional[Unit],
    extent: Unit,
) -> Tuple[int, Unit]:
    if count is None and size is None:
        raise ConfigError(f"Either num_{name}s or the {name} size must be set")
    if count is not None and count < 0:
        raise ConfigError(f"num_{name}s must not be negative, got {count}")
    if size is not None and size <= Unit.zero():
        raise ConfigError(f"{name} size must be positive, got {size!r}")

    if count is None:
        count = max(0, math.floor(extent / size + _FLOOR_TOLERANCE))
    elif size is None:
        if count == 0:
            raise ConfigError(f"Cannot derive the {name} size from num_{name}s=0")
        size = extent / count
    return int(count), size
