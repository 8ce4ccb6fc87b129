from __future__ import annotations

from .. import colors, config
from ..geometry import Line, Rect
from ..instructions import Instructions
from ..units import Unit, mm
from .description import GridDescription
from .params import RenderParams


class TGrid:
    """
    Turns a GridDescription into drawing instructions.

    Drawing order is fixed so later layers sit on top of earlier ones:
    column backgrounds, cell contents, grid lines, row labels, column labels.
    """

    def __init__(self, description: GridDescription) -> None:
        # Resolving here means a ConfigError is raised before anything is drawn.
        self.params = RenderParams.from_description(description)

    def row_y(self, row: int) -> Unit:
        return self.params.row_y(row)

    def col_x(self, col: int) -> Unit:
        return self.params.col_x(col)

    def _label_text_height(self) -> float:
        return self.params.row_height.to_mm() * config.LABEL_TEXT_SCALE

    def render_column_backgrounds(self, instructions: Instructions) -> None:
        p = self.params
        # Spans the column label band and the rows, never the row label band.
        base = Rect.with_dimensions(p.col_width, p.col_label_height + p.row_height * p.num_rows)
        for col in range(p.num_cols):
            color = p.description.column_background(col)
            if color is None:
                continue
            instructions.set_fill_color(color)
            instructions.push_rect(base.move_to(self.col_x(col), p.grid_bounds.top))

    def render_cell_contents(self, instructions: Instructions) -> None:
        p = self.params
        for row in range(p.num_rows):
            for col in range(p.num_cols):
                cell = Instructions()
                p.description.render_cell_contents(row, col, p.cell_rect(row, col), cell)
                if not cell:
                    continue
                instructions.push_state()
                instructions.extend(cell)
                instructions.pop_state()

    def render_horizontal_lines(self, instructions: Instructions) -> None:
        p = self.params
        left = p.grid_bounds.left
        right = p.grid_right
        for row in range(p.num_rows + 1):
            attrs = p.description.horiz_line_style(row, p.num_rows)
            if attrs is None:
                continue
            y = self.row_y(row)
            attrs.render(instructions, lambda out: out.push_line(Line(left, y, right, y)))

    def render_vertical_lines(self, instructions: Instructions) -> None:
        p = self.params
        top = p.grid_bounds.top
        bottom = p.grid_bottom
        for col in range(p.num_cols + 1):
            attrs = p.description.vert_line_style(col, p.num_cols)
            if attrs is None:
                continue
            x = self.col_x(col)
            attrs.render(instructions, lambda out: out.push_line(Line(x, top, x, bottom)))

    def render_row_labels(self, instructions: Instructions) -> None:
        p = self.params
        if not p.has_row_labels:
            return
        x = p.grid_bounds.left + mm(config.ROW_LABEL_INSET_X_MM)
        text_height = self._label_text_height()
        for row in range(p.num_rows):
            y = self.row_y(row + 1) + mm(config.ROW_LABEL_INSET_Y_MM)
            instructions.push_text(p.description.row_label(row), text_height, x, y, p.font)

    def render_col_labels(self, instructions: Instructions) -> None:
        p = self.params
        if not p.has_col_labels:
            return
        inset = mm(config.COL_LABEL_INSET_MM)
        text_height = self._label_text_height()
        y = p.grid_bounds.top - p.col_label_height + inset
        for col in range(p.num_cols):
            x = self.col_x(col + 1) - inset
            # Rotation applies to the current frame, so rotate first and then
            # translate in rotated coordinates; the text sits at the origin.
            instructions.push_state()
            instructions.rotate(90.0)
            instructions.translate(y, -x)
            instructions.push_text(
                p.description.col_label(col), text_height, Unit.zero(), Unit.zero(), p.font
            )
            instructions.pop_state()

    def append_to_instructions(self, instructions: Instructions) -> None:
        self.render_column_backgrounds(instructions)
        self.render_cell_contents(instructions)

        instructions.set_stroke_width(config.DEFAULT_LINE_WIDTH)
        instructions.set_stroke_color(colors.black())
        instructions.clear_dash()
        self.render_horizontal_lines(instructions)
        self.render_vertical_lines(instructions)

        instructions.set_fill_color(colors.black())
        self.render_row_labels(instructions)
        self.render_col_labels(instructions)

    def generate_instructions(self) -> Instructions:
        instructions = Instructions()
        self.append_to_instructions(instructions)
        return instructions
