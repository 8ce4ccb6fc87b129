from __future__ import annotations

import calendar
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Dict, FrozenSet, List, Optional, Sequence

from .. import colors
from ..colors import Color
from ..fonts import FontProxy
from ..geometry import Line, Rect
from ..instructions import Attributes, Instructions, TextContext
from ..sizes import cornell_rule_height, wide_rule_height
from ..tgrid.description import GridDescription
from ..tgrid.grid import TGrid
from ..units import Unit, inches, mm

WEEKDAYS: FrozenSet[int] = frozenset(range(5))  # Mon..Fri
SUNDAY = 6

THIN_LINE = Attributes().with_stroke_width(0.25).with_stroke_color(colors.gray(0.55))


@dataclass(frozen=True)
class HabitTask:
    name: str
    # None means every day.
    days: Optional[FrozenSet[int]] = None

    def applies_on(self, day: date) -> bool:
        return self.days is None or day.weekday() in self.days


DEFAULT_HABITS: List[HabitTask] = [
    HabitTask("Plank"),
    HabitTask("Stretch"),
    HabitTask("Walk"),
    HabitTask(""),
    HabitTask(""),
    HabitTask("Journal"),
    HabitTask("Read"),
    HabitTask("Bucket list"),
    HabitTask(""),
    HabitTask(""),
    HabitTask("Check calendar"),
    HabitTask("Check to-do list"),
    HabitTask(""),
    HabitTask("Brush teeth"),
    HabitTask("Floss"),
    HabitTask(""),
    HabitTask(""),
    HabitTask("Bug sweep", WEEKDAYS),
    HabitTask("Code reviews", WEEKDAYS),
    HabitTask("Inbox zero", WEEKDAYS),
]


def parse_month(value: Optional[str]) -> date:
    if not value:
        return date.today().replace(day=1)
    try:
        return datetime.strptime(value.strip(), "%Y-%m").date()
    except ValueError:
        raise ValueError(f"Month must look like YYYY-MM, got {value!r}") from None


def split_items(value: Optional[str]) -> List[str]:
    return [item.strip() for item in (value or "").split(";")] if value else []


# -------------------- Habit tracker --------------------
class HabitGridDescription(GridDescription):
    """One row per day of the month, one column per habit."""

    def __init__(self, bounds: Rect, month: date, tasks: Sequence[HabitTask]) -> None:
        self._bounds = bounds
        days = calendar.monthrange(month.year, month.month)[1]
        self.dates = [month.replace(day=d) for d in range(1, days + 1)]
        self.tasks = list(tasks)

    def bounds(self) -> Rect:
        return self._bounds

    def num_rows(self) -> Optional[int]:
        return len(self.dates)

    def num_cols(self) -> Optional[int]:
        return len(self.tasks)

    def row_label_width(self) -> Optional[Unit]:
        return mm(15.0)

    def col_label_height(self) -> Optional[Unit]:
        return inches(1.25)

    def row_label(self, index: int) -> str:
        return self.dates[index].strftime("%b %d")

    def col_label(self, index: int) -> str:
        return self.tasks[index].name

    def horiz_line_style(self, index: int, num_rows: int) -> Optional[Attributes]:
        # heavy line at the edges and above each Sunday
        if index in (0, num_rows) or self.dates[index].weekday() == SUNDAY:
            return Attributes()
        return THIN_LINE

    def vert_line_style(self, index: int, num_cols: int) -> Optional[Attributes]:
        if index % 5 == 0 or index == num_cols:
            return Attributes()
        return THIN_LINE

    def render_cell_contents(self, row: int, col: int, cell_rect: Rect, instructions: Instructions) -> None:
        if self.tasks[col].applies_on(self.dates[row]):
            return
        instructions.set_fill_color(colors.gray(0.7))
        instructions.push_rect(cell_rect)


def build_habits(title: str, bounds: Rect, month: Optional[str] = None, items: Optional[str] = None) -> Instructions:
    names = split_items(items)
    tasks = [HabitTask(name) for name in names] if names else DEFAULT_HABITS
    # Extra 1/8" on the left for binder rings.
    grid_rect = bounds.inset_all_q1(inches(0.625), inches(0.25), inches(0.25), inches(0.25))
    description = HabitGridDescription(grid_rect, parse_month(month), tasks)
    return TGrid(description).generate_instructions()


# -------------------- Checklist --------------------
CHECKLIST_LABEL_HEIGHT = inches(0.6)


class ChecklistDescription(GridDescription):
    """
    Item names in the row label band and a tick box per day. Row count comes
    from the page height, so short lists get blank rows to fill in. Lists too
    long for wide ruling get one row per item at a smaller row height.
    """

    def __init__(self, bounds: Rect, items: Sequence[str], accent: Color) -> None:
        self._bounds = bounds
        self.items = list(items)
        self.accent = accent
        self.rows_that_fit = math.floor((bounds.height - CHECKLIST_LABEL_HEIGHT) / wide_rule_height() + 1e-9)

    def _fits_wide_rule(self) -> bool:
        return len(self.items) <= self.rows_that_fit

    def bounds(self) -> Rect:
        return self._bounds

    def row_height(self) -> Optional[Unit]:
        return wide_rule_height() if self._fits_wide_rule() else None

    def num_rows(self) -> Optional[int]:
        return None if self._fits_wide_rule() else len(self.items)

    def num_cols(self) -> Optional[int]:
        return 7

    def row_label_width(self) -> Optional[Unit]:
        return self._bounds.width.pct(55.0)

    def col_label_height(self) -> Optional[Unit]:
        return CHECKLIST_LABEL_HEIGHT

    def row_label(self, index: int) -> str:
        return self.items[index] if index < len(self.items) else ""

    def col_label(self, index: int) -> str:
        return calendar.day_abbr[index]

    def horiz_line_style(self, index: int, num_rows: int) -> Optional[Attributes]:
        if index in (0, num_rows):
            return Attributes()
        return Attributes().with_stroke_width(0.5).with_stroke_color(colors.gray(0.6)).with_dash(2, 2)

    def column_background(self, index: int) -> Optional[Color]:
        return self.accent if index % 2 == 0 else None

    def render_cell_contents(self, row: int, col: int, cell_rect: Rect, instructions: Instructions) -> None:
        side = cell_rect.width.min(cell_rect.height) * 0.5
        box = Rect.with_dimensions(side, side).move_to(
            cell_rect.left + (cell_rect.width - side) / 2,
            cell_rect.top - (cell_rect.height - side) / 2,
        )
        instructions.set_stroke_width(0.5)
        instructions.set_stroke_color(colors.gray(0.4))
        instructions.push_rect(box, fill=False, stroke=True)

    def font(self) -> FontProxy:
        return FontProxy.helvetica()


def build_checklist(title: str, bounds: Rect, month: Optional[str] = None, items: Optional[str] = None) -> Instructions:
    content = bounds.inset_q1(inches(0.5), inches(0.5))
    heading = TextContext.helvetica().bold().with_text_height(14.0)

    instructions = Instructions()
    instructions.set_fill_color(colors.black())
    heading.render(title, content.left, content.top - mm(5.0), instructions)

    grid_rect = content.inset_all_q1(Unit.zero(), mm(10.0), Unit.zero(), Unit.zero())
    description = ChecklistDescription(grid_rect, split_items(items), colors.gray(0.93))
    TGrid(description).append_to_instructions(instructions)
    return instructions


# -------------------- Cornell notes --------------------
CUE_COLUMN_PCT = 30.0
SUMMARY_PCT = 18.0


def build_cornell(title: str, bounds: Rect, month: Optional[str] = None, items: Optional[str] = None) -> Instructions:
    rule = cornell_rule_height()
    instructions = Instructions()
    instructions.set_stroke_width(0.75)
    instructions.set_stroke_color(colors.gray(0.5))

    summary_y = bounds.bottom + bounds.height.pct(SUMMARY_PCT)
    cue_x = bounds.left + bounds.width.pct(CUE_COLUMN_PCT)
    instructions.push_line(Line(bounds.left, summary_y, bounds.right, summary_y))
    instructions.push_line(Line(cue_x, summary_y, cue_x, bounds.top))

    instructions.set_stroke_width(0.0)
    instructions.set_stroke_color(colors.gray(0.8))
    y = summary_y + rule
    while y < bounds.top - rule:
        instructions.push_line(Line(cue_x, y, bounds.right, y))
        y = y + rule

    if title:
        instructions.set_fill_color(colors.gray(0.4))
        TextContext.helvetica().bold().with_text_height(9.0).render(
            title, bounds.left + mm(4.0), bounds.top - mm(8.0), instructions
        )
    return instructions


# -------------------- Projects --------------------
def _fill_box_with_lines(box: Rect, offset: Unit, gap: Unit, instructions: Instructions) -> None:
    y = box.top - offset
    while y > box.bottom:
        instructions.push_line(Line(box.left, y, box.right, y))
        y = y - gap


def _project_box(rect: Rect, instructions: Instructions) -> None:
    instructions.set_stroke_color(colors.gray(0.5))
    instructions.set_stroke_width(1.0)
    instructions.push_shape(rect.as_rounded_path(inches(0.125), fill=False, stroke=True))

    title_y = rect.top - inches(0.25)
    instructions.push_line(Line(rect.left, title_y, rect.right, title_y))

    instructions.set_stroke_color(colors.gray(0.75))
    inner = rect.inset_all_q1(inches(0.125), inches(0.25), inches(0.125), Unit.zero())
    _fill_box_with_lines(inner, inches(0.25), inches(0.195), instructions)


def build_projects(title: str, bounds: Rect, month: Optional[str] = None, items: Optional[str] = None) -> Instructions:
    content = bounds.inset_all_q1(inches(0.325), inches(0.25), inches(0.25), inches(0.25))
    gutter = inches(0.0625)
    top_left = content.resize(content.width / 2 - gutter, content.height / 2 - gutter)
    top_right = top_left.move_by(content.width / 2 + gutter, Unit.zero())
    bottom_left = top_left.move_by(Unit.zero(), -(content.height / 2 + gutter))
    bottom_right = top_right.move_by(Unit.zero(), -(content.height / 2 + gutter))

    instructions = Instructions()
    for rect in (top_left, top_right, bottom_left, bottom_right):
        _project_box(rect, instructions)
    return instructions


LayoutBuilder = Callable[..., Instructions]

LAYOUTS: Dict[str, LayoutBuilder] = {
    "habits": build_habits,
    "checklist": build_checklist,
    "cornell": build_cornell,
    "projects": build_projects,
}


def build_layout(
    layout: str,
    title: str,
    bounds: Rect,
    month: Optional[str] = None,
    items: Optional[str] = None,
) -> Instructions:
    fn = LAYOUTS.get(layout)
    if fn is None:
        raise ValueError(f"Unknown layout: {layout}")
    return fn(title, bounds, month=month, items=items)
