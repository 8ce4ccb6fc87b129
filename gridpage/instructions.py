from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Iterator, List, Optional, Tuple, Union

from .colors import Color
from .fonts import FontProxy
from .geometry import Line, Path, Rect
from .units import Unit


@dataclass(frozen=True)
class Dash:
    """Dash pattern in points. `length=None` is an explicit solid line."""

    length: Optional[float] = None
    gap: float = 0.0

    @classmethod
    def solid(cls) -> "Dash":
        return cls(None, 0.0)

    @property
    def is_solid(self) -> bool:
        return self.length is None


@dataclass(frozen=True)
class Attributes:
    """
    Style settings. A field left as None is "whatever is currently active";
    backends apply only the fields that are set and never reset the rest.
    """

    stroke_width: Optional[float] = None
    stroke_color: Optional[Color] = None
    fill_color: Optional[Color] = None
    dash: Optional[Dash] = None

    def with_stroke_width(self, width: float) -> "Attributes":
        return replace(self, stroke_width=width)

    def with_stroke_color(self, color: Color) -> "Attributes":
        return replace(self, stroke_color=color)

    def with_fill_color(self, color: Color) -> "Attributes":
        return replace(self, fill_color=color)

    def with_dash(self, length: float, gap: float) -> "Attributes":
        return replace(self, dash=Dash(length, gap))

    def solid(self) -> "Attributes":
        return replace(self, dash=Dash.solid())

    def is_empty(self) -> bool:
        return (
            self.stroke_width is None
            and self.stroke_color is None
            and self.fill_color is None
            and self.dash is None
        )

    def render(self, instructions: "Instructions", draw: Callable[["Instructions"], None]) -> None:
        """Run `draw` with these settings layered over the current ones."""
        setting_something = not self.is_empty()
        if setting_something:
            instructions.push_state()

        if self.stroke_width is not None:
            instructions.set_stroke_width(self.stroke_width)
        if self.stroke_color is not None:
            instructions.set_stroke_color(self.stroke_color)
        if self.fill_color is not None:
            instructions.set_fill_color(self.fill_color)
        if self.dash is not None:
            if self.dash.is_solid:
                instructions.clear_dash()
            else:
                instructions.set_dash(self.dash.length, self.dash.gap)

        draw(instructions)

        if setting_something:
            instructions.pop_state()


# -------------------- Records --------------------
@dataclass(frozen=True)
class Shape:
    path: Path


@dataclass(frozen=True)
class Text:
    text: str
    height: float  # font size, points
    x: Unit
    y: Unit
    font: FontProxy


@dataclass(frozen=True)
class Attrs:
    attributes: Attributes


@dataclass(frozen=True)
class PushState:
    pass


@dataclass(frozen=True)
class PopState:
    pass


@dataclass(frozen=True)
class Rotate:
    degrees: float


@dataclass(frozen=True)
class Translate:
    dx: Unit
    dy: Unit


Instruction = Union[Shape, Text, Attrs, PushState, PopState, Rotate, Translate]


@dataclass
class Instructions:
    """
    Append-only drawing log, replayed by a backend in append order.

    Attribute setters merge into one pending record until something else is
    appended, so a run of setters becomes a single Attrs entry.
    """

    _records: List[Instruction] = field(default_factory=list)
    _open_attrs: Optional[Attributes] = None

    # ---------- reading ----------
    @property
    def records(self) -> Tuple[Instruction, ...]:
        if self._open_attrs is None:
            return tuple(self._records)
        return tuple(self._records) + (Attrs(self._open_attrs),)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self._records) + (0 if self._open_attrs is None else 1)

    def __bool__(self) -> bool:
        return len(self) > 0

    def texts(self) -> List[Text]:
        return [r for r in self.records if isinstance(r, Text)]

    def shapes(self) -> List[Shape]:
        return [r for r in self.records if isinstance(r, Shape)]

    def attrs(self) -> List[Attributes]:
        return [r.attributes for r in self.records if isinstance(r, Attrs)]

    # ---------- appending ----------
    def _append(self, record: Instruction) -> None:
        if self._open_attrs is not None:
            self._records.append(Attrs(self._open_attrs))
            self._open_attrs = None
        self._records.append(record)

    def extend(self, other: "Instructions") -> None:
        for record in other.records:
            if isinstance(record, Attrs):
                self._merge_attrs(**_set_fields(record.attributes))
            else:
                self._append(record)

    def push_state(self) -> None:
        self._append(PushState())

    def pop_state(self) -> None:
        self._append(PopState())

    def rotate(self, degrees: float) -> None:
        self._append(Rotate(float(degrees)))

    def translate(self, dx: Unit, dy: Unit) -> None:
        self._append(Translate(dx, dy))

    def push_shape(self, shape: Union[Path, Line, Rect]) -> None:
        path = shape if isinstance(shape, Path) else shape.as_path()
        self._append(Shape(path))

    def push_line(self, line: Line) -> None:
        self._append(Shape(line.as_path()))

    def push_rect(self, rect: Rect, fill: bool = True, stroke: bool = False) -> None:
        self._append(Shape(rect.as_path(fill=fill, stroke=stroke)))

    def push_text(self, text: str, height: float, x: Unit, y: Unit, font: FontProxy) -> None:
        self._append(Text(str(text), float(height), x, y, font))

    # ---------- attributes ----------
    def _merge_attrs(self, **changes) -> None:
        current = self._open_attrs or Attributes()
        self._open_attrs = replace(current, **changes)

    def set_stroke_width(self, width: float) -> None:
        self._merge_attrs(stroke_width=float(width))

    def set_stroke_color(self, color: Color) -> None:
        self._merge_attrs(stroke_color=color)

    def set_fill_color(self, color: Color) -> None:
        self._merge_attrs(fill_color=color)

    def clear_fill_color(self) -> None:
        self._merge_attrs(fill_color=None)

    def set_dash(self, length: float, gap: float) -> None:
        self._merge_attrs(dash=Dash(float(length), float(gap)))

    def clear_dash(self) -> None:
        self._merge_attrs(dash=Dash.solid())


def _set_fields(attributes: Attributes) -> dict:
    return {
        name: value
        for name, value in (
            ("stroke_width", attributes.stroke_width),
            ("stroke_color", attributes.stroke_color),
            ("fill_color", attributes.fill_color),
            ("dash", attributes.dash),
        )
        if value is not None
    }


@dataclass(frozen=True)
class TextContext:
    font: FontProxy = field(default_factory=FontProxy.times)
    text_height: float = 12.0

    @classmethod
    def times(cls) -> "TextContext":
        return cls(FontProxy.times())

    @classmethod
    def helvetica(cls) -> "TextContext":
        return cls(FontProxy.helvetica())

    def with_text_height(self, text_height: float) -> "TextContext":
        return replace(self, text_height=text_height)

    def bold(self, bold: bool = True) -> "TextContext":
        return replace(self, font=self.font.with_bold(bold))

    def render(self, text: str, x: Unit, y: Unit, instructions: Instructions) -> None:
        instructions.push_text(text, self.text_height, x, y, self.font)
