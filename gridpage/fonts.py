from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Callable, Dict, TypeVar

from .errors import FontResolutionError

if TYPE_CHECKING:
    from .instructions import Instructions

logger = logging.getLogger(__name__)

F = TypeVar("F")

# (family, bold, italic) -> PDF base-14 font name
BUILTIN_FONT_NAMES: Dict[tuple, str] = {
    ("Times", False, False): "Times-Roman",
    ("Times", True, False): "Times-Bold",
    ("Times", False, True): "Times-Italic",
    ("Times", True, True): "Times-BoldItalic",
    ("Helvetica", False, False): "Helvetica",
    ("Helvetica", True, False): "Helvetica-Bold",
    ("Helvetica", False, True): "Helvetica-Oblique",
    ("Helvetica", True, True): "Helvetica-BoldOblique",
    ("Courier", False, False): "Courier",
    ("Courier", True, False): "Courier-Bold",
    ("Courier", False, True): "Courier-Oblique",
    ("Courier", True, True): "Courier-BoldOblique",
}


@dataclass(frozen=True)
class FontProxy:
    """
    Stands in for a font until the backend resolves it. Two proxies with
    the same family/bold/italic are the same font.
    """

    family: str = "Times"
    bold: bool = False
    italic: bool = False

    @classmethod
    def times(cls) -> "FontProxy":
        return cls("Times")

    @classmethod
    def helvetica(cls) -> "FontProxy":
        return cls("Helvetica")

    @classmethod
    def times_bold(cls) -> "FontProxy":
        return cls("Times", bold=True)

    @classmethod
    def helvetica_bold(cls) -> "FontProxy":
        return cls("Helvetica", bold=True)

    def with_bold(self, bold: bool = True) -> "FontProxy":
        return replace(self, bold=bold)

    def with_italic(self, italic: bool = True) -> "FontProxy":
        return replace(self, italic=italic)

    @property
    def font_name(self) -> str:
        builtin = BUILTIN_FONT_NAMES.get((self.family, self.bold, self.italic))
        if builtin:
            return builtin
        # Registered TTF families follow the Family-BoldItalic convention.
        suffix = ("Bold" if self.bold else "") + ("Italic" if self.italic else "")
        return f"{self.family}-{suffix}" if suffix else self.family


class FontMap:
    """Proxy -> backend font table, built once per document."""

    def __init__(self) -> None:
        self._fonts: Dict[FontProxy, object] = {}

    def __contains__(self, proxy: FontProxy) -> bool:
        return proxy in self._fonts

    def __len__(self) -> int:
        return len(self._fonts)

    def resolve_fonts(
        self,
        materialize: Callable[[FontProxy], F],
        instructions: "Instructions",
    ) -> "FontMap":
        for text in instructions.texts():
            proxy = text.font
            if proxy in self._fonts:
                continue
            try:
                self._fonts[proxy] = materialize(proxy)
            except FontResolutionError:
                raise
            except (KeyError, ValueError, OSError) as exc:
                raise FontResolutionError(proxy, str(exc)) from exc
            logger.debug("Resolved font %s", proxy.font_name)
        return self

    def lookup(self, proxy: FontProxy):
        try:
            return self._fonts[proxy]
        except KeyError:
            raise RuntimeError(f"Font {proxy} was not resolved before drawing") from None
