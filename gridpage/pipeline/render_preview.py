from __future__ import annotations

from pathlib import Path

import fitz  # PyMuPDF

from .. import config
from ..storage import artifact_path


def _render_page_to_png(doc: fitz.Document, page_index: int, out_path: Path, min_px: int) -> None:
    page = doc.load_page(page_index)

    # Scale so the short side of the image is at least min_px pixels.
    rect = page.rect
    short_side = min(rect.width, rect.height)
    zoom = max(2.0, min_px / float(short_side))
    mat = fitz.Matrix(zoom, zoom)

    pix = page.get_pixmap(matrix=mat, alpha=False)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    pix.save(str(out_path))


def render_preview(
    slug: str,
    pdf_path: Path,
    base_dir: Path | None = None,
    page_index: int = 0,
    min_px: int | None = None,
) -> Path:
    out_path = artifact_path(slug, "preview", base_dir=base_dir)
    with fitz.open(pdf_path) as doc:
        _render_page_to_png(doc, page_index, out_path, min_px or config.PREVIEW_MIN_PX)
    return out_path
