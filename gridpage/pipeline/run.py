from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Tuple

from ..errors import ConfigError, DocumentIOError, FontResolutionError
from ..geometry import Rect
from ..models import Document, DocumentStatus, get_session, init_db
from ..sizes import page_size
from ..storage import artifact_path
from .layouts import build_layout
from .render_pdf import PageSurface, save_double_sided_document, save_one_page_document


logger = logging.getLogger(__name__)

FAIL_CODES = (
    (ConfigError, "CONFIG_ERROR"),
    (FontResolutionError, "FONT_ERROR"),
    (DocumentIOError, "IO_ERROR"),
)


def _write_error(slug: str, message: str) -> None:
    try:
        error_path = artifact_path(slug, "error")
        error_path.write_text(message, encoding="utf-8")
    except OSError:
        # The failure is already recorded on the Document row.
        logger.exception("Could not write error log for %s", slug)


def fail_code_for(exc: BaseException) -> str:
    for exc_type, code in FAIL_CODES:
        if isinstance(exc, exc_type):
            return code
    return "PIPELINE_ERROR"


def render_document(doc: Document, base_dir: Path | None = None) -> Path:
    bounds = page_size(doc.page_size)
    output_path = artifact_path(doc.slug, "pdf", base_dir=base_dir)

    def callback(surface: PageSurface, page_bounds: Rect):
        return build_layout(doc.layout, doc.title, page_bounds, month=doc.month, items=doc.items)

    if doc.double_sided:
        return save_double_sided_document(doc.title, output_path, bounds, True, callback)
    return save_one_page_document(doc.title, output_path, bounds, callback)


def process_document(doc: Document) -> Tuple[DocumentStatus, Path | None, str | None, str | None]:
    try:
        path = render_document(doc)
    except Exception as exc:
        logger.exception("Render error for %s", doc.slug)
        return DocumentStatus.FAILED, None, fail_code_for(exc), str(exc) or exc.__class__.__name__
    return DocumentStatus.READY, path, None, None


def run_pipeline(documents: Iterable[Document]) -> dict[str, list[str]]:
    """Render every document independently; one failure never stops the batch."""
    init_db()
    results: dict[str, list[str]] = {"READY": [], "FAILED": []}
    with get_session() as session:
        for doc in documents:
            status, path, fail_code, fail_detail = process_document(doc)

            doc.status = status
            doc.fail_code = fail_code
            doc.fail_detail = fail_detail
            doc.path = str(path) if path is not None else None
            session.add(doc)
            session.commit()
            session.refresh(doc)

            if status == DocumentStatus.READY:
                results["READY"].append(doc.slug)
            else:
                _write_error(doc.slug, f"{fail_code}: {fail_detail}")
                results["FAILED"].append(doc.slug)
    logger.info("Batch done: %d ready, %d failed", len(results["READY"]), len(results["FAILED"]))
    return results
