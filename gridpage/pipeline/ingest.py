from __future__ import annotations

import csv
import hashlib
import re
from pathlib import Path
from typing import Iterable, List

from slugify import slugify
from sqlmodel import select

from .. import config
from ..models import Document, DocumentStatus, get_session, init_db
from ..sizes import PAGE_SIZES
from .layouts import LAYOUTS, parse_month


REQUIRED_COLUMNS = {"layout", "title"}
TRUE_VALUES = {"1", "true", "yes", "y"}


def load_rows(csv_path: Path) -> List[dict]:
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV not found: {csv_path}")
    with csv_path.open("r", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if reader.fieldnames is None:
            raise ValueError("CSV has no header")
        missing = REQUIRED_COLUMNS - set(reader.fieldnames)
        if missing:
            raise ValueError(f"CSV missing columns: {', '.join(sorted(missing))}")
        rows = [row for row in reader if any((value or "").strip() for value in row.values())]
    if not rows:
        raise ValueError("CSV has no data rows")
    return rows


def slug_from_title(title: str) -> str:
    slug = slugify(title)
    slug = re.sub(r"[^a-z0-9-]+", "-", slug.lower()).strip("-")
    if not slug:
        slug = hashlib.md5(title.encode("utf-8")).hexdigest()[:12]
    if ".." in slug or "/" in slug or "\\" in slug:
        raise ValueError("Invalid slug generated from title")
    return slug


def document_from_row(row: dict) -> Document:
    layout = (row.get("layout") or "").strip()
    title = (row.get("title") or "").strip()
    if not layout or not title:
        raise ValueError("CSV rows must include layout and title")
    if layout not in LAYOUTS:
        raise ValueError(f"Unsupported layout: {layout}")
    page_size = (row.get("page_size") or "").strip() or config.DEFAULT_PAGE_SIZE
    if page_size not in PAGE_SIZES:
        raise ValueError(f"Unsupported page size: {page_size}")
    month = (row.get("month") or "").strip() or None
    if month:
        parse_month(month)
    return Document(
        layout=layout,
        title=title,
        slug=slug_from_title(title),
        page_size=page_size,
        month=month,
        double_sided=(row.get("double_sided") or "").strip().lower() in TRUE_VALUES,
        items=(row.get("items") or "").strip() or None,
        status=DocumentStatus.DRAFT,
    )


def ingest_documents(csv_path: Path) -> List[Document]:
    init_db()
    rows = load_rows(csv_path)
    seen = set()
    documents: List[Document] = []
    for row in rows:
        doc = document_from_row(row)
        if doc.slug in seen:
            raise ValueError(f"Duplicate title: {doc.title}")
        seen.add(doc.slug)
        documents.append(doc)
    with get_session() as session:
        session.add_all(documents)
        session.commit()
        for doc in documents:
            session.refresh(doc)
    return documents


def list_documents(statuses: Iterable[DocumentStatus], layout: str | None = None) -> List[Document]:
    init_db()
    with get_session() as session:
        statement = select(Document)
        if layout:
            statement = statement.where(Document.layout == layout)
        if statuses:
            statement = statement.where(Document.status.in_(list(statuses)))
        return list(session.exec(statement))
