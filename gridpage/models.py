from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Field, Session, SQLModel, create_engine

from . import config

logger = logging.getLogger(__name__)


class DocumentStatus(str, Enum):
    DRAFT = "DRAFT"
    READY = "READY"
    FAILED = "FAILED"


class Document(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    layout: str
    title: str
    slug: str = Field(index=True)
    page_size: str = config.DEFAULT_PAGE_SIZE
    month: Optional[str] = None
    double_sided: bool = False
    items: Optional[str] = None
    status: DocumentStatus = Field(default=DocumentStatus.DRAFT)
    fail_code: Optional[str] = None
    fail_detail: Optional[str] = None
    path: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# Columns added after the first release; older databases get them on init.
LATE_COLUMNS = {
    "items": "TEXT",
    "path": "TEXT",
}

engine = create_engine(f"sqlite:///{config.DB_PATH}")


def reset_engine() -> None:
    global engine
    engine = create_engine(f"sqlite:///{config.DB_PATH}")


def init_db() -> None:
    config.OUT_DIR.mkdir(parents=True, exist_ok=True)
    SQLModel.metadata.create_all(engine)
    _migrate_db()


def _migrate_db() -> None:
    """Add columns missing from a database created by an older version."""
    try:
        inspector = inspect(engine)
        if "document" not in inspector.get_table_names():
            return
        columns = {col["name"] for col in inspector.get_columns("document")}
        for name, sql_type in LATE_COLUMNS.items():
            if name not in columns:
                with engine.begin() as conn:
                    conn.execute(text(f"ALTER TABLE document ADD COLUMN {name} {sql_type}"))
                logger.info("Added column document.%s", name)
    except SQLAlchemyError:
        logger.exception("Schema migration failed for %s", config.DB_PATH)
        raise


def get_session() -> Session:
    return Session(engine, expire_on_commit=False)
