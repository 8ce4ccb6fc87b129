from __future__ import annotations

from pathlib import Path

from . import config


ARTIFACT_NAMES = {
    "pdf": "{slug}.pdf",
    "preview": "{slug}.png",
    "error": "{slug}.error.log",
}


def document_dir(base_dir: Path | None = None) -> Path:
    path = base_dir or config.OUT_DIR
    path.mkdir(parents=True, exist_ok=True)
    return path


def artifact_path(slug: str, artifact_type: str, base_dir: Path | None = None) -> Path:
    filename = ARTIFACT_NAMES[artifact_type].format(slug=slug)
    return document_dir(base_dir) / filename
