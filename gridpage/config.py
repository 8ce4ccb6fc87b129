from __future__ import annotations

from pathlib import Path


BASE_DIR = Path(__file__).resolve().parents[1]
OUT_DIR = BASE_DIR / "out"
DB_PATH = OUT_DIR / "gridpage.db"

# Grid lines are drawn with these unless a line style overrides them.
DEFAULT_LINE_WIDTH = 1.0

# Label placement, in millimeters.
ROW_LABEL_INSET_X_MM = 2.0
ROW_LABEL_INSET_Y_MM = 1.5
COL_LABEL_INSET_MM = 1.0
LABEL_TEXT_SCALE = 1.9

PREVIEW_MIN_PX = 1600

DEFAULT_PAGE_SIZE = "letter"


def set_out_dir(path: Path) -> None:
    global OUT_DIR, DB_PATH
    OUT_DIR = path
    DB_PATH = OUT_DIR / "gridpage.db"
