from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from gridpage import config, models
from gridpage.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_out_dir(monkeypatch):
    # --out rebinds these module globals; monkeypatch puts them back.
    monkeypatch.setattr(config, "OUT_DIR", config.OUT_DIR)
    monkeypatch.setattr(config, "DB_PATH", config.DB_PATH)
    monkeypatch.setattr(models, "engine", models.engine)


def test_render_writes_pdf_and_preview(tmp_path: Path) -> None:
    result = runner.invoke(
        app,
        ["render", "checklist", "--title", "House Chores", "--items", "Dishes;Trash", "--out", str(tmp_path), "--preview"],
    )
    assert result.exit_code == 0, result.output
    assert (tmp_path / "house-chores.pdf").exists()
    assert (tmp_path / "house-chores.png").exists()


def test_render_unknown_page_size_exits_nonzero(tmp_path: Path) -> None:
    result = runner.invoke(app, ["render", "cornell", "--page-size", "b5", "--out", str(tmp_path)])
    assert result.exit_code == 1
