from __future__ import annotations

import csv
import tempfile
import unittest
from datetime import timezone
from pathlib import Path

from gridpage import config
from gridpage.errors import ConfigError
from gridpage.models import Document, DocumentStatus, get_session, reset_engine
from gridpage.pipeline import run as run_module
from gridpage.pipeline.ingest import document_from_row, ingest_documents, list_documents, load_rows
from gridpage.pipeline.run import fail_code_for, render_document, run_pipeline


def _write_csv(path: Path, rows: list[dict]) -> None:
    fields = ["layout", "title", "page_size", "month", "items", "double_sided"]
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=fields)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)


class PipelineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.out_dir = Path(self.temp_dir.name) / "out"
        config.set_out_dir(self.out_dir)
        reset_engine()
        self.csv_path = Path(self.temp_dir.name) / "docs.csv"

    def tearDown(self) -> None:
        reset_engine()
        self.temp_dir.cleanup()

    def test_batch_renders_every_document(self) -> None:
        _write_csv(
            self.csv_path,
            [
                {"layout": "habits", "title": "February Habits", "month": "2024-02", "page_size": "half_letter"},
                {"layout": "cornell", "title": "Cornell Notes", "page_size": "remarkable2"},
                {"layout": "checklist", "title": "Chores", "items": "Dishes;Trash", "double_sided": "yes"},
            ],
        )
        documents = ingest_documents(self.csv_path)
        results = run_pipeline(documents)
        self.assertEqual(sorted(results["READY"]), ["chores", "cornell-notes", "february-habits"])
        self.assertEqual(results["FAILED"], [])
        for slug in results["READY"]:
            self.assertTrue((self.out_dir / f"{slug}.pdf").exists())
        ready = list_documents([DocumentStatus.READY])
        self.assertEqual(len(ready), 3)
        self.assertTrue(all(doc.path for doc in ready))

    def test_one_failure_does_not_stop_the_batch(self) -> None:
        _write_csv(
            self.csv_path,
            [
                {"layout": "projects", "title": "Projects"},
                {"layout": "cornell", "title": "Broken"},
            ],
        )
        original = run_module.build_layout

        def flaky(layout, title, bounds, month=None, items=None):
            if title == "Broken":
                raise ConfigError("Either num_rows or the row size must be set")
            return original(layout, title, bounds, month=month, items=items)

        run_module.build_layout = flaky
        try:
            results = run_pipeline(ingest_documents(self.csv_path))
        finally:
            run_module.build_layout = original

        self.assertEqual(results["READY"], ["projects"])
        self.assertEqual(results["FAILED"], ["broken"])
        error_log = self.out_dir / "broken.error.log"
        self.assertIn("CONFIG_ERROR", error_log.read_text(encoding="utf-8"))
        with get_session() as session:
            failed = session.get(Document, 2)
        self.assertEqual(failed.status, DocumentStatus.FAILED)
        self.assertEqual(failed.fail_code, "CONFIG_ERROR")

    def test_unwritable_error_log_does_not_stop_the_batch(self) -> None:
        _write_csv(
            self.csv_path,
            [
                {"layout": "cornell", "title": "Broken"},
                {"layout": "projects", "title": "Good"},
            ],
        )
        # A directory where the error log should go makes the log write fail.
        (self.out_dir / "broken.error.log").mkdir(parents=True)
        original = run_module.build_layout

        def flaky(layout, title, bounds, month=None, items=None):
            if title == "Broken":
                raise ConfigError("bad grid")
            return original(layout, title, bounds, month=month, items=items)

        run_module.build_layout = flaky
        try:
            results = run_pipeline(ingest_documents(self.csv_path))
        finally:
            run_module.build_layout = original

        self.assertEqual(results["READY"], ["good"])
        self.assertEqual(results["FAILED"], ["broken"])
        self.assertTrue((self.out_dir / "good.pdf").exists())

    def test_ingested_documents_round_trip(self) -> None:
        _write_csv(self.csv_path, [{"layout": "cornell", "title": "Notes"}])
        ingest_documents(self.csv_path)
        drafts = list_documents([DocumentStatus.DRAFT])
        self.assertEqual([doc.slug for doc in drafts], ["notes"])
        self.assertIsNotNone(drafts[0].created_at)

    def test_render_document_without_database(self) -> None:
        doc = Document(layout="projects", title="Loose", slug="loose", page_size="a4")
        path = render_document(doc, base_dir=Path(self.temp_dir.name))
        self.assertTrue(path.exists())


class IngestTests(unittest.TestCase):
    def test_rejects_unknown_layout(self) -> None:
        with self.assertRaises(ValueError):
            document_from_row({"layout": "poster", "title": "X"})

    def test_rejects_unknown_page_size(self) -> None:
        with self.assertRaises(ValueError):
            document_from_row({"layout": "cornell", "title": "X", "page_size": "b5"})

    def test_rejects_bad_month(self) -> None:
        with self.assertRaises(ValueError):
            document_from_row({"layout": "habits", "title": "X", "month": "March"})

    def test_defaults(self) -> None:
        doc = document_from_row({"layout": "cornell", "title": "Lecture 1"})
        self.assertEqual(doc.slug, "lecture-1")
        self.assertEqual(doc.page_size, config.DEFAULT_PAGE_SIZE)
        self.assertFalse(doc.double_sided)
        self.assertIsNone(doc.items)

    def test_missing_columns(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "bad.csv"
            path.write_text("title\nA\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_rows(path)

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_rows(Path("/nonexistent/docs.csv"))


def test_created_at_is_timezone_aware() -> None:
    doc = Document(layout="cornell", title="Notes", slug="notes")
    assert doc.created_at.tzinfo is timezone.utc


def test_fail_codes() -> None:
    from gridpage.errors import DocumentIOError, FontResolutionError
    from gridpage.fonts import FontProxy

    assert fail_code_for(ConfigError("x")) == "CONFIG_ERROR"
    assert fail_code_for(FontResolutionError(FontProxy("X"))) == "FONT_ERROR"
    assert fail_code_for(DocumentIOError("x")) == "IO_ERROR"
    assert fail_code_for(KeyError("x")) == "PIPELINE_ERROR"


if __name__ == "__main__":
    unittest.main()
