from __future__ import annotations

from gridpage.pipeline.ingest import slug_from_title


def test_slug_sanitization() -> None:
    slug = slug_from_title("Habits / Tracker: 2025!")
    assert slug == "habits-tracker-2025"


def test_slug_falls_back_to_hash_for_symbol_titles() -> None:
    slug = slug_from_title("!!!")
    assert len(slug) == 12
    assert slug.isalnum()
