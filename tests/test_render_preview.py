from __future__ import annotations

import tempfile
from pathlib import Path

from assessment_report.pipeline.render_preview import render_previews


class DummyPixmap:
    def save(self, path: str) -> None:
        Path(path).write_text("preview", encoding="utf-8")


class DummyRect:
    width = 595.0
    height = 842.0


class DummyPage:
    rect = DummyRect()

    def get_pixmap(self, matrix=None, alpha=False) -> DummyPixmap:  # noqa: ARG002 - signature matches fitz
        return DummyPixmap()


class DummyDoc:
    def __init__(self, page_count: int = 3) -> None:
        self.page_count = page_count
        self.loaded: list[int] = []
        self.closed = False

    def __enter__(self) -> "DummyDoc":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001 - test helper
        self.closed = True

    def load_page(self, index: int) -> DummyPage:
        self.loaded.append(index)
        return DummyPage()


def test_render_previews_closes_document(monkeypatch) -> None:
    doc = DummyDoc()

    def fake_open(path: str) -> DummyDoc:  # noqa: ARG001 - test helper
        return doc

    with tempfile.TemporaryDirectory() as temp_dir:
        monkeypatch.setattr("assessment_report.pipeline.render_preview.fitz.open", fake_open)
        previews = render_previews(Path("sample.pdf"), Path(temp_dir), pages=2)
        assert doc.closed is True
        assert doc.loaded == [0, 1]
        assert [p.name for p in previews] == ["preview_1.png", "preview_2.png"]
        assert all(path.exists() for path in previews)


def test_render_previews_caps_at_page_count(monkeypatch) -> None:
    doc = DummyDoc(page_count=1)
    monkeypatch.setattr("assessment_report.pipeline.render_preview.fitz.open", lambda path: doc)

    with tempfile.TemporaryDirectory() as temp_dir:
        previews = render_previews(Path("sample.pdf"), Path(temp_dir), pages=3)
        assert len(previews) == 1
        assert previews[0] == Path(temp_dir) / "preview_1.png"
