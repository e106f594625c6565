from __future__ import annotations

from pathlib import Path
from typing import List

import fitz  # PyMuPDF

from ..storage import preview_filename


MAX_PREVIEWS = 3


def _render_page_to_png(doc: fitz.Document, page_index: int, out_path: Path, min_px: int = 1200) -> None:
    page = doc.load_page(page_index)

    # scale so the short side of the image is at least min_px
    rect = page.rect
    short_side = min(rect.width, rect.height)
    zoom = max(2.0, min_px / float(short_side))
    mat = fitz.Matrix(zoom, zoom)

    pix = page.get_pixmap(matrix=mat, alpha=False)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    pix.save(str(out_path))


def render_previews(pdf_path: Path, out_dir: Path, pages: int = 1) -> List[Path]:
    """Write PNGs of the first pages (at most MAX_PREVIEWS) into ``out_dir``."""
    previews: List[Path] = []
    with fitz.open(str(pdf_path)) as doc:
        count = min(pages, doc.page_count, MAX_PREVIEWS)
        for index in range(count):
            out_path = out_dir / preview_filename(index + 1)
            _render_page_to_png(doc, index, out_path)
            previews.append(out_path)
    return previews


def page_texts(pdf_path: Path) -> List[str]:
    with fitz.open(str(pdf_path)) as doc:
        return [doc.load_page(index).get_text() for index in range(doc.page_count)]
