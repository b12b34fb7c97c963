import io
from pathlib import Path

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


def make_pdf_bytes(*pages: str) -> bytes:
    """Build a PDF with one page per argument; an empty string makes a blank page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for text in pages:
        if text:
            c.drawString(72, 720, text)
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    return make_pdf_bytes("Hello PDF World")


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    return make_pdf_bytes("Page one content", "Page two content")


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    return make_pdf_bytes("")


@pytest.fixture()
def pdf_folder(tmp_path: Path) -> Path:
    """A folder holding two text PDFs, one blank PDF and a non-PDF file."""
    folder = tmp_path / "papers"
    folder.mkdir()
    (folder / "a_first.pdf").write_bytes(make_pdf_bytes("First paper text"))
    (folder / "b_second.pdf").write_bytes(make_pdf_bytes("Second paper text"))
    (folder / "c_scanned.pdf").write_bytes(make_pdf_bytes(""))
    (folder / "notes.txt").write_text("not a pdf")
    return folder
