import io

import pytest
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from tests.fakes import CV_LINE


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, CV_LINE)
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a three-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.showPage()
    c.drawString(72, 720, "Page three content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def encrypted_pdf_bytes() -> bytes:
    """Generate a PDF that needs a user password to open."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter, encrypt="secret")
    c.drawString(72, 720, CV_LINE)
    c.save()
    return buf.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    """Generate a small white PNG image."""
    buf = io.BytesIO()
    Image.new("RGB", (64, 32), color="white").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def jpeg_bytes() -> bytes:
    """Generate a small white JPEG image."""
    buf = io.BytesIO()
    Image.new("RGB", (64, 32), color="white").save(buf, format="JPEG")
    return buf.getvalue()
